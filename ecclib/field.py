#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecclib developers
#
# This file is part of ecclib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecclib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Prime field Fp arithmetic.

A FieldElement is an immutable value in [0, p-1] carrying its modulus p.
Every operation returns a new, reduced, FieldElement.

ints are accepted as second operand (and reduced mod p),
so that expressions like 3 * x * x + a read as in textbooks.
"""

from math import ceil
from typing import Union

from ecclib.alias import Integer
from ecclib.exceptions import ECClibTypeError, ECClibValueError
from ecclib.number_theory import is_probable_prime, mod_inv, mod_sqrt
from ecclib.utils import int_from_integer, int_repr

Operand = Union["FieldElement", int]


class FieldElement:
    "Element of the prime field Fp."

    __slots__ = ("_value", "_p")

    def __init__(self, value: Integer, p: int) -> None:
        if p < 2:
            raise ECClibValueError(f"invalid modulus: {p}")
        self._p = p
        self._value = int_from_integer(value) % p

    @property
    def value(self) -> int:
        return self._value

    @property
    def p(self) -> int:
        return self._p

    def _other(self, other: Operand) -> int:
        if isinstance(other, FieldElement):
            if other._p != self._p:
                err_msg = "field mismatch: "
                err_msg += f"{int_repr(self._p)} vs {int_repr(other._p)}"
                raise ECClibValueError(err_msg)
            return other._value
        if isinstance(other, int):
            return other % self._p
        raise ECClibTypeError(f"not a field element: {other!r}")

    def _new(self, value: int) -> "FieldElement":
        return FieldElement(value, self._p)

    def add(self, other: Operand) -> "FieldElement":
        return self._new(self._value + self._other(other))

    def sub(self, other: Operand) -> "FieldElement":
        return self._new(self._value - self._other(other))

    def neg(self) -> "FieldElement":
        return self._new(-self._value)

    def mul(self, other: Operand) -> "FieldElement":
        return self._new(self._value * self._other(other))

    def inverse(self) -> "FieldElement":
        """Return the multiplicative inverse.

        ECClibZeroDivisionError is raised for the zero element.
        """
        return self._new(mod_inv(self._value, self._p))

    def div(self, other: Operand) -> "FieldElement":
        return self.mul(self._new(self._other(other)).inverse())

    def pow(self, exponent: int) -> "FieldElement":
        "Return self^exponent; a negative exponent inverts first."
        if exponent < 0:
            return self.inverse().pow(-exponent)
        return self._new(pow(self._value, exponent, self._p))

    def sqrt(self) -> "FieldElement":
        """Return a square root, if any.

        ECClibValueError is raised for non quadratic residues.
        The other root is the negated one.
        """
        return self._new(mod_sqrt(self._value, self._p))

    def is_zero(self) -> bool:
        return self._value == 0

    def to_bytes(self, size: int = 0) -> bytes:
        "Return the big-endian representation, padded to size (or p size)."
        size = size or ceil(self._p.bit_length() / 8)
        return self._value.to_bytes(size, byteorder="big", signed=False)

    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __truediv__ = div
    __pow__ = pow
    __neg__ = neg

    def __radd__(self, other: int) -> "FieldElement":
        return self.add(other)

    def __rsub__(self, other: int) -> "FieldElement":
        return self._new(self._other(other) - self._value)

    def __rmul__(self, other: int) -> "FieldElement":
        return self.mul(other)

    def __rtruediv__(self, other: int) -> "FieldElement":
        return self._new(self._other(other)).div(self)

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldElement):
            return self._value == other._value and self._p == other._p
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._value, self._p))

    def __str__(self) -> str:
        return f"{self._value}"

    def __repr__(self) -> str:
        return f"FieldElement({int_repr(self._value)}, {int_repr(self._p)})"


class PrimeField:
    """The prime field Fp, as FieldElement factory.

    >>> F = PrimeField(19)
    >>> F(7) + F(13) == F(1)
    True
    """

    def __init__(self, p: Integer) -> None:
        p = int_from_integer(p)
        if not is_probable_prime(p):
            raise ECClibValueError(f"p is not prime: {int_repr(p)}")
        self.p = p
        # byte-length
        self.p_size = ceil(p.bit_length() / 8)

    def __call__(self, value: Integer) -> FieldElement:
        return FieldElement(value, self.p)

    def zero(self) -> FieldElement:
        return FieldElement(0, self.p)

    def one(self) -> FieldElement:
        return FieldElement(1, self.p)

    def __contains__(self, item: object) -> bool:
        return isinstance(item, FieldElement) and item.p == self.p

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PrimeField):
            return self.p == other.p
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.p)

    def __repr__(self) -> str:
        return f"PrimeField({int_repr(self.p)})"
