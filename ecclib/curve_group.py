#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecclib developers
#
# This file is part of ecclib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecclib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic CurveGroup class and functions.

Note that CurveGroup does not have to be a cyclic subgroup.
For the cyclic subgroup of prime order n generated by G,
see the ecclib.curve module.

Scalar multiplication (mult) is generic:
it works for any object implementing the GroupOps protocol.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple, TypeVar

from ecclib.alias import Integer
from ecclib.exceptions import (
    ConfigurationError,
    ECClibRuntimeError,
    ECClibTypeError,
    ECClibValueError,
    InvalidPointError,
)
from ecclib.field import FieldElement, PrimeField
from ecclib.utils import HEX_THRESHOLD, hex_string, int_from_integer, int_repr


@dataclass(frozen=True)
class CurvePoint:
    """Elliptic curve point: affine (x, y) or the point at infinity.

    The infinity point INF (the group identity) has no coordinates.
    Affine points are built on a curve by CurveGroup.point,
    which ensures they satisfy the curve equation.
    """

    x: Optional[FieldElement] = None
    y: Optional[FieldElement] = None

    def __post_init__(self) -> None:
        if self.x is None and self.y is None:
            return
        if not isinstance(self.x, FieldElement) or not isinstance(
            self.y, FieldElement
        ):
            raise ECClibTypeError("affine point coordinates must be FieldElements")
        if self.x.p != self.y.p:
            raise ECClibValueError("coordinates from different fields")

    @property
    def is_identity(self) -> bool:
        return self.x is None

    def coordinates(self) -> Tuple[int, int]:
        "Return the affine coordinates as a tuple of ints."
        if self.x is None or self.y is None:
            raise ECClibValueError("INF has no coordinates")
        return self.x.value, self.y.value

    def __str__(self) -> str:
        if self.x is None or self.y is None:
            return "INF"
        return f"({self.x}, {self.y})"


# the group identity
INF = CurvePoint()

_P = TypeVar("_P")


class GroupOps(Protocol[_P]):
    "Additive abelian group operations, as needed by scalar multiplication."

    def identity(self) -> _P:
        ...

    def negate(self, Q: _P) -> _P:
        ...

    def add(self, Q1: _P, Q2: _P) -> _P:
        ...

    def double(self, Q: _P) -> _P:
        ...


class CurveGroup:
    """Finite group of the points of an elliptic curve over Fp.

    The elliptic curve is the set of points (x, y)
    that are solutions to a Weierstrass equation y^2 = x^3 + a*x + b,
    with x, y, a, and b in Fp (p being a prime),
    together with a point at infinity INF.
    The constants a, b must satisfy the relationship
    4 a^3 + 27 b^2 ≠ 0.

    The group is defined by the point addition group law.
    """

    def __init__(self, p: Integer, a: Integer, b: Integer) -> None:
        # Parameters are checked according to SEC 1 v.2 3.1.1.2.1

        p = int_from_integer(p)
        a = int_from_integer(a)
        b = int_from_integer(b)

        # 1) check that p is a prime
        try:
            self.field = PrimeField(p)
        except ECClibValueError as e:
            raise ConfigurationError(str(e)) from e
        self.p = p
        self.p_size = self.field.p_size

        # 2. check that a and b are integers in the interval [0, p−1]
        if a < 0:
            raise ConfigurationError(f"negative a: {a}")
        if p <= a:
            raise ConfigurationError(f"p <= a: {int_repr(p)} <= {int_repr(a)}")
        if b < 0:
            raise ConfigurationError(f"negative b: {b}")
        if p <= b:
            raise ConfigurationError(f"p <= b: {int_repr(p)} <= {int_repr(b)}")

        # 3. Check that 4*a^3 + 27*b^2 ≠ 0 (mod p)
        d = 4 * a * a * a + 27 * b * b
        if d % p == 0:
            raise ConfigurationError("zero discriminant")
        self.a = self.field(a)
        self.b = self.field(b)

    def __str__(self) -> str:
        result = "Curve"
        if self.p > HEX_THRESHOLD:
            result += f"\n p   = {hex_string(self.p)}"
        else:
            result += f"\n p   = {self.p}"

        a, b = self.a.value, self.b.value
        if a > HEX_THRESHOLD or b > HEX_THRESHOLD:
            result += f"\n a   = {hex_string(a)}"
            result += f"\n b   = {hex_string(b)}"
        else:
            result += f"\n a   = {a}"
            result += f"\n b   = {b}"

        return result

    def __repr__(self) -> str:
        a, b = self.a.value, self.b.value
        result = "Curve("
        result += f"'{hex_string(self.p)}'" if self.p > HEX_THRESHOLD else f"{self.p}"
        if a > HEX_THRESHOLD or b > HEX_THRESHOLD:
            result += f", '{hex_string(a)}', '{hex_string(b)}'"
        else:
            result += f", {a}, {b}"

        result += ")"
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CurveGroup):
            return NotImplemented
        return (self.p, self.a, self.b) == (other.p, other.a, other.b)

    def __hash__(self) -> int:
        return hash((self.p, self.a, self.b))

    def point(self, x: Integer, y: Integer) -> CurvePoint:
        """Return the affine point (x, y).

        InvalidPointError is raised if (x, y) is not on the curve.
        """
        x = int_from_integer(x)
        y = int_from_integer(y)
        if not 0 <= x < self.p:
            raise InvalidPointError(f"x-coordinate not in 0..p-1: {int_repr(x)}")
        if not 0 <= y < self.p:
            raise InvalidPointError(f"y-coordinate not in 0..p-1: {int_repr(y)}")
        Q = CurvePoint(self.field(x), self.field(y))
        self.require_on_curve(Q)
        return Q

    # GroupOps

    def identity(self) -> CurvePoint:
        return INF

    def negate(self, Q: CurvePoint) -> CurvePoint:
        """Return the opposite point.

        The input point is not checked to be on the curve.
        """
        if not isinstance(Q, CurvePoint):
            raise ECClibTypeError("not a point")
        if Q.x is None or Q.y is None:
            return INF
        return CurvePoint(Q.x, -Q.y)

    def add(self, Q1: CurvePoint, Q2: CurvePoint) -> CurvePoint:
        """Return the sum of two points.

        The input points are assumed to be on curve.
        """

        if Q1.x is None or Q1.y is None:
            return Q2
        if Q2.x is None or Q2.y is None:
            return Q1

        if Q1.x == Q2.x:
            if Q1.y != Q2.y or Q1.y.is_zero():  # opposite points
                return INF
            return self.double(Q1)

        lam = (Q2.y - Q1.y) / (Q2.x - Q1.x)
        return self._chord_tangent(lam, Q1.x, Q1.y, Q2.x)

    def double(self, Q: CurvePoint) -> CurvePoint:
        """Return the point doubled.

        The input point is assumed to be on curve.
        """

        if Q.x is None or Q.y is None:
            return INF
        # vertical tangent
        if Q.y.is_zero():
            return INF

        lam = (3 * Q.x * Q.x + self.a) / (2 * Q.y)
        return self._chord_tangent(lam, Q.x, Q.y, Q.x)

    def _chord_tangent(
        self, lam: FieldElement, x1: FieldElement, y1: FieldElement, x2: FieldElement
    ) -> CurvePoint:
        x3 = lam * lam - x1 - x2
        y3 = lam * (x1 - x3) - y1
        R = CurvePoint(x3, y3)
        if not self.is_on_curve(R):
            err_msg = f"group law produced a point not on curve: {R}"
            raise ECClibRuntimeError(err_msg)
        return R

    # curve equation

    def _y2(self, x: FieldElement) -> FieldElement:
        # skipping a crucial check here:
        # if sqrt(y*y) does not exist, then x is not valid.
        # This is a good reason to keep this method private
        return (x * x + self.a) * x + self.b

    def y(self, x: Integer) -> int:
        """Return the y coordinate from x, as in (x, y).

        The other y coordinate is p - y.
        """
        x = int_from_integer(x)
        if not 0 <= x < self.p:
            raise InvalidPointError(f"x-coordinate not in 0..p-1: {int_repr(x)}")
        try:
            return self._y2(self.field(x)).sqrt().value
        except ECClibValueError as e:
            raise InvalidPointError(f"invalid x-coordinate: {int_repr(x)}") from e

    def is_on_curve(self, Q: CurvePoint) -> bool:
        "Return True if the point is on the curve."
        if not isinstance(Q, CurvePoint):
            raise ECClibTypeError("not a point")
        if Q.x is None or Q.y is None:
            return True
        if Q.x.p != self.p:
            return False
        return self._y2(Q.x) == Q.y * Q.y

    is_valid = is_on_curve

    def require_on_curve(self, Q: CurvePoint) -> None:
        """Require the input curve Point to be on the curve.

        An InvalidPointError is raised if not.
        """
        if not self.is_on_curve(Q):
            raise InvalidPointError(f"point not on curve: {Q}")


def mult(m: int, Q: _P, group: GroupOps[_P]) -> _P:
    """Scalar multiplication m*Q in any additive group.

    This implementation uses
    'double & add' algorithm,
    'left-to-right' binary decomposition of the m coefficient:
    for each bit, from the most significant one,
    the running result is doubled, then Q is added if the bit is 1.

    A negative m multiplies the opposite point by -m.
    It is not constant-time.

    The input point is assumed to belong to the group
    (e.g. to be on curve).
    """

    if m < 0:
        return mult(-m, group.negate(Q), group)

    R = group.identity()
    for bit in bin(m)[2:]:
        # the doubling part of 'double & add'
        R = group.double(R)
        if bit == "1":
            R = group.add(R, Q)
    return R
