#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecclib developers
#
# This file is part of ecclib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecclib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve parameters and point operations.

A CurveParams is configured once and passed explicitly
to every operation: there is no default curve.
"""

import logging
from math import isqrt
from typing import Tuple

from ecclib.alias import Integer
from ecclib.curve_group import INF, CurveGroup, CurvePoint, mult
from ecclib.exceptions import ConfigurationError, ECClibTypeError, InvalidPointError
from ecclib.number_theory import is_probable_prime
from ecclib.utils import HEX_THRESHOLD, hex_string, int_from_integer, int_repr

logger = logging.getLogger(__name__)


class CurveParams(CurveGroup):
    "Prime order subgroup of the points of an elliptic curve over Fp."

    def __init__(
        self,
        p: Integer,
        a: Integer,
        b: Integer,
        G: Tuple[Integer, Integer],
        n: Integer,
        name: str = "",
    ) -> None:

        super().__init__(p, a, b)
        self.name = name

        # 2. check that xG and yG are integers in the interval [0, p−1]
        # 4. Check that yG^2 = xG^3 + a*xG + b (mod p)
        if len(G) != 2:
            raise ConfigurationError("Generator must a be a sequence[int, int]")
        x_G, y_G = int_from_integer(G[0]), int_from_integer(G[1])
        if not (0 <= x_G < self.p and 0 <= y_G < self.p):
            raise ConfigurationError("Generator coordinates not in 0..p-1")
        self.G = CurvePoint(self.field(x_G), self.field(y_G))
        if not self.is_on_curve(self.G):
            raise ConfigurationError("Generator is not on the curve")

        n = int_from_integer(n)
        # 5. Check that n is prime.
        if not is_probable_prime(n):
            raise ConfigurationError(f"n is not prime: {int_repr(n)}")
        self.n = n
        self.n_len = n.bit_length()
        self.n_size = (self.n_len + 7) // 8

        # 7. Check that G ≠ INF, nG = INF
        # (n being prime, n is then the order of G)
        if mult(n, self.G, self) != INF:
            raise ConfigurationError(f"n is not the group order: {int_repr(n)}")

        # Hasse bound: the cofactor is 1 if 2n exceeds the number of points
        self._cofactor_one = 2 * n > self.p + 1 + 2 * (isqrt(self.p) + 1)

        logger.debug("configured curve %s", self.name or repr(self))

    def __str__(self) -> str:
        result = super().__str__()
        x_G, y_G = self.G.coordinates()
        if self.p > HEX_THRESHOLD:
            result += f"\n x_G = {hex_string(x_G)}"
            result += f"\n y_G = {hex_string(y_G)}"
        else:
            result += f"\n x_G = {x_G}"
            result += f"\n y_G = {y_G}"
        if self.n > HEX_THRESHOLD:
            result += f"\n n   = {hex_string(self.n)}"
        else:
            result += f"\n n   = {self.n}"
        return result

    def __repr__(self) -> str:
        result = super().__repr__()[:-1]
        x_G, y_G = self.G.coordinates()
        if self.p > HEX_THRESHOLD:
            result += f", ('{hex_string(x_G)}', '{hex_string(y_G)}')"
        else:
            result += f", ({x_G}, {y_G})"
        result += f", {int_repr(self.n)}"
        result += ")"
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CurveParams):
            return NotImplemented
        return super().__eq__(other) and (self.G, self.n) == (other.G, other.n)

    def __hash__(self) -> int:
        return hash((super().__hash__(), self.G, self.n))

    def is_in_subgroup(self, Q: CurvePoint) -> bool:
        "Return True if Q is a point of the G-generated subgroup."
        if not self.is_on_curve(Q):
            return False
        return self._cofactor_one or mult(self.n, Q, self).is_identity

    def require_in_subgroup(self, Q: CurvePoint) -> None:
        """Require Q to be a point of the G-generated subgroup.

        An InvalidPointError is raised if not.
        """
        self.require_on_curve(Q)
        if not self.is_in_subgroup(Q):
            raise InvalidPointError("point not in the G-generated subgroup")


def configure(
    a: Integer,
    b: Integer,
    p: Integer,
    Gx: Integer,
    Gy: Integer,
    n: Integer,
    name: str = "",
) -> CurveParams:
    """Return the validated curve y^2 = x^3 + a*x + b over Fp.

    ConfigurationError is raised if p is not prime, the curve is singular,
    G is not on the curve, or G has not order n.
    """
    return CurveParams(p, a, b, (Gx, Gy), n, name)


def _require_params(ec: CurveParams) -> None:
    if not isinstance(ec, CurveParams):
        raise ECClibTypeError(f"not a CurveParams: {ec!r}")


def scalar_mult(ec: CurveParams, k: int, Q: CurvePoint) -> CurvePoint:
    """Return k*Q, Q being a point on the curve.

    InvalidPointError is raised if Q is not on the curve.
    """
    _require_params(ec)
    ec.require_on_curve(Q)
    return mult(k, Q, ec)


def point_add(ec: CurveParams, Q1: CurvePoint, Q2: CurvePoint) -> CurvePoint:
    """Return Q1 + Q2.

    InvalidPointError is raised if any input point is not on the curve.
    """
    _require_params(ec)
    ec.require_on_curve(Q1)
    ec.require_on_curve(Q2)
    return ec.add(Q1, Q2)


def point_double(ec: CurveParams, Q: CurvePoint) -> CurvePoint:
    _require_params(ec)
    ec.require_on_curve(Q)
    return ec.double(Q)


def point_negate(ec: CurveParams, Q: CurvePoint) -> CurvePoint:
    _require_params(ec)
    ec.require_on_curve(Q)
    return ec.negate(Q)
