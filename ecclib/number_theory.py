#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecclib developers
#
# This file is part of ecclib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecclib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Modular arithmetic helpers for prime fields.

Square roots mod p use a closed formula when one is available
(p = 3 mod 4, or Atkin's method for p = 5 mod 8),
Tonelli-Shanks otherwise.
"""

from typing import Tuple

from ecclib.exceptions import ECClibValueError, ECClibZeroDivisionError
from ecclib.utils import int_repr


def is_probable_prime(n: int) -> bool:
    """Return True if n passes the base-2 Fermat test.

    A probabilistic test is enough
    for curve parameter validation (SEC 1 v.2 3.1.1.2.1).
    """
    if n < 3:
        return n == 2
    return n % 2 == 1 and pow(2, n - 1, n) == 1


def xgcd(a: int, b: int) -> Tuple[int, int, int]:
    "Return (g, x, y) such that a*x + b*y = g = gcd(a, b)."

    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y
    return old_r, old_x, old_y


def mod_inv(a: int, m: int) -> int:
    "Return the inverse of a mod m, m not necessarily prime."

    a %= m
    g, x, _ = xgcd(a, m)
    if g != 1:
        err_msg = f"No inverse for {int_repr(a)} mod {int_repr(m)}"
        raise ECClibZeroDivisionError(err_msg)
    return x % m


def legendre_symbol(a: int, p: int) -> int:
    """Return the Legendre symbol (a|p), p being an odd prime.

    It is 1 for quadratic residues, -1 for non residues,
    0 if p divides a (Euler's criterion).
    """

    ls = pow(a, (p - 1) // 2, p)
    return -1 if ls == p - 1 else ls


def _no_root(a: int, p: int) -> ECClibValueError:
    return ECClibValueError(f"no root for {int_repr(a)} mod {int_repr(p)}")


def mod_sqrt(a: int, p: int) -> int:
    """Return a square root of a mod p, p being a prime.

    The other root is p - x.
    ECClibValueError is raised if a is not a quadratic residue.
    """

    a %= p
    if p % 4 == 3:
        r = pow(a, (p + 1) // 4, p)
    elif p % 8 == 5:
        # Atkin
        b = pow(2 * a, (p - 5) // 8, p)
        i = 2 * a * b * b % p
        r = a * b * (i - 1) % p
    else:
        return tonelli(a, p)

    if r * r % p != a:
        raise _no_root(a, p)
    return r


def tonelli(a: int, p: int) -> int:
    """Return a square root of a mod p using Tonelli-Shanks.

    https://en.wikipedia.org/wiki/Tonelli%E2%80%93Shanks_algorithm
    """

    a %= p
    if a == 0 or p == 2:
        return a
    if legendre_symbol(a, p) != 1:
        raise _no_root(a, p)

    # p - 1 = q * 2^s, with q odd
    s = ((p - 1) & (1 - p)).bit_length() - 1
    q = (p - 1) >> s

    z = next(i for i in range(2, p) if legendre_symbol(i, p) == -1)

    m, c, t, r = s, pow(z, q, p), pow(a, q, p), pow(a, (q + 1) // 2, p)
    while t != 1:
        # least 0 < i < m such that t^(2^i) = 1
        i, t2i = 1, t * t % p
        while t2i != 1:
            i += 1
            t2i = t2i * t2i % p
        b = pow(c, 1 << (m - i - 1), p)
        m, c = i, b * b % p
        t, r = t * c % p, r * b % p
    return r
