#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecclib developers
#
# This file is part of ecclib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecclib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exhaustive exploration of low-cardinality curve groups.

Only small fields (p <= MAX_P) can be walked through:
these helpers are for testing and teaching purposes,
e.g. to check the group law against every point of a toy curve.
"""

from typing import Iterator, List

from ecclib.curve_group import INF, CurveGroup, CurvePoint
from ecclib.exceptions import ECClibValueError, InvalidPointError

MAX_P = 10000


def _require_small_field(ec: CurveGroup, what: str) -> None:
    if ec.p > MAX_P:
        raise ECClibValueError(f"p is too big to count all {what}: {ec.p}")


def iter_points(ec: CurveGroup) -> Iterator[CurvePoint]:
    "Yield INF and then the affine points, sorted by x-coordinate."

    _require_small_field(ec, "group points")
    yield INF
    for x in range(ec.p):
        try:
            y = ec.y(x)
        except InvalidPointError:
            continue
        y = min(y, ec.p - y)
        yield ec.point(x, y)
        if y != 0:
            yield ec.point(x, ec.p - y)


def find_all_points(ec: CurveGroup) -> List[CurvePoint]:
    "Return all the points of the curve group, INF included."
    return list(iter_points(ec))


def find_subgroup_points(ec: CurveGroup, G: CurvePoint) -> List[CurvePoint]:
    """Return the multiples G, 2G, ..., INF of a point.

    The length of the list is the order of G.
    """

    _require_small_field(ec, "subgroup points")
    ec.require_on_curve(G)
    points = [G]
    while not points[-1].is_identity:
        points.append(ec.add(points[-1], G))
    return points


def point_order(ec: CurveGroup, Q: CurvePoint) -> int:
    "Return the smallest positive m such that m*Q is INF."
    return len(find_subgroup_points(ec, Q))
