#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecclib developers
#
# This file is part of ecclib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecclib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Canonical point and scalar representation.

Point format:
[tag] [x] [y]

* tag: 0x00 for the infinity point (no coordinates follow),
  0x01 for an affine point
* x, y: big-endian, each padded to the byte-length of p

Scalar format: big-endian, padded to the byte-length of n.
"""

from ecclib.alias import BinaryData, Octets
from ecclib.curve import CurveParams
from ecclib.curve_group import CurveGroup, CurvePoint
from ecclib.exceptions import InvalidPointError, InvalidScalarError
from ecclib.utils import bytes_from_octets, bytesio_from_binarydata

INF_TAG = b"\x00"
AFFINE_TAG = b"\x01"


def bytes_from_point(Q: CurvePoint, ec: CurveGroup) -> bytes:
    "Return the canonical octet sequence of a point on the curve."

    ec.require_on_curve(Q)

    if Q.x is None or Q.y is None:
        return INF_TAG
    return AFFINE_TAG + Q.x.to_bytes(ec.p_size) + Q.y.to_bytes(ec.p_size)


def parse_point(stream: BinaryData, ec: CurveGroup) -> CurvePoint:
    """Return the point read from the head of a stream.

    Data after the point representation is left unread.
    """

    stream = bytesio_from_binarydata(stream)

    tag = stream.read(1)
    if tag == INF_TAG:
        return ec.identity()
    if tag != AFFINE_TAG:
        raise InvalidPointError(f"invalid point tag: {tag!r}")

    coordinates = stream.read(2 * ec.p_size)
    if len(coordinates) != 2 * ec.p_size:
        err_msg = "invalid size for affine point: "
        err_msg += f"{len(coordinates)} bytes instead of {2 * ec.p_size}"
        raise InvalidPointError(err_msg)
    x_Q = int.from_bytes(coordinates[: ec.p_size], byteorder="big", signed=False)
    y_Q = int.from_bytes(coordinates[ec.p_size :], byteorder="big", signed=False)
    # also check coordinates range and curve equation
    return ec.point(x_Q, y_Q)


def point_from_octets(octets: Octets, ec: CurveGroup) -> CurvePoint:
    "Return the point on the curve from its canonical octet sequence."

    stream = bytesio_from_binarydata(octets)
    Q = parse_point(stream, ec)
    if stream.read(1) != b"":
        raise InvalidPointError("trailing bytes after point representation")
    return Q


def bytes_from_scalar(k: int, ec: CurveParams) -> bytes:
    "Return the canonical octet sequence of a scalar in 0..n-1."

    if not 0 <= k < ec.n:
        raise InvalidScalarError("scalar not in 0..n-1")
    return k.to_bytes(ec.n_size, byteorder="big", signed=False)


def scalar_from_octets(octets: Octets, ec: CurveParams) -> int:
    "Return the scalar in 0..n-1 from its canonical octet sequence."

    octets = bytes_from_octets(octets)
    if len(octets) != ec.n_size:
        err_msg = f"invalid scalar size: {len(octets)} bytes instead of {ec.n_size}"
        raise InvalidScalarError(err_msg)
    k = int.from_bytes(octets, byteorder="big", signed=False)
    if k >= ec.n:
        raise InvalidScalarError("scalar not in 0..n-1")
    return k
