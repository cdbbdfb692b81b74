#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecclib developers
#
# This file is part of ecclib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecclib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""ElGamal encryption of curve points, and message embedding.

A message point M is encrypted to the public key Q as
(C1, C2) = (r*G, r*Q + M), r being a random ephemeral scalar;
the owner of the private key d recovers M = C2 - d*C1.

A byte message is first split into chunks, each embedded into
the x-coordinate of a curve point:

x = chunk || length || counter

with one byte for the chunk length and one for a counter,
incremented until x is the x-coordinate of a curve point.
"""

import logging
from io import BytesIO
from typing import Iterable, List, Optional, Tuple, TypeVar

from ecclib.alias import BinaryData, RandBelow, String
from ecclib.curve import CurveParams
from ecclib.curve_group import CurveGroup, CurvePoint, GroupOps, mult
from ecclib.dh import shared_point
from ecclib.exceptions import (
    ConfigurationError,
    ECClibRuntimeError,
    ECClibValueError,
    InvalidPointError,
)
from ecclib.keys import PrvKey, generate_keypair
from ecclib.sec_point import bytes_from_point, parse_point
from ecclib.utils import bytes_from_string, bytesio_from_binarydata

logger = logging.getLogger(__name__)

_P = TypeVar("_P")


def elgamal_encrypt(
    group: GroupOps[_P], G: _P, Q: _P, M: _P, r: int
) -> Tuple[_P, _P]:
    "Return (r*G, r*Q + M) in any additive group."
    return mult(r, G, group), group.add(mult(r, Q, group), M)


def elgamal_decrypt(group: GroupOps[_P], d: int, C1: _P, C2: _P) -> _P:
    "Return C2 - d*C1 in any additive group."
    return group.add(C2, group.negate(mult(d, C1, group)))


def encrypt_point(
    ec: CurveParams,
    pub_key: CurvePoint,
    M: CurvePoint,
    rng: Optional[RandBelow] = None,
) -> Tuple[CurvePoint, CurvePoint]:
    """Return the ElGamal encryption (C1, C2) of the point M.

    pub_key must be a point of the G-generated subgroup other than INF,
    M any point on the curve.
    rng is the random source for the ephemeral key
    (see ecclib.keys.generate_keypair).
    """

    ec.require_on_curve(M)
    ephemeral = generate_keypair(ec, rng)
    # r*Q, pub_key validity checked here
    S = shared_point(ephemeral.q, pub_key, ec)
    return ephemeral.Q, ec.add(S, M)


def decrypt_point(
    ec: CurveParams, prv_key: PrvKey, C1: CurvePoint, C2: CurvePoint
) -> CurvePoint:
    "Return the point M encrypted as (C1, C2)."

    ec.require_on_curve(C2)
    ec.require_on_curve(C1)
    if C1.is_identity:
        raise InvalidPointError("INF is not a valid ephemeral key")
    # d*C1, C1 checked to be in the G-generated subgroup
    S = shared_point(prv_key, C1, ec)
    return ec.add(C2, ec.negate(S))


def chunk_size(ec: CurveGroup) -> int:
    "Return the number of message bytes embedded in a point."

    size = (ec.p.bit_length() - 17) // 8
    if size < 1:
        raise ConfigurationError(f"curve too small for message embedding: {ec.p}")
    return size


def point_from_chunk(chunk: bytes, ec: CurveGroup) -> CurvePoint:
    "Return the curve point embedding a chunk of message bytes."

    size = chunk_size(ec)
    if not 0 < len(chunk) <= size:
        err_msg = f"invalid chunk size: {len(chunk)} bytes instead of 1..{size}"
        raise ECClibValueError(err_msg)

    x_prefix = (int.from_bytes(chunk, byteorder="big") << 8 | len(chunk)) << 8
    for counter in range(256):
        x = x_prefix | counter
        try:
            return ec.point(x, ec.y(x))
        except InvalidPointError:
            continue
    raise ECClibRuntimeError("no curve point for the chunk")


def chunk_from_point(Q: CurvePoint, ec: CurveGroup) -> bytes:
    "Return the chunk of message bytes embedded in a point."

    ec.require_on_curve(Q)
    if Q.x is None:
        raise InvalidPointError("INF is not a message point")
    x = Q.x.value
    length = (x >> 8) & 0xFF
    chunk = x >> 16
    if not 0 < length <= chunk_size(ec) or chunk.bit_length() > 8 * length:
        raise InvalidPointError(f"not a message point: {Q}")
    return chunk.to_bytes(length, byteorder="big")


def points_from_message(msg: String, ec: CurveGroup) -> List[CurvePoint]:
    "Return the curve points embedding a message (bytes or utf-8 text)."

    msg = bytes_from_string(msg)
    size = chunk_size(ec)
    return [point_from_chunk(msg[i : i + size], ec) for i in range(0, len(msg), size)]


def message_from_points(points: Iterable[CurvePoint], ec: CurveGroup) -> bytes:
    "Return the message embedded in a sequence of curve points."
    return b"".join(chunk_from_point(Q, ec) for Q in points)


def encrypt_message(
    ec: CurveParams,
    pub_key: CurvePoint,
    msg: String,
    rng: Optional[RandBelow] = None,
) -> bytes:
    """Encrypt a message to the public key, point by point.

    The result is the concatenation of the serialized C1, C2 pairs.
    """

    data = b""
    points = points_from_message(msg, ec)
    for M in points:
        C1, C2 = encrypt_point(ec, pub_key, M, rng)
        data += bytes_from_point(C1, ec) + bytes_from_point(C2, ec)
    logger.debug("encrypted %d message points", len(points))
    return data


def decrypt_message(ec: CurveParams, prv_key: PrvKey, ciphertext: BinaryData) -> bytes:
    """Return the message encrypted by encrypt_message.

    The ciphertext is bytes, a hex-string, or a binary stream.
    """

    data = bytesio_from_binarydata(ciphertext).read()
    stream = BytesIO(data)
    points: List[CurvePoint] = []
    while stream.tell() < len(data):
        C1 = parse_point(stream, ec)
        C2 = parse_point(stream, ec)
        points.append(decrypt_point(ec, prv_key, C1, C2))
    logger.debug("decrypted %d message points", len(points))
    return message_from_points(points, ec)
