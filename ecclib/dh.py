#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecclib developers
#
# This file is part of ecclib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecclib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve Diffie-Hellman key agreement (SEC 1 v.2 6.1).

Each party multiplies the other party's public point
by its own private scalar: both get the same shared point,
whose x-coordinate is the shared secret z.
Keying data is then derived from z with ANSI-X9.63-KDF.

Curve, hash function, and shared info must be agreed upon in advance.
"""

from hashlib import sha256
from typing import Optional

from ecclib.alias import HashF
from ecclib.curve import CurveParams
from ecclib.curve_group import CurvePoint, mult
from ecclib.exceptions import ECClibValueError, InvalidPointError
from ecclib.keys import PrvKey, int_from_prv_key


def ansi_x9_63_kdf(
    z: bytes, size: int, hf: HashF, shared_info: Optional[bytes]
) -> bytes:
    """Return size bytes of keying data derived from z.

    K = hf(z || 1 || info) || hf(z || 2 || info) || ...
    truncated to size, the counter being a 32-bit big-endian int.

    http://www.secg.org/sec1-v2.pdf, section 3.6.1
    """

    digest_size = hf().digest_size
    max_size = digest_size * (2**32 - 1)
    if size > max_size:
        raise ECClibValueError(f"cannot derive a key larger than {max_size} bytes")

    suffix = shared_info or b""
    blocks = -(-size // digest_size)
    keying_data = b"".join(
        hf(z + counter.to_bytes(4, byteorder="big") + suffix).digest()
        for counter in range(1, blocks + 1)
    )
    return keying_data[:size]


def shared_point(dU: PrvKey, QV: CurvePoint, ec: CurveParams) -> CurvePoint:
    """Return the shared point dU*QV.

    QV must be a point of the G-generated subgroup other than INF,
    dU a valid private key: the shared point is then never INF.
    """

    dU = int_from_prv_key(dU, ec)
    ec.require_on_curve(QV)
    if QV.is_identity:
        raise InvalidPointError("INF is not a valid public key")
    ec.require_in_subgroup(QV)
    return mult(dU, QV, ec)


def diffie_hellman(
    dU: PrvKey,
    QV: CurvePoint,
    size: int,
    ec: CurveParams,
    shared_info: Optional[bytes] = None,
    hf: HashF = sha256,
) -> bytes:
    "Return size bytes of keying data shared by the owners of dU and QV."

    S = shared_point(dU, QV, ec)
    assert S.x is not None
    z = S.x.to_bytes(ec.p_size)
    return ansi_x9_63_kdf(z, size, hf, shared_info)
