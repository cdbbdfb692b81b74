#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecclib developers
#
# This file is part of ecclib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecclib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Private/public key-pairs.

The private key is a scalar q in [1, n-1],
the public key is the curve point Q = q*G.

The private scalar is never included in
repr, log records, or error messages.
"""

import logging
import secrets
from dataclasses import dataclass, field
from typing import Optional, Union

from ecclib.alias import Octets, RandBelow
from ecclib.curve import CurveParams
from ecclib.curve_group import CurvePoint, mult
from ecclib.exceptions import InvalidKeyError
from ecclib.sec_point import bytes_from_point, bytes_from_scalar
from ecclib.utils import bytes_from_octets

logger = logging.getLogger(__name__)

PrvKey = Union[int, Octets]


def int_from_prv_key(prv_key: PrvKey, ec: CurveParams) -> int:
    """Return a verified-as-valid private key integer.

    It supports:

    - integer (native int)
    - canonical Octets (bytes or hex-string of n_size bytes)
    """

    # bool is an int subclass, but not a private key
    if isinstance(prv_key, int) and not isinstance(prv_key, bool):
        q = prv_key
    elif isinstance(prv_key, (bytes, str)):
        try:
            prv_key = bytes_from_octets(prv_key, ec.n_size)
        except ValueError as e:
            raise InvalidKeyError("not a private key") from e
        q = int.from_bytes(prv_key, byteorder="big", signed=False)
    else:
        raise InvalidKeyError(f"not a private key: {type(prv_key).__name__}")

    if not 0 < q < ec.n:
        raise InvalidKeyError("private key not in 1..n-1")

    return q


@dataclass(frozen=True)
class KeyPair:
    "Private scalar q and public point Q = q*G."

    q: int = field(repr=False)
    Q: CurvePoint
    ec: CurveParams = field(repr=False, compare=False)

    def public_key(self) -> CurvePoint:
        return self.Q

    def private_scalar(self) -> int:
        return self.q

    def serialize_public_key(self) -> bytes:
        return bytes_from_point(self.Q, self.ec)

    def serialize_private_key(self) -> bytes:
        return bytes_from_scalar(self.q, self.ec)

    @classmethod
    def from_prv_key(cls, prv_key: PrvKey, ec: CurveParams) -> "KeyPair":
        "Return the key-pair of a given private key."
        q = int_from_prv_key(prv_key, ec)
        return cls(q, mult(q, ec.G, ec), ec)


def generate_keypair(ec: CurveParams, rng: Optional[RandBelow] = None) -> KeyPair:
    """Return a new random key-pair.

    The private scalar is drawn uniformly from [1, n-1]
    using rng, a randbelow-like callable
    defaulting to the cryptographically secure secrets.randbelow.
    """
    randbelow = secrets.randbelow if rng is None else rng
    q = 1 + randbelow(ec.n - 1)
    key_pair = KeyPair.from_prv_key(q, ec)
    logger.debug("generated key-pair, public key %s", key_pair.Q)
    return key_pair
