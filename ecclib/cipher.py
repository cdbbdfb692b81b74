#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecclib developers
#
# This file is part of ecclib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecclib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Minimal elliptic curve encryption scheme.

Encryption to a recipient public key Q:

* generate an ephemeral key-pair (r, R = r*G)
* compute the shared point S = r*Q
* derive a keystream from S
* ciphertext is (R, plaintext XOR keystream)

Decryption with the recipient private key q
recomputes the shared point as S = q*R = q*r*G = r*Q.

This is not an authenticated encryption scheme:
ciphertexts are malleable and no integrity check is performed.

Ciphertext format:
[R] [payload]

* R: the canonical point representation (see ecclib.sec_point)
* payload: as many bytes as the plaintext
"""

import logging
from dataclasses import InitVar, dataclass, field
from hashlib import sha256
from typing import Callable, Optional, Type, TypeVar, Union

from ecclib.alias import BinaryData, Octets, RandBelow, String
from ecclib.curve import CurveParams
from ecclib.curve_group import CurvePoint
from ecclib.dh import ansi_x9_63_kdf, shared_point
from ecclib.exceptions import ECClibValueError, InvalidPointError
from ecclib.keys import PrvKey, generate_keypair
from ecclib.sec_point import bytes_from_point, parse_point
from ecclib.utils import bytes_from_string, bytesio_from_binarydata

logger = logging.getLogger(__name__)

# keystream(S, size, ec) returns size bytes derived from the shared point S
Keystream = Callable[[CurvePoint, int, CurveParams], bytes]


def x963_keystream(S: CurvePoint, size: int, ec: CurveParams) -> bytes:
    "Return ANSI-X9.63-KDF(sha256) keying data from the x-coordinate of S."
    if S.x is None:
        raise InvalidPointError("INF has no x-coordinate")
    return ansi_x9_63_kdf(S.x.to_bytes(ec.p_size), size, sha256, None)


def _xor(data: bytes, keystream: bytes) -> bytes:
    if len(keystream) < len(data):
        err_msg = f"keystream too short: {len(keystream)} bytes"
        err_msg += f" instead of {len(data)}"
        raise ECClibValueError(err_msg)
    return bytes(d ^ k for d, k in zip(data, keystream))


_Ciphertext = TypeVar("_Ciphertext", bound="Ciphertext")


@dataclass(frozen=True)
class Ciphertext:
    "Ephemeral public point R and encrypted payload."

    R: CurvePoint
    payload: bytes
    ec: CurveParams = field(repr=False, compare=False)
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        self.ec.require_on_curve(self.R)
        if self.R.is_identity:
            raise InvalidPointError("INF is not a valid ephemeral key")
        self.ec.require_in_subgroup(self.R)

    def serialize(self, check_validity: bool = True) -> bytes:
        if check_validity:
            self.assert_valid()
        return bytes_from_point(self.R, self.ec) + self.payload

    @classmethod
    def parse(
        cls: Type[_Ciphertext],
        data: BinaryData,
        ec: CurveParams,
        check_validity: bool = True,
    ) -> _Ciphertext:
        "Return a Ciphertext by parsing binary data."

        stream = bytesio_from_binarydata(data)
        R = parse_point(stream, ec)
        payload = stream.read()
        return cls(R, payload, ec, check_validity)


def encrypt(
    ec: CurveParams,
    pub_key: CurvePoint,
    plaintext: String,
    rng: Optional[RandBelow] = None,
    keystream: Keystream = x963_keystream,
) -> Ciphertext:
    """Encrypt plaintext to the public key.

    The plaintext is either bytes or a text string (utf-8 encoded).
    rng is the random source for the ephemeral key
    (see ecclib.keys.generate_keypair).
    """

    msg = bytes_from_string(plaintext)
    # r, R = r*G
    ephemeral = generate_keypair(ec, rng)
    # S = r*Q, pub_key validity checked here
    S = shared_point(ephemeral.q, pub_key, ec)
    payload = _xor(msg, keystream(S, len(msg), ec))
    logger.debug("encrypted %d bytes", len(msg))
    return Ciphertext(ephemeral.Q, payload, ec)


def decrypt(
    ec: CurveParams,
    prv_key: PrvKey,
    ciphertext: Union[Ciphertext, Octets],
    keystream: Keystream = x963_keystream,
) -> bytes:
    """Decrypt a ciphertext with the private key.

    The ciphertext is either a Ciphertext
    or its serialization (bytes or hex-string).
    InvalidPointError is raised if its ephemeral point
    is malformed or not on the curve.
    """

    if isinstance(ciphertext, Ciphertext):
        if ciphertext.ec != ec:
            raise ECClibValueError("ciphertext curve mismatch")
        ciphertext.assert_valid()
    else:
        ciphertext = Ciphertext.parse(ciphertext, ec)

    # S = q*R
    S = shared_point(prv_key, ciphertext.R, ec)
    msg = _xor(ciphertext.payload, keystream(S, len(ciphertext.payload), ec))
    logger.debug("decrypted %d bytes", len(msg))
    return msg
