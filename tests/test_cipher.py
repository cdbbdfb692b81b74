#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecclib developers
#
# This file is part of ecclib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecclib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `ecclib.cipher` module."

import random
from hashlib import sha1

import pytest

from ecclib.cipher import Ciphertext, decrypt, encrypt, x963_keystream
from ecclib.curve import CurveParams
from ecclib.curve_group import INF, CurvePoint, mult
from ecclib.curves import secp256k1, secp256r1
from ecclib.dh import ansi_x9_63_kdf
from ecclib.exceptions import ECClibValueError, InvalidPointError
from ecclib.keys import generate_keypair
from ecclib.sec_point import bytes_from_point
from tests.test_curve import all_curves, ec23_31


def test_round_trip() -> None:
    msgs = [b"", b"\x00", b"Hello, world!", b"\xff" * 100, "text message"]
    for ec in all_curves.values():
        key_pair = generate_keypair(ec)
        for msg in msgs:
            msg_bytes = msg.encode() if isinstance(msg, str) else msg
            ciphertext = encrypt(ec, key_pair.Q, msg)
            assert len(ciphertext.payload) == len(msg_bytes)
            assert ec.is_on_curve(ciphertext.R)
            assert not ciphertext.R.is_identity
            assert decrypt(ec, key_pair.q, ciphertext) == msg_bytes

            ciphertext_bytes = ciphertext.serialize()
            assert len(ciphertext_bytes) == 1 + 2 * ec.p_size + len(msg_bytes)
            assert Ciphertext.parse(ciphertext_bytes, ec) == ciphertext
            assert decrypt(ec, key_pair.q, ciphertext_bytes) == msg_bytes
            assert decrypt(ec, key_pair.q, ciphertext_bytes.hex()) == msg_bytes

            prv_key = key_pair.serialize_private_key()
            assert decrypt(ec, prv_key, ciphertext) == msg_bytes


def test_ciphertext_format() -> None:
    ec = secp256k1
    key_pair = generate_keypair(ec)
    msg = b"Hello, world!"
    ciphertext = encrypt(ec, key_pair.Q, msg)

    ciphertext_bytes = ciphertext.serialize()
    R_bytes = bytes_from_point(ciphertext.R, ec)
    assert ciphertext_bytes[: len(R_bytes)] == R_bytes
    assert ciphertext_bytes[len(R_bytes) :] == ciphertext.payload

    # the payload is the plaintext XOR the keystream from S = q*R
    S = mult(key_pair.q, ciphertext.R, ec)
    keystream = x963_keystream(S, len(msg), ec)
    assert bytes(m ^ k for m, k in zip(msg, keystream)) == ciphertext.payload

    # ephemeral keys make every encryption different
    assert encrypt(ec, key_pair.Q, msg) != ciphertext


def test_deterministic_rng() -> None:
    ec = secp256k1
    key_pair = generate_keypair(ec)
    msg = b"Hello, world!"

    ciphertext1 = encrypt(ec, key_pair.Q, msg, random.Random(42).randrange)
    ciphertext2 = encrypt(ec, key_pair.Q, msg, random.Random(42).randrange)
    assert ciphertext1 == ciphertext2
    assert ciphertext1.serialize() == ciphertext2.serialize()

    ciphertext = encrypt(ec, key_pair.Q, msg, lambda n: 0)
    assert ciphertext.R == ec.G


def test_wrong_key() -> None:
    ec = secp256k1
    key_pair = generate_keypair(ec)
    msg = b"Hello, world!"
    ciphertext = encrypt(ec, key_pair.Q, msg)
    other_key_pair = generate_keypair(ec)
    assert decrypt(ec, other_key_pair.q, ciphertext) != msg


def test_malleability() -> None:
    "No integrity check: a flipped payload bit flips the plaintext bit."

    ec = secp256k1
    key_pair = generate_keypair(ec)
    msg = b"Hello, world!"
    ciphertext = encrypt(ec, key_pair.Q, msg)
    payload = bytes([ciphertext.payload[0] ^ 0x01]) + ciphertext.payload[1:]
    tampered = Ciphertext(ciphertext.R, payload, ec)
    assert decrypt(ec, key_pair.q, tampered) == b"Iello, world!"


def test_custom_keystream() -> None:
    def keystream(S: CurvePoint, size: int, ec: CurveParams) -> bytes:
        assert S.x is not None
        return ansi_x9_63_kdf(S.x.to_bytes(ec.p_size), size, sha1, b"ecclib")

    ec = secp256r1
    key_pair = generate_keypair(ec)
    msg = b"\x00" * 50
    ciphertext = encrypt(ec, key_pair.Q, msg, keystream=keystream)
    assert decrypt(ec, key_pair.q, ciphertext, keystream) == msg
    assert decrypt(ec, key_pair.q, ciphertext) != msg

    S = mult(key_pair.q, ciphertext.R, ec)
    assert ciphertext.payload == keystream(S, len(msg), ec)

    with pytest.raises(ECClibValueError, match="keystream too short: "):
        encrypt(ec, key_pair.Q, msg, keystream=lambda S, size, ec: b"")
    with pytest.raises(ECClibValueError, match="keystream too short: "):
        decrypt(ec, key_pair.q, ciphertext, lambda S, size, ec: b"\x00" * 49)


def test_invalid_ciphertext() -> None:
    ec = ec23_31
    key_pair = generate_keypair(ec)
    ciphertext = encrypt(ec, key_pair.Q, b"payload")

    # off-curve ephemeral point
    with pytest.raises(InvalidPointError, match="point not on curve: "):
        decrypt(ec, key_pair.q, b"\x01\x00\x02" + ciphertext.payload)

    # coordinates not in 0..p-1
    with pytest.raises(InvalidPointError, match="x-coordinate not in 0..p-1: "):
        decrypt(ec, key_pair.q, b"\x01\xff\x01" + ciphertext.payload)

    # invalid point tag
    with pytest.raises(InvalidPointError, match="invalid point tag: "):
        decrypt(ec, key_pair.q, b"\x04\x00\x01" + ciphertext.payload)

    # truncated ephemeral point
    with pytest.raises(InvalidPointError, match="invalid size for affine point: "):
        decrypt(ec, key_pair.q, b"\x01\x00")

    # INF ephemeral point
    err_msg = "INF is not a valid ephemeral key"
    with pytest.raises(InvalidPointError, match=err_msg):
        decrypt(ec, key_pair.q, b"\x00" + ciphertext.payload)
    with pytest.raises(InvalidPointError, match=err_msg):
        Ciphertext(INF, ciphertext.payload, ec)
    invalid = Ciphertext(INF, ciphertext.payload, ec, check_validity=False)
    with pytest.raises(InvalidPointError, match=err_msg):
        invalid.serialize()
    with pytest.raises(InvalidPointError, match=err_msg):
        decrypt(ec, key_pair.q, invalid)

    # off-curve point in a Ciphertext
    off_curve = CurvePoint(ec.field(0), ec.field(2))
    with pytest.raises(InvalidPointError, match="point not on curve: "):
        Ciphertext(off_curve, ciphertext.payload, ec)

    # ciphertext for another curve
    with pytest.raises(ECClibValueError, match="ciphertext curve mismatch"):
        decrypt(secp256k1, 1, ciphertext)

    # InvalidPointError is a ValueError
    with pytest.raises(ValueError):
        decrypt(ec, key_pair.q, b"\x01\x00\x02")


def test_invalid_public_key() -> None:
    ec = secp256k1
    with pytest.raises(InvalidPointError, match="INF is not a valid public key"):
        encrypt(ec, INF, b"payload")
    off_curve = CurvePoint(ec.G.x, ec.G.y + 1)
    with pytest.raises(InvalidPointError, match="point not on curve: "):
        encrypt(ec, off_curve, b"payload")


def test_small_order_points() -> None:
    # 22 points: G has order 11, while T has order 2
    ec = CurveParams(17, 2, 3, (3, 6), 11)
    T = ec.point(16, 0)
    key_pair = generate_keypair(ec)

    err_msg = "point not in the G-generated subgroup"
    with pytest.raises(InvalidPointError, match=err_msg):
        Ciphertext(T, b"payload", ec)
    ciphertext = Ciphertext(T, b"payload", ec, check_validity=False)
    for q in (2, 3):
        with pytest.raises(InvalidPointError, match=err_msg):
            decrypt(ec, q, ciphertext)
        with pytest.raises(InvalidPointError, match=err_msg):
            decrypt(ec, q, b"\x01\x10\x00" + b"payload")
    with pytest.raises(InvalidPointError, match=err_msg):
        encrypt(ec, T, b"payload", lambda n: 2)

    # a point of order 22 is not in the subgroup either
    P = ec.add(T, ec.G)
    with pytest.raises(InvalidPointError, match=err_msg):
        encrypt(ec, P, b"payload")

    # while subgroup points are fine
    ciphertext = encrypt(ec, key_pair.Q, b"payload")
    assert decrypt(ec, key_pair.q, ciphertext) == b"payload"
