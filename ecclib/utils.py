#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecclib developers
#
# This file is part of ecclib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecclib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Conversions between the accepted input representations.

Integers may be given as int, "0x"-prefixed hex-string,
bare hex-string, or big-endian bytes (see ecclib.alias.Integer);
octets as bytes or hex-string (see ecclib.alias.Octets).
"""

from io import BytesIO
from typing import Collection, Optional, Union

from ecclib.alias import BinaryData, Integer, Octets, String
from ecclib.exceptions import ECClibValueError

# ints above this threshold are shown as hex-strings
HEX_THRESHOLD = 0xFFFFFFFF


def bytes_from_octets(
    octets: Octets, out_size: Optional[Union[int, Collection[int]]] = None
) -> bytes:
    """Return bytes from bytes or hex-string.

    If out_size is given (a size or a collection of allowed sizes)
    the result length is checked against it.
    """

    data = bytes.fromhex(octets) if isinstance(octets, str) else octets
    if out_size is None:
        return data
    allowed = (out_size,) if isinstance(out_size, int) else out_size
    if len(data) not in allowed:
        err_msg = f"invalid size: {len(data)} bytes instead of {out_size}"
        raise ECClibValueError(err_msg)
    return data


def bytes_from_string(msg: String) -> bytes:
    "Return bytes from a text string (utf-8 encoded) or bytes."
    return msg.encode() if isinstance(msg, str) else msg


def bytesio_from_binarydata(stream: BinaryData) -> BytesIO:
    "Return a BytesIO stream from Octets, leaving a stream untouched."

    if isinstance(stream, (bytes, str)):
        return BytesIO(bytes_from_octets(stream))
    return stream


def int_from_integer(i: Integer) -> int:
    """Return an int from its accepted representations.

    * 3735928559
    * -3735928559
    * "0xdeadbeef"
    * "-0xDEADBEEF"
    * "de ad be ef"
    * b'\xde\xad\xbe\xef'

    Binary strings ("0b...") are not accepted:
    they cannot be told apart from bare hex-strings.
    """

    if isinstance(i, int):
        return i
    if isinstance(i, str):
        i = i.strip().lower()
        if i.lstrip("-").startswith("0x"):
            return int(i, 16)
    return int.from_bytes(bytes_from_octets(i), byteorder="big", signed=False)


def hex_string(i: Integer) -> str:
    """Return the uppercase hex-string of a non-negative integer.

    The hex-digits are even in number and grouped by eight
    (i.e. four bytes) from the right, e.g. "01 DEADBEEF 00000000".
    """

    int_ = int_from_integer(i)
    if int_ < 0:
        raise ECClibValueError(f"negative integer: {int_}")
    digits = f"{int_:X}"
    digits = "0" * (len(digits) % 2) + digits
    head = len(digits) % 8
    groups = [digits[:head]] if head else []
    groups += [digits[j : j + 8] for j in range(head, len(digits), 8)]
    return " ".join(groups)


def int_repr(i: int) -> str:
    "Return the decimal repr of small ints, the quoted hex_string of large ones."
    return f"'{hex_string(i)}'" if i > HEX_THRESHOLD else f"{i}"
