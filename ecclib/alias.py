#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecclib developers
#
# This file is part of ecclib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecclib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Type aliases for the accepted input representations.

See ecclib.utils for the conversion functions.
"""

from io import BytesIO
from typing import Any, Callable, Union

# bytes or hex-string, e.g. "deadbeef" or "dead beef":
# serialized points, scalars, and ciphertexts
Octets = Union[bytes, str]

# bytes or text string, the latter utf-8 encoded: plaintexts
String = Union[bytes, str]

# a byte stream, or Octets to be read as one
BinaryData = Union[BytesIO, Octets]

# int, hex-string, or big-endian bytes
Integer = Union[bytes, str, int]

# hashlib constructor, e.g. hashlib.sha256
HashF = Callable[..., Any]

# randbelow(n) returns a uniform int in [0, n-1],
# e.g. secrets.randbelow or random.Random(seed).randrange
RandBelow = Callable[[int], int]
