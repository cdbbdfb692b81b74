#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecclib developers
#
# This file is part of ecclib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecclib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

These are only meant to discriminate between Exceptions being raised
by ecclib from those raised by other codebase.

Users are usually better off just dealing with the regular
ValueError, TypeError, ZeroDivisionError, and RuntimeError
from which the ecclib versions are derived.
"""


class ECClibValueError(ValueError):
    pass


class ECClibTypeError(TypeError):
    pass


class ECClibRuntimeError(RuntimeError):
    "Internal invariant failure, never a caller error."


class ECClibZeroDivisionError(ZeroDivisionError):
    "No multiplicative inverse (e.g. the zero field element)."


class InvalidPointError(ECClibValueError):
    "Point not on the curve, or malformed point encoding."


class InvalidScalarError(ECClibValueError):
    pass


class InvalidKeyError(InvalidScalarError):
    "Private key scalar not in 1..n-1."


class ConfigurationError(ECClibValueError):
    "Invalid curve parameters."
