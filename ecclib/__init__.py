#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecclib developers
#
# This file is part of ecclib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecclib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"__init__ module for the ecclib package."

name = "ecclib"
__version__ = "2022.5.3"
__author__ = "The ecclib developers"
__author_email__ = "devs@ecclib.org"
__copyright__ = "Copyright (C) 2017-2022 The ecclib developers"
__license__ = "MIT License"
