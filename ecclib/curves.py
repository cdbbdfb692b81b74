#!/usr/bin/env python3

# Copyright (C) 2017-2022 The ecclib developers
#
# This file is part of ecclib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecclib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve presets.

* SEC 2 v.2 curves
  http://www.secg.org/sec2-v2.pdf
* SEC 2 v.1 curves, removed from SEC 2 v.2 as insecure ones
  http://www.secg.org/SEC2-Ver-1.0.pdf

Presets are plain CurveParams values:
they must still be passed explicitly to every operation.
"""

import json
from dataclasses import dataclass, field
from os import path
from typing import Any, Dict

from dataclasses_json import DataClassJsonMixin, config

from ecclib.curve import CurveParams
from ecclib.utils import int_from_integer


def _hex_field() -> Any:
    return field(metadata=config(encoder=hex, decoder=int_from_integer))


@dataclass(frozen=True)
class CurveData(DataClassJsonMixin):
    "JSON-serializable curve parameters, integers as hex-strings."

    name: str
    p: int = _hex_field()
    a: int = _hex_field()
    b: int = _hex_field()
    x_G: int = _hex_field()
    y_G: int = _hex_field()
    n: int = _hex_field()

    def curve(self) -> CurveParams:
        "Return the validated CurveParams."
        return CurveParams(
            self.p, self.a, self.b, (self.x_G, self.y_G), self.n, self.name
        )

    @classmethod
    def from_curve(cls, ec: CurveParams) -> "CurveData":
        x_G, y_G = ec.G.coordinates()
        return cls(ec.name, ec.p, ec.a.value, ec.b.value, x_G, y_G, ec.n)


datadir = path.join(path.dirname(__file__), "data")

filename = path.join(datadir, "curves.json")
with open(filename, "r", encoding="ascii") as file_:
    curves_data = json.load(file_)

CURVES: Dict[str, CurveParams] = {}
for ec_data in curves_data:
    ec_ = CurveData.from_dict(ec_data).curve()
    CURVES[ec_.name] = ec_

secp160r1 = CURVES["secp160r1"]
secp256k1 = CURVES["secp256k1"]
secp256r1 = CURVES["secp256r1"]
