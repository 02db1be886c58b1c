"""
Bidirectional text converters for binding values to editable strings.

Text uses comma separated numbers.  Orientations are written as XYZ Euler
angles in degrees and held internally as a :class:`Quaternion` built from
radians.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Generic, List, TypeVar

from brepkit.math_utils import XYZ, Quaternion, deg_to_rad, rad_to_deg
from brepkit.result import Result

T = TypeVar("T")


class Converter(ABC, Generic[T]):
    @abstractmethod
    def convert(self, value: T) -> Result[str, str]:
        ...

    @abstractmethod
    def convert_back(self, text: str) -> Result[T, str]:
        ...


def _parse_numbers(text: str) -> List[float]:
    numbers = []
    for part in text.split(","):
        if not part.strip():
            # a blank field counts as zero, so "1,,3" is three numbers
            numbers.append(0.0)
            continue
        try:
            number = float(part)
        except ValueError:
            continue
        if math.isnan(number):
            continue
        numbers.append(number)
    return numbers


def _format_number(value: float) -> str:
    return repr(float(value))


class QuaternionConverter(Converter[Quaternion]):
    def convert(self, value: Quaternion) -> Result[str, str]:
        euler = value.to_euler()
        return Result.ok(",".join(_format_number(rad_to_deg(a)) for a in euler))

    def convert_back(self, text: str) -> Result[Quaternion, str]:
        vs = _parse_numbers(text)
        if len(vs) != 3:
            return Result.err(f"{text} convert to Quaternion error")
        return Result.ok(Quaternion.from_euler(deg_to_rad(vs[0]), deg_to_rad(vs[1]), deg_to_rad(vs[2])))


class XYZConverter(Converter[XYZ]):
    def convert(self, value: XYZ) -> Result[str, str]:
        return Result.ok(",".join(_format_number(c) for c in XYZ.of(value)))

    def convert_back(self, text: str) -> Result[XYZ, str]:
        vs = _parse_numbers(text)
        if len(vs) != 3:
            return Result.err(f"{text} convert to XYZ error")
        return Result.ok(XYZ(vs[0], vs[1], vs[2]))


__all__ = ["Converter", "QuaternionConverter", "XYZConverter"]
