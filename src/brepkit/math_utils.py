## brepkit math utilities and value types
## =======================================

## Copyright (c) 2025 Richard W. DeVaul
## Copyright (c) 2025 brepkit contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
Value types passed across the kernel boundary.

``XYZ`` is an immutable 3-vector used for both points and directions,
``Plane`` anchors planar constructions, ``Ray`` is an axis for revolutions
and ``Quaternion`` carries orientations for the text converters.  Points are
compared for near-equality against :data:`TOLERANCE`, never exactly.

Public angles are expressed in degrees; the kernel works in radians and the
conversion happens through :func:`deg_to_rad`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple, Union

TOLERANCE = 1e-6


def all_equal_zero(*values: float, tolerance: float = TOLERANCE) -> bool:
    """True when every value lies within ``tolerance`` of zero."""
    return all(abs(v) < tolerance for v in values)


def deg_to_rad(degrees: float) -> float:
    return degrees * math.pi / 180.0


def rad_to_deg(radians: float) -> float:
    return radians * 180.0 / math.pi


@dataclass(frozen=True)
class XYZ:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def of(cls, value: "XYZLike") -> "XYZ":
        """Coerce anything with ``x/y/z`` attributes or a 3-sequence to XYZ."""
        if isinstance(value, XYZ):
            return value
        if all(hasattr(value, attr) for attr in ("x", "y", "z")):
            return cls(float(value.x), float(value.y), float(value.z))
        if isinstance(value, (list, tuple)) and len(value) == 3:
            return cls(float(value[0]), float(value[1]), float(value[2]))
        raise TypeError(f"cannot interpret {value!r} as an XYZ value")

    def __add__(self, other: "XYZ") -> "XYZ":
        return XYZ(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "XYZ") -> "XYZ":
        return XYZ(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, s: float) -> "XYZ":
        return XYZ(self.x * s, self.y * s, self.z * s)

    def __rmul__(self, s: float) -> "XYZ":
        return self.__mul__(s)

    def __truediv__(self, s: float) -> "XYZ":
        if s == 0:
            raise ZeroDivisionError("Cannot divide vector by zero")
        return XYZ(self.x / s, self.y / s, self.z / s)

    def __neg__(self) -> "XYZ":
        return XYZ(-self.x, -self.y, -self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: "XYZ") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "XYZ") -> "XYZ":
        return XYZ(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_sq(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def normalize(self) -> Optional["XYZ"]:
        """Unit vector in the same direction, or None for a zero vector."""
        length = self.length()
        if length < TOLERANCE:
            return None
        return self / length

    def distance(self, other: "XYZ") -> float:
        return (self - other).length()

    def is_zero(self, tolerance: float = TOLERANCE) -> bool:
        return all_equal_zero(self.x, self.y, self.z, tolerance=tolerance)

    def is_parallel_to(self, other: "XYZ", tolerance: float = TOLERANCE) -> bool:
        return self.cross(other).length() < tolerance * max(1.0, self.length() * other.length())

    def is_equal_to(self, other: "XYZLike", tolerance: float = TOLERANCE) -> bool:
        o = XYZ.of(other)
        return all_equal_zero(self.x - o.x, self.y - o.y, self.z - o.z, tolerance=tolerance)

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __str__(self):
        return f"[{self.x}, {self.y}, {self.z}]"


XYZ.zero = XYZ(0.0, 0.0, 0.0)
XYZ.unit_x = XYZ(1.0, 0.0, 0.0)
XYZ.unit_y = XYZ(0.0, 1.0, 0.0)
XYZ.unit_z = XYZ(0.0, 0.0, 1.0)

XYZLike = Union[XYZ, Sequence[float], Any]


class Plane:
    """An origin plus a right-handed local frame (``xvec``, ``yvec``, ``normal``)."""

    def __init__(self, origin: XYZLike, normal: XYZLike, xvec: XYZLike):
        n = XYZ.of(normal).normalize()
        x = XYZ.of(xvec).normalize()
        if n is None or x is None:
            raise ValueError("plane normal and x direction must be non-zero")
        if n.is_parallel_to(x):
            raise ValueError("plane normal and x direction must not be parallel")
        self._origin = XYZ.of(origin)
        self._normal = n
        self._xvec = x
        self._yvec = n.cross(x).normalize()

    @classmethod
    def XY(cls, origin: XYZLike = XYZ.zero) -> "Plane":
        return cls(origin, XYZ.unit_z, XYZ.unit_x)

    @classmethod
    def YZ(cls, origin: XYZLike = XYZ.zero) -> "Plane":
        return cls(origin, XYZ.unit_x, XYZ.unit_y)

    @classmethod
    def ZX(cls, origin: XYZLike = XYZ.zero) -> "Plane":
        return cls(origin, XYZ.unit_y, XYZ.unit_z)

    @property
    def origin(self) -> XYZ:
        return self._origin

    @property
    def normal(self) -> XYZ:
        return self._normal

    @property
    def xvec(self) -> XYZ:
        return self._xvec

    @property
    def yvec(self) -> XYZ:
        return self._yvec

    def translate_to(self, origin: XYZLike) -> "Plane":
        return Plane(origin, self._normal, self._xvec)

    def __repr__(self):
        return f"Plane(origin={self._origin}, normal={self._normal}, xvec={self._xvec})"


class Ray:
    """A location and a unit direction; used as a revolution axis."""

    def __init__(self, location: XYZLike, direction: XYZLike):
        d = XYZ.of(direction).normalize()
        if d is None:
            raise ValueError("ray direction must be non-zero")
        self._location = XYZ.of(location)
        self._direction = d

    @property
    def location(self) -> XYZ:
        return self._location

    @property
    def direction(self) -> XYZ:
        return self._direction

    def __repr__(self):
        return f"Ray(location={self._location}, direction={self._direction})"


@dataclass(frozen=True)
class Quaternion:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @classmethod
    def from_euler(cls, x: float, y: float, z: float) -> "Quaternion":
        """Build from intrinsic XYZ Euler angles in radians."""
        c1, c2, c3 = math.cos(x / 2), math.cos(y / 2), math.cos(z / 2)
        s1, s2, s3 = math.sin(x / 2), math.sin(y / 2), math.sin(z / 2)
        return cls(
            s1 * c2 * c3 + c1 * s2 * s3,
            c1 * s2 * c3 - s1 * c2 * s3,
            c1 * c2 * s3 + s1 * s2 * c3,
            c1 * c2 * c3 - s1 * s2 * s3,
        )

    def to_euler(self) -> XYZ:
        """Intrinsic XYZ Euler angles in radians."""
        x, y, z, w = self.x, self.y, self.z, self.w
        x2, y2, z2 = x + x, y + y, z + z
        xx, xy, xz = x * x2, x * y2, x * z2
        yy, yz, zz = y * y2, y * z2, z * z2
        wx, wy, wz = w * x2, w * y2, w * z2

        m11 = 1 - (yy + zz)
        m12 = xy - wz
        m13 = xz + wy
        m22 = 1 - (xx + zz)
        m23 = yz - wx
        m32 = yz + wx
        m33 = 1 - (xx + yy)

        ey = math.asin(max(-1.0, min(1.0, m13)))
        if abs(m13) < 0.9999999:
            ex = math.atan2(-m23, m33)
            ez = math.atan2(-m12, m11)
        else:
            # gimbal lock
            ex = math.atan2(m32, m22)
            ez = 0.0
        return XYZ(ex, ey, ez)

    def is_equal_to(self, other: "Quaternion", tolerance: float = TOLERANCE) -> bool:
        # q and -q are the same rotation
        same = all_equal_zero(self.x - other.x, self.y - other.y,
                              self.z - other.z, self.w - other.w, tolerance=tolerance)
        flipped = all_equal_zero(self.x + other.x, self.y + other.y,
                                 self.z + other.z, self.w + other.w, tolerance=tolerance)
        return same or flipped


__all__ = [
    "TOLERANCE",
    "all_equal_zero",
    "deg_to_rad",
    "rad_to_deg",
    "XYZ",
    "XYZLike",
    "Plane",
    "Ray",
    "Quaternion",
]
