# -*- coding: utf-8 -*-
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("brepkit")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

from brepkit.math_utils import XYZ, Plane, Quaternion, Ray
from brepkit.result import Result
from brepkit.shape import ShapeType

__all__ = ["Result", "XYZ", "Plane", "Ray", "Quaternion", "ShapeType", "__version__"]
