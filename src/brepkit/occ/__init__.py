"""OpenCascade (pythonocc-core) kernel binding."""

from brepkit.occ.factory import ShapeFactory, convert_shape_result, ensure_occ_shape
from brepkit.occ.helper import occ_available, require_occ
from brepkit.occ.kernel import OccKernel, ShapeResult
from brepkit.occ.shape import OccShape

__all__ = [
    "ShapeFactory",
    "OccKernel",
    "ShapeResult",
    "OccShape",
    "ensure_occ_shape",
    "convert_shape_result",
    "occ_available",
    "require_occ",
]
