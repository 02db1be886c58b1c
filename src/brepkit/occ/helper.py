"""
Conversions between brepkit value types and pythonocc-core geometry.

Importing this module on systems without pythonocc-core does not fail;
:func:`require_occ` raises a descriptive error the first time kernel
functionality is actually requested.
"""

from __future__ import annotations

from typing import Any, Optional

try:  # pragma: no cover - exercised indirectly in environments with OCC
    from OCC.Core.gp import gp_Pnt, gp_Vec, gp_Dir, gp_Ax1, gp_Ax3
    from OCC.Core.TopAbs import (
        TopAbs_COMPOUND,
        TopAbs_COMPSOLID,
        TopAbs_SOLID,
        TopAbs_SHELL,
        TopAbs_FACE,
        TopAbs_WIRE,
        TopAbs_EDGE,
        TopAbs_VERTEX,
        TopAbs_SHAPE,
    )
    from OCC.Core.TopExp import topexp
    from OCC.Core.TopTools import TopTools_IndexedMapOfShape, TopTools_ListOfShape

    _OCC_IMPORT_ERROR: Optional[Exception] = None
    _HAVE_OCC = True
except ImportError as exc:  # pragma: no cover - handled during runtime detection
    gp_Pnt = gp_Vec = gp_Dir = gp_Ax1 = gp_Ax3 = None
    TopAbs_COMPOUND = TopAbs_COMPSOLID = TopAbs_SOLID = TopAbs_SHELL = None
    TopAbs_FACE = TopAbs_WIRE = TopAbs_EDGE = TopAbs_VERTEX = TopAbs_SHAPE = None
    topexp = TopTools_IndexedMapOfShape = TopTools_ListOfShape = None
    _OCC_IMPORT_ERROR = exc
    _HAVE_OCC = False

from brepkit.errors import OccUnavailableError
from brepkit.math_utils import XYZ, XYZLike, Plane, Ray
from brepkit.shape import ShapeType


def occ_available() -> bool:
    """Return True when pythonocc-core imports succeeded."""
    return _HAVE_OCC


def require_occ() -> None:
    """Raise a descriptive error if pythonocc-core is not installed/activated."""
    if _HAVE_OCC:
        return
    raise OccUnavailableError(
        "pythonocc-core is not available. Install it from conda-forge "
        "(conda install -c conda-forge pythonocc-core) before using the "
        "OpenCascade kernel."
    ) from _OCC_IMPORT_ERROR


def shape_type_of(handle: Any) -> ShapeType:
    """Kind of a native handle; anything exposing ``ShapeType()`` works."""
    return ShapeType(int(handle.ShapeType()))


def topabs_of(shape_type: ShapeType):
    require_occ()
    return {
        ShapeType.COMPOUND: TopAbs_COMPOUND,
        ShapeType.COMPSOLID: TopAbs_COMPSOLID,
        ShapeType.SOLID: TopAbs_SOLID,
        ShapeType.SHELL: TopAbs_SHELL,
        ShapeType.FACE: TopAbs_FACE,
        ShapeType.WIRE: TopAbs_WIRE,
        ShapeType.EDGE: TopAbs_EDGE,
        ShapeType.VERTEX: TopAbs_VERTEX,
        ShapeType.SHAPE: TopAbs_SHAPE,
    }[ShapeType(shape_type)]


def to_pnt(value: XYZLike) -> "gp_Pnt":
    v = XYZ.of(value)
    return gp_Pnt(v.x, v.y, v.z)


def to_vec(value: XYZLike) -> "gp_Vec":
    v = XYZ.of(value)
    return gp_Vec(v.x, v.y, v.z)


def to_dir(value: XYZLike) -> "gp_Dir":
    v = XYZ.of(value)
    return gp_Dir(v.x, v.y, v.z)


def to_xyz(value) -> XYZ:
    """Convert a gp_Pnt/gp_Vec/gp_Dir to XYZ."""
    return XYZ(float(value.X()), float(value.Y()), float(value.Z()))


def to_ax1(ray: Ray) -> "gp_Ax1":
    return gp_Ax1(to_pnt(ray.location), to_dir(ray.direction))


def to_ax3(plane: Plane) -> "gp_Ax3":
    return gp_Ax3(to_pnt(plane.origin), to_dir(plane.normal), to_dir(plane.xvec))


def to_shape_list(handles) -> "TopTools_ListOfShape":
    shapes = TopTools_ListOfShape()
    for handle in handles:
        shapes.Append(handle)
    return shapes


def own_copy(handle):
    """A new handle onto the same topology, safe to hand to a wrapper."""
    return handle.Oriented(handle.Orientation())


def map_sub_shapes(handle, shape_type: ShapeType) -> list:
    """Unique sub-shape handles of one kind, in exploration order."""
    require_occ()
    shape_map = TopTools_IndexedMapOfShape()
    topexp.MapShapes(handle, topabs_of(shape_type), shape_map)
    return [own_copy(shape_map.FindKey(i)) for i in range(1, shape_map.Size() + 1)]


__all__ = [
    "occ_available",
    "require_occ",
    "shape_type_of",
    "topabs_of",
    "to_pnt",
    "to_vec",
    "to_dir",
    "to_xyz",
    "to_ax1",
    "to_ax3",
    "to_shape_list",
    "own_copy",
    "map_sub_shapes",
]
