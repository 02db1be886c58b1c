"""
OpenCascade modeling session driven through pythonocc-core.

:class:`OccKernel` is the native side of the adapter: it takes plain value
types (XYZ-likes, radians, planes, rays) and native ``TopoDS_Shape``
handles, and returns a :class:`ShapeResult` instead of raising.  Kernel
exceptions (``Standard_Failure`` surfaces as ``RuntimeError``) and builders
that report ``IsDone() == False`` both become ``ShapeResult.err``.

The session is single-threaded and has no internal locking; hosts that
want overlapping modeling work must serialise calls or create one kernel
per thread.
"""

from __future__ import annotations

import functools
import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence

try:  # pragma: no cover - exercised indirectly in environments with OCC
    from OCC.Core.BRep import BRep_Builder
    from OCC.Core.BRepAlgoAPI import BRepAlgoAPI_Common, BRepAlgoAPI_Cut, BRepAlgoAPI_Fuse
    from OCC.Core.BRepBuilderAPI import (
        BRepBuilderAPI_MakeEdge,
        BRepBuilderAPI_MakeFace,
        BRepBuilderAPI_MakePolygon,
        BRepBuilderAPI_MakeVertex,
        BRepBuilderAPI_MakeWire,
    )
    from OCC.Core.BRepOffsetAPI import BRepOffsetAPI_MakePipe, BRepOffsetAPI_MakeThickSolid
    from OCC.Core.BRepPrimAPI import BRepPrimAPI_MakeBox, BRepPrimAPI_MakePrism, BRepPrimAPI_MakeRevol
    from OCC.Core.Geom import Geom_BezierCurve
    from OCC.Core.ShapeFix import ShapeFix_Face
    from OCC.Core.TColgp import TColgp_Array1OfPnt
    from OCC.Core.TColStd import TColStd_Array1OfReal
    from OCC.Core.TopoDS import TopoDS_Compound, topods
    from OCC.Core.gp import gp_Ax2, gp_Circ, gp_Dir, gp_Pln, gp_Vec
except ImportError:  # pragma: no cover
    BRep_Builder = None
    BRepAlgoAPI_Common = BRepAlgoAPI_Cut = BRepAlgoAPI_Fuse = None
    BRepBuilderAPI_MakeEdge = BRepBuilderAPI_MakeFace = BRepBuilderAPI_MakePolygon = None
    BRepBuilderAPI_MakeVertex = BRepBuilderAPI_MakeWire = None
    BRepOffsetAPI_MakePipe = BRepOffsetAPI_MakeThickSolid = None
    BRepPrimAPI_MakeBox = BRepPrimAPI_MakePrism = BRepPrimAPI_MakeRevol = None
    Geom_BezierCurve = ShapeFix_Face = None
    TColgp_Array1OfPnt = TColStd_Array1OfReal = None
    TopoDS_Compound = topods = None
    gp_Ax2 = gp_Circ = gp_Dir = gp_Pln = gp_Vec = None

from brepkit.errors import BrepkitError
from brepkit.math_utils import TOLERANCE, XYZ, XYZLike, Plane, Ray
from brepkit.occ.helper import require_occ, to_ax1, to_ax3, to_dir, to_pnt, to_shape_list, to_vec

logger = logging.getLogger(__name__)

# tolerance handed to the offset algorithm when joining thick solids
OFFSET_TOLERANCE = 1e-3

_WIRE_ERRORS = {
    1: "the edge list is empty",
    2: "the edges are disconnected",
    3: "the wire is non-manifold",
}


@dataclass(frozen=True)
class ShapeResult:
    """Tagged outcome of one kernel call: a native handle or an error message."""
    is_ok: bool
    shape: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, shape) -> "ShapeResult":
        return cls(True, shape=shape)

    @classmethod
    def err(cls, error: str) -> "ShapeResult":
        return cls(False, error=error)


def _kernel_call(fn):
    """Turn kernel exceptions raised inside ``fn`` into ``ShapeResult.err``."""

    @functools.wraps(fn)
    def wrapper(self, *args, **kwargs):
        try:
            result = fn(self, *args, **kwargs)
        except BrepkitError:
            raise
        except RuntimeError as exc:
            message = str(exc).strip() or f"{fn.__name__} failed in the kernel"
            logger.debug("kernel %s raised: %s", fn.__name__, message)
            return ShapeResult.err(message)
        if not result.is_ok:
            logger.debug("kernel %s failed: %s", fn.__name__, result.error)
        return result

    return wrapper


def _done(builder, message: str) -> ShapeResult:
    if not builder.IsDone():
        return ShapeResult.err(message)
    shape = builder.Shape()
    if shape is None or shape.IsNull():
        return ShapeResult.err(message)
    return ShapeResult.ok(shape)


class OccKernel:
    """One OpenCascade modeling session."""

    name = "opencascade"

    def __init__(self, tolerance: float = TOLERANCE):
        require_occ()
        self.tolerance = tolerance

    @_kernel_call
    def point(self, point: XYZLike) -> ShapeResult:
        return _done(BRepBuilderAPI_MakeVertex(to_pnt(point)), "Failed to create a vertex")

    @_kernel_call
    def line(self, start: XYZLike, end: XYZLike) -> ShapeResult:
        return _done(BRepBuilderAPI_MakeEdge(to_pnt(start), to_pnt(end)), "Failed to create a line")

    @_kernel_call
    def arc(self, normal: XYZLike, center: XYZLike, start: XYZLike, angle: float) -> ShapeResult:
        """Arc around ``center`` starting at ``start``; ``angle`` in radians."""
        c = to_pnt(center)
        s = to_pnt(start)
        radius = c.Distance(s)
        if radius < self.tolerance:
            return ShapeResult.err("The arc radius is too small")
        xvec = gp_Dir(gp_Vec(c, s))
        circ = gp_Circ(gp_Ax2(c, to_dir(normal), xvec), radius)
        if angle >= 0:
            start_angle, end_angle = 0.0, angle
        else:
            start_angle, end_angle = 2 * math.pi + angle, 2 * math.pi
        return _done(BRepBuilderAPI_MakeEdge(circ, start_angle, end_angle), "Failed to create an arc")

    @_kernel_call
    def circle(self, normal: XYZLike, center: XYZLike, radius: float) -> ShapeResult:
        if radius < self.tolerance:
            return ShapeResult.err("The circle radius is too small")
        circ = gp_Circ(gp_Ax2(to_pnt(center), to_dir(normal)), radius)
        return _done(BRepBuilderAPI_MakeEdge(circ), "Failed to create a circle")

    @_kernel_call
    def bezier(self, points: Sequence[XYZLike], weights: Sequence[float] = ()) -> ShapeResult:
        if len(points) < 2:
            return ShapeResult.err("A bezier curve needs at least two points")
        if weights and len(weights) != len(points):
            return ShapeResult.err("The number of weights must match the number of points")
        poles = TColgp_Array1OfPnt(1, len(points))
        for i, p in enumerate(points, start=1):
            poles.SetValue(i, to_pnt(p))
        if weights:
            ws = TColStd_Array1OfReal(1, len(weights))
            for i, w in enumerate(weights, start=1):
                ws.SetValue(i, float(w))
            curve = Geom_BezierCurve(poles, ws)
        else:
            curve = Geom_BezierCurve(poles)
        return _done(BRepBuilderAPI_MakeEdge(curve), "Failed to create a bezier curve")

    @_kernel_call
    def polygon(self, points: Sequence[XYZLike]) -> ShapeResult:
        pts = [XYZ.of(p) for p in points]
        closed = len(pts) > 2 and pts[0].is_equal_to(pts[-1], self.tolerance)
        if closed:
            pts = pts[:-1]
        if len(pts) < 2:
            return ShapeResult.err("A polygon needs at least two distinct points")
        builder = BRepBuilderAPI_MakePolygon()
        for p in pts:
            builder.Add(to_pnt(p))
        if closed:
            builder.Close()
        return _done(builder, "Failed to create a polygon")

    @_kernel_call
    def wire(self, edges: Sequence[Any]) -> ShapeResult:
        if not edges:
            return ShapeResult.err("Failed to create a wire: the edge list is empty")
        builder = BRepBuilderAPI_MakeWire()
        builder.Add(to_shape_list(edges))
        if not builder.IsDone():
            reason = _WIRE_ERRORS.get(int(builder.Error()), "unknown error")
            return ShapeResult.err(f"Failed to create a wire: {reason}")
        return _done(builder, "Failed to create a wire")

    @_kernel_call
    def face(self, wires: Sequence[Any]) -> ShapeResult:
        """Planar face bounded by the first wire; further wires become holes."""
        if not wires:
            return ShapeResult.err("Failed to create a face: the wire list is empty")
        builder = BRepBuilderAPI_MakeFace(topods.Wire(wires[0]), True)
        for hole in wires[1:]:
            builder.Add(topods.Wire(hole))
        result = _done(builder, "Failed to create a face")
        if not result.is_ok or len(wires) == 1:
            return result
        fixer = ShapeFix_Face(topods.Face(result.shape))
        fixer.FixOrientation()
        fixer.Perform()
        return ShapeResult.ok(fixer.Face())

    @_kernel_call
    def rect(self, plane: Plane, dx: float, dy: float) -> ShapeResult:
        if abs(dx) < self.tolerance or abs(dy) < self.tolerance:
            return ShapeResult.err("The rect size is too small")
        pln = gp_Pln(to_ax3(plane))
        builder = BRepBuilderAPI_MakeFace(pln, min(0.0, dx), max(0.0, dx), min(0.0, dy), max(0.0, dy))
        return _done(builder, "Failed to create a rect")

    @_kernel_call
    def box(self, plane: Plane, dx: float, dy: float, dz: float) -> ShapeResult:
        if min(abs(dx), abs(dy), abs(dz)) < self.tolerance:
            return ShapeResult.err("The box size is too small")
        # negative sizes grow the box backwards along the plane axes
        origin = (plane.origin
                  + plane.xvec * min(0.0, dx)
                  + plane.yvec * min(0.0, dy)
                  + plane.normal * min(0.0, dz))
        ax2 = gp_Ax2(to_pnt(origin), to_dir(plane.normal), to_dir(plane.xvec))
        builder = BRepPrimAPI_MakeBox(ax2, abs(dx), abs(dy), abs(dz))
        builder.Build()
        return _done(builder, "Failed to create a box")

    @_kernel_call
    def prism(self, shape: Any, vec: XYZLike) -> ShapeResult:
        return _done(BRepPrimAPI_MakePrism(shape, to_vec(vec)), "Failed to create a prism")

    @_kernel_call
    def sweep(self, profile: Any, path: Any) -> ShapeResult:
        builder = BRepOffsetAPI_MakePipe(topods.Wire(path), profile)
        return _done(builder, "Failed to sweep the profile")

    @_kernel_call
    def revolve(self, profile: Any, axis: Ray, angle: float) -> ShapeResult:
        """Revolve ``profile`` around ``axis``; ``angle`` in radians."""
        builder = BRepPrimAPI_MakeRevol(profile, to_ax1(axis), angle)
        return _done(builder, "Failed to revolve the profile")

    def _boolean(self, builder, arguments: Sequence[Any], tools: Sequence[Any], name: str) -> ShapeResult:
        builder.SetArguments(to_shape_list(arguments))
        builder.SetTools(to_shape_list(tools))
        builder.Build()
        if not builder.IsDone() or builder.HasErrors():
            return ShapeResult.err(f"Failed to {name} the shapes")
        return _done(builder, f"Failed to {name} the shapes")

    @_kernel_call
    def boolean_common(self, arguments: Sequence[Any], tools: Sequence[Any]) -> ShapeResult:
        return self._boolean(BRepAlgoAPI_Common(), arguments, tools, "intersect")

    @_kernel_call
    def boolean_cut(self, arguments: Sequence[Any], tools: Sequence[Any]) -> ShapeResult:
        return self._boolean(BRepAlgoAPI_Cut(), arguments, tools, "cut")

    @_kernel_call
    def boolean_fuse(self, arguments: Sequence[Any], tools: Sequence[Any]) -> ShapeResult:
        return self._boolean(BRepAlgoAPI_Fuse(), arguments, tools, "fuse")

    @_kernel_call
    def combine(self, shapes: Sequence[Any]) -> ShapeResult:
        compound = TopoDS_Compound()
        builder = BRep_Builder()
        builder.MakeCompound(compound)
        for shape in shapes:
            builder.Add(compound, shape)
        return ShapeResult.ok(compound)

    @_kernel_call
    def make_thick_solid_by_simple(self, shape: Any, thickness: float) -> ShapeResult:
        builder = BRepOffsetAPI_MakeThickSolid()
        builder.MakeThickSolidBySimple(shape, thickness)
        return _done(builder, "Failed to thicken the shape")

    @_kernel_call
    def make_thick_solid_by_join(self, shape: Any, closing_faces: Sequence[Any], thickness: float) -> ShapeResult:
        builder = BRepOffsetAPI_MakeThickSolid()
        builder.MakeThickSolidByJoin(shape, to_shape_list(closing_faces), thickness, OFFSET_TOLERANCE)
        return _done(builder, "Failed to thicken the shape")


__all__ = ["ShapeResult", "OccKernel", "OFFSET_TOLERANCE"]
