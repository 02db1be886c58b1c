## brepkit OpenCascade shape wrappers
## ==================================

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
Ownership wrappers around pythonocc-core ``TopoDS_Shape`` handles.

Each :class:`OccShape` exclusively owns one native handle.  Wrappers are
created by :func:`_wrap_shape` right after a successful kernel call and are
never mutated afterwards; modeling operations always produce new wrappers.
:meth:`OccShape.dispose` releases the native handle deterministically
(exactly once), after which any use of the handle raises
:class:`~brepkit.errors.DisposedShapeError`.
"""

from __future__ import annotations

import uuid
from typing import Any, List, Optional

try:  # pragma: no cover - exercised indirectly in environments with OCC
    from OCC.Core.BRep import BRep_Tool
    from OCC.Core.BRepGProp import brepgprop
    from OCC.Core.BRepTools import BRepTools_WireExplorer
    from OCC.Core.GProp import GProp_GProps
    from OCC.Core.TopExp import topexp
    from OCC.Core.TopoDS import TopoDS_Iterator, topods
except ImportError:  # pragma: no cover
    BRep_Tool = brepgprop = BRepTools_WireExplorer = GProp_GProps = None
    topexp = TopoDS_Iterator = topods = None

from brepkit.config import Settings
from brepkit.errors import DisposedShapeError
from brepkit.math_utils import XYZ
from brepkit.mesh import ShapeMeshData
from brepkit.occ.helper import map_sub_shapes, own_copy, require_occ, shape_type_of, to_xyz
from brepkit.shape import (
    Compound,
    CompoundSolid,
    Edge,
    Face,
    Shape,
    ShapeType,
    Shell,
    Solid,
    Vertex,
    Wire,
)


class OccShape(Shape):
    """A shape backed by exactly one pythonocc-core handle."""

    def __init__(self, shape: Any, id: Optional[str] = None, settings: Optional[Settings] = None):
        self._shape = shape
        self._settings = settings
        self._id = id or str(uuid.uuid4())
        self._mesh: Optional[ShapeMeshData] = None
        self._disposed = False

    @property
    def shape(self):
        """The native ``TopoDS_Shape`` handle."""
        if self._disposed:
            raise DisposedShapeError(f"shape {self._id} has been disposed")
        return self._shape

    @property
    def shape_type(self) -> ShapeType:
        return shape_type_of(self.shape)

    @property
    def id(self) -> str:
        return self._id

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def mesh(self) -> ShapeMeshData:
        if self._mesh is None:
            from brepkit.occ.mesher import OccMesher  # circular-safe import
            self._mesh = OccMesher(self._settings).mesh(self)
        return self._mesh

    def is_null(self) -> bool:
        return bool(self.shape.IsNull())

    def is_closed(self) -> bool:
        require_occ()
        return bool(BRep_Tool.IsClosed(self.shape))

    def is_same(self, other: Shape) -> bool:
        return isinstance(other, OccShape) and bool(self.shape.IsSame(other.shape))

    def is_equal(self, other: Shape) -> bool:
        return isinstance(other, OccShape) and bool(self.shape.IsEqual(other.shape))

    def children(self) -> List["OccShape"]:
        require_occ()
        result = []
        it = TopoDS_Iterator(self.shape)
        while it.More():
            result.append(_wrap_shape(own_copy(it.Value()), self._settings))
            it.Next()
        return result

    def find_sub_shapes(self, shape_type: ShapeType) -> List["OccShape"]:
        return [_wrap_shape(h, self._settings) for h in map_sub_shapes(self.shape, shape_type)]

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._mesh = None
        self._shape.Nullify()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()
        return False

    def __repr__(self):
        if self._disposed:
            return f"{type(self).__name__}(id={self._id!r}, disposed)"
        return f"{type(self).__name__}(id={self._id!r})"


class OccVertex(OccShape, Vertex):
    def point(self) -> XYZ:
        require_occ()
        return to_xyz(BRep_Tool.Pnt(topods.Vertex(self.shape)))


class OccEdge(OccShape, Edge):
    def length(self) -> float:
        require_occ()
        props = GProp_GProps()
        brepgprop.LinearProperties(self.shape, props)
        return float(props.Mass())

    def first_point(self) -> XYZ:
        require_occ()
        return to_xyz(BRep_Tool.Pnt(topexp.FirstVertex(topods.Edge(self.shape), True)))

    def last_point(self) -> XYZ:
        require_occ()
        return to_xyz(BRep_Tool.Pnt(topexp.LastVertex(topods.Edge(self.shape), True)))


class OccWire(OccShape, Wire):
    def edges(self) -> List[OccEdge]:
        """Edges in connection order."""
        require_occ()
        result = []
        explorer = BRepTools_WireExplorer(topods.Wire(self.shape))
        while explorer.More():
            result.append(OccEdge(own_copy(explorer.Current()), settings=self._settings))
            explorer.Next()
        return result


class OccFace(OccShape, Face):
    def area(self) -> float:
        require_occ()
        props = GProp_GProps()
        brepgprop.SurfaceProperties(self.shape, props)
        return float(props.Mass())

    def wires(self) -> List[OccWire]:
        return self.find_sub_shapes(ShapeType.WIRE)


class OccShell(OccShape, Shell):
    def faces(self) -> List[OccFace]:
        return self.find_sub_shapes(ShapeType.FACE)


class OccSolid(OccShape, Solid):
    def volume(self) -> float:
        require_occ()
        props = GProp_GProps()
        brepgprop.VolumeProperties(self.shape, props)
        return abs(float(props.Mass()))


class OccCompoundSolid(OccSolid, CompoundSolid):
    pass


class OccCompound(OccShape, Compound):
    pass


_WRAPPERS = {
    ShapeType.VERTEX: OccVertex,
    ShapeType.EDGE: OccEdge,
    ShapeType.WIRE: OccWire,
    ShapeType.FACE: OccFace,
    ShapeType.SHELL: OccShell,
    ShapeType.SOLID: OccSolid,
    ShapeType.COMPSOLID: OccCompoundSolid,
    ShapeType.COMPOUND: OccCompound,
    ShapeType.SHAPE: OccShape,
}


def _wrap_shape(handle: Any, settings: Optional[Settings] = None) -> OccShape:
    """
    Wrap a freshly produced native handle in the class matching its kind.

    The new wrapper becomes the sole owner of ``handle``; callers must not
    keep using the handle or wrap it a second time.  ``settings`` is handed
    on to tessellation and to wrappers derived from this one.
    """
    if handle is None or handle.IsNull():
        raise ValueError("cannot wrap a null shape handle")
    return _WRAPPERS[shape_type_of(handle)](handle, settings=settings)


def is_occ_shape(obj) -> bool:
    """Check if an object is a brepkit OCC shape wrapper."""
    return isinstance(obj, OccShape)


__all__ = [
    "OccShape",
    "OccVertex",
    "OccEdge",
    "OccWire",
    "OccFace",
    "OccShell",
    "OccSolid",
    "OccCompoundSolid",
    "OccCompound",
    "is_occ_shape",
]
