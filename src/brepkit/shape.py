## brepkit shape interfaces
## ========================

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
Kernel-independent shape interfaces.

The hierarchy mirrors boundary-representation topology: every kind is a
:class:`Shape`, and operations that need a specific kind (``face`` needs
wires, ``sweep`` needs a path wire) are typed against the kind interface.
Concrete implementations live with the kernel binding that created them
(see :mod:`brepkit.occ.shape`); a binding only accepts its own shapes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import TYPE_CHECKING, List, Optional, Sequence

from brepkit.math_utils import XYZ, XYZLike, Plane, Ray
from brepkit.result import Result

if TYPE_CHECKING:  # pragma: no cover
    from brepkit.mesh import ShapeMeshData


class ShapeType(IntEnum):
    """Shape kinds; values follow the kernel's TopAbs_ShapeEnum ordering."""
    COMPOUND = 0
    COMPSOLID = 1
    SOLID = 2
    SHELL = 3
    FACE = 4
    WIRE = 5
    EDGE = 6
    VERTEX = 7
    SHAPE = 8


class Shape(ABC):
    @property
    @abstractmethod
    def shape_type(self) -> ShapeType:
        ...

    @property
    @abstractmethod
    def id(self) -> str:
        ...

    @property
    @abstractmethod
    def mesh(self) -> "ShapeMeshData":
        ...

    @abstractmethod
    def is_null(self) -> bool:
        ...

    @abstractmethod
    def is_closed(self) -> bool:
        ...

    @abstractmethod
    def is_same(self, other: "Shape") -> bool:
        """Same topological entity, orientation ignored."""

    @abstractmethod
    def is_equal(self, other: "Shape") -> bool:
        """Same entity, location and orientation."""

    @abstractmethod
    def children(self) -> List["Shape"]:
        """Direct sub-shapes in storage order."""

    @abstractmethod
    def find_sub_shapes(self, shape_type: ShapeType) -> List["Shape"]:
        """Unique sub-shapes of ``shape_type`` in exploration order."""

    @abstractmethod
    def dispose(self) -> None:
        ...


class Vertex(Shape):
    @abstractmethod
    def point(self) -> XYZ:
        ...


class Edge(Shape):
    @abstractmethod
    def length(self) -> float:
        ...

    @abstractmethod
    def first_point(self) -> XYZ:
        ...

    @abstractmethod
    def last_point(self) -> XYZ:
        ...


class Wire(Shape):
    @abstractmethod
    def edges(self) -> List[Edge]:
        ...


class Face(Shape):
    @abstractmethod
    def area(self) -> float:
        ...

    @abstractmethod
    def wires(self) -> List[Wire]:
        ...


class Shell(Shape):
    @abstractmethod
    def faces(self) -> List[Face]:
        ...


class Solid(Shape):
    @abstractmethod
    def volume(self) -> float:
        ...


class CompoundSolid(Solid):
    pass


class Compound(Shape):
    pass


class ShapeConverter(ABC):
    """Serialise shapes to and from interchange formats."""

    @abstractmethod
    def convert_to_brep(self, shapes: Sequence[Shape]) -> Result[str, str]:
        ...

    @abstractmethod
    def convert_from_brep(self, text: str) -> Result[Shape, str]:
        ...

    @abstractmethod
    def convert_to_step(self, shapes: Sequence[Shape]) -> Result[str, str]:
        ...

    @abstractmethod
    def convert_from_step(self, text: str) -> Result[Shape, str]:
        ...


class AbstractShapeFactory(ABC):
    """
    One constructor per primitive or modeling operation.

    Every method returns a :class:`~brepkit.result.Result`.  Invalid input and
    kernel failures come back as ``Result.err(message)``; passing a shape from
    a different kernel binding raises
    :class:`~brepkit.errors.ForeignShapeError`.  Angles are in degrees.
    """

    kernel_name: str
    converter: ShapeConverter

    @abstractmethod
    def point(self, point: XYZLike) -> Result[Vertex, str]: ...

    @abstractmethod
    def line(self, start: XYZLike, end: XYZLike) -> Result[Edge, str]: ...

    @abstractmethod
    def arc(self, normal: XYZLike, center: XYZLike, start: XYZLike, angle: float) -> Result[Edge, str]: ...

    @abstractmethod
    def circle(self, normal: XYZLike, center: XYZLike, radius: float) -> Result[Edge, str]: ...

    @abstractmethod
    def bezier(self, points: Sequence[XYZLike], weights: Optional[Sequence[float]] = None) -> Result[Edge, str]: ...

    @abstractmethod
    def polygon(self, points: Sequence[XYZLike]) -> Result[Wire, str]: ...

    @abstractmethod
    def wire(self, edges: Sequence[Edge]) -> Result[Wire, str]: ...

    @abstractmethod
    def face(self, wires: Sequence[Wire]) -> Result[Face, str]: ...

    @abstractmethod
    def rect(self, plane: Plane, dx: float, dy: float) -> Result[Face, str]: ...

    @abstractmethod
    def box(self, plane: Plane, dx: float, dy: float, dz: float) -> Result[Solid, str]: ...

    @abstractmethod
    def prism(self, shape: Shape, vec: XYZLike) -> Result[Shape, str]: ...

    @abstractmethod
    def sweep(self, profile: Shape, path: Wire) -> Result[Shape, str]: ...

    @abstractmethod
    def revolve(self, profile: Shape, axis: Ray, angle: float) -> Result[Shape, str]: ...

    @abstractmethod
    def boolean_common(self, shape1: Shape, shape2: Shape) -> Result[Shape, str]: ...

    @abstractmethod
    def boolean_cut(self, shape1: Shape, shape2: Shape) -> Result[Shape, str]: ...

    @abstractmethod
    def boolean_fuse(self, shape1: Shape, shape2: Shape) -> Result[Shape, str]: ...

    @abstractmethod
    def fuse(self, bottom: Shape, top: Shape) -> Result[Shape, str]: ...

    @abstractmethod
    def combine(self, shapes: Sequence[Shape]) -> Result[Compound, str]: ...

    @abstractmethod
    def make_thick_solid_by_simple(self, shape: Shape, thickness: float) -> Result[Shape, str]: ...

    @abstractmethod
    def make_thick_solid_by_join(self, shape: Shape, closing_faces: Sequence[Shape],
                                 thickness: float) -> Result[Shape, str]: ...


__all__ = [
    "ShapeType",
    "Shape",
    "Vertex",
    "Edge",
    "Wire",
    "Face",
    "Shell",
    "Solid",
    "CompoundSolid",
    "Compound",
    "ShapeConverter",
    "AbstractShapeFactory",
]
