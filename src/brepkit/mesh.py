"""
Renderer-neutral tessellation data.

This is the only artifact handed to a rendering subsystem.  Positions,
normals and colours are flat lists of floats (three per vertex), UVs are
flat pairs and indices address vertices, so any buffer-based renderer can
consume them without knowing about the kernel.

``color`` is either a packed ``0xRRGGBB`` integer applied to the whole
object or a flat per-vertex RGB list with values in ``[0, 1]``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

Color = Union[int, List[float], None]


class LineType(Enum):
    SOLID = "solid"
    DASH = "dash"


@dataclass
class MeshGroup:
    """A run of ``count`` items starting at ``start`` that belongs to one sub-shape."""
    start: int
    count: int
    shape_index: int


@dataclass
class VertexMeshData:
    positions: List[float] = field(default_factory=list)
    size: float = 5.0
    color: Color = None

    @property
    def vertex_count(self) -> int:
        return len(self.positions) // 3


@dataclass
class EdgeMeshData:
    """Edge polylines stored as segment pairs: ``p0 p1 p1 p2 ...``."""
    positions: List[float] = field(default_factory=list)
    line_type: LineType = LineType.SOLID
    line_width: Optional[float] = None
    color: Color = None
    groups: List[MeshGroup] = field(default_factory=list)

    @property
    def segment_count(self) -> int:
        return len(self.positions) // 6


@dataclass
class FaceMeshData:
    positions: List[float] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    normals: List[float] = field(default_factory=list)
    uvs: List[float] = field(default_factory=list)
    color: Color = None
    groups: List[MeshGroup] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return len(self.positions) // 3

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def validate(self) -> None:
        """Raise ``ValueError`` if the buffers are inconsistent with each other."""
        n = self.vertex_count
        if len(self.positions) % 3:
            raise ValueError("positions must be xyz triplets")
        if len(self.indices) % 3:
            raise ValueError("indices must describe whole triangles")
        if len(self.normals) != len(self.positions):
            raise ValueError("one normal per vertex is required")
        if len(self.uvs) != 2 * n:
            raise ValueError("one uv pair per vertex is required")
        if any(i < 0 or i >= n for i in self.indices):
            raise ValueError("triangle index out of range")
        if isinstance(self.color, list) and len(self.color) != len(self.positions):
            raise ValueError("per-vertex colours must be rgb triplets, one per vertex")


@dataclass
class ShapeMeshData:
    vertices: Optional[VertexMeshData] = None
    edges: Optional[EdgeMeshData] = None
    faces: Optional[FaceMeshData] = None

    def is_empty(self) -> bool:
        return not any((
            self.vertices and self.vertices.positions,
            self.edges and self.edges.positions,
            self.faces and self.faces.positions,
        ))


__all__ = [
    "Color",
    "LineType",
    "MeshGroup",
    "VertexMeshData",
    "EdgeMeshData",
    "FaceMeshData",
    "ShapeMeshData",
]
