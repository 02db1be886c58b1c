"""
Map mesh data onto buffer-geometry/material descriptions for a renderer.

The objects built here follow the three.js object model (``Points``,
``Mesh`` and ``LineSegments2`` with ``BufferGeometry`` attributes) but are
plain data: numpy float32/uint32 buffers plus material parameter dicts.
:meth:`RenderObject.to_json` turns them into a JSON-ready payload for a
browser viewer.  Nothing in this module talks to the kernel.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from brepkit.config import DisplaySettings
from brepkit.mesh import EdgeMeshData, FaceMeshData, LineType, ShapeMeshData, VertexMeshData


@dataclass
class BufferAttribute:
    array: np.ndarray
    item_size: int

    @classmethod
    def of(cls, values: Sequence[float], item_size: int, dtype=np.float32) -> "BufferAttribute":
        array = np.asarray(values, dtype=dtype)
        if array.size % item_size:
            raise ValueError(f"buffer length {array.size} is not a multiple of {item_size}")
        return cls(array, item_size)

    @property
    def count(self) -> int:
        return self.array.size // self.item_size

    def to_json(self) -> Dict[str, Any]:
        return {
            "itemSize": self.item_size,
            "type": "Float32Array" if self.array.dtype == np.float32 else "Uint32Array",
            "array": self.array.tolist(),
        }


@dataclass
class BufferGeometry:
    attributes: Dict[str, BufferAttribute] = field(default_factory=dict)
    index: Optional[np.ndarray] = None
    bounding_box: Optional[np.ndarray] = None

    def set_attribute(self, name: str, attribute: BufferAttribute) -> None:
        self.attributes[name] = attribute

    def set_index(self, indices: Sequence[int]) -> None:
        self.index = np.asarray(indices, dtype=np.uint32)

    def compute_bounding_box(self) -> Optional[np.ndarray]:
        """``[[minx, miny, minz], [maxx, maxy, maxz]]`` of the position attribute."""
        position = self.attributes.get("position")
        if position is None or position.count == 0:
            self.bounding_box = None
        else:
            points = position.array.reshape(-1, 3)
            self.bounding_box = np.vstack((points.min(axis=0), points.max(axis=0)))
        return self.bounding_box

    def compute_line_distances(self) -> None:
        """
        Cumulative start/end distance of every segment pair, as dashed line
        materials expect in ``instanceDistanceStart``/``instanceDistanceEnd``.
        """
        segments = self.attributes["position"].array.reshape(-1, 2, 3).astype(np.float64)
        lengths = np.linalg.norm(segments[:, 1] - segments[:, 0], axis=1)
        end = np.cumsum(lengths)
        self.set_attribute("instanceDistanceStart", BufferAttribute.of(end - lengths, 1))
        self.set_attribute("instanceDistanceEnd", BufferAttribute.of(end, 1))

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "attributes": {name: attr.to_json() for name, attr in self.attributes.items()},
        }
        if self.index is not None:
            data["index"] = {"type": "Uint32Array", "array": self.index.tolist()}
        if self.bounding_box is not None:
            data["boundingBox"] = {
                "min": self.bounding_box[0].tolist(),
                "max": self.bounding_box[1].tolist(),
            }
        return data


@dataclass
class Material:
    kind: str
    params: Dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> Dict[str, Any]:
        return {"type": self.kind, **self.params}


@dataclass
class RenderObject:
    kind: str
    geometry: BufferGeometry
    material: Material

    def to_json(self) -> Dict[str, Any]:
        return {
            "type": self.kind,
            "geometry": self.geometry.to_json(),
            "material": self.material.to_json(),
        }


class GeometryFactory:
    def __init__(self, display: Optional[DisplaySettings] = None):
        self.display = display or DisplaySettings()

    def create_vertex_geometry(self, data: VertexMeshData) -> RenderObject:
        buff = BufferGeometry()
        buff.set_attribute("position", BufferAttribute.of(data.positions, 3))
        material = Material("PointsMaterial", {
            "size": data.size,
            "sizeAttenuation": False,
            "depthFunc": "AlwaysDepth",
        })
        self._set_color(buff, data.color, material)
        return RenderObject("Points", buff, material)

    def create_face_geometry(self, data: FaceMeshData) -> RenderObject:
        buff = self.create_face_buffer_geometry(data)
        material = Material("MeshLambertMaterial", {"side": "DoubleSide"})
        self._set_color(buff, data.color, material)
        return RenderObject("Mesh", buff, material)

    @staticmethod
    def create_face_buffer_geometry(data: FaceMeshData) -> BufferGeometry:
        buff = BufferGeometry()
        buff.set_attribute("position", BufferAttribute.of(data.positions, 3))
        buff.set_attribute("normal", BufferAttribute.of(data.normals, 3))
        buff.set_attribute("uv", BufferAttribute.of(data.uvs, 2))
        buff.set_index(data.indices)
        buff.compute_bounding_box()
        return buff

    def create_edge_geometry(self, data: EdgeMeshData) -> RenderObject:
        buff = self.create_edge_buffer_geometry(data)
        linewidth = data.line_width if data.line_width is not None else 1
        params: Dict[str, Any] = {
            "linewidth": linewidth,
            "polygonOffset": True,
            "polygonOffsetFactor": self.display.polygon_offset_factor,
            "polygonOffsetUnits": self.display.polygon_offset_units,
        }
        if data.line_type == LineType.DASH:
            params.update({
                "dashed": True,
                "dashScale": self.display.dash_scale,
                "dashSize": self.display.dash_size,
                "gapSize": self.display.gap_size,
            })
        material = Material("LineMaterial", params)
        self._set_color(buff, data.color, material)
        return RenderObject("LineSegments2", buff, material)

    @staticmethod
    def create_edge_buffer_geometry(data: EdgeMeshData) -> BufferGeometry:
        buff = BufferGeometry()
        buff.set_attribute("position", BufferAttribute.of(data.positions, 3))
        if data.line_type == LineType.DASH:
            buff.compute_line_distances()
        buff.compute_bounding_box()
        return buff

    def create_shape_geometry(self, data: ShapeMeshData) -> List[RenderObject]:
        """Render objects for every non-empty part of a shape's mesh."""
        objects = []
        if data.faces and data.faces.positions:
            objects.append(self.create_face_geometry(data.faces))
        if data.edges and data.edges.positions:
            objects.append(self.create_edge_geometry(data.edges))
        if data.vertices and data.vertices.positions:
            objects.append(self.create_vertex_geometry(data.vertices))
        return objects

    @staticmethod
    def _set_color(buffer: BufferGeometry, color, material: Material) -> None:
        if isinstance(color, bool):
            return
        if isinstance(color, int):
            material.params["color"] = color
        elif isinstance(color, (list, tuple, np.ndarray)):
            material.params["vertexColors"] = True
            buffer.set_attribute("color", BufferAttribute.of(color, 3))


__all__ = [
    "BufferAttribute",
    "BufferGeometry",
    "Material",
    "RenderObject",
    "GeometryFactory",
]
