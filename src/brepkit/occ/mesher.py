"""Tessellate OCC shape wrappers into renderer-neutral mesh data."""

from __future__ import annotations

import logging
import math
from typing import List, Optional

try:  # pragma: no cover - exercised indirectly in environments with OCC
    from OCC.Core.BRep import BRep_Tool
    from OCC.Core.BRepAdaptor import BRepAdaptor_Curve
    from OCC.Core.BRepMesh import BRepMesh_IncrementalMesh
    from OCC.Core.BRepTools import breptools
    from OCC.Core.GCPnts import GCPnts_TangentialDeflection
    from OCC.Core.TopAbs import TopAbs_REVERSED
    from OCC.Core.TopLoc import TopLoc_Location
    from OCC.Core.TopoDS import topods
    from OCC.Core.gp import gp_Vec
except ImportError:  # pragma: no cover
    BRep_Tool = BRepAdaptor_Curve = BRepMesh_IncrementalMesh = breptools = None
    GCPnts_TangentialDeflection = TopLoc_Location = topods = gp_Vec = None
    TopAbs_REVERSED = -1

from brepkit.config import Settings, load_settings
from brepkit.mesh import (
    EdgeMeshData,
    FaceMeshData,
    LineType,
    MeshGroup,
    ShapeMeshData,
    VertexMeshData,
)
from brepkit.occ.helper import map_sub_shapes, require_occ
from brepkit.shape import ShapeType

logger = logging.getLogger(__name__)

_FACE_BEARING = (ShapeType.FACE, ShapeType.SHELL, ShapeType.SOLID,
                 ShapeType.COMPSOLID, ShapeType.COMPOUND)


class OccMesher:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or load_settings()

    def mesh(self, shape) -> ShapeMeshData:
        """
        Generate vertex, edge and face mesh data for ``shape``.

        Vertices are only emitted for vertex shapes.  Faces are triangulated
        with ``BRepMesh_IncrementalMesh`` using the configured deflections;
        edges are discretised independently so wires and free edges render
        without a face triangulation.
        """
        require_occ()
        handle = shape.shape
        kind = shape.shape_type
        result = ShapeMeshData()
        if kind == ShapeType.VERTEX:
            result.vertices = self._vertex_mesh(handle)
            return result

        mesh_cfg = self.settings.mesh
        if kind in _FACE_BEARING:
            BRepMesh_IncrementalMesh(handle, mesh_cfg.linear_deflection, False,
                                     mesh_cfg.angular_deflection, True)
            result.faces = self._face_mesh(handle)
        result.edges = self._edge_mesh(handle)
        logger.debug("meshed %s: %d triangles, %d segments", shape.id,
                     result.faces.triangle_count if result.faces else 0,
                     result.edges.segment_count)
        return result

    def _vertex_mesh(self, handle) -> VertexMeshData:
        display = self.settings.display
        positions: List[float] = []
        for vertex in map_sub_shapes(handle, ShapeType.VERTEX):
            p = BRep_Tool.Pnt(topods.Vertex(vertex))
            positions.extend((p.X(), p.Y(), p.Z()))
        return VertexMeshData(positions=positions, size=display.vertex_size,
                              color=display.vertex_color)

    def _edge_mesh(self, handle) -> EdgeMeshData:
        display = self.settings.display
        mesh_cfg = self.settings.mesh
        data = EdgeMeshData(line_type=LineType.SOLID, line_width=display.line_width,
                            color=display.edge_color)
        for index, edge_shape in enumerate(map_sub_shapes(handle, ShapeType.EDGE)):
            edge = topods.Edge(edge_shape)
            if BRep_Tool.Degenerated(edge):
                continue
            adaptor = BRepAdaptor_Curve(edge)
            discretizer = GCPnts_TangentialDeflection(adaptor, mesh_cfg.angular_deflection,
                                                      mesh_cfg.linear_deflection)
            points = [discretizer.Value(i) for i in range(1, discretizer.NbPoints() + 1)]
            start = len(data.positions) // 3
            for a, b in zip(points, points[1:]):
                data.positions.extend((a.X(), a.Y(), a.Z(), b.X(), b.Y(), b.Z()))
            count = len(data.positions) // 3 - start
            if count:
                data.groups.append(MeshGroup(start, count, index))
        return data

    def _face_mesh(self, handle) -> FaceMeshData:
        data = FaceMeshData(color=self.settings.display.face_color)
        for index, face_shape in enumerate(map_sub_shapes(handle, ShapeType.FACE)):
            face = topods.Face(face_shape)
            loc = TopLoc_Location()
            triangulation = BRep_Tool.Triangulation(face, loc)
            if triangulation is None:
                logger.debug("face %d has no triangulation", index)
                continue
            index_start = len(data.indices)
            self._append_face(data, face, triangulation, loc)
            data.groups.append(MeshGroup(index_start, len(data.indices) - index_start, index))
        return data

    def _append_face(self, data: FaceMeshData, face, triangulation, loc) -> None:
        trsf = loc.Transformation()
        reverse = face.Orientation() == TopAbs_REVERSED
        offset = len(data.positions) // 3
        count = triangulation.NbNodes()

        local = []
        for i in range(1, count + 1):
            pnt = triangulation.Node(i).Transformed(trsf)
            local.append((pnt.X(), pnt.Y(), pnt.Z()))
            data.positions.extend(local[-1])

        triangles = []
        for i in range(1, triangulation.NbTriangles() + 1):
            n1, n2, n3 = triangulation.Triangle(i).Get()
            if reverse:
                n2, n3 = n3, n2
            triangles.append((n1 - 1, n2 - 1, n3 - 1))
            data.indices.extend((n1 - 1 + offset, n2 - 1 + offset, n3 - 1 + offset))

        if triangulation.HasNormals():
            for i in range(1, count + 1):
                n = triangulation.Normal(i)
                vec = gp_Vec(n.X(), n.Y(), n.Z())
                vec.Transform(trsf)
                if reverse:
                    vec.Reverse()
                data.normals.extend((vec.X(), vec.Y(), vec.Z()))
        else:
            data.normals.extend(_accumulate_normals(local, triangles))

        if triangulation.HasUVNodes():
            umin, umax, vmin, vmax = breptools.UVBounds(face)
            du = (umax - umin) or 1.0
            dv = (vmax - vmin) or 1.0
            for i in range(1, count + 1):
                uv = triangulation.UVNode(i)
                data.uvs.extend(((uv.X() - umin) / du, (uv.Y() - vmin) / dv))
        else:
            data.uvs.extend([0.0] * (2 * count))


def _accumulate_normals(points, triangles) -> List[float]:
    """Area-weighted vertex normals from already oriented triangles."""
    accum = [[0.0, 0.0, 0.0] for _ in points]
    for a, b, c in triangles:
        v0, v1, v2 = points[a], points[b], points[c]
        ux, uy, uz = v1[0] - v0[0], v1[1] - v0[1], v1[2] - v0[2]
        wx, wy, wz = v2[0] - v0[0], v2[1] - v0[1], v2[2] - v0[2]
        nx = uy * wz - uz * wy
        ny = uz * wx - ux * wz
        nz = ux * wy - uy * wx
        for k in (a, b, c):
            accum[k][0] += nx
            accum[k][1] += ny
            accum[k][2] += nz

    normals: List[float] = []
    for vec in accum:
        length = math.sqrt(vec[0] ** 2 + vec[1] ** 2 + vec[2] ** 2)
        if length <= 1e-12:
            normals.extend((0.0, 0.0, 1.0))
        else:
            normals.extend((vec[0] / length, vec[1] / length, vec[2] / length))
    return normals


__all__ = ["OccMesher"]
