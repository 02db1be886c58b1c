## brepkit OpenCascade shape factory
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
The public modeling facade over an :class:`~brepkit.occ.kernel.OccKernel`.

Every operation follows the same four steps:

1. validate the arguments locally (no kernel call),
2. unwrap the input shapes with :func:`ensure_occ_shape`,
3. call the kernel,
4. normalise the kernel outcome with :func:`convert_shape_result`.

Invalid arguments and kernel failures are returned as ``Result.err``.  A
shape built by some other kernel binding is a programming error and raises
:class:`~brepkit.errors.ForeignShapeError` instead.  Angles are accepted in
degrees and handed to the kernel in radians.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, List, Optional, Sequence, Union

from brepkit.config import Settings, load_settings
from brepkit.errors import ForeignShapeError
from brepkit.math_utils import XYZ, XYZLike, Plane, Ray, deg_to_rad
from brepkit.occ.converter import OccShapeConverter
from brepkit.occ.kernel import OccKernel, ShapeResult
from brepkit.occ.shape import OccShape, _wrap_shape
from brepkit.result import Result
from brepkit.shape import (
    AbstractShapeFactory,
    Compound,
    Edge,
    Face,
    Shape,
    Solid,
    Vertex,
    Wire,
)

logger = logging.getLogger(__name__)


def ensure_occ_shape(shapes: Union[Shape, Iterable[Shape]]) -> List[Any]:
    """
    Return the native handles of ``shapes``, in order.

    ``shapes`` may be a single shape or any iterable of shapes (list, tuple,
    generator); either way a list comes back.  Any element that is not an
    :class:`OccShape` raises :class:`ForeignShapeError`.
    """
    if isinstance(shapes, OccShape):
        return [shapes.shape]

    if not isinstance(shapes, Iterable) or isinstance(shapes, (str, bytes)):
        raise ForeignShapeError()

    handles = []
    for x in shapes:
        if not isinstance(x, OccShape):
            raise ForeignShapeError()
        handles.append(x.shape)
    return handles


def convert_shape_result(result: ShapeResult, settings: Optional[Settings] = None) -> Result[OccShape, str]:
    """
    Map a kernel outcome onto ``Result``, wrapping the handle on success.

    The wrapper takes ownership of the handle; ``settings`` is what its
    ``mesh`` property tessellates with.
    """
    if not result.is_ok:
        return Result.err(str(result.error))
    return Result.ok(_wrap_shape(result.shape, settings))


class ShapeFactory(AbstractShapeFactory):
    """OpenCascade implementation of :class:`~brepkit.shape.AbstractShapeFactory`."""

    kernel_name = "opencascade"

    def __init__(self, kernel: Optional[OccKernel] = None, settings: Optional[Settings] = None):
        self.settings = settings or load_settings()
        self.kernel = kernel if kernel is not None else OccKernel(self.settings.tolerance)
        self.converter = OccShapeConverter(self.settings)

    def _convert(self, result: ShapeResult) -> Result:
        return convert_shape_result(result, self.settings)

    def _reject(self, message: str) -> Result:
        logger.debug("rejected before kernel call: %s", message)
        return Result.err(message)

    def face(self, wires: Sequence[Wire]) -> Result[Face, str]:
        shapes = ensure_occ_shape(wires)
        return self._convert(self.kernel.face(shapes))

    def bezier(self, points: Sequence[XYZLike], weights: Optional[Sequence[float]] = None) -> Result[Edge, str]:
        return self._convert(self.kernel.bezier(list(points), list(weights or [])))

    def point(self, point: XYZLike) -> Result[Vertex, str]:
        return self._convert(self.kernel.point(point))

    def line(self, start: XYZLike, end: XYZLike) -> Result[Edge, str]:
        if XYZ.of(start).distance(XYZ.of(end)) < self.settings.tolerance:
            return self._reject("The start and end points are too close.")
        return self._convert(self.kernel.line(start, end))

    def arc(self, normal: XYZLike, center: XYZLike, start: XYZLike, angle: float) -> Result[Edge, str]:
        return self._convert(self.kernel.arc(normal, center, start, deg_to_rad(angle)))

    def circle(self, normal: XYZLike, center: XYZLike, radius: float) -> Result[Edge, str]:
        return self._convert(self.kernel.circle(normal, center, radius))

    def rect(self, plane: Plane, dx: float, dy: float) -> Result[Face, str]:
        return self._convert(self.kernel.rect(plane, dx, dy))

    def polygon(self, points: Sequence[XYZLike]) -> Result[Wire, str]:
        return self._convert(self.kernel.polygon(list(points)))

    def box(self, plane: Plane, dx: float, dy: float, dz: float) -> Result[Solid, str]:
        return self._convert(self.kernel.box(plane, dx, dy, dz))

    def wire(self, edges: Sequence[Edge]) -> Result[Wire, str]:
        return self._convert(self.kernel.wire(ensure_occ_shape(edges)))

    def prism(self, shape: Shape, vec: XYZLike) -> Result[Shape, str]:
        if XYZ.of(vec).is_zero(self.settings.tolerance):
            return self._reject("The vector length is 0, the prism cannot be created.")
        return self._convert(self.kernel.prism(ensure_occ_shape(shape)[0], vec))

    def fuse(self, bottom: Shape, top: Shape) -> Result[Shape, str]:
        return self._convert(
            self.kernel.boolean_fuse(ensure_occ_shape(bottom), ensure_occ_shape(top))
        )

    def sweep(self, profile: Shape, path: Wire) -> Result[Shape, str]:
        return self._convert(
            self.kernel.sweep(ensure_occ_shape(profile)[0], ensure_occ_shape(path)[0])
        )

    def revolve(self, profile: Shape, axis: Ray, angle: float) -> Result[Shape, str]:
        return self._convert(
            self.kernel.revolve(ensure_occ_shape(profile)[0], axis, deg_to_rad(angle))
        )

    def boolean_common(self, shape1: Shape, shape2: Shape) -> Result[Shape, str]:
        return self._convert(
            self.kernel.boolean_common(ensure_occ_shape(shape1), ensure_occ_shape(shape2))
        )

    def boolean_cut(self, shape1: Shape, shape2: Shape) -> Result[Shape, str]:
        return self._convert(
            self.kernel.boolean_cut(ensure_occ_shape(shape1), ensure_occ_shape(shape2))
        )

    def boolean_fuse(self, shape1: Shape, shape2: Shape) -> Result[Shape, str]:
        return self._convert(
            self.kernel.boolean_fuse(ensure_occ_shape(shape1), ensure_occ_shape(shape2))
        )

    def combine(self, shapes: Sequence[Shape]) -> Result[Compound, str]:
        return self._convert(self.kernel.combine(ensure_occ_shape(shapes)))

    def make_thick_solid_by_simple(self, shape: Shape, thickness: float) -> Result[Shape, str]:
        return self._convert(
            self.kernel.make_thick_solid_by_simple(ensure_occ_shape(shape)[0], thickness)
        )

    def make_thick_solid_by_join(self, shape: Shape, closing_faces: Sequence[Shape],
                                 thickness: float) -> Result[Shape, str]:
        return self._convert(
            self.kernel.make_thick_solid_by_join(
                ensure_occ_shape(shape)[0],
                ensure_occ_shape(closing_faces),
                thickness,
            )
        )


__all__ = ["ShapeFactory", "ensure_occ_shape", "convert_shape_result"]
