"""ShapeFactory behaviour that does not depend on a real kernel.

A recording kernel stands in for pythonocc-core so the validation,
unwrapping and result-normalisation steps can be observed directly.
"""

import math

import pytest

from brepkit.config import MeshSettings, Settings
from brepkit.errors import ForeignShapeError
from brepkit.math_utils import Plane, Ray
from brepkit.occ.factory import ShapeFactory, convert_shape_result, ensure_occ_shape
from brepkit.occ.kernel import ShapeResult
from brepkit.occ.shape import (
    OccCompound,
    OccEdge,
    OccShape,
    OccSolid,
    _wrap_shape,
)
from brepkit.shape import Shape, ShapeType


class FakeHandle:
    def __init__(self, kind=ShapeType.SOLID):
        self.kind = kind
        self.nulled = False

    def ShapeType(self):
        return int(self.kind)

    def IsNull(self):
        return self.nulled

    def Nullify(self):
        self.nulled = True

    def IsSame(self, other):
        return self is other

    def IsEqual(self, other):
        return self is other


class RecordingKernel:
    def __init__(self, result_kind=ShapeType.SOLID, error=None):
        self.result_kind = result_kind
        self.error = error
        self.calls = []

    def __getattr__(self, name):
        def call(*args):
            self.calls.append((name, args))
            if self.error is not None:
                return ShapeResult.err(self.error)
            return ShapeResult.ok(FakeHandle(self.result_kind))
        return call


class ForeignShape(Shape):
    """A shape from some other kernel binding."""
    shape_type = ShapeType.SOLID
    id = "foreign"
    mesh = None

    def is_null(self):
        return False

    def is_closed(self):
        return True

    def is_same(self, other):
        return other is self

    def is_equal(self, other):
        return other is self

    def children(self):
        return []

    def find_sub_shapes(self, shape_type):
        return []

    def dispose(self):
        pass


def _factory(**kwargs):
    kernel = RecordingKernel(**kwargs)
    return ShapeFactory(kernel=kernel, settings=Settings()), kernel


def _solid():
    return _wrap_shape(FakeHandle(ShapeType.SOLID))


def test_kernel_name():
    factory, _ = _factory()
    assert factory.kernel_name == "opencascade"


def test_line_identical_points_never_reach_kernel():
    factory, kernel = _factory()
    result = factory.line((1, 2, 3), (1, 2, 3))
    assert not result.is_ok
    assert result.error == "The start and end points are too close."
    assert kernel.calls == []


def test_line_closer_than_tolerance_is_rejected():
    factory, kernel = _factory()
    result = factory.line((0, 0, 0), (5e-7, 0, 0))
    assert not result.is_ok
    assert kernel.calls == []


def test_line_at_tolerance_reaches_kernel():
    factory, kernel = _factory(result_kind=ShapeType.EDGE)
    # each component is below tolerance but the distance is not
    result = factory.line((0, 0, 0), (8e-7, 8e-7, 0))
    assert result.is_ok
    assert isinstance(result.value, OccEdge)
    assert [name for name, _ in kernel.calls] == ["line"]


def test_prism_zero_vector_never_reaches_kernel():
    factory, kernel = _factory()
    result = factory.prism(_solid(), (0, 0, 0))
    assert not result.is_ok
    assert result.error == "The vector length is 0, the prism cannot be created."
    assert kernel.calls == []


def test_prism_nonzero_vector_passes_native_handle():
    factory, kernel = _factory()
    profile = _solid()
    result = factory.prism(profile, (0, 0, 10))
    assert result.is_ok
    name, args = kernel.calls[0]
    assert name == "prism"
    assert args[0] is profile.shape
    assert tuple(args[1]) == (0, 0, 10)


def test_arc_converts_degrees_to_radians():
    factory, kernel = _factory(result_kind=ShapeType.EDGE)
    factory.arc((0, 0, 1), (0, 0, 0), (1, 0, 0), 90)
    name, args = kernel.calls[0]
    assert name == "arc"
    assert args[3] == pytest.approx(math.pi / 2)


def test_revolve_converts_degrees_to_radians():
    factory, kernel = _factory()
    profile = _solid()
    axis = Ray((0, 0, 0), (0, 0, 1))
    factory.revolve(profile, axis, 270)
    name, args = kernel.calls[0]
    assert name == "revolve"
    assert args[0] is profile.shape
    assert args[1] is axis
    assert args[2] == pytest.approx(270 * math.pi / 180)


def test_kernel_failure_becomes_result_err():
    factory, kernel = _factory(error="BRep_API: command not done")
    result = factory.box(Plane.XY(), 1, 2, 3)
    assert not result.is_ok
    assert result.error == "BRep_API: command not done"
    assert kernel.calls[0][0] == "box"


def test_kernel_failure_is_not_retried():
    factory, kernel = _factory(error="self-intersecting wire")
    factory.polygon([(0, 0, 0), (1, 0, 0), (0, 1, 0)])
    assert len(kernel.calls) == 1


def test_foreign_shape_is_a_hard_fault():
    factory, kernel = _factory()
    foreign = ForeignShape()
    solid = _solid()
    operations = [
        lambda: factory.prism(foreign, (0, 0, 1)),
        lambda: factory.sweep(foreign, solid),
        lambda: factory.sweep(solid, foreign),
        lambda: factory.revolve(foreign, Ray((0, 0, 0), (0, 0, 1)), 90),
        lambda: factory.boolean_common(solid, foreign),
        lambda: factory.boolean_cut(foreign, solid),
        lambda: factory.boolean_fuse(solid, foreign),
        lambda: factory.fuse(foreign, solid),
        lambda: factory.combine([solid, foreign]),
        lambda: factory.wire([foreign]),
        lambda: factory.face([foreign]),
        lambda: factory.make_thick_solid_by_simple(foreign, 1.0),
        lambda: factory.make_thick_solid_by_join(solid, [foreign], 1.0),
    ]
    for operation in operations:
        with pytest.raises(ForeignShapeError, match="only supports OCC geometries"):
            operation()
    assert kernel.calls == []


def test_foreign_shape_error_is_a_type_error():
    assert issubclass(ForeignShapeError, TypeError)


def test_fuse_is_an_alias_of_boolean_fuse():
    factory, kernel = _factory()
    bottom, top = _solid(), _solid()
    factory.fuse(bottom, top)
    factory.boolean_fuse(bottom, top)
    assert kernel.calls[0] == kernel.calls[1]
    name, (arguments, tools) = kernel.calls[0]
    assert name == "boolean_fuse"
    assert arguments == [bottom.shape]
    assert tools == [top.shape]


@pytest.mark.parametrize("operation", ["boolean_common", "boolean_cut"])
def test_boolean_operand_order(operation):
    factory, kernel = _factory()
    a, b = _solid(), _solid()
    getattr(factory, operation)(a, b)
    name, (arguments, tools) = kernel.calls[0]
    assert name == operation
    assert arguments[0] is a.shape
    assert tools[0] is b.shape


def test_combine_keeps_input_order():
    factory, kernel = _factory(result_kind=ShapeType.COMPOUND)
    shapes = [_solid(), _solid(), _solid()]
    result = factory.combine(shapes)
    assert isinstance(result.value, OccCompound)
    name, (handles,) = kernel.calls[0]
    assert name == "combine"
    assert handles == [s.shape for s in shapes]


def test_thick_solid_by_join_unwraps_closing_faces():
    factory, kernel = _factory()
    solid = _solid()
    faces = [_wrap_shape(FakeHandle(ShapeType.FACE)), _wrap_shape(FakeHandle(ShapeType.FACE))]
    result = factory.make_thick_solid_by_join(solid, faces, 1.0)
    assert result.is_ok
    assert result.value is not solid
    name, args = kernel.calls[0]
    assert name == "make_thick_solid_by_join"
    assert args[0] is solid.shape
    assert args[1] == [f.shape for f in faces]
    assert args[2] == 1.0


def test_bezier_defaults_to_no_weights():
    factory, kernel = _factory(result_kind=ShapeType.EDGE)
    factory.bezier([(0, 0, 0), (1, 1, 0), (2, 0, 0)])
    factory.bezier([(0, 0, 0), (1, 1, 0)], weights=[1, 2])
    assert kernel.calls[0][1][1] == []
    assert kernel.calls[1][1][1] == [1, 2]


def test_value_operations_pass_through():
    factory, kernel = _factory(result_kind=ShapeType.FACE)
    plane = Plane.XY()
    factory.rect(plane, 3, 4)
    factory.circle((0, 0, 1), (0, 0, 0), 5)
    factory.point((1, 1, 1))
    assert kernel.calls[0] == ("rect", (plane, 3, 4))
    assert kernel.calls[1] == ("circle", ((0, 0, 1), (0, 0, 0), 5))
    assert kernel.calls[2] == ("point", ((1, 1, 1),))


def test_ensure_occ_shape_preserves_order():
    shapes = [_solid(), _wrap_shape(FakeHandle(ShapeType.EDGE)), _solid()]
    assert ensure_occ_shape(shapes) == [s.shape for s in shapes]
    assert ensure_occ_shape(tuple(shapes)) == [s.shape for s in shapes]
    single = _solid()
    assert ensure_occ_shape(single) == [single.shape]
    assert ensure_occ_shape([]) == []


def test_ensure_occ_shape_rejects_foreign_values():
    with pytest.raises(ForeignShapeError):
        ensure_occ_shape(ForeignShape())
    with pytest.raises(ForeignShapeError):
        ensure_occ_shape([_solid(), "not a shape"])
    with pytest.raises(ForeignShapeError):
        ensure_occ_shape(FakeHandle())


def test_convert_shape_result_wraps_by_kind():
    handle = FakeHandle(ShapeType.SOLID)
    result = convert_shape_result(ShapeResult.ok(handle))
    assert result.is_ok
    assert isinstance(result.value, OccSolid)
    assert result.value.shape is handle


def test_convert_shape_result_stringifies_errors():
    result = convert_shape_result(ShapeResult.err(42))
    assert not result.is_ok
    assert result.error == "42"


def test_every_success_gets_a_fresh_wrapper():
    factory, _ = _factory()
    a = factory.box(Plane.XY(), 1, 1, 1).value
    b = factory.box(Plane.XY(), 1, 1, 1).value
    assert isinstance(a, OccShape)
    assert a is not b
    assert a.id != b.id


def test_ensure_occ_shape_accepts_any_iterable():
    shapes = [_solid(), _solid()]
    assert ensure_occ_shape(s for s in shapes) == [s.shape for s in shapes]
    assert ensure_occ_shape(iter(shapes)) == [s.shape for s in shapes]
    with pytest.raises(ForeignShapeError):
        ensure_occ_shape("solid")
    with pytest.raises(ForeignShapeError):
        ensure_occ_shape(s for s in [_solid(), ForeignShape()])


def test_combine_accepts_a_generator():
    factory, kernel = _factory(result_kind=ShapeType.COMPOUND)
    shapes = [_solid(), _solid()]
    assert factory.combine(s for s in shapes).is_ok
    assert kernel.calls[0] == ("combine", ([s.shape for s in shapes],))


def test_disposing_one_result_leaves_the_others_valid():
    factory, _ = _factory()
    a = factory.box(Plane.XY(), 1, 1, 1).value
    b = factory.box(Plane.XY(), 2, 2, 2).value
    a.dispose()
    assert a.is_disposed
    assert not b.is_disposed
    assert not b.shape.IsNull()
    assert ensure_occ_shape(b) == [b.shape]


class RecordingMesher:
    created = []

    def __init__(self, settings=None):
        self.settings = settings
        RecordingMesher.created.append(self)

    def mesh(self, shape):
        from brepkit.mesh import ShapeMeshData
        return ShapeMeshData()


def test_results_tessellate_with_the_factory_settings(monkeypatch):
    monkeypatch.setattr("brepkit.occ.mesher.OccMesher", RecordingMesher)
    RecordingMesher.created = []
    settings = Settings(mesh=MeshSettings(linear_deflection=0.001, angular_deflection=0.05))
    factory = ShapeFactory(kernel=RecordingKernel(), settings=settings)

    solid = factory.box(Plane.XY(), 1, 1, 1).value
    solid.mesh
    assert RecordingMesher.created[-1].settings is settings
    assert factory.converter.settings is settings


def test_convert_shape_result_without_settings_uses_defaults(monkeypatch):
    monkeypatch.setattr("brepkit.occ.mesher.OccMesher", RecordingMesher)
    RecordingMesher.created = []
    convert_shape_result(ShapeResult.ok(FakeHandle())).value.mesh
    assert RecordingMesher.created[-1].settings is None
