import pytest

from brepkit.equality import ShapeEqualityComparer
from brepkit.errors import DisposedShapeError
from brepkit.occ.factory import ensure_occ_shape
from brepkit.occ.shape import (
    OccCompound,
    OccCompoundSolid,
    OccEdge,
    OccFace,
    OccShape,
    OccShell,
    OccSolid,
    OccVertex,
    OccWire,
    _wrap_shape,
    is_occ_shape,
)
from brepkit.shape import Compound, Edge, Face, Shape, ShapeType, Solid, Vertex, Wire


class FakeHandle:
    """Stand-in for a TopoDS_Shape; copies share the underlying topology."""

    def __init__(self, kind, tshape=None):
        self.kind = kind
        self.tshape = tshape if tshape is not None else object()
        self.null = False
        self.nullify_calls = 0

    def ShapeType(self):
        return int(self.kind)

    def IsNull(self):
        return self.null

    def Nullify(self):
        self.nullify_calls += 1
        self.null = True

    def copy(self):
        return FakeHandle(self.kind, self.tshape)

    def IsSame(self, other):
        return self.tshape is other.tshape

    def IsEqual(self, other):
        return self is other


@pytest.mark.parametrize("kind, cls, iface", [
    (ShapeType.VERTEX, OccVertex, Vertex),
    (ShapeType.EDGE, OccEdge, Edge),
    (ShapeType.WIRE, OccWire, Wire),
    (ShapeType.FACE, OccFace, Face),
    (ShapeType.SHELL, OccShell, Shape),
    (ShapeType.SOLID, OccSolid, Solid),
    (ShapeType.COMPSOLID, OccCompoundSolid, Solid),
    (ShapeType.COMPOUND, OccCompound, Compound),
    (ShapeType.SHAPE, OccShape, Shape),
])
def test_wrap_shape_dispatches_on_kind(kind, cls, iface):
    wrapped = _wrap_shape(FakeHandle(kind))
    assert type(wrapped) is cls
    assert isinstance(wrapped, iface)
    assert isinstance(wrapped, Shape)
    assert wrapped.shape_type == kind
    assert is_occ_shape(wrapped)


def test_wrap_shape_rejects_null_handles():
    handle = FakeHandle(ShapeType.SOLID)
    handle.null = True
    with pytest.raises(ValueError):
        _wrap_shape(handle)
    with pytest.raises(ValueError):
        _wrap_shape(None)


def test_wrapper_ids_are_unique():
    a = _wrap_shape(FakeHandle(ShapeType.EDGE))
    b = _wrap_shape(FakeHandle(ShapeType.EDGE))
    assert a.id != b.id


def test_dispose_releases_handle_exactly_once():
    handle = FakeHandle(ShapeType.SOLID)
    solid = _wrap_shape(handle)
    solid.dispose()
    solid.dispose()
    assert handle.nullify_calls == 1
    assert solid.is_disposed
    with pytest.raises(DisposedShapeError):
        solid.shape
    assert "disposed" in repr(solid)


def test_context_manager_disposes():
    handle = FakeHandle(ShapeType.FACE)
    with _wrap_shape(handle) as face:
        assert face.shape is handle
    assert handle.nullify_calls == 1
    assert face.is_disposed


def test_disposed_shape_cannot_reach_the_kernel():
    solid = _wrap_shape(FakeHandle(ShapeType.SOLID))
    solid.dispose()
    with pytest.raises(DisposedShapeError):
        ensure_occ_shape([solid])


def test_identity_queries():
    handle = FakeHandle(ShapeType.EDGE)
    a = _wrap_shape(handle)
    b = _wrap_shape(FakeHandle(ShapeType.EDGE))
    assert a.is_same(a)
    assert not a.is_same(b)
    assert a.is_equal(a)
    assert not a.is_same(object())
    assert not a.is_null()


def test_shape_equality_comparer_uses_topological_identity():
    face = _wrap_shape(FakeHandle(ShapeType.FACE))
    # a second handle onto the same face, as returned by exploring the parent again
    again = _wrap_shape(face.shape.copy())
    other = _wrap_shape(FakeHandle(ShapeType.FACE))
    comparer = ShapeEqualityComparer()
    assert comparer.equals(face, again)
    assert not comparer.equals(face, other)


def test_disposing_a_derived_wrapper_leaves_its_source_alive():
    face = _wrap_shape(FakeHandle(ShapeType.FACE))
    again = _wrap_shape(face.shape.copy())
    again.dispose()
    assert again.is_disposed
    assert not face.is_disposed
    assert not face.shape.IsNull()
    assert face.shape.nullify_calls == 0
