"""Equality comparers for values that cannot rely on ``==``."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from brepkit.math_utils import TOLERANCE, XYZ, XYZLike

T = TypeVar("T")


class EqualityComparer(ABC, Generic[T]):
    @abstractmethod
    def equals(self, left: T, right: T) -> bool:
        ...


class XYZEqualityComparer(EqualityComparer[XYZLike]):
    """Componentwise near-equality within a fixed tolerance."""

    def __init__(self, tolerance: float = TOLERANCE):
        self.tolerance = tolerance

    def equals(self, left: XYZLike, right: XYZLike) -> bool:
        return XYZ.of(left).is_equal_to(right, self.tolerance)


class ShapeEqualityComparer(EqualityComparer):
    """Two wrappers are equal when they refer to the same topological entity."""

    def equals(self, left, right) -> bool:
        return left.is_same(right)


__all__ = ["EqualityComparer", "XYZEqualityComparer", "ShapeEqualityComparer"]
