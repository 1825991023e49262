"""Scene object: binds one shape and one surface by (type tag, index).

A scene object never owns its shape or surface. It refers to them by kind
and slot index in the registry's per-kind arrays, which is also how the
kernel sees it.
"""

import operator
from dataclasses import dataclass
from typing import Any

import taichi as ti

from src.raytracing.core.constants import ShapeType, SurfaceType


@ti.dataclass
class SceneObjectStruct:
    """Kernel-side layout of a scene object (visible is 0 or 1)."""

    visible: ti.i32
    shape_type: ti.i32
    shape_index: ti.i32
    surface_type: ti.i32
    surface_index: ti.i32


@dataclass(frozen=True)
class SceneObject:
    """A visible entity made of one shape and one surface.

    Attributes:
        visible: Whether the kernel should consider this object at all.
        shape_type: The kind of the bound shape.
        shape_index: Index into the registry's array of that shape kind.
        surface_type: The kind of the bound surface.
        surface_index: Index into the registry's array of that surface kind.

    Raises:
        ValueError: If a type tag is not valid.
        TypeError: If an index is not an integer.
    """

    visible: bool
    shape_type: ShapeType
    shape_index: int
    surface_type: SurfaceType
    surface_index: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "visible", bool(self.visible))
        object.__setattr__(self, "shape_type", ShapeType(self.shape_type))
        object.__setattr__(self, "shape_index", operator.index(self.shape_index))
        object.__setattr__(self, "surface_type", SurfaceType(self.surface_type))
        object.__setattr__(self, "surface_index", operator.index(self.surface_index))

    def kernel_fields(self) -> dict[str, Any]:
        """Get the member values for the kernel struct."""
        return {
            "visible": int(self.visible),
            "shape_type": int(self.shape_type),
            "shape_index": self.shape_index,
            "surface_type": int(self.surface_type),
            "surface_index": self.surface_index,
        }
