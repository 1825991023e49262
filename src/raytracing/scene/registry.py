"""Scene registry: the owning store of all shapes, surfaces and scene objects.

The registry keeps, per shape kind and per surface kind, an append-only
array of records with a fixed capacity, plus one array of scene objects.
Records are referred to by (kind, index), never by identity, which matches
the flat layout the kernel needs.

Guarantees:
- Indices are assigned per kind as 0, 1, 2, ... in registration order, so
  replaying the same calls always yields the same indices.
- A registration at full capacity raises CapacityExceededError and leaves
  the registry unchanged.
- Binding validates that the referenced shape and surface exist.
- Records are never removed. Existing slots can only be replaced through the
  update methods below, which never change counts or indices.

The registry is not thread-safe. Mutate it from the controlling thread only,
and call ``snapshot()`` to hand a consistent view to the kernel.

Example:
    >>> from src.raytracing.scene.registry import SceneRegistry
    >>> from src.raytracing.shapes import SphereShape
    >>> from src.raytracing.surfaces import RED_SURFACE
    >>> registry = SceneRegistry()
    >>> obj = registry.add_scene_object(
    ...     SphereShape.from_centre_and_radius((0, 0, -1), 0.5), RED_SURFACE
    ... )
    >>> registry.shape_of(obj).radius
    0.5
"""

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from src.raytracing.core.constants import (
    DEFAULT_CAPACITIES,
    SceneCapacities,
    ShapeType,
    SurfaceType,
)
from src.raytracing.core.errors import (
    CapacityExceededError,
    IndexOutOfRangeError,
    KindMismatchError,
)
from src.raytracing.scene.scene_object import SceneObject
from src.raytracing.scene.snapshot import SceneSnapshot
from src.raytracing.shapes import SHAPE_CLASSES, Shape
from src.raytracing.surfaces import SURFACE_CLASSES, Surface

logger = logging.getLogger(__name__)

# Plural names used in messages and summaries
_SHAPE_NAMES = {
    ShapeType.RECTANGLE: "rectangle(s)",
    ShapeType.SPHERE: "sphere(s)",
    ShapeType.CYLINDER_MANTLE: "cylinder mantle(s)",
}
_SURFACE_NAMES = {
    SurfaceType.COLOUR: "colour surface(s)",
    SurfaceType.MIRROR: "mirror surface(s)",
    SurfaceType.THIN_FOCUSSING: "thin-focussing surface(s)",
    SurfaceType.CHECKERBOARD: "checkerboard surface(s)",
}


def _shape_type_of(shape: Any) -> ShapeType:
    shape_type = getattr(shape, "shape_type", None)
    if shape_type is None or type(shape) is not SHAPE_CLASSES.get(shape_type):
        raise KindMismatchError(f"{type(shape).__name__} is not a shape record")
    return shape_type


def _surface_type_of(surface: Any) -> SurfaceType:
    surface_type = getattr(surface, "surface_type", None)
    if surface_type is None or type(surface) is not SURFACE_CLASSES.get(surface_type):
        raise KindMismatchError(f"{type(surface).__name__} is not a surface record")
    return surface_type


class SceneRegistry:
    """Fixed-capacity store of shapes, surfaces and scene objects.

    Create one registry per scene and pass it explicitly to whatever builds
    or updates the scene; independent registries do not share any state.

    Attributes:
        capacities: The per-kind capacities of this registry.

    Example:
        >>> from src.raytracing.shapes import Z_RECTANGLE
        >>> from src.raytracing.surfaces import PERFECT_MIRROR
        >>> registry = SceneRegistry()
        >>> mirror = registry.register_surface(PERFECT_MIRROR)
        >>> wall = registry.register_shape(Z_RECTANGLE)
        >>> registry.bind(True, ShapeType.RECTANGLE, wall, SurfaceType.MIRROR, mirror)
        0
    """

    def __init__(self, capacities: SceneCapacities | None = None) -> None:
        """Initialize an empty registry.

        Args:
            capacities: The per-kind capacities. Defaults to the capacities
                the kernel is compiled with.
        """
        self.capacities = capacities if capacities is not None else DEFAULT_CAPACITIES
        self._shapes: dict[ShapeType, list[Shape]] = {t: [] for t in ShapeType}
        self._surfaces: dict[SurfaceType, list[Surface]] = {t: [] for t in SurfaceType}
        self._scene_objects: list[SceneObject] = []

    # =========================================================================
    # Capacity checks
    # =========================================================================

    def _check_shape_capacity(self, shape_type: ShapeType) -> None:
        capacity = self.capacities.for_shape(shape_type)
        if len(self._shapes[shape_type]) >= capacity:
            logger.warning("Cannot add %s: capacity %d reached", _SHAPE_NAMES[shape_type], capacity)
            raise CapacityExceededError(_SHAPE_NAMES[shape_type], capacity)

    def _check_surface_capacity(self, surface_type: SurfaceType) -> None:
        capacity = self.capacities.for_surface(surface_type)
        if len(self._surfaces[surface_type]) >= capacity:
            logger.warning(
                "Cannot add %s: capacity %d reached", _SURFACE_NAMES[surface_type], capacity
            )
            raise CapacityExceededError(_SURFACE_NAMES[surface_type], capacity)

    def _check_scene_object_capacity(self) -> None:
        capacity = self.capacities.max_scene_objects
        if len(self._scene_objects) >= capacity:
            logger.warning("Cannot add scene object(s): capacity %d reached", capacity)
            raise CapacityExceededError("scene object(s)", capacity)

    def check_room(
        self,
        shapes: Mapping[ShapeType, int] | None = None,
        surfaces: Mapping[SurfaceType, int] | None = None,
        scene_objects: int = 0,
    ) -> None:
        """Check that further records fit without registering anything.

        Args:
            shapes: Number of additional shapes per kind.
            surfaces: Number of additional surfaces per kind.
            scene_objects: Number of additional scene objects.

        Raises:
            CapacityExceededError: If any kind would exceed its capacity.
        """
        for shape_type, extra in (shapes or {}).items():
            shape_type = ShapeType(shape_type)
            capacity = self.capacities.for_shape(shape_type)
            if len(self._shapes[shape_type]) + extra > capacity:
                logger.warning("No room for %d more %s", extra, _SHAPE_NAMES[shape_type])
                raise CapacityExceededError(_SHAPE_NAMES[shape_type], capacity)
        for surface_type, extra in (surfaces or {}).items():
            surface_type = SurfaceType(surface_type)
            capacity = self.capacities.for_surface(surface_type)
            if len(self._surfaces[surface_type]) + extra > capacity:
                logger.warning("No room for %d more %s", extra, _SURFACE_NAMES[surface_type])
                raise CapacityExceededError(_SURFACE_NAMES[surface_type], capacity)
        capacity = self.capacities.max_scene_objects
        if len(self._scene_objects) + scene_objects > capacity:
            logger.warning("No room for %d more scene object(s)", scene_objects)
            raise CapacityExceededError("scene object(s)", capacity)

    # =========================================================================
    # Registration
    # =========================================================================

    def register_shape(self, shape: Shape) -> int:
        """Append a shape to the array of its kind.

        Args:
            shape: A shape record; its kind is taken from ``shape.shape_type``.

        Returns:
            The index of the shape within its kind.

        Raises:
            KindMismatchError: If the value is not a shape record.
            CapacityExceededError: If the array of that kind is full.
        """
        shape_type = _shape_type_of(shape)
        self._check_shape_capacity(shape_type)
        records = self._shapes[shape_type]
        records.append(shape)
        logger.debug("Registered %s #%d", shape_type.name, len(records) - 1)
        return len(records) - 1

    def register_surface(self, surface: Surface) -> int:
        """Append a surface to the array of its kind.

        Args:
            surface: A surface record; its kind is ``surface.surface_type``.

        Returns:
            The index of the surface within its kind.

        Raises:
            KindMismatchError: If the value is not a surface record.
            CapacityExceededError: If the array of that kind is full.
        """
        surface_type = _surface_type_of(surface)
        self._check_surface_capacity(surface_type)
        records = self._surfaces[surface_type]
        records.append(surface)
        logger.debug("Registered %s surface #%d", surface_type.name, len(records) - 1)
        return len(records) - 1

    def register_scene_object(self, scene_object: SceneObject) -> int:
        """Append a scene object after checking that its references exist.

        Returns:
            The index of the scene object.

        Raises:
            IndexOutOfRangeError: If the shape or surface index does not
                refer to a registered record of the given kind.
            CapacityExceededError: If the scene-object array is full.
        """
        self._check_shape_index(scene_object.shape_type, scene_object.shape_index)
        self._check_surface_index(scene_object.surface_type, scene_object.surface_index)
        self._check_scene_object_capacity()
        self._scene_objects.append(scene_object)
        logger.debug(
            "Bound scene object #%d to %s #%d and %s surface #%d",
            len(self._scene_objects) - 1,
            scene_object.shape_type.name,
            scene_object.shape_index,
            scene_object.surface_type.name,
            scene_object.surface_index,
        )
        return len(self._scene_objects) - 1

    def bind(
        self,
        visible: bool,
        shape_type: ShapeType,
        shape_index: int,
        surface_type: SurfaceType,
        surface_index: int,
    ) -> int:
        """Create a scene object binding a registered shape and surface.

        Args:
            visible: Whether the object is visible.
            shape_type: The kind of the shape.
            shape_index: The index of the shape within its kind.
            surface_type: The kind of the surface.
            surface_index: The index of the surface within its kind.

        Returns:
            The index of the new scene object.

        Raises:
            ValueError: If a type tag is not valid.
            IndexOutOfRangeError: If an index does not refer to a registered
                record.
            CapacityExceededError: If the scene-object array is full.
        """
        return self.register_scene_object(
            SceneObject(visible, shape_type, shape_index, surface_type, surface_index)
        )

    def add_scene_object(self, shape: Shape, surface: Surface, visible: bool = True) -> int:
        """Register a shape and a surface and bind them in one call.

        All three capacities are checked before anything is added, so on
        failure the registry is unchanged.

        Returns:
            The index of the new scene object.
        """
        shape_type = _shape_type_of(shape)
        surface_type = _surface_type_of(surface)
        self._check_shape_capacity(shape_type)
        self._check_surface_capacity(surface_type)
        self._check_scene_object_capacity()
        shape_index = self.register_shape(shape)
        surface_index = self.register_surface(surface)
        return self.bind(visible, shape_type, shape_index, surface_type, surface_index)

    # =========================================================================
    # Lookup
    # =========================================================================

    def _check_shape_index(self, shape_type: ShapeType, index: int) -> None:
        count = len(self._shapes[ShapeType(shape_type)])
        if not 0 <= index < count:
            raise IndexOutOfRangeError(_SHAPE_NAMES[ShapeType(shape_type)], index, count)

    def _check_surface_index(self, surface_type: SurfaceType, index: int) -> None:
        count = len(self._surfaces[SurfaceType(surface_type)])
        if not 0 <= index < count:
            raise IndexOutOfRangeError(_SURFACE_NAMES[SurfaceType(surface_type)], index, count)

    def _check_scene_object_index(self, index: int) -> None:
        count = len(self._scene_objects)
        if not 0 <= index < count:
            raise IndexOutOfRangeError("scene object(s)", index, count)

    def shape(self, shape_type: ShapeType, index: int) -> Shape:
        """Get a registered shape by kind and index."""
        self._check_shape_index(shape_type, index)
        return self._shapes[ShapeType(shape_type)][index]

    def surface(self, surface_type: SurfaceType, index: int) -> Surface:
        """Get a registered surface by kind and index."""
        self._check_surface_index(surface_type, index)
        return self._surfaces[SurfaceType(surface_type)][index]

    def scene_object(self, index: int) -> SceneObject:
        """Get a registered scene object by index."""
        self._check_scene_object_index(index)
        return self._scene_objects[index]

    def shape_of(self, scene_object_index: int) -> Shape:
        """Resolve the shape a scene object refers to."""
        scene_object = self.scene_object(scene_object_index)
        return self.shape(scene_object.shape_type, scene_object.shape_index)

    def surface_of(self, scene_object_index: int) -> Surface:
        """Resolve the surface a scene object refers to."""
        scene_object = self.scene_object(scene_object_index)
        return self.surface(scene_object.surface_type, scene_object.surface_index)

    def shape_count(self, shape_type: ShapeType) -> int:
        """Get the number of registered shapes of a kind."""
        return len(self._shapes[ShapeType(shape_type)])

    def surface_count(self, surface_type: SurfaceType) -> int:
        """Get the number of registered surfaces of a kind."""
        return len(self._surfaces[SurfaceType(surface_type)])

    @property
    def scene_object_count(self) -> int:
        """Get the number of registered scene objects."""
        return len(self._scene_objects)

    # =========================================================================
    # In-place updates
    # =========================================================================

    def replace_shape(self, shape_type: ShapeType, index: int, shape: Shape) -> None:
        """Replace a registered shape wholesale with one of the same kind.

        Raises:
            IndexOutOfRangeError: If no shape of that kind has this index.
            KindMismatchError: If the new shape is of a different kind.
        """
        self._check_shape_index(shape_type, index)
        if _shape_type_of(shape) != shape_type:
            raise KindMismatchError(
                f"Cannot store a {shape.shape_type.name} in the {ShapeType(shape_type).name} array"
            )
        self._shapes[ShapeType(shape_type)][index] = shape

    def update_shape(self, shape_type: ShapeType, index: int, **changes: Any) -> Shape:
        """Change fields of a registered shape.

        The shape is rebuilt with the changed fields, so its frame and derived
        fields are recomputed.

        Returns:
            The updated shape.
        """
        shape = replace(self.shape(shape_type, index), **changes)
        self.replace_shape(shape_type, index, shape)
        return shape

    def set_radius(self, shape_type: ShapeType, index: int, radius: float) -> Shape:
        """Change the radius of a registered sphere or cylinder mantle.

        Raises:
            KindMismatchError: If the shape has no radius.
        """
        shape = self.shape(shape_type, index)
        if not hasattr(shape, "with_radius"):
            raise KindMismatchError(f"{ShapeType(shape_type).name} shapes have no radius")
        shape = shape.with_radius(radius)
        self.replace_shape(shape_type, index, shape)
        return shape

    def replace_surface(self, surface_type: SurfaceType, index: int, surface: Surface) -> None:
        """Replace a registered surface wholesale with one of the same kind.

        Raises:
            IndexOutOfRangeError: If no surface of that kind has this index.
            KindMismatchError: If the new surface is of a different kind.
        """
        self._check_surface_index(surface_type, index)
        if _surface_type_of(surface) != surface_type:
            raise KindMismatchError(
                f"Cannot store a {surface.surface_type.name} surface in the "
                f"{SurfaceType(surface_type).name} array"
            )
        self._surfaces[SurfaceType(surface_type)][index] = surface

    def update_surface(self, surface_type: SurfaceType, index: int, **changes: Any) -> Surface:
        """Change fields of a registered surface.

        Returns:
            The updated surface.
        """
        surface = replace(self.surface(surface_type, index), **changes)
        self.replace_surface(surface_type, index, surface)
        return surface

    def set_visible(self, index: int, visible: bool) -> None:
        """Show or hide a scene object."""
        self._scene_objects[index] = replace(self.scene_object(index), visible=visible)

    # =========================================================================
    # Export
    # =========================================================================

    def snapshot(self) -> SceneSnapshot:
        """Take a read-only view of the current counts and records.

        Call again after any change that should become visible to the kernel.
        """
        return SceneSnapshot(
            capacities=self.capacities,
            shapes={t: tuple(records) for t, records in self._shapes.items()},
            surfaces={t: tuple(records) for t, records in self._surfaces.items()},
            scene_objects=tuple(self._scene_objects),
        )

    def summary(self) -> str:
        """Describe how many records of each kind are registered."""
        lines = [f"{self.scene_object_count} scene object(s)"]
        lines.extend(f"{len(self._shapes[t])} {name}" for t, name in _SHAPE_NAMES.items())
        lines.extend(f"{len(self._surfaces[t])} {name}" for t, name in _SURFACE_NAMES.items())
        return ",\n".join(lines)
