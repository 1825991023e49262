"""Read-only view of a registry, exported once per relevant change.

A snapshot holds, per kind, the valid records (indices 0..count-1) at the
time it was taken. Records are immutable and the per-kind sequences are
tuples, so a snapshot never changes after it is taken, even if the registry
is updated while a kernel is still consuming the previous upload.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from src.raytracing.core.constants import SceneCapacities, ShapeType, SurfaceType
from src.raytracing.core.errors import CapacityExceededError
from src.raytracing.scene.scene_object import SceneObject
from src.raytracing.shapes import Shape
from src.raytracing.surfaces import Surface


@dataclass(frozen=True)
class SceneSnapshot:
    """Counts and arrays of a scene, ready for upload to the kernel.

    Attributes:
        capacities: The capacities of the registry the snapshot came from.
        shapes: For each shape kind, the valid shape records in index order.
        surfaces: For each surface kind, the valid surface records.
        scene_objects: The valid scene objects in index order.

    Raises:
        CapacityExceededError: If any kind holds more records than its
            capacity, so the snapshot could not be uploaded.
    """

    capacities: SceneCapacities
    shapes: Mapping[ShapeType, tuple[Shape, ...]]
    surfaces: Mapping[SurfaceType, tuple[Surface, ...]]
    scene_objects: tuple[SceneObject, ...]

    def __post_init__(self) -> None:
        shapes = {ShapeType(t): tuple(self.shapes.get(t, ())) for t in ShapeType}
        surfaces = {SurfaceType(t): tuple(self.surfaces.get(t, ())) for t in SurfaceType}
        scene_objects = tuple(self.scene_objects)
        # The kernel fields hold exactly ``capacities`` slots per kind
        for shape_type, records in shapes.items():
            if len(records) > self.capacities.for_shape(shape_type):
                raise CapacityExceededError(
                    f"{shape_type.name} shapes", self.capacities.for_shape(shape_type)
                )
        for surface_type, records in surfaces.items():
            if len(records) > self.capacities.for_surface(surface_type):
                raise CapacityExceededError(
                    f"{surface_type.name} surfaces", self.capacities.for_surface(surface_type)
                )
        if len(scene_objects) > self.capacities.max_scene_objects:
            raise CapacityExceededError("scene objects", self.capacities.max_scene_objects)
        object.__setattr__(self, "shapes", MappingProxyType(shapes))
        object.__setattr__(self, "surfaces", MappingProxyType(surfaces))
        object.__setattr__(self, "scene_objects", scene_objects)

    def shape_count(self, shape_type: ShapeType) -> int:
        """Get the number of valid shapes of a kind."""
        return len(self.shapes[ShapeType(shape_type)])

    def surface_count(self, surface_type: SurfaceType) -> int:
        """Get the number of valid surfaces of a kind."""
        return len(self.surfaces[SurfaceType(surface_type)])

    @property
    def scene_object_count(self) -> int:
        """Get the number of valid scene objects."""
        return len(self.scene_objects)

    @property
    def shape_counts(self) -> dict[ShapeType, int]:
        """Get the number of valid shapes of every kind."""
        return {t: len(records) for t, records in self.shapes.items()}

    @property
    def surface_counts(self) -> dict[SurfaceType, int]:
        """Get the number of valid surfaces of every kind."""
        return {t: len(records) for t, records in self.surfaces.items()}
