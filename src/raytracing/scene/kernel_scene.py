"""Kernel-side scene storage: fixed-capacity Taichi struct fields.

This is the kernel boundary. A KernelScene allocates, for every shape and
surface kind, one Taichi struct field whose length is the kind's capacity,
plus a struct field of scene objects and integer count fields. ``upload()``
copies a registry snapshot into them; kernels then index the fields by the
(type tag, index) pairs stored in the scene objects.

Only the slots below each count are written. Kernels must not read past
``num_scene_objects[None]``, ``shape_counts[tag]`` or ``surface_counts[tag]``.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.gpu)
    >>> from src.raytracing.scene.kernel_scene import KernelScene
    >>> from src.raytracing.scene.mirror_cabinet import create_mirror_cabinet_scene
    >>> cabinet = create_mirror_cabinet_scene()
    >>> kernel_scene = KernelScene(cabinet.registry.capacities)
    >>> kernel_scene.upload(cabinet.registry.snapshot())
    >>> kernel_scene.count_visible()
    5
"""

import logging

import taichi as ti

from src.raytracing.core.constants import SceneCapacities, ShapeType, SurfaceType
from src.raytracing.core.errors import KernelConstantMismatchError
from src.raytracing.scene.scene_object import SceneObjectStruct
from src.raytracing.scene.snapshot import SceneSnapshot
from src.raytracing.shapes import CylinderMantleStruct, RectangleStruct, SphereStruct
from src.raytracing.surfaces import (
    CheckerboardSurfaceStruct,
    ColourSurfaceStruct,
    MirrorSurfaceStruct,
    ThinFocussingSurfaceStruct,
)

logger = logging.getLogger(__name__)


def _write_record(struct_field, index: int, values: dict) -> None:
    """Write one record into slot ``index`` of a struct field, member by member."""
    for name, value in values.items():
        getattr(struct_field, name)[index] = value


@ti.data_oriented
class KernelScene:
    """Taichi fields holding an uploaded scene.

    Attributes:
        capacities: The capacities the fields were allocated with.
        scene_objects: Struct field of SceneObjectStruct.
        num_scene_objects: 0-D field with the number of valid scene objects.
        rectangle_shapes: Struct field of RectangleStruct.
        sphere_shapes: Struct field of SphereStruct.
        cylinder_mantle_shapes: Struct field of CylinderMantleStruct.
        colour_surfaces: Struct field of ColourSurfaceStruct.
        mirror_surfaces: Struct field of MirrorSurfaceStruct.
        thin_focussing_surfaces: Struct field of ThinFocussingSurfaceStruct.
        checkerboard_surfaces: Struct field of CheckerboardSurfaceStruct.
        shape_counts: Number of valid shapes, indexed by ShapeType tag.
        surface_counts: Number of valid surfaces, indexed by SurfaceType tag.
    """

    def __init__(self, capacities: SceneCapacities) -> None:
        """Allocate the fields. Taichi must already be initialized.

        Args:
            capacities: The capacities of the registry whose snapshots will be
                uploaded. Must be the same as the registry's.
        """
        self.capacities = capacities

        self.scene_objects = SceneObjectStruct.field(shape=capacities.max_scene_objects)
        self.num_scene_objects = ti.field(dtype=ti.i32, shape=())

        self.rectangle_shapes = RectangleStruct.field(shape=capacities.max_rectangle_shapes)
        self.sphere_shapes = SphereStruct.field(shape=capacities.max_sphere_shapes)
        self.cylinder_mantle_shapes = CylinderMantleStruct.field(
            shape=capacities.max_cylinder_mantle_shapes
        )
        self.shape_counts = ti.field(dtype=ti.i32, shape=len(ShapeType))

        self.colour_surfaces = ColourSurfaceStruct.field(shape=capacities.max_colour_surfaces)
        self.mirror_surfaces = MirrorSurfaceStruct.field(shape=capacities.max_mirror_surfaces)
        self.thin_focussing_surfaces = ThinFocussingSurfaceStruct.field(
            shape=capacities.max_thin_focussing_surfaces
        )
        self.checkerboard_surfaces = CheckerboardSurfaceStruct.field(
            shape=capacities.max_checkerboard_surfaces
        )
        self.surface_counts = ti.field(dtype=ti.i32, shape=len(SurfaceType))

        # Lookup tables from kind to field
        self._shape_fields = {
            ShapeType.RECTANGLE: self.rectangle_shapes,
            ShapeType.SPHERE: self.sphere_shapes,
            ShapeType.CYLINDER_MANTLE: self.cylinder_mantle_shapes,
        }
        self._surface_fields = {
            SurfaceType.COLOUR: self.colour_surfaces,
            SurfaceType.MIRROR: self.mirror_surfaces,
            SurfaceType.THIN_FOCUSSING: self.thin_focussing_surfaces,
            SurfaceType.CHECKERBOARD: self.checkerboard_surfaces,
        }

    def upload(self, snapshot: SceneSnapshot) -> None:
        """Copy a snapshot into the kernel fields.

        Do not call this while a kernel reading these fields is running.

        Raises:
            KernelConstantMismatchError: If the snapshot was taken from a
                registry with different capacities.
        """
        if snapshot.capacities != self.capacities:
            raise KernelConstantMismatchError(
                f"Snapshot capacities {snapshot.capacities} differ from the kernel's "
                f"{self.capacities}"
            )

        for shape_type, records in snapshot.shapes.items():
            struct_field = self._shape_fields[shape_type]
            for i, record in enumerate(records):
                _write_record(struct_field, i, record.kernel_fields())
            self.shape_counts[int(shape_type)] = len(records)

        for surface_type, records in snapshot.surfaces.items():
            struct_field = self._surface_fields[surface_type]
            for i, record in enumerate(records):
                _write_record(struct_field, i, record.kernel_fields())
            self.surface_counts[int(surface_type)] = len(records)

        for i, scene_object in enumerate(snapshot.scene_objects):
            _write_record(self.scene_objects, i, scene_object.kernel_fields())
        self.num_scene_objects[None] = snapshot.scene_object_count

        logger.info(
            "Uploaded %d scene object(s), %d shape(s), %d surface(s) to the kernel",
            snapshot.scene_object_count,
            sum(snapshot.shape_counts.values()),
            sum(snapshot.surface_counts.values()),
        )

    def shape_count(self, shape_type: ShapeType) -> int:
        """Get the number of uploaded shapes of a kind."""
        return int(self.shape_counts[int(shape_type)])

    def surface_count(self, surface_type: SurfaceType) -> int:
        """Get the number of uploaded surfaces of a kind."""
        return int(self.surface_counts[int(surface_type)])

    def get_scene_object_count(self) -> int:
        """Get the number of uploaded scene objects."""
        return int(self.num_scene_objects[None])

    @ti.func
    def is_visible(self, index: ti.i32) -> ti.i32:
        """Check whether a scene object should be traced (kernel scope).

        Returns:
            1 if the object is valid and visible, 0 otherwise.
        """
        result = 0
        if 0 <= index < self.num_scene_objects[None]:
            result = self.scene_objects[index].visible
        return result

    @ti.kernel
    def count_visible(self) -> ti.i32:
        """Count the visible scene objects in the uploaded scene."""
        total = 0
        for i in range(self.num_scene_objects[None]):
            total += self.is_visible(i)
        return total
