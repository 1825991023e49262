"""Mirror cabinet scene: four vertical mirrors around a small red sphere.

The cabinet's floor plan is a quadrilateral with corners (x1, z1) ... (x4, z4)
in the horizontal x-z plane. Each edge of the quadrilateral carries a
vertical rectangular mirror of height ``mirror_height``, centred vertically on
``base_y``; all four mirrors share one mirror surface. A small red sphere
sits at (x3, base_y, z3), so the viewer sees its many reflections.

All interactive changes (moving corners, lifting the cabinet, changing the
reflection loss or the sphere radius) are field updates through the
registry; the scene objects and their indices never change.

Example:
    >>> from src.raytracing.scene.mirror_cabinet import create_mirror_cabinet_scene
    >>> cabinet = create_mirror_cabinet_scene()
    >>> cabinet.registry.scene_object_count
    5
    >>> cabinet.set_sphere_radius(0.1)
    >>> cabinet.sphere.radius2
    0.010000000000000002
"""

import logging
from dataclasses import dataclass, replace

from src.raytracing.core.constants import SceneCapacities, ShapeType, SurfaceType
from src.raytracing.scene.registry import SceneRegistry
from src.raytracing.shapes import RectangleShape, SphereShape
from src.raytracing.surfaces import PERFECT_MIRROR, RED_SURFACE, MirrorSurface

logger = logging.getLogger(__name__)


@dataclass
class MirrorCabinetParams:
    """Parameters of the mirror cabinet scene.

    Attributes:
        x1, z1, x2, z2, x3, z3, x4, z4: Corners of the floor plan, in order.
        mirror_height: Height of the mirrors.
        base_y: Height of the cabinet's centre (e.g. eye level in VR).
        sphere_radius: Radius of the red sphere at corner 3.
        reflection_loss_db: Reflection loss of the mirrors in dB, or None
            for perfect mirrors.
    """

    x1: float = -1.0
    z1: float = -1.0
    x2: float = 0.0
    z2: float = -0.5
    x3: float = 1.0
    z3: float = -1.0
    x4: float = 0.0
    z4: float = 0.5
    mirror_height: float = 1.0
    base_y: float = 0.0
    sphere_radius: float = 0.02
    reflection_loss_db: float | None = None

    def corners(self) -> list[tuple[float, float]]:
        """Get the floor-plan corners (x, z) in order."""
        return [(self.x1, self.z1), (self.x2, self.z2), (self.x3, self.z3), (self.x4, self.z4)]


class MirrorCabinet:
    """The mirror cabinet scene and its interactive controls.

    Attributes:
        registry: The registry holding the scene.
        params: The current scene parameters.
        mirror_object_indices: Scene-object indices of the four mirrors; the
            mirror with index i joins corner i+1 to corner i+2 (cyclically).
        sphere_object_index: Scene-object index of the red sphere.
        mirror_surface_index: Index of the shared mirror surface.
    """

    def __init__(self, registry: SceneRegistry, params: MirrorCabinetParams | None = None) -> None:
        """Build the scene into the given registry.

        Every record is built and the registry's free capacity is checked
        before anything is registered, so on failure the registry is
        unchanged.

        Raises:
            CapacityExceededError: If the registry has no room for the scene.
            ValueError: If the parameters give an invalid shape or surface.
        """
        self.registry = registry
        self.params = params if params is not None else MirrorCabinetParams()

        mirror_surface = self._mirror_surface(self.params)
        rectangles = [self._mirror_rectangle(i, self.params) for i in range(4)]
        sphere = self._sphere(self.params)
        registry.check_room(
            shapes={ShapeType.RECTANGLE: 4, ShapeType.SPHERE: 1},
            surfaces={SurfaceType.MIRROR: 1, SurfaceType.COLOUR: 1},
            scene_objects=5,
        )

        self.mirror_surface_index = registry.register_surface(mirror_surface)
        self.mirror_object_indices = [
            registry.bind(
                True,
                ShapeType.RECTANGLE,
                registry.register_shape(rectangle),
                SurfaceType.MIRROR,
                self.mirror_surface_index,
            )
            for rectangle in rectangles
        ]
        self.sphere_object_index = registry.add_scene_object(sphere, RED_SURFACE)

        logger.info("Mirror cabinet scene:\n%s", registry.summary())

    # =========================================================================
    # Geometry
    # =========================================================================

    @staticmethod
    def _mirror_surface(params: MirrorCabinetParams) -> MirrorSurface:
        if params.reflection_loss_db is None:
            return PERFECT_MIRROR
        return MirrorSurface.from_reflection_loss_db(params.reflection_loss_db)

    @staticmethod
    def _mirror_rectangle(i: int, params: MirrorCabinetParams) -> RectangleShape:
        corners = params.corners()
        x_start, z_start = corners[i]
        x_end, z_end = corners[(i + 1) % 4]
        y_min = params.base_y - 0.5 * params.mirror_height
        return RectangleShape.from_spans(
            corner=(x_start, y_min, z_start),
            span1=(x_end - x_start, 0.0, z_end - z_start),
            span2=(0.0, params.mirror_height, 0.0),
        )

    @staticmethod
    def _sphere(params: MirrorCabinetParams) -> SphereShape:
        return SphereShape.from_centre_and_radius(
            (params.x3, params.base_y, params.z3), params.sphere_radius
        )

    def _apply(
        self,
        params: MirrorCabinetParams,
        mirrors: tuple[int, ...] = (),
        sphere: bool = False,
        surface: bool = False,
    ) -> None:
        """Rebuild the affected records from ``params`` and commit them.

        All records are built first; the registry and ``self.params`` are
        only changed once every one of them is valid.
        """
        rectangles = {i: self._mirror_rectangle(i, params) for i in mirrors}
        new_sphere = self._sphere(params) if sphere else None
        new_surface = self._mirror_surface(params) if surface else None

        for i, rectangle in rectangles.items():
            shape_index = self.registry.scene_object(self.mirror_object_indices[i]).shape_index
            self.registry.replace_shape(ShapeType.RECTANGLE, shape_index, rectangle)
        if new_sphere is not None:
            sphere_index = self.registry.scene_object(self.sphere_object_index).shape_index
            self.registry.replace_shape(ShapeType.SPHERE, sphere_index, new_sphere)
        if new_surface is not None:
            self.registry.replace_surface(
                SurfaceType.MIRROR, self.mirror_surface_index, new_surface
            )
        self.params = params

    @property
    def sphere(self) -> SphereShape:
        """The current sphere shape."""
        return self.registry.shape_of(self.sphere_object_index)

    @property
    def mirror_surface(self) -> MirrorSurface:
        """The current (shared) mirror surface."""
        return self.registry.surface(SurfaceType.MIRROR, self.mirror_surface_index)

    def mirror(self, i: int) -> RectangleShape:
        """The current rectangle of mirror i (0-3)."""
        return self.registry.shape_of(self.mirror_object_indices[i])

    # =========================================================================
    # Controls
    # =========================================================================
    # A rejected value raises and leaves both the registry and params as they were.

    def set_base_y(self, base_y: float) -> None:
        """Move the whole cabinet (mirrors and sphere) to a new height."""
        self._apply(replace(self.params, base_y=base_y), mirrors=(0, 1, 2, 3), sphere=True)

    def set_reflection_loss_db(self, loss_db: float) -> None:
        """Change the reflection loss of all mirrors."""
        self._apply(replace(self.params, reflection_loss_db=loss_db), surface=True)

    def set_z2(self, z2: float) -> None:
        """Move corner 2 along z (affects the two mirrors that meet there)."""
        self._apply(replace(self.params, z2=z2), mirrors=(0, 1))

    def set_z4(self, z4: float) -> None:
        """Move corner 4 along z (affects the two mirrors that meet there)."""
        self._apply(replace(self.params, z4=z4), mirrors=(2, 3))

    def set_mirror_height(self, mirror_height: float) -> None:
        """Change the height of all mirrors."""
        self._apply(replace(self.params, mirror_height=mirror_height), mirrors=(0, 1, 2, 3))

    def set_sphere_radius(self, radius: float) -> None:
        """Change the radius of the red sphere."""
        self._apply(replace(self.params, sphere_radius=radius), sphere=True)

    def set_sphere_visible(self, visible: bool) -> None:
        """Show or hide the red sphere."""
        self.registry.set_visible(self.sphere_object_index, visible)


def create_mirror_cabinet_scene(
    params: MirrorCabinetParams | None = None,
    capacities: SceneCapacities | None = None,
) -> MirrorCabinet:
    """Create a new registry holding the mirror cabinet scene.

    Args:
        params: Optional scene parameters; defaults to MirrorCabinetParams().
        capacities: Optional registry capacities; defaults to the kernel's.

    Returns:
        The MirrorCabinet, whose ``registry`` holds the scene.
    """
    return MirrorCabinet(SceneRegistry(capacities), params)
