"""Scene module: registration, binding and export of scene data.

Components:
    scene_object: Binding of one shape and one surface by (kind, index)
    registry: Fixed-capacity, append-only store of shapes, surfaces and
        scene objects
    snapshot: Read-only view of a registry's counts and records
    kernel_scene: Upload of a snapshot into fixed-capacity Taichi fields
    mirror_cabinet: The mirror cabinet demo scene and its controls

Data flows one way:
    shape/surface records -> SceneRegistry -> SceneSnapshot -> KernelScene

Only the registry's methods mutate scene data. The kernel only ever sees
the fields of a KernelScene, indexed by the (type tag, index) pairs stored
in its scene objects.
"""

from .kernel_scene import KernelScene
from .mirror_cabinet import MirrorCabinet, MirrorCabinetParams, create_mirror_cabinet_scene
from .registry import SceneRegistry
from .scene_object import SceneObject, SceneObjectStruct
from .snapshot import SceneSnapshot

__all__ = [
    "SceneObject",
    "SceneObjectStruct",
    "SceneRegistry",
    "SceneSnapshot",
    "KernelScene",
    "MirrorCabinet",
    "MirrorCabinetParams",
    "create_mirror_cabinet_scene",
]
