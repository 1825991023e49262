"""Pytest configuration for scene tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    invalidate fields allocated by earlier tests.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def registry():
    """Create a fresh SceneRegistry with the default capacities."""
    from src.raytracing.scene.registry import SceneRegistry

    return SceneRegistry()


@pytest.fixture
def small_registry():
    """Create a SceneRegistry with tiny capacities for capacity tests."""
    from src.raytracing.core.constants import SceneCapacities
    from src.raytracing.scene.registry import SceneRegistry

    return SceneRegistry(
        SceneCapacities(
            max_scene_objects=3,
            max_rectangle_shapes=2,
            max_sphere_shapes=2,
            max_cylinder_mantle_shapes=1,
            max_colour_surfaces=2,
            max_mirror_surfaces=1,
            max_thin_focussing_surfaces=1,
            max_checkerboard_surfaces=1,
        )
    )
