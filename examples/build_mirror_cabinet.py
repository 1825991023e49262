#!/usr/bin/env python3
"""Build the mirror cabinet scene and upload it to Taichi kernel fields.

This script builds the mirror cabinet scene, applies the requested
settings, uploads the result to the fixed-capacity kernel fields and reports
what the kernel sees.

Usage:
    python -m examples.build_mirror_cabinet [options]

Options:
    --arch {cpu,gpu}            Taichi backend (default: cpu)
    --sphere-radius RADIUS      Radius of the red sphere (default: 0.02)
    --reflection-loss-db LOSS   Mirror reflection loss in dB (default: perfect)
    --base-y Y                  Height of the cabinet centre (default: 0)
    --print-defines             Print the #define block for an external kernel
    --verbose                   Log every registration

Example:
    python -m examples.build_mirror_cabinet --reflection-loss-db -10
"""

from __future__ import annotations

import argparse
import logging
import sys

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Build the mirror cabinet scene and upload it to Taichi fields.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--arch",
        choices=["cpu", "gpu"],
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--sphere-radius",
        type=float,
        default=0.02,
        help="Radius of the red sphere (default: 0.02)",
    )
    parser.add_argument(
        "--reflection-loss-db",
        type=float,
        default=None,
        help="Mirror reflection loss in dB, e.g. -10 (default: perfect mirrors)",
    )
    parser.add_argument(
        "--base-y",
        type=float,
        default=0.0,
        help="Height of the cabinet centre (default: 0)",
    )
    parser.add_argument(
        "--print-defines",
        action="store_true",
        help="Print the #define block for an external kernel and exit",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every registration",
    )
    return parser.parse_args()


def build_mirror_cabinet(
    sphere_radius: float = 0.02,
    reflection_loss_db: float | None = None,
    base_y: float = 0.0,
):
    """Build the scene and upload it.

    Args:
        sphere_radius: Radius of the red sphere.
        reflection_loss_db: Mirror reflection loss in dB, or None.
        base_y: Height of the cabinet centre.

    Returns:
        Tuple of (MirrorCabinet, KernelScene).
    """
    # Lazy imports to allow Taichi initialization first
    from src.raytracing.scene.kernel_scene import KernelScene
    from src.raytracing.scene.mirror_cabinet import (
        MirrorCabinetParams,
        create_mirror_cabinet_scene,
    )

    params = MirrorCabinetParams(
        sphere_radius=sphere_radius,
        reflection_loss_db=reflection_loss_db,
        base_y=base_y,
    )
    cabinet = create_mirror_cabinet_scene(params)

    kernel_scene = KernelScene(cabinet.registry.capacities)
    kernel_scene.upload(cabinet.registry.snapshot())
    return cabinet, kernel_scene


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.print_defines:
        from src.raytracing.core.constants import render_glsl_defines

        print(render_glsl_defines(), end="")
        return 0

    ti.init(arch=ti.gpu if args.arch == "gpu" else ti.cpu)

    try:
        cabinet, kernel_scene = build_mirror_cabinet(
            sphere_radius=args.sphere_radius,
            reflection_loss_db=args.reflection_loss_db,
            base_y=args.base_y,
        )
    except (ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Mirror colour factor: {cabinet.mirror_surface.colour_factor}")
    print(f"Sphere: centre {cabinet.sphere.centre}, radius {cabinet.sphere.radius}")
    print(
        f"Kernel sees {kernel_scene.get_scene_object_count()} scene object(s), "
        f"{kernel_scene.count_visible()} visible"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
