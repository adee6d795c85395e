#!/usr/bin/env python3
"""Cast a batch of random rays against a box, a sphere and a triangle mesh.

This script demonstrates running many spatial queries in parallel: every ray
is handled by its own kernel thread and writes only its own result slot, so
no synchronisation is needed.

Usage:
    python -m examples.ray_queries [options]

Options:
    --rays RAYS     Number of rays to cast (default: 100000)
    --arch ARCH     Taichi backend: cpu, gpu, cuda, vulkan, metal (default: cpu)
    --seed SEED     Seed for the ray generator (default: 0)
    --verbose       Enable debug logging

Example:
    python -m examples.ray_queries --rays 1000000 --arch gpu
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

import numpy as np
import taichi as ti

from src.spatial.core.runtime import SUPPORTED_ARCHS, RuntimeConfig, init_runtime
from src.spatial.logging_config import setup_logging

logger = logging.getLogger("src.spatial.examples.ray_queries")

# Unit tetrahedron, wound so every face normal points outward
TETRA_POINTS = np.array(
    [
        [0.0, 0.0, 0.0],
        [1.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 1.0],
    ]
)
TETRA_FACES = ((0, 2, 1), (0, 1, 3), (0, 3, 2), (1, 2, 3))


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Cast random rays against simple primitives.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--rays",
        type=int,
        default=100_000,
        help="Number of rays to cast (default: 100000)",
    )
    parser.add_argument(
        "--arch",
        type=str,
        default="cpu",
        choices=SUPPORTED_ARCHS,
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Seed for the ray generator (default: 0)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args()


def random_rays(num_rays: int, seed: int) -> tuple[np.ndarray, np.ndarray]:
    """Origins on a sphere of radius 4 aimed at random points near the origin."""
    rng = np.random.default_rng(seed)
    origins = rng.normal(size=(num_rays, 3))
    origins *= 4.0 / np.linalg.norm(origins, axis=1, keepdims=True)
    targets = rng.uniform(-1.0, 1.0, size=(num_rays, 3))
    directions = targets - origins
    directions /= np.linalg.norm(directions, axis=1, keepdims=True)
    return origins.astype(np.float32), directions.astype(np.float32)


def cast_rays(num_rays: int, seed: int) -> dict[str, int]:
    """Cast ``num_rays`` rays and count hits per primitive.

    Returns:
        Mapping of primitive name to the number of rays that hit it.
    """
    # Lazy imports so Taichi is initialised before any field is created
    from src.spatial.geometry.box import make_box
    from src.spatial.geometry.ray import (
        make_ray,
        ray_intersect_box,
        ray_intersect_sphere,
        ray_intersect_triangle,
    )
    from src.spatial.geometry.sphere import make_sphere
    from src.spatial.geometry.triangle import load_points, triangle_from_points_and_indices

    vec3 = ti.math.vec3

    origins_np, directions_np = random_rays(num_rays, seed)
    origins = ti.Vector.field(3, dtype=ti.f32, shape=num_rays)
    directions = ti.Vector.field(3, dtype=ti.f32, shape=num_rays)
    origins.from_numpy(origins_np)
    directions.from_numpy(directions_np)

    points = load_points(TETRA_POINTS)
    faces = ti.Vector.field(3, dtype=ti.i32, shape=len(TETRA_FACES))
    faces.from_numpy(np.array(TETRA_FACES, dtype=np.int32))

    # columns: box, sphere, mesh
    hits = ti.field(dtype=ti.i32, shape=(num_rays, 3))

    @ti.kernel
    def cast():
        box = make_box(vec3(-0.5, -0.5, -0.5), vec3(0.5, 0.5, 0.5))
        sphere = make_sphere(vec3(0.0, 0.0, 0.0), 0.75)
        for i in range(num_rays):
            ray = make_ray(origins[i], directions[i])
            hits[i, 0] = ray_intersect_box(ray, box).hit
            hits[i, 1] = ray_intersect_sphere(ray, sphere).hit

            mesh_hit = 0
            for f in range(len(TETRA_FACES)):
                face = faces[f]
                tri = triangle_from_points_and_indices(points, face[0], face[1], face[2])
                if ray_intersect_triangle(ray, tri.a, tri.b, tri.c, 1).hit:
                    mesh_hit = 1
            hits[i, 2] = mesh_hit

    start_time = time.time()
    cast()
    ti.sync()
    elapsed = time.time() - start_time
    logger.info("Cast %d rays in %.3fs (including compilation)", num_rays, elapsed)

    counts = hits.to_numpy().sum(axis=0)
    return {"box": int(counts[0]), "sphere": int(counts[1]), "mesh": int(counts[2])}


def main() -> int:
    """Main entry point."""
    args = parse_args()
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        init_runtime(RuntimeConfig(arch=args.arch, random_seed=args.seed))
        counts = cast_rays(args.rays, args.seed)
    except Exception as e:
        logger.error("Ray casting failed: %s", e)
        return 1

    for name, count in counts.items():
        print(f"{name:>6}: {count} / {args.rays} rays hit ({100.0 * count / args.rays:.1f}%)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
