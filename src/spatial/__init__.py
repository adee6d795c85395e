"""Taichi-based 3D spatial query kernel.

This package provides value-type geometric primitives (axis-aligned boxes,
spheres, planes, rays and triangles) and the containment, distance,
closest-point and intersection queries between them. Every query is a Taichi
function, so queries can be issued from any number of parallel kernel
threads without sharing state.

Subpackages:
    core: Vector helpers, hit records and Taichi runtime setup
    geometry: Primitive types and their queries

Modules:
    logging_config: Package logger setup
"""

__version__ = "0.1.0"
