"""Core module: vector helpers, result records and runtime setup.

Components:
    vector: Type aliases and the small vector/matrix operations the geometry
        kernel calls into (squared distances, point/direction transforms,
        scale and normal-matrix extraction)
    records: HitRecord, the result of point-valued intersection queries
    runtime: RuntimeConfig and init_runtime(), wrapping ti.init

The vector helpers and records are Taichi functions for use inside kernels.
The runtime helpers run in Python scope and must be called before the first
kernel launch.
"""

from .records import HitRecord, make_hit_record, make_miss_record
from .runtime import RuntimeConfig, active_arch, init_runtime, is_initialized
from .vector import (
    distance,
    distance_squared,
    length_squared,
    make_rotation_z,
    make_scale,
    make_translation,
    mat3,
    mat4,
    max_scale_on_axis,
    normal_matrix,
    safe_normalize,
    transform_direction,
    transform_point,
    vec_equals,
    vec3,
    vec4,
)

__all__ = [
    "HitRecord",
    "make_hit_record",
    "make_miss_record",
    "RuntimeConfig",
    "init_runtime",
    "is_initialized",
    "active_arch",
    "vec3",
    "vec4",
    "mat3",
    "mat4",
    "length_squared",
    "distance_squared",
    "distance",
    "transform_point",
    "vec_equals",
    "transform_direction",
    "max_scale_on_axis",
    "normal_matrix",
    "safe_normalize",
    "make_translation",
    "make_scale",
    "make_rotation_z",
]
