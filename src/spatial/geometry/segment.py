"""Bounded line segment helpers.

A Segment is parametrised as start + t * (end - start) with t in [0, 1].
Plane/segment intersection in ``plane`` relies on this parametrisation.
"""

import taichi as ti
import taichi.math as tm

from src.spatial.core.vector import transform_point, vec_equals

from .primitives import Segment

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.func
def make_segment(start: vec3, end: vec3) -> Segment:
    """Create a segment from its two endpoints."""
    return Segment(start=start, end=end)


@ti.func
def segment_center(segment: Segment) -> vec3:
    return (segment.start + segment.end) * 0.5


@ti.func
def segment_delta(segment: Segment) -> vec3:
    """Vector from start to end."""
    return segment.end - segment.start


@ti.func
def segment_length_squared(segment: Segment) -> ti.f32:
    d = segment_delta(segment)
    return tm.dot(d, d)


@ti.func
def segment_length(segment: Segment) -> ti.f32:
    return tm.length(segment_delta(segment))


@ti.func
def segment_at(segment: Segment, t: ti.f32) -> vec3:
    """Point at parameter ``t`` (0 = start, 1 = end, unclamped)."""
    return segment.start + segment_delta(segment) * t


@ti.func
def segment_closest_point_to_point_parameter(segment: Segment, point: vec3, clamp_to_segment: ti.i32) -> ti.f32:
    """Parameter of the point on the segment's line closest to ``point``.

    Args:
        segment: The segment.
        point: The query point.
        clamp_to_segment: If non-zero, clamp the parameter to [0, 1].

    Returns:
        The parameter t. A zero-length segment divides by zero.
    """
    start_p = point - segment.start
    start_end = segment_delta(segment)
    t = tm.dot(start_end, start_p) / tm.dot(start_end, start_end)
    if clamp_to_segment:
        t = tm.clamp(t, 0.0, 1.0)
    return t


@ti.func
def segment_closest_point_to_point(segment: Segment, point: vec3, clamp_to_segment: ti.i32) -> vec3:
    """Point on the segment (or its line, if not clamped) closest to ``point``."""
    t = segment_closest_point_to_point_parameter(segment, point, clamp_to_segment)
    return segment_at(segment, t)


@ti.func
def segment_apply_matrix4(segment: Segment, m: ti.math.mat4) -> Segment:
    return Segment(start=transform_point(m, segment.start), end=transform_point(m, segment.end))


@ti.func
def segment_equals(segment: Segment, other: Segment) -> ti.i32:
    return vec_equals(segment.start, other.start) and vec_equals(segment.end, other.end)
