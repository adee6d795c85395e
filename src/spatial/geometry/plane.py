"""Plane queries in Hessian normal form.

A plane stores a unit normal n and a constant d; the signed distance of a
point p is dot(n, p) + d, positive on the side the normal points to. The
normal is assumed to be unit length. Builders that derive the normal from
geometry normalise it; planes built from raw components need an explicit
plane_normalize().

Plane/segment queries come in two flavours with deliberately different
boundary behaviour:

- plane_intersect_line() accepts a segment that merely touches the plane
  (an endpoint at distance exactly 0) and returns the touching point.
- plane_intersects_line() only reports a crossing when the endpoints lie
  strictly on opposite sides, so a touching endpoint does not count.
"""

import taichi as ti
import taichi.math as tm

from src.spatial.core.records import HitRecord, make_hit_record, make_miss_record
from src.spatial.core.vector import normal_matrix, safe_normalize, transform_point, vec_equals

from .box import box_intersects_plane
from .primitives import Box3, Plane, Segment, Sphere
from .segment import segment_delta

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.func
def make_plane(normal: vec3, constant: ti.f32) -> Plane:
    """Create a plane from a (unit) normal and constant."""
    return Plane(normal=normal, constant=constant)


@ti.func
def plane_from_components(x: ti.f32, y: ti.f32, z: ti.f32, w: ti.f32) -> Plane:
    """Create a plane from raw (x, y, z) normal components and constant w."""
    return Plane(normal=vec3(x, y, z), constant=w)


@ti.func
def plane_from_normal_and_coplanar_point(normal: vec3, point: vec3) -> Plane:
    """Create the plane with the given (unit) normal through ``point``."""
    return Plane(normal=normal, constant=-tm.dot(point, normal))


@ti.func
def plane_from_coplanar_points(a: vec3, b: vec3, c: vec3) -> Plane:
    """Create the plane through three points.

    The normal is normalize(cross(c - b, a - b)), so it depends on winding
    order the same way triangle normals do. Collinear points give a zero
    normal and a degenerate plane.
    """
    normal = safe_normalize(tm.cross(c - b, a - b))
    return plane_from_normal_and_coplanar_point(normal, a)


@ti.func
def plane_normalize(plane: Plane) -> Plane:
    """Rescale normal and constant so the normal has unit length.

    A zero normal divides by zero.
    """
    inverse_normal_length = 1.0 / tm.length(plane.normal)
    return Plane(
        normal=plane.normal * inverse_normal_length,
        constant=plane.constant * inverse_normal_length,
    )


@ti.func
def plane_negate(plane: Plane) -> Plane:
    """Flip the plane to face the other way (same point set)."""
    return Plane(normal=-plane.normal, constant=-plane.constant)


@ti.func
def plane_distance_to_point(plane: Plane, point: vec3) -> ti.f32:
    """Signed distance from the plane to ``point``."""
    return tm.dot(plane.normal, point) + plane.constant


@ti.func
def plane_distance_to_sphere(plane: Plane, sphere: Sphere) -> ti.f32:
    """Signed distance from the plane to the sphere surface.

    Negative when the plane cuts the sphere (or the sphere lies behind it).
    """
    return plane_distance_to_point(plane, sphere.center) - sphere.radius


@ti.func
def plane_project_point(plane: Plane, point: vec3) -> vec3:
    """Orthogonal projection of ``point`` onto the plane."""
    return point - plane.normal * plane_distance_to_point(plane, point)


@ti.func
def plane_coplanar_point(plane: Plane) -> vec3:
    """The point of the plane closest to the origin."""
    return plane.normal * -plane.constant


@ti.func
def plane_intersect_line(plane: Plane, segment: Segment) -> HitRecord:
    """Intersect the plane with a bounded segment.

    Solves dot(n, start + t * (end - start)) + d = 0 for t and accepts the
    solution only for t in [0, 1]. When the segment is parallel to the plane
    the start point is returned if it lies exactly on the plane.

    Args:
        plane: The plane.
        segment: The segment to intersect.

    Returns:
        A HitRecord whose t is the segment parameter of the intersection.
    """
    direction = segment_delta(segment)
    denominator = tm.dot(plane.normal, direction)

    result = make_miss_record()

    if denominator == 0.0:
        # parallel: only a segment lying in the plane touches it
        if plane_distance_to_point(plane, segment.start) == 0.0:
            result = make_hit_record(0.0, segment.start)
    else:
        t = -(tm.dot(segment.start, plane.normal) + plane.constant) / denominator
        if t >= 0.0 and t <= 1.0:
            result = make_hit_record(t, segment.start + direction * t)

    return result


@ti.func
def plane_intersects_line(plane: Plane, segment: Segment) -> ti.i32:
    """Check if the segment crosses the plane.

    True only when the endpoints lie strictly on opposite sides. A segment
    with an endpoint exactly on the plane does not cross it.
    """
    start_sign = plane_distance_to_point(plane, segment.start)
    end_sign = plane_distance_to_point(plane, segment.end)
    return (start_sign < 0.0 and end_sign > 0.0) or (end_sign < 0.0 and start_sign > 0.0)


@ti.func
def plane_intersects_box(plane: Plane, box: Box3) -> ti.i32:
    return box_intersects_plane(box, plane)


@ti.func
def plane_intersects_sphere(plane: Plane, sphere: Sphere) -> ti.i32:
    """Check if the plane passes within ``sphere.radius`` of its center."""
    return ti.abs(plane_distance_to_point(plane, sphere.center)) <= sphere.radius


@ti.func
def plane_apply_matrix4_with_normal_matrix(plane: Plane, m: ti.math.mat4, nm: ti.math.mat3) -> Plane:
    """Transform the plane by ``m`` using a precomputed normal matrix ``nm``.

    Useful when many planes share one transform (e.g. frustum planes).
    """
    reference_point = transform_point(m, plane_coplanar_point(plane))
    normal = tm.normalize(nm @ plane.normal)
    return Plane(normal=normal, constant=-tm.dot(reference_point, normal))


@ti.func
def plane_apply_matrix4(plane: Plane, m: ti.math.mat4) -> Plane:
    """Transform the plane by ``m``.

    The normal is carried by the inverse-transpose of the upper 3x3 block, so
    non-uniform scales keep it perpendicular to the plane.
    """
    return plane_apply_matrix4_with_normal_matrix(plane, m, normal_matrix(m))


@ti.func
def plane_translate(plane: Plane, offset: vec3) -> Plane:
    return Plane(normal=plane.normal, constant=plane.constant - tm.dot(offset, plane.normal))


@ti.func
def plane_equals(plane: Plane, other: Plane) -> ti.i32:
    return vec_equals(plane.normal, other.normal) and plane.constant == other.constant
