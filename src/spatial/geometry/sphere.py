"""Sphere queries: containment, distances, bounds and incremental growth.

A sphere with a negative radius is empty and contains no points; a sphere of
radius 0 contains only its center.

Growth follows the incremental minimal-enclosing-sphere update: when a point
lies outside, the center moves halfway towards it and the radius grows by the
same amount, instead of keeping the center fixed and growing the radius by the
whole missing distance. sphere_union() encloses the other sphere by expanding
towards the two points of its surface on the center-to-center axis, so a
sphere that already contains the other one is left unchanged.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spatial.geometry.sphere import make_sphere, sphere_union
    >>> # Use sphere_union(make_sphere(c0, r0), make_sphere(c1, r1)) within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.spatial.core.vector import distance_squared, max_scale_on_axis, transform_point, vec_equals

from .box import box_from_points, box_from_points3, box_get_center, box_intersects_sphere, make_empty_box
from .plane import plane_intersects_sphere
from .primitives import EMPTY_SPHERE_RADIUS, Box3, Plane, Sphere

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius.

    This is a convenience function for creating spheres within Taichi kernels.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (negative for an empty sphere).

    Returns:
        A new Sphere instance.
    """
    return Sphere(center=center, radius=radius)


@ti.func
def make_empty_sphere() -> Sphere:
    """Create an empty sphere (center at the origin, radius -1)."""
    return Sphere(center=vec3(0.0, 0.0, 0.0), radius=EMPTY_SPHERE_RADIUS)


@ti.func
def sphere_from_points3(a: vec3, b: vec3, c: vec3) -> Sphere:
    """Create a sphere enclosing three points.

    The center is the center of the points' bounding box and the radius the
    distance to the farthest point. This is not the minimal sphere.
    """
    center = box_get_center(box_from_points3(a, b, c))
    return sphere_from_center_and_points3(center, a, b, c)


@ti.func
def sphere_from_center_and_points3(center: vec3, a: vec3, b: vec3, c: vec3) -> Sphere:
    """Create the smallest sphere around a fixed center enclosing three points."""
    max_radius_sq = ti.max(
        distance_squared(center, a),
        ti.max(distance_squared(center, b), distance_squared(center, c)),
    )
    return Sphere(center=center, radius=ti.sqrt(max_radius_sq))


@ti.func
def sphere_from_points(points: ti.template()) -> Sphere:
    """Create a sphere enclosing every entry of a vector field.

    Like sphere_from_points3(), the center is the center of the points'
    bounding box, so the result is not the minimal enclosing sphere.
    """
    center = box_get_center(box_from_points(points))
    return sphere_from_center_and_points(center, points)


@ti.func
def sphere_from_center_and_points(center: vec3, points: ti.template()) -> Sphere:
    """Create the smallest sphere around a fixed center enclosing a field of points.

    Args:
        center: The sphere center.
        points: A ti.Vector.field(3, ...) of positions.

    Returns:
        A sphere at ``center`` whose radius is the distance to the farthest
        point.
    """
    max_radius_sq = 0.0
    ti.loop_config(serialize=True)
    for i in range(points.shape[0]):
        max_radius_sq = ti.max(max_radius_sq, distance_squared(center, points[i]))
    return Sphere(center=center, radius=ti.sqrt(max_radius_sq))


@ti.func
def sphere_is_empty(sphere: Sphere) -> ti.i32:
    return sphere.radius < 0.0


@ti.func
def sphere_contains_point(sphere: Sphere, point: vec3) -> ti.i32:
    """Check if ``point`` lies inside or on the sphere; an empty sphere contains nothing."""
    return sphere.radius >= 0.0 and distance_squared(point, sphere.center) <= sphere.radius * sphere.radius


@ti.func
def sphere_distance_to_point(sphere: Sphere, point: vec3) -> ti.f32:
    """Signed distance from the sphere surface; negative inside."""
    return tm.length(point - sphere.center) - sphere.radius


@ti.func
def sphere_intersects_sphere(sphere: Sphere, other: Sphere) -> ti.i32:
    """Check if two spheres overlap (touching counts). Empty spheres never overlap."""
    radius_sum = sphere.radius + other.radius
    return (
        sphere.radius >= 0.0
        and other.radius >= 0.0
        and distance_squared(other.center, sphere.center) <= radius_sum * radius_sum
    )


@ti.func
def sphere_intersects_box(sphere: Sphere, box: Box3) -> ti.i32:
    return box_intersects_sphere(box, sphere)


@ti.func
def sphere_intersects_plane(sphere: Sphere, plane: Plane) -> ti.i32:
    return plane_intersects_sphere(plane, sphere)


@ti.func
def sphere_clamp_point(sphere: Sphere, point: vec3) -> vec3:
    """Return ``point`` if inside the sphere, else its projection onto the surface."""
    result = point
    if distance_squared(sphere.center, point) > sphere.radius * sphere.radius:
        result = tm.normalize(point - sphere.center) * sphere.radius + sphere.center
    return result


@ti.func
def sphere_get_bounding_box(sphere: Sphere) -> Box3:
    """Return center +/- radius on every axis; an empty sphere gives an empty box."""
    result = make_empty_box()
    if not sphere_is_empty(sphere):
        result = Box3(min=sphere.center - sphere.radius, max=sphere.center + sphere.radius)
    return result


@ti.func
def sphere_apply_matrix4(sphere: Sphere, m: ti.math.mat4) -> Sphere:
    """Transform the sphere by ``m``.

    A sphere cannot represent a non-uniform scale exactly, so the radius is
    scaled by the largest per-axis scale factor.
    """
    return Sphere(center=transform_point(m, sphere.center), radius=sphere.radius * max_scale_on_axis(m))


@ti.func
def sphere_translate(sphere: Sphere, offset: vec3) -> Sphere:
    return Sphere(center=sphere.center + offset, radius=sphere.radius)


@ti.func
def sphere_expand_by_point(sphere: Sphere, point: vec3) -> Sphere:
    """Grow the sphere to contain ``point``.

    Interior points leave the sphere unchanged. For an outside point, half the
    missing distance moves the center towards the point and the other half is
    added to the radius. An empty sphere becomes the zero-radius sphere at
    ``point``.
    """
    result = sphere
    if sphere_is_empty(sphere):
        result = Sphere(center=point, radius=0.0)
    else:
        to_point = point - sphere.center
        length_sq = tm.dot(to_point, to_point)
        if length_sq > sphere.radius * sphere.radius:
            length = ti.sqrt(length_sq)
            missing_radius_half = (length - sphere.radius) * 0.5
            result = Sphere(
                center=sphere.center + to_point * (missing_radius_half / length),
                radius=sphere.radius + missing_radius_half,
            )
    return result


@ti.func
def sphere_union(sphere: Sphere, other: Sphere) -> Sphere:
    """Grow the sphere to enclose all of ``other``.

    Expands by the point of ``other`` farthest along the center-to-center
    axis and by the point directly opposite it. Enclosing both encloses the
    whole sphere.
    """
    result = sphere
    if sphere_is_empty(other):
        result = sphere
    elif sphere_is_empty(sphere):
        result = other
    elif vec_equals(sphere.center, other.center):
        # no center-to-center axis; concentric spheres nest
        result = Sphere(center=sphere.center, radius=ti.max(sphere.radius, other.radius))
    else:
        to_farthest_point = tm.normalize(other.center - sphere.center) * other.radius
        result = sphere_expand_by_point(result, other.center + to_farthest_point)
        result = sphere_expand_by_point(result, other.center - to_farthest_point)
    return result


@ti.func
def sphere_equals(sphere: Sphere, other: Sphere) -> ti.i32:
    return vec_equals(sphere.center, other.center) and sphere.radius == other.radius
