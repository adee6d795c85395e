"""Ray queries: closest points, distances and intersections.

A ray is origin + t * direction for t >= 0. The direction is expected to be
unit length; distances and the ``t`` reported by intersection queries are
only metric for unit directions.

Intersection queries return a HitRecord whose ``t`` is the ray parameter of
the hit and whose ``point`` is ray_at(ray, t). Hits behind the origin are
misses. When the origin is inside a sphere or box the exit point in front of
the origin is reported.

The ray/box slab test divides by the direction components. It relies on
IEEE semantics: 1/0 gives +/-inf and 0 * inf gives NaN, which the slab
update skips explicitly. Initialise Taichi with ``fast_math=False`` (the
RuntimeConfig default) so these values survive compilation.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> from src.spatial.geometry.ray import make_ray, ray_intersect_box
    >>> # Use ray_intersect_box(make_ray(o, d), box) within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.spatial.core.records import HitRecord, make_hit_record, make_miss_record
from src.spatial.core.vector import distance_squared, transform_direction, transform_point, vec_equals

from .plane import plane_distance_to_point
from .primitives import Box3, Plane, Ray, Sphere

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction.

    This is a convenience function for creating rays within Taichi kernels.

    Args:
        origin: The starting point of the ray.
        direction: The direction vector (should be normalized).

    Returns:
        A new Ray instance.
    """
    return Ray(origin=origin, direction=direction)


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def ray_look_at(ray: Ray, target: vec3) -> Ray:
    """Return the ray re-aimed from its origin towards ``target``."""
    return Ray(origin=ray.origin, direction=tm.normalize(target - ray.origin))


@ti.func
def ray_recast(ray: Ray, t: ti.f32) -> Ray:
    """Return the ray with its origin moved to ray_at(ray, t)."""
    return Ray(origin=ray_at(ray, t), direction=ray.direction)


@ti.func
def ray_closest_point_to_point(ray: Ray, point: vec3) -> vec3:
    """Point of the ray closest to ``point``.

    Points behind the origin map to the origin itself.
    """
    direction_distance = tm.dot(point - ray.origin, ray.direction)
    result = ray.origin
    if direction_distance >= 0.0:
        result = ray_at(ray, direction_distance)
    return result


@ti.func
def ray_distance_sq_to_point(ray: Ray, point: vec3) -> ti.f32:
    return distance_squared(ray_closest_point_to_point(ray, point), point)


@ti.func
def ray_distance_to_point(ray: Ray, point: vec3) -> ti.f32:
    return ti.sqrt(ray_distance_sq_to_point(ray, point))


@ti.func
def ray_distance_sq_to_segment(ray: Ray, v0: vec3, v1: vec3):
    """Squared distance between the ray and the segment from v0 to v1.

    Minimises |origin + s0 * direction - (center + s1 * seg_dir)|^2 over
    s0 >= 0 and s1 in [-extent, extent], where center, seg_dir and extent are
    the segment's midpoint, unit direction and half length. The quadratic's
    unconstrained minimum is classified against the constraint region into
    seven cases (regions 0 to 5 plus the parallel case), following the
    Geometric Tools ray/segment distance query.

    Args:
        ray: The ray (unit direction).
        v0: Segment start.
        v1: Segment end.

    Returns:
        A tuple (sq_dist, point_on_ray, point_on_segment) with the closest
        pair of points.
    """
    seg_center = (v0 + v1) * 0.5
    seg_dir = tm.normalize(v1 - v0)
    diff = ray.origin - seg_center

    seg_extent = tm.length(v1 - v0) * 0.5
    a01 = -tm.dot(ray.direction, seg_dir)
    b0 = tm.dot(diff, ray.direction)
    b1 = -tm.dot(diff, seg_dir)
    c = tm.dot(diff, diff)
    det = ti.abs(1.0 - a01 * a01)

    s0 = 0.0
    s1 = 0.0
    sq_dist = 0.0

    if det > 0.0:
        # not parallel
        s0 = a01 * b1 - b0
        s1 = a01 * b0 - b1
        ext_det = seg_extent * det

        if s0 >= 0.0:
            if s1 >= -ext_det:
                if s1 <= ext_det:
                    # region 0: interior of both ray and segment
                    inv_det = 1.0 / det
                    s0 *= inv_det
                    s1 *= inv_det
                    sq_dist = s0 * (s0 + a01 * s1 + 2.0 * b0) + s1 * (a01 * s0 + s1 + 2.0 * b1) + c
                else:
                    # region 1
                    s1 = seg_extent
                    s0 = ti.max(0.0, -(a01 * s1 + b0))
                    sq_dist = -s0 * s0 + s1 * (s1 + 2.0 * b1) + c
            else:
                # region 5
                s1 = -seg_extent
                s0 = ti.max(0.0, -(a01 * s1 + b0))
                sq_dist = -s0 * s0 + s1 * (s1 + 2.0 * b1) + c
        elif s1 <= -ext_det:
            # region 4
            s0 = ti.max(0.0, -(-a01 * seg_extent + b0))
            s1 = tm.clamp(-b1, -seg_extent, seg_extent)
            if s0 > 0.0:
                s1 = -seg_extent
            sq_dist = -s0 * s0 + s1 * (s1 + 2.0 * b1) + c
        elif s1 <= ext_det:
            # region 3
            s0 = 0.0
            s1 = tm.clamp(-b1, -seg_extent, seg_extent)
            sq_dist = s1 * (s1 + 2.0 * b1) + c
        else:
            # region 2
            s0 = ti.max(0.0, -(a01 * seg_extent + b0))
            s1 = tm.clamp(-b1, -seg_extent, seg_extent)
            if s0 > 0.0:
                s1 = seg_extent
            sq_dist = -s0 * s0 + s1 * (s1 + 2.0 * b1) + c
    else:
        # parallel: the nearer endpoint along the ray direction
        s1 = seg_extent
        if a01 > 0.0:
            s1 = -seg_extent
        s0 = ti.max(0.0, -(a01 * s1 + b0))
        sq_dist = -s0 * s0 + s1 * (s1 + 2.0 * b1) + c

    point_on_ray = ray_at(ray, s0)
    point_on_segment = seg_center + seg_dir * s1
    return sq_dist, point_on_ray, point_on_segment


@ti.func
def ray_intersect_sphere(ray: Ray, sphere: Sphere) -> HitRecord:
    """Intersect the ray with a sphere.

    Returns the entry point, or the exit point if the origin is inside the
    sphere. Misses if both roots lie behind the origin, and always misses an
    empty sphere.
    """
    to_center = sphere.center - ray.origin
    tca = tm.dot(to_center, ray.direction)
    d2 = tm.dot(to_center, to_center) - tca * tca
    radius2 = sphere.radius * sphere.radius

    result = make_miss_record()
    if sphere.radius >= 0.0 and d2 <= radius2:
        thc = ti.sqrt(radius2 - d2)
        t0 = tca - thc
        t1 = tca + thc
        if t0 >= 0.0:
            result = make_hit_record(t0, ray_at(ray, t0))
        elif t1 >= 0.0:
            # origin inside the sphere
            result = make_hit_record(t1, ray_at(ray, t1))
    return result


@ti.func
def ray_intersects_sphere(ray: Ray, sphere: Sphere) -> ti.i32:
    return sphere.radius >= 0.0 and ray_distance_sq_to_point(ray, sphere.center) <= sphere.radius * sphere.radius


@ti.func
def ray_distance_to_plane(ray: Ray, plane: Plane) -> HitRecord:
    """Distance along the ray to the plane.

    A ray parallel to the plane hits at distance 0 if its origin lies exactly
    on the plane and misses otherwise.

    Returns:
        A HitRecord whose t is the distance (for a unit direction) and whose
        point is the hit point.
    """
    denominator = tm.dot(plane.normal, ray.direction)

    result = make_miss_record()
    if denominator == 0.0:
        if plane_distance_to_point(plane, ray.origin) == 0.0:
            result = make_hit_record(0.0, ray.origin)
    else:
        t = -(tm.dot(ray.origin, plane.normal) + plane.constant) / denominator
        if t >= 0.0:
            result = make_hit_record(t, ray_at(ray, t))
    return result


@ti.func
def ray_intersect_plane(ray: Ray, plane: Plane) -> HitRecord:
    return ray_distance_to_plane(ray, plane)


@ti.func
def ray_intersects_plane(ray: Ray, plane: Plane) -> ti.i32:
    """Check if the ray reaches the plane.

    True if the origin lies on the plane or the direction points from the
    origin's side towards the plane.
    """
    dist_to_point = plane_distance_to_point(plane, ray.origin)
    denominator = tm.dot(plane.normal, ray.direction)
    return dist_to_point == 0.0 or denominator * dist_to_point < 0.0


@ti.func
def _slab(lo: ti.f32, hi: ti.f32, origin: ti.f32, inv_dir: ti.f32):
    """Entry and exit parameters of one slab, ordered by the direction sign."""
    t_lo = (lo - origin) * inv_dir
    t_hi = (hi - origin) * inv_dir
    t_near = t_lo
    t_far = t_hi
    if inv_dir < 0.0:
        t_near = t_hi
        t_far = t_lo
    return t_near, t_far


@ti.func
def ray_intersect_box(ray: Ray, box: Box3) -> HitRecord:
    """Intersect the ray with a box using the slab method.

    A direction component of 0 gives an infinite inverse. For an origin
    exactly on that slab's boundary the slab parameters are NaN and the slab
    is skipped instead of poisoning tmin/tmax.
    """
    inv_dir = 1.0 / ray.direction

    tmin, tmax = _slab(box.min.x, box.max.x, ray.origin.x, inv_dir.x)
    tymin, tymax = _slab(box.min.y, box.max.y, ray.origin.y, inv_dir.y)
    tzmin, tzmax = _slab(box.min.z, box.max.z, ray.origin.z, inv_dir.z)

    missed = 0
    if tmin > tymax or tymin > tmax:
        missed = 1
    else:
        if tymin > tmin or tm.isnan(tmin):
            tmin = tymin
        if tymax < tmax or tm.isnan(tmax):
            tmax = tymax

        if tmin > tzmax or tzmin > tmax:
            missed = 1
        else:
            if tzmin > tmin or tm.isnan(tmin):
                tmin = tzmin
            if tzmax < tmax or tm.isnan(tmax):
                tmax = tzmax

    result = make_miss_record()
    # tmax < 0: the box is behind the ray
    if missed == 0 and tmax >= 0.0:
        t = tmax
        if tmin >= 0.0:
            t = tmin
        result = make_hit_record(t, ray_at(ray, t))
    return result


@ti.func
def ray_intersects_box(ray: Ray, box: Box3) -> ti.i32:
    return ray_intersect_box(ray, box).hit


@ti.func
def ray_intersect_triangle(ray: Ray, a: vec3, b: vec3, c: vec3, backface_culling: ti.i32) -> HitRecord:
    """Intersect the ray with the triangle (a, b, c).

    Solves origin + t * direction = a + b1 * (b - a) + b2 * (c - a) with the
    Geometric Tools formulation, scaling every term by |dot(D, N)| so no
    division happens until the hit is confirmed.

    Args:
        ray: The ray.
        a: First corner.
        b: Second corner.
        c: Third corner.
        backface_culling: If non-zero, triangles whose normal
            cross(b - a, c - a) faces along the ray direction are skipped.

    Returns:
        A HitRecord. Rays parallel to the triangle's plane always miss.
    """
    edge1 = b - a
    edge2 = c - a
    normal = tm.cross(edge1, edge2)

    ddn = tm.dot(ray.direction, normal)
    sign = 0.0
    if ddn > 0.0:
        if not backface_culling:
            sign = 1.0
    elif ddn < 0.0:
        sign = -1.0
        ddn = -ddn

    result = make_miss_record()
    if sign != 0.0:
        diff = ray.origin - a
        ddqxe2 = sign * tm.dot(ray.direction, tm.cross(diff, edge2))
        dde1xq = sign * tm.dot(ray.direction, tm.cross(edge1, diff))
        qdn = -sign * tm.dot(diff, normal)
        # b1 >= 0, b2 >= 0, b1 + b2 <= 1 and t >= 0
        if ddqxe2 >= 0.0 and dde1xq >= 0.0 and ddqxe2 + dde1xq <= ddn and qdn >= 0.0:
            t = qdn / ddn
            result = make_hit_record(t, ray_at(ray, t))
    return result


@ti.func
def ray_apply_matrix4(ray: Ray, m: ti.math.mat4) -> Ray:
    """Transform the ray by ``m``; the direction is re-normalized."""
    return Ray(origin=transform_point(m, ray.origin), direction=transform_direction(m, ray.direction))


@ti.func
def ray_equals(ray: Ray, other: Ray) -> ti.i32:
    return vec_equals(ray.origin, other.origin) and vec_equals(ray.direction, other.direction)
