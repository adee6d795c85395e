"""Axis-aligned box queries, including the box/triangle separating-axis test.

Boxes are closed: points and boxes touching the boundary count as contained
and as intersecting. Every query takes its operands by value and returns a
new value; "mutating" operations such as box_expand_by_point() or
box_intersect() return the updated box.

The box/triangle test implements the Separating Axis Theorem over 13
candidate axes: the 9 cross products of the box face normals with the
triangle edges, the 3 box face normals, and the triangle normal. The box is
moved to the origin first so its projection onto any axis is the symmetric
interval [-r, r] with r = sum(extent_i * |axis_i|). Degenerate (zero-length)
cross-product axes are tested as-is; a zero axis projects everything to 0 and
never separates.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spatial.geometry.box import make_box, box_intersects_triangle
    >>> # Use box_intersects_triangle(make_box(lo, hi), tri) within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.spatial.core.vector import distance_squared, transform_point, vec_equals

from .primitives import Box3, Plane, Sphere, Triangle

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

_INF = float("inf")


@ti.func
def make_box(min_corner: vec3, max_corner: vec3) -> Box3:
    """Create a box from explicit min and max corners."""
    return Box3(min=min_corner, max=max_corner)


@ti.func
def make_empty_box() -> Box3:
    """Create the canonical empty box (min = +inf, max = -inf)."""
    return Box3(min=vec3(_INF, _INF, _INF), max=vec3(-_INF, -_INF, -_INF))


@ti.func
def box_from_center_and_size(center: vec3, size: vec3) -> Box3:
    """Create a box centered on ``center`` with the given full dimensions."""
    half_size = size * 0.5
    return Box3(min=center - half_size, max=center + half_size)


@ti.func
def box_from_points3(a: vec3, b: vec3, c: vec3) -> Box3:
    """Create the tightest box containing three points."""
    return Box3(min=ti.min(a, ti.min(b, c)), max=ti.max(a, ti.max(b, c)))


@ti.func
def box_from_points(points: ti.template()) -> Box3:
    """Create the tightest box containing every entry of a vector field.

    Args:
        points: A ti.Vector.field(3, ...) of positions, e.g. from
            triangle.load_points().

    Returns:
        The bounding box of the points. A field with one entry gives the
        single-point box.
    """
    result = make_empty_box()
    # accumulates into one local, so the loop must stay serial even when
    # inlined at the outermost scope of a kernel
    ti.loop_config(serialize=True)
    for i in range(points.shape[0]):
        result = box_expand_by_point(result, points[i])
    return result


@ti.func
def box_is_empty(box: Box3) -> ti.i32:
    """Check if the box contains no points.

    A box whose min equals its max contains exactly one point and is not
    empty.
    """
    return box.max.x < box.min.x or box.max.y < box.min.y or box.max.z < box.min.z


@ti.func
def box_get_center(box: Box3) -> vec3:
    """Return the box center, or (0, 0, 0) for an empty box."""
    center = vec3(0.0, 0.0, 0.0)
    if not box_is_empty(box):
        center = (box.min + box.max) * 0.5
    return center


@ti.func
def box_get_size(box: Box3) -> vec3:
    """Return the box dimensions, or (0, 0, 0) for an empty box."""
    size = vec3(0.0, 0.0, 0.0)
    if not box_is_empty(box):
        size = box.max - box.min
    return size


@ti.func
def box_expand_by_point(box: Box3, point: vec3) -> Box3:
    """Grow the box so that it contains ``point``."""
    return Box3(min=ti.min(box.min, point), max=ti.max(box.max, point))


@ti.func
def box_expand_by_vector(box: Box3, v: vec3) -> Box3:
    """Grow the box by v.x, v.y, v.z in both directions along each axis."""
    return Box3(min=box.min - v, max=box.max + v)


@ti.func
def box_expand_by_scalar(box: Box3, s: ti.f32) -> Box3:
    """Grow every side of the box by ``s`` (shrink if negative)."""
    return Box3(min=box.min - s, max=box.max + s)


@ti.func
def box_contains_point(box: Box3, point: vec3) -> ti.i32:
    """Check if ``point`` lies inside or on the boundary of the box."""
    return not (
        point.x < box.min.x
        or point.x > box.max.x
        or point.y < box.min.y
        or point.y > box.max.y
        or point.z < box.min.z
        or point.z > box.max.z
    )


@ti.func
def box_contains_box(box: Box3, other: Box3) -> ti.i32:
    """Check if ``other`` lies entirely inside ``box`` (identical boxes count)."""
    return (
        box.min.x <= other.min.x
        and other.max.x <= box.max.x
        and box.min.y <= other.min.y
        and other.max.y <= box.max.y
        and box.min.z <= other.min.z
        and other.max.z <= box.max.z
    )


@ti.func
def box_get_parameter(box: Box3, point: vec3) -> vec3:
    """Express ``point`` as a fraction of the box's extent along each axis.

    A box with zero size along an axis divides by zero on that axis.
    """
    return (point - box.min) / (box.max - box.min)


@ti.func
def box_intersects_box(box: Box3, other: Box3) -> ti.i32:
    """Check if two boxes overlap (touching counts)."""
    # Six splitting planes rule out an intersection
    return not (
        other.max.x < box.min.x
        or other.min.x > box.max.x
        or other.max.y < box.min.y
        or other.min.y > box.max.y
        or other.max.z < box.min.z
        or other.min.z > box.max.z
    )


@ti.func
def box_clamp_point(box: Box3, point: vec3) -> vec3:
    """Return the point of the box closest to ``point``."""
    return tm.clamp(point, box.min, box.max)


@ti.func
def box_distance_to_point(box: Box3, point: vec3) -> ti.f32:
    """Distance from ``point`` to the box; 0 if the point is inside."""
    return tm.length(box_clamp_point(box, point) - point)


@ti.func
def box_intersects_sphere(box: Box3, sphere: Sphere) -> ti.i32:
    """Check if the box overlaps any part of ``sphere``.

    The box point closest to the sphere center is inside the sphere iff the
    two shapes intersect. An empty sphere intersects nothing.
    """
    closest = box_clamp_point(box, sphere.center)
    return sphere.radius >= 0.0 and distance_squared(closest, sphere.center) <= sphere.radius * sphere.radius


@ti.func
def box_intersects_plane(box: Box3, plane: Plane) -> ti.i32:
    """Check if the plane passes through the box.

    Projects the box onto the plane normal by picking, per axis, whichever
    corner extends the interval in the direction of the normal's sign. The
    plane intersects iff -constant lies in the resulting [lo, hi].
    """
    lo = 0.0
    hi = 0.0
    for i in ti.static(range(3)):
        if plane.normal[i] > 0.0:
            lo += plane.normal[i] * box.min[i]
            hi += plane.normal[i] * box.max[i]
        else:
            lo += plane.normal[i] * box.max[i]
            hi += plane.normal[i] * box.min[i]
    return lo <= -plane.constant and hi >= -plane.constant


@ti.func
def _axis_separates(axis: vec3, v0: vec3, v1: vec3, v2: vec3, extents: vec3) -> ti.i32:
    """Check if ``axis`` separates an origin-centered box from a triangle.

    Args:
        axis: Candidate separating axis (need not be unit length).
        v0: First triangle corner, relative to the box center.
        v1: Second triangle corner, relative to the box center.
        v2: Third triangle corner, relative to the box center.
        extents: Half-size of the box.

    Returns:
        1 if the projected triangle lies entirely outside [-r, r].
    """
    r = extents.x * ti.abs(axis.x) + extents.y * ti.abs(axis.y) + extents.z * ti.abs(axis.z)
    p0 = tm.dot(v0, axis)
    p1 = tm.dot(v1, axis)
    p2 = tm.dot(v2, axis)
    p_max = ti.max(p0, ti.max(p1, p2))
    p_min = ti.min(p0, ti.min(p1, p2))
    return ti.max(-p_max, p_min) > r


@ti.func
def _edge_axes_separate(edge: vec3, v0: vec3, v1: vec3, v2: vec3, extents: vec3) -> ti.i32:
    """Test the three axes x/y/z cross ``edge``."""
    separated = 0
    if _axis_separates(vec3(0.0, -edge.z, edge.y), v0, v1, v2, extents):
        separated = 1
    if _axis_separates(vec3(edge.z, 0.0, -edge.x), v0, v1, v2, extents):
        separated = 1
    if _axis_separates(vec3(-edge.y, edge.x, 0.0), v0, v1, v2, extents):
        separated = 1
    return separated


@ti.func
def box_intersects_triangle(box: Box3, triangle: Triangle) -> ti.i32:
    """Check if the box overlaps the triangle anywhere.

    An empty box never intersects. All 13 candidate axes are tested; the
    shapes intersect iff none of them separates.
    """
    separated = 1
    if not box_is_empty(box):
        center = box_get_center(box)
        extents = box.max - center

        v0 = triangle.a - center
        v1 = triangle.b - center
        v2 = triangle.c - center

        f0 = v1 - v0
        f1 = v2 - v1
        f2 = v0 - v2

        separated = 0

        # box face normals crossed with triangle edges
        if _edge_axes_separate(f0, v0, v1, v2, extents):
            separated = 1
        if _edge_axes_separate(f1, v0, v1, v2, extents):
            separated = 1
        if _edge_axes_separate(f2, v0, v1, v2, extents):
            separated = 1

        # box face normals
        if _axis_separates(vec3(1.0, 0.0, 0.0), v0, v1, v2, extents):
            separated = 1
        if _axis_separates(vec3(0.0, 1.0, 0.0), v0, v1, v2, extents):
            separated = 1
        if _axis_separates(vec3(0.0, 0.0, 1.0), v0, v1, v2, extents):
            separated = 1

        # triangle face normal
        if _axis_separates(tm.cross(f0, f1), v0, v1, v2, extents):
            separated = 1

    return not separated


@ti.func
def box_get_bounding_sphere(box: Box3) -> Sphere:
    """Return the sphere through the box corners.

    The radius is half the box diagonal. An empty box yields a zero-radius
    sphere at the origin.
    """
    return Sphere(center=box_get_center(box), radius=tm.length(box_get_size(box)) * 0.5)


@ti.func
def box_intersect(box: Box3, other: Box3) -> Box3:
    """Return the overlap of two boxes, or the empty box if they are disjoint."""
    result = Box3(min=ti.max(box.min, other.min), max=ti.min(box.max, other.max))
    if box_is_empty(result):
        result = make_empty_box()
    return result


@ti.func
def box_union(box: Box3, other: Box3) -> Box3:
    """Return the smallest box containing both boxes."""
    return Box3(min=ti.min(box.min, other.min), max=ti.max(box.max, other.max))


@ti.func
def box_translate(box: Box3, offset: vec3) -> Box3:
    """Move the box by ``offset``."""
    return Box3(min=box.min + offset, max=box.max + offset)


@ti.func
def box_apply_matrix4(box: Box3, m: ti.math.mat4) -> Box3:
    """Re-bound the box after transforming it by ``m``.

    All 8 corners are transformed and a new axis-aligned box is fitted
    around them. This is exact for translations and scales and conservative
    under rotation and shear. An empty box stays empty.
    """
    result = box
    if not box_is_empty(box):
        lo = box.min
        hi = box.max
        # corners enumerated as (x, y, z) bit patterns, 0 = min, 1 = max
        result = make_empty_box()
        result = box_expand_by_point(result, transform_point(m, vec3(lo.x, lo.y, lo.z)))  # 000
        result = box_expand_by_point(result, transform_point(m, vec3(lo.x, lo.y, hi.z)))  # 001
        result = box_expand_by_point(result, transform_point(m, vec3(lo.x, hi.y, lo.z)))  # 010
        result = box_expand_by_point(result, transform_point(m, vec3(lo.x, hi.y, hi.z)))  # 011
        result = box_expand_by_point(result, transform_point(m, vec3(hi.x, lo.y, lo.z)))  # 100
        result = box_expand_by_point(result, transform_point(m, vec3(hi.x, lo.y, hi.z)))  # 101
        result = box_expand_by_point(result, transform_point(m, vec3(hi.x, hi.y, lo.z)))  # 110
        result = box_expand_by_point(result, transform_point(m, vec3(hi.x, hi.y, hi.z)))  # 111
    return result


@ti.func
def box_equals(box: Box3, other: Box3) -> ti.i32:
    """Check if two boxes have exactly the same corners."""
    return vec_equals(box.min, other.min) and vec_equals(box.max, other.max)
