"""Triangle queries: barycentric coordinates, containment and closest points.

The corner order (a, b, c) fixes the winding. The normal is
normalize(cross(c - b, a - b)) and a triangle is front facing towards a view
direction d iff dot(cross(c - b, a - b), d) < 0.

Degenerate triangles (collinear or coincident corners) never raise: their
area is 0, their normal is the zero vector and their barycentric coordinates
are the sentinel (-2, -1, -1), which lies outside every triangle.

triangle_closest_point_to_point() classifies the query point against the
seven Voronoi regions of the triangle (three vertices, three edges, the
face) following Ericson, "Real-Time Collision Detection", section 5.1.5.
Regions are tested in order and each test reuses the dot products of the
previous ones.
"""

import logging

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.spatial.core.vector import safe_normalize, vec_equals

from .box import box_intersects_triangle
from .plane import plane_from_coplanar_points
from .primitives import Box3, Plane, Triangle

logger = logging.getLogger(__name__)

# Type aliases using Taichi's math module
vec2 = tm.vec2
vec3 = tm.vec3


@ti.func
def make_triangle(a: vec3, b: vec3, c: vec3) -> Triangle:
    """Create a triangle from three corners."""
    return Triangle(a=a, b=b, c=c)


@ti.func
def triangle_from_points_and_indices(points: ti.template(), i0: ti.i32, i1: ti.i32, i2: ti.i32) -> Triangle:
    """Create a triangle from three entries of a vector field of points.

    Args:
        points: A ti.Vector.field(3, ...) of corner positions.
        i0: Index of corner a.
        i1: Index of corner b.
        i2: Index of corner c.

    Returns:
        The triangle (points[i0], points[i1], points[i2]).
    """
    return Triangle(a=points[i0], b=points[i1], c=points[i2])


def load_points(points: npt.ArrayLike) -> ti.MatrixField:
    """Copy an (N, 3) array of positions into a new Taichi vector field.

    The field can be passed to triangle_from_points_and_indices() from
    inside a kernel.

    Args:
        points: Array-like of shape (N, 3).

    Returns:
        A ti.Vector.field(3, dtype=ti.f32, shape=N) holding the points.

    Raises:
        ValueError: If the array is empty or not of shape (N, 3).
    """
    array = np.asarray(points, dtype=np.float32)
    if array.ndim != 2 or array.shape[1] != 3:
        raise ValueError(f"Expected an (N, 3) array of points, got shape {array.shape}")
    if array.shape[0] == 0:
        raise ValueError("Cannot load an empty point array")

    field = ti.Vector.field(3, dtype=ti.f32, shape=array.shape[0])
    field.from_numpy(array)
    logger.debug("Loaded %d points into a vector field", array.shape[0])
    return field


@ti.func
def triangle_normal_of(a: vec3, b: vec3, c: vec3) -> vec3:
    """Unit normal of the triangle (a, b, c), or zero if degenerate."""
    return safe_normalize(tm.cross(c - b, a - b))


@ti.func
def triangle_barycoord_of(point: vec3, a: vec3, b: vec3, c: vec3) -> vec3:
    """Barycentric coordinates of ``point`` with respect to (a, b, c).

    The point is projected onto the triangle's plane implicitly. Based on the
    2x2 system from the edge dot products; a singular system (collinear
    corners) returns (-2, -1, -1) instead of dividing by zero.

    Returns:
        The weights of (a, b, c), summing to 1.
    """
    v0 = c - a
    v1 = b - a
    v2 = point - a

    dot00 = tm.dot(v0, v0)
    dot01 = tm.dot(v0, v1)
    dot02 = tm.dot(v0, v2)
    dot11 = tm.dot(v1, v1)
    dot12 = tm.dot(v1, v2)

    denom = dot00 * dot11 - dot01 * dot01

    # sentinel for degenerate triangles; lies outside every triangle
    result = vec3(-2.0, -1.0, -1.0)
    if denom != 0.0:
        inv_denom = 1.0 / denom
        u = (dot11 * dot02 - dot01 * dot12) * inv_denom
        v = (dot00 * dot12 - dot01 * dot02) * inv_denom
        result = vec3(1.0 - u - v, v, u)
    return result


@ti.func
def triangle_get_area(triangle: Triangle) -> ti.f32:
    return tm.length(tm.cross(triangle.c - triangle.b, triangle.a - triangle.b)) * 0.5


@ti.func
def triangle_get_midpoint(triangle: Triangle) -> vec3:
    """Centroid of the triangle."""
    return (triangle.a + triangle.b + triangle.c) / 3.0


@ti.func
def triangle_get_normal(triangle: Triangle) -> vec3:
    return triangle_normal_of(triangle.a, triangle.b, triangle.c)


@ti.func
def triangle_get_plane(triangle: Triangle) -> Plane:
    return plane_from_coplanar_points(triangle.a, triangle.b, triangle.c)


@ti.func
def triangle_get_barycoord(triangle: Triangle, point: vec3) -> vec3:
    return triangle_barycoord_of(point, triangle.a, triangle.b, triangle.c)


@ti.func
def triangle_get_uv(triangle: Triangle, point: vec3, uv1: vec2, uv2: vec2, uv3: vec2) -> vec2:
    """Interpolate per-corner 2D attributes (e.g. texture coordinates) at ``point``."""
    bary = triangle_get_barycoord(triangle, point)
    return uv1 * bary.x + uv2 * bary.y + uv3 * bary.z


@ti.func
def triangle_contains_point(triangle: Triangle, point: vec3) -> ti.i32:
    """Check if ``point`` projects inside the closed triangle (edges included)."""
    bary = triangle_get_barycoord(triangle, point)
    return bary.x >= 0.0 and bary.y >= 0.0 and bary.x + bary.y <= 1.0


@ti.func
def triangle_is_front_facing(triangle: Triangle, direction: vec3) -> ti.i32:
    """Check if the triangle faces against ``direction``.

    Strict: an edge-on triangle (direction in its plane) is not front facing.
    """
    n = tm.cross(triangle.c - triangle.b, triangle.a - triangle.b)
    return tm.dot(n, direction) < 0.0


@ti.func
def triangle_intersects_box(triangle: Triangle, box: Box3) -> ti.i32:
    return box_intersects_triangle(box, triangle)


@ti.func
def triangle_closest_point_to_point(triangle: Triangle, point: vec3) -> vec3:
    """Return the point of the triangle closest to ``point``.

    Args:
        triangle: The triangle.
        point: The query point.

    Returns:
        A vertex, a point on an edge, or the projection onto the face,
        depending on which Voronoi region ``point`` falls in.
    """
    a = triangle.a
    b = triangle.b
    c = triangle.c

    ab = b - a
    ac = c - a

    result = vec3(0.0, 0.0, 0.0)
    found = 0

    ap = point - a
    d1 = tm.dot(ab, ap)
    d2 = tm.dot(ac, ap)
    if d1 <= 0.0 and d2 <= 0.0:
        # vertex region of A; barycentric (1, 0, 0)
        result = a
        found = 1

    bp = point - b
    d3 = tm.dot(ab, bp)
    d4 = tm.dot(ac, bp)
    if found == 0 and d3 >= 0.0 and d4 <= d3:
        # vertex region of B; barycentric (0, 1, 0)
        result = b
        found = 1

    vc = d1 * d4 - d3 * d2
    if found == 0 and vc <= 0.0 and d1 >= 0.0 and d3 <= 0.0:
        # edge region of AB; barycentric (1 - v, v, 0)
        v = d1 / (d1 - d3)
        result = a + ab * v
        found = 1

    cp = point - c
    d5 = tm.dot(ab, cp)
    d6 = tm.dot(ac, cp)
    if found == 0 and d6 >= 0.0 and d5 <= d6:
        # vertex region of C; barycentric (0, 0, 1)
        result = c
        found = 1

    vb = d5 * d2 - d1 * d6
    if found == 0 and vb <= 0.0 and d2 >= 0.0 and d6 <= 0.0:
        # edge region of AC; barycentric (1 - w, 0, w)
        w = d2 / (d2 - d6)
        result = a + ac * w
        found = 1

    va = d3 * d6 - d5 * d4
    if found == 0 and va <= 0.0 and (d4 - d3) >= 0.0 and (d5 - d6) >= 0.0:
        # edge region of BC; barycentric (0, 1 - w, w)
        w = (d4 - d3) / ((d4 - d3) + (d5 - d6))
        result = b + (c - b) * w
        found = 1

    if found == 0:
        # face region
        denom = 1.0 / (va + vb + vc)
        v = vb * denom
        w = vc * denom
        result = a + ab * v + ac * w

    return result


@ti.func
def triangle_equals(triangle: Triangle, other: Triangle) -> ti.i32:
    return vec_equals(triangle.a, other.a) and vec_equals(triangle.b, other.b) and vec_equals(triangle.c, other.c)
