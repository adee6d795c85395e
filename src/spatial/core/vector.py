"""Vector and matrix helpers shared by the geometry kernel.

The primitives in ``src.spatial.geometry`` only need a handful of operations
beyond what ``taichi.math`` already offers: squared distances, point and
direction transforms by a 4x4 matrix, and the scale/normal-matrix extraction
used when re-bounding primitives under a transform. All helpers are Taichi
functions and must be called from inside a kernel.

Matrices follow Taichi's convention: ``m[row, col]`` with column vectors, so a
translation lives in the last column and ``m @ v`` transforms ``v``.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spatial.core.vector import make_translation, transform_point, vec3
    >>> # Use transform_point(make_translation(vec3(1, 0, 0)), p) within a kernel
"""

import taichi as ti
import taichi.math as tm

# Type aliases using Taichi's math module
vec3 = tm.vec3
vec4 = tm.vec4
mat3 = tm.mat3
mat4 = tm.mat4


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared length of a vector."""
    return tm.dot(v, v)


@ti.func
def distance_squared(a: vec3, b: vec3) -> ti.f32:
    """Compute the squared Euclidean distance between two points."""
    d = a - b
    return tm.dot(d, d)


@ti.func
def distance(a: vec3, b: vec3) -> ti.f32:
    """Compute the Euclidean distance between two points."""
    return tm.length(a - b)


@ti.func
def transform_point(m: mat4, p: vec3) -> vec3:
    """Transform a point by a 4x4 matrix, including the perspective divide.

    Args:
        m: The transform matrix.
        p: The point to transform (implicit w = 1).

    Returns:
        The transformed point divided by its resulting w component.
    """
    q = m @ vec4(p.x, p.y, p.z, 1.0)
    return vec3(q.x, q.y, q.z) / q.w


@ti.func
def transform_direction(m: mat4, d: vec3) -> vec3:
    """Transform a direction by the upper 3x3 of a matrix and normalize it.

    Translation is ignored. A zero-length input direction stays undefined
    (NaN), matching ``tm.normalize``.
    """
    r = vec3(
        m[0, 0] * d.x + m[0, 1] * d.y + m[0, 2] * d.z,
        m[1, 0] * d.x + m[1, 1] * d.y + m[1, 2] * d.z,
        m[2, 0] * d.x + m[2, 1] * d.y + m[2, 2] * d.z,
    )
    return tm.normalize(r)


@ti.func
def max_scale_on_axis(m: mat4) -> ti.f32:
    """Return the largest scale factor applied along any axis by ``m``.

    The scale along an axis is the length of the corresponding basis column
    of the upper 3x3 block.
    """
    sx = m[0, 0] * m[0, 0] + m[1, 0] * m[1, 0] + m[2, 0] * m[2, 0]
    sy = m[0, 1] * m[0, 1] + m[1, 1] * m[1, 1] + m[2, 1] * m[2, 1]
    sz = m[0, 2] * m[0, 2] + m[1, 2] * m[1, 2] + m[2, 2] * m[2, 2]
    return ti.sqrt(ti.max(sx, ti.max(sy, sz)))


@ti.func
def normal_matrix(m: mat4) -> mat3:
    """Compute the matrix that transforms normals under ``m``.

    This is the inverse-transpose of the upper 3x3 block. The upper block must
    be invertible.
    """
    upper = ti.Matrix(
        [
            [m[0, 0], m[0, 1], m[0, 2]],
            [m[1, 0], m[1, 1], m[1, 2]],
            [m[2, 0], m[2, 1], m[2, 2]],
        ]
    )
    return upper.inverse().transpose()


@ti.func
def make_translation(offset: vec3) -> mat4:
    """Build a 4x4 translation matrix."""
    return ti.Matrix(
        [
            [1.0, 0.0, 0.0, offset.x],
            [0.0, 1.0, 0.0, offset.y],
            [0.0, 0.0, 1.0, offset.z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


@ti.func
def make_scale(factors: vec3) -> mat4:
    """Build a 4x4 (possibly non-uniform) scale matrix."""
    return ti.Matrix(
        [
            [factors.x, 0.0, 0.0, 0.0],
            [0.0, factors.y, 0.0, 0.0],
            [0.0, 0.0, factors.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


@ti.func
def make_rotation_z(angle: ti.f32) -> mat4:
    """Build a 4x4 rotation about the z axis (radians, counter-clockwise)."""
    c = ti.cos(angle)
    s = ti.sin(angle)
    return ti.Matrix(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


@ti.func
def vec_equals(a: vec3, b: vec3) -> ti.i32:
    """Exact component-wise equality of two vectors."""
    return a.x == b.x and a.y == b.y and a.z == b.z


@ti.func
def safe_normalize(v: vec3) -> vec3:
    """Normalize ``v``, returning the zero vector for a zero-length input."""
    result = vec3(0.0, 0.0, 0.0)
    len_sq = tm.dot(v, v)
    if len_sq > 0.0:
        result = v / ti.sqrt(len_sq)
    return result
