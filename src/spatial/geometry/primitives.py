"""Primitive value types for the geometry kernel.

The five primitive kinds (plus the bounded segment used by plane queries)
are plain Taichi dataclasses. Queries live in the per-primitive modules
(``box``, ``plane``, ``sphere``, ``segment``, ``ray``, ``triangle``) as free
Taichi functions that take primitives by value and return new values, so a
primitive is never mutated in place and no query shares scratch state.

The set of primitive kinds is closed; queries between two kinds are resolved
statically by calling the function for that pair, e.g.
``box_intersects_sphere(box, sphere)``.
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Radius of an empty sphere (contains no points)
EMPTY_SPHERE_RADIUS = -1.0


@ti.dataclass
class Box3:
    """An axis-aligned box defined by its min and max corners.

    A box is empty when any max component is less than the matching min
    component. The canonical empty box has min = (+inf, +inf, +inf) and
    max = (-inf, -inf, -inf). A box with min == max holds exactly one point
    and is not empty.

    Attributes:
        min: The lower (x, y, z) corner (vec3).
        max: The upper (x, y, z) corner (vec3).
    """

    min: vec3
    max: vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius. Negative means empty; zero means the sphere
            holds only its center point.
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class Plane:
    """A plane in Hessian normal form.

    A point p lies on the plane iff dot(normal, p) + constant == 0.

    Attributes:
        normal: Unit normal (vec3). Not re-normalized automatically; call
            plane_normalize() after building a plane from raw components.
        constant: Signed distance from the origin to the plane along -normal.
    """

    normal: vec3
    constant: ti.f32


@ti.dataclass
class Segment:
    """A bounded line segment from start to end.

    Attributes:
        start: The start point (parameter t = 0).
        end: The end point (parameter t = 1).
    """

    start: vec3
    end: vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Must be unit
            length for distance and clamp queries to be metrically correct;
            this is not enforced.
    """

    origin: vec3
    direction: vec3


@ti.dataclass
class Triangle:
    """A triangle defined by three corner points.

    The corner order defines the winding: the normal is
    normalize(cross(c - b, a - b)).

    Attributes:
        a: First corner (vec3).
        b: Second corner (vec3).
        c: Third corner (vec3).
    """

    a: vec3
    b: vec3
    c: vec3
