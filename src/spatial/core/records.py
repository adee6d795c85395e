"""Result records for intersection queries.

Intersection queries that can miss return a ``HitRecord`` instead of a
nullable point. A miss is an ordinary outcome, signalled by ``hit == 0``; the
remaining fields of a miss record are zero and carry no meaning.
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class HitRecord:
    """Record of a point-valued intersection query.

    Attributes:
        hit: Whether the query found an intersection (1 if hit, 0 if miss).
        t: The parameter value of the intersection along the query's line,
            ray or segment. Only valid if hit == 1.
        point: The intersection point. Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3


@ti.func
def make_hit_record(t: ti.f32, point: vec3) -> HitRecord:
    """Create a HitRecord for a successful intersection."""
    return HitRecord(hit=1, t=t, point=point)


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection.

    Returns:
        A HitRecord with hit=0 and default values.
    """
    return HitRecord(hit=0, t=0.0, point=vec3(0.0, 0.0, 0.0))
