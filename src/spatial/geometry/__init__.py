"""Geometry module: primitive value types and their spatial queries.

Components:
    primitives: Box3, Sphere, Plane, Segment, Ray and Triangle dataclasses
    box: Axis-aligned box queries and the box/triangle separating-axis test
    sphere: Sphere containment, bounds and incremental growth
    plane: Hessian-normal-form plane queries and plane/segment intersection
    segment: Bounded segment helpers used by plane queries
    ray: Ray closest-point, distance and intersection queries
    triangle: Barycentric coordinates, containment and closest points

All queries are Taichi functions (@ti.func) that take primitives by value
and return new values. Cross-kind queries are named after the pair of kinds
they operate on, and symmetric pairs share one implementation:
    box_intersects_sphere(box, sphere) == sphere_intersects_box(sphere, box)
"""

from .box import (
    box_apply_matrix4,
    box_clamp_point,
    box_contains_box,
    box_contains_point,
    box_distance_to_point,
    box_equals,
    box_expand_by_point,
    box_expand_by_scalar,
    box_expand_by_vector,
    box_from_center_and_size,
    box_from_points,
    box_from_points3,
    box_get_bounding_sphere,
    box_get_center,
    box_get_parameter,
    box_get_size,
    box_intersect,
    box_intersects_box,
    box_intersects_plane,
    box_intersects_sphere,
    box_intersects_triangle,
    box_is_empty,
    box_translate,
    box_union,
    make_box,
    make_empty_box,
)
from .plane import (
    make_plane,
    plane_apply_matrix4,
    plane_apply_matrix4_with_normal_matrix,
    plane_coplanar_point,
    plane_distance_to_point,
    plane_distance_to_sphere,
    plane_equals,
    plane_from_components,
    plane_from_coplanar_points,
    plane_from_normal_and_coplanar_point,
    plane_intersect_line,
    plane_intersects_box,
    plane_intersects_line,
    plane_intersects_sphere,
    plane_negate,
    plane_normalize,
    plane_project_point,
    plane_translate,
)
from .primitives import EMPTY_SPHERE_RADIUS, Box3, Plane, Ray, Segment, Sphere, Triangle
from .ray import (
    make_ray,
    ray_apply_matrix4,
    ray_at,
    ray_closest_point_to_point,
    ray_distance_sq_to_point,
    ray_distance_sq_to_segment,
    ray_distance_to_plane,
    ray_distance_to_point,
    ray_equals,
    ray_intersect_box,
    ray_intersect_plane,
    ray_intersect_sphere,
    ray_intersect_triangle,
    ray_intersects_box,
    ray_intersects_plane,
    ray_intersects_sphere,
    ray_look_at,
    ray_recast,
)
from .segment import (
    make_segment,
    segment_apply_matrix4,
    segment_at,
    segment_center,
    segment_closest_point_to_point,
    segment_closest_point_to_point_parameter,
    segment_delta,
    segment_equals,
    segment_length,
    segment_length_squared,
)
from .sphere import (
    make_empty_sphere,
    make_sphere,
    sphere_apply_matrix4,
    sphere_clamp_point,
    sphere_contains_point,
    sphere_distance_to_point,
    sphere_equals,
    sphere_expand_by_point,
    sphere_from_center_and_points,
    sphere_from_center_and_points3,
    sphere_from_points,
    sphere_from_points3,
    sphere_get_bounding_box,
    sphere_intersects_box,
    sphere_intersects_plane,
    sphere_intersects_sphere,
    sphere_is_empty,
    sphere_translate,
    sphere_union,
)
from .triangle import (
    load_points,
    make_triangle,
    triangle_barycoord_of,
    triangle_closest_point_to_point,
    triangle_contains_point,
    triangle_equals,
    triangle_from_points_and_indices,
    triangle_get_area,
    triangle_get_barycoord,
    triangle_get_midpoint,
    triangle_get_normal,
    triangle_get_plane,
    triangle_get_uv,
    triangle_intersects_box,
    triangle_is_front_facing,
    triangle_normal_of,
)

__all__ = [
    # primitives
    "Box3",
    "Sphere",
    "Plane",
    "Segment",
    "Ray",
    "Triangle",
    "EMPTY_SPHERE_RADIUS",
    # box
    "make_box",
    "make_empty_box",
    "box_from_center_and_size",
    "box_from_points",
    "box_from_points3",
    "box_is_empty",
    "box_get_center",
    "box_get_size",
    "box_expand_by_point",
    "box_expand_by_vector",
    "box_expand_by_scalar",
    "box_contains_point",
    "box_contains_box",
    "box_get_parameter",
    "box_intersects_box",
    "box_clamp_point",
    "box_distance_to_point",
    "box_intersects_sphere",
    "box_intersects_plane",
    "box_intersects_triangle",
    "box_get_bounding_sphere",
    "box_intersect",
    "box_union",
    "box_translate",
    "box_apply_matrix4",
    "box_equals",
    # sphere
    "make_sphere",
    "make_empty_sphere",
    "sphere_from_points",
    "sphere_from_points3",
    "sphere_from_center_and_points",
    "sphere_from_center_and_points3",
    "sphere_is_empty",
    "sphere_contains_point",
    "sphere_distance_to_point",
    "sphere_intersects_sphere",
    "sphere_intersects_box",
    "sphere_intersects_plane",
    "sphere_clamp_point",
    "sphere_get_bounding_box",
    "sphere_apply_matrix4",
    "sphere_translate",
    "sphere_expand_by_point",
    "sphere_union",
    "sphere_equals",
    # plane
    "make_plane",
    "plane_from_components",
    "plane_from_normal_and_coplanar_point",
    "plane_from_coplanar_points",
    "plane_normalize",
    "plane_negate",
    "plane_distance_to_point",
    "plane_distance_to_sphere",
    "plane_project_point",
    "plane_coplanar_point",
    "plane_intersect_line",
    "plane_intersects_line",
    "plane_intersects_box",
    "plane_intersects_sphere",
    "plane_apply_matrix4_with_normal_matrix",
    "plane_apply_matrix4",
    "plane_translate",
    "plane_equals",
    # segment
    "make_segment",
    "segment_center",
    "segment_delta",
    "segment_length_squared",
    "segment_length",
    "segment_at",
    "segment_closest_point_to_point_parameter",
    "segment_closest_point_to_point",
    "segment_apply_matrix4",
    "segment_equals",
    # ray
    "make_ray",
    "ray_at",
    "ray_look_at",
    "ray_recast",
    "ray_closest_point_to_point",
    "ray_distance_sq_to_point",
    "ray_distance_to_point",
    "ray_distance_sq_to_segment",
    "ray_intersect_sphere",
    "ray_intersects_sphere",
    "ray_distance_to_plane",
    "ray_intersect_plane",
    "ray_intersects_plane",
    "ray_intersect_box",
    "ray_intersects_box",
    "ray_intersect_triangle",
    "ray_apply_matrix4",
    "ray_equals",
    # triangle
    "make_triangle",
    "triangle_from_points_and_indices",
    "load_points",
    "triangle_normal_of",
    "triangle_barycoord_of",
    "triangle_get_area",
    "triangle_get_midpoint",
    "triangle_get_normal",
    "triangle_get_plane",
    "triangle_get_barycoord",
    "triangle_get_uv",
    "triangle_contains_point",
    "triangle_is_front_facing",
    "triangle_intersects_box",
    "triangle_closest_point_to_point",
    "triangle_equals",
]
