"""Unit tests for spheres.

Tests cover:
- Empty and zero-radius spheres, and construction from point fields
- Containment, signed distance and clamping
- Incremental expansion and union (including nested spheres)
- Bounding box and transforms
"""

import taichi as ti


class TestSphereBasics:
    """Tests for sphere construction and emptiness."""

    def test_make_sphere(self):
        """Test make_sphere convenience function."""
        from src.spatial.geometry.sphere import make_sphere, vec3

        center_result = ti.field(dtype=ti.math.vec3, shape=())
        radius_result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            sphere = make_sphere(vec3(1.0, 2.0, 3.0), 0.5)
            center_result[None] = sphere.center
            radius_result[None] = sphere.radius

        test_kernel()
        c = center_result[None]
        assert abs(c[0] - 1.0) < 1e-6
        assert abs(c[1] - 2.0) < 1e-6
        assert abs(c[2] - 3.0) < 1e-6
        assert abs(radius_result[None] - 0.5) < 1e-6

    def test_empty_and_zero_radius(self):
        """Test that negative radius is empty while radius 0 holds its center."""
        from src.spatial.geometry.sphere import make_empty_sphere, make_sphere, sphere_contains_point, sphere_is_empty, vec3

        empty = ti.field(dtype=ti.i32, shape=())
        zero_empty = ti.field(dtype=ti.i32, shape=())
        zero_contains_center = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            empty[None] = sphere_is_empty(make_empty_sphere())
            point = make_sphere(vec3(1.0, 1.0, 1.0), 0.0)
            zero_empty[None] = sphere_is_empty(point)
            zero_contains_center[None] = sphere_contains_point(point, vec3(1.0, 1.0, 1.0))

        test_kernel()
        assert empty[None] == 1
        assert zero_empty[None] == 0
        assert zero_contains_center[None] == 1

    def test_from_points3(self):
        """Test the enclosing sphere is centered on the points' bounding box."""
        from src.spatial.geometry.sphere import sphere_from_points3, vec3

        center = ti.field(dtype=ti.math.vec3, shape=())
        radius = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            sphere = sphere_from_points3(vec3(-1.0, 0.0, 0.0), vec3(1.0, 0.0, 0.0), vec3(0.0, 2.0, 0.0))
            center[None] = sphere.center
            radius[None] = sphere.radius

        test_kernel()
        c = center[None]
        assert abs(c[0]) < 1e-6
        assert abs(c[1] - 1.0) < 1e-6
        assert abs(c[2]) < 1e-6
        assert abs(radius[None] - 2.0**0.5) < 1e-5

    def test_from_points_field(self):
        """Test bounding a field of points, with and without a fixed center."""
        from src.spatial.geometry.sphere import sphere_from_center_and_points, sphere_from_points, vec3
        from src.spatial.geometry.triangle import load_points

        points = load_points([[-1.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 2.0, 0.0], [0.0, 0.0, 0.5]])
        center = ti.field(dtype=ti.math.vec3, shape=())
        radius = ti.field(dtype=ti.f32, shape=())
        fixed_radius = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            sphere = sphere_from_points(points)
            center[None] = sphere.center
            radius[None] = sphere.radius
            fixed_radius[None] = sphere_from_center_and_points(vec3(0.0, 0.0, 0.0), points).radius

        test_kernel()
        c = center[None]
        assert abs(c[0]) < 1e-6
        assert abs(c[1] - 1.0) < 1e-6
        assert abs(c[2] - 0.25) < 1e-6
        assert abs(radius[None] - 2.0625**0.5) < 1e-5
        assert abs(fixed_radius[None] - 2.0) < 1e-6

    def test_from_single_point_field(self):
        """Test that one point gives the zero-radius sphere at that point."""
        from src.spatial.geometry.sphere import sphere_from_points, sphere_is_empty
        from src.spatial.geometry.triangle import load_points

        points = load_points([[1.0, 2.0, 3.0]])
        center = ti.field(dtype=ti.math.vec3, shape=())
        radius = ti.field(dtype=ti.f32, shape=())
        empty = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            sphere = sphere_from_points(points)
            center[None] = sphere.center
            radius[None] = sphere.radius
            empty[None] = sphere_is_empty(sphere)

        test_kernel()
        assert [center[None][i] for i in range(3)] == [1.0, 2.0, 3.0]
        assert radius[None] == 0.0
        assert empty[None] == 0


class TestSphereQueries:
    """Tests for containment, distance and overlap."""

    def test_contains_point(self):
        from src.spatial.geometry.sphere import make_sphere, sphere_contains_point, vec3

        on_surface = ti.field(dtype=ti.i32, shape=())
        outside = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            sphere = make_sphere(vec3(0.0, 0.0, 0.0), 2.0)
            on_surface[None] = sphere_contains_point(sphere, vec3(0.0, 2.0, 0.0))
            outside[None] = sphere_contains_point(sphere, vec3(0.0, 2.1, 0.0))

        test_kernel()
        assert on_surface[None] == 1
        assert outside[None] == 0

    def test_distance_to_point_is_signed(self):
        from src.spatial.geometry.sphere import make_sphere, sphere_distance_to_point, vec3

        outside = ti.field(dtype=ti.f32, shape=())
        inside = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            sphere = make_sphere(vec3(0.0, 0.0, 0.0), 1.0)
            outside[None] = sphere_distance_to_point(sphere, vec3(3.0, 0.0, 0.0))
            inside[None] = sphere_distance_to_point(sphere, vec3(0.0, 0.0, 0.0))

        test_kernel()
        assert abs(outside[None] - 2.0) < 1e-6
        assert abs(inside[None] + 1.0) < 1e-6

    def test_intersects_sphere_box_plane(self):
        from src.spatial.geometry.box import make_box
        from src.spatial.geometry.plane import make_plane
        from src.spatial.geometry.sphere import (
            make_sphere,
            sphere_intersects_box,
            sphere_intersects_plane,
            sphere_intersects_sphere,
            vec3,
        )

        touching_sphere = ti.field(dtype=ti.i32, shape=())
        far_sphere = ti.field(dtype=ti.i32, shape=())
        box_hit = ti.field(dtype=ti.i32, shape=())
        plane_hit = ti.field(dtype=ti.i32, shape=())
        plane_miss = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            sphere = make_sphere(vec3(0.0, 0.0, 0.0), 1.0)
            touching_sphere[None] = sphere_intersects_sphere(sphere, make_sphere(vec3(2.0, 0.0, 0.0), 1.0))
            far_sphere[None] = sphere_intersects_sphere(sphere, make_sphere(vec3(3.0, 0.0, 0.0), 1.0))
            box_hit[None] = sphere_intersects_box(sphere, make_box(vec3(0.5, 0.5, -1.0), vec3(2.0, 2.0, 1.0)))
            plane_hit[None] = sphere_intersects_plane(sphere, make_plane(vec3(0.0, 1.0, 0.0), -1.0))
            plane_miss[None] = sphere_intersects_plane(sphere, make_plane(vec3(0.0, 1.0, 0.0), -1.5))

        test_kernel()
        assert touching_sphere[None] == 1
        assert far_sphere[None] == 0
        assert box_hit[None] == 1
        assert plane_hit[None] == 1
        assert plane_miss[None] == 0

    def test_empty_sphere_contains_and_intersects_nothing(self):
        """Test that radius -1 is not treated as a unit sphere."""
        from src.spatial.geometry.box import box_intersects_sphere, make_box
        from src.spatial.geometry.sphere import (
            make_empty_sphere,
            make_sphere,
            sphere_contains_point,
            sphere_intersects_box,
            sphere_intersects_sphere,
            vec3,
        )

        contains_origin = ti.field(dtype=ti.i32, shape=())
        box_near = ti.field(dtype=ti.i32, shape=())
        box_around = ti.field(dtype=ti.i32, shape=())
        box_around_reversed = ti.field(dtype=ti.i32, shape=())
        sphere_near = ti.field(dtype=ti.i32, shape=())
        sphere_around = ti.field(dtype=ti.i32, shape=())
        sphere_around_reversed = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            empty = make_empty_sphere()
            around = make_box(vec3(-1.0, -1.0, -1.0), vec3(1.0, 1.0, 1.0))
            big = make_sphere(vec3(0.0, 0.0, 0.0), 2.0)
            contains_origin[None] = sphere_contains_point(empty, vec3(0.0, 0.0, 0.0))
            box_near[None] = sphere_intersects_box(empty, make_box(vec3(0.5, 0.5, 0.5), vec3(1.0, 1.0, 1.0)))
            box_around[None] = sphere_intersects_box(empty, around)
            box_around_reversed[None] = box_intersects_sphere(around, empty)
            sphere_near[None] = sphere_intersects_sphere(empty, make_sphere(vec3(2.5, 0.0, 0.0), 2.0))
            sphere_around[None] = sphere_intersects_sphere(empty, big)
            sphere_around_reversed[None] = sphere_intersects_sphere(big, empty)

        test_kernel()
        assert contains_origin[None] == 0
        assert box_near[None] == 0
        assert box_around[None] == 0
        assert box_around_reversed[None] == 0
        assert sphere_near[None] == 0
        assert sphere_around[None] == 0
        assert sphere_around_reversed[None] == 0

    def test_clamp_point(self):
        from src.spatial.geometry.sphere import make_sphere, sphere_clamp_point, vec3

        clamped = ti.field(dtype=ti.math.vec3, shape=())
        unchanged = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            sphere = make_sphere(vec3(1.0, 0.0, 0.0), 2.0)
            clamped[None] = sphere_clamp_point(sphere, vec3(1.0, 10.0, 0.0))
            unchanged[None] = sphere_clamp_point(sphere, vec3(1.5, 0.5, 0.0))

        test_kernel()
        c = clamped[None]
        assert abs(c[0] - 1.0) < 1e-6
        assert abs(c[1] - 2.0) < 1e-6
        u = unchanged[None]
        assert abs(u[0] - 1.5) < 1e-6
        assert abs(u[1] - 0.5) < 1e-6


class TestSphereGrowth:
    """Tests for expand-by-point and union."""

    def test_expand_by_point_moves_center(self):
        """Test that half of the missing distance moves the center."""
        from src.spatial.geometry.sphere import make_sphere, sphere_expand_by_point, vec3

        center = ti.field(dtype=ti.math.vec3, shape=())
        radius = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            sphere = sphere_expand_by_point(make_sphere(vec3(0.0, 0.0, 0.0), 1.0), vec3(3.0, 0.0, 0.0))
            center[None] = sphere.center
            radius[None] = sphere.radius

        test_kernel()
        c = center[None]
        assert abs(c[0] - 1.0) < 1e-6
        assert abs(c[1]) < 1e-6
        assert abs(radius[None] - 2.0) < 1e-6

    def test_expand_by_interior_point_is_noop(self):
        from src.spatial.geometry.sphere import make_sphere, sphere_equals, sphere_expand_by_point, vec3

        result = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            sphere = make_sphere(vec3(0.0, 0.0, 0.0), 1.0)
            result[None] = sphere_equals(sphere_expand_by_point(sphere, vec3(0.5, 0.0, 0.0)), sphere)

        test_kernel()
        assert result[None] == 1

    def test_expand_empty_sphere(self):
        from src.spatial.geometry.sphere import make_empty_sphere, sphere_expand_by_point, vec3

        center = ti.field(dtype=ti.math.vec3, shape=())
        radius = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            sphere = sphere_expand_by_point(make_empty_sphere(), vec3(2.0, 3.0, 4.0))
            center[None] = sphere.center
            radius[None] = sphere.radius

        test_kernel()
        assert [center[None][i] for i in range(3)] == [2.0, 3.0, 4.0]
        assert radius[None] == 0.0

    def test_union_with_containing_sphere(self):
        """Test that a sphere absorbed by a larger one becomes that sphere."""
        from src.spatial.geometry.sphere import make_sphere, sphere_union, vec3

        center = ti.field(dtype=ti.math.vec3, shape=())
        radius = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            c = make_sphere(vec3(0.0, 0.0, 0.0), 1.0)
            d = make_sphere(vec3(1.0, 0.0, 0.0), 4.0)
            result = sphere_union(c, d)
            center[None] = result.center
            radius[None] = result.radius

        test_kernel()
        ctr = center[None]
        assert abs(ctr[0] - 1.0) < 1e-6
        assert abs(ctr[1]) < 1e-6
        assert abs(ctr[2]) < 1e-6
        assert abs(radius[None] - 4.0) < 1e-6

    def test_union_disjoint(self):
        from src.spatial.geometry.sphere import make_sphere, sphere_union, vec3

        center = ti.field(dtype=ti.math.vec3, shape=())
        radius = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result = sphere_union(make_sphere(vec3(0.0, 0.0, 0.0), 1.0), make_sphere(vec3(4.0, 0.0, 0.0), 1.0))
            center[None] = result.center
            radius[None] = result.radius

        test_kernel()
        assert abs(center[None][0] - 2.0) < 1e-5
        assert abs(radius[None] - 3.0) < 1e-5

    def test_union_concentric_and_empty(self):
        from src.spatial.geometry.sphere import make_empty_sphere, make_sphere, sphere_equals, sphere_union, vec3

        concentric = ti.field(dtype=ti.f32, shape=())
        with_empty = ti.field(dtype=ti.i32, shape=())
        into_empty = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            a = make_sphere(vec3(1.0, 1.0, 1.0), 1.0)
            b = make_sphere(vec3(1.0, 1.0, 1.0), 3.0)
            concentric[None] = sphere_union(a, b).radius
            with_empty[None] = sphere_equals(sphere_union(a, make_empty_sphere()), a)
            into_empty[None] = sphere_equals(sphere_union(make_empty_sphere(), a), a)

        test_kernel()
        assert concentric[None] == 3.0
        assert with_empty[None] == 1
        assert into_empty[None] == 1


class TestSphereDerived:
    """Tests for bounding box and transforms."""

    def test_bounding_box(self):
        from src.spatial.geometry.box import box_is_empty
        from src.spatial.geometry.sphere import make_empty_sphere, make_sphere, sphere_get_bounding_box, vec3

        lo = ti.field(dtype=ti.math.vec3, shape=())
        hi = ti.field(dtype=ti.math.vec3, shape=())
        empty = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            box = sphere_get_bounding_box(make_sphere(vec3(1.0, 2.0, 3.0), 1.0))
            lo[None] = box.min
            hi[None] = box.max
            empty[None] = box_is_empty(sphere_get_bounding_box(make_empty_sphere()))

        test_kernel()
        assert [lo[None][i] for i in range(3)] == [0.0, 1.0, 2.0]
        assert [hi[None][i] for i in range(3)] == [2.0, 3.0, 4.0]
        assert empty[None] == 1

    def test_apply_matrix4_scales_radius(self):
        """Test that non-uniform scale grows the radius by the largest factor."""
        from src.spatial.core.vector import make_scale
        from src.spatial.geometry.sphere import make_sphere, sphere_apply_matrix4, vec3

        center = ti.field(dtype=ti.math.vec3, shape=())
        radius = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            sphere = sphere_apply_matrix4(make_sphere(vec3(1.0, 1.0, 1.0), 1.0), make_scale(vec3(1.0, 2.0, 3.0)))
            center[None] = sphere.center
            radius[None] = sphere.radius

        test_kernel()
        c = center[None]
        assert abs(c[0] - 1.0) < 1e-6
        assert abs(c[1] - 2.0) < 1e-6
        assert abs(c[2] - 3.0) < 1e-6
        assert abs(radius[None] - 3.0) < 1e-6

    def test_translate(self):
        from src.spatial.geometry.sphere import make_sphere, sphere_translate, vec3

        center = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            center[None] = sphere_translate(make_sphere(vec3(0.0, 0.0, 0.0), 1.0), vec3(1.0, -1.0, 2.0)).center

        test_kernel()
        assert [center[None][i] for i in range(3)] == [1.0, -1.0, 2.0]
