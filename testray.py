import unittest
import numpy as np
from geometry import Sphere, NO_SPECULAR, intersect_ray_sphere, no_hit
from raytracer import *
from scenedef import SingleSphereExample
from vectors import vec, dot, add, subtract, multiply, divide, length, normalize

RED = vec([255, 0, 0])
BLUE = vec([0, 0, 255])


def ambient_scene(spheres, intensity=1.0, bg_color=vec([0, 0, 0])):
    return Scene(spheres, [AmbientLight(intensity)], bg_color=bg_color)


class TestVectors(unittest.TestCase):

    def test_arithmetic(self):
        a = vec([1, 2, 3])
        b = vec([4, 5, 6])
        self.assertEqual(dot(a, b), 32.0)
        np.testing.assert_array_equal(add(a, b), [5, 7, 9])
        np.testing.assert_array_equal(subtract(a, b), [-3, -3, -3])
        np.testing.assert_array_equal(multiply(a, 2), [2, 4, 6])
        np.testing.assert_array_equal(divide(b, 2), [2, 2.5, 3])

    def test_length_and_normalize(self):
        v = vec([3, 4, 0])
        self.assertEqual(length(v), 5.0)
        np.testing.assert_almost_equal(normalize(v), [0.6, 0.8, 0])
        self.assertAlmostEqual(length(normalize(vec([-2, 7, 1]))), 1.0)

    def test_vectors_are_immutable(self):
        v = vec([1, 2, 3])
        with self.assertRaises(ValueError):
            v[0] = 5
        w = add(v, v)
        np.testing.assert_array_equal(v, [1, 2, 3])
        with self.assertRaises(ValueError):
            w[1] = 0

    def test_divide_by_zero_is_not_finite(self):
        self.assertFalse(np.all(np.isfinite(divide(vec([1, 0, 0]), 0))))


class TestProjection(unittest.TestCase):

    def test_center_pixel_looks_straight_ahead(self):
        np.testing.assert_array_equal(canvas_to_viewport(0, 0, 600, 600), [0, 0, 1])

    def test_scaling(self):
        np.testing.assert_almost_equal(canvas_to_viewport(300, -150, 600, 600), [0.5, -0.25, 1])
        np.testing.assert_almost_equal(
            canvas_to_viewport(100, 50, 400, 200, viewport_w=2., viewport_h=1., d=3.),
            [0.5, 0.25, 3])

    def test_direction_is_not_normalized(self):
        d = canvas_to_viewport(300, 300, 600, 600)
        self.assertAlmostEqual(length(d), np.sqrt(1.5))

    def test_viewport_matches_function(self):
        viewport = Viewport(width=2., height=0.5, distance=2.)
        np.testing.assert_array_equal(
            viewport.canvas_to_viewport(-40, 20, 80, 60),
            canvas_to_viewport(-40, 20, 80, 60, 2., 0.5, 2.))

    def test_default_camera(self):
        cam = Camera()
        ray = cam.generate_ray(0, 0, 10, 10)
        np.testing.assert_array_equal(ray.origin, [0, 0, 0])
        np.testing.assert_array_equal(ray.direction, [0, 0, 1])
        self.assertEqual(ray.start, 1.)
        self.assertEqual(ray.end, np.inf)

    def test_camera_eye(self):
        cam = Camera(eye=vec([1, 2, 3]), viewport=Viewport(distance=2.))
        ray = cam.generate_ray(5, -5, 10, 10)
        np.testing.assert_array_equal(ray.origin, [1, 2, 3])
        np.testing.assert_almost_equal(ray.direction, [0.5, -0.5, 2])


class TestSphereIntersect(unittest.TestCase):

    def test_unitsphere_hits(self):
        unit_sphere = Sphere(vec([0,0,0]), 1.0, RED)
        # dead center hit: + root first
        t1, t2 = intersect_ray_sphere(vec([2.0,0.0,0.0]), vec([-1.0,0.0,0.0]), unit_sphere)
        self.assertAlmostEqual(t1, 3.0)
        self.assertAlmostEqual(t2, 1.0)
        # dead center with non-unit direction
        t1, t2 = intersect_ray_sphere(vec([3.0,0.0,0.0]), vec([-2.0,0.0,0.0]), unit_sphere)
        self.assertAlmostEqual(t1, 2.0)
        self.assertAlmostEqual(t2, 1.0)
        # off center hit
        t1, t2 = intersect_ray_sphere(vec([1.0,0.5,0.0]), vec([-1.0,0.0,0.0]), unit_sphere)
        self.assertAlmostEqual(t2, 1 - np.sin(np.pi/3))
        self.assertAlmostEqual(t1, 1 + np.sin(np.pi/3))

    def test_unitsphere_misses(self):
        unit_sphere = Sphere(vec([0,0,0]), 1.0, RED)
        # on axis miss
        self.assertEqual(
            intersect_ray_sphere(vec([2.0,3.0,0.0]), vec([-1.0,0.0,0.0]), unit_sphere),
            (np.inf, np.inf))

    def test_nonunit_hits(self):
        # the first case scaled by 3 and shifted by (-1, -5, -7)
        sphere = Sphere(vec([-1,-5,-7]), 3.0, RED)
        t1, t2 = intersect_ray_sphere(vec([5.0,-5.0,-7.0]), vec([-3.0,0.0,0.0]), sphere)
        self.assertAlmostEqual(t1, 3.0)
        self.assertAlmostEqual(t2, 1.0)

    def test_tangent_ray(self):
        sphere = Sphere(vec([0, 1, 4]), 1.0, RED)
        t1, t2 = intersect_ray_sphere(vec([0, 0, 0]), vec([0, 0, 1]), sphere)
        self.assertAlmostEqual(t1, 4.0)
        self.assertAlmostEqual(t2, 4.0)

    def test_discriminant_sign_predicts_hit(self):
        for offset in [0., 0.5, 0.99, 1.01, 2., -3.]:
            sphere = Sphere(vec([0, offset, 4]), 1.0, RED)
            t1, t2 = intersect_ray_sphere(vec([0, 0, 0]), vec([0, 0, 1]), sphere)
            if abs(offset) <= 1:
                self.assertTrue(np.isfinite(t1) and np.isfinite(t2), offset)
                self.assertGreaterEqual(t1, t2)
            else:
                self.assertEqual((t1, t2), (np.inf, np.inf), offset)

    def test_sphere_intersect_respects_bounds(self):
        sphere = Sphere(vec([0, 0, 4]), 1.0, RED)
        origin, direction = vec([0, 0, 0]), vec([0, 0, 1])
        # roots are 5 and 3
        self.assertEqual(sphere.intersect(Ray(origin, direction, 1., np.inf)).t, 3.0)
        self.assertEqual(sphere.intersect(Ray(origin, direction, 3.5, np.inf)).t, 5.0)
        self.assertIs(sphere.intersect(Ray(origin, direction, 1., 2.)), no_hit)
        # bounds are inclusive
        self.assertEqual(sphere.intersect(Ray(origin, direction, 3., np.inf)).t, 3.0)
        self.assertEqual(sphere.intersect(Ray(origin, direction, 4., 5.)).t, 5.0)
        hit = sphere.intersect(Ray(origin, direction, 1., np.inf))
        self.assertIs(hit.sphere, sphere)


class TestLighting(unittest.TestCase):

    p = vec([0, 0, 0])
    n = vec([0, 1, 0])
    v = vec([0, 1, 0])

    def test_ambient_only(self):
        for k in [0.0, 0.37, 1.0, 2.5]:
            for n in [vec([0, 1, 0]), vec([1, 1, 1]), vec([0, 0, 0])]:
                self.assertEqual(compute_lighting(vec([4, -2, 9]), n, vec([1, 0, 0]), 500,
                                                  [AmbientLight(k)]), k)

    def test_no_lights(self):
        self.assertEqual(compute_lighting(self.p, self.n, self.v, 10, []), 0.)

    def test_diffuse(self):
        # light directly overhead
        light = PointLight(vec([0, 5, 0]), 0.6)
        self.assertAlmostEqual(compute_lighting(self.p, self.n, self.v, NO_SPECULAR, [light]), 0.6)
        # light at 60 degrees
        light = PointLight(vec([0, 1, np.sqrt(3)]), 0.6)
        self.assertAlmostEqual(compute_lighting(self.p, self.n, self.v, NO_SPECULAR, [light]), 0.3)

    def test_diffuse_no_distance_falloff(self):
        for height in [0.1, 1., 100.]:
            light = PointLight(vec([0, height, 0]), 0.6)
            self.assertAlmostEqual(
                compute_lighting(self.p, self.n, self.v, NO_SPECULAR, [light]), 0.6)

    def test_diffuse_non_unit_normal(self):
        light = PointLight(vec([0, 5, 0]), 0.6)
        self.assertAlmostEqual(
            compute_lighting(self.p, vec([0, 2, 0]), self.v, NO_SPECULAR, [light]), 0.6)

    def test_diffuse_sign_gating(self):
        for position in [vec([0, -1, 0]), vec([0, -100, 0]), vec([3, 0, 0]), vec([1, -1, 5])]:
            light = PointLight(position, 0.8)
            self.assertEqual(compute_lighting(self.p, self.n, self.v, NO_SPECULAR, [light]), 0.)
        light = DirectionalLight(vec([0, -1, 0]), 0.8)
        self.assertEqual(compute_lighting(self.p, self.n, self.v, NO_SPECULAR, [light]), 0.)

    def test_specular_mirror_direction(self):
        light = DirectionalLight(vec([0, 1, 0]), 1.0)
        # diffuse 1 plus a full highlight of 1
        self.assertAlmostEqual(compute_lighting(self.p, self.n, self.v, 10, [light]), 2.0)

    def test_specular_lobe(self):
        light = DirectionalLight(vec([1, 1, 0]), 1.0)
        diffuse = 1 / np.sqrt(2)
        # R = (-1, 1, 0), so cos(R, V) = 1/sqrt(2) and squared gives 0.5
        self.assertAlmostEqual(compute_lighting(self.p, self.n, self.v, 2, [light]), diffuse + 0.5)
        self.assertAlmostEqual(
            compute_lighting(self.p, self.n, self.v, NO_SPECULAR, [light]), diffuse)
        # viewer on the far side of the reflected ray sees no highlight
        self.assertAlmostEqual(
            compute_lighting(self.p, self.n, vec([1, 0, 0]), 2, [light]), diffuse)

    def test_sum_of_lights(self):
        lights = [
            AmbientLight(0.2),
            PointLight(vec([0, 3, 0]), 0.6),
            DirectionalLight(vec([0, 2, 0]), 0.2),
        ]
        self.assertAlmostEqual(compute_lighting(self.p, self.n, self.v, NO_SPECULAR, lights), 1.0)

    def test_unclamped(self):
        lights = [AmbientLight(1.0), DirectionalLight(vec([0, 1, 0]), 1.0)]
        self.assertAlmostEqual(compute_lighting(self.p, self.n, self.v, 1, lights), 3.0)

    def test_degenerate_vectors_skip_light(self):
        lights = [AmbientLight(0.2), PointLight(vec([0, 1, 0]), 0.6), DirectionalLight(vec([0, 1, 0]), 0.2)]
        self.assertAlmostEqual(compute_lighting(self.p, vec([0, 0, 0]), self.v, 10, lights), 0.2)
        # point light sitting on the surface point
        light = PointLight(self.p, 0.6)
        self.assertEqual(compute_lighting(self.p, self.n, self.v, 10, [light]), 0.)


class TestTraceRay(unittest.TestCase):

    def test_single_sphere_scenario(self):
        scene = SingleSphereExample().scene
        ray = Ray(vec([0, 0, 0]), vec([0, 0, 1]), 1., np.inf)
        self.assertEqual(scene.intersect(ray).t, 3.0)
        np.testing.assert_array_equal(trace_ray(ray, scene), [255, 0, 0])

        ray = Ray(vec([0, 0, 0]), vec([1, 0, 0]), 1., np.inf)
        self.assertIs(scene.intersect(ray), no_hit)
        np.testing.assert_array_equal(trace_ray(ray, scene), [0, 0, 0])

    def test_background_fallback(self):
        bg = vec([12, 34, 56])
        scene = Scene([Sphere(vec([0, 0, 4]), 1, RED)], [AmbientLight(0.5)], bg_color=bg)
        color = trace_ray(Ray(vec([0, 0, 0]), vec([0, 1, 0]), 1., np.inf), scene)
        np.testing.assert_array_equal(color, [12, 34, 56])
        # empty scene
        color = trace_ray(Ray(vec([0, 0, 0]), vec([0, 0, 1])), Scene([], [], bg_color=bg))
        np.testing.assert_array_equal(color, [12, 34, 56])

    def test_default_background_is_white(self):
        color = trace_ray(Ray(vec([0, 0, 0]), vec([0, 0, 1])), Scene([], []))
        np.testing.assert_array_equal(color, [255, 255, 255])

    def test_closest_hit(self):
        far = Sphere(vec([0, 0, 10]), 1, BLUE)
        near = Sphere(vec([0, 0, 5]), 1, RED)
        scene = ambient_scene([far, near])
        origin, direction = vec([0, 0, 0]), vec([0, 0, 1])
        np.testing.assert_array_equal(trace_ray(Ray(origin, direction, 1., np.inf), scene), RED)
        # near sphere (t = 4 and 6) is in front of t_min
        hit = scene.intersect(Ray(origin, direction, 7., np.inf))
        self.assertIs(hit.sphere, far)
        self.assertEqual(hit.t, 9.0)
        np.testing.assert_array_equal(trace_ray(Ray(origin, direction, 7., np.inf), scene), BLUE)
        # and nothing is left beyond t_max
        np.testing.assert_array_equal(trace_ray(Ray(origin, direction, 1., 3.), scene), [0, 0, 0])

    def test_overlapping_spheres(self):
        a = Sphere(vec([0, 0, 6]), 2, BLUE)   # roots 8, 4
        b = Sphere(vec([0, 0, 5]), 2, RED)    # roots 7, 3
        hit = ambient_scene([a, b]).intersect(Ray(vec([0, 0, 0]), vec([0, 0, 1]), 1., np.inf))
        self.assertIs(hit.sphere, b)
        self.assertEqual(hit.t, 3.0)

    def test_ties_go_to_first_sphere(self):
        first = Sphere(vec([0, 0, 5]), 1, RED)
        second = Sphere(vec([0, 0, 5]), 1, BLUE)
        ray = Ray(vec([0, 0, 0]), vec([0, 0, 1]), 1., np.inf)
        np.testing.assert_array_equal(trace_ray(ray, ambient_scene([first, second])), RED)
        np.testing.assert_array_equal(trace_ray(ray, ambient_scene([second, first])), BLUE)

    def test_color_scaled_by_lighting(self):
        sphere = Sphere(vec([0, 0, 4]), 1, vec([200, 100, 50]), specular=NO_SPECULAR)
        lights = [AmbientLight(0.25), PointLight(vec([0, 0, 0]), 0.5)]
        scene = Scene([sphere], lights)
        color = trace_ray(Ray(vec([0, 0, 0]), vec([0, 0, 1]), 1., np.inf), scene)
        np.testing.assert_allclose(color, [150, 75, 37.5])

    def test_color_not_clamped(self):
        scene = ambient_scene([Sphere(vec([0, 0, 4]), 1, vec([200, 100, 50]))], intensity=2.0)
        color = trace_ray(Ray(vec([0, 0, 0]), vec([0, 0, 1]), 1., np.inf), scene)
        np.testing.assert_allclose(color, [400, 200, 100])

    def test_specular_highlight_facing_light(self):
        # light behind the camera reflects straight back at the viewer
        sphere = Sphere(vec([0, 0, 4]), 1, vec([100, 100, 100]), specular=50)
        scene = Scene([sphere], [PointLight(vec([0, 0, 0]), 0.5)])
        color = trace_ray(Ray(vec([0, 0, 0]), vec([0, 0, 1]), 1., np.inf), scene)
        np.testing.assert_allclose(color, [100, 100, 100])

    def test_hit_at_sphere_center(self):
        # a zero radius sphere is only hit at its center, where there is no normal
        sphere = Sphere(vec([0, 0, 4]), 0., RED, specular=10)
        scene = Scene([sphere], [AmbientLight(0.3), PointLight(vec([0, 0, 0]), 0.6)])
        color = trace_ray(Ray(vec([0, 0, 0]), vec([0, 0, 1]), 1., np.inf), scene)
        self.assertTrue(np.all(np.isfinite(color)))
        np.testing.assert_allclose(color, [76.5, 0, 0])


class TestRender(unittest.TestCase):

    def test_raster_mapping(self):
        self.assertEqual(to_raster(0, 0, 600, 400), (300, 200))
        self.assertLess(to_raster(0, 1, 600, 400)[1], to_raster(0, -1, 600, 400)[1])
        self.assertEqual(to_raster(-300, 0, 600, 400)[0], 0)
        self.assertEqual(to_raster(299, 0, 600, 400)[0], 599)
        self.assertEqual(to_raster(1, 0, 600, 400)[0], 301)

    def test_render_single_sphere(self):
        example = SingleSphereExample()
        canvas = render_image(example.camera, example.scene, 20, 20)
        self.assertEqual(canvas.shape, (20, 20, 4))
        # center pixel looks straight at the sphere
        np.testing.assert_array_equal(canvas.get_pixel(10, 10), [255, 0, 0, 255])
        # corner pixel misses it
        np.testing.assert_array_equal(canvas.get_pixel(0, 19), [0, 0, 0, 255])
        self.assertTrue(np.all(canvas.pixels[:, :, 3] == 255))

    def test_render_odd_size(self):
        example = SingleSphereExample()
        canvas = render_image(example.camera, example.scene, 7, 5)
        self.assertEqual(canvas.shape, (5, 7, 4))
        np.testing.assert_array_equal(canvas.get_pixel(3, 2), [255, 0, 0, 255])


if __name__ == '__main__':
    unittest.main()
