import unittest
import numpy as np
from ray import *
from geometry import Intersection, Sphere
from utils import Point, Direction, vec, normalize, point, direction, dot, is_color

WHITE = vec([1, 1, 1])
BLACK = vec([0, 0, 0])


def assert_direction_matches(v, w):
    np.testing.assert_almost_equal(normalize(v.xyz), normalize(w))


def make_camera(location=None, gaze=None, up=None, l=-1.0, t=1.0, r=1.0, b=-1.0, d=1.0):
    return Camera(location or point(0, 0, 0), gaze or direction(0, 0, -1),
                  up or direction(0, 1, 0), l, t, r, b, d)


def make_scene(perspective=True, ambient=1.0, background=BLACK, camera=None):
    return Scene(AmbientLight(WHITE, ambient), background, camera or make_camera(), perspective)


class TestSphereIntersect(unittest.TestCase):

    def confirm_hit(self, sphere, origin, dir):
        # make sure hit is self-consistent, then return it
        hit = sphere.intersect(origin, dir)
        self.assertIsNotNone(hit)
        self.assertGreaterEqual(hit.t, 0.0)
        np.testing.assert_almost_equal((origin + hit.t * dir).xyz, hit.point.xyz)
        np.testing.assert_almost_equal(normalize((hit.point - sphere.center).xyz), hit.normal.xyz)
        self.assertAlmostEqual((hit.point - sphere.center).magnitude(), sphere.radius)
        return hit

    def test_unitsphere_hits(self):
        unit_sphere = Sphere(WHITE, WHITE, point(0, 0, 0), 1.0)
        # dead center hit
        hit = self.confirm_hit(unit_sphere, point(2, 0, 0), direction(-1, 0, 0))
        self.assertAlmostEqual(hit.t, 1.0)
        # dead center with non-unit direction
        hit = self.confirm_hit(unit_sphere, point(3, 0, 0), direction(-2, 0, 0))
        self.assertAlmostEqual(hit.t, 1.0)
        # off center hit
        hit = self.confirm_hit(unit_sphere, point(1, 0.5, 0), direction(-1, 0, 0))
        self.assertAlmostEqual(hit.t, 1 - np.sin(np.pi/3))
        # center hit from off axis
        hit = self.confirm_hit(unit_sphere, point(2, 3, 4), direction(-2, -3, -4))
        self.assertAlmostEqual(hit.t, 1 - 1 / np.sqrt(29))

    def test_hit_distance_from_center(self):
        sphere = Sphere(WHITE, WHITE, point(0, 0, 0), 2.0)
        origin = point(0, 0, 5)
        hit = self.confirm_hit(sphere, origin, direction(0, 0, -1))
        self.assertAlmostEqual(hit.t, (sphere.center - origin).magnitude() - sphere.radius)
        np.testing.assert_almost_equal(hit.normal.xyz, [0, 0, 1])

    def test_normal_is_a_direction(self):
        sphere = Sphere(WHITE, WHITE, point(1, 2, 3), 1.0)
        hit = sphere.intersect(point(1, 2, 10), direction(0, 0, -1))
        self.assertEqual(hit.normal.homogeneous[3], 0.0)
        self.assertEqual(hit.point.homogeneous[3], 1.0)

    def test_unitsphere_misses(self):
        unit_sphere = Sphere(WHITE, WHITE, point(0, 0, 0), 1.0)
        # on axis miss
        self.assertIsNone(unit_sphere.intersect(point(2, 3, 0), direction(-1, 0, 0)))

    def test_pointing_away_misses(self):
        unit_sphere = Sphere(WHITE, WHITE, point(0, 0, 0), 1.0)
        # both roots are behind the origin
        self.assertEqual(unit_sphere.roots(point(2, 0, 0), direction(1, 0, 0)), (-3.0, -1.0))
        self.assertIsNone(unit_sphere.intersect(point(2, 0, 0), direction(1, 0, 0)))

    def test_origin_inside_hits_far_side(self):
        unit_sphere = Sphere(WHITE, WHITE, point(0, 0, 0), 1.0)
        hit = self.confirm_hit(unit_sphere, point(0, 0, 0), direction(1, 0, 0))
        self.assertAlmostEqual(hit.t, 1.0)
        np.testing.assert_almost_equal(hit.point.xyz, [1, 0, 0])

    def test_tangent(self):
        unit_sphere = Sphere(WHITE, WHITE, point(0, 0, 0), 1.0)
        t0, t1 = unit_sphere.roots(point(2, 1, 0), direction(-1, 0, 0))
        self.assertEqual(t0, t1)
        hit = self.confirm_hit(unit_sphere, point(2, 1, 0), direction(-1, 0, 0))
        self.assertAlmostEqual(hit.t, 2.0)
        np.testing.assert_almost_equal(hit.normal.xyz, [0, 1, 0])

    def test_nonunit_hits(self):
        # all the same as the first case, but scaled by 3 and shifted by (-1, -5, -7)
        sphere = Sphere(WHITE, WHITE, point(-1, -5, -7), 3.0)
        hit = self.confirm_hit(sphere, point(5, -5, -7), direction(-3, 0, 0))
        self.assertAlmostEqual(hit.t, 1.0)
        hit = self.confirm_hit(sphere, point(8, -5, -7), direction(-6, 0, 0))
        self.assertAlmostEqual(hit.t, 1.0)
        hit = self.confirm_hit(sphere, point(2, -3.5, -7), direction(-3, 0, 0))
        self.assertAlmostEqual(hit.t, 1 - np.sin(np.pi/3))

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            Sphere(WHITE, WHITE, point(0, 0, 0), 0.0)
        with self.assertRaises(TypeError):
            Sphere(WHITE, WHITE, direction(0, 0, 0), 1.0)
        with self.assertRaises(ValueError):
            Sphere(vec([1.2, 0, 0]), WHITE, point(0, 0, 0), 1.0)
        with self.assertRaises(ValueError):
            Sphere(WHITE, WHITE, point(0, 0, 0), 1.0, shininess=0)
        sphere = Sphere(WHITE, WHITE, point(0, 0, 0), 1.0)
        with self.assertRaises(TypeError):
            sphere.intersect(point(2, 0, 0), point(-1, 0, 0))
        with self.assertRaises(ValueError):
            sphere.intersect(point(2, 0, 0), direction(0, 0, 0))


class TestIntersection(unittest.TestCase):

    def test_validation(self):
        Intersection(point(0, 0, 0), direction(0, 1, 0), 0.0)
        with self.assertRaises(TypeError):
            Intersection(point(0, 0, 0), point(0, 1, 0), 1.0)
        with self.assertRaises(TypeError):
            Intersection(direction(0, 0, 0), direction(0, 1, 0), 1.0)
        with self.assertRaises(ValueError):
            Intersection(point(0, 0, 0), direction(0, 1, 0), -0.1)


class TestCamera(unittest.TestCase):

    def test_basis(self):
        cam = make_camera()
        np.testing.assert_almost_equal(cam.u.xyz, [1, 0, 0])
        np.testing.assert_almost_equal(cam.v.xyz, [0, 1, 0])
        np.testing.assert_almost_equal(cam.w.xyz, [0, 0, 1])

    def test_arbitrary_basis_is_orthonormal(self):
        cam = make_camera(point(3, 4, 5), direction(1, 2, 3), direction(1, 0, 0))
        for a in (cam.u, cam.v, cam.w):
            self.assertAlmostEqual(a.magnitude(), 1.0)
        self.assertAlmostEqual(dot(cam.u, cam.v), 0.0)
        self.assertAlmostEqual(dot(cam.u, cam.w), 0.0)
        self.assertAlmostEqual(dot(cam.v, cam.w), 0.0)
        assert_direction_matches(cam.w, vec([-1, -2, -3]))
        # right handed
        np.testing.assert_almost_equal(np.cross(cam.u.xyz, cam.v.xyz), cam.w.xyz)

    def test_image_plane_coords(self):
        cam = make_camera(l=-2.0, r=2.0, b=-1.0, t=1.0)
        self.assertEqual(cam.image_plane_coords(0, 0, 4, 2), (-1.5, -0.5))
        self.assertEqual(cam.image_plane_coords(3, 1, 4, 2), (1.5, 0.5))

    def test_perspective_rays(self):
        cam = make_camera(d=2.0)
        ray = cam.generate_ray(0, 0, 2, 2, perspective=True)
        np.testing.assert_almost_equal(ray.origin.xyz, [0, 0, 0])
        np.testing.assert_almost_equal(ray.direction.xyz, [-0.5, -0.5, -2])
        ray = cam.generate_ray(1, 1, 2, 2, perspective=True)
        np.testing.assert_almost_equal(ray.origin.xyz, [0, 0, 0])
        np.testing.assert_almost_equal(ray.direction.xyz, [0.5, 0.5, -2])
        np.testing.assert_almost_equal(ray.at(1.5).xyz, [0.75, 0.75, -3])
        self.assertIsInstance(ray.origin, Point)
        self.assertIsInstance(ray.direction, Direction)

    def test_orthographic_rays(self):
        cam = make_camera(location=point(1, 1, 1))
        ray = cam.generate_ray(0, 0, 2, 2, perspective=False)
        np.testing.assert_almost_equal(ray.origin.xyz, [0.5, 0.5, 1])
        np.testing.assert_almost_equal(ray.direction.xyz, [0, 0, -1])
        ray = cam.generate_ray(1, 0, 2, 2, perspective=False)
        np.testing.assert_almost_equal(ray.origin.xyz, [1.5, 0.5, 1])
        np.testing.assert_almost_equal(ray.direction.xyz, [0, 0, -1])

    def test_square_frame(self):
        # A camera with a frame where up is equal to w
        cam = make_camera(point(1, 2, 2), direction(0, 1, 0), direction(0, 0, 1))
        np.testing.assert_almost_equal(cam.u.xyz, [1, 0, 0])
        np.testing.assert_almost_equal(cam.v.xyz, [0, 0, 1])
        # Center ray is straight down the y axis
        ray = cam.generate_ray(1, 1, 3, 3)
        np.testing.assert_almost_equal(ray.origin.xyz, [1, 2, 2])
        assert_direction_matches(ray.direction, vec([0, 1, 0]))

    def test_invalid_cameras(self):
        with self.assertRaises(ValueError):
            make_camera(gaze=direction(0, 2, 0), up=direction(0, 1, 0))
        with self.assertRaises(ValueError):
            make_camera(l=0.0)
        with self.assertRaises(ValueError):
            make_camera(b=0.5)
        with self.assertRaises(ValueError):
            make_camera(d=0.0)
        with self.assertRaises(TypeError):
            Camera(point(0, 0, 0), point(0, 0, -1), direction(0, 1, 0), -1, 1, 1, -1, 1)
        with self.assertRaises(TypeError):
            Camera(direction(0, 0, 0), direction(0, 0, -1), direction(0, 1, 0), -1, 1, 1, -1, 1)


class TestPointLight(unittest.TestCase):

    def shading_test(self, p, n, v, l, r, I, obj):
        # test with shading at p with normal n and view/illum directions v/l
        # r is distance to light, I is intensity
        t = 1.3        # arbitrary value
        d = -2.3 * v   # arbitrary scale
        ray = Ray(p - t*d, d)  # ray consistent with hit
        hit = Intersection(p, n, t)
        light = PointLight(WHITE, I, p + r * l.normalized())
        return light.illuminate(ray, hit, obj)

    def sphere(self, k_d, k_s=WHITE, shininess=None):
        return Sphere(k_d, k_s, point(0, -1, 0), 1.0, shininess)

    def test_diffuse(self):
        # light directly overhead, unit distance and intensity
        np.testing.assert_allclose(
            self.shading_test(
                point(0, 0, 0), direction(0, 1, 0), direction(1, 1, 0),  # p, n, v
                direction(0, 1, 0), 1, 1.0,  # l, r, I
                self.sphere(vec([0.2, 0.4, 0.6]))
            ),
            vec([0.2, 0.4, 0.6])
        )
        # light at 60 degrees, unit distance and intensity
        np.testing.assert_allclose(
            self.shading_test(
                point(0, 0, 0), direction(0, 1, 0), direction(1, 1, 0),  # p, n, v
                direction(0, 1, np.sqrt(3)), 1, 1.0,  # l, r, I
                self.sphere(vec([0.2, 0.4, 0.6]))
            ),
            0.5 * vec([0.2, 0.4, 0.6])
        )

    def test_unnormalized_normal(self):
        np.testing.assert_allclose(
            self.shading_test(
                point(0, 0, 0), direction(0, 5, 0), direction(1, 1, 0),
                direction(0, 1, 0), 1, 1.0,
                self.sphere(vec([0.2, 0.4, 0.6]))
            ),
            vec([0.2, 0.4, 0.6])
        )

    def test_inverse_square(self):
        near = self.shading_test(
            point(0, 0, 0), direction(0, 1, 0), direction(0, 1, 0),
            direction(0, 1, 0), 1, 1.0, self.sphere(vec([0.8, 0.8, 0.8])))
        far = self.shading_test(
            point(0, 0, 0), direction(0, 1, 0), direction(0, 1, 0),
            direction(0, 1, 0), 2, 1.0, self.sphere(vec([0.8, 0.8, 0.8])))
        np.testing.assert_allclose(far, near / 4)

    def test_light_behind_surface(self):
        np.testing.assert_allclose(
            self.shading_test(
                point(0, 0, 0), direction(0, 1, 0), direction(0, 1, 0),
                direction(0, -1, 0.2), 1, 1.0,
                self.sphere(vec([0.2, 0.4, 0.6]))
            ),
            vec([0, 0, 0])
        )

    def test_light_color(self):
        ray = Ray(point(0, 2, 0), direction(0, -1, 0))
        hit = Intersection(point(0, 0, 0), direction(0, 1, 0), 2.0)
        light = PointLight(vec([1.0, 0.5, 0.0]), 1.0, point(0, 1, 0))
        np.testing.assert_allclose(light.illuminate(ray, hit, self.sphere(vec([0.4, 0.4, 0.4]))),
                                   [0.4, 0.2, 0.0])

    def test_coincident_light_is_finite(self):
        ray = Ray(point(0, 2, 0), direction(0, -1, 0))
        hit = Intersection(point(0, 0, 0), direction(0, 1, 0), 2.0)
        obj = self.sphere(vec([0.2, 0.0, 0.6]))
        light = PointLight(WHITE, 1.0, point(0, 0, 0))
        contribution = light.illuminate(ray, hit, obj)
        self.assertTrue(np.all(np.isfinite(contribution)))
        color = shade(ray, hit, obj, AmbientLight(WHITE, 0.1), [light])
        np.testing.assert_allclose(color, [1.0, 0.0, 1.0])

    def test_specular_extension(self):
        ray = Ray(point(0, 2, 0), direction(0, -1, 0))
        hit = Intersection(point(0, 0, 0), direction(0, 1, 0), 2.0)
        light = PointLight(WHITE, 1.0, point(0, 1, 0))
        matte = self.sphere(vec([0.2, 0.2, 0.2]), vec([0.5, 0.5, 0.5]))
        shiny = self.sphere(vec([0.2, 0.2, 0.2]), vec([0.5, 0.5, 0.5]), shininess=10)
        np.testing.assert_allclose(light.illuminate(ray, hit, matte), [0.2, 0.2, 0.2])
        np.testing.assert_allclose(light.illuminate(ray, hit, shiny), [0.7, 0.7, 0.7])

    def test_invalid_lights(self):
        with self.assertRaises(ValueError):
            PointLight(WHITE, 0.0, point(0, 0, 0))
        with self.assertRaises(ValueError):
            AmbientLight(vec([0, 0, 2]), 1.0)
        with self.assertRaises(TypeError):
            PointLight(WHITE, 1.0, direction(0, 0, 0))


class TestShade(unittest.TestCase):

    def setUp(self):
        self.ray = Ray(point(0, 2, 0), direction(0, -1, 0))
        self.hit = Intersection(point(0, 0, 0), direction(0, 1, 0), 2.0)
        self.obj = Sphere(vec([0.5, 0.25, 1.0]), WHITE, point(0, -1, 0), 1.0)

    def test_ambient_only(self):
        ambient = AmbientLight(vec([1.0, 0.5, 0.0]), 0.5)
        np.testing.assert_allclose(shade(self.ray, self.hit, self.obj, ambient, []),
                                   [0.25, 0.0625, 0.0])

    def test_ambient_plus_point_lights(self):
        ambient = AmbientLight(WHITE, 0.2)
        lights = [PointLight(WHITE, 1.0, point(0, 2, 0)), PointLight(WHITE, 0.5, point(0, 1, 0))]
        # 0.2 + 1/4 + 0.5/1 = 0.95
        np.testing.assert_allclose(shade(self.ray, self.hit, self.obj, ambient, lights),
                                   [0.475, 0.2375, 0.95])

    def test_clamped(self):
        ambient = AmbientLight(WHITE, 1.0)
        lights = [PointLight(WHITE, 10.0, point(0, 1, 0))] * 3
        color = shade(self.ray, self.hit, self.obj, ambient, lights)
        self.assertTrue(is_color(color))
        np.testing.assert_allclose(color, [1.0, 1.0, 1.0])


class TestScene(unittest.TestCase):

    def test_empty_scene_is_background(self):
        background = vec([0.2, 0.3, 0.5])
        for perspective in (True, False):
            scene = make_scene(perspective, background=background)
            image = scene.render(5, 4)
            self.assertEqual((image.width, image.height), (5, 4))
            np.testing.assert_array_equal(image.pixels, np.broadcast_to(background, (4, 5, 3)))

    def test_nearest_hit_wins(self):
        scene = make_scene(camera=make_camera(l=-0.1, r=0.1, b=-0.1, t=0.1))
        far = Sphere(vec([0, 1, 0]), WHITE, point(0, 0, -10), 1.0)
        near = Sphere(vec([1, 0, 0]), WHITE, point(0, 0, -3), 1.0)
        scene.add_object(far)
        scene.add_object(near)
        hit, obj = scene.intersect(scene.camera.generate_ray(1, 1, 3, 3))
        self.assertIs(obj, near)
        self.assertAlmostEqual(hit.t, 2.0)
        image = scene.render(3, 3)
        np.testing.assert_allclose(image.pixel(1, 1), [1, 0, 0])

    def test_later_miss_keeps_earlier_hit(self):
        scene = make_scene(camera=make_camera(l=-0.1, r=0.1, b=-0.1, t=0.1))
        scene.add_object(Sphere(vec([0, 0, 1]), WHITE, point(0, 0, -3), 1.0))
        scene.add_object(Sphere(vec([0, 1, 0]), WHITE, point(50, 50, -3), 1.0))
        image = scene.render(3, 3)
        np.testing.assert_allclose(image.pixels, np.broadcast_to([0, 0, 1], (3, 3, 3)))

    def test_sphere_behind_camera_not_drawn(self):
        background = vec([0.1, 0.1, 0.1])
        scene = make_scene(background=background)
        scene.add_object(Sphere(WHITE, WHITE, point(0, 0, 5), 1.0))
        image = scene.render(3, 3)
        np.testing.assert_array_equal(image.pixels, np.broadcast_to(background, (3, 3, 3)))

    def test_ties_go_to_first_added(self):
        scene = make_scene()
        first = Sphere(vec([1, 0, 0]), WHITE, point(0, 0, -3), 1.0)
        second = Sphere(vec([0, 1, 0]), WHITE, point(0, 0, -3), 1.0)
        scene.add_object(first)
        scene.add_object(second)
        _, obj = scene.intersect(Ray(point(0, 0, 0), direction(0, 0, -1)))
        self.assertIs(obj, first)

    def test_miss(self):
        scene = make_scene()
        self.assertEqual(scene.intersect(Ray(point(0, 0, 0), direction(0, 0, -1))), (None, None))
        np.testing.assert_array_equal(scene.trace(Ray(point(0, 0, 0), direction(0, 0, -1))),
                                      scene.background_color)

    def test_row_zero_is_bottom(self):
        background = vec([0, 0, 0])
        scene = make_scene(False, background=background,
                           camera=make_camera(l=-0.5, r=0.5, b=-0.5, t=0.5))
        scene.add_object(Sphere(WHITE, WHITE, point(0, 0.3, -3), 0.2))
        image = scene.render(11, 11)
        np.testing.assert_allclose(image.pixel(5, 8), [1, 1, 1])
        np.testing.assert_array_equal(image.pixel(5, 2), background)

    def test_inverse_square_attenuation(self):
        from ExampleSceneDef import CenteredSphereExample
        near = CenteredSphereExample(light_distance=2.0).render(output_shape=[5, 5])
        far = CenteredSphereExample(light_distance=4.0).render(output_shape=[5, 5])
        self.assertGreater(near.pixel(2, 2).sum(), far.pixel(2, 2).sum())

    def test_parallax_off_axis(self):
        def scene_for(perspective):
            scene = make_scene(perspective, ambient=1.0,
                               camera=make_camera(l=-0.5, r=0.5, b=-0.5, t=0.5))
            scene.add_object(Sphere(WHITE, WHITE, point(1.0, 0, -3), 0.6))
            return scene
        persp = scene_for(True).render(9, 9)
        ortho = scene_for(False).render(9, 9)
        self.assertFalse(np.array_equal(persp.pixels, ortho.pixels))

    def test_centered_sphere_projections_agree_on_axis(self):
        # only the on-axis ray is shared by both projections, so whole images differ
        from ExampleSceneDef import CenteredSphereExample
        persp = CenteredSphereExample(perspective=True).render(output_shape=[7, 7])
        ortho = CenteredSphereExample(perspective=False).render(output_shape=[7, 7])
        np.testing.assert_allclose(persp.pixel(3, 3), ortho.pixel(3, 3))
        for image in (persp, ortho):
            np.testing.assert_allclose(image.pixels, image.pixels[:, ::-1], atol=1e-9)
            np.testing.assert_allclose(image.pixels, image.pixels[::-1, :], atol=1e-9)

    def test_render_output_is_color(self):
        from ExampleSceneDef import ThreeSpheresExample
        image = ThreeSpheresExample().render(output_shape=[6, 8])
        self.assertTrue(np.all(image.pixels >= 0.0))
        self.assertTrue(np.all(image.pixels <= 1.0))

    def test_render_returns_new_image(self):
        scene = make_scene()
        a = scene.render(2, 2)
        b = scene.render(2, 2)
        a.set_pixel(0, 0, vec([1, 1, 1]))
        np.testing.assert_array_equal(b.pixel(0, 0), [0, 0, 0])

    def test_invalid_arguments(self):
        scene = make_scene()
        with self.assertRaises(ValueError):
            scene.render(0, 3)
        with self.assertRaises(ValueError):
            scene.render(3, -1)
        with self.assertRaises(TypeError):
            scene.render(2.5, 3)
        with self.assertRaises(TypeError):
            scene.add_object("sphere")
        with self.assertRaises(TypeError):
            scene.add_point_light(AmbientLight(WHITE, 1.0))
        with self.assertRaises(ValueError):
            Scene(AmbientLight(WHITE, 1.0), vec([0, 0, -1]), make_camera())
        with self.assertRaises(TypeError):
            Scene(PointLight(WHITE, 1.0, point(0, 0, 0)), BLACK, make_camera())

    def test_collections_are_read_only_views(self):
        scene = make_scene()
        light = PointLight(WHITE, 1.0, point(0, 5, 0))
        scene.add_point_light(light)
        self.assertEqual(scene.point_lights, (light,))
        self.assertEqual(scene.objects, ())


if __name__ == '__main__':
    unittest.main()
