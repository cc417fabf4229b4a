import unittest
import numpy as np
from utils import *


class TestHomogeneous(unittest.TestCase):

    def test_tagging(self):
        np.testing.assert_array_equal(point(1, 2, 3).homogeneous, [1, 2, 3, 1])
        np.testing.assert_array_equal(direction(1, 2, 3).homogeneous, [1, 2, 3, 0])

    def test_legal_arithmetic(self):
        p, q = point(1, 2, 3), point(0, 1, 1)
        d = direction(1, 0, 0)
        self.assertEqual(p - q, direction(1, 1, 2))
        self.assertEqual(p + d, point(2, 2, 3))
        self.assertEqual(d + p, point(2, 2, 3))
        self.assertEqual(p - d, point(0, 2, 3))
        self.assertEqual(d + d, direction(2, 0, 0))
        self.assertEqual(d - d, direction(0, 0, 0))
        self.assertEqual(2 * d, direction(2, 0, 0))
        self.assertEqual(d * 0.5, direction(0.5, 0, 0))
        self.assertEqual(d / 2, direction(0.5, 0, 0))
        self.assertEqual(-d, direction(-1, 0, 0))

    def test_illegal_arithmetic(self):
        p, d = point(1, 2, 3), direction(1, 0, 0)
        with self.assertRaises(TypeError):
            p + p
        with self.assertRaises(TypeError):
            d - p
        with self.assertRaises(TypeError):
            p * 2
        with self.assertRaises(TypeError):
            d * d
        with self.assertRaises(TypeError):
            dot(p, d)
        with self.assertRaises(TypeError):
            cross(d, p)

    def test_points_and_directions_differ(self):
        self.assertNotEqual(point(1, 2, 3), direction(1, 2, 3))

    def test_from_homogeneous(self):
        self.assertEqual(from_homogeneous([1, 2, 3, 1]), point(1, 2, 3))
        self.assertEqual(from_homogeneous([1, 2, 3, 0]), direction(1, 2, 3))
        with self.assertRaises(ValueError):
            from_homogeneous([1, 2, 3, 0.5])
        with self.assertRaises(ValueError):
            from_homogeneous([1, 2, 3])

    def test_coordinates_must_be_finite(self):
        with self.assertRaises(ValueError):
            point(np.nan, 0, 0)
        with self.assertRaises(ValueError):
            direction(0, np.inf, 0)

    def test_immutable(self):
        p = point(1, 2, 3)
        with self.assertRaises(ValueError):
            p.xyz[0] = 5

    def test_magnitude_and_normalize(self):
        d = direction(3, 0, 4)
        self.assertAlmostEqual(d.magnitude(), 5.0)
        np.testing.assert_allclose(d.normalized().xyz, [0.6, 0, 0.8])
        with self.assertRaises(ValueError):
            direction(0, 0, 0).normalized()

    def test_dot_and_cross(self):
        x, y = direction(1, 0, 0), direction(0, 1, 0)
        self.assertEqual(dot(x, y), 0.0)
        self.assertEqual(dot(x, x), 1.0)
        self.assertEqual(cross(x, y), direction(0, 0, 1))


class TestColor(unittest.TestCase):

    def test_is_color(self):
        self.assertTrue(is_color_intensity(0.0))
        self.assertTrue(is_color_intensity(1.0))
        self.assertFalse(is_color_intensity(-0.01))
        self.assertFalse(is_color_intensity(1.01))
        self.assertTrue(is_color(vec([0, 0.5, 1])))
        self.assertFalse(is_color(vec([0, 0.5, 1.5])))
        self.assertFalse(is_color(vec([0, 0.5])))
        self.assertFalse(is_color(vec([np.nan, 0, 0])))

    def test_color(self):
        np.testing.assert_array_equal(color(0.1, 0.2, 0.3), [0.1, 0.2, 0.3])
        with self.assertRaises(ValueError):
            color(0.1, -0.2, 0.3)
        with self.assertRaises(ValueError):
            as_color([2, 0, 0])

    def test_web_color(self):
        np.testing.assert_allclose(web_color(0xFF8000), [1.0, 128 / 255.0, 0.0])
        np.testing.assert_allclose(web_color(0x000000), [0, 0, 0])
        np.testing.assert_allclose(web_color(0xFFFFFF), [1, 1, 1])
        with self.assertRaises(ValueError):
            web_color(0x1000000)

    def test_srgb8(self):
        np.testing.assert_array_equal(to_srgb8(vec([0.0, 1.0, 2.0])), [0, 255, 255])


if __name__ == '__main__':
    unittest.main()
