import os
import tempfile
import unittest

import numpy as np
from PIL import Image as PIM

from ImLite import Image, discretize
from utils import vec

RED = vec([1, 0, 0])
BLUE = vec([0, 0, 1])


class TestImage(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def path(self, name):
        return os.path.join(self.tmp.name, name)

    def corners(self):
        im = Image(2, 2, vec([0, 0, 0]))
        im.set_pixel(0, 0, RED)   # bottom left
        im.set_pixel(1, 1, BLUE)  # top right
        return im

    def test_fill(self):
        im = Image(3, 2, vec([0.1, 0.2, 0.3]))
        self.assertEqual((im.width, im.height), (3, 2))
        np.testing.assert_array_equal(im.pixel(2, 1), [0.1, 0.2, 0.3])

    def test_pixel_returns_copy(self):
        im = Image(1, 1, vec([0, 0, 0]))
        im.pixel(0, 0)[0] = 1.0
        np.testing.assert_array_equal(im.pixel(0, 0), [0, 0, 0])

    def test_bounds(self):
        im = Image(3, 2)
        self.assertTrue(im.is_coordinate(2, 1))
        self.assertFalse(im.is_coordinate(3, 1))
        self.assertFalse(im.is_coordinate(0, -1))
        with self.assertRaises(IndexError):
            im.pixel(3, 0)
        with self.assertRaises(IndexError):
            im.set_pixel(0, 2, RED)
        with self.assertRaises(ValueError):
            im.set_pixel(0, 0, vec([0, 1.5, 0]))
        with self.assertRaises(ValueError):
            Image(0, 2)
        with self.assertRaises(TypeError):
            Image(0.5, 1)
        with self.assertRaises(TypeError):
            Image(2.7, 1)
        with self.assertRaises(TypeError):
            Image(True, 1)
        with self.assertRaises(ValueError):
            Image(2, 2, vec([-1, 0, 0]))

    def test_discretize(self):
        self.assertEqual(discretize(0.0), 0)
        self.assertEqual(discretize(1.0), 255)
        self.assertEqual(discretize(0.2), 51)
        # exact halves round up
        self.assertEqual(discretize(0.5 / 255), 1)
        self.assertEqual(discretize(2.5 / 255), 3)
        self.assertEqual(discretize(0.5), 128)
        with self.assertRaises(ValueError):
            discretize(1.5)

    def test_ppm_half_values(self):
        im = Image(1, 1, vec([0.5 / 255, 2.5 / 255, 0.5]))
        self.assertEqual(list(im.ppm_lines())[3], '1 3 128')
        np.testing.assert_array_equal(im.ipixels[0, 0], [1, 3, 128])

    def test_ppm_rows_top_to_bottom(self):
        self.assertEqual(list(self.corners().ppm_lines()), [
            'P3',
            '2 2',
            '255',
            '0 0 0 0 0 255',
            '255 0 0 0 0 0',
        ])

    def test_ppm_round_trip(self):
        rng = np.random.default_rng(7)
        im = Image.FromPixels(rng.random((4, 5, 3)))
        self.assertTrue(im.write_ppm(self.path('out.ppm')))
        back = Image.read_ppm(self.path('out.ppm'))
        self.assertEqual((back.width, back.height), (5, 4))
        np.testing.assert_allclose(back.pixels, np.floor(im.pixels * 255 + 0.5) / 255)
        # already discretized values survive unchanged
        self.assertTrue(back.write_ppm(self.path('again.ppm')))
        self.assertEqual(Image.read_ppm(self.path('again.ppm')), back)

    def test_read_ppm_with_comments(self):
        with open(self.path('c.ppm'), 'w') as f:
            f.write("P3\n# a comment\n1 1\n255\n255 0 51 # trailing\n")
        im = Image.read_ppm(self.path('c.ppm'))
        np.testing.assert_allclose(im.pixel(0, 0), [1.0, 0.0, 0.2])

    def test_read_ppm_rejects_garbage(self):
        with open(self.path('bad.ppm'), 'w') as f:
            f.write("P6\n1 1\n255\n0 0 0\n")
        with self.assertRaises(ValueError):
            Image.read_ppm(self.path('bad.ppm'))
        with open(self.path('short.ppm'), 'w') as f:
            f.write("P3\n2 1\n255\n0 0 0\n")
        with self.assertRaises(ValueError):
            Image.read_ppm(self.path('short.ppm'))

    def test_write_failure_is_reported(self):
        missing = self.path(os.path.join('no', 'such', 'dir', 'out.ppm'))
        with self.assertLogs('ImLite', level='ERROR'):
            self.assertFalse(self.corners().write_ppm(missing))

    def test_write_png(self):
        im = self.corners()
        self.assertTrue(im.writeToFile(self.path('out.png')))
        data = np.array(PIM.open(self.path('out.png')).convert('RGB'))
        np.testing.assert_array_equal(data, im.ipixels)
        # top row of the file is the highest row index
        np.testing.assert_array_equal(data[0, 1], [0, 0, 255])
        np.testing.assert_array_equal(data[1, 0], [255, 0, 0])

    def test_write_to_file_picks_ppm(self):
        im = self.corners()
        self.assertTrue(im.writeToFile(self.path('out.PPM')))
        with open(self.path('out.PPM')) as f:
            self.assertEqual(f.readline().strip(), 'P3')


if __name__ == '__main__':
    unittest.main()
