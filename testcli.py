import os
import tempfile
import unittest

import numpy as np

import cli
from ExampleSceneDef import EXAMPLES, OrthoFriendlyExample
from ImLite import Image


class TestCli(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def test_main_writes_ppm(self):
        out = os.path.join(self.tmp.name, 'ortho.ppm')
        status = cli.main(['ortho_friendly', '--width', '4', '--height', '3', '-o', out,
                           '--log-level', 'WARNING'])
        self.assertEqual(status, 0)
        im = Image.read_ppm(out)
        self.assertEqual((im.width, im.height), (4, 3))

    def test_main_reports_write_failure(self):
        out = os.path.join(self.tmp.name, 'missing', 'out.ppm')
        status = cli.main(['ortho_friendly', '--width', '2', '--height', '2', '-o', out,
                           '--log-level', 'ERROR'])
        self.assertEqual(status, 1)

    def test_main_rejects_bad_size(self):
        self.assertEqual(cli.main(['ortho_friendly', '--width', '0', '--log-level', 'ERROR']), 2)

    def test_unknown_scene(self):
        with self.assertRaises(SystemExit):
            cli.main(['no_such_scene'])

    def test_render_helper(self):
        out = os.path.join(self.tmp.name, 'o.png')
        image, ok = cli.render(OrthoFriendlyExample().scene, 5, 5, out)
        self.assertTrue(ok)
        self.assertTrue(os.path.exists(out))
        self.assertEqual(image.width, 5)

    def test_examples_build(self):
        for name, build in EXAMPLES.items():
            for perspective in (True, False):
                example = build(perspective=perspective)
                self.assertEqual(example.scene.perspective, perspective, name)

    def test_ortho_friendly_sees_sphere_in_center(self):
        im = OrthoFriendlyExample().render(output_shape=[5, 5])
        # ambient 0.5 on a 0.5 gray sphere, black background
        np.testing.assert_allclose(im.pixel(2, 2), [0.25, 0.25, 0.25])
        np.testing.assert_array_equal(im.pixel(0, 0), [0, 0, 0])


if __name__ == '__main__':
    unittest.main()
