import os
import tempfile
import unittest
import numpy as np
from PIL import Image

import cli
from canvas import Canvas, to_color8
from scenedef import BasicSpheresExample, SingleSphereExample
from vectors import vec


class TestCanvas(unittest.TestCase):

    def test_starts_transparent(self):
        canvas = Canvas(4, 3)
        self.assertEqual(canvas.shape, (3, 4, 4))
        self.assertTrue(np.all(canvas.pixels == 0))

    def test_fill(self):
        canvas = Canvas(4, 3, fill=vec([10, 20, 30]))
        self.assertTrue(np.all(canvas.pixels == [10, 20, 30, 255]))

    def test_put_pixel_is_opaque(self):
        canvas = Canvas(4, 3)
        canvas.put_pixel(1, 2, vec([10, 20, 30]))
        np.testing.assert_array_equal(canvas.get_pixel(1, 2), [10, 20, 30, 255])
        np.testing.assert_array_equal(canvas.get_pixel(2, 1), [0, 0, 0, 0])

    def test_put_pixel_rounds_and_clamps(self):
        canvas = Canvas(2, 2)
        canvas.put_pixel(0, 0, vec([300, -20, 127.6]))
        np.testing.assert_array_equal(canvas.get_pixel(0, 0), [255, 0, 128, 255])
        canvas.put_pixel(1, 1, vec([np.nan, np.inf, -np.inf]))
        np.testing.assert_array_equal(canvas.get_pixel(1, 1), [0, 255, 0, 255])

    def test_to_color8(self):
        c = to_color8([0.4, 254.5001, 1e6])
        self.assertEqual(c.dtype, np.uint8)
        np.testing.assert_array_equal(c, [0, 255, 255])

    def test_out_of_bounds_ignored(self):
        canvas = Canvas(4, 3)
        for px, py in [(-1, 0), (4, 0), (0, -1), (0, 3), (100, 100)]:
            canvas.put_pixel(px, py, vec([255, 255, 255]))
        self.assertTrue(np.all(canvas.pixels == 0))

    def test_pil_and_file(self):
        canvas = Canvas(5, 4)
        canvas.put_pixel(3, 1, vec([1, 2, 3]))
        im = canvas.pil()
        self.assertEqual(im.size, (5, 4))
        self.assertEqual(im.mode, 'RGBA')
        self.assertEqual(im.getpixel((3, 1)), (1, 2, 3, 255))
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'out.png')
            canvas.write_to_file(path)
            with Image.open(path) as saved:
                np.testing.assert_array_equal(np.array(saved), canvas.pixels)


class TestSceneDefs(unittest.TestCase):

    def test_basic_spheres(self):
        example = BasicSpheresExample()
        self.assertEqual(len(example.scene.spheres), 4)
        self.assertEqual(len(example.scene.lights), 3)
        np.testing.assert_array_equal(example.scene.bg_color, [255, 255, 255])
        np.testing.assert_array_equal(example.camera.eye, [0, 0, 0])
        canvas = example.render(output_shape=[12, 16])
        self.assertEqual(canvas.shape, (12, 16, 4))
        # below center the ray meets the red sphere, which has no blue
        r, g, b, a = canvas.get_pixel(8, 11)
        self.assertEqual(a, 255)
        self.assertEqual(b, 0)
        self.assertGreater(r, 0)

    def test_render_to_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'single.png')
            self.assertIsNone(SingleSphereExample().render(path, [8, 8]))
            with Image.open(path) as saved:
                self.assertEqual(saved.size, (8, 8))
                self.assertEqual(saved.getpixel((4, 4)), (255, 0, 0, 255))


class TestCli(unittest.TestCase):

    def test_render(self):
        example = SingleSphereExample()
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'cli.png')
            canvas = cli.render(example.camera, example.scene,
                                ['--width', '8', '--height', '6', '-o', path, '-q'])
            self.assertEqual(canvas.shape, (6, 8, 4))
            self.assertTrue(os.path.exists(path))

    def test_default_output_name(self):
        args = cli.make_parser('three_spheres.py').parse_args([])
        self.assertEqual(args.output, 'three_spheres.png')
        self.assertEqual((args.width, args.height), (600, 600))

    def test_rejects_bad_size(self):
        parser = cli.make_parser('basic')
        with self.assertRaises(SystemExit):
            parser.parse_args(['--width', '0'])

    def test_main(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'basic.png')
            cli.main(['--width', '6', '--height', '6', '-o', path, '-q'])
            with Image.open(path) as saved:
                self.assertEqual(saved.size, (6, 6))


if __name__ == '__main__':
    unittest.main()
