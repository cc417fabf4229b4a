import logging

import matplotlib.pyplot as plt
import numpy as np
from PIL import Image as PIM

from utils import as_color, is_color, is_color_intensity, to_srgb8

logger = logging.getLogger(__name__)

PPM_MAGIC = 'P3'
PPM_MAXVAL = 255


def discretize(intensity):
    """Convert a color intensity in [0, 1] to a byte value in [0, 255]."""
    if not is_color_intensity(intensity):
        raise ValueError(f"intensity {intensity} is outside [0, 1]")
    # halves round away from zero
    return min(max(int(np.floor(intensity * 255.0 + 0.5)), 0), 255)


class Image(object):
    """Image

    A width x height grid of colors. Row 0 is the bottom scanline, so rows
    are written to file in decreasing index order.
    """

    def __init__(self, width, height, fill=None):
        for value in (width, height):
            if (isinstance(value, bool) or not isinstance(value, (int, np.integer))):
                raise TypeError("image dimensions must be ints, got {!r}".format(value))
        if (width <= 0 or height <= 0):
            raise ValueError("image dimensions must be positive, got {}x{}".format(width, height))
        if (fill is None):
            fill = [0.0, 0.0, 0.0]
        fill = as_color(fill)
        self._samples = np.empty((int(height), int(width), 3), dtype=np.float64)
        self._samples[:] = fill

    @classmethod
    def FromPixels(cls, pixels):
        """Wrap a (height, width, 3) array of colors, row 0 at the bottom."""
        pixels = np.array(pixels, dtype=np.float64)
        if (pixels.ndim != 3 or pixels.shape[2] != 3):
            raise ValueError("expected a (height, width, 3) array, got {}".format(pixels.shape))
        if (np.any(pixels < 0.0) or np.any(pixels > 1.0)):
            raise ValueError("pixel channels must lie in [0, 1]")
        im = cls(pixels.shape[1], pixels.shape[0])
        im._samples[:] = pixels
        return im

    @property
    def pixels(self):
        return self._samples

    @property
    def shape(self):
        return np.asarray(self._samples.shape)[:]

    @property
    def width(self):
        return self._samples.shape[1]

    @property
    def height(self):
        return self._samples.shape[0]

    def is_x_coordinate(self, x):
        return 0 <= x < self.width

    def is_y_coordinate(self, y):
        return 0 <= y < self.height

    def is_coordinate(self, x, y):
        return self.is_x_coordinate(x) and self.is_y_coordinate(y)

    def pixel(self, x, y):
        if (not self.is_coordinate(x, y)):
            raise IndexError("pixel ({}, {}) is outside a {}x{} image".format(x, y, self.width, self.height))
        return self._samples[y, x].copy()

    def set_pixel(self, x, y, color):
        if (not self.is_coordinate(x, y)):
            raise IndexError("pixel ({}, {}) is outside a {}x{} image".format(x, y, self.width, self.height))
        if (not is_color(color)):
            raise ValueError("invalid color {}".format(color))
        self._samples[y, x] = color

    def __eq__(self, other):
        if (not isinstance(other, Image)):
            return NotImplemented
        return bool(np.array_equal(self._samples, other.pixels))

    @property
    def ipixels(self):
        """8-bit pixels in top-to-bottom scanline order."""
        return np.vectorize(discretize, otypes=[np.uint8])(self._samples[::-1])

    def PIL(self, gamma_correct=False):
        if (gamma_correct):
            return PIM.fromarray(to_srgb8(self._samples[::-1]))
        return PIM.fromarray(self.ipixels)

    ##################//--PPM--\\##################

    def ppm_lines(self):
        """Yield the plain-text PPM encoding of the image, one line at a time.

        https://en.wikipedia.org/wiki/Netpbm_format
        """
        yield PPM_MAGIC
        yield "{} {}".format(self.width, self.height)
        yield str(PPM_MAXVAL)
        for y in range(self.height - 1, -1, -1):
            yield ' '.join(
                "{} {} {}".format(*(discretize(c) for c in self._samples[y, x]))
                for x in range(self.width)
            )

    def write_ppm(self, path):
        """Write the image to a file in the plain PPM format.

        Return True on success or False in the case of an I/O error.
        """
        try:
            with open(path, 'w') as f:
                for line in self.ppm_lines():
                    f.write(line)
                    f.write('\n')
        except OSError as e:
            logger.error("could not write %s: %s", path, e)
            return False
        logger.info("wrote %dx%d image to %s", self.width, self.height, path)
        return True

    @classmethod
    def read_ppm(cls, path):
        """Read a plain (P3) PPM file written by write_ppm or any other tool."""
        with open(path) as f:
            tokens = []
            for line in f:
                tokens.extend(line.split('#', 1)[0].split())

        if (not tokens or tokens[0] != PPM_MAGIC):
            raise ValueError("{} is not a plain PPM file".format(path))
        try:
            width, height, maxval = (int(s) for s in tokens[1:4])
            values = np.array([int(s) for s in tokens[4:]], dtype=np.float64)
        except ValueError as e:
            raise ValueError("malformed PPM file {}: {}".format(path, e)) from e
        if (width <= 0 or height <= 0 or maxval <= 0):
            raise ValueError("malformed PPM header in {}".format(path))
        if (values.size != width * height * 3):
            raise ValueError("{} has {} samples, expected {}".format(path, values.size, width * height * 3))
        if (np.any(values < 0) or np.any(values > maxval)):
            raise ValueError("{} has samples outside [0, {}]".format(path, maxval))

        rows = (values / maxval).reshape(height, width, 3)
        return cls.FromPixels(rows[::-1])

    ##################\\--PPM--//##################

    def writeToFile(self, output_path, gamma_correct=False):
        """Save as plain PPM for a .ppm path, otherwise through Pillow.

        Return True on success or False in the case of an I/O error.
        """
        if (str(output_path).lower().endswith('.ppm')):
            return self.write_ppm(output_path)
        try:
            self.PIL(gamma_correct=gamma_correct).save(output_path)
        except (OSError, ValueError) as e:
            logger.error("could not write %s: %s", output_path, e)
            return False
        logger.info("wrote %dx%d image to %s", self.width, self.height, output_path)
        return True

    def show(self, title=None, new_figure=True, **kwargs):
        if (new_figure):
            plt.figure(num=title)
        plt.imshow(self._samples, origin='lower', **kwargs)
        plt.axis('off')
        if (title):
            plt.title(title)
        plt.show()
