from PIL import Image
import numpy as np


def to_color8(color):
    """Round and clamp an RGB color to 8-bit channels; NaN channels become 0."""
    c = np.nan_to_num(np.asarray(color, dtype=np.float64), nan=0., posinf=255., neginf=0.)
    return np.clip(np.round(c), 0, 255).astype(np.uint8)


class Canvas(object):
    """Canvas

    An RGBA pixel buffer that rendered colors are written into.  Pixels are addressed in
    raster coordinates: (0, 0) is the top left corner and y grows downwards.
    """

    def __init__(self, width, height, fill=None):
        """Create a width x height canvas.

        Parameters:
          width, height : int -- size in pixels, both > 0
          fill : (3,) -- optional RGB color for every pixel; without it the canvas
                 starts fully transparent black
        """
        assert width > 0 and height > 0, "canvas must have a positive size"
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 4), np.uint8)
        if fill is not None:
            self.pixels[:, :, :3] = to_color8(fill)
            self.pixels[:, :, 3] = 255

    @property
    def shape(self):
        return self.pixels.shape

    def put_pixel(self, px, py, color):
        """Write an opaque pixel.  Positions outside the canvas are ignored.

        Parameters:
          px, py : int -- raster position
          color : (3,) -- RGB color on the 0-255 scale; rounded and clamped here
        """
        if px < 0 or px >= self.width or py < 0 or py >= self.height:
            return
        self.pixels[py, px, :3] = to_color8(color)
        self.pixels[py, px, 3] = 255

    def get_pixel(self, px, py):
        """Return the (4,) RGBA bytes at a raster position."""
        return self.pixels[py, px].copy()

    def pil(self):
        return Image.fromarray(self.pixels)

    def write_to_file(self, output_path):
        self.pil().save(output_path)
