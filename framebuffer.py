import numpy as np
from PIL import Image


class ImageWriteError(Exception):
    pass


def to_rgba8(color):
    """Convert a float RGB color to 8-bit RGBA, clamping each channel to [0, 255]."""
    scaled = np.nan_to_num(np.asarray(color, dtype=np.float64) * 255.0, nan=0.0)
    channels = np.clip(scaled, 0, 255).astype(np.uint8)
    return np.array([channels[0], channels[1], channels[2], 255], dtype=np.uint8)


class Framebuffer:
    def __init__(self, width, height, buffer=None, fill_alpha=True):
        """
        RGBA8 pixel grid of height rows by width columns.

        With buffer given (e.g. a multiprocessing.RawArray) the pixels live in
        that memory, so several processes can write into one image.
        """
        self.width = width
        self.height = height
        if buffer is None:
            self.pixels = np.zeros((height, width, 4), dtype=np.uint8)
        else:
            self.pixels = np.frombuffer(buffer, dtype=np.uint8).reshape((height, width, 4))
        if fill_alpha:
            self.pixels[:, :, 3] = 255

    def put_pixel(self, x, y, rgba):
        self.pixels[y, x] = rgba

    def get_pixel(self, x, y):
        return tuple(int(c) for c in self.pixels[y, x])

    def copy(self):
        """Copy into a framebuffer that owns its memory."""
        result = Framebuffer(self.width, self.height)
        result.pixels[:] = self.pixels
        return result

    def save(self, output_path):
        """Save the framebuffer as an image file; the format follows the extension."""
        image = Image.fromarray(self.pixels)
        try:
            image.save(output_path)
        except (OSError, ValueError) as e:
            raise ImageWriteError("Could not write image to {}: {}".format(output_path, e)) from e
        print(f"Image saved to {output_path}")
