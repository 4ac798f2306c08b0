from ray import Ray
from vector import vec


class Camera:
    def __init__(self, position=(0.0, 0.0, -5.0), left=-2.0, right=2.0, top=1.5, bottom=-1.5,
                 plane_z=0.0):
        """
        Pinhole camera shooting rays through a rectangular viewport.

        The viewport is the rectangle [left, right] x [top, bottom] on the
        plane z = plane_z, in world coordinates.
        """
        self.position = vec(position)
        self.left = float(left)
        self.right = float(right)
        self.top = float(top)
        self.bottom = float(bottom)
        self.plane_z = float(plane_z)

    def viewport_point(self, x, y, image_width, image_height):
        """World-space point on the viewport plane for pixel (x, y)."""
        dx = (self.right - self.left) / image_width
        dy = (self.bottom - self.top) / image_height
        # Computed from the pixel index, not stepped, so every worker sees
        # the same point for the same pixel.
        return vec(self.left + x * dx, self.top + y * dy, self.plane_z)

    def generate_ray(self, x, y, image_width, image_height):
        """Generate a ray through pixel (x, y)."""
        target = self.viewport_point(x, y, image_width, image_height)
        return Ray(self.position, target - self.position)

    def __repr__(self):
        return "Camera(position={}, viewport=({}, {}, {}, {}), plane_z={})".format(
            self.position.tolist(), self.left, self.right, self.top, self.bottom,
            self.plane_z)
