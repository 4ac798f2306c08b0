import numpy as np
from numba import njit

from vector import normalize, vec


@njit(cache=True)
def intersect_sphere(origin, direction, center, radius):
    """
    Distance along a unit-direction ray to a sphere (JIT-compiled).

    Returns the far root when the origin is inside the sphere, the near root
    when it is outside, and inf on a miss.
    """
    v_x = origin[0] - center[0]
    v_y = origin[1] - center[1]
    v_z = origin[2] - center[2]

    b = -(v_x * direction[0] + v_y * direction[1] + v_z * direction[2])
    discriminant = radius * radius - (v_x * v_x + v_y * v_y + v_z * v_z) + b * b

    if discriminant <= 0.0:
        return np.inf

    t = np.sqrt(discriminant)
    near = b - t
    far = b + t

    if far > 0.0 and near < 0.0:
        return far
    if far > 0.0 and near >= 0.0:
        return near
    return np.inf


class Sphere:
    def __init__(self, position, radius, material):
        if not radius > 0:
            raise ValueError("Sphere radius must be positive, got {}".format(radius))
        self.position = vec(position)
        self.radius = float(radius)
        self.material = material.copy()

    def intersect(self, ray):
        """Distance to the hit along ray, or None on a miss."""
        t = intersect_sphere(ray.origin, ray.direction, self.position, self.radius)
        if t == np.inf:
            return None
        return float(t)

    def normal(self, point):
        # Inside hits get the outward normal as well
        return normalize((point - self.position) * (1.0 / self.radius))

    def __repr__(self):
        return "Sphere(position={}, radius={}, material={!r})".format(
            self.position.tolist(), self.radius, self.material)
