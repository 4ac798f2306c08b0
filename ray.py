from vector import normalize, vec


class Ray:
    def __init__(self, origin, direction):
        """Create a ray; the direction is normalized once, here."""
        self.origin = vec(origin)
        self.direction = vec(normalize(vec(direction)))

    def at(self, t):
        """Point at distance t along the ray."""
        return self.origin + self.direction * t

    def __repr__(self):
        return "Ray(origin={}, direction={})".format(self.origin.tolist(), self.direction.tolist())
