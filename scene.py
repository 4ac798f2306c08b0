import numpy as np

from light import Light
from surfaces.sphere import Sphere


class SceneCapacityError(ValueError):
    pass


class SceneFrozenError(RuntimeError):
    pass


class SceneNotFrozenError(RuntimeError):
    pass


class BoundedList:
    """Append-only list that refuses items past a fixed capacity."""

    def __init__(self, capacity, name='item'):
        self.capacity = capacity
        self.name = name
        self._items = []

    def try_append(self, item):
        """Append item; return False instead if the list is already full."""
        if len(self._items) >= self.capacity:
            return False
        self._items.append(item)
        return True

    def append(self, item):
        if not self.try_append(item):
            raise SceneCapacityError(
                "Cannot add {}: capacity of {} reached".format(self.name, self.capacity))

    def is_full(self):
        return len(self._items) >= self.capacity

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __getitem__(self, index):
        return self._items[index]


class Scene:
    """
    Spheres and point lights for one render.

    The scene is built once, then frozen. A frozen scene is never modified,
    which lets render workers read it concurrently without locks.
    """

    def __init__(self, settings):
        self.spheres = BoundedList(settings.max_spheres, 'sphere')
        self.lights = BoundedList(settings.max_lights, 'light')
        self.frozen = False
        self.sphere_centers = None
        self.sphere_radii = None

    def add_sphere(self, position, radius, material):
        self._check_not_frozen()
        sphere = Sphere(position, radius, material)
        self.spheres.append(sphere)
        return sphere

    def add_light(self, position, color):
        self._check_not_frozen()
        light = Light(position, color)
        self.lights.append(light)
        return light

    def freeze(self):
        """Finish scene setup and pack the sphere data for the intersection kernel."""
        if self.frozen:
            return self

        num_spheres = len(self.spheres)
        centers = np.zeros((num_spheres, 3))
        radii = np.zeros(num_spheres)
        for idx, sphere in enumerate(self.spheres):
            centers[idx] = sphere.position
            radii[idx] = sphere.radius
        centers.flags.writeable = False
        radii.flags.writeable = False

        self.sphere_centers = centers
        self.sphere_radii = radii
        self.frozen = True
        return self

    def _check_not_frozen(self):
        if self.frozen:
            raise SceneFrozenError("Scene is frozen; it cannot change once rendering starts")
