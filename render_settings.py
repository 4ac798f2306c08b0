from dataclasses import dataclass, replace


@dataclass(frozen=True)
class RenderSettings:
    """Everything a render needs to know up front. Passed explicitly, never global."""
    width: int = 1024
    height: int = 768
    max_spheres: int = 64
    max_lights: int = 10
    workers: int = 4
    max_depth: int = 4
    background_color: tuple = (0.02, 0.1, 0.17)
    output_path: str = 'test.png'

    def __post_init__(self):
        for name in ('width', 'height', 'max_spheres', 'max_lights', 'workers'):
            value = getattr(self, name)
            if int(value) != value or value < 1:
                raise ValueError("{} must be a positive integer, got {!r}".format(name, value))
        if int(self.max_depth) != self.max_depth or self.max_depth < 0:
            raise ValueError("max_depth must be a non-negative integer, got {!r}".format(self.max_depth))
        if len(self.background_color) != 3:
            raise ValueError("background_color needs 3 components, got {!r}".format(self.background_color))
        object.__setattr__(self, 'background_color', tuple(float(c) for c in self.background_color))

    def with_overrides(self, **changes):
        """Return a copy with the given fields replaced; None values are ignored."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes)
