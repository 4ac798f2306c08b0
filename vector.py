import numpy as np


def vec(x, y=None, z=None):
    """Build a read-only 3D vector from three scalars or a 3-sequence."""
    if y is None and z is None:
        v = np.array(x, dtype=np.float64)
    else:
        v = np.array([x, y, z], dtype=np.float64)
    if v.shape != (3,):
        raise ValueError("Expected 3 components, got shape {}".format(v.shape))
    v.flags.writeable = False
    return v


def dot(a, b):
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def length(v):
    return float(np.sqrt(dot(v, v)))


def normalize(v):
    """
    Scale v to unit length.

    A zero-length vector has no direction; it comes back as a zero vector
    instead of NaNs.
    """
    norm = length(v)
    if norm == 0.0:
        return np.zeros(3)
    return v * (1.0 / norm)


def reflect(d, n):
    """Reflect direction d around normal n."""
    return d - n * (2.0 * dot(d, n))
