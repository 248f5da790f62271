import math

import numpy as np

NORM_EPS = 1e-6


def vec(x, y):
    return np.array([x, y], dtype=float)


def length(v):
    return math.sqrt(float(v[0]*v[0] + v[1]*v[1]))


def normalize(v):
    """Unit vector along ``v``; the zero vector when ``v`` is (nearly) zero."""
    l = length(v)
    if l <= NORM_EPS:
        return np.zeros(2, dtype=float)
    return np.asarray(v, dtype=float) / l


def dot(a, b):
    return float(a[0]*b[0] + a[1]*b[1])


def perpendicular(v):
    return np.array([-v[1], v[0]], dtype=float)


def dist2(a, b):
    dx = float(a[0] - b[0])
    dy = float(a[1] - b[1])
    return dx*dx + dy*dy


def sign(x):
    # zero counts as positive
    return 1 if x >= 0 else -1


def point_segment_distance(p, a, b):
    """Distance from ``p`` to the closest point of segment [a, b]."""
    p = np.asarray(p, dtype=float)
    a = np.asarray(a, dtype=float)
    ab = np.asarray(b, dtype=float) - a
    ab2 = dot(ab, ab)
    if ab2 <= NORM_EPS:
        return length(p - a)
    t = dot(p - a, ab) / ab2
    t = 0.0 if t < 0.0 else (1.0 if t > 1.0 else t)
    q = a + t * ab
    return length(p - q)
