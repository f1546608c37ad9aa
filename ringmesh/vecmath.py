"""Small vector helpers for three-point triangles (x, y, z in mm)."""
import numpy as np

Vector3 = tuple[float, float, float]

ZERO = (0.0, 0.0, 0.0)


def as_vector(a) -> Vector3:
    return (float(a[0]), float(a[1]), float(a[2]))


def subtract(a, b) -> Vector3:
    return as_vector(np.subtract(a, b))


def cross(a, b) -> Vector3:
    return as_vector(np.cross(a, b))


def dot(a, b) -> float:
    return float(np.dot(a, b))


def normalize(a) -> Vector3:
    """Return ``a`` scaled to unit length.

    The zero vector normalizes to the zero vector instead of raising, so a
    degenerate triangle simply carries a zero normal.
    """
    mag = float(np.linalg.norm(a))
    if mag == 0.0:
        return ZERO
    return as_vector(np.asarray(a, dtype=float) / mag)


def triangle_normal(v0, v1, v2) -> Vector3:
    """Unit normal of a triangle by the right-hand rule over its winding."""
    return normalize(cross(subtract(v1, v0), subtract(v2, v0)))
