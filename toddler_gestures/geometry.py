"""
Vector helpers for 3D landmark geometry.
"""
import numpy as np


def vector_between(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Vector pointing from a to b."""
    return np.asarray(b, dtype=float) - np.asarray(a, dtype=float)


def normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector along v, or the zero vector when v has no length."""
    v = np.asarray(v, dtype=float)
    length = np.linalg.norm(v)
    if length == 0:
        return np.zeros_like(v)
    return v / length


def dot(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.dot(a, b))


def distance_3d(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two landmarks."""
    return float(np.linalg.norm(vector_between(a, b)))
