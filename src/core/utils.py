# core/utils.py
from core.vector import Vector3

def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * (2 * v.dot(n))

def ndc(index: int, size: int) -> float:
    """
    Maps a pixel index in [0, size-1] to [0, 1]. A single-pixel axis maps
    to the middle so the camera still looks straight ahead.
    """
    if size <= 1:
        return 0.5
    return index / (size - 1)
