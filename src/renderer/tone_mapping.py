# renderer/tone_mapping.py
from typing import Optional
import numpy as np
from core.vector import Vector3

def finalize_color(color: Vector3, boost: float = 1.0, gamma: Optional[float] = None) -> Vector3:
    """
    Final cosmetic pass for one color: clamp, boost, clamp again, gamma.
    The order matters since boosting can push channels back above 1.
    """
    color = color.clamp(0.0, 1.0)
    if boost != 1.0:
        color = color.scale(boost).clamp(0.0, 1.0)
    if gamma:
        color = color.gamma_correct(gamma)
    return color

def post_process_frame(frame: np.ndarray, boost: float = 1.0, gamma: Optional[float] = None,
                       mask: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Same pass as finalize_color, over a (width, height, 3) frame.

    When a (width, height) boolean mask is given only those pixels are
    processed; the rest are copied through untouched.
    """
    if mask is None:
        return _finalize_array(frame, boost, gamma)
    out = frame.copy()
    out[mask] = _finalize_array(frame[mask], boost, gamma)
    return out

def _finalize_array(colors: np.ndarray, boost: float, gamma: Optional[float]) -> np.ndarray:
    out = np.clip(colors, 0.0, 1.0)
    if boost != 1.0:
        out = np.clip(out * boost, 0.0, 1.0)
    if gamma:
        out = out ** (1.0 / gamma)
    return out

def to_rgb8(frame: np.ndarray) -> np.ndarray:
    """
    Converts [0, 1] colors to 0-255 integers, flooring like a canvas write.
    This is the only place colors become integers.
    """
    return np.clip(np.floor(frame * 255), 0, 255).astype("uint8")
