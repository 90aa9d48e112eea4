# core/config.py
"""Runtime settings read from environment variables, with defaults."""

import os
from pathlib import Path
from typing import Optional, Tuple

# Window / frame
RESOLUTION: Tuple[int, int] = tuple(map(int, os.getenv("RT_RESOLUTION", "320,240").split(",")))
FPS = int(os.getenv("RT_FPS", "60"))

# Scene preset and render backend ("python" or "numba")
SCENE = os.getenv("RT_SCENE", "drag")
BACKEND = os.getenv("RT_BACKEND", "python")

# Logging
LOG_LEVEL = os.getenv("RT_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("RT_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
LOG_FILE: Optional[Path] = Path(os.environ["RT_LOG_FILE"]) if os.getenv("RT_LOG_FILE") else None

__all__ = [
    "RESOLUTION",
    "FPS",
    "SCENE",
    "BACKEND",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FILE",
]
