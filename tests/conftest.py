"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Packages live as top-level modules under src/
src_root = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_root))

from core.vector import Vector3  # noqa: E402
from geometry.sphere import Sphere  # noqa: E402
from geometry.world import Scene  # noqa: E402
from renderer.lights import DirectionalLight  # noqa: E402


@pytest.fixture
def red_sphere():
    return Sphere(Vector3(0.0, 0.0, -1.0), 0.3, Vector3(1.0, 0.0, 0.0))


@pytest.fixture
def three_sphere_scene():
    """Red and blue spheres above a large green ground sphere."""
    return Scene([
        Sphere(Vector3(0.0, 0.0, -1.0), 0.3, Vector3(1.0, 0.0, 0.0)),
        Sphere(Vector3(0.5, 0.2, -1.0), 0.15, Vector3(0.0, 0.0, 1.0)),
        Sphere(Vector3(0.0, -100.5, -1.0), 100.0, Vector3(0.0, 1.0, 0.0)),
    ])


@pytest.fixture
def overhead_light():
    """Light shining straight down."""
    return DirectionalLight(Vector3(0.0, -1.0, 0.0))
