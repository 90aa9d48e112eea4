"""Tests for scene presets and the headless entry point."""

import numpy as np
import pytest
from PIL import Image

from renderer.raytracer import Renderer
from scenes.presets import PRESETS, load_preset


@pytest.mark.parametrize("name", sorted(PRESETS))
def test_preset_updates_and_renders(name):
    setup = load_preset(name)
    assert setup.name == name
    for _ in range(3):
        setup.controller.update(1 / 60)
    frame = Renderer(8, 6).render(setup.scene, setup.camera, setup.light, setup.shading)
    assert frame.shape == (8, 6, 3)
    assert np.all((frame >= 0.0) & (frame <= 1.0))


def test_presets_are_independent():
    first = load_preset("orbit")
    second = load_preset("orbit")
    first.controller.update(1 / 60)
    assert first.scene[1].center != second.scene[1].center


def test_unknown_preset():
    with pytest.raises(ValueError):
        load_preset("teapot")


class TestHeadless:
    @pytest.fixture
    def main_module(self):
        return pytest.importorskip("main")

    def test_render_to_file(self, main_module, tmp_path):
        output = tmp_path / "frame.png"
        pixels = main_module.render_to_file(load_preset("drag"), 12, 8, output, frames=2)
        assert pixels.shape == (12, 8, 3)
        with Image.open(output) as image:
            assert image.size == (12, 8)
            assert image.getpixel((3, 5)) == tuple(int(c) for c in pixels[3, 5])

    def test_cli_uv_gradient(self, main_module, tmp_path):
        output = tmp_path / "uv.png"
        main_module.main(["--uv", "--output", str(output), "--width", "4", "--height", "3"])
        with Image.open(output) as image:
            assert image.getpixel((3, 0)) == (255, 0, 0)
            assert image.getpixel((0, 2)) == (0, 255, 0)
