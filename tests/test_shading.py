"""Tests for the shading model and color post-processing."""

import math

import numpy as np
import pytest

from camera.camera import Camera
from core.ray import Ray
from core.vector import Vector3
from geometry.sphere import Sphere
from geometry.world import Scene
from renderer.lights import DirectionalLight
from renderer.raytracer import Renderer
from renderer.shading import ShadingModel
from renderer.tone_mapping import finalize_color, post_process_frame, to_rgb8

RED = Vector3(1.0, 0.0, 0.0)


def vec_close(a, b, tol=1e-9):
    return all(math.isclose(p, q, abs_tol=tol) for p, q in zip(a, b))


class TestBackground:
    @pytest.fixture
    def shading(self):
        return ShadingModel(sky_color=Vector3(0.3, 0.5, 0.9), horizon_color=Vector3(1.0, 1.0, 1.0))

    def test_straight_up_is_sky(self, shading):
        color = shading.background(Ray(Vector3(0, 0, 0), Vector3(0.0, 1.0, 0.0)))
        assert vec_close(color, (0.3, 0.5, 0.9))

    def test_straight_down_is_horizon(self, shading):
        color = shading.background(Ray(Vector3(0, 0, 0), Vector3(0.0, -1.0, 0.0)))
        assert vec_close(color, (1.0, 1.0, 1.0))

    def test_horizontal_is_even_blend(self, shading):
        color = shading.background(Ray(Vector3(0, 0, 0), Vector3(0.0, 0.0, -1.0)))
        assert vec_close(color, (0.65, 0.75, 0.95))

    def test_miss_is_shaded_as_background(self, shading):
        ray = Ray(Vector3(0, 0, 0), Vector3(0.0, 1.0, 0.0))
        scene = Scene()
        light = DirectionalLight(Vector3(0.0, -1.0, 0.0))
        assert shading.shade(ray, scene.closest_hit(ray), scene, light) == shading.background(ray)


class TestShadows:
    """A sphere lit from straight above, with and without a blocker overhead."""

    @pytest.fixture
    def lit(self):
        return Sphere(Vector3(0.0, 0.0, -1.0), 0.3, RED)

    @pytest.fixture
    def blocker(self):
        return Sphere(Vector3(0.0, 1.0, -1.0), 0.2, Vector3(0.0, 1.0, 0.0))

    @pytest.fixture
    def ray(self):
        # looks down onto the top of the lit sphere, under the blocker
        return Ray(Vector3(0.0, 0.6, -1.0), Vector3(0.0, -1.0, 0.0))

    def shade(self, shading, scene, ray, light):
        return shading.shade(ray, scene.closest_hit(ray), scene, light)

    def test_blocker_removes_diffuse(self, lit, blocker, ray, overhead_light):
        shading = ShadingModel.shadowed(ambient=0.2)
        clear = self.shade(shading, Scene([lit]), ray, overhead_light)
        blocked = self.shade(shading, Scene([lit, blocker]), ray, overhead_light)
        assert math.isclose(clear.x, 1.0)
        assert math.isclose(blocked.x, 0.2)

    def test_shadow_factor_scales_diffuse(self, lit, blocker, ray, overhead_light):
        shading = ShadingModel(ambient=0.2, shadows=True, shadow_factor=0.3)
        blocked = self.shade(shading, Scene([lit, blocker]), ray, overhead_light)
        assert math.isclose(blocked.x, 0.5)

    def test_shadows_disabled_ignores_blocker(self, lit, blocker, ray, overhead_light):
        shading = ShadingModel.lambert(ambient=0.2)
        blocked = self.shade(shading, Scene([lit, blocker]), ray, overhead_light)
        assert math.isclose(blocked.x, 1.0)

    def test_light_from_below_leaves_only_ambient(self, lit, ray):
        light = DirectionalLight(Vector3(0.0, 1.0, 0.0))
        shading = ShadingModel.shadowed(ambient=0.2)
        color = self.shade(shading, Scene([lit]), ray, light)
        assert math.isclose(color.x, 0.2)


class TestShadowBias:
    """
    The one-pixel camera ray hits the front of the lit sphere at
    (0, 0, -0.7). A small sphere grazes the shadow ray so closely that it
    only blocks the light when the ray starts exactly on the surface.
    """

    @pytest.fixture
    def scene(self):
        hit_point = Vector3(0.0, 0.0, -0.7)
        along = Vector3(1.0, 0.0, 1.0).normalize()
        across = Vector3(1.0, 0.0, -1.0).normalize()
        radius = 0.1
        # the unbiased shadow ray passes 0.1 - 3.5e-4 from the center; the
        # biased one is pushed about 7.1e-4 further away and misses
        grazer = Sphere(hit_point + along * 0.3 + across * (radius - 3.5e-4), radius,
                        Vector3(0.0, 1.0, 0.0))
        return Scene([Sphere(Vector3(0.0, 0.0, -1.0), 0.3, RED), grazer])

    @pytest.fixture
    def light(self):
        return DirectionalLight(Vector3(-1.0, 0.0, -1.0))

    def render_pixel(self, scene, light, shading, backend):
        frame = Renderer(1, 1, backend=backend).render(scene, Camera(), light, shading)
        return frame[0, 0]

    @pytest.mark.parametrize("backend", ["python", "numba"])
    def test_offset_origin_clears_grazing_sphere(self, scene, light, backend):
        shading = ShadingModel.shadowed(ambient=0.2)
        assert shading.shadow_bias == 1e-3
        r, g, b = self.render_pixel(scene, light, shading, backend)
        assert math.isclose(r, 0.2 + math.sqrt(0.5))
        assert g == 0.0 and b == 0.0

    @pytest.mark.parametrize("backend", ["python", "numba"])
    def test_surface_origin_is_blocked(self, scene, light, backend):
        shading = ShadingModel(ambient=0.2, shadows=True, shadow_factor=0.0, shadow_bias=0.0)
        r, _, _ = self.render_pixel(scene, light, shading, backend)
        assert math.isclose(r, 0.2)

    def test_is_occluded_starts_above_surface(self, scene, light):
        camera_ray = Camera().get_pixel_ray(0, 0, 1, 1)
        hit = scene.closest_hit(camera_ray)
        assert hit.sphere_index == 0
        assert not ShadingModel.shadowed().is_occluded(hit, scene, light)
        assert ShadingModel(shadow_bias=0.0).is_occluded(hit, scene, light)


class TestLightingTerms:
    @pytest.fixture
    def scene(self):
        return Scene([Sphere(Vector3(0.0, 0.0, -1.0), 0.3, RED)])

    @pytest.fixture
    def ray(self):
        return Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, -1.0))

    @pytest.fixture
    def head_on_light(self):
        # travels away from the camera, so it lights the visible face
        return DirectionalLight(Vector3(0.0, 0.0, -1.0))

    def test_flat_returns_albedo(self, scene, ray, head_on_light):
        color = ShadingModel.flat().shade(ray, scene.closest_hit(ray), scene, head_on_light)
        assert color == RED

    def test_ambient_only(self, scene, ray, head_on_light):
        color = ShadingModel.ambient_only(0.4).shade(ray, scene.closest_hit(ray), scene, head_on_light)
        assert vec_close(color, (0.4, 0.0, 0.0))

    def test_diffuse_follows_cosine(self, scene, ray):
        light = DirectionalLight(Vector3(0.0, -1.0, -1.0))
        color = ShadingModel.lambert(ambient=0.0).shade(ray, scene.closest_hit(ray), scene, light)
        assert math.isclose(color.x, math.cos(math.pi / 4))

    def test_specular_highlight_faces_viewer(self, scene, ray, head_on_light):
        shading = ShadingModel(ambient=0.1, shadows=False, specular=True, specular_weight=0.5)
        color = shading.shade(ray, scene.closest_hit(ray), scene, head_on_light)
        assert vec_close(color, (1.0, 0.5, 0.5))

    def test_colored_light_tints_component_wise(self, scene, ray):
        light = DirectionalLight(Vector3(0.0, 0.0, -1.0), color=Vector3(0.5, 1.0, 1.0))
        color = ShadingModel.lambert(ambient=0.0).shade(ray, scene.closest_hit(ray), scene, light)
        assert vec_close(color, (0.5, 0.0, 0.0))


class TestPostProcessing:
    def test_clamp_boost_clamp_order(self):
        color = finalize_color(Vector3(0.9, 0.5, -0.2), boost=1.4)
        assert vec_close(color, (1.0, 0.7, 0.0))

    def test_gamma_comes_last(self):
        color = finalize_color(Vector3(0.9, 0.5, -0.2), boost=1.4, gamma=2.2)
        assert vec_close(color, (1.0, 0.7 ** (1 / 2.2), 0.0))

    def test_frame_pass_matches_single_color(self):
        colors = [Vector3(0.9, 0.5, -0.2), Vector3(1.5, 0.1, 0.33)]
        frame = np.array([[list(c) for c in colors]])
        processed = post_process_frame(frame, boost=1.4, gamma=2.2)
        for k, c in enumerate(colors):
            expected = finalize_color(c, boost=1.4, gamma=2.2)
            np.testing.assert_allclose(processed[0, k], list(expected), atol=1e-12)

    def test_to_rgb8_floors(self):
        frame = np.array([[[0.0, 0.5, 1.0], [0.999, 1.2, -0.1]]])
        pixels = to_rgb8(frame)
        assert pixels.dtype == np.uint8
        assert pixels[0, 0].tolist() == [0, 127, 255]
        assert pixels[0, 1].tolist() == [254, 255, 0]

    def test_frame_pass_skips_masked_out_pixels(self):
        frame = np.array([[[0.5, 0.7, 1.0], [0.5, 0.7, 1.0]]])
        mask = np.array([[True, False]])
        processed = post_process_frame(frame, boost=1.4, gamma=2.2, mask=mask)
        expected = finalize_color(Vector3(0.5, 0.7, 1.0), boost=1.4, gamma=2.2)
        np.testing.assert_allclose(processed[0, 0], list(expected), atol=1e-12)
        np.testing.assert_array_equal(processed[0, 1], [0.5, 0.7, 1.0])
        # the input frame is left as it was
        np.testing.assert_array_equal(frame[0, 0], [0.5, 0.7, 1.0])
