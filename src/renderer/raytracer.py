# renderer/raytracer.py
import logging
from typing import Callable, Tuple
import numpy as np
from core.vector import Vector3
from core.ray import Ray
from core.utils import ndc
from camera.camera import Camera
from geometry.world import Scene
from renderer.lights import DirectionalLight
from renderer.shading import ShadingModel
from renderer.tone_mapping import post_process_frame, to_rgb8
from renderer.cpu_kernels import pack_shading, pack_vectors, render_kernel

logger = logging.getLogger(__name__)

BACKENDS = ("python", "numba")

PixelSink = Callable[[int, int, Tuple[int, int, int]], None]

class Renderer:
    """
    Casts one ray per pixel and returns a (width, height, 3) float frame
    with colors in [0, 1], indexed [x, y] like a pygame surface array.

    backend="python" walks the scene object by object; backend="numba"
    snapshots the scene into arrays and shades pixels in parallel.
    """
    def __init__(self, width: int, height: int, backend: str = "python"):
        if width < 1 or height < 1:
            raise ValueError(f"Render size must be at least 1x1, got {width}x{height}")
        if backend not in BACKENDS:
            raise ValueError(f"Unknown render backend {backend!r}, expected one of {BACKENDS}")
        self.width = width
        self.height = height
        self.backend = backend
        logger.debug("Renderer %dx%d using %s backend", width, height, backend)

    def ray_color(self, ray: Ray, scene: Scene, light: DirectionalLight,
                  shading: ShadingModel, depth: int = 1) -> Vector3:
        """
        Final color seen along one ray.

        `depth` is the bounce budget for reflective surfaces. Only the base
        case exists: an exhausted budget returns black, otherwise the ray is
        shaded directly without spawning secondary bounces.
        """
        if depth <= 0:
            return Vector3(0.0, 0.0, 0.0)
        hit = scene.closest_hit(ray)
        color = shading.shade(ray, hit, scene, light)
        if not hit.is_hit:
            return color
        return shading.post_process(color)

    def render(self, scene: Scene, camera: Camera, light: DirectionalLight,
               shading: ShadingModel) -> np.ndarray:
        """
        Shades the scene into a new frame. Boost and gamma apply to sphere
        hits only; background pixels keep the plain sky gradient.
        """
        if self.backend == "numba":
            frame, hits = self._render_parallel(scene, camera, light, shading)
        else:
            frame, hits = self._render_python(scene, camera, light, shading)
        return post_process_frame(frame, shading.boost, shading.gamma, mask=hits)

    def _render_python(self, scene, camera, light, shading) -> Tuple[np.ndarray, np.ndarray]:
        frame = np.zeros((self.width, self.height, 3), dtype=np.float64)
        hits = np.zeros((self.width, self.height), dtype=np.bool_)
        for j in range(self.height):
            for i in range(self.width):
                ray = camera.get_pixel_ray(i, j, self.width, self.height)
                hit = scene.closest_hit(ray)
                color = shading.shade(ray, hit, scene, light)
                frame[i, j] = (color.x, color.y, color.z)
                hits[i, j] = hit.is_hit
        return frame, hits

    def _render_parallel(self, scene, camera, light, shading) -> Tuple[np.ndarray, np.ndarray]:
        # Pixels only read this copy, never the live scene
        arrays = scene.snapshot()
        frame = np.zeros((self.width, self.height, 3), dtype=np.float64)
        hits = np.zeros((self.width, self.height), dtype=np.bool_)
        render_kernel(
            self.width,
            self.height,
            pack_vectors(camera.origin, camera.horizontal, camera.vertical, camera.w),
            arrays.centers,
            arrays.radii,
            arrays.albedos,
            pack_vectors(light.direction, light.to_light, light.color),
            pack_vectors(shading.sky_color, shading.horizon_color),
            pack_shading(shading),
            frame,
            hits,
        )
        return frame, hits

    def draw(self, scene: Scene, camera: Camera, light: DirectionalLight,
             shading: ShadingModel, sink: PixelSink) -> None:
        """Renders a frame and hands every pixel to sink(x, y, (r, g, b))."""
        pixels = to_rgb8(self.render(scene, camera, light, shading))
        for j in range(self.height):
            for i in range(self.width):
                r, g, b = pixels[i, j]
                sink(i, j, (int(r), int(g), int(b)))

def uv_gradient(width: int, height: int) -> np.ndarray:
    """
    Debug frame: red grows left to right, green top to bottom. Handy for
    checking that a surface is oriented the right way.
    """
    frame = np.zeros((width, height, 3), dtype=np.float64)
    for i in range(width):
        for j in range(height):
            frame[i, j, 0] = ndc(i, width)
            frame[i, j, 1] = ndc(j, height)
    return frame
