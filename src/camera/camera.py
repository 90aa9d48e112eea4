# camera/camera.py
import math
from typing import Tuple
from core.vector import Vector3
from core.ray import Ray
from core.utils import ndc

class Camera:
    """
    Look-from / look-at pinhole camera.

    With the defaults (at the origin, looking down -z, 90 degree vertical
    fov) a pixel's normalized device coordinates (u, v) map to the direction
    normalize(u, v, -1), which is the plain fixed-origin camera.
    """
    def __init__(self, look_from: Vector3 = None, look_at: Vector3 = None,
                 up: Vector3 = None, fov: float = 90.0):
        self.look_from = look_from if look_from is not None else Vector3(0.0, 0.0, 0.0)
        self.look_at = look_at if look_at is not None else Vector3(0.0, 0.0, -1.0)
        self.up = up if up is not None else Vector3(0.0, 1.0, 0.0)
        self.fov = fov  # vertical, in degrees
        self.update_camera()

    def update_camera(self):
        """Recomputes the camera basis from look_from, look_at, up and fov."""
        # tan(45 degrees) is not exactly 1.0 in floating point
        if self.fov == 90.0:
            self.half_height = 1.0
        else:
            self.half_height = math.tan(math.radians(self.fov) / 2)

        self.w = (self.look_from - self.look_at).normalize()  # backwards
        self.u = self.up.cross(self.w).normalize()             # right
        self.v = self.w.cross(self.u)                          # up

        self.horizontal = self.u * self.half_height
        self.vertical = self.v * self.half_height

    @property
    def origin(self) -> Vector3:
        return self.look_from

    @staticmethod
    def pixel_to_ndc(i: int, j: int, width: int, height: int) -> Tuple[float, float]:
        """
        Top-left pixel origin, y flipped, u stretched by the aspect ratio.
        """
        u = ndc(i, width) * 2 - 1
        v = (1 - ndc(j, height)) * 2 - 1
        u *= width / height
        return u, v

    def get_ray(self, u: float, v: float) -> Ray:
        """Generates the primary ray through NDC point (u, v)."""
        direction = self.horizontal * u + self.vertical * v - self.w
        return Ray(self.look_from, direction)

    def get_pixel_ray(self, i: int, j: int, width: int, height: int) -> Ray:
        u, v = self.pixel_to_ndc(i, j, width, height)
        return self.get_ray(u, v)
