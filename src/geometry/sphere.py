# geometry/sphere.py
import math
from core.vector import Vector3
from core.ray import Ray
from geometry.hittable import Hittable, NO_HIT

class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and albedo color.
    Only the center is expected to change after creation (animation moves
    it between frames). A non-positive radius is not rejected.
    """
    def __init__(self, center: Vector3, radius: float, albedo: Vector3):
        self.center = center
        self.radius = radius
        self.albedo = albedo

    def intersect(self, ray: Ray) -> float:
        oc = ray.origin - self.center
        # ray.direction is unit length, so a == 1
        b = oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = b * b - c

        if discriminant <= 0:
            return NO_HIT

        sqrt_disc = math.sqrt(discriminant)
        t1 = -b - sqrt_disc
        if t1 > 0:
            return t1
        t2 = -b + sqrt_disc
        if t2 > 0:
            return t2
        # Sphere is entirely behind the origin
        return NO_HIT

    def normal_at(self, point: Vector3) -> Vector3:
        return (point - self.center).normalize()

    def __repr__(self) -> str:
        return f"Sphere({self.center!r}, {self.radius}, {self.albedo!r})"
