# geometry/hittable.py
from core.vector import Vector3
from core.ray import Ray

NO_HIT = -1.0

class HitRecord:
    """
    Records details of a ray-sphere intersection.
    """
    def __init__(self, t: float, position: Vector3, normal: Vector3, sphere_index: int):
        self.t = t                        # Ray parameter at intersection
        self.position = position          # Intersection point
        self.normal = normal              # Outward unit normal, never flipped
        self.sphere_index = sphere_index  # Index of the hit sphere in the scene

    @classmethod
    def miss(cls) -> "HitRecord":
        return cls(NO_HIT, Vector3(0, 0, 0), Vector3(0, 0, 0), -1)

    @property
    def is_hit(self) -> bool:
        return self.t > 0

    def __repr__(self) -> str:
        return (f"HitRecord(t={self.t}, position={self.position!r}, "
                f"normal={self.normal!r}, sphere_index={self.sphere_index})")

class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def intersect(self, ray: Ray) -> float:
        """
        Returns the nearest strictly positive ray parameter, or NO_HIT.
        """
        raise NotImplementedError("intersect() must be implemented by subclasses.")

    def normal_at(self, point: Vector3) -> Vector3:
        raise NotImplementedError("normal_at() must be implemented by subclasses.")
