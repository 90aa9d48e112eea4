# geometry/world.py
from typing import Iterable, List, Optional
import numpy as np
from core.ray import Ray
from geometry.hittable import HitRecord
from geometry.sphere import Sphere

class SceneArrays:
    """
    Flat numpy copy of a scene, taken once per frame for the parallel
    renderer. Later changes to the live spheres do not show up here.
    """
    def __init__(self, centers: np.ndarray, radii: np.ndarray, albedos: np.ndarray):
        self.centers = centers
        self.radii = radii
        self.albedos = albedos

    def __len__(self) -> int:
        return len(self.radii)

class Scene:
    """
    An ordered, fixed list of spheres. Traversal is a brute-force linear
    scan; order only decides ties.
    """
    def __init__(self, spheres: Iterable[Sphere] = ()):
        self._spheres: List[Sphere] = list(spheres)

    @property
    def spheres(self) -> List[Sphere]:
        return self._spheres

    def __len__(self) -> int:
        return len(self._spheres)

    def __iter__(self):
        return iter(self._spheres)

    def __getitem__(self, index: int) -> Sphere:
        return self._spheres[index]

    def closest_hit(self, ray: Ray) -> HitRecord:
        closest_t = float("inf")
        closest_index = -1
        for i, sphere in enumerate(self._spheres):
            t = sphere.intersect(ray)
            # strict comparison: the first sphere at the minimum t wins
            if t > 0 and t < closest_t:
                closest_t = t
                closest_index = i

        if closest_index == -1:
            return HitRecord.miss()

        position = ray.at(closest_t)
        normal = self._spheres[closest_index].normal_at(position)
        return HitRecord(closest_t, position, normal, closest_index)

    def any_hit(self, ray: Ray, exclude: Optional[int] = None) -> bool:
        """
        True as soon as any sphere other than `exclude` reports a hit.
        Used for shadow rays, so it does not look for the closest one.
        """
        for i, sphere in enumerate(self._spheres):
            if i == exclude:
                continue
            if sphere.intersect(ray) > 0:
                return True
        return False

    def snapshot(self) -> SceneArrays:
        count = len(self._spheres)
        centers = np.zeros((count, 3), dtype=np.float64)
        radii = np.zeros(count, dtype=np.float64)
        albedos = np.zeros((count, 3), dtype=np.float64)
        for i, sphere in enumerate(self._spheres):
            centers[i] = [sphere.center.x, sphere.center.y, sphere.center.z]
            radii[i] = sphere.radius
            albedos[i] = [sphere.albedo.x, sphere.albedo.y, sphere.albedo.z]
        return SceneArrays(centers, radii, albedos)
