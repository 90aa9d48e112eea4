# renderer/shading.py
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from core.utils import reflect
from geometry.hittable import HitRecord
from geometry.world import Scene
from renderer.lights import DirectionalLight
from renderer.tone_mapping import finalize_color

WHITE = Vector3(1.0, 1.0, 1.0)
SKY_BLUE = Vector3(0.3, 0.5, 0.9)
LIGHT_SKY_BLUE = Vector3(0.5, 0.7, 1.0)

class ShadingModel:
    """
    One configurable shader covering every lighting variant: flat albedo,
    ambient only, diffuse, diffuse with shadows, and diffuse + specular
    with shadows. Terms are switched on and weighted by the fields below.

    Parameters:
        ambient: constant light added to every hit
        diffuse / diffuse_weight: Lambert term max(0, N.L) * weight
        shadows / shadow_factor: when a shadow ray is blocked, diffuse and
            specular are multiplied by shadow_factor (0 removes them)
        specular / specular_weight / shininess: Phong highlight
        boost / gamma: final cosmetic pass, see tone_mapping.finalize_color
        sky_color / horizon_color: background gradient for straight-up and
            horizontal rays
        shadow_bias: offset of the shadow ray origin along the normal
    """
    def __init__(self, ambient: float = 0.2,
                 diffuse: bool = True, diffuse_weight: float = 1.0,
                 shadows: bool = True, shadow_factor: float = 0.0,
                 specular: bool = False, specular_weight: float = 0.5, shininess: float = 32.0,
                 boost: float = 1.0, gamma: Optional[float] = None,
                 sky_color: Vector3 = SKY_BLUE, horizon_color: Vector3 = WHITE,
                 shadow_bias: float = 1e-3):
        self.ambient = ambient
        self.diffuse = diffuse
        self.diffuse_weight = diffuse_weight
        self.shadows = shadows
        self.shadow_factor = shadow_factor
        self.specular = specular
        self.specular_weight = specular_weight
        self.shininess = shininess
        self.boost = boost
        self.gamma = gamma
        self.sky_color = sky_color
        self.horizon_color = horizon_color
        self.shadow_bias = shadow_bias

    @classmethod
    def flat(cls) -> "ShadingModel":
        """Albedo color as-is."""
        return cls(ambient=1.0, diffuse=False, shadows=False)

    @classmethod
    def ambient_only(cls, ambient: float = 0.2) -> "ShadingModel":
        return cls(ambient=ambient, diffuse=False, shadows=False)

    @classmethod
    def lambert(cls, ambient: float = 0.2) -> "ShadingModel":
        return cls(ambient=ambient, shadows=False)

    @classmethod
    def shadowed(cls, ambient: float = 0.2) -> "ShadingModel":
        return cls(ambient=ambient, shadows=True, shadow_factor=0.0)

    @classmethod
    def phong(cls) -> "ShadingModel":
        return cls(ambient=0.1, diffuse_weight=0.9,
                   shadows=True, shadow_factor=0.3,
                   specular=True, specular_weight=0.5, shininess=32.0,
                   boost=1.4, gamma=2.2, sky_color=LIGHT_SKY_BLUE)

    def background(self, ray: Ray) -> Vector3:
        t = 0.5 * (ray.direction.y + 1.0)
        return self.horizon_color.lerp(self.sky_color, t)

    def is_occluded(self, hit: HitRecord, scene: Scene, light: DirectionalLight) -> bool:
        shadow_origin = hit.position + hit.normal * self.shadow_bias
        shadow_ray = Ray(shadow_origin, light.to_light)
        return scene.any_hit(shadow_ray, exclude=hit.sphere_index)

    def shade(self, ray: Ray, hit: HitRecord, scene: Scene, light: DirectionalLight) -> Vector3:
        """
        Linear color for one primary ray, clamped to [0, 1]. Misses get the
        background gradient.
        """
        if not hit.is_hit:
            return self.background(ray)

        albedo = scene[hit.sphere_index].albedo
        to_light = light.to_light

        visibility = 1.0
        if self.shadows and (self.diffuse or self.specular):
            if self.is_occluded(hit, scene, light):
                visibility = self.shadow_factor

        diffuse = 0.0
        if self.diffuse:
            diffuse = max(hit.normal.dot(to_light), 0.0) * self.diffuse_weight * visibility

        color = albedo * (light.color * (self.ambient + diffuse))

        if self.specular:
            reflected = reflect(light.direction, hit.normal).normalize()
            highlight = max(reflected.dot(-ray.direction), 0.0) ** self.shininess
            color = color + light.color * (highlight * self.specular_weight * visibility)

        return color.clamp(0.0, 1.0)

    def post_process(self, color: Vector3) -> Vector3:
        return finalize_color(color, self.boost, self.gamma)
