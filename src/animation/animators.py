# animation/animators.py
"""
Per-frame update strategies. Each animator owns the state it needs
(angle, target, progress) and writes new sphere centers into the scene.
"""
import math
from core.vector import Vector3
from geometry.world import Scene
from animation.inputs import InputState
from renderer.lights import DirectionalLight

def bound_to_radius(candidate: Vector3, reference: Vector3, radius: float) -> Vector3:
    """
    Keeps candidate on or inside a disc of the given radius around
    reference, measured in the x/z plane. y is left untouched.
    """
    dx = candidate.x - reference.x
    dz = candidate.z - reference.z
    distance = math.sqrt(dx * dx + dz * dz)
    if distance > radius:
        scale = radius / distance
        return Vector3(reference.x + dx * scale, candidate.y, reference.z + dz * scale)
    return candidate

class Animator:
    """
    Base class for scene-state update strategies.
    """
    def update(self, scene: Scene, delta_time: float, inputs: InputState) -> None:
        raise NotImplementedError("update() must be implemented by subclasses.")

class OrbitAnimator(Animator):
    """
    Moves a sphere on a horizontal circle. The angle advances by a fixed
    step per frame; direction=-1 gives the counter-rotating partner.
    """
    def __init__(self, sphere_index: int, radius: float, step: float,
                 y: float, z_offset: float, direction: int = 1, angle: float = 0.0):
        self.sphere_index = sphere_index
        self.radius = radius
        self.step = step
        self.y = y
        self.z_offset = z_offset
        self.direction = direction
        self.angle = angle

    def update(self, scene: Scene, delta_time: float, inputs: InputState) -> None:
        self.angle += self.step
        theta = self.angle * self.direction
        scene[self.sphere_index].center = Vector3(
            math.cos(theta) * self.radius,
            self.y,
            math.sin(theta) * self.radius + self.z_offset
        )

class DragAnimator(Animator):
    """
    Glides a sphere toward the last dragged-to position.

    A new drag target resets progress to 0; each frame progress grows by
    delta_time / move_duration (capped at 1) and the center is lerped
    toward the target by that amount. Targets are kept within
    orbit_radius of the reference sphere.
    """
    def __init__(self, sphere_index: int, reference_index: int,
                 orbit_radius: float = 0.6, move_duration: float = 0.1, plane_z: float = -1.0):
        self.sphere_index = sphere_index
        self.reference_index = reference_index
        self.orbit_radius = orbit_radius
        self.move_duration = move_duration
        self.plane_z = plane_z
        self.target = None
        self.progress = 1.0

    def set_target(self, scene: Scene, target: Vector3):
        reference = scene[self.reference_index].center
        self.target = bound_to_radius(target, reference, self.orbit_radius)
        self.progress = 0.0

    def target_from_ndc(self, scene: Scene, x: float, aspect_ratio: float) -> Vector3:
        current = scene[self.sphere_index].center
        return Vector3(x * aspect_ratio, current.y, self.plane_z)

    def update(self, scene: Scene, delta_time: float, inputs: InputState) -> None:
        posted = inputs.take_drag_target()
        if posted is not None:
            self.set_target(scene, self.target_from_ndc(scene, posted[0], inputs.aspect_ratio))

        if self.target is None or self.progress >= 1.0:
            return

        if self.move_duration <= 0:
            self.progress = 1.0
        else:
            self.progress = min(self.progress + delta_time / self.move_duration, 1.0)
        sphere = scene[self.sphere_index]
        sphere.center = sphere.center.lerp(self.target, self.progress)

class KeyboardMover(Animator):
    """
    Moves a sphere in the x/z plane while direction keys are held, staying
    within orbit_radius of the reference sphere.
    """
    DIRECTIONS = {
        "left": Vector3(-1.0, 0.0, 0.0),
        "right": Vector3(1.0, 0.0, 0.0),
        "forward": Vector3(0.0, 0.0, -1.0),
        "backward": Vector3(0.0, 0.0, 1.0),
    }

    def __init__(self, sphere_index: int, reference_index: int,
                 orbit_radius: float = 0.6, step: float = 0.02, speed: float = 1.0):
        self.sphere_index = sphere_index
        self.reference_index = reference_index
        self.orbit_radius = orbit_radius
        self.step = step
        self.speed = speed

    def update(self, scene: Scene, delta_time: float, inputs: InputState) -> None:
        delta = Vector3(0.0, 0.0, 0.0)
        for key, direction in self.DIRECTIONS.items():
            if inputs.is_pressed(key):
                delta = delta + direction * (self.step * self.speed)
        if delta.length_squared() == 0:
            return

        sphere = scene[self.sphere_index]
        reference = scene[self.reference_index].center
        sphere.center = bound_to_radius(sphere.center + delta, reference, self.orbit_radius)

class LightOrbit(Animator):
    """Swings the directional light around the vertical axis."""
    def __init__(self, light: DirectionalLight, step: float, elevation: float = -1.0,
                 angle: float = 0.0):
        self.light = light
        self.step = step
        self.elevation = elevation
        self.angle = angle

    def update(self, scene: Scene, delta_time: float, inputs: InputState) -> None:
        self.angle += self.step
        self.light.direction = Vector3(math.cos(self.angle), self.elevation, math.sin(self.angle))
