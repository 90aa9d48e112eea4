# scenes/presets.py
import math
from typing import Callable, Dict, Iterable
from core.vector import Vector3
from camera.camera import Camera
from geometry.sphere import Sphere
from geometry.world import Scene
from animation.animators import Animator, DragAnimator, KeyboardMover, LightOrbit, OrbitAnimator
from animation.controller import SceneController
from renderer.lights import DirectionalLight
from renderer.shading import ShadingModel

class SceneSetup:
    """Everything needed to render and animate one scene."""
    def __init__(self, name: str, scene: Scene, light: DirectionalLight, shading: ShadingModel,
                 camera: Camera = None, animators: Iterable[Animator] = ()):
        self.name = name
        self.scene = scene
        self.light = light
        self.shading = shading
        self.camera = camera if camera is not None else Camera()
        self.controller = SceneController(scene, animators)

class ColorPresets:
    """Common albedo colors."""
    RED = Vector3(1.0, 0.0, 0.0)
    GREEN = Vector3(0.0, 1.0, 0.0)
    BLUE = Vector3(0.0, 0.0, 1.0)
    GOLD = Vector3(1.0, 0.78, 0.34)
    GRASS = Vector3(0.35, 0.7, 0.3)

def default_light() -> DirectionalLight:
    return DirectionalLight(Vector3(-1.1, -1.3, -1.5))

def ground() -> Sphere:
    return Sphere(Vector3(0.0, -100.5, -1.0), 100.0, ColorPresets.GREEN)

class ScenePresets:
    """Predefined scenes, one per lighting / animation variant."""

    @staticmethod
    def static() -> SceneSetup:
        """Two spheres over the ground, flat colors, no lighting."""
        scene = Scene([
            Sphere(Vector3(0.0, 0.0, -1.0), 0.3, ColorPresets.RED),
            Sphere(Vector3(0.0, 0.2, -0.8), 0.15, ColorPresets.BLUE),
            ground(),
        ])
        return SceneSetup("static", scene, default_light(), ShadingModel.flat())

    @staticmethod
    def ambient() -> SceneSetup:
        setup = ScenePresets.static()
        setup.name = "ambient"
        setup.shading = ShadingModel.ambient_only(0.4)
        return setup

    @staticmethod
    def lambert() -> SceneSetup:
        setup = ScenePresets.static()
        setup.name = "lambert"
        setup.shading = ShadingModel.lambert()
        return setup

    @staticmethod
    def drag() -> SceneSetup:
        """Left-drag moves the blue sphere around the red one, with shadows."""
        scene = Scene([
            Sphere(Vector3(0.0, 0.0, -1.0), 0.3, ColorPresets.RED),
            Sphere(Vector3(0.5, 0.2, -1.0), 0.15, ColorPresets.BLUE),
            ground(),
        ])
        animators = [DragAnimator(1, 0, orbit_radius=0.6, move_duration=0.1, plane_z=-1.0)]
        return SceneSetup("drag", scene, default_light(), ShadingModel.shadowed(), animators=animators)

    @staticmethod
    def orbit() -> SceneSetup:
        """Two counter-rotating moons around a gold sphere under a moving sun."""
        scene = Scene([
            Sphere(Vector3(0.0, 0.0, -1.0), 0.3, ColorPresets.GOLD),
            Sphere(Vector3(0.6, 0.0, -1.0), 0.12, ColorPresets.RED),
            Sphere(Vector3(-0.6, 0.0, -1.0), 0.12, ColorPresets.BLUE),
            Sphere(Vector3(0.0, -100.5, -1.0), 100.0, ColorPresets.GRASS),
        ])
        light = default_light()
        animators = [
            OrbitAnimator(1, radius=0.6, step=0.02, y=0.0, z_offset=-1.0, direction=1),
            OrbitAnimator(2, radius=0.6, step=0.02, y=0.0, z_offset=-1.0, direction=-1, angle=math.pi),
            LightOrbit(light, step=0.005, elevation=-1.3),
        ]
        return SceneSetup("orbit", scene, light, ShadingModel.phong(), animators=animators)

    @staticmethod
    def keyboard() -> SceneSetup:
        """Arrow keys / WASD move the blue sphere within reach of the red one."""
        scene = Scene([
            Sphere(Vector3(0.0, 0.0, -1.0), 0.3, ColorPresets.RED),
            Sphere(Vector3(0.5, 0.0, -1.0), 0.15, ColorPresets.BLUE),
            ground(),
        ])
        animators = [KeyboardMover(1, 0, orbit_radius=0.6, step=0.02, speed=1.0)]
        return SceneSetup("keyboard", scene, default_light(), ShadingModel.phong(), animators=animators)

PRESETS: Dict[str, Callable[[], SceneSetup]] = {
    "static": ScenePresets.static,
    "ambient": ScenePresets.ambient,
    "lambert": ScenePresets.lambert,
    "drag": ScenePresets.drag,
    "orbit": ScenePresets.orbit,
    "keyboard": ScenePresets.keyboard,
}

def load_preset(name: str) -> SceneSetup:
    try:
        factory = PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown scene {name!r}, expected one of {sorted(PRESETS)}") from None
    return factory()
