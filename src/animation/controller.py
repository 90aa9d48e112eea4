# animation/controller.py
import logging
from typing import Iterable, List, Optional
from geometry.world import Scene
from animation.animators import Animator
from animation.inputs import InputState

logger = logging.getLogger(__name__)

class SceneController:
    """
    Runs the scene's animators once per frame, in order, before the frame
    is rendered. Rendering never mutates the scene; this is the only place
    sphere centers change.
    """
    def __init__(self, scene: Scene, animators: Iterable[Animator] = ()):
        self.scene = scene
        self.animators: List[Animator] = list(animators)
        self.frame_count = 0

    def update(self, delta_time: float, inputs: Optional[InputState] = None) -> None:
        if inputs is None:
            inputs = InputState()
        for animator in self.animators:
            animator.update(self.scene, delta_time, inputs)
        self.frame_count += 1
        if self.frame_count % 600 == 0:
            logger.debug("Scene updated for %d frames", self.frame_count)
