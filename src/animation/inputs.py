# animation/inputs.py
from typing import Iterable, Optional, Set, Tuple

class InputState:
    """
    Latest input posted by the window layer, read once per frame by the
    animators. Only the most recent drag position is kept; older ones
    posted during the same frame are overwritten.
    """
    def __init__(self, aspect_ratio: float = 1.0):
        self.aspect_ratio = aspect_ratio
        self.dragging = False
        self.keys: Set[str] = set()
        self._drag_target: Optional[Tuple[float, float]] = None

    def begin_drag(self):
        self.dragging = True

    def end_drag(self):
        self.dragging = False

    def post_drag(self, x: float, y: float):
        """Records a drag position in normalized device coordinates."""
        if self.dragging:
            self._drag_target = (x, y)

    def take_drag_target(self) -> Optional[Tuple[float, float]]:
        """Returns the pending drag position, if any, and clears it."""
        target = self._drag_target
        self._drag_target = None
        return target

    def set_keys(self, keys: Iterable[str]):
        self.keys = set(keys)

    def is_pressed(self, key: str) -> bool:
        return key in self.keys
