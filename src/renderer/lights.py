# renderer/lights.py
from core.vector import Vector3

class DirectionalLight:
    """
    A single distant light. `direction` points from the light toward the
    scene; `to_light` is the opposite direction used for N.L terms.
    """
    def __init__(self, direction: Vector3, color: Vector3 = None):
        self._direction = direction.normalize()
        self.color = color if color is not None else Vector3(1.0, 1.0, 1.0)

    @property
    def direction(self) -> Vector3:
        return self._direction

    @direction.setter
    def direction(self, value: Vector3):
        self._direction = value.normalize()

    @property
    def to_light(self) -> Vector3:
        return -self._direction

    def __repr__(self) -> str:
        return f"DirectionalLight({self._direction!r}, color={self.color!r})"
