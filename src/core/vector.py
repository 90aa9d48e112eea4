# core/vector.py
import math

class Vector3:
    """
    A simple 3D vector used for points, directions and colors alike.
    Every operation returns a new Vector3; instances are never modified
    in place once constructed.
    """
    def __init__(self, x: float, y: float, z: float):
        self.x = x
        self.y = y
        self.z = z

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other):
        if isinstance(other, (int, float)):
            return self.scale(other)
        return self.multiply(other)

    def __rmul__(self, other: float) -> "Vector3":
        return self.__mul__(other)

    def __truediv__(self, t: float) -> "Vector3":
        return Vector3(self.x / t, self.y / t, self.z / t)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self):
        return hash((self.x, self.y, self.z))

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def scale(self, k: float) -> "Vector3":
        return Vector3(self.x * k, self.y * k, self.z * k)

    def multiply(self, other: "Vector3") -> "Vector3":
        """Component-wise (Hadamard) product, used to tint colors."""
        return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def length_squared(self) -> float:
        return self.dot(self)

    def normalize(self) -> "Vector3":
        l = self.length()
        if l == 0:
            return Vector3(0, 0, 0)
        return self / l

    def lerp(self, target: "Vector3", t: float) -> "Vector3":
        """
        Linear interpolation towards target. t is not clamped; callers
        keep it in [0, 1].
        """
        return Vector3(
            self.x + (target.x - self.x) * t,
            self.y + (target.y - self.y) * t,
            self.z + (target.z - self.z) * t
        )

    def clamp(self, lo: float = 0.0, hi: float = 1.0) -> "Vector3":
        return Vector3(
            min(max(self.x, lo), hi),
            min(max(self.y, lo), hi),
            min(max(self.z, lo), hi)
        )

    def gamma_correct(self, gamma: float = 2.2) -> "Vector3":
        inv = 1.0 / gamma
        # negative channels would turn into complex numbers under pow
        return Vector3(
            max(self.x, 0.0) ** inv,
            max(self.y, 0.0) ** inv,
            max(self.z, 0.0) ** inv
        )

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"
