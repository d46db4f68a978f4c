"""Two-dimensional point and vector value type.

A single immutable type serves both as a position and as a displacement;
``Vector`` is an alias used where a direction is meant.
"""

import math
from dataclasses import dataclass
from typing import Any

from msdfkit.exceptions import DegenerateGeometryError

# Lengths below this are treated as zero when normalizing
EPSILON = 1e-12


@dataclass(frozen=True, slots=True)
class Point:
    """A point (or vector) in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in shape units
        y: Y coordinate in shape units
    """

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "Point":
        return Point(self.x / divisor, self.y / divisor)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def dot(self, other: "Point") -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Point") -> float:
        """Z component of the 3D cross product.

        Positive when ``other`` points to the left of ``self``.
        """
        return self.x * other.y - self.y * other.x

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def is_zero(self, tolerance: float = EPSILON) -> bool:
        """Check whether the vector is shorter than ``tolerance``."""
        return self.length_squared() <= tolerance * tolerance

    def normalized(self) -> "Point":
        """Return the unit vector with the same direction.

        Raises:
            DegenerateGeometryError: If the vector has (near) zero length
        """
        length = self.length()
        if length <= EPSILON:
            raise DegenerateGeometryError("vector", "cannot normalize a zero-length vector")
        return Point(self.x / length, self.y / length)

    def perpendicular(self) -> "Point":
        """Rotate 90 degrees counter-clockwise."""
        return Point(-self.y, self.x)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def lerp(self, other: "Point", t: float) -> "Point":
        """Linear interpolation towards ``other``."""
        return Point(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary."""
        return cls(x=data["x"], y=data["y"])

    @classmethod
    def of(cls, value: "Point | tuple[float, float]") -> "Point":
        """Coerce an (x, y) tuple into a Point."""
        if isinstance(value, Point):
            return value
        x, y = value
        return cls(float(x), float(y))


Vector = Point
