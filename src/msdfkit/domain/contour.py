"""Contour model: a closed, cyclic sequence of edge segments.

This module defines:
- WindingSign: Enum for contour orientation
- Contour: Ordered edges forming a closed loop

Adjacency is index arithmetic: the successor of the last edge is the first.
Area and containment work on a sampled polygon of the outline; the sampling
affects these measurements only, never the rendered geometry.
"""

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from msdfkit.domain.edges import Bounds, EdgeSegment, edge_from_dict
from msdfkit.domain.vector import Point

DEFAULT_SAMPLES_PER_CURVE = 16


class WindingSign(Enum):
    """Contour winding orientation.

    - POSITIVE: counter-clockwise, fills (additive boundary)
    - NEGATIVE: clockwise, cuts holes (subtractive boundary)
    - DEGENERATE: area too close to zero to tell
    """

    POSITIVE = auto()
    NEGATIVE = auto()
    DEGENERATE = auto()


@dataclass
class Contour:
    """A closed contour of edge segments.

    Attributes:
        edges: Edges in drawing order; edge i ends where edge i+1 starts
    """

    edges: list[EdgeSegment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.edges)

    def next_index(self, index: int) -> int:
        """Index of the edge following ``index`` (wrapping around)."""
        return (index + 1) % len(self.edges)

    def polygon(self, samples_per_curve: int = DEFAULT_SAMPLES_PER_CURVE) -> list[Point]:
        """Approximate the outline as a closed polygon.

        Lines contribute their start point, curves ``samples_per_curve``
        points. The closing vertex is implied.
        """
        points: list[Point] = []
        for edge in self.edges:
            points.extend(edge.sample_points(samples_per_curve))
        return points

    def signed_area(self, samples_per_curve: int = DEFAULT_SAMPLES_PER_CURVE) -> float:
        """Calculate signed area using the shoelace formula.

        Positive area means counter-clockwise winding.

        Returns:
            Signed area of the sampled outline
        """
        points = self.polygon(samples_per_curve)
        n = len(points)
        if n < 3:
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += points[i].x * points[j].y
            area -= points[j].x * points[i].y
        return area / 2.0

    def bounds(self) -> Bounds:
        """Exact bounding box of all edges."""
        result = Bounds.empty()
        for edge in self.edges:
            result = result.union(edge.bounds())
        return result

    def size(self) -> float:
        """Bounding-box diagonal, used to scale tolerances."""
        return self.bounds().diagonal

    def winding_sign(
        self,
        samples_per_curve: int = DEFAULT_SAMPLES_PER_CURVE,
        area_tolerance: float = 1e-9,
    ) -> WindingSign:
        """Classify the orientation of the contour.

        Args:
            samples_per_curve: Points sampled per curved edge
            area_tolerance: Areas at or below this times the squared size
                (at least 1) count as degenerate

        Returns:
            WindingSign of the contour
        """
        area = self.signed_area(samples_per_curve)
        size = self.size()
        if abs(area) <= area_tolerance * max(size * size, 1.0):
            return WindingSign.DEGENERATE
        return WindingSign.POSITIVE if area > 0 else WindingSign.NEGATIVE

    def corner_angle(self, index: int) -> float:
        """Signed turning angle at the vertex after edge ``index``.

        Measured from the incoming tangent of edge ``index`` to the outgoing
        tangent of the next edge. Zero means the outline continues straight.

        Returns:
            Angle in radians, within (-pi, pi]
        """
        incoming = self.edges[index].direction_at(1.0)
        outgoing = self.edges[self.next_index(index)].direction_at(0.0)
        angle = math.atan2(incoming.cross(outgoing), incoming.dot(outgoing))
        if angle <= -math.pi:
            angle = math.pi
        return angle

    def is_sharp_corner(self, index: int, threshold_degrees: float = 3.0) -> bool:
        """Check whether the vertex after edge ``index`` deviates from straight
        by more than ``threshold_degrees``."""
        return abs(self.corner_angle(index)) > math.radians(threshold_degrees)

    def sharp_corners(self, threshold_degrees: float = 3.0) -> list[int]:
        """Indices of edges followed by a sharp corner."""
        return [i for i in range(len(self.edges)) if self.is_sharp_corner(i, threshold_degrees)]

    def closure_gap(self) -> float:
        """Largest distance between the end of an edge and the start of its successor."""
        gap = 0.0
        for i, edge in enumerate(self.edges):
            gap = max(gap, edge.end.distance_to(self.edges[self.next_index(i)].start))
        return gap

    def is_closed(self, tolerance: float = 1e-6) -> bool:
        """Check that consecutive edges meet within ``tolerance``."""
        return bool(self.edges) and self.closure_gap() <= tolerance

    def representative_point(self) -> Point:
        """A point on the outline used for containment tests."""
        return self.edges[0].point_at(0.5)

    def contains_point(
        self,
        point: Point,
        samples_per_curve: int = DEFAULT_SAMPLES_PER_CURVE,
    ) -> bool:
        """Check if a point is inside the contour using ray casting.

        Casts a ray from the point to the right and counts crossings with the
        sampled outline. Odd count means inside, independent of winding.
        """
        points = self.polygon(samples_per_curve)
        n = len(points)
        if n < 3:
            return False

        inside = False
        j = n - 1
        for i in range(n):
            xi, yi = points[i].x, points[i].y
            xj, yj = points[j].x, points[j].y
            if (yi > point.y) != (yj > point.y) and point.x < (xj - xi) * (point.y - yi) / (
                yj - yi
            ) + xi:
                inside = not inside
            j = i
        return inside

    def reversed(self) -> "Contour":
        """Return the same outline traversed in the opposite direction.

        Edge colors travel with their edges.
        """
        return Contour([edge.reversed() for edge in reversed(self.edges)])

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"edges": [edge.to_dict() for edge in self.edges]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contour":
        """Deserialize from dictionary."""
        return cls(edges=[edge_from_dict(e) for e in data["edges"]])
