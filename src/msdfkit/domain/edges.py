"""Edge segment primitives and their distance queries.

Four primitive kinds make up every contour:
- LineSegment: straight line between two points
- QuadraticSegment: quadratic Bezier curve (TrueType outlines)
- CubicSegment: cubic Bezier curve (PostScript/CFF outlines)
- ArcSegment: elliptical arc in centre parameterisation (SVG arcs)

The kinds share one capability contract (``EdgeSegmentProtocol``) rather
than a base class. Each answers true signed distance queries (used to pick
the nearest edge) and signed pseudo-distance queries (used for the field
value), where the edge is extended along its end tangents.

Sign convention: positive distances lie to the left of the directed edge,
which is the inside of a counter-clockwise contour.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from msdfkit.domain._roots import (
    ARC_SEARCH_STARTS,
    ARC_SEARCH_STEPS,
    CUBIC_SEARCH_STARTS,
    CUBIC_SEARCH_STEPS,
    newton_refine,
    solve_cubic,
    solve_quadratic,
)
from msdfkit.domain.color import EdgeColor
from msdfkit.domain.vector import EPSILON, Point, Vector
from msdfkit.exceptions import DegenerateGeometryError

TAU = 2 * math.pi

# Relative tolerance under which two distances are considered tied
DISTANCE_TIE_TOLERANCE = 1e-9


class EdgeKind(str, Enum):
    """Primitive kind of an edge segment."""

    LINE = "line"
    QUADRATIC = "quadratic"
    CUBIC = "cubic"
    ARC = "arc"


@dataclass(frozen=True, slots=True)
class SignedDistance:
    """Result of a true distance query.

    Attributes:
        distance: Signed distance to the closest point (positive = left)
        orthogonality: 0 when the closest point is interior; otherwise the
            absolute cosine between the edge tangent and the direction to
            the query. Lower values win ties.
        t: Parameter of the closest point, within [0, 1]
    """

    distance: float
    orthogonality: float
    t: float

    def closer_than(self, other: "SignedDistance") -> bool:
        """Check whether this result beats ``other`` as the nearest edge.

        Smaller magnitude wins; near-equal magnitudes prefer the more
        perpendicular (in-range) projection.
        """
        a = abs(self.distance)
        b = abs(other.distance)
        if math.isinf(b):
            return not math.isinf(a)
        tolerance = DISTANCE_TIE_TOLERANCE * max(a, b, 1.0)
        if a < b - tolerance:
            return True
        if a > b + tolerance:
            return False
        return self.orthogonality < other.orthogonality


FAR_AWAY = SignedDistance(-math.inf, 1.0, 0.0)


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned bounding box.

    Attributes:
        left: Minimum x
        bottom: Minimum y
        right: Maximum x
        top: Maximum y
    """

    left: float
    bottom: float
    right: float
    top: float

    @classmethod
    def empty(cls) -> "Bounds":
        return cls(math.inf, math.inf, -math.inf, -math.inf)

    @classmethod
    def of_points(cls, points: list[Point]) -> "Bounds":
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))

    def union(self, other: "Bounds") -> "Bounds":
        return Bounds(
            min(self.left, other.left),
            min(self.bottom, other.bottom),
            max(self.right, other.right),
            max(self.top, other.top),
        )

    def is_empty(self) -> bool:
        return self.left > self.right or self.bottom > self.top

    @property
    def width(self) -> float:
        return max(0.0, self.right - self.left)

    @property
    def height(self) -> float:
        return max(0.0, self.top - self.bottom)

    @property
    def diagonal(self) -> float:
        if self.is_empty():
            return 0.0
        return math.hypot(self.width, self.height)

    @property
    def center(self) -> Point:
        return Point((self.left + self.right) / 2, (self.bottom + self.top) / 2)


class EdgeSegmentProtocol(Protocol):
    """Capability contract shared by every edge kind."""

    color: EdgeColor

    @property
    def kind(self) -> EdgeKind: ...

    @property
    def start(self) -> Point: ...

    @property
    def end(self) -> Point: ...

    def point_at(self, t: float) -> Point: ...

    def derivative_at(self, t: float) -> Vector: ...

    def direction_at(self, t: float) -> Vector: ...

    def signed_distance(self, query: Point) -> SignedDistance: ...

    def signed_pseudo_distance(self, query: Point) -> tuple[float, float]: ...

    def bounds(self) -> Bounds: ...

    def sample_points(self, count: int) -> list[Point]: ...

    def reversed(self) -> "EdgeSegmentProtocol": ...

    def to_dict(self) -> dict[str, Any]: ...


def _signed_result(edge: EdgeSegmentProtocol, query: Point, t: float, dist_sq: float) -> SignedDistance:
    """Build a SignedDistance for the closest point at ``t``."""
    rel = query - edge.point_at(t)
    direction = edge.direction_at(t)
    distance = math.sqrt(dist_sq)
    sign = 1.0 if direction.cross(rel) >= 0 else -1.0
    if 0.0 < t < 1.0 or distance <= EPSILON:
        orthogonality = 0.0
    else:
        orthogonality = abs(direction.dot(rel)) / distance
    return SignedDistance(sign * distance, orthogonality, t)


def _closest_of(edge: EdgeSegmentProtocol, query: Point, candidates: list[float]) -> SignedDistance:
    """Pick the closest of the candidate parameters and both endpoints.

    Interior candidates come first so that they win exact ties with the
    endpoints.
    """
    best_t = 0.0
    best_sq = math.inf
    for t in [*candidates, 0.0, 1.0]:
        if not 0.0 <= t <= 1.0:
            continue
        dist_sq = (query - edge.point_at(t)).length_squared()
        if dist_sq < best_sq:
            best_sq = dist_sq
            best_t = t
    return _signed_result(edge, query, best_t, best_sq)


def to_pseudo_distance(
    edge: EdgeSegmentProtocol, query: Point, result: SignedDistance
) -> tuple[float, float]:
    """Extend a true distance result into a pseudo-distance.

    When the closest point is an endpoint and the query lies beyond it along
    the end tangent, the distance to the tangent ray replaces the true
    distance (only if it is not larger). The returned parameter is then
    outside [0, 1]: negative before the start, above 1 past the end.

    Args:
        edge: Edge the result was computed for
        query: Query point
        result: True distance result from ``edge.signed_distance(query)``

    Returns:
        Tuple of (signed pseudo-distance, unclamped parameter)
    """
    if result.t <= 0.0:
        direction = edge.direction_at(0.0)
        rel = query - edge.start
        along = rel.dot(direction)
        if along < 0:
            pseudo = direction.cross(rel)
            if abs(pseudo) <= abs(result.distance):
                speed = edge.derivative_at(0.0).length() or 1.0
                return pseudo, along / speed
    elif result.t >= 1.0:
        direction = edge.direction_at(1.0)
        rel = query - edge.end
        along = rel.dot(direction)
        if along > 0:
            pseudo = direction.cross(rel)
            if abs(pseudo) <= abs(result.distance):
                speed = edge.derivative_at(1.0).length() or 1.0
                return pseudo, 1.0 + along / speed
    return result.distance, result.t


def _first_nonzero(kind: EdgeKind, vectors: list[Vector]) -> Vector:
    for vector in vectors:
        if not vector.is_zero():
            return vector.normalized()
    raise DegenerateGeometryError(kind.value, "tangent is zero everywhere it was probed")


@dataclass(slots=True)
class LineSegment:
    """Straight edge from ``p0`` to ``p1``."""

    p0: Point
    p1: Point
    color: EdgeColor = field(default=EdgeColor.WHITE)

    @property
    def kind(self) -> EdgeKind:
        return EdgeKind.LINE

    @property
    def start(self) -> Point:
        return self.p0

    @property
    def end(self) -> Point:
        return self.p1

    def point_at(self, t: float) -> Point:
        return self.p0.lerp(self.p1, t)

    def derivative_at(self, t: float) -> Vector:  # noqa: ARG002
        return self.p1 - self.p0

    def direction_at(self, t: float) -> Vector:  # noqa: ARG002
        delta = self.p1 - self.p0
        if delta.is_zero():
            raise DegenerateGeometryError(self.kind.value, "zero-length line")
        return delta.normalized()

    def signed_distance(self, query: Point) -> SignedDistance:
        ab = self.p1 - self.p0
        length_sq = ab.length_squared()
        if length_sq <= EPSILON * EPSILON:
            raise DegenerateGeometryError(self.kind.value, "zero-length line")
        t = (query - self.p0).dot(ab) / length_sq
        t = min(1.0, max(0.0, t))
        dist_sq = (query - self.point_at(t)).length_squared()
        return _signed_result(self, query, t, dist_sq)

    def signed_pseudo_distance(self, query: Point) -> tuple[float, float]:
        return to_pseudo_distance(self, query, self.signed_distance(query))

    def bounds(self) -> Bounds:
        return Bounds.of_points([self.p0, self.p1])

    def sample_points(self, count: int) -> list[Point]:  # noqa: ARG002
        return [self.p0]

    def reversed(self) -> "LineSegment":
        return LineSegment(self.p1, self.p0, self.color)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "points": [self.p0.to_dict(), self.p1.to_dict()],
            "color": int(self.color),
        }


@dataclass(slots=True)
class QuadraticSegment:
    """Quadratic Bezier edge with control point ``p1``."""

    p0: Point
    p1: Point
    p2: Point
    color: EdgeColor = field(default=EdgeColor.WHITE)

    @property
    def kind(self) -> EdgeKind:
        return EdgeKind.QUADRATIC

    @property
    def start(self) -> Point:
        return self.p0

    @property
    def end(self) -> Point:
        return self.p2

    def point_at(self, t: float) -> Point:
        u = 1.0 - t
        return self.p0 * (u * u) + self.p1 * (2 * u * t) + self.p2 * (t * t)

    def derivative_at(self, t: float) -> Vector:
        return ((self.p1 - self.p0) * (1.0 - t) + (self.p2 - self.p1) * t) * 2.0

    def direction_at(self, t: float) -> Vector:
        return _first_nonzero(self.kind, [self.derivative_at(t), self.p2 - self.p0])

    def signed_distance(self, query: Point) -> SignedDistance:
        qa = self.p0 - query
        ab = self.p1 - self.p0
        br = self.p2 - self.p1 - ab
        candidates = solve_cubic(
            br.dot(br),
            3 * ab.dot(br),
            2 * ab.dot(ab) + qa.dot(br),
            qa.dot(ab),
        )
        return _closest_of(self, query, candidates)

    def signed_pseudo_distance(self, query: Point) -> tuple[float, float]:
        return to_pseudo_distance(self, query, self.signed_distance(query))

    def bounds(self) -> Bounds:
        points = [self.p0, self.p2]
        for axis in ("x", "y"):
            a0 = getattr(self.p0, axis)
            a1 = getattr(self.p1, axis)
            a2 = getattr(self.p2, axis)
            denom = a0 - 2 * a1 + a2
            if denom != 0:
                t = (a0 - a1) / denom
                if 0 < t < 1:
                    points.append(self.point_at(t))
        return Bounds.of_points(points)

    def sample_points(self, count: int) -> list[Point]:
        return [self.point_at(i / count) for i in range(count)]

    def reversed(self) -> "QuadraticSegment":
        return QuadraticSegment(self.p2, self.p1, self.p0, self.color)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "points": [p.to_dict() for p in (self.p0, self.p1, self.p2)],
            "color": int(self.color),
        }


@dataclass(slots=True)
class CubicSegment:
    """Cubic Bezier edge with control points ``p1`` and ``p2``."""

    p0: Point
    p1: Point
    p2: Point
    p3: Point
    color: EdgeColor = field(default=EdgeColor.WHITE)

    @property
    def kind(self) -> EdgeKind:
        return EdgeKind.CUBIC

    @property
    def start(self) -> Point:
        return self.p0

    @property
    def end(self) -> Point:
        return self.p3

    def point_at(self, t: float) -> Point:
        u = 1.0 - t
        return (
            self.p0 * (u * u * u)
            + self.p1 * (3 * u * u * t)
            + self.p2 * (3 * u * t * t)
            + self.p3 * (t * t * t)
        )

    def derivative_at(self, t: float) -> Vector:
        u = 1.0 - t
        return (
            (self.p1 - self.p0) * (3 * u * u)
            + (self.p2 - self.p1) * (6 * u * t)
            + (self.p3 - self.p2) * (3 * t * t)
        )

    def second_derivative_at(self, t: float) -> Vector:
        u = 1.0 - t
        return (
            (self.p2 - self.p1 * 2 + self.p0) * (6 * u)
            + (self.p3 - self.p2 * 2 + self.p1) * (6 * t)
        )

    def direction_at(self, t: float) -> Vector:
        derivative = self.derivative_at(t)
        if t <= 0.5:
            fallbacks = [self.p2 - self.p0, self.p3 - self.p0]
        else:
            fallbacks = [self.p3 - self.p1, self.p3 - self.p0]
        return _first_nonzero(self.kind, [derivative, *fallbacks])

    def signed_distance(self, query: Point) -> SignedDistance:
        def f(t: float) -> float:
            return (self.point_at(t) - query).dot(self.derivative_at(t))

        def df(t: float) -> float:
            d1 = self.derivative_at(t)
            return d1.dot(d1) + (self.point_at(t) - query).dot(self.second_derivative_at(t))

        candidates = [
            newton_refine(i / CUBIC_SEARCH_STARTS, f, df, CUBIC_SEARCH_STEPS, 0.0, 1.0)
            for i in range(CUBIC_SEARCH_STARTS + 1)
        ]
        return _closest_of(self, query, candidates)

    def signed_pseudo_distance(self, query: Point) -> tuple[float, float]:
        return to_pseudo_distance(self, query, self.signed_distance(query))

    def bounds(self) -> Bounds:
        points = [self.p0, self.p3]
        for axis in ("x", "y"):
            a = getattr(self.p1, axis) - getattr(self.p0, axis)
            b = getattr(self.p2, axis) - getattr(self.p1, axis)
            c = getattr(self.p3, axis) - getattr(self.p2, axis)
            for t in solve_quadratic(a - 2 * b + c, 2 * (b - a), a):
                if 0 < t < 1:
                    points.append(self.point_at(t))
        return Bounds.of_points(points)

    def sample_points(self, count: int) -> list[Point]:
        return [self.point_at(i / count) for i in range(count)]

    def reversed(self) -> "CubicSegment":
        return CubicSegment(self.p3, self.p2, self.p1, self.p0, self.color)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "points": [p.to_dict() for p in (self.p0, self.p1, self.p2, self.p3)],
            "color": int(self.color),
        }


def _vector_angle(u: Vector, v: Vector) -> float:
    """Signed angle from ``u`` to ``v``."""
    return math.atan2(u.cross(v), u.dot(v))


@dataclass(slots=True)
class ArcSegment:
    """Elliptical arc in centre parameterisation.

    The ellipse has radii ``rx``/``ry`` along its own axes, which are rotated
    by ``rotation`` radians. The arc starts at ellipse angle ``start_angle``
    and sweeps ``sweep_angle`` radians (positive = counter-clockwise).
    Parameter ``t`` maps linearly onto the swept angle.
    """

    center: Point
    rx: float
    ry: float
    rotation: float
    start_angle: float
    sweep_angle: float
    color: EdgeColor = field(default=EdgeColor.WHITE)

    @classmethod
    def from_endpoints(
        cls,
        start: Point,
        rx: float,
        ry: float,
        rotation: float,
        large_arc: bool,
        sweep_ccw: bool,
        end: Point,
    ) -> "ArcSegment":
        """Convert an SVG-style endpoint arc into centre parameterisation.

        Follows the SVG implementation notes (F.6.5), scaling the radii up
        when they are too small to span the endpoints.

        Args:
            start: First point of the arc
            rx: X radius of the ellipse
            ry: Y radius of the ellipse
            rotation: Angle of the ellipse x-axis, in radians
            large_arc: Take the sweep larger than 180 degrees
            sweep_ccw: Sweep counter-clockwise (positive angles)
            end: Final point of the arc

        Returns:
            ArcSegment passing through ``start`` and ``end``

        Raises:
            DegenerateGeometryError: If the endpoints coincide or a radius is 0
        """
        rx, ry = abs(rx), abs(ry)
        if (end - start).is_zero():
            raise DegenerateGeometryError(EdgeKind.ARC.value, "arc endpoints coincide")
        if rx <= EPSILON or ry <= EPSILON:
            raise DegenerateGeometryError(EdgeKind.ARC.value, "zero arc radius")

        cos_phi = math.cos(rotation)
        sin_phi = math.sin(rotation)
        half = (start - end) / 2
        x1 = cos_phi * half.x + sin_phi * half.y
        y1 = -sin_phi * half.x + cos_phi * half.y

        scale = (x1 * x1) / (rx * rx) + (y1 * y1) / (ry * ry)
        if scale > 1:
            root = math.sqrt(scale)
            rx *= root
            ry *= root

        rx2, ry2 = rx * rx, ry * ry
        denom = rx2 * y1 * y1 + ry2 * x1 * x1
        coef = math.sqrt(max(0.0, (rx2 * ry2 - denom) / denom))
        if large_arc == sweep_ccw:
            coef = -coef
        cx1 = coef * rx * y1 / ry
        cy1 = -coef * ry * x1 / rx

        mid = (start + end) / 2
        center = Point(cos_phi * cx1 - sin_phi * cy1 + mid.x, sin_phi * cx1 + cos_phi * cy1 + mid.y)

        u = Vector((x1 - cx1) / rx, (y1 - cy1) / ry)
        v = Vector((-x1 - cx1) / rx, (-y1 - cy1) / ry)
        start_angle = _vector_angle(Vector(1.0, 0.0), u)
        sweep = _vector_angle(u, v)
        if not sweep_ccw and sweep > 0:
            sweep -= TAU
        elif sweep_ccw and sweep < 0:
            sweep += TAU

        return cls(center, rx, ry, rotation, start_angle, sweep)

    @property
    def kind(self) -> EdgeKind:
        return EdgeKind.ARC

    @property
    def start(self) -> Point:
        return self.point_at(0.0)

    @property
    def end(self) -> Point:
        return self.point_at(1.0)

    @property
    def is_circular(self) -> bool:
        return abs(self.rx - self.ry) <= 1e-12 * max(self.rx, self.ry)

    def _check(self) -> None:
        if self.rx <= EPSILON or self.ry <= EPSILON:
            raise DegenerateGeometryError(self.kind.value, "zero arc radius")
        if abs(self.sweep_angle) <= EPSILON:
            raise DegenerateGeometryError(self.kind.value, "zero arc sweep")

    def _ellipse(self, angle: float) -> Point:
        cos_phi, sin_phi = math.cos(self.rotation), math.sin(self.rotation)
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        return Point(
            self.center.x + self.rx * cos_phi * cos_a - self.ry * sin_phi * sin_a,
            self.center.y + self.rx * sin_phi * cos_a + self.ry * cos_phi * sin_a,
        )

    def _ellipse_derivative(self, angle: float) -> Vector:
        cos_phi, sin_phi = math.cos(self.rotation), math.sin(self.rotation)
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        return Vector(
            -self.rx * cos_phi * sin_a - self.ry * sin_phi * cos_a,
            -self.rx * sin_phi * sin_a + self.ry * cos_phi * cos_a,
        )

    def angle_to_t(self, angle: float) -> float:
        """Map an ellipse angle onto the arc parameter.

        The angle is wrapped into the swept direction, so values in [0, 1]
        lie on the arc and anything larger falls outside it.
        """
        delta = angle - self.start_angle
        if self.sweep_angle > 0:
            delta %= TAU
        else:
            delta = -((-delta) % TAU)
        return delta / self.sweep_angle

    def point_at(self, t: float) -> Point:
        return self._ellipse(self.start_angle + t * self.sweep_angle)

    def derivative_at(self, t: float) -> Vector:
        return self._ellipse_derivative(self.start_angle + t * self.sweep_angle) * self.sweep_angle

    def direction_at(self, t: float) -> Vector:
        self._check()
        return self.derivative_at(t).normalized()

    def _candidate_angles(self, query: Point) -> list[float]:
        if self.is_circular:
            rel = query - self.center
            cos_phi, sin_phi = math.cos(self.rotation), math.sin(self.rotation)
            local_x = cos_phi * rel.x + sin_phi * rel.y
            local_y = -sin_phi * rel.x + cos_phi * rel.y
            return [math.atan2(local_y, local_x)]

        def f(angle: float) -> float:
            return (self._ellipse(angle) - query).dot(self._ellipse_derivative(angle))

        def df(angle: float) -> float:
            d1 = self._ellipse_derivative(angle)
            # Second derivative of an ellipse points back at its centre
            d2 = self.center - self._ellipse(angle)
            return d1.dot(d1) + (self._ellipse(angle) - query).dot(d2)

        return [
            newton_refine(TAU * i / ARC_SEARCH_STARTS, f, df, ARC_SEARCH_STEPS)
            for i in range(ARC_SEARCH_STARTS)
        ]

    def signed_distance(self, query: Point) -> SignedDistance:
        self._check()
        candidates = [self.angle_to_t(angle) for angle in self._candidate_angles(query)]
        return _closest_of(self, query, candidates)

    def signed_pseudo_distance(self, query: Point) -> tuple[float, float]:
        return to_pseudo_distance(self, query, self.signed_distance(query))

    def bounds(self) -> Bounds:
        points = [self.start, self.end]
        cos_phi, sin_phi = math.cos(self.rotation), math.sin(self.rotation)
        x_extreme = math.atan2(-self.ry * sin_phi, self.rx * cos_phi)
        y_extreme = math.atan2(self.ry * cos_phi, self.rx * sin_phi)
        for angle in (x_extreme, x_extreme + math.pi, y_extreme, y_extreme + math.pi):
            if 0.0 <= self.angle_to_t(angle) <= 1.0:
                points.append(self._ellipse(angle))
        return Bounds.of_points(points)

    def sample_points(self, count: int) -> list[Point]:
        return [self.point_at(i / count) for i in range(count)]

    def reversed(self) -> "ArcSegment":
        return ArcSegment(
            self.center,
            self.rx,
            self.ry,
            self.rotation,
            self.start_angle + self.sweep_angle,
            -self.sweep_angle,
            self.color,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "center": self.center.to_dict(),
            "rx": self.rx,
            "ry": self.ry,
            "rotation": self.rotation,
            "start_angle": self.start_angle,
            "sweep_angle": self.sweep_angle,
            "color": int(self.color),
        }


EdgeSegment = LineSegment | QuadraticSegment | CubicSegment | ArcSegment


def edge_from_dict(data: dict[str, Any]) -> EdgeSegment:
    """Deserialize any edge kind from its ``to_dict()`` form.

    Raises:
        ValueError: If the kind is unknown
    """
    kind = EdgeKind(data["kind"])
    color = EdgeColor(data.get("color", int(EdgeColor.WHITE)))
    if kind is EdgeKind.ARC:
        return ArcSegment(
            center=Point.from_dict(data["center"]),
            rx=data["rx"],
            ry=data["ry"],
            rotation=data["rotation"],
            start_angle=data["start_angle"],
            sweep_angle=data["sweep_angle"],
            color=color,
        )
    points = [Point.from_dict(p) for p in data["points"]]
    if kind is EdgeKind.LINE:
        return LineSegment(*points, color=color)
    if kind is EdgeKind.QUADRATIC:
        return QuadraticSegment(*points, color=color)
    return CubicSegment(*points, color=color)
