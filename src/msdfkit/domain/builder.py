"""Fluent construction of shapes from pen-style drawing commands.

Example:
    >>> shape = (
    ...     ShapeBuilder()
    ...     .contour((0, 0))
    ...     .line((1, 0))
    ...     .line((1, 1))
    ...     .line((0, 1))
    ...     .close()
    ...     .build()
    ... )
    >>> shape.edge_count
    4
"""

from msdfkit.domain.contour import Contour
from msdfkit.domain.edges import ArcSegment, CubicSegment, EdgeSegment, LineSegment, QuadraticSegment
from msdfkit.domain.shape import Shape
from msdfkit.domain.vector import EPSILON, Point
from msdfkit.exceptions import DegenerateContourError

PointLike = Point | tuple[float, float]

# Pen moves shorter than this are dropped as importer noise
MIN_EDGE_LENGTH = 1e-9


class ShapeBuilder:
    """Builds a Shape one contour at a time.

    Each method returns the builder so calls can be chained. Edges that
    would have zero length are skipped, and an SVG arc with a zero radius
    becomes a straight line.
    """

    def __init__(self, name: str | None = None) -> None:
        self._name = name
        self._contours: list[Contour] = []
        self._edges: list[EdgeSegment] | None = None
        self._start: Point | None = None
        self._current: Point | None = None

    def _require_pen(self) -> Point:
        if self._current is None:
            raise DegenerateContourError(len(self._contours), "drawing before contour() was called")
        return self._current

    def _push(self, edge: EdgeSegment) -> "ShapeBuilder":
        assert self._edges is not None
        self._edges.append(edge)
        self._current = edge.end
        return self

    def contour(self, start: PointLike) -> "ShapeBuilder":
        """Begin a new contour at ``start``, closing any open one."""
        if self._edges is not None:
            self.close()
        self._edges = []
        self._start = Point.of(start)
        self._current = self._start
        return self

    def line(self, end: PointLike) -> "ShapeBuilder":
        current = self._require_pen()
        end = Point.of(end)
        if (end - current).is_zero(MIN_EDGE_LENGTH):
            return self
        return self._push(LineSegment(current, end))

    def quadratic(self, control: PointLike, end: PointLike) -> "ShapeBuilder":
        current = self._require_pen()
        control, end = Point.of(control), Point.of(end)
        if (end - current).is_zero(MIN_EDGE_LENGTH) and (control - current).is_zero(MIN_EDGE_LENGTH):
            return self
        return self._push(QuadraticSegment(current, control, end))

    def cubic(self, control1: PointLike, control2: PointLike, end: PointLike) -> "ShapeBuilder":
        current = self._require_pen()
        control1, control2, end = Point.of(control1), Point.of(control2), Point.of(end)
        if all((p - current).is_zero(MIN_EDGE_LENGTH) for p in (control1, control2, end)):
            return self
        return self._push(CubicSegment(current, control1, control2, end))

    def arc(
        self,
        rx: float,
        ry: float,
        rotation: float,
        large_arc: bool,
        sweep_ccw: bool,
        end: PointLike,
    ) -> "ShapeBuilder":
        """Append an SVG-style endpoint arc.

        Args:
            rx: X radius of the ellipse
            ry: Y radius of the ellipse
            rotation: Rotation of the ellipse x-axis in radians
            large_arc: Take the sweep larger than 180 degrees
            sweep_ccw: Sweep counter-clockwise
            end: Final point of the arc
        """
        current = self._require_pen()
        end = Point.of(end)
        if (end - current).is_zero(MIN_EDGE_LENGTH):
            return self
        if abs(rx) <= EPSILON or abs(ry) <= EPSILON:
            return self.line(end)
        return self._push(ArcSegment.from_endpoints(current, rx, ry, rotation, large_arc, sweep_ccw, end))

    def edge(self, edge: EdgeSegment) -> "ShapeBuilder":
        """Append a prebuilt edge; it must start at the current pen position."""
        current = self._require_pen()
        if not (edge.start - current).is_zero(MIN_EDGE_LENGTH):
            raise DegenerateContourError(len(self._contours), "edge does not start at the pen position")
        return self._push(edge)

    def close(self) -> "ShapeBuilder":
        """Finish the current contour, adding a closing line when needed.

        Contours without any edge are discarded.
        """
        if self._edges is None:
            return self
        assert self._start is not None
        self.line(self._start)
        if self._edges:
            self._contours.append(Contour(self._edges))
        self._edges = None
        self._start = None
        self._current = None
        return self

    def build(self) -> Shape:
        """Close any open contour and return the shape."""
        self.close()
        return Shape(contours=list(self._contours), name=self._name)
