"""Tests for domain models to verify they work correctly."""

import math

import pytest

from msdfkit.domain import (
    Bounds,
    Contour,
    EdgeColor,
    LineSegment,
    Point,
    Shape,
    WindingSign,
)
from msdfkit.exceptions import DegenerateGeometryError


class TestPoint:
    """Tests for Point class."""

    def test_arithmetic(self) -> None:
        a = Point(1.0, 2.0)
        b = Point(3.0, -1.0)
        assert a + b == Point(4.0, 1.0)
        assert b - a == Point(2.0, -3.0)
        assert a * 2 == Point(2.0, 4.0)
        assert 2 * a == Point(2.0, 4.0)
        assert a / 2 == Point(0.5, 1.0)
        assert -a == Point(-1.0, -2.0)

    def test_dot_and_cross(self) -> None:
        """Cross product is positive when the second vector is to the left."""
        x_axis = Point(1.0, 0.0)
        y_axis = Point(0.0, 1.0)
        assert x_axis.dot(y_axis) == 0.0
        assert x_axis.cross(y_axis) == 1.0
        assert y_axis.cross(x_axis) == -1.0

    def test_normalized(self) -> None:
        v = Point(3.0, 4.0).normalized()
        assert v.length() == pytest.approx(1.0)
        assert v == Point(0.6, 0.8)

    def test_normalize_zero_vector_raises(self) -> None:
        with pytest.raises(DegenerateGeometryError):
            Point(0.0, 0.0).normalized()

    def test_point_serialization(self) -> None:
        p1 = Point(100.0, 200.0)
        assert Point.from_dict(p1.to_dict()) == p1
        assert p1.to_tuple() == (100.0, 200.0)

    def test_point_immutable(self) -> None:
        p = Point(100.0, 200.0)
        with pytest.raises(AttributeError):
            p.x = 300.0  # type: ignore

    def test_of_coerces_tuples(self) -> None:
        assert Point.of((1, 2)) == Point(1.0, 2.0)
        p = Point(1.0, 2.0)
        assert Point.of(p) is p


class TestEdgeColor:
    """Tests for EdgeColor channel sets."""

    def test_composite_colors(self) -> None:
        assert EdgeColor.RED | EdgeColor.GREEN == EdgeColor.YELLOW
        assert EdgeColor.GREEN | EdgeColor.BLUE == EdgeColor.CYAN
        assert EdgeColor.RED | EdgeColor.BLUE == EdgeColor.MAGENTA
        assert EdgeColor.CYAN | EdgeColor.RED == EdgeColor.WHITE

    def test_invert_stays_in_three_channels(self) -> None:
        assert ~EdgeColor.CYAN == EdgeColor.RED
        assert ~EdgeColor.WHITE == EdgeColor.BLACK
        assert ~EdgeColor.BLACK == EdgeColor.WHITE

    def test_has_channel(self) -> None:
        assert EdgeColor.MAGENTA.has_channel(0)
        assert not EdgeColor.MAGENTA.has_channel(1)
        assert EdgeColor.MAGENTA.has_channel(2)
        assert EdgeColor.WHITE.channel_count == 3
        assert EdgeColor.CYAN.channel_count == 2


class TestBounds:
    """Tests for Bounds."""

    def test_union_and_size(self) -> None:
        a = Bounds(0.0, 0.0, 1.0, 1.0)
        b = Bounds(2.0, -1.0, 3.0, 0.5)
        merged = a.union(b)
        assert merged == Bounds(0.0, -1.0, 3.0, 1.0)
        assert merged.width == 3.0
        assert merged.height == 2.0
        assert merged.center == Point(1.5, 0.0)

    def test_empty(self) -> None:
        empty = Bounds.empty()
        assert empty.is_empty()
        assert empty.diagonal == 0.0
        assert empty.union(Bounds(0.0, 0.0, 1.0, 2.0)) == Bounds(0.0, 0.0, 1.0, 2.0)


class TestContour:
    """Tests for Contour class."""

    def _triangle(self) -> Contour:
        a, b, c = Point(0.0, 0.0), Point(4.0, 0.0), Point(0.0, 3.0)
        return Contour([LineSegment(a, b), LineSegment(b, c), LineSegment(c, a)])

    def test_contour_basics(self) -> None:
        contour = self._triangle()
        assert len(contour) == 3
        assert contour.next_index(2) == 0
        assert contour.is_closed()
        assert contour.signed_area() == pytest.approx(6.0)
        assert contour.winding_sign() is WindingSign.POSITIVE

    def test_contour_serialization(self) -> None:
        contour = self._triangle()
        contour.edges[1].color = EdgeColor.CYAN
        restored = Contour.from_dict(contour.to_dict())
        assert restored == contour
        assert restored.edges[1].color is EdgeColor.CYAN

    def test_reversed_keeps_colors(self) -> None:
        contour = self._triangle()
        contour.edges[0].color = EdgeColor.YELLOW
        reversed_contour = contour.reversed()
        assert reversed_contour.winding_sign() is WindingSign.NEGATIVE
        # The first edge becomes the last one, traversed backwards
        assert reversed_contour.edges[-1].color is EdgeColor.YELLOW
        assert reversed_contour.edges[-1].start == Point(4.0, 0.0)

    def test_corner_angle_range(self) -> None:
        contour = self._triangle()
        for i in range(len(contour)):
            angle = contour.corner_angle(i)
            assert -math.pi < angle <= math.pi
            # Counter-clockwise convex polygon turns left at every vertex
            assert angle > 0


class TestShape:
    """Tests for Shape class."""

    def test_empty_shape(self) -> None:
        shape = Shape()
        assert shape.is_empty()
        assert shape.edge_count == 0
        assert shape.bounds().is_empty()
        assert shape.uncovered_channels(3) == [0, 1, 2]
        assert shape.uncovered_channels(1) == [0]
        assert shape.uncovered_channels(4) == [0, 1, 2, 3]

    def test_shape_serialization(self, unit_square: Shape) -> None:
        restored = Shape.from_dict(unit_square.to_dict())
        assert restored == unit_square
        assert restored.name == "square"

    def test_uncovered_channels(self, unit_square: Shape) -> None:
        for edge in unit_square.edges():
            edge.color = EdgeColor.CYAN
        assert unit_square.uncovered_channels(3) == [0]
        assert unit_square.uncovered_channels(1) == []

    def test_bounds(self, unit_square: Shape) -> None:
        assert unit_square.bounds() == Bounds(0.0, 0.0, 1.0, 1.0)
