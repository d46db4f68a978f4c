"""End-to-end properties of generated distance fields."""

import math

import numpy as np
import pytest
from conftest import make_circle, make_polygon, make_square

from msdfkit.config import FieldConfig, MsdfSettings
from msdfkit.core import FieldSampler, MsdfGenerator
from msdfkit.domain import EdgeColor, FieldTransform, Point, Shape


def _generator(width=16, height=16, channels=3, **options) -> MsdfGenerator:
    field = FieldConfig(width=width, height=height, channels=channels, **options)
    return MsdfGenerator(MsdfSettings(field=field))


class TestConvexContour:
    """Sign of the field around a convex counter-clockwise contour."""

    @pytest.mark.parametrize("sides", [3, 4, 6])
    def test_inside_positive_outside_negative(self, sides):
        """Test every channel is positive inside and the median is negative outside."""
        shape = make_polygon(sides)
        field = _generator(channels=4).generate(shape)
        contour = shape.contours[0]

        checked_inside = checked_outside = 0
        for y in range(field.height):
            for x in range(field.width):
                values = field.value_at(x, y)
                if abs(values[3]) < 1e-9:
                    continue
                point = field.transform.pixel_to_shape(x, y)
                if contour.contains_point(point):
                    assert all(v > 0 for v in values), (x, y, values)
                    checked_inside += 1
                else:
                    assert values[3] < 0
                    assert float(np.median(values[:3])) < 0, (x, y, values)
                    checked_outside += 1
        assert checked_inside > 0
        assert checked_outside > 0

    def test_smooth_contour_outside_every_channel_negative(self, circle):
        """Test a uniformly colored contour is negative in every channel outside."""
        field = _generator().generate(circle)
        for y in range(field.height):
            for x in range(field.width):
                point = field.transform.pixel_to_shape(x, y)
                if point.length() > 1.0 + 1e-9:
                    assert (field.data[y, x] < 0).all()


class TestReversal:
    """Reversing winding flips the sign of every value."""

    @pytest.mark.parametrize("shape_factory", [make_square, lambda: make_polygon(5), make_circle])
    def test_signs_flip(self, shape_factory):
        """Test a reversed contour gives the negated field."""
        shape = shape_factory()
        generator = _generator(channels=4)
        field = generator.generate(shape)

        reversed_shape = Shape(contours=[contour.reversed() for contour in shape.contours])
        flipped = FieldSampler(channels=4).sample(
            reversed_shape, field.width, field.height, field.transform, field.distance_range
        )
        np.testing.assert_allclose(flipped.data, -field.data, atol=1e-9)


class TestCircleAccuracy:
    """Field magnitude of a circle against the analytic distance."""

    def test_matches_analytic(self):
        """Test |d| equals |distance to centre - radius| across the raster."""
        radius = 3.0
        shape = make_circle(radius=radius, center=(1.0, -2.0))
        field = _generator(width=24, height=24).generate(shape)
        for y in range(field.height):
            for x in range(field.width):
                point = field.transform.pixel_to_shape(x, y)
                expected = abs((point - Point(1.0, -2.0)).length() - radius)
                for value in field.data[y, x]:
                    assert abs(value) == pytest.approx(expected, rel=1e-3, abs=1e-9)


class TestColoring:
    """Colors assigned during generation."""

    def test_square_neighbours_differ(self):
        """Test no two adjacent square edges share all three channels."""
        shape = make_square()
        _generator().prepare(shape)
        edges = shape.contours[0].edges
        for i, edge in enumerate(edges):
            neighbour = edges[(i + 1) % len(edges)]
            assert edge.color != neighbour.color
            assert (edge.color & neighbour.color) != EdgeColor.WHITE

    def test_smooth_contour_uniform(self):
        """Test a smooth contour gets one color on every edge."""
        shape = make_polygon(180)
        _generator().prepare(shape)
        assert {edge.color for edge in shape.edges()} == {EdgeColor.WHITE}


class TestUnitSquareGrid:
    """3x3 samples centered on the unit square."""

    @pytest.fixture
    def field(self):
        generator = _generator(width=3, height=3, scale=2.0, translate=(0.25, 0.25))
        return generator.generate(make_square())

    def test_transform(self, field):
        """Test the grid samples the square centre and edge midpoints."""
        assert field.transform == FieldTransform(2.0, 0.25, 0.25)
        assert field.transform.pixel_to_shape(1, 1) == Point(0.5, 0.5)
        assert field.transform.pixel_to_shape(1, 0) == Point(0.5, 0.0)

    def test_centre(self, field):
        """Test the centre is half the side length in all channels."""
        assert field.value_at(1, 1) == pytest.approx((0.5, 0.5, 0.5))

    def test_edge_midpoints(self, field):
        """Test edge midpoints reconstruct to zero."""
        median = field.median()
        for x, y in [(1, 0), (0, 1), (2, 1), (1, 2)]:
            assert median[y, x] == pytest.approx(0.0, abs=1e-12)


class TestIdempotence:
    """Preparing a shape twice changes nothing the second time."""

    def test_prepare_twice(self):
        """Test a second normalization pass reverses nothing."""
        shape = make_square(ccw=False)
        shape.contours.append(make_square(0.25, 0.25, 0.5).contours[0])
        generator = _generator()
        generator.prepare(shape)
        once = shape.to_dict()

        normalization, _ = generator.prepare(shape)
        assert normalization.reversed_contours == []
        assert shape.to_dict() == once

    def test_same_field_twice(self):
        """Test generating from an already prepared shape gives the same field."""
        shape = make_polygon(7)
        generator = _generator()
        first = generator.generate(shape)
        second = generator.generate(shape)
        np.testing.assert_array_equal(first.data, second.data)


class TestNestedContours:
    """Holes and islands inside holes."""

    def test_three_levels(self):
        """Test fill, hole and island signs along a horizontal scan."""
        shape = Shape(
            contours=[
                make_square(0.0, 0.0, 6.0).contours[0],
                make_square(1.0, 1.0, 4.0).contours[0],
                make_square(2.0, 2.0, 2.0).contours[0],
            ]
        )
        generator = _generator(channels=1)
        generator.prepare(shape)
        sampler = FieldSampler(channels=1)

        assert sampler.distance_at(shape, Point(0.5, 3.0))[0] == pytest.approx(0.5)
        assert sampler.distance_at(shape, Point(1.5, 3.0))[0] == pytest.approx(-0.5)
        assert sampler.distance_at(shape, Point(3.0, 3.0))[0] == pytest.approx(1.0)
        assert sampler.distance_at(shape, Point(-1.0, 3.0))[0] == pytest.approx(-1.0)

    def test_hole_median(self):
        """Test the reconstructed distance inside a hole is negative."""
        shape = Shape(contours=[make_square(0.0, 0.0, 4.0).contours[0], make_square(1.0, 1.0, 2.0).contours[0]])
        generator = _generator()
        generator.prepare(shape)
        values = FieldSampler().distance_at(shape, Point(2.0, 1.7))
        assert float(np.median(values)) == pytest.approx(-0.7)
        assert math.isfinite(values[0])
