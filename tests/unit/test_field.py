"""Unit tests for DistanceField and FieldTransform."""

import math

import numpy as np
import pytest

from msdfkit.domain import Bounds, DistanceField, FieldTransform, Point


class TestFieldTransform:
    """Tests for the pixel/shape mapping."""

    def test_pixel_centres(self):
        transform = FieldTransform(2.0, 0.25, 0.25)
        assert transform.pixel_to_shape(0, 0) == Point(0.0, 0.0)
        assert transform.pixel_to_shape(2, 1) == Point(1.0, 0.5)

    def test_inverse(self):
        transform = FieldTransform(3.5, -1.25, 4.0)
        x, y = transform.shape_to_pixel(transform.pixel_to_shape(7, 2))
        assert (x, y) == (pytest.approx(7.0), pytest.approx(2.0))

    def test_fit_square(self):
        transform = FieldTransform.fit(Bounds(0.0, 0.0, 1.0, 1.0), 8, 8, margin_px=4.0)
        assert transform.scale == pytest.approx(4.0)
        assert transform.translate_x == pytest.approx(0.5)
        assert transform.translate_y == pytest.approx(0.5)

    def test_fit_uses_limiting_axis(self):
        transform = FieldTransform.fit(Bounds(0.0, 0.0, 4.0, 1.0), 10, 10, margin_px=2.0)
        assert transform.scale == pytest.approx(2.0)
        # Shape centre lands on the raster centre
        x, y = transform.shape_to_pixel(Point(2.0, 0.5))
        assert (x + 0.5, y + 0.5) == (pytest.approx(5.0), pytest.approx(5.0))

    def test_fit_flat_bounds(self):
        transform = FieldTransform.fit(Bounds(0.0, 0.0, 2.0, 0.0), 10, 10)
        assert transform.scale == pytest.approx(5.0)

    def test_fit_empty_bounds(self):
        assert FieldTransform.fit(Bounds.empty(), 10, 10) == FieldTransform(1.0, 0.0, 0.0)

    def test_to_dict(self):
        assert FieldTransform(2.0, 1.0, -1.0).to_dict() == {"scale": 2.0, "translate": [1.0, -1.0]}


class TestDistanceField:
    """Tests for DistanceField accessors and conversions."""

    @pytest.fixture
    def field(self):
        data = np.array(
            [
                [[0.0, 1.0, -1.0], [-math.inf, 0.5, 3.0]],
                [[2.0, 2.0, 2.0], [-0.25, 0.0, 0.25]],
            ]
        )
        return DistanceField(data=data, transform=FieldTransform(1.0), distance_range=2.0)

    def test_dimensions(self, field):
        assert (field.height, field.width, field.channels) == (2, 2, 3)

    def test_value_at_is_column_then_row(self, field):
        assert field.value_at(1, 0) == (-math.inf, 0.5, 3.0)
        assert field.value_at(0, 1) == (2.0, 2.0, 2.0)

    def test_normalized(self, field):
        normalized = field.normalized()
        assert normalized[0, 0].tolist() == [0.5, 1.0, 0.0]
        assert normalized[0, 1].tolist() == [0.0, 0.75, 1.0]
        assert normalized.min() >= 0.0
        assert normalized.max() <= 1.0

    def test_to_uint8(self, field):
        pixels = field.to_uint8()
        assert pixels.dtype == np.uint8
        assert pixels[0, 0].tolist() == [128, 255, 0]
        assert pixels[0, 1, 0] == 0

    def test_median(self, field):
        median = field.median()
        assert median.shape == (2, 2)
        assert median[0, 0] == 0.0
        assert median[0, 1] == 0.5
        assert median[1, 1] == 0.0

    def test_median_ignores_fourth_channel(self):
        data = np.array([[[1.0, 2.0, 3.0, -9.0]]])
        field = DistanceField(data=data, transform=FieldTransform(1.0), distance_range=1.0)
        assert field.median()[0, 0] == 2.0

    def test_single_channel_median(self):
        data = np.array([[[0.5]]])
        field = DistanceField(data=data, transform=FieldTransform(1.0), distance_range=1.0)
        assert field.median()[0, 0] == 0.5
