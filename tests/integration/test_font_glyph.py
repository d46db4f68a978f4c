"""Integration tests rendering glyphs of a real TrueType font."""

import numpy as np
import pytest

from msdfkit.config import FieldConfig, MsdfSettings
from msdfkit.core import MsdfGenerator
from msdfkit.domain import EdgeKind, WindingSign
from msdfkit.io import FieldWriter, FontReader


@pytest.fixture
def generator() -> MsdfGenerator:
    return MsdfGenerator(MsdfSettings(field=FieldConfig(width=32, height=32, channels=4)))


class TestGlyphWithHole:
    """The "O" glyph: an outer rectangle with a rectangular counter."""

    @pytest.fixture
    def field(self, test_font, generator):
        with FontReader(test_font) as reader:
            shape = reader.get_shape("O")
        return generator.generate(shape)

    def test_framing(self, field):
        """Test the glyph is fitted with the distance range as margin."""
        assert field.transform.scale == pytest.approx(0.04)
        assert field.distance_range == pytest.approx(100.0)

    def test_counter_is_outside(self, field):
        """Test the centre of the counter is outside the filled region."""
        assert field.value_at(15, 15)[3] == pytest.approx(-87.5)
        assert field.median()[15, 15] == pytest.approx(-87.5)

    def test_stem_is_inside(self, field):
        """Test a pixel in the left stem is inside."""
        assert field.value_at(9, 15)[3] == pytest.approx(37.5)
        assert field.median()[15, 9] > 0

    def test_background_is_outside(self, field):
        """Test the raster corner is outside."""
        assert field.value_at(0, 0)[3] < 0
        assert field.median()[0, 0] < 0

    def test_normalized_range(self, field):
        """Test the quantized field spans background to inside."""
        pixels = field.to_uint8()
        assert pixels[0, 0, 3] == 0
        assert pixels[15, 9, 3] == 223


class TestCurvedGlyph:
    """The "D" glyph, drawn with TrueType quadratic splines."""

    def test_winding_and_inside(self, test_font, generator):
        """Test a curved glyph normalizes and renders with correct signs."""
        with FontReader(test_font) as reader:
            shape = reader.get_shape("D")
        assert any(edge.kind is EdgeKind.QUADRATIC for edge in shape.edges())

        normalization, coloring = generator.prepare(shape)
        assert shape.contours[0].winding_sign() is WindingSign.POSITIVE
        assert normalization.hole_count == 0
        assert coloring.total_sharp_corners == 2

        field = generator.generate(shape)
        assert field.median()[15, 15] > 0
        assert field.value_at(15, 15)[3] > 0
        assert field.median()[0, 31] < 0


class TestBatchOutput:
    """Fields written by a font batch match in-memory generation."""

    def test_saved_field_matches(self, test_font, tmp_path, generator):
        """Test the archive written for a glyph holds the generated field."""
        stats = generator.process_font(test_font, output_dir=tmp_path, chars="I")
        assert stats.generated_count == 1

        saved = FieldWriter.load(tmp_path / "MsdfTest-I-msdf.npz")
        with FontReader(test_font) as reader:
            expected = generator.generate(reader.get_shape("I"))

        np.testing.assert_allclose(saved.data, expected.data)
        assert saved.transform == expected.transform
        assert saved.distance_range == pytest.approx(expected.distance_range)
