"""Shared fixtures: small shapes and an in-memory test font."""

import math
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from msdfkit.domain import ArcSegment, Point, Shape, ShapeBuilder


def make_square(x0: float = 0.0, y0: float = 0.0, size: float = 1.0, ccw: bool = True) -> Shape:
    """Axis-aligned square as a single contour of four lines."""
    corners = [(x0, y0), (x0 + size, y0), (x0 + size, y0 + size), (x0, y0 + size)]
    if not ccw:
        corners.reverse()
    builder = ShapeBuilder(name="square").contour(corners[0])
    for corner in corners[1:]:
        builder.line(corner)
    return builder.build()


def make_circle(radius: float = 1.0, center: tuple[float, float] = (0.0, 0.0)) -> Shape:
    """Full circle as one counter-clockwise arc edge."""
    arc = ArcSegment(Point(*center), radius, radius, 0.0, 0.0, 2 * math.pi)
    return ShapeBuilder(name="circle").contour(arc.start).edge(arc).build()


def make_polygon(sides: int, radius: float = 1.0) -> Shape:
    """Regular polygon, counter-clockwise."""
    builder = ShapeBuilder(name=f"polygon{sides}")
    for i in range(sides):
        angle = 2 * math.pi * i / sides
        point = (radius * math.cos(angle), radius * math.sin(angle))
        if i == 0:
            builder.contour(point)
        else:
            builder.line(point)
    return builder.build()


def _rect_contours(pen: TTGlyphPen, rects: list[tuple[int, int, int, int]]) -> None:
    # TrueType convention: outer clockwise, holes counter-clockwise
    for index, (x0, y0, x1, y1) in enumerate(rects):
        if index == 0:
            points = [(x0, y0), (x0, y1), (x1, y1), (x1, y0)]
        else:
            points = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
        pen.moveTo(points[0])
        for point in points[1:]:
            pen.lineTo(point)
        pen.closePath()


def build_test_font(path: Path) -> Path:
    """Write a tiny TrueType font with glyphs space, I, O and D."""
    glyph_order = [".notdef", "space", "I", "O", "D"]

    empty = TTGlyphPen(None).glyph()

    pen = TTGlyphPen(None)
    _rect_contours(pen, [(200, 0, 400, 700)])
    glyph_i = pen.glyph()

    pen = TTGlyphPen(None)
    _rect_contours(pen, [(100, 0, 500, 700), (200, 100, 400, 600)])
    glyph_o = pen.glyph()

    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((300, 0))
    pen.qCurveTo((500, 0), (500, 350))
    pen.qCurveTo((500, 700), (300, 700))
    pen.lineTo((100, 700))
    pen.closePath()
    glyph_d = pen.glyph()

    builder = FontBuilder(1000, isTTF=True)
    builder.setupGlyphOrder(glyph_order)
    builder.setupCharacterMap({ord(" "): "space", ord("I"): "I", ord("O"): "O", ord("D"): "D"})
    builder.setupGlyf({".notdef": empty, "space": empty, "I": glyph_i, "O": glyph_o, "D": glyph_d})
    # Left side bearings match each outline's xMin so outlines keep their coordinates
    lsb = {".notdef": 0, "space": 0, "I": 200, "O": 100, "D": 100}
    builder.setupHorizontalMetrics({name: (600, lsb[name]) for name in glyph_order})
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable({"familyName": "Msdf Test", "styleName": "Regular"})
    builder.setupOS2()
    builder.setupPost()
    builder.save(str(path))
    return path


@pytest.fixture
def unit_square() -> Shape:
    return make_square()


@pytest.fixture
def circle() -> Shape:
    return make_circle()


@pytest.fixture
def test_font(tmp_path: Path) -> Path:
    return build_test_font(tmp_path / "MsdfTest.ttf")
