"""Conversion from fontTools outlines to shapes.

fontTools glyphs draw themselves onto a pen. ``ShapePen`` receives those
drawing commands and feeds them to a ShapeBuilder. BasePen decomposes
TrueType quadratic splines with implied on-curve points and resolves
component references through the glyph set.
"""

from typing import Any

from fontTools.pens.basePen import BasePen

from msdfkit.domain import Shape, ShapeBuilder


class ShapePen(BasePen):
    """Pen that records an outline as a Shape.

    Example:
        pen = ShapePen(glyph_set, name="A")
        glyph_set["A"].draw(pen)
        shape = pen.shape
    """

    def __init__(self, glyph_set: Any = None, name: str | None = None) -> None:
        super().__init__(glyph_set)
        self._builder = ShapeBuilder(name=name)

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self._builder.contour(pt)

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self._builder.line(pt)

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self._builder.cubic(pt1, pt2, pt3)

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        self._builder.quadratic(pt1, pt2)

    def _closePath(self) -> None:
        self._builder.close()

    def _endPath(self) -> None:
        # Open paths still bound an area; close them like the rasterizer does
        self._builder.close()

    @property
    def shape(self) -> Shape:
        """The shape drawn so far."""
        return self._builder.build()


def fonttools_glyph_to_shape(name: str, fonttools_glyph: Any, glyph_set: Any) -> Shape:
    """Convert a fontTools glyph to a Shape.

    Handles both TrueType (quadratic curves) and OpenType/CFF (cubic curves).
    Winding is left as drawn; the normalizer fixes it later.

    Args:
        name: Name of the glyph
        fonttools_glyph: The glyph object from a fontTools GlyphSet
        glyph_set: The GlyphSet, used to resolve components

    Returns:
        Shape with one contour per closed path
    """
    pen = ShapePen(glyph_set, name=name)
    fonttools_glyph.draw(pen)
    return pen.shape
