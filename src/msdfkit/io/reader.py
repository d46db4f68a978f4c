"""Font reader for loading TTF/OTF fonts.

This module provides the FontReader class for loading font files
and extracting glyph outlines as shapes.
"""

from collections.abc import Iterator
from pathlib import Path

from fontTools.ttLib import TTFont, TTLibError

from msdfkit.domain import Shape
from msdfkit.exceptions import FontLoadError, GlyphNotFoundError
from msdfkit.io.converter import fonttools_glyph_to_shape


class FontReader:
    """Loads TTF/OTF fonts and extracts glyph shapes.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            shape = reader.get_shape(reader.glyph_name_for_char("A"))
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = Path(font_path)
        self._font: TTFont | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FontLoadError: If the file does not exist or is not a font
        """
        if not self._font_path.exists():
            raise FontLoadError(str(self._font_path), "file not found")

        try:
            self._font = TTFont(str(self._font_path))
        except (TTLibError, OSError) as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return 'OpenType' for CFF outlines, 'TrueType' otherwise."""
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em."""
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font."""
        return self._require_font()["maxp"].numGlyphs

    @property
    def glyph_names(self) -> list[str]:
        """Glyph names in font order."""
        return list(self._require_font().getGlyphOrder())

    def glyph_name_for_char(self, char: str) -> str | None:
        """Look up the glyph mapped to a character, if any."""
        cmap = self._require_font().getBestCmap() or {}
        return cmap.get(ord(char))

    def get_shape(self, name: str) -> Shape:
        """Get the outline of a glyph by name.

        Args:
            name: Name of the glyph to retrieve

        Returns:
            Shape of the glyph (empty for blank glyphs such as space)

        Raises:
            GlyphNotFoundError: If the font has no such glyph
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        glyph_set = font.getGlyphSet()
        if name not in glyph_set:
            raise GlyphNotFoundError(name)
        return fonttools_glyph_to_shape(name, glyph_set[name], glyph_set)

    def iter_shapes(self) -> Iterator[Shape]:
        """Iterate over all glyph outlines in font order."""
        for name in self.glyph_names:
            yield self.get_shape(name)

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
