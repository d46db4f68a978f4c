"""I/O layer for msdfkit.

This module handles reading font outlines with fontTools and storing
distance fields with NumPy. It keeps fontTools details out of the domain
models.

Key responsibilities:
- Load TTF/OTF fonts
- Convert glyph outlines to shapes through a fontTools pen
- Save and load distance field archives

Key classes:
- FontReader: Load fonts and extract glyph shapes
- ShapePen: fontTools pen producing shapes
- FieldWriter: Save and load .npz distance fields
"""

from msdfkit.io.converter import ShapePen, fonttools_glyph_to_shape
from msdfkit.io.reader import FontReader
from msdfkit.io.writer import FieldWriter

__all__ = [
    "FieldWriter",
    "FontReader",
    "ShapePen",
    "fonttools_glyph_to_shape",
]
