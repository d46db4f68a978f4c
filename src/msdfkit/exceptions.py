"""Exception hierarchy for msdfkit."""


class MsdfError(Exception):
    """Base exception for all msdfkit errors."""

    pass


class GeometryError(MsdfError):
    """Errors in geometric calculations."""

    pass


class DegenerateGeometryError(GeometryError):
    """Edge geometry has no usable tangent (zero length, radius or sweep)."""

    def __init__(self, edge_kind: str, reason: str) -> None:
        self.edge_kind = edge_kind
        self.reason = reason
        super().__init__(f"Degenerate {edge_kind}: {reason}")


class ContourError(GeometryError):
    """Error with contour data or operations."""

    pass


class DegenerateContourError(ContourError):
    """Contour has too few edges, is not closed, or has collapsed."""

    def __init__(self, contour_index: int | None, reason: str) -> None:
        self.contour_index = contour_index
        self.reason = reason
        where = f"Contour {contour_index}" if contour_index is not None else "Contour"
        super().__init__(f"{where} is degenerate: {reason}")


class AmbiguousWindingError(ContourError):
    """Contour area is too close to zero to infer its orientation."""

    def __init__(self, contour_index: int | None, area: float) -> None:
        self.contour_index = contour_index
        self.area = area
        where = f"contour {contour_index}" if contour_index is not None else "contour"
        super().__init__(f"Cannot infer winding of {where}: signed area {area:.3g} is ~0")


class ColoringError(MsdfError):
    """Errors related to edge coloring."""

    pass


class InconsistentColoringError(ColoringError):
    """Contour has too few edges to alternate colors around its sharp corners."""

    def __init__(self, contour_index: int | None, edge_count: int, sharp_corners: int) -> None:
        self.contour_index = contour_index
        self.edge_count = edge_count
        self.sharp_corners = sharp_corners
        super().__init__(
            f"Cannot color contour {contour_index}: {edge_count} edges, "
            f"{sharp_corners} sharp corners"
        )


class ShapeError(MsdfError):
    """Errors related to whole shapes."""

    pass


class EmptyShapeError(ShapeError):
    """No edge in the shape contributes to the given channels."""

    def __init__(self, channels: list[int]) -> None:
        self.channels = channels
        super().__init__(f"Shape has no edges for channels {channels}")


class FontError(MsdfError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GlyphNotFoundError(FontError):
    """Requested glyph not found in font."""

    def __init__(self, glyph_name: str) -> None:
        self.glyph_name = glyph_name
        super().__init__(f"Glyph '{glyph_name}' not found in font")


class FieldSaveError(MsdfError):
    """Error saving a distance field."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save field '{path}': {reason}")
