"""Domain models for msdfkit.

This module contains the geometry and data models the field pipeline works
on. All models are designed to be:

- Immutable where possible (frozen dataclasses); edge colors are the only
  mutable annotation
- Serializable for inter-process communication (parallel sampling)
- Independent of fontTools implementation details

Key classes:
- Point / Vector: 2D value type
- EdgeColor: Channel set carried by an edge
- LineSegment, QuadraticSegment, CubicSegment, ArcSegment: Edge primitives
- Contour: Closed cyclic sequence of edges
- Shape: Set of contours
- ShapeBuilder: Fluent pen-style shape construction
- DistanceField / FieldTransform: Output raster and its coordinate mapping
"""

from msdfkit.domain.builder import ShapeBuilder
from msdfkit.domain.color import COLOR_ROTATION, EdgeColor
from msdfkit.domain.contour import Contour, WindingSign
from msdfkit.domain.edges import (
    ArcSegment,
    Bounds,
    CubicSegment,
    EdgeKind,
    EdgeSegment,
    EdgeSegmentProtocol,
    LineSegment,
    QuadraticSegment,
    SignedDistance,
    edge_from_dict,
)
from msdfkit.domain.field import DistanceField, FieldTransform
from msdfkit.domain.shape import Shape
from msdfkit.domain.vector import Point, Vector

__all__: list[str] = [
    # Enums
    "EdgeColor",
    "EdgeKind",
    "WindingSign",
    "COLOR_ROTATION",
    # Geometry
    "Point",
    "Vector",
    "Bounds",
    "SignedDistance",
    "EdgeSegmentProtocol",
    "EdgeSegment",
    "LineSegment",
    "QuadraticSegment",
    "CubicSegment",
    "ArcSegment",
    "edge_from_dict",
    # Shapes
    "Contour",
    "Shape",
    "ShapeBuilder",
    # Output
    "DistanceField",
    "FieldTransform",
]
