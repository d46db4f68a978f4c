"""msdfkit - Multi-channel signed distance fields from vector shapes.

msdfkit turns shapes made of lines, quadratic and cubic Bezier curves and
elliptical arcs into multi-channel signed distance fields (MSDF). Sharp
corners survive magnification because each channel measures the distance
to a differently colored subset of edges.

Example:
    >>> from msdfkit import MsdfGenerator, ShapeBuilder
    >>> shape = ShapeBuilder().contour((0, 0)).line((1, 0)).line((1, 1)).line((0, 1)).build()
    >>> field = MsdfGenerator().generate(shape)
    >>> field.data.shape
    (32, 32, 3)

Or from the command line:
    $ msdfkit Roboto-Regular.ttf --chars ABC --size 48
"""

__version__ = "0.1.0"

from msdfkit.core import EdgeColorer, FieldSampler, MsdfGenerator, ShapeNormalizer
from msdfkit.domain import DistanceField, Shape, ShapeBuilder

__all__ = [
    "DistanceField",
    "EdgeColorer",
    "FieldSampler",
    "MsdfGenerator",
    "Shape",
    "ShapeBuilder",
    "ShapeNormalizer",
    "__version__",
]
