"""Core field generation algorithms for msdfkit.

This module contains the pipeline stages:

- Shape normalization (validation, nesting, winding correction)
- Edge coloring (channel assignment around sharp corners)
- Field sampling (per-channel nearest signed pseudo-distance)
- Generation (orchestration, parallel sampling, font batches)

All stages except generation are:
- Stateless between calls (safe for use in worker processes)
- Free of I/O

Key classes:
- ShapeNormalizer: Validates contours and fixes their winding
- EdgeColorer: Assigns color channels to edges
- FieldSampler: Computes distance field values
- MsdfGenerator: Runs the whole pipeline
"""

from msdfkit.core.coloring import ColoringReport, EdgeColorer
from msdfkit.core.generator import MsdfGenerator
from msdfkit.core.normalizer import ContourNode, NormalizationReport, ShapeNormalizer
from msdfkit.core.sampler import FieldSampler, sample_rows

__all__ = [
    # Coloring
    "ColoringReport",
    "EdgeColorer",
    # Normalization
    "ContourNode",
    "NormalizationReport",
    "ShapeNormalizer",
    # Sampling
    "FieldSampler",
    "sample_rows",
    # Generation
    "MsdfGenerator",
]
