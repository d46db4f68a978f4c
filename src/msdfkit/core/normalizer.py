"""Shape validation and winding normalization.

This module checks every contour of a shape and fixes its orientation:
- Outer contours (fill) must wind counter-clockwise (positive area)
- Holes must wind clockwise (negative area)

Fill role is not declared by the caller. It is inferred from nesting depth:
the number of other contours containing a point of the contour. Even depth
fills, odd depth cuts a hole, for any number of nesting levels.
"""

import logging
from dataclasses import dataclass, field

from msdfkit.config import GeometryConfig
from msdfkit.domain import Contour, Shape, WindingSign
from msdfkit.exceptions import (
    AmbiguousWindingError,
    DegenerateContourError,
    DegenerateGeometryError,
)

logger = logging.getLogger(__name__)


@dataclass
class ContourNode:
    """A node in the contour nesting tree.

    Attributes:
        index: Index of this contour in the shape's contour list
        is_hole: True if the contour cuts a hole (odd depth)
        parent: Index of the smallest containing contour (None if root)
        children: Indices of contours whose parent is this one
        depth: Number of contours containing this one
        area: Absolute signed area of the contour
    """

    index: int
    is_hole: bool
    parent: int | None
    children: list[int]
    depth: int
    area: float

    @property
    def expected_sign(self) -> WindingSign:
        return WindingSign.NEGATIVE if self.is_hole else WindingSign.POSITIVE


@dataclass
class NormalizationReport:
    """Outcome of normalizing a shape.

    Attributes:
        nodes: Nesting tree node for every contour, keyed by index
        reversed_contours: Indices of contours whose direction was flipped
    """

    nodes: dict[int, ContourNode] = field(default_factory=dict)
    reversed_contours: list[int] = field(default_factory=list)

    @property
    def hole_count(self) -> int:
        return sum(1 for node in self.nodes.values() if node.is_hole)

    @property
    def changed(self) -> bool:
        return bool(self.reversed_contours)


class ShapeNormalizer:
    """Validates contours and corrects their winding.

    The normalizer keeps no state between calls and is safe for use in
    worker processes. Only contour order within each reversed contour
    changes; edge geometry and colors are preserved.
    """

    def __init__(self, config: GeometryConfig | None = None) -> None:
        self.config = config or GeometryConfig()

    def validate_contour(self, contour: Contour, index: int | None = None) -> float:
        """Check that a contour is usable and return its signed area.

        Args:
            contour: Contour to check
            index: Position of the contour in its shape (for error messages)

        Returns:
            Signed area of the contour

        Raises:
            DegenerateContourError: If the contour has no edges, has a
                degenerate edge, is open, or collapses to a point
            AmbiguousWindingError: If the area is too close to zero
        """
        if len(contour) < 1:
            raise DegenerateContourError(index, "contour has no edges")

        for edge in contour.edges:
            try:
                edge.direction_at(0.0)
                edge.direction_at(1.0)
            except DegenerateGeometryError as e:
                raise DegenerateContourError(index, f"degenerate {edge.kind.value} edge: {e.reason}") from e

        size = contour.size()
        if size <= 0.0:
            raise DegenerateContourError(index, "all points coincide")

        gap = contour.closure_gap()
        if gap > self.config.scaled_closure_tolerance(size):
            raise DegenerateContourError(index, f"contour is not closed (gap {gap:.3g})")

        samples = self.config.samples_per_curve
        area = contour.signed_area(samples)
        sign = contour.winding_sign(samples, self.config.area_tolerance)
        if sign is WindingSign.DEGENERATE:
            raise AmbiguousWindingError(index, area)
        return area

    def build_nesting_tree(self, shape: Shape) -> dict[int, ContourNode]:
        """Build the nesting tree of all contours.

        Each contour is tested with a point on its first edge against the
        sampled outline of every other contour. Its parent is the smallest
        contour containing it.

        Args:
            shape: Shape whose contours were already validated

        Returns:
            Dict mapping contour index to ContourNode
        """
        samples = self.config.samples_per_curve
        contours = shape.contours
        areas = {idx: abs(contour.signed_area(samples)) for idx, contour in enumerate(contours)}

        containers: dict[int, list[int]] = {}
        for idx, contour in enumerate(contours):
            test_point = contour.representative_point()
            containers[idx] = [
                other_idx
                for other_idx, other in enumerate(contours)
                if other_idx != idx and other.contains_point(test_point, samples)
            ]

        nodes: dict[int, ContourNode] = {}
        for idx, found in containers.items():
            parent = min(found, key=lambda i: areas[i]) if found else None
            depth = len(found)
            nodes[idx] = ContourNode(
                index=idx,
                is_hole=depth % 2 == 1,
                parent=parent,
                children=[],
                depth=depth,
                area=areas[idx],
            )

        for idx, node in nodes.items():
            if node.parent is not None:
                nodes[node.parent].children.append(idx)

        return nodes

    def normalize(self, shape: Shape) -> NormalizationReport:
        """Validate a shape and fix the winding of every contour in place.

        Process:
        1. Validate each contour (edges, closure, area)
        2. Build the nesting tree to infer fill/hole roles
        3. Reverse contours whose winding disagrees with their role

        Running it twice reverses nothing the second time.

        Args:
            shape: Shape to normalize (modified in place)

        Returns:
            NormalizationReport describing the nesting and any reversals

        Raises:
            DegenerateContourError: If a contour is unusable
            AmbiguousWindingError: If a contour's winding cannot be inferred
        """
        areas = [self.validate_contour(contour, idx) for idx, contour in enumerate(shape.contours)]
        nodes = self.build_nesting_tree(shape)

        report = NormalizationReport(nodes=nodes)
        for idx, area in enumerate(areas):
            wants_positive = not nodes[idx].is_hole
            if (area > 0) != wants_positive:
                shape.contours[idx] = shape.contours[idx].reversed()
                report.reversed_contours.append(idx)
                logger.debug(
                    "Reversed contour %d (depth=%d, area=%.3g)", idx, nodes[idx].depth, area
                )

        return report
