"""Edge coloring for multi-channel distance fields.

Each edge gets a set of color channels. Wherever two edges meet at a sharp
corner they must carry different sets, so that the per-channel distances
disagree near the corner and the median reconstruction keeps it sharp.
Edges meeting at smooth corners may share a color.

Algorithm per contour:
1. No sharp corners: every edge is WHITE (plain signed distance)
2. One sharp corner: the edges are split into three runs with three colors
3. Otherwise: each run of edges between sharp corners shares a color, and
   colors rotate through cyan, magenta, yellow. The last run avoids both
   its predecessor and the first run, since the contour is cyclic.
"""

import logging
from dataclasses import dataclass, field

from msdfkit.config import ColoringConfig
from msdfkit.domain import COLOR_ROTATION, Contour, EdgeColor, Shape
from msdfkit.exceptions import InconsistentColoringError

logger = logging.getLogger(__name__)


@dataclass
class ColoringReport:
    """Outcome of coloring a shape.

    Attributes:
        sharp_corners: Number of sharp corners per contour index
        fallback_contours: Contours that could not be colored and fell back
            to WHITE
    """

    sharp_corners: dict[int, int] = field(default_factory=dict)
    fallback_contours: list[int] = field(default_factory=list)

    @property
    def total_sharp_corners(self) -> int:
        return sum(self.sharp_corners.values())


def _next_color(previous: EdgeColor, avoid: EdgeColor | None = None) -> EdgeColor:
    """Next color in the rotation that differs from ``previous`` and ``avoid``."""
    start = COLOR_ROTATION.index(previous)
    for step in range(1, len(COLOR_ROTATION) + 1):
        candidate = COLOR_ROTATION[(start + step) % len(COLOR_ROTATION)]
        if candidate != previous and candidate != avoid:
            return candidate
    raise AssertionError("color rotation exhausted")


class EdgeColorer:
    """Assigns channel sets to the edges of each contour.

    Colors are written onto the edges in place. The colorer only reads the
    geometry.
    """

    def __init__(self, config: ColoringConfig | None = None) -> None:
        self.config = config or ColoringConfig()

    def color_contour(self, contour: Contour, index: int | None = None) -> int:
        """Color one contour.

        Args:
            contour: Contour to color (edges modified in place)
            index: Position of the contour in its shape (for error messages)

        Returns:
            Number of sharp corners found

        Raises:
            InconsistentColoringError: If the contour has sharp corners but
                fewer than ``min_edges`` edges
        """
        edges = contour.edges
        n = len(edges)
        corners = contour.sharp_corners(self.config.corner_angle_threshold)

        if not corners:
            for edge in edges:
                edge.color = EdgeColor.WHITE
            return 0

        if n < self.config.min_edges:
            raise InconsistentColoringError(index, n, len(corners))

        # Runs start right after a sharp corner
        start = corners[0] + 1

        if len(corners) == 1:
            for k in range(n):
                edges[(start + k) % n].color = COLOR_ROTATION[3 * k // n]
            return 1

        first = COLOR_ROTATION[0]
        color = first
        run = 0
        for k in range(n):
            i = (start + k) % n
            if k > 0 and contour.is_sharp_corner((i - 1) % n, self.config.corner_angle_threshold):
                run += 1
                last_run = run == len(corners) - 1
                color = _next_color(color, first if last_run else None)
            edges[i].color = color

        return len(corners)

    def color_shape(self, shape: Shape) -> ColoringReport:
        """Color every contour of a shape.

        Contours that cannot be colored consistently fall back to WHITE and
        are listed in the report; they never abort the run.

        Args:
            shape: Normalized shape (edges modified in place)

        Returns:
            ColoringReport with corner counts and fallbacks
        """
        report = ColoringReport()
        for idx, contour in enumerate(shape.contours):
            try:
                report.sharp_corners[idx] = self.color_contour(contour, idx)
            except InconsistentColoringError as e:
                logger.warning("%s; falling back to WHITE", e)
                for edge in contour.edges:
                    edge.color = EdgeColor.WHITE
                report.sharp_corners[idx] = e.sharp_corners
                report.fallback_contours.append(idx)
        return report
