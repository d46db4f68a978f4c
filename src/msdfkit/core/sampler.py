"""Field sampling: per-channel nearest signed pseudo-distance.

For each sample point and each color channel, the sampler scans the edges
carrying that channel, picks the one with the smallest true distance (ties
go to the more perpendicular hit), and stores that edge's signed
pseudo-distance. The sign comes straight from the counter-clockwise
winding convention, so no separate inside/outside pass is needed.

Channel layouts:
- 1: plain signed distance over all edges
- 3: red, green, blue pseudo-distances (MSDF)
- 4: MSDF plus the true signed distance in the fourth channel

A channel no edge contributes to holds ``-inf``. Sampling never raises.
"""

import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from msdfkit.domain import DistanceField, EdgeSegment, FieldTransform, Point, Shape
from msdfkit.domain.edges import FAR_AWAY, SignedDistance, to_pseudo_distance

SENTINEL = -math.inf


@dataclass(frozen=True, slots=True)
class _ChannelIndex:
    """Edges of a shape paired with the color channels they feed."""

    edges: tuple[EdgeSegment, ...]
    channel_masks: tuple[tuple[bool, bool, bool], ...]

    @classmethod
    def of(cls, shape: Shape) -> "_ChannelIndex":
        edges = tuple(shape.edges())
        masks = tuple(
            (edge.color.has_channel(0), edge.color.has_channel(1), edge.color.has_channel(2))
            for edge in edges
        )
        return cls(edges, masks)


class FieldSampler:
    """Computes distance field values for a colored shape.

    The sampler only reads the shape, so one instance can serve many rows
    (or processes, via ``sample_rows``).

    Attributes:
        channels: Channel layout (1, 3 or 4)
        sub_samples: Samples per pixel along each axis, averaged
    """

    def __init__(self, channels: int = 3, sub_samples: int = 1) -> None:
        if channels not in (1, 3, 4):
            raise ValueError("channels must be 1, 3 or 4")
        if sub_samples < 1:
            raise ValueError("sub_samples must be at least 1")
        self.channels = channels
        self.sub_samples = sub_samples

    def _evaluate(self, index: _ChannelIndex, point: Point) -> list[float]:
        true_best: SignedDistance = FAR_AWAY
        best: list[SignedDistance] = [FAR_AWAY, FAR_AWAY, FAR_AWAY]
        best_edge: list[EdgeSegment | None] = [None, None, None]

        for edge, mask in zip(index.edges, index.channel_masks, strict=True):
            result = edge.signed_distance(point)
            if result.closer_than(true_best):
                true_best = result
            if self.channels == 1:
                continue
            for channel in range(3):
                if mask[channel] and result.closer_than(best[channel]):
                    best[channel] = result
                    best_edge[channel] = edge

        true_distance = true_best.distance if index.edges else SENTINEL
        if self.channels == 1:
            return [true_distance]

        values = []
        for channel in range(3):
            edge = best_edge[channel]
            if edge is None:
                values.append(SENTINEL)
            else:
                values.append(to_pseudo_distance(edge, point, best[channel])[0])
        if self.channels == 4:
            values.append(true_distance)
        return values

    def distance_at(self, shape: Shape, point: Point) -> tuple[float, ...]:
        """Field value at a single shape-space point."""
        return tuple(self._evaluate(_ChannelIndex.of(shape), point))

    def _pixel(self, index: _ChannelIndex, transform: FieldTransform, x: int, y: int) -> list[float]:
        n = self.sub_samples
        if n == 1:
            return self._evaluate(index, transform.pixel_to_shape(x, y))

        totals = [0.0] * self.channels
        for j in range(n):
            for i in range(n):
                offset_x = (i + 0.5) / n - 0.5
                offset_y = (j + 0.5) / n - 0.5
                point = transform.pixel_to_shape(x + offset_x, y + offset_y)
                for channel, value in enumerate(self._evaluate(index, point)):
                    totals[channel] += value
        return [total / (n * n) for total in totals]

    def sample_rows(
        self,
        shape: Shape,
        width: int,
        transform: FieldTransform,
        row_start: int,
        row_stop: int,
    ) -> np.ndarray:
        """Sample a band of rows.

        Returns:
            Array of shape (row_stop - row_start, width, channels)
        """
        index = _ChannelIndex.of(shape)
        band = np.empty((row_stop - row_start, width, self.channels), dtype=np.float64)
        for y in range(row_start, row_stop):
            for x in range(width):
                band[y - row_start, x] = self._pixel(index, transform, x, y)
        return band

    def sample(
        self,
        shape: Shape,
        width: int,
        height: int,
        transform: FieldTransform,
        distance_range: float,
    ) -> DistanceField:
        """Sample the whole raster in the current process.

        Args:
            shape: Normalized and colored shape
            width: Raster width in pixels
            height: Raster height in pixels
            transform: Pixel to shape mapping
            distance_range: Representable range in shape units

        Returns:
            DistanceField owned by the caller
        """
        data = self.sample_rows(shape, width, transform, 0, height)
        return DistanceField(data=data, transform=transform, distance_range=distance_range)


def sample_rows(
    shape_dict: dict[str, Any],
    width: int,
    transform_dict: dict[str, Any],
    row_start: int,
    row_stop: int,
    channels: int = 3,
    sub_samples: int = 1,
) -> tuple[int, np.ndarray]:
    """Sample a band of rows from serialized inputs.

    This function is designed to be called in a worker process, so it takes
    dictionaries rather than domain objects.

    Args:
        shape_dict: Serialized, colored shape (``Shape.to_dict()``)
        width: Raster width in pixels
        transform_dict: Serialized transform (``FieldTransform.to_dict()``)
        row_start: First row to sample
        row_stop: Row after the last one to sample
        channels: Channel layout
        sub_samples: Samples per pixel along each axis

    Returns:
        Tuple of (row_start, band array)
    """
    shape = Shape.from_dict(shape_dict)
    translate_x, translate_y = transform_dict["translate"]
    transform = FieldTransform(transform_dict["scale"], translate_x, translate_y)
    sampler = FieldSampler(channels=channels, sub_samples=sub_samples)
    return row_start, sampler.sample_rows(shape, width, transform, row_start, row_stop)
