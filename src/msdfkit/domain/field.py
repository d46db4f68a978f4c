"""Distance field raster and its pixel/shape coordinate mapping."""

from dataclasses import dataclass
from typing import Any

import numpy as np

from msdfkit.domain.edges import Bounds
from msdfkit.domain.vector import Point


@dataclass(frozen=True, slots=True)
class FieldTransform:
    """Mapping between pixel and shape coordinates.

    ``shape = (pixel + 0.5) / scale - translate``, so pixel centers are
    sampled and ``scale`` is pixels per shape unit.

    Attributes:
        scale: Pixels per shape unit
        translate_x: Shape-space x translation
        translate_y: Shape-space y translation
    """

    scale: float
    translate_x: float = 0.0
    translate_y: float = 0.0

    @classmethod
    def fit(cls, bounds: Bounds, width: int, height: int, margin_px: float = 0.0) -> "FieldTransform":
        """Frame ``bounds`` centered in a ``width`` x ``height`` raster.

        Args:
            bounds: Shape bounds to fit
            width: Raster width in pixels
            height: Raster height in pixels
            margin_px: Total pixels kept free along each axis (the distance
                range, so the field does not clip at the border)

        Returns:
            Transform with the largest scale keeping the shape inside
        """
        avail_w = width - margin_px if width > margin_px else float(width)
        avail_h = height - margin_px if height > margin_px else float(height)

        if bounds.is_empty():
            return cls(1.0, 0.0, 0.0)

        dx, dy = bounds.width, bounds.height
        if dx <= 0 and dy <= 0:
            scale = 1.0
        elif dx <= 0:
            scale = avail_h / dy
        elif dy <= 0:
            scale = avail_w / dx
        else:
            scale = min(avail_w / dx, avail_h / dy)

        center = bounds.center
        return cls(
            scale=scale,
            translate_x=width / (2 * scale) - center.x,
            translate_y=height / (2 * scale) - center.y,
        )

    def pixel_to_shape(self, x: float, y: float) -> Point:
        """Shape-space position of the center of pixel (x, y)."""
        return Point(
            (x + 0.5) / self.scale - self.translate_x,
            (y + 0.5) / self.scale - self.translate_y,
        )

    def shape_to_pixel(self, point: Point) -> tuple[float, float]:
        """Continuous pixel coordinates of a shape-space point."""
        return (
            (point.x + self.translate_x) * self.scale - 0.5,
            (point.y + self.translate_y) * self.scale - 0.5,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"scale": self.scale, "translate": [self.translate_x, self.translate_y]}


@dataclass
class DistanceField:
    """Dense multi-channel signed distance raster.

    Row 0 is the bottom row: shape y grows with the row index. Values are
    signed distances in shape units (positive inside); channels with no
    contributing edges hold ``-inf``.

    Attributes:
        data: Array of shape (height, width, channels), float64
        transform: Pixel to shape mapping used while sampling
        distance_range: Width of the representable range in shape units
    """

    data: np.ndarray
    transform: FieldTransform
    distance_range: float

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def channels(self) -> int:
        return int(self.data.shape[2])

    def value_at(self, x: int, y: int) -> tuple[float, ...]:
        """Channel values of pixel column ``x``, row ``y``."""
        return tuple(float(v) for v in self.data[y, x])

    def normalized(self) -> np.ndarray:
        """Map distances into [0, 1] with the edge at 0.5.

        Distances of +/- half the range reach 1 and 0; everything beyond
        (including the sentinel) is clipped.
        """
        with np.errstate(invalid="ignore"):
            scaled = self.data / self.distance_range + 0.5
        return np.clip(np.nan_to_num(scaled, nan=0.0, neginf=0.0, posinf=1.0), 0.0, 1.0)

    def to_uint8(self) -> np.ndarray:
        """Quantize the normalized field to 8-bit channel values."""
        return np.round(self.normalized() * 255.0).astype(np.uint8)

    def median(self) -> np.ndarray:
        """Per-pixel median of the three color channels.

        This is how a renderer reconstructs the signed distance from an
        MSDF. A single-channel field is returned as is.
        """
        if self.channels < 3:
            return self.data[..., 0].copy()
        return np.median(self.data[..., :3], axis=2)
