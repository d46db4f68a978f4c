"""Shape representation: a set of contours."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from msdfkit.domain.contour import Contour
from msdfkit.domain.edges import Bounds, EdgeSegment


@dataclass
class Shape:
    """A vector shape made of closed contours.

    Contour order only affects iteration order, never the field values.
    Designed for efficient serialization for parallel processing.

    Attributes:
        contours: Contours forming the shape outline
        name: Optional label (glyph name, file name) used in logs
    """

    contours: list[Contour] = field(default_factory=list)
    name: str | None = None

    def edges(self) -> Iterator[EdgeSegment]:
        """Iterate over every edge of every contour."""
        for contour in self.contours:
            yield from contour.edges

    @property
    def edge_count(self) -> int:
        return sum(len(contour) for contour in self.contours)

    def is_empty(self) -> bool:
        """Check if the shape has no edges at all."""
        return self.edge_count == 0

    def bounds(self) -> Bounds:
        """Bounding box of all contours (empty bounds for an empty shape)."""
        result = Bounds.empty()
        for contour in self.contours:
            if contour.edges:
                result = result.union(contour.bounds())
        return result

    def uncovered_channels(self, channels: int = 3) -> list[int]:
        """List output channels no edge contributes to.

        Color channels 0-2 need an edge carrying that color. The single
        channel layout and the fourth (true distance) channel use every edge.

        Args:
            channels: Channel layout of the field (1, 3 or 4)

        Returns:
            Indices of channels that would only hold the sentinel value
        """
        if channels == 1:
            return [] if self.edge_count else [0]
        missing = [
            channel
            for channel in range(3)
            if not any(edge.color.has_channel(channel) for edge in self.edges())
        ]
        if channels == 4 and not self.edge_count:
            missing.append(3)
        return missing

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "name": self.name,
            "contours": [contour.to_dict() for contour in self.contours],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Shape":
        """Deserialize from dictionary."""
        return cls(
            contours=[Contour.from_dict(c) for c in data["contours"]],
            name=data.get("name"),
        )
