"""Edge color channel assignments."""

from enum import IntFlag


class EdgeColor(IntFlag):
    """Set of color channels an edge contributes to.

    Values are bit sets over red (bit 0), green (bit 1) and blue (bit 2), so
    ``&``, ``|`` and ``^`` combine channel sets directly.
    """

    BLACK = 0b000
    RED = 0b001
    GREEN = 0b010
    YELLOW = 0b011
    BLUE = 0b100
    MAGENTA = 0b101
    CYAN = 0b110
    WHITE = 0b111

    def __invert__(self) -> "EdgeColor":
        return EdgeColor(~int(self) & 0b111)

    def has_channel(self, channel: int) -> bool:
        """Check whether this color includes channel 0 (R), 1 (G) or 2 (B)."""
        return bool(int(self) >> channel & 1)

    @property
    def channel_count(self) -> int:
        return bin(int(self)).count("1")


# Rotation used when coloring runs of edges between sharp corners
COLOR_ROTATION: tuple[EdgeColor, ...] = (EdgeColor.CYAN, EdgeColor.MAGENTA, EdgeColor.YELLOW)
