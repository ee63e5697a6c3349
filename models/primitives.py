"""
Shared primitive data types for card events.

Pointer coordinates arrive from the host in client (screen) pixels and
timestamps in wall-clock milliseconds.
"""

import math

from pydantic import BaseModel, ConfigDict


class Point2D(BaseModel):
    """Immutable 2D point in client coordinates.

    Attributes:
        x: X coordinate (horizontal, grows to the right)
        y: Y coordinate (vertical, grows downward)

    Examples:
        >>> Point2D(x=10.0, y=20.0).distance_to(Point2D(x=13.0, y=24.0))
        5.0
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def distance_to(self, other: "Point2D") -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"


class PointerSample(Point2D):
    """A pointer position stamped with the time it was observed.

    Attributes:
        time: Wall-clock timestamp in milliseconds
    """
    time: float

    def __str__(self) -> str:
        return f"PointerSample(x={self.x:.2f}, y={self.y:.2f}, t={self.time:.0f})"
