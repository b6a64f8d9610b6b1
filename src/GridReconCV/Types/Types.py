import numpy as np
from enum import Enum
from typing import NamedTuple, TypeAlias
from numpy.typing import NDArray

Frame: TypeAlias = np.ndarray
FloatFrame: TypeAlias = NDArray[np.float32]
FloatArray: TypeAlias = NDArray[np.float32]
Point: TypeAlias = tuple[int, int]


class Endpoint(NamedTuple):
    """Edge intersections of a candidate line.

    For a near-vertical line `lower` is the x-coordinate on the top edge and
    `upper` the x-coordinate on the bottom edge. Near-horizontal lines use the
    y-coordinates on the left and right edges.
    """

    lower: int
    upper: int

    @property
    def midpoint(self) -> float:
        return (self.lower + self.upper) / 2.0

    @property
    def skew(self) -> int:
        return self.upper - self.lower


EndpointList: TypeAlias = list[Endpoint]


class GridLine(NamedTuple):
    start: Point
    end: Point


class Orientation(Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"

    def scanExtent(self, width: int, height: int) -> int:
        """Range of endpoint coordinates for this orientation."""
        return width if self is Orientation.VERTICAL else height

    def lineSpan(self, width: int, height: int) -> int:
        """Distance a line travels across the image."""
        return height if self is Orientation.VERTICAL else width

    def segment(self, lower: int, upper: int, width: int, height: int) -> GridLine:
        if self is Orientation.VERTICAL:
            return GridLine((lower, 0), (upper, height - 1))
        return GridLine((0, lower), (width - 1, upper))
