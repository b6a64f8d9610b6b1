from typing import Callable, Iterator

from ..Types.Types import *


class LineWalker:
    """
    Integer rasterization of a segment between two pixels.

    Both the line scanner and the compositor drive their per-pixel work through
    `walk`, supplying a visitor that may stop the walk early.
    """

    @staticmethod
    def points(x0: int, y0: int, x1: int, y1: int) -> Iterator[Point]:
        """
        Yield the 8-connected pixels from (x0, y0) to (x1, y1) inclusive.

        Uses the incremental error form of Bresenham's algorithm, so every
        octant is handled and consecutive pixels are always 4- or 8-adjacent.
        """
        dx: int = abs(x1 - x0)
        sx: int = 1 if x0 < x1 else -1
        dy: int = -abs(y1 - y0)
        sy: int = 1 if y0 < y1 else -1
        error: int = dx + dy

        while True:
            yield x0, y0
            if x0 == x1 and y0 == y1:
                return
            e2: int = 2 * error
            if e2 >= dy:
                error += dy
                x0 += sx
            if e2 <= dx:
                error += dx
                y0 += sy

    @staticmethod
    def walk(
        x0: int, y0: int, x1: int, y1: int, visit: Callable[[int, int], bool]
    ) -> bool:
        """
        Visit every pixel of a segment until the visitor asks to stop.

        Args:
            x0, y0 (int): Start pixel.
            x1, y1 (int): End pixel.
            visit (Callable[[int, int], bool]): Called with (x, y); a truthy
                return value ends the walk.

        Returns:
            bool: True if the visitor stopped the walk before the end pixel.
        """
        for x, y in LineWalker.points(x0, y0, x1, y1):
            if visit(x, y):
                return True
        return False
