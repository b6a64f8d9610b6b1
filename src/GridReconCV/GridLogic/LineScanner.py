from .LineWalker import LineWalker
from ..Image.SampleGrid import SampleGrid
from ..Types.Types import *


class LineScanner:
    """
    Finds candidate grid lines that span the image between opposite edges.

    The mask marks bright paper with 1.0 and dark ink with 0.0. A segment that
    runs along a grid line sees ink almost everywhere, apart from short bright
    bursts where the line is faint or occluded. A segment that wanders across
    paper meets long bright runs. Candidates are therefore rejected as soon as
    the run of consecutive 1.0 samples exceeds `maxStreak`.

    Attributes:
        maxStreak (int): Longest tolerated run of bright samples.
        maxSkew (int | None): Optional bound on |upper - lower|; None scans every pair.
    """

    def __init__(self, maxStreak: int = 10, maxSkew: int | None = None) -> None:
        self.maxStreak: int = maxStreak
        self.maxSkew: int | None = maxSkew

    def acceptsSegment(self, rows: list[list[float]], line: GridLine) -> bool:
        """
        Walk a segment over the mask rows and test the bright streak bound.

        Args:
            rows (list[list[float]]): Mask samples indexed as rows[y][x].
            line (GridLine): Segment to test.

        Returns:
            bool: True if the walk never saw more than `maxStreak` bright samples in a row.
        """
        streak: int = 0
        maxStreak: int = self.maxStreak

        def visit(x: int, y: int) -> bool:
            nonlocal streak
            if rows[y][x] == 1.0:
                streak += 1
                return streak > maxStreak
            streak = 0
            return False

        (x0, y0), (x1, y1) = line
        return not LineWalker.walk(x0, y0, x1, y1, visit)

    def scan(self, mask: SampleGrid, orientation: Orientation) -> EndpointList:
        """
        Test every candidate line of one orientation against the mask.

        Candidate endpoints range over the open interior of the scan extent,
        so a vertical candidate (i, j) runs from (i, 0) to (j, height - 1).

        Args:
            mask (SampleGrid): Single channel binary mask.
            orientation (Orientation): Which family of lines to scan for.

        Returns:
            EndpointList: One unsorted Endpoint per accepted candidate. Each true
            grid line typically produces several near-duplicates.
        """
        width: int = mask.width
        height: int = mask.height
        extent: int = orientation.scanExtent(width, height)
        rows: list[list[float]] = mask.plane(0).tolist()

        accepted: EndpointList = []
        for i in range(1, extent - 1):
            for j in range(1, extent - 1):
                if self.maxSkew is not None and abs(j - i) > self.maxSkew:
                    continue
                if self.acceptsSegment(rows, orientation.segment(i, j, width, height)):
                    accepted.append(Endpoint(i, j))
        return accepted
