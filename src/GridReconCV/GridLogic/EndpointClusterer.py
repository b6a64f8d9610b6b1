import sys

from ..Types.Types import *

_SENTINEL: Endpoint = Endpoint(sys.maxsize, sys.maxsize)


class EndpointClusterer:
    """
    Merges near-duplicate detections into one canonical line per grid line.

    Attributes:
        tolerance (int): Largest gap between consecutive `lower` values that
            still belongs to the same cluster.
    """

    def __init__(self, tolerance: int = 1) -> None:
        self.tolerance: int = tolerance

    def cluster(self, endpoints: EndpointList) -> tuple[EndpointList, list[float]]:
        """
        Sort detections by `lower` and average each run of close neighbours.

        A sentinel larger than any coordinate is appended so the final run is
        closed inside the loop. Cluster means are truncated to integers.

        Args:
            endpoints (EndpointList): Raw scanner output, in any order.

        Returns:
            tuple[EndpointList, list[float]]:
                - Canonical endpoints sorted ascending by `lower`.
                - Midpoint differences between consecutive canonical lines, to be
                  pooled for spacing estimation.
        """
        if not endpoints:
            return [], []

        ordered: EndpointList = sorted(endpoints, key=lambda e: e.lower)
        ordered.append(_SENTINEL)

        canonical: EndpointList = []
        sumLower: int = ordered[0].lower
        sumUpper: int = ordered[0].upper
        count: int = 1
        for previous, current in zip(ordered, ordered[1:]):
            if current.lower - previous.lower <= self.tolerance:
                sumLower += current.lower
                sumUpper += current.upper
                count += 1
            else:
                canonical.append(Endpoint(int(sumLower / count), int(sumUpper / count)))
                sumLower, sumUpper, count = current.lower, current.upper, 1

        return canonical, self.midpointDifferences(canonical)

    @staticmethod
    def midpointDifferences(canonical: EndpointList) -> list[float]:
        return [
            current.midpoint - previous.midpoint
            for previous, current in zip(canonical, canonical[1:])
        ]
