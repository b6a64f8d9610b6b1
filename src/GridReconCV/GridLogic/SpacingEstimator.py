class SpacingEstimator:
    """
    Estimates the fundamental grid period from pooled line gaps.

    Gaps between detected neighbours are whole multiples of the true period
    whenever lines were missed, so the gaps are clustered and the smallest
    cluster mean is taken as the period.

    Attributes:
        tolerance (float): Largest step between sorted gaps within one cluster.
    """

    def __init__(self, tolerance: float = 10.0) -> None:
        self.tolerance: float = tolerance

    def estimate(self, differences: list[float], width: int, height: int) -> float:
        """
        Args:
            differences (list[float]): Midpoint differences from both orientations.
            width (int): Image width.
            height (int): Image height.

        Returns:
            float: Smallest cluster mean, or max(width, height) when no cluster
            closes (so reconstruction inserts nothing).
        """
        bound: float = float(max(width, height))
        values: list[float] = sorted(differences) + [bound]

        spacing: float = bound
        clusterMean: float = values[0]
        count: int = 1
        for previous, current in zip(values, values[1:]):
            if current - previous <= self.tolerance:
                count += 1
                clusterMean += (current - clusterMean) / count
            else:
                spacing = min(spacing, clusterMean)
                clusterMean = current
                count = 1
        return spacing
