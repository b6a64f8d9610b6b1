import numpy as np
from numpy.typing import NDArray

from ..Image.SampleGrid import SampleGrid
from ..Types.Types import *

# Threshold used when no split separates two classes, i.e. a uniform image.
# Every sample is >= 0.0 so the whole mask becomes foreground.
UNIFORM_THRESHOLD: float = 0.0


class Binarizer:
    """
    Global thresholding of a single channel grid using Otsu's method.

    Attributes:
        nrBins (int): Histogram resolution. Large values give finer thresholds.
    """

    def __init__(self, nrBins: int = 1000) -> None:
        if nrBins < 2:
            raise ValueError(f"nrBins must be at least 2, got {nrBins}")
        self.nrBins: int = nrBins

    def histogram(self, grid: SampleGrid) -> NDArray[np.int64]:
        """
        Count samples per bin. A sample v falls in bin int(v * (nrBins - 1)).

        Raises:
            ValueError: If the grid has more than one channel.
        """
        if grid.nrChannels != 1:
            raise ValueError(
                f"Binarizer expects a single channel grid, got {grid.nrChannels} channels"
            )
        samples: np.ndarray = np.clip(grid.data.astype(np.float64), 0.0, 1.0)
        bins: NDArray[np.int64] = (samples * (self.nrBins - 1)).astype(np.int64)
        return np.bincount(bins, minlength=self.nrBins)

    @staticmethod
    def otsuLevel(counts: NDArray[np.integer]) -> int | None:
        """
        Find the histogram split that maximises the between-class variance.

        For every candidate bin i the samples split into class 0 (bins <= i) and
        class 1 (bins > i). With cumulative probability P[i] and cumulative
        index-weighted probability M[i], the variance is

            P[i] * (1 - P[i]) * (M[i] / P[i] - (M_total - M[i]) / (1 - P[i]))^2

        Splits that leave either class empty are skipped. When several splits
        share the maximum (e.g. the empty bins between the two values of a
        two-tone image) the middle one is returned.

        Args:
            counts (NDArray[np.integer]): Samples per bin.

        Returns:
            int | None: Winning bin index, or None if every split is degenerate.
        """
        counts = np.asarray(counts, dtype=np.int64)
        nrPixels: int = int(counts.sum())
        if nrPixels == 0:
            return None

        cumulativeCounts: NDArray[np.int64] = np.cumsum(counts)
        valid: NDArray[np.bool_] = (cumulativeCounts > 0) & (cumulativeCounts < nrPixels)
        if not valid.any():
            return None

        probabilities: NDArray[np.float64] = counts / nrPixels
        sumP: NDArray[np.float64] = np.cumsum(probabilities)
        sumPI: NDArray[np.float64] = np.cumsum(np.arange(len(counts)) * probabilities)
        muT: float = float(sumPI[-1])

        w0: NDArray[np.float64] = sumP[valid]
        w1: NDArray[np.float64] = 1.0 - w0
        mu0: NDArray[np.float64] = sumPI[valid] / w0
        mu1: NDArray[np.float64] = (muT - sumPI[valid]) / w1

        variance: NDArray[np.float64] = np.full(len(counts), -1.0)
        variance[valid] = w0 * w1 * (mu0 - mu1) ** 2

        best: NDArray[np.intp] = np.flatnonzero(variance == variance.max())
        return int(best[len(best) // 2])

    def computeThreshold(self, grid: SampleGrid) -> float:
        level: int | None = self.otsuLevel(self.histogram(grid))
        if level is None:
            return UNIFORM_THRESHOLD
        return level / (self.nrBins - 1)

    @staticmethod
    def applyThreshold(grid: SampleGrid, threshold: float) -> SampleGrid:
        """Mask with 1.0 where a sample is >= threshold and 0.0 elsewhere."""
        if grid.nrChannels != 1:
            raise ValueError(
                f"Binarizer expects a single channel grid, got {grid.nrChannels} channels"
            )
        mask: SampleGrid = SampleGrid(grid.width, grid.height, 1)
        mask.data[grid.data >= threshold] = 1.0
        return mask

    def binarize(self, grid: SampleGrid) -> tuple[float, SampleGrid]:
        threshold: float = self.computeThreshold(grid)
        return threshold, self.applyThreshold(grid, threshold)
