import cv2 as cv
import numpy as np

from .SampleGrid import SampleGrid
from .Kernel import Kernel
from ..Types.Types import *


class ImageFilters:

    @staticmethod
    def toGreyscale(grid: SampleGrid) -> SampleGrid:
        """
        Reduce a grid to one channel by averaging its first three channels.

        Grids with fewer than three channels keep channel 0 as the intensity.
        """
        samples: FloatFrame = grid.view()
        if grid.nrChannels >= 3:
            grey = (samples[:, :, 0] + samples[:, :, 1] + samples[:, :, 2]) / 3.0
        else:
            grey = samples[:, :, 0]
        return SampleGrid.fromArray(grey)

    @staticmethod
    def convolve2d(
        grid: SampleGrid,
        kernel: Kernel,
        normalizingFactor: float = 1.0,
        flipY: bool = False,
    ) -> SampleGrid:
        """
        Correlate every channel of a grid with a square kernel.

        Samples outside the image contribute nothing (zero padding), so borders
        darken under smoothing kernels.

        Args:
            grid (SampleGrid): Input grid.
            kernel (Kernel): Square weight grid; the centre is at size // 2.
            normalizingFactor (float): Every output sample is divided by this.
            flipY (bool): Flip the kernel rows before correlating.

        Returns:
            SampleGrid: New grid with the same dimensions as `grid`.
        """
        weights: np.ndarray = kernel.weights().astype(np.float32)
        if flipY:
            weights = np.flipud(weights).copy()

        samples: FloatFrame = grid.view()
        channels: list[np.ndarray] = [
            cv.filter2D(
                np.ascontiguousarray(samples[:, :, c]),
                cv.CV_32F,
                weights,
                borderType=cv.BORDER_CONSTANT,
            )
            for c in range(grid.nrChannels)
        ]
        output: np.ndarray = np.stack(channels, axis=2) / normalizingFactor
        return SampleGrid.fromArray(output)
