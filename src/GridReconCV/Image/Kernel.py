from __future__ import annotations

import cv2 as cv
import numpy as np

from .SampleGrid import SampleGrid


class Kernel(SampleGrid):
    """Square single channel grid of filter weights."""

    def __init__(self, size: int, weights=None) -> None:
        super().__init__(size, size, 1, weights)
        self._size: int = int(size)

    @property
    def size(self) -> int:
        return self._size

    @classmethod
    def identity(cls, size: int = 1) -> Kernel:
        weights = np.zeros((size, size), dtype=np.float32)
        weights[size // 2, size // 2] = 1.0
        return cls(size, weights)

    @classmethod
    def box(cls, size: int) -> Kernel:
        return cls(size, np.full((size, size), 1.0 / (size * size), dtype=np.float32))

    @classmethod
    def gaussian(cls, size: int, sigma: float) -> Kernel:
        g = cv.getGaussianKernel(size, sigma)
        return cls(size, g @ g.T)

    @classmethod
    def sobelX(cls) -> Kernel:
        return cls(3, [1, 0, -1, 2, 0, -2, 1, 0, -1])

    @classmethod
    def fromName(cls, name: str, size: int = 3, sigma: float = 1.0) -> Kernel:
        """
        Resolve the `blurKernel` configuration value to a kernel.

        Raises:
            ValueError: If the name is unknown or the size is not a positive odd integer.
        """
        if size <= 0 or size % 2 == 0:
            raise ValueError(f"Kernel size must be a positive odd integer, got {size}")
        if name == "identity":
            return cls.identity(size)
        if name == "box":
            return cls.box(size)
        if name == "gaussian":
            return cls.gaussian(size, sigma)
        raise ValueError(f"Unknown blur kernel: {name}")

    def weights(self) -> np.ndarray:
        return self.plane(0)
