from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from ..Types.Types import *


class SampleGrid:
    """Dense grid of floating point samples.

    Samples live in a flat float32 array of length ``width * height * nrChannels``
    laid out row-major with the channels of a pixel stored next to each other.
    Every grid owns its storage; arrays handed to the constructor are copied.

    Attributes:
        data (FloatArray): Flat sample storage.
    """

    def __init__(
        self, width: int, height: int, nrChannels: int, data: ArrayLike | None = None
    ) -> None:
        """
        Args:
            width (int): Number of columns.
            height (int): Number of rows.
            nrChannels (int): Samples per pixel.
            data (ArrayLike | None): Optional initial samples in storage order.
                The grid is zero filled when omitted.

        Raises:
            ValueError: If a dimension is not positive or `data` has the wrong length.
        """
        if width <= 0 or height <= 0 or nrChannels <= 0:
            raise ValueError(
                f"Invalid grid dimensions: {width}x{height}x{nrChannels}"
            )
        self._width: int = int(width)
        self._height: int = int(height)
        self._nrChannels: int = int(nrChannels)
        size: int = self._width * self._height * self._nrChannels

        if data is None:
            self.data: FloatArray = np.zeros(size, dtype=np.float32)
        else:
            flat: FloatArray = np.array(data, dtype=np.float32).reshape(-1)
            if flat.size != size:
                raise ValueError(
                    f"Expected {size} samples for a {width}x{height}x{nrChannels} grid, got {flat.size}"
                )
            self.data = flat

    @classmethod
    def fromArray(cls, array: np.ndarray) -> SampleGrid:
        """Build a grid from an (H, W) or (H, W, C) array. The array is copied."""
        array = np.asarray(array)
        if array.ndim == 2:
            height, width = array.shape
            return cls(width, height, 1, array)
        if array.ndim == 3:
            height, width, nrChannels = array.shape
            return cls(width, height, nrChannels, array)
        raise ValueError(f"Unsupported array shape: {array.shape}")

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def nrChannels(self) -> int:
        return self._nrChannels

    def index(self, i: int, j: int, channel: int = 0) -> int:
        return self._nrChannels * ((j * self._width) + i) + channel

    def isValidIndex(self, i: int, j: int, padding: int = 0) -> bool:
        return (
            i >= padding
            and j >= padding
            and i < self._width - padding
            and j < self._height - padding
        )

    def isBorderIndex(self, i: int, j: int) -> bool:
        return self.isValidIndex(i, j) and (
            i == 0 or j == 0 or i == self._width - 1 or j == self._height - 1
        )

    def get(self, i: int, j: int, channel: int = 0) -> float:
        return float(self.data[self.index(i, j, channel)])

    def set(self, i: int, j: int, value: float, channel: int = 0) -> None:
        self.data[self.index(i, j, channel)] = value

    def __getitem__(self, key: tuple) -> float:
        return self.get(*key)

    def __setitem__(self, key: tuple, value: float) -> None:
        i, j, *channel = key
        self.set(i, j, value, *channel)

    def view(self) -> FloatFrame:
        """(height, width, nrChannels) view sharing this grid's storage."""
        return self.data.reshape(self._height, self._width, self._nrChannels)

    def plane(self, channel: int = 0) -> FloatFrame:
        """(height, width) view of a single channel."""
        return self.view()[:, :, channel]

    def copy(self) -> SampleGrid:
        return SampleGrid(self._width, self._height, self._nrChannels, self.data)

    def __repr__(self) -> str:
        return f"SampleGrid({self._width}x{self._height}x{self._nrChannels})"
