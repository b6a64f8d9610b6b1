import os
import cv2 as cv
import numpy as np
from typing import Final

from .SampleGrid import SampleGrid
from .Exceptions.ImageCodecFail import ImageLoadFailed, ImageSaveFailed
from ..Types.Types import *

SUPPORTED_EXTENSIONS: Final[tuple[str, ...]] = (".png", ".jpg", ".jpeg", ".bmp", ".tiff")


class ImageCodec:
    """
    Converts between image files, OpenCV frames and SampleGrids.

    OpenCV stores colour frames as BGR(A) integers; SampleGrids hold RGB(A)
    floats in [0, 1].
    """

    @staticmethod
    def fromFrame(frame: Frame) -> SampleGrid:
        """
        Convert an OpenCV frame to a SampleGrid.

        Args:
            frame (Frame): (H, W) or (H, W, C) array of uint8, uint16 or float samples.

        Returns:
            SampleGrid: Samples scaled to [0, 1] with colour channels in RGB(A) order.
        """
        if np.issubdtype(frame.dtype, np.integer):
            scale: float = float(np.iinfo(frame.dtype).max)
        else:
            scale = 1.0

        if frame.ndim == 3 and frame.shape[2] == 3:
            frame = cv.cvtColor(frame, cv.COLOR_BGR2RGB)
        elif frame.ndim == 3 and frame.shape[2] == 4:
            frame = cv.cvtColor(frame, cv.COLOR_BGRA2RGBA)

        return SampleGrid.fromArray(frame.astype(np.float32) / scale)

    @staticmethod
    def toFrame(grid: SampleGrid) -> Frame:
        """
        Convert a SampleGrid to an 8-bit OpenCV frame.

        Samples are clipped to [0, 1] and truncated to integers. Two channel grids
        get an empty third channel since OpenCV cannot encode them.
        """
        samples: np.ndarray = np.clip(grid.view(), 0.0, 1.0)
        frame: Frame = (samples * 255).astype(np.uint8)

        if grid.nrChannels == 1:
            return frame[:, :, 0].copy()
        if grid.nrChannels == 2:
            padding = np.zeros(frame.shape[:2] + (1,), dtype=np.uint8)
            frame = np.concatenate((frame, padding), axis=2)
            return cv.cvtColor(frame, cv.COLOR_RGB2BGR)
        if grid.nrChannels == 3:
            return cv.cvtColor(frame, cv.COLOR_RGB2BGR)
        if grid.nrChannels == 4:
            return cv.cvtColor(frame, cv.COLOR_RGBA2BGRA)
        raise ValueError(f"Cannot encode a grid with {grid.nrChannels} channels")

    @staticmethod
    def loadImage(path: str) -> SampleGrid:
        """
        Decode an image file.

        Raises:
            ImageLoadFailed: If OpenCV cannot read the file.
        """
        frame: Frame | None = cv.imread(path, cv.IMREAD_UNCHANGED)
        if frame is None:
            raise ImageLoadFailed(path)
        return ImageCodec.fromFrame(frame)

    @staticmethod
    def saveImage(grid: SampleGrid, path: str) -> None:
        """
        Encode a grid to disk. The format follows the file extension.

        Raises:
            ValueError: If the extension is not supported.
            ImageSaveFailed: If OpenCV fails to write the file.
        """
        ext: str = os.path.splitext(path)[1].lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise ValueError(f"{ext} files not supported.")

        folder: str = os.path.dirname(path)
        if folder:
            os.makedirs(folder, exist_ok=True)

        if not cv.imwrite(path, ImageCodec.toFrame(grid)):
            raise ImageSaveFailed(path)
