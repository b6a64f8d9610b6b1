import os
import cv2 as cv

from .SampleGrid import SampleGrid
from .ImageCodec import ImageCodec, SUPPORTED_EXTENSIONS
from ..Types.Types import *


class ImageSource:
    """
    Reads either a single image or a sequence of images from a folder.

    Attributes:
        imagePaths (list[str]): Ordered list of image file paths to read.
        index (int): Index of the next image to read.
        currentPath (str | None): Path of the image most recently returned by `read`.
        maxDimension (int | None): Longest side allowed before images are shrunk.
    """

    def __init__(self, path: str, maxDimension: int | None = None) -> None:
        """
        Initialize the ImageSource with a file or directory path.

        Args:
            path (str): Path to an image file or a directory containing images.
            maxDimension (int | None): Optional upper bound on the longer image side.

        Raises:
            ValueError: If the path is invalid or contains no supported images.
        """
        self.imagePaths: list[str]
        self.index: int = 0
        self.currentPath: str | None = None
        self.maxDimension: int | None = maxDimension

        if os.path.isdir(path):
            self.imagePaths = sorted([
                os.path.join(path, f)
                for f in os.listdir(path)
                if f.lower().endswith(SUPPORTED_EXTENSIONS)
            ])

            if not self.imagePaths:
                raise ValueError(f"No images found in folder: {path}")

        elif os.path.isfile(path):
            if not path.lower().endswith(SUPPORTED_EXTENSIONS):
                raise ValueError(f"Unsupported image format: {path}")
            self.imagePaths = [path]

        else:
            raise ValueError(f"Invalid path: {path}")

    def read(self) -> SampleGrid | None:
        """
        Read the next image in the sequence.

        Returns:
            SampleGrid | None: The next image, or None once every image has been read.

        Raises:
            ImageLoadFailed: If the image cannot be decoded.
        """
        if self.index >= len(self.imagePaths):
            return None

        imagePath: str = self.imagePaths[self.index]
        self.index += 1
        self.currentPath = imagePath

        image: SampleGrid = ImageCodec.loadImage(imagePath)
        if self.maxDimension is not None:
            image = self.shrink(image, self.maxDimension)
        return image

    @staticmethod
    def shrink(image: SampleGrid, maxDimension: int) -> SampleGrid:
        longest: int = max(image.width, image.height)
        if longest <= maxDimension:
            return image
        scale: float = maxDimension / longest
        size: tuple[int, int] = (
            max(1, int(image.width * scale)),
            max(1, int(image.height * scale)),
        )
        resized = cv.resize(image.view(), size, interpolation=cv.INTER_AREA)
        if resized.ndim == 2:
            resized = resized[:, :, None]
        return SampleGrid.fromArray(resized)
