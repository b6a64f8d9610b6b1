class ImageLoadFailed(IOError):
    """Exception raised when an image file cannot be decoded.

    Args:
        path (str): Path of the image that failed to load.
    """
    def __init__(self, path: str):
        super().__init__(f"Failed to read image: {path}")
        self.path = path


class ImageSaveFailed(IOError):
    """Exception raised when OpenCV refuses to encode or write an image.

    Args:
        path (str): Destination that could not be written.
    """
    def __init__(self, path: str):
        super().__init__(f"Failed to write image: {path}")
        self.path = path
