import os
import numpy as np
import matplotlib
import matplotlib.pyplot as plt
from logging import Logger

from ..Image.SampleGrid import SampleGrid
from ..Image.ImageCodec import ImageCodec
from ..Image.Exceptions.ImageCodecFail import ImageSaveFailed
from ..GridLogic.Compositor import Compositor
from ..GridLogic.GridResult import GridResult
from ..Types.Types import *

matplotlib.use("Agg")


class VisualUtils:
    """Utility class for saving frames, diagnostic plots and tables.

    All outputs are saved below the specified directory.
    """
    def __init__(self, pathToVisuals: str = "visuals"):
        """Initialize the VisualUtils object and create output directory.

        Args:
            pathToVisuals (str): Path to directory where visuals will be saved. Defaults to "visuals".
        """
        self.outputPath = pathToVisuals
        os.makedirs(self.outputPath, exist_ok=True)

    def updateOutputPath(self, newPath: str) -> None:
        self.outputPath = newPath
        os.makedirs(self.outputPath, exist_ok=True)

    def plotHistogram(self, grey: SampleGrid, threshold: float, nrBins: int, frameCount: int) -> str:
        """Plot the greyscale histogram with the Otsu threshold marked.

        Args:
            grey (SampleGrid): Single channel grid that was thresholded.
            threshold (float): Threshold in [0, 1].
            nrBins (int): Number of histogram bins.
            frameCount (int): Frame number to include in the filename.

        Returns:
            str: Path of the saved PNG.
        """
        plots_dir = os.path.join(self.outputPath, "plots")
        os.makedirs(plots_dir, exist_ok=True)

        plt.figure(figsize=(8, 4))
        plt.title("Greyscale Histogram")
        plt.hist(grey.data, bins=nrBins, range=(0.0, 1.0), color="k")
        plt.axvline(threshold, color="r", linestyle="--", label=f"threshold {threshold:.3f}")
        plt.xlim([0, 1])
        plt.xlabel("Intensity")
        plt.ylabel("Frequency")
        plt.legend()
        filepath = os.path.join(plots_dir, f"frame_{frameCount}_histogram.png")
        plt.savefig(filepath)
        plt.close()
        return filepath

    def plotFreqArray(self, arr: np.ndarray, title: str) -> str:
        """Plot a 1D array as a bar chart and save it as a PNG.

        Args:
            arr (np.ndarray): 1D array of values to plot.
            title (str): Title of the plot, also used as filename.

        Returns:
            str: Path of the saved PNG.
        """
        plots_dir = os.path.join(self.outputPath, "plots")
        os.makedirs(plots_dir, exist_ok=True)

        plt.figure()
        plt.bar(range(len(arr)), arr)
        plt.title(title)
        plt.xlabel("Index")
        plt.ylabel("Value")

        filepath = os.path.join(plots_dir, f"{title}.png")
        plt.savefig(filepath)
        plt.close()
        return filepath

    def saveFrame(self, frame: SampleGrid, tag: str, frameCount: int, logger: Logger, folder: str = "frames") -> None:
        """Save a grid with a tag and frame count.

        Args:
            frame (SampleGrid): Grid to save.
            tag (str): Descriptive tag for the frame.
            frameCount (int): Frame number to include in the filename.
            logger (Logger): Logger receiving the outcome.
            folder (str): Subfolder under the output path. Defaults to "frames".
        """
        folder_path = os.path.join(self.outputPath, folder)
        os.makedirs(folder_path, exist_ok=True)

        filename = os.path.join(folder_path, f"frame_{frameCount}_{tag}.png")
        try:
            ImageCodec.saveImage(frame, filename)
            logger.info(f"Frame saved to {filename}")
        except ImageSaveFailed as e:
            logger.error(f"Error saving frame to {filename}: {e}")

    @staticmethod
    def drawOrientation(result: GridResult, orientation: Orientation) -> SampleGrid:
        """
        Visualise the lines of one orientation.

        Reconstructed lines are drawn in red and detected lines in green on top
        of the greyscale image.
        """
        canvas: SampleGrid = SampleGrid.fromArray(
            np.stack([result.greyscale.plane(0)] * 3, axis=2)
        )
        reconstruction = result.orientations[orientation].reconstruction
        added: EndpointList = (
            reconstruction.interpolated + reconstruction.leading + reconstruction.trailing
        )
        Compositor(0).compose(canvas, {orientation: added}, result.width, result.height)
        Compositor(1).compose(
            canvas, {orientation: reconstruction.canonical}, result.width, result.height
        )
        return canvas

    @staticmethod
    def formatCell(value, precision: int = 2) -> str:
        if isinstance(value, float):
            return f"{value:.{precision}f}"
        return str(value)

    @staticmethod
    def printTable(rows: list[list], headers: list[str] | None = None, precision: int = 2) -> None:
        """Print per-frame summary rows as a bordered table.

        Args:
            rows (list[list]): One list of cell values per frame.
            headers (list[str] | None): Optional column headers.
            precision (int): Decimal places for float cells. Defaults to 2.
        """
        if not rows:
            return
        cells: list[list[str]] = [
            [VisualUtils.formatCell(value, precision) for value in row] for row in rows
        ]
        if headers:
            cells.insert(0, list(headers))

        widths: list[int] = [max(len(row[c]) for row in cells) for c in range(len(cells[0]))]
        border: str = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

        print(border)
        for r, row in enumerate(cells):
            print("| " + " | ".join(cell.ljust(w) for cell, w in zip(row, widths)) + " |")
            if headers and r == 0:
                print(border)
        print(border)
