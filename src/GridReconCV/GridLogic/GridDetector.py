import numpy as np
from logging import Logger
from typing import Final

from .Binarizer import Binarizer
from .LineScanner import LineScanner
from .EndpointClusterer import EndpointClusterer
from .SpacingEstimator import SpacingEstimator
from .GridReconstructor import GridReconstructor, Reconstruction
from .Compositor import Compositor
from .GridResult import GridResult, OrientationResult
from ..Image.SampleGrid import SampleGrid
from ..Image.Kernel import Kernel
from ..Image.ImageFilters import ImageFilters
from ..Util.MiscUtil import MiscUtil
from ..Types.Types import *


class GridDetector:
    """Reconstructs the regular grid of a photographed ruled surface.

    The pipeline per image is: greyscale reduction, optional smoothing,
    Otsu binarization, line scanning and clustering per orientation, spacing
    estimation over the pooled line gaps of both orientations, interpolation and
    extrapolation of missing lines, and finally compositing every line onto a
    copy of the greyscale image.

    Attributes:
        nrBins (int): Histogram bins for Otsu thresholding.
        maxStreak (int): Longest run of bright samples a candidate line may cross.
        maxSkew (int | None): Optional bound on |upper - lower| for candidates.
        clusterTolerance (int): Largest gap between merged detections.
        spacingTolerance (float): Largest step between clustered line gaps.
        blurKernel (str): Pre-filter applied before thresholding:
            "identity", "box" or "gaussian".
        blurKernelSize (int): Odd pre-filter size.
        blurSigma (float): Standard deviation of the Gaussian pre-filter.
        lineChannel (int): Overlay channel set on reconstructed lines.
        maxDimension (int | None): Longest image side; larger inputs are shrunk by the app.
    """

    TUNABLES: Final[tuple[str, ...]] = (
        "nrBins",
        "maxStreak",
        "maxSkew",
        "clusterTolerance",
        "spacingTolerance",
        "blurKernel",
        "blurKernelSize",
        "blurSigma",
        "lineChannel",
        "maxDimension",
    )

    def __init__(self, config: str | None = None) -> None:
        self.logger: Logger = MiscUtil.setupLogger("gridLogger", None)

        # Paramaters To Tune set to defaults
        self.nrBins: int = 1000
        self.maxStreak: int = 10
        self.maxSkew: int | None = None
        self.clusterTolerance: int = 1
        self.spacingTolerance: float = 10.0

        # Pre-filter
        self.blurKernel: str = "identity"
        self.blurKernelSize: int = 3
        self.blurSigma: float = 1.0

        # Output
        self.lineChannel: int = 0
        self.maxDimension: int | None = None

        # Load Paramaters from JSON config file
        if config is not None:
            self.loadConfig(config)

    def loadConfig(self, configPath: str) -> None:
        """Load detector parameters from a JSON configuration file.

        Only keys listed in `TUNABLES` overwrite the defaults set in `__init__`;
        every other key is ignored.

        Args:
            configPath (str): Path to the JSON configuration file.

        Raises:
            FileNotFoundError: If the config file does not exist.
            json.JSONDecodeError: If the config file is not valid JSON.
        """
        config: dict = MiscUtil.loadConfig(configPath)

        for key, value in config.items():
            if key in self.TUNABLES:
                setattr(self, key, value)

    def preProcess(self, image: SampleGrid) -> tuple[SampleGrid, SampleGrid]:
        """
        Reduce an image to greyscale and apply the configured pre-filter.

        Returns:
            tuple[SampleGrid, SampleGrid]: The greyscale grid and the smoothed grid.
        """
        grey: SampleGrid = ImageFilters.toGreyscale(image)
        if self.blurKernel == "identity":
            return grey, grey
        kernel: Kernel = Kernel.fromName(self.blurKernel, self.blurKernelSize, self.blurSigma)
        return grey, ImageFilters.convolve2d(grey, kernel)

    def detectOrientation(
        self, mask: SampleGrid, orientation: Orientation
    ) -> tuple[int, EndpointList, list[float]]:
        """
        Scan and cluster the candidate lines of one orientation.

        Returns:
            tuple[int, EndpointList, list[float]]: Raw detection count, canonical
            lines and their consecutive midpoint differences.
        """
        scanner: LineScanner = LineScanner(self.maxStreak, self.maxSkew)
        clusterer: EndpointClusterer = EndpointClusterer(self.clusterTolerance)

        raw: EndpointList = scanner.scan(mask, orientation)
        canonical, differences = clusterer.cluster(raw)
        self.logger.info(
            f"{orientation.value}: {len(raw)} raw detections, {len(canonical)} canonical lines"
        )
        return len(raw), canonical, differences

    def execute(self, image: SampleGrid, frameCount: int = 0, logPath: str | None = None) -> GridResult:
        """
        Run the full grid reconstruction pipeline on one image.

        Args:
            image (SampleGrid): Decoded image, greyscale or colour, samples in [0, 1].
            frameCount (int): Index of the image within the run, used for logging.
            logPath (str | None): Directory for this image's log file. Logs go to
                the console when None.

        Returns:
            GridResult: Threshold, mask, spacing, per-orientation lines and the
            composited overlay.
        """
        if logPath is not None:
            self.logger = MiscUtil.setupLogger(f"gridLogger{frameCount}", logPath)

        width: int = image.width
        height: int = image.height
        self.logger.info(f"Processing image of shape: {width}x{height}x{image.nrChannels}")

        grey, smoothed = self.preProcess(image)

        binarizer: Binarizer = Binarizer(self.nrBins)
        threshold, mask = binarizer.binarize(smoothed)
        self.logger.info(f"Otsu threshold: {threshold:.4f}")

        detections: dict[Orientation, tuple[int, EndpointList, list[float]]] = {}
        pool: list[float] = []
        for orientation in Orientation:
            detections[orientation] = self.detectOrientation(mask, orientation)
            pool.extend(detections[orientation][2])

        estimator: SpacingEstimator = SpacingEstimator(self.spacingTolerance)
        spacing: float = estimator.estimate(pool, width, height)
        self.logger.info(f"Estimated spacing: {spacing:.2f} from {len(pool)} differences")

        reconstructor: GridReconstructor = GridReconstructor()
        orientations: dict[Orientation, OrientationResult] = {}
        for orientation, (rawCount, canonical, differences) in detections.items():
            reconstruction: Reconstruction = reconstructor.reconstruct(
                canonical, spacing, orientation, width, height
            )
            self.logger.info(
                f"{orientation.value}: {len(reconstruction.interpolated)} interpolated, "
                f"{len(reconstruction.leading) + len(reconstruction.trailing)} extrapolated lines"
            )
            orientations[orientation] = OrientationResult(
                orientation, rawCount, reconstruction, differences
            )

        overlay: SampleGrid = self.overlayBase(grey)
        Compositor(self.lineChannel).compose(
            overlay,
            {o: r.allLines for o, r in orientations.items()},
            width,
            height,
        )

        return GridResult(
            width=width,
            height=height,
            threshold=threshold,
            spacing=spacing,
            greyscale=grey,
            mask=mask,
            overlay=overlay,
            orientations=orientations,
        )

    @staticmethod
    def overlayBase(grey: SampleGrid) -> SampleGrid:
        """Three channel copy of a greyscale grid to draw lines on."""
        plane = grey.plane(0)
        return SampleGrid.fromArray(np.stack([plane, plane, plane], axis=2))
