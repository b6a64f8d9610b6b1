from abc import ABC, abstractmethod
import json
import logging
import os
import numpy as np
from datetime import datetime
from typing import Dict, Final, List

from GridReconCV.GridLogic.GridDetector import GridDetector
from GridReconCV.GridLogic.GridResult import GridResult
from GridReconCV.Image.ImageSource import ImageSource
from GridReconCV.Image.SampleGrid import SampleGrid
from GridReconCV.Image.Exceptions.ImageCodecFail import ImageLoadFailed
from GridReconCV.Util.MiscUtil import MiscUtil
from GridReconCV.Util.VisualUtil import VisualUtils
from ..Types.Types import *

RESULTS_FILE: Final[str] = "gridOutput.json"


class App(ABC):
    def __init__(self, source: ImageSource, exitPath: str, config: str | None = None) -> None:
        self.source: ImageSource = source
        self.outputPath: str = os.path.join(exitPath, datetime.now().strftime("%y-%m-%d_%H-%M-%S"))
        self.utility: VisualUtils = VisualUtils(self.outputPath)
        self.logger: logging.Logger = MiscUtil.setupLogger("AppLogger", self.outputPath + "/logs")
        self.frameCount: int = 0

        self.GridDetector: GridDetector = GridDetector(config)
        if self.source.maxDimension is None:
            self.source.maxDimension = self.GridDetector.maxDimension

    @abstractmethod
    def execute(self) -> None:
        pass

    def processFrames(self, verbose: bool, visual: bool) -> List[Dict]:
        """
        Run grid reconstruction on every image of the source.

        Workflow per image:
        1. Read the next image; unreadable files are logged and recorded as failed.
        2. Create the per-image output and log folders.
        3. Run the grid detector.
        4. Save the grid overlay and, when `visual` is set, the diagnostics.
        5. Record a JSON entry; `verbose` adds every line list and the threshold.

        Outputs:
            output/<timestamp>/
            ├── gridOutput.json
            ├── logs/
            └── frame_0/
                ├── logs/
                ├── grid/frame_0_grid.png
                ├── diagnostics/      (visual only)
                └── plots/            (visual only)

        Returns:
            List[Dict]: One entry per image.
        """
        results: List[Dict] = []
        self.frameCount = 0
        os.makedirs(self.outputPath, exist_ok=True)

        while True:
            try:
                image: SampleGrid | None = self.source.read()
            except ImageLoadFailed as e:
                self.logger.error(f"Error reading image: {e}")
                results.append({"frame": self.frameCount, "source": e.path, "detection": False})
                self.frameCount += 1
                continue

            if image is None:
                break

            frameOutputPath: str = f"{self.outputPath}/frame_{self.frameCount}"
            logPath: str = f"{frameOutputPath}/logs"
            os.makedirs(logPath, exist_ok=True)
            frameEntry: Dict = {
                "frame": self.frameCount,
                "source": self.source.currentPath,
                "detection": False,
            }

            try:
                result: GridResult = self.GridDetector.execute(image, self.frameCount, logPath)
            except ValueError as e:
                self.logger.error(f"Error in grid reconstruction: {e}")
                MiscUtil.closeLogger(self.GridDetector.logger)
                results.append(frameEntry)
                self.frameCount += 1
                continue

            frameEntry["detection"] = any(
                len(r.canonical) > 0 for r in result.orientations.values()
            )
            frameEntry.update(result.toDict(verbose))

            self.utility.updateOutputPath(frameOutputPath)
            self.utility.saveFrame(result.overlay, "grid", self.frameCount, self.GridDetector.logger, "grid")
            if visual:
                self.saveVisuals(result)
                frameEntry["pathToVisuals"] = frameOutputPath

            MiscUtil.closeLogger(self.GridDetector.logger)
            results.append(frameEntry)
            self.frameCount += 1

        return results

    def saveVisuals(self, result: GridResult) -> None:
        logger: logging.Logger = self.GridDetector.logger
        self.utility.saveFrame(result.mask, "mask", self.frameCount, logger, "diagnostics")
        for orientation in Orientation:
            self.utility.saveFrame(
                VisualUtils.drawOrientation(result, orientation),
                orientation.value,
                self.frameCount,
                logger,
                "diagnostics",
            )
        self.utility.plotHistogram(
            result.greyscale, result.threshold, self.GridDetector.nrBins, self.frameCount
        )
        differences: list[float] = sorted(
            d for r in result.orientations.values() for d in r.differences
        )
        if differences:
            self.utility.plotFreqArray(
                np.array(differences), f"frame_{self.frameCount}_differences"
            )

    def saveResults(self, results: List[Dict]) -> str:
        path: str = os.path.join(self.outputPath, RESULTS_FILE)
        with open(path, "w") as f:
            json.dump(results, f, indent=4)
        self.logger.info(f"Results written to {path}")
        return path

    @staticmethod
    def summaryRows(results: List[Dict]) -> List[list]:
        rows: List[list] = []
        for entry in results:
            if "spacing" not in entry:
                rows.append([entry["frame"], "-", "-", "-"])
                continue
            rows.append([
                entry["frame"],
                float(entry["spacing"]),
                entry[Orientation.VERTICAL.value]["canonicalLines"],
                entry[Orientation.HORIZONTAL.value]["canonicalLines"],
            ])
        return rows
