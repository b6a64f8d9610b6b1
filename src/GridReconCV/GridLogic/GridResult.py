from dataclasses import dataclass, field

from .GridReconstructor import Reconstruction
from ..Image.SampleGrid import SampleGrid
from ..Types.Types import *


def _pairs(lines: EndpointList) -> list[list[int]]:
    return [[int(e.lower), int(e.upper)] for e in lines]


@dataclass
class OrientationResult:
    orientation: Orientation
    rawCount: int
    reconstruction: Reconstruction
    differences: list[float] = field(default_factory=list)

    @property
    def canonical(self) -> EndpointList:
        return self.reconstruction.canonical

    @property
    def allLines(self) -> EndpointList:
        return self.reconstruction.allLines

    def toDict(self, verbose: bool = False) -> dict:
        entry: dict = {
            "canonicalLines": len(self.reconstruction.canonical),
            "interpolatedLines": len(self.reconstruction.interpolated),
            "extrapolatedLines": len(self.reconstruction.leading)
            + len(self.reconstruction.trailing),
        }
        if verbose:
            entry.update(
                {
                    "rawDetections": self.rawCount,
                    "midpointDifferences": [float(d) for d in self.differences],
                    "canonical": _pairs(self.reconstruction.canonical),
                    "interpolated": _pairs(self.reconstruction.interpolated),
                    "leading": _pairs(self.reconstruction.leading),
                    "trailing": _pairs(self.reconstruction.trailing),
                }
            )
        return entry


@dataclass
class GridResult:
    """Everything the detector produced for one image."""

    width: int
    height: int
    threshold: float
    spacing: float
    greyscale: SampleGrid
    mask: SampleGrid
    overlay: SampleGrid
    orientations: dict[Orientation, OrientationResult]

    def linesByOrientation(self) -> dict[Orientation, EndpointList]:
        return {o: r.allLines for o, r in self.orientations.items()}

    def toDict(self, verbose: bool = False) -> dict:
        entry: dict = {
            "width": self.width,
            "height": self.height,
            "spacing": float(self.spacing),
        }
        if verbose:
            entry["threshold"] = float(self.threshold)
        for orientation, result in self.orientations.items():
            entry[orientation.value] = result.toDict(verbose)
        return entry
