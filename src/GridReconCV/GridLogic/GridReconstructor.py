import math
from dataclasses import dataclass, field
from typing import Final

from ..Types.Types import *

# Spacings below one pixel cannot describe a grid and would make extrapolation
# crawl (or never terminate when zero).
MIN_SPACING: Final[float] = 1.0


@dataclass
class Reconstruction:
    """Lines of one orientation after interpolation and extrapolation."""

    canonical: EndpointList = field(default_factory=list)
    interpolated: EndpointList = field(default_factory=list)
    leading: EndpointList = field(default_factory=list)
    trailing: EndpointList = field(default_factory=list)

    @property
    def allLines(self) -> EndpointList:
        return self.canonical + self.interpolated + self.leading + self.trailing


class GridReconstructor:
    """
    Fills in grid lines that the scanner missed.

    A line is described by its midpoint (mean of `lower` and `upper`) and its
    slope across the image. Between two detected neighbours whose midpoints
    are several periods apart, lines are interpolated; beyond the first and
    last detected lines, lines are extrapolated until they leave the image.

    The slope of a line is `span / (upper - lower)`. An axis aligned line
    (`upper == lower`) has infinite slope and is rebuilt with zero skew, as is
    an interpolated line whose slope lands exactly on zero. Endpoints are
    rebuilt as `mid -/+ span / (2 * slope)` and rounded half away from zero.
    """

    @staticmethod
    def isUsableSpacing(spacing: float) -> bool:
        return math.isfinite(spacing) and spacing >= MIN_SPACING

    @staticmethod
    def roundHalfAway(value: float) -> int:
        return int(math.copysign(math.floor(abs(value) + 0.5), value))

    @staticmethod
    def slopeOf(line: Endpoint, span: int) -> float:
        if line.skew == 0:
            return math.inf
        return span / line.skew

    @staticmethod
    def skewOf(slope: float, span: int) -> float:
        if slope == 0.0 or math.isinf(slope):
            return 0.0
        return span / slope

    @classmethod
    def lineAt(cls, mid: float, skew: float) -> Endpoint:
        return Endpoint(cls.roundHalfAway(mid - skew / 2.0), cls.roundHalfAway(mid + skew / 2.0))

    def interpolate(self, lines: EndpointList, spacing: float, span: int) -> EndpointList:
        """
        Insert the lines believed missing between each adjacent pair.

        For neighbours L1, L2 the number of missing lines is
        round((L2.mid - L1.mid) / spacing) - 1, halves rounding up. Missing line
        k of n sits at t = k / (n + 1), with midpoint and slope interpolated
        linearly.

        Args:
            lines (EndpointList): Canonical lines sorted by `lower`.
            spacing (float): Estimated grid period.
            span (int): Length of a line across the image.

        Returns:
            EndpointList: Interpolated lines in order of insertion.
        """
        if not self.isUsableSpacing(spacing):
            return []

        interpolated: EndpointList = []
        for first, second in zip(lines, lines[1:]):
            gap: int = self.roundHalfAway((second.midpoint - first.midpoint) / spacing) - 1
            if gap <= 0:
                continue
            slope0: float = self.slopeOf(first, span)
            slope1: float = self.slopeOf(second, span)
            for k in range(1, gap + 1):
                t: float = k / (gap + 1)
                mid: float = (1.0 - t) * first.midpoint + t * second.midpoint
                slope: float = (1.0 - t) * slope0 + t * slope1
                interpolated.append(self.lineAt(mid, self.skewOf(slope, span)))
        return interpolated

    def extrapolate(self, line: Endpoint, step: float, extent: int) -> EndpointList:
        """
        Repeat a line every `step` pixels until it leaves the image.

        The line keeps its own slope. The loop ends with, and includes, the
        first line whose endpoints both lie outside [0, extent - 1] on the same
        side; every step moves the midpoint by |step| >= MIN_SPACING, so it
        always terminates.

        Args:
            line (Endpoint): Outermost detected line.
            step (float): Signed midpoint increment (negative walks backwards).
            extent (int): Number of valid endpoint coordinates.

        Returns:
            EndpointList: Extrapolated lines ordered away from `line`.
        """
        if not self.isUsableSpacing(abs(step)):
            return []

        extrapolated: EndpointList = []
        mid: float = line.midpoint
        while True:
            mid += step
            candidate: Endpoint = self.lineAt(mid, line.skew)
            extrapolated.append(candidate)
            below: bool = candidate.lower < 0 and candidate.upper < 0
            above: bool = candidate.lower > extent - 1 and candidate.upper > extent - 1
            if below or above:
                return extrapolated

    def reconstruct(
        self,
        lines: EndpointList,
        spacing: float,
        orientation: Orientation,
        width: int,
        height: int,
    ) -> Reconstruction:
        result: Reconstruction = Reconstruction(canonical=list(lines))
        if not lines or not self.isUsableSpacing(spacing):
            return result

        span: int = orientation.lineSpan(width, height)
        extent: int = orientation.scanExtent(width, height)
        result.interpolated = self.interpolate(lines, spacing, span)
        result.leading = self.extrapolate(lines[0], -spacing, extent)
        result.trailing = self.extrapolate(lines[-1], spacing, extent)
        return result
