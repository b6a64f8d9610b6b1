from typing import Mapping

from .LineWalker import LineWalker
from ..Image.SampleGrid import SampleGrid
from ..Types.Types import *


class Compositor:
    """
    Draws grid lines onto an output grid.

    Attributes:
        channel (int): Channel set to 1.0 on every line pixel.
    """

    def __init__(self, channel: int = 0) -> None:
        self.channel: int = channel

    def draw(
        self,
        output: SampleGrid,
        lines: EndpointList,
        orientation: Orientation,
        width: int,
        height: int,
    ) -> None:
        samples = output.view()
        channel: int = self.channel

        def visit(x: int, y: int) -> bool:
            if output.isValidIndex(x, y):
                samples[y, x, channel] = 1.0
            return False

        for endpoint in lines:
            (x0, y0), (x1, y1) = orientation.segment(
                endpoint.lower, endpoint.upper, width, height
            )
            LineWalker.walk(x0, y0, x1, y1, visit)

    def compose(
        self,
        output: SampleGrid,
        linesByOrientation: Mapping[Orientation, EndpointList],
        width: int,
        height: int,
    ) -> SampleGrid:
        """
        Draw every line of every orientation onto `output` in place.

        Lines are anchored to the edges of a `width` x `height` source image.
        Pixels outside the output are skipped and overlapping lines simply
        saturate.

        Args:
            output (SampleGrid): Freshly allocated grid, at least the source size
                and with at least two channels.
            linesByOrientation (Mapping[Orientation, EndpointList]): Final lines.
            width (int): Source image width.
            height (int): Source image height.

        Returns:
            SampleGrid: `output`, for chaining.

        Raises:
            ValueError: If `output` is too small, has fewer than two channels or
                lacks the configured channel.
        """
        if output.width < width or output.height < height:
            raise ValueError(
                f"Output grid {output.width}x{output.height} is smaller than the source {width}x{height}"
            )
        if output.nrChannels < 2:
            raise ValueError("Output grid needs at least two channels")
        if not 0 <= self.channel < output.nrChannels:
            raise ValueError(
                f"Line channel {self.channel} is out of range for {output.nrChannels} channels"
            )

        for orientation, lines in linesByOrientation.items():
            self.draw(output, lines, orientation, width, height)
        return output
