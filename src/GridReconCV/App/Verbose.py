from GridReconCV.App.App import App
from GridReconCV.Util.VisualUtil import VisualUtils


class Verbose(App):

    def execute(self) -> None:
        """
        Reconstruct the grid of every image and record every intermediate value.

        On top of the minimal output, each JSON entry carries the Otsu threshold,
        raw detection counts, midpoint differences and the canonical,
        interpolated and extrapolated line lists of both orientations. A summary
        table is printed once all images are processed.
        """
        results = self.processFrames(verbose=True, visual=False)
        self.saveResults(results)
        VisualUtils.printTable(
            self.summaryRows(results),
            headers=["frame", "spacing", "vertical", "horizontal"],
        )
