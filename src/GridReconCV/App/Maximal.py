from GridReconCV.App.App import App
from GridReconCV.Util.VisualUtil import VisualUtils


class Maximal(App):

    def execute(self) -> None:
        """Verbose JSON output and diagnostic visuals combined."""
        results = self.processFrames(verbose=True, visual=True)
        self.saveResults(results)
        VisualUtils.printTable(
            self.summaryRows(results),
            headers=["frame", "spacing", "vertical", "horizontal"],
        )
