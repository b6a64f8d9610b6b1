from GridReconCV.App.App import App


class Minimal(App):

    def execute(self) -> None:
        """
        Reconstruct the grid of every image and keep only the essentials.

        Saves the grid overlay per image and writes `gridOutput.json` with the
        estimated spacing and line counts per orientation.
        """
        results = self.processFrames(verbose=False, visual=False)
        self.saveResults(results)
