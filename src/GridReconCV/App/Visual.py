from GridReconCV.App.App import App


class Visual(App):

    def execute(self) -> None:
        """
        Reconstruct the grid of every image and save diagnostic visuals.

        Per image this adds the binary mask, one overlay per orientation
        (detected lines green, reconstructed lines red), the histogram with the
        threshold marked and a plot of the pooled midpoint differences.
        """
        results = self.processFrames(verbose=False, visual=True)
        self.saveResults(results)
