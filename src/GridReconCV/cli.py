import click
from GridReconCV.App.App import App
from GridReconCV.App.Minimal import Minimal
from GridReconCV.App.Verbose import Verbose
from GridReconCV.App.Visual import Visual
from GridReconCV.App.Maximal import Maximal
from GridReconCV.Image.ImageSource import ImageSource


@click.group()
def cli():
    """Main CLI entry point for grid reconstruction.

    This group allows running different output modes via subcommands.
    """
    pass

# --- Sub-function implementations ---
def runMinimal(source: ImageSource, outputPath: str, config: str | None):
    """Run grid reconstruction in minimal mode.

    Saves the grid overlays and a JSON summary of spacing and line counts.

    Args:
        source (ImageSource): Image file or folder to process.
        outputPath (str): Directory where results will be saved.
        config (str | None): Optional path to JSON configuration file with detection parameters.
    """
    click.echo("Running in minimal mode")
    app: App = Minimal(source, outputPath, config)
    app.execute()

def runVerbose(source: ImageSource, outputPath: str, config: str | None):
    """Run grid reconstruction in verbose mode.

    Records every line list, the threshold and the raw detection counts.

    Args:
        source (ImageSource): Image file or folder to process.
        outputPath (str): Directory where results and logs will be saved.
        config (str | None): Optional path to JSON configuration file with detection parameters.
    """
    click.echo("Running in verbose mode")
    app: App = Verbose(source, outputPath, config)
    app.execute()

def showVisual(source: ImageSource, outputPath: str, config: str | None):
    """Run grid reconstruction and save diagnostic visuals.

    Args:
        source (ImageSource): Image file or folder to process.
        outputPath (str): Directory where any results will be saved.
        config (str | None): Optional path to JSON configuration file with detection parameters.
    """
    click.echo("Saving visuals")
    app: App = Visual(source, outputPath, config)
    app.execute()

def runAll(source: ImageSource, outputPath: str, config: str | None):
    """Run grid reconstruction with verbose output and visuals.

    Args:
        source (ImageSource): Image file or folder to process.
        outputPath (str): Directory where results will be saved.
        config (str | None): Optional path to JSON configuration file with detection parameters.
    """
    click.echo("Running with verbose output and visuals")
    app: App = Maximal(source, outputPath, config)
    app.execute()

# --- Dispatcher command with flags ---
HELP_TEXT = """Reconstruct the ruled grid of photographed graph paper.

\b
Arguments:
  inputPath   Path to an image file or a folder of images
  outputPath  Path to save overlays and JSON results

\b
Example configuration file format:
  {
      "nrBins": 1000,
      "maxStreak": 10,
      "maxSkew": null,
      "clusterTolerance": 1,
      "spacingTolerance": 10.0,
      "blurKernel": "gaussian",
      "blurKernelSize": 3,
      "blurSigma": 1.0,
      "lineChannel": 0,
      "maxDimension": 400
  }
"""
@cli.command(help=HELP_TEXT)
@click.option("-m", "--minimal", is_flag=True, help="Run with overlays and a JSON summary")
@click.option("-v", "--verbose", is_flag=True, help="Run with every line list in the JSON output")
@click.option("-vi", "--visual", is_flag=True, help="Save diagnostic visuals")
@click.option("-a", "--all", "all_modes", is_flag=True, help="Run with verbose + visuals")
@click.option(
    "-c", "--config",
    type=click.Path(exists=True, dir_okay=False),
    help="Optional JSON config file (see format above)"
)
@click.argument('inputPath')
@click.argument('outputPath')
def run(minimal, verbose, visual, all_modes, config: str, inputpath: str, outputpath: str):
    """Run the program with different modes."""
    try:
        source: ImageSource = ImageSource(inputpath)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="INPUTPATH")

    # If no flags are provided, default to minimal
    if not any([minimal, verbose, visual, all_modes]):
        runMinimal(source, outputpath, config)
        return

    # Run based on flags
    if minimal:
        runMinimal(source, outputpath, config)
    if verbose:
        runVerbose(ImageSource(inputpath), outputpath, config)
    if visual:
        showVisual(ImageSource(inputpath), outputpath, config)
    if all_modes:
        runAll(ImageSource(inputpath), outputpath, config)

def main() -> None:
    cli()

if __name__ == "__main__":
    main()
