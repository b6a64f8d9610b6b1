import glob
import json
import os

import pytest
from click.testing import CliRunner

from GridReconCV.cli import cli
from GridReconCV.Image.ImageCodec import ImageCodec
from conftest import paperImage


@pytest.fixture
def pageFolder(tmp_path):
    folder = tmp_path / "pages"
    page = paperImage(60, 60, verticalLines=(10, 30, 50), horizontalLines=(10, 30, 50))
    ImageCodec.saveImage(page, str(folder / "page.png"))
    return folder


def loadResults(outputPath):
    found = glob.glob(os.path.join(outputPath, "*", "gridOutput.json"))
    assert len(found) == 1
    with open(found[0]) as f:
        return json.load(f), os.path.dirname(found[0])


def test_minimal_run_writes_overlay_and_summary(pageFolder, tmp_path):
    output = str(tmp_path / "out")
    result = CliRunner().invoke(cli, ["run", "-m", str(pageFolder), output])

    assert result.exit_code == 0, result.output
    assert "minimal" in result.output
    entries, runFolder = loadResults(output)
    assert len(entries) == 1
    assert entries[0]["detection"] is True
    assert entries[0]["source"].endswith("page.png")
    assert "threshold" not in entries[0]
    assert os.path.exists(os.path.join(runFolder, "frame_0", "grid", "frame_0_grid.png"))


def test_all_mode_adds_visuals_and_line_lists(pageFolder, tmp_path):
    output = str(tmp_path / "out")
    result = CliRunner().invoke(cli, ["run", "-a", str(pageFolder), output])

    assert result.exit_code == 0, result.output
    entries, runFolder = loadResults(output)
    entry = entries[0]
    assert "threshold" in entry
    assert "canonical" in entry["vertical"]
    frameFolder = os.path.join(runFolder, "frame_0")
    assert entry["pathToVisuals"].endswith("frame_0")
    assert os.path.exists(os.path.join(frameFolder, "diagnostics", "frame_0_mask.png"))
    assert os.path.exists(os.path.join(frameFolder, "diagnostics", "frame_0_vertical.png"))
    assert os.path.exists(os.path.join(frameFolder, "plots", "frame_0_histogram.png"))


def test_config_file_is_applied(pageFolder, tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"maxStreak": 100}))
    output = str(tmp_path / "out")
    result = CliRunner().invoke(cli, ["run", "-v", "-c", str(config), str(pageFolder), output])

    assert result.exit_code == 0, result.output
    entries, _ = loadResults(output)
    # every candidate passes when the streak bound exceeds the image size
    assert entries[0]["vertical"]["rawDetections"] == 58 * 58


def test_unreadable_image_is_recorded(tmp_path):
    folder = tmp_path / "pages"
    folder.mkdir()
    (folder / "broken.png").write_bytes(b"not a png")
    output = str(tmp_path / "out")
    result = CliRunner().invoke(cli, ["run", str(folder), output])

    assert result.exit_code == 0, result.output
    entries, _ = loadResults(output)
    assert entries == [{"frame": 0, "source": str(folder / "broken.png"), "detection": False}]


def test_invalid_input_path(tmp_path):
    result = CliRunner().invoke(cli, ["run", str(tmp_path / "missing"), str(tmp_path / "out")])
    assert result.exit_code != 0
    assert "Invalid path" in result.output
