import json

import numpy as np
import pytest

from GridReconCV.GridLogic.GridDetector import GridDetector
from GridReconCV.Image.SampleGrid import SampleGrid
from GridReconCV.Types.Types import Endpoint, Orientation


@pytest.fixture
def detector():
    return GridDetector()


def test_extrapolates_beyond_a_complete_vertical_ruling(detector, makePaper):
    result = detector.execute(makePaper(verticalLines=(10, 50, 90)))
    vertical = result.orientations[Orientation.VERTICAL]
    horizontal = result.orientations[Orientation.HORIZONTAL]

    assert 0.0 < result.threshold < 1.0
    assert vertical.canonical == [Endpoint(10, 10), Endpoint(50, 50), Endpoint(90, 90)]
    assert vertical.differences == pytest.approx([40.0, 40.0])
    assert result.spacing == pytest.approx(40.0)
    assert vertical.reconstruction.interpolated == []
    assert vertical.reconstruction.leading == [Endpoint(-30, -30)]
    assert vertical.reconstruction.trailing == [Endpoint(130, 130)]
    assert horizontal.allLines == []


def test_overlay_marks_lines_on_the_greyscale_copy(detector, makePaper):
    page = makePaper(verticalLines=(10, 50, 90))
    result = detector.execute(page)
    overlay = result.overlay.view()

    assert result.overlay.nrChannels == 3
    assert np.all(overlay[:, 10, 0] == 1.0)
    assert not overlay[:, 10, 1].any()
    np.testing.assert_array_equal(overlay[:, 30, :], 1.0)
    np.testing.assert_array_equal(result.greyscale.view(), page.view())


def test_missing_line_is_recovered_from_the_other_orientation(detector, makePaper):
    page = makePaper(verticalLines=(10, 90), horizontalLines=(10, 50, 90))
    result = detector.execute(page)
    vertical = result.orientations[Orientation.VERTICAL]
    horizontal = result.orientations[Orientation.HORIZONTAL]

    assert len(vertical.canonical) == 2
    assert len(horizontal.canonical) == 3
    assert result.spacing == pytest.approx(40.0, abs=1.5)

    interpolated = vertical.reconstruction.interpolated
    assert len(interpolated) == 1
    assert abs(interpolated[0].midpoint - 50.0) <= 2.0
    assert horizontal.reconstruction.interpolated == []


def test_blank_page_has_no_lines(detector):
    blank = SampleGrid.fromArray(np.full((40, 40), 0.8, dtype=np.float32))
    result = detector.execute(blank)

    assert result.threshold == 0.0
    assert np.all(result.mask.data == 1.0)
    assert result.spacing == 40.0
    assert all(not r.allLines for r in result.orientations.values())
    np.testing.assert_allclose(result.overlay.view(), 0.8, rtol=1e-6)


def test_colour_input_is_reduced_to_greyscale(detector, makePaper):
    page = makePaper(verticalLines=(10, 50, 90))
    colour = SampleGrid.fromArray(np.dstack([page.plane(0)] * 3))
    result = detector.execute(colour)

    assert result.greyscale.nrChannels == 1
    assert len(result.orientations[Orientation.VERTICAL].canonical) == 3


def test_result_dictionary(detector, makePaper):
    result = detector.execute(makePaper(verticalLines=(10, 50, 90)))

    brief = result.toDict()
    assert brief["spacing"] == pytest.approx(40.0)
    assert "threshold" not in brief
    assert brief["vertical"] == {"canonicalLines": 3, "interpolatedLines": 0, "extrapolatedLines": 2}

    full = result.toDict(verbose=True)
    assert full["vertical"]["leading"] == [[-30, -30]]
    assert full["vertical"]["rawDetections"] >= 3
    assert full["horizontal"]["canonical"] == []
    json.dumps(full)


def test_config_overrides_known_parameters(tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({
        "maxStreak": 4,
        "blurKernel": "gaussian",
        "blurKernelSize": 5,
        "outputPath": "elsewhere",
        "logger": "not a logger",
        "notAParameter": True,
    }))
    detector = GridDetector(str(config))

    assert detector.maxStreak == 4
    assert detector.blurKernel == "gaussian"
    assert detector.blurKernelSize == 5
    assert not hasattr(detector, "notAParameter")
    assert not hasattr(detector, "outputPath")


def test_config_cannot_replace_methods_or_the_logger(tmp_path, makePaper):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"execute": 1, "loadConfig": None, "logger": "x", "nrBins": 256}))
    detector = GridDetector(str(config))

    assert detector.nrBins == 256
    assert callable(detector.execute)
    assert callable(detector.loadConfig)
    assert detector.logger.name == "gridLogger"
    assert len(detector.execute(makePaper(verticalLines=(50,))).orientations) == 2


def test_config_must_be_an_object(tmp_path):
    config = tmp_path / "config.json"
    config.write_text("[1, 2, 3]")
    with pytest.raises(ValueError):
        GridDetector(str(config))


def test_smoothing_prefilter(detector, makePaper):
    page = makePaper(verticalLines=(50,))
    detector.blurKernel = "box"
    grey, smoothed = detector.preProcess(page)

    assert grey.get(50, 50) == 0.0
    assert smoothed.get(50, 50) == pytest.approx(0.0)
    assert smoothed.get(52, 50) == pytest.approx(2.0 / 3.0)


def test_bad_line_channel_is_reported(detector, makePaper):
    detector.lineChannel = 3
    with pytest.raises(ValueError):
        detector.execute(makePaper(verticalLines=(50,)))


def test_per_image_log_file(detector, makePaper, tmp_path):
    logs = tmp_path / "frame_7" / "logs"
    detector.execute(makePaper(verticalLines=(50,)), frameCount=7, logPath=str(logs))
    assert (logs / "gridLogger7.log").exists()
