# tests/conftest.py
import sys
from pathlib import Path

import numpy as np
import pytest

# Add src/ to sys.path so "GridReconCV" can be imported without installing
SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from GridReconCV.Image.SampleGrid import SampleGrid  # noqa: E402


def paperImage(
    width: int = 100,
    height: int = 100,
    verticalLines: tuple[int, ...] = (),
    horizontalLines: tuple[int, ...] = (),
    thickness: int = 3,
) -> SampleGrid:
    """White single channel page with black ruled lines centred on the given coordinates."""
    page = np.ones((height, width), dtype=np.float32)
    half = thickness // 2
    for x in verticalLines:
        page[:, max(0, x - half): x + half + 1] = 0.0
    for y in horizontalLines:
        page[max(0, y - half): y + half + 1, :] = 0.0
    return SampleGrid.fromArray(page)


@pytest.fixture
def makePaper():
    return paperImage
