import math

import pytest

from GridReconCV.GridLogic.GridReconstructor import GridReconstructor, Reconstruction
from GridReconCV.Types.Types import Endpoint, Orientation


@pytest.fixture
def reconstructor():
    return GridReconstructor()


def test_single_missing_line_is_placed_halfway(reconstructor):
    lines = [Endpoint(10, 10), Endpoint(90, 90)]
    assert reconstructor.interpolate(lines, 40.0, 100) == [Endpoint(50, 50)]


@pytest.mark.parametrize(
    "gap, expected",
    [(40, 0), (56, 0), (64, 1), (80, 1), (120, 2), (200, 4)],
)
def test_number_of_inserted_lines(reconstructor, gap, expected):
    lines = [Endpoint(0, 0), Endpoint(gap, gap)]
    assert len(reconstructor.interpolate(lines, 40.0, 300)) == expected


def test_inserted_lines_are_evenly_spaced(reconstructor):
    lines = [Endpoint(0, 0), Endpoint(120, 120)]
    assert reconstructor.interpolate(lines, 40.0, 300) == [Endpoint(40, 40), Endpoint(80, 80)]


def test_skew_is_interpolated_with_the_midpoint(reconstructor):
    lines = [Endpoint(10, 20), Endpoint(90, 100)]
    assert reconstructor.interpolate(lines, 40.0, 100) == [Endpoint(50, 60)]


def test_slope_not_skew_is_interpolated(reconstructor):
    # slopes 100/10 and 100/20 meet at 7.5, a skew of 13.33 around 57.5
    lines = [Endpoint(10, 20), Endpoint(90, 110)]
    assert reconstructor.interpolate(lines, 40.0, 100) == [Endpoint(51, 64)]


def test_axis_aligned_neighbour_gives_zero_skew(reconstructor):
    lines = [Endpoint(10, 10), Endpoint(86, 94)]
    assert reconstructor.interpolate(lines, 40.0, 100) == [Endpoint(50, 50)]


def test_half_ratios_round_away_from_zero(reconstructor):
    lines = [Endpoint(0, 0), Endpoint(100, 100)]
    assert reconstructor.interpolate(lines, 40.0, 300) == [Endpoint(33, 33), Endpoint(67, 67)]
    assert reconstructor.lineAt(2.5, 0.0) == Endpoint(3, 3)
    assert reconstructor.lineAt(-2.5, 0.0) == Endpoint(-3, -3)
    assert reconstructor.lineAt(10.0, 5.0) == Endpoint(8, 13)


def test_extrapolation_stops_after_leaving_the_image(reconstructor):
    assert reconstructor.extrapolate(Endpoint(10, 10), -40.0, 100) == [Endpoint(-30, -30)]
    assert reconstructor.extrapolate(Endpoint(90, 90), 40.0, 100) == [Endpoint(130, 130)]
    assert reconstructor.extrapolate(Endpoint(50, 50), 20.0, 100) == [
        Endpoint(70, 70),
        Endpoint(90, 90),
        Endpoint(110, 110),
    ]


def test_skewed_extrapolation_needs_both_ends_outside(reconstructor):
    lines = reconstructor.extrapolate(Endpoint(10, 30), -15.0, 100)
    assert lines == [Endpoint(-5, 15), Endpoint(-20, 0), Endpoint(-35, -15)]
    *inside, last = lines
    assert all(e.upper >= 0 for e in inside)
    assert last.lower < 0 and last.upper < 0


@pytest.mark.parametrize("spacing", [0.0, 0.5, -3.0, math.nan, math.inf])
def test_unusable_spacing_leaves_canonical_lines_alone(reconstructor, spacing):
    lines = [Endpoint(10, 10), Endpoint(90, 90)]
    result = reconstructor.reconstruct(lines, spacing, Orientation.VERTICAL, 100, 100)
    assert result == Reconstruction(canonical=lines)


def test_no_lines_gives_empty_reconstruction(reconstructor):
    result = reconstructor.reconstruct([], 40.0, Orientation.HORIZONTAL, 100, 100)
    assert result.allLines == []


def test_reconstruct_uses_the_orientation_extent(reconstructor):
    lines = [Endpoint(20, 20), Endpoint(60, 60)]
    result = reconstructor.reconstruct(lines, 40.0, Orientation.HORIZONTAL, 300, 100)

    assert result.interpolated == []
    assert result.leading == [Endpoint(-20, -20)]
    assert result.trailing == [Endpoint(100, 100)]
    assert result.allLines == lines + [Endpoint(-20, -20), Endpoint(100, 100)]


def test_canonical_lines_are_copied(reconstructor):
    lines = [Endpoint(20, 20)]
    result = reconstructor.reconstruct(lines, 40.0, Orientation.VERTICAL, 100, 100)
    result.canonical.append(Endpoint(0, 0))
    assert lines == [Endpoint(20, 20)]
