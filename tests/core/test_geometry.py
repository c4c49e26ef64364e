import math

import pytest

from ptgrading.core.entities import Landmark
from ptgrading.core.service.geometry import (
    EARTH_RADIUS_METERS,
    angle_degrees,
    haversine_distance_meters,
    line_angle_from_vertical,
    planar_distance,
    segment_angle_from_vertical,
)


def test_right_angle():
    assert angle_degrees((1, 0), (0, 0), (0, 1)) == pytest.approx(90.0)


def test_straight_line_is_180():
    assert angle_degrees((0, 0.2), (0, 0.3), (0, 0.4)) == pytest.approx(180.0)


def test_folded_back_is_zero():
    assert angle_degrees((1, 0), (0, 0), (2, 0)) == pytest.approx(0.0)


def test_accepts_landmarks():
    a = Landmark(x=0.0, y=1.0, visibility=0.9)
    b = Landmark(x=0.0, y=0.0, visibility=0.9)
    c = Landmark(x=1.0, y=1.0, visibility=0.9)
    assert angle_degrees(a, b, c) == pytest.approx(45.0)


@pytest.mark.parametrize(
    "a, b, c",
    [
        ((0.5, 0.5), (0.5, 0.5), (0.5, 0.5)),
        ((0.5, 0.5), (0.5, 0.5), (0.1, 0.9)),
        (None, (0, 0), (1, 1)),
        ((float("nan"), 0), (0, 0), (1, 1)),
        ((float("inf"), 0), (0, 0), (1, 1)),
        (("x",), (0, 0), (1, 1)),
    ],
)
def test_degenerate_input_returns_neutral_angle(a, b, c):
    assert angle_degrees(a, b, c) == 180.0


def test_angle_is_always_within_range():
    points = [(0, 0), (1, 0), (0, 1), (-1, -1), (1e-12, 0), (1e6, -1e6), (0.3, 0.3)]
    for a in points:
        for b in points:
            for c in points:
                assert 0.0 <= angle_degrees(a, b, c) <= 180.0


def test_line_angle_from_vertical():
    assert line_angle_from_vertical((0.5, 0.2), (0.5, 0.8)) == pytest.approx(0.0)
    assert line_angle_from_vertical((0.2, 0.5), (0.8, 0.5)) == pytest.approx(90.0)
    assert line_angle_from_vertical((0.0, 0.0), (1.0, 1.0)) == pytest.approx(45.0)
    # The line is undirected.
    assert line_angle_from_vertical((0.5, 0.8), (0.6, 0.2)) == pytest.approx(
        line_angle_from_vertical((0.6, 0.2), (0.5, 0.8))
    )


def test_line_angle_degenerate_is_neutral():
    assert line_angle_from_vertical((0.5, 0.5), (0.5, 0.5)) == 0.0
    assert line_angle_from_vertical(None, (0.5, 0.5)) == 0.0


def test_segment_angle_unusable_is_none():
    assert segment_angle_from_vertical((0.5, 0.5), (0.5, 0.5)) is None
    assert segment_angle_from_vertical((float("nan"), 0.2), (0.5, 0.8)) is None
    assert segment_angle_from_vertical(None, (0.5, 0.8)) is None
    assert segment_angle_from_vertical((0.5, 0.2), (0.5, 0.8)) == pytest.approx(0.0)


def test_planar_distance():
    assert planar_distance((0, 0), (3, 4)) == pytest.approx(5.0)
    assert planar_distance(None, (3, 4)) == 0.0


def test_haversine_zero_for_identical_points():
    assert haversine_distance_meters(38.8977, -77.0365, 38.8977, -77.0365) == 0.0


def test_haversine_is_symmetric():
    pairs = [
        (38.8977, -77.0365, 38.8895, -77.0353),
        (51.5074, -0.1278, 48.8566, 2.3522),
        (-33.8688, 151.2093, 35.6762, 139.6503),
        (0.0, 179.9, 0.0, -179.9),
    ]
    for lat1, lon1, lat2, lon2 in pairs:
        assert haversine_distance_meters(lat1, lon1, lat2, lon2) == haversine_distance_meters(
            lat2, lon2, lat1, lon1
        )


def test_haversine_one_degree_of_latitude():
    expected = EARTH_RADIUS_METERS * math.pi / 180
    assert haversine_distance_meters(0.0, 0.0, 1.0, 0.0) == pytest.approx(expected)


def test_haversine_non_finite_input():
    assert haversine_distance_meters(float("nan"), 0.0, 1.0, 0.0) == 0.0
