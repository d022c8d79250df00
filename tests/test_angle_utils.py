import math

import pytest

from ds_modules.angle_utils import cal_angle, midpoint
from ds_modules.pose_types import Point2D


@pytest.mark.parametrize(
    "a, b, c, expected",
    [
        ((1, 0), (0, 0), (0, 1), 90.0),
        ((1, 0), (0, 0), (-1, 0), 180.0),
        ((1, 0), (0, 0), (2, 0), 0.0),
        ((1, 0), (0, 0), (1, 1), 45.0),
    ],
)
def test_cal_angle(a, b, c, expected):
    assert cal_angle(a, b, c) == pytest.approx(expected)


def test_cal_angle_accepts_point2d():
    assert cal_angle(Point2D(0.5, 0.2), Point2D(0.5, 0.5), Point2D(0.8, 0.5)) == pytest.approx(90.0)


def test_cal_angle_is_symmetric_in_rays():
    a, b, c = (0.1, 0.7), (0.4, 0.4), (0.9, 0.6)
    assert cal_angle(a, b, c) == pytest.approx(cal_angle(c, b, a))


@pytest.mark.parametrize(
    "a, b, c",
    [
        ((0.5, 0.5), (0.5, 0.5), (0.7, 0.1)),
        ((0.2, 0.3), (0.5, 0.5), (0.5, 0.5)),
        ((0.5, 0.5), (0.5, 0.5), (0.5, 0.5)),
    ],
)
def test_cal_angle_degenerate_returns_nan(a, b, c):
    assert math.isnan(cal_angle(a, b, c))


def test_midpoint():
    mid = midpoint(Point2D(0.2, 0.4), Point2D(0.6, 0.8))
    assert mid == (pytest.approx(0.4), pytest.approx(0.6))
    assert isinstance(mid, Point2D)
