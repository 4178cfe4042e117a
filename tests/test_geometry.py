"""Tests for pellet area and diameter conversions."""

import math

import pytest

from mucalc.core.geometry import area_from_diameter, diameter_from_area
from mucalc.errors import InvalidGeometry


def test_default_pellet_area():
    assert area_from_diameter(1.3, 45.0) == pytest.approx(0.938559020685955, rel=1e-12)


def test_normal_incidence():
    assert area_from_diameter(2.0) == pytest.approx(math.pi)


def test_round_trip():
    area = area_from_diameter(1.3, 30.0)
    assert diameter_from_area(area, 30.0) == pytest.approx(1.3)


@pytest.mark.parametrize("diameter,angle", [(0.0, 0.0), (-1.0, 0.0), (1.0, 90.0), (1.0, -95.0)])
def test_invalid_geometry(diameter, angle):
    with pytest.raises(InvalidGeometry):
        area_from_diameter(diameter, angle)


def test_invalid_area():
    with pytest.raises(InvalidGeometry):
        diameter_from_area(0.0, 45.0)
