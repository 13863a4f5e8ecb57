import math
import pytest

from neogeo.geometry import (
    Altitude,
    GeodesicReference,
    PolarCoordinate,
    Position,
    wgs84_inverse,
)
from neogeo.navigator import Navigator
from neogeo.ordinate import Axis, Ordinate


def angle_between(a, b):
    diff = abs(a - b) % 360
    return min(diff, 360 - diff)


@pytest.fixture
def sao_paulo():
    return Position(
        Ordinate.from_dms(23, 32, 52, "S", Axis.NORTH_SOUTH),
        Ordinate.from_dms(46, 38, 9, "W", Axis.EAST_WEST),
        label="SP",
    )


@pytest.fixture
def campinas():
    return Position(
        Ordinate.from_dms(22, 54, 21, "S", Axis.NORTH_SOUTH),
        Ordinate.from_dms(47, 3, 39, "W", Axis.EAST_WEST),
        label="CPS",
    )


def test_altitude_as_string():
    assert Altitude(760.5, "m").as_string() == "760.500 m"
    assert Altitude(5.0).as_string() == "  5.000 N/D"
    assert Altitude(math.nan, "ft").as_string() == "NaN ft"


def test_position_from_degrees_bounds_ordinates():
    pos = Position.from_degrees(95.0, 190.0)
    assert pos.latitude.degrees == 90.0
    assert pos.longitude.degrees == pytest.approx(-170.0)
    assert pos.latitude.axis is Axis.NORTH_SOUTH
    assert pos.longitude.axis is Axis.EAST_WEST
    assert pos.altitude is None
    assert pos.label is None


def test_position_as_string(sao_paulo):
    assert sao_paulo.as_string() == "SP at [23° 32’ 52” S  46° 38’ 09” W] "


def test_position_as_string_without_label():
    pos = Position.from_degrees(0.0, 0.0)
    assert pos.as_string() == "N/D at [00° 00’ 00” N  00° 00’ 00” E] "


def test_position_as_string_with_altitude():
    pos = Position.from_degrees(0.0, 0.0, Altitude(760.5, "m"), "X")
    assert pos.as_string() == "X at [00° 00’ 00” N  00° 00’ 00” E] 760.500 m"


def test_position_with_label(sao_paulo):
    renamed = sao_paulo.with_label("Sampa")
    assert renamed.label == "Sampa"
    assert renamed.latitude == sao_paulo.latitude
    assert sao_paulo.label == "SP"


def test_polar_coordinate_as_string():
    polar = PolarCoordinate(1234.5678, 90.0, "X")
    assert polar.as_string() == "X at [1,234.568 km  90° 00’ 00”]"
    assert PolarCoordinate(1.0, 0.0).as_string() == "N/D at [1.000 km  00° 00’ 00”]"


def test_polar_coordinate_bearing_is_normalized():
    assert PolarCoordinate(1.0, -90.0).bearing == 270.0
    assert PolarCoordinate(1.0, 450.0).bearing == 90.0


def test_polar_coordinate_with_label():
    polar = PolarCoordinate(10.0, 45.0)
    labelled = polar.with_label("Rhumb lines coordinate")
    assert labelled.label == "Rhumb lines coordinate"
    assert labelled.distance == 10.0
    assert labelled.bearing == 45.0
    assert polar.label is None


class TestWgs84Reference:
    def test_one_degree_along_equator(self):
        ref = wgs84_inverse(
            Position.from_degrees(0.0, 0.0), Position.from_degrees(0.0, 1.0)
        )
        assert isinstance(ref, GeodesicReference)
        assert ref.distance == pytest.approx(111.3195, abs=1e-3)
        assert ref.initial_bearing == pytest.approx(90.0)
        assert ref.final_bearing == pytest.approx(90.0)

    def test_one_degree_along_meridian(self):
        ref = wgs84_inverse(
            Position.from_degrees(0.0, 0.0), Position.from_degrees(1.0, 0.0)
        )
        assert ref.distance == pytest.approx(110.574, abs=1e-2)
        assert angle_between(ref.initial_bearing, 0.0) < 1e-9
        assert angle_between(ref.final_bearing, 0.0) < 1e-9

    def test_spherical_navigator_is_close_to_ellipsoid(self, sao_paulo, campinas):
        ref = wgs84_inverse(sao_paulo, campinas)
        navigator = Navigator()
        assert navigator.haversine_distance(sao_paulo, campinas) == pytest.approx(
            ref.distance, rel=1e-2
        )
        assert angle_between(
            navigator.initial_bearing(sao_paulo, campinas), ref.initial_bearing
        ) < 0.5
