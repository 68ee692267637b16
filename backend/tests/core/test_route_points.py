"""Route Points — GraphHopper Maps URL parsing and coordinate validation."""

import pytest

from shuttle.core.domain_types import TravelProfile
from shuttle.core.route_points import (
    extract_points_from_url,
    extract_profile_from_url,
    parse_point,
)

MAPS_URL = (
    "https://graphhopper.com/maps/?point=-23.89,29.45_Current+Location"
    "&point=-29.86,31.00_Durban&profile=car"
)


def test_extracts_points_and_drops_labels():
    assert extract_points_from_url(MAPS_URL) == ["-23.89,29.45", "-29.86,31.00"]


def test_extracts_percent_encoded_points():
    url = "https://graphhopper.com/maps/?point=-26.2041%2C28.0473&point=-26.2151%2C28.0567"
    assert extract_points_from_url(url) == ["-26.2041,28.0473", "-26.2151,28.0567"]


def test_url_without_points():
    assert extract_points_from_url("https://graphhopper.com/maps/") == []


def test_garbage_url_yields_no_points():
    assert extract_points_from_url("not a url at all") == []


def test_profile_from_url():
    url = "https://graphhopper.com/maps/?point=1,1&point=2,2&profile=bike"
    assert extract_profile_from_url(url) is TravelProfile.BIKE


def test_unknown_profile_falls_back_to_default():
    url = "https://graphhopper.com/maps/?point=1,1&profile=hovercraft"
    assert extract_profile_from_url(url) is TravelProfile.CAR


def test_parse_point():
    assert parse_point("-26.2041,28.0473") == (-26.2041, 28.0473)


@pytest.mark.parametrize("bad", ["", "1", "1,2,3", "a,b", "91,0", "0,181", "-90.1,10"])
def test_parse_point_rejects_bad_input(bad):
    with pytest.raises(ValueError):
        parse_point(bad)
