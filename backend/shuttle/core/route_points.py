"""Route Points — parse coordinates out of GraphHopper Maps URLs.

Invariants:
    - A point is the string "lat,lng"; labels after "_" are dropped
    - parse_point() rejects |lat| > 90 and |lng| > 180
    - Malformed URLs yield no points (never raise)
"""

from urllib.parse import parse_qs, unquote, urlsplit

from shuttle.core.domain_types import TravelProfile

Point = tuple[float, float]


def extract_points_from_url(url: str) -> list[str]:
    """Every `point` query param of a GraphHopper Maps URL, labels stripped."""
    try:
        query = urlsplit(url).query
    except ValueError:
        return []
    raw_points = parse_qs(query, keep_blank_values=False).get("point", [])
    points = []
    for raw in raw_points:
        coords = unquote(raw).split("_", 1)[0].strip()
        if coords:
            points.append(coords.replace(" ", ""))
    return points


def extract_profile_from_url(url: str, default: TravelProfile = TravelProfile.CAR) -> TravelProfile:
    try:
        values = parse_qs(urlsplit(url).query).get("profile", [])
    except ValueError:
        return default
    for value in values:
        try:
            return TravelProfile(value.strip().lower())
        except ValueError:
            continue
    return default


def parse_point(point: str) -> Point:
    """'lat,lng' -> (lat, lng). Raises ValueError on bad input."""
    parts = point.split(",")
    if len(parts) != 2:
        raise ValueError(f"point must be 'lat,lng', got {point!r}")
    lat, lng = float(parts[0]), float(parts[1])
    if not -90.0 <= lat <= 90.0:
        raise ValueError(f"latitude out of range: {lat}")
    if not -180.0 <= lng <= 180.0:
        raise ValueError(f"longitude out of range: {lng}")
    return lat, lng
