# utils/geo_utils.py

import math

from utils.exceptions import LocationOutOfRange, MalformedInput, OfficeNotConfigured

EARTH_RADIUS_KM = 6371


def distance_in_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two coordinates (haversine, spherical Earth)."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c * 1000


def _unset(value: float) -> bool:
    return value is None or value == 0 or math.isnan(value)


def check_coordinates(lat: float, lng: float) -> None:
    """Reject coordinates that are not finite or fall outside the valid ranges."""
    if lat is None or lng is None or not (math.isfinite(lat) and math.isfinite(lng)):
        raise MalformedInput("Location coordinates must be finite numbers")
    if not -90 <= lat <= 90 or not -180 <= lng <= 180:
        raise MalformedInput(f"Invalid location ({lat}, {lng})")


def validate_location(lat: float, lng: float, office_lat: float, office_lng: float, max_distance: float) -> float:
    """
    Check that (lat, lng) lies within ``max_distance`` meters of the office.

    Returns the measured distance. Raises OfficeNotConfigured when the office
    coordinate is unset, MalformedInput for an impossible coordinate and
    LocationOutOfRange when too far away.
    """
    check_coordinates(lat, lng)
    if _unset(office_lat) or _unset(office_lng):
        raise OfficeNotConfigured()

    distance = distance_in_meters(lat, lng, office_lat, office_lng)
    if distance > max_distance:
        raise LocationOutOfRange(round(distance), max_distance)
    return distance
