"""Great-circle distance between customer and store locations."""

from __future__ import annotations

from math import atan2, cos, isfinite, radians, sin, sqrt
from typing import TYPE_CHECKING

from store_delivery.errors import InvalidCoordinate

if TYPE_CHECKING:
    from store_delivery.models import GeoPoint

# Mean radius of Earth in kilometres.
EARTH_RADIUS_KM = 6371.0


def validate_coordinates(latitude: float, longitude: float) -> None:
    """Raise InvalidCoordinate unless the pair is a finite, in-range lat/lon."""
    for label, value, limit in (("latitude", latitude, 90.0), ("longitude", longitude, 180.0)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidCoordinate(f"{label} must be a number, got {value!r}")
        if not isfinite(value):
            raise InvalidCoordinate(f"{label} must be finite, got {value!r}")
        if not -limit <= value <= limit:
            raise InvalidCoordinate(f"{label} {value} out of range [-{limit:g}, {limit:g}]")


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the great-circle distance in km between two lat/lon points."""
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push a hair above 1 for antipodal points.
    a = min(a, 1.0)
    return EARTH_RADIUS_KM * 2 * atan2(sqrt(a), sqrt(1 - a))


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Return the distance in km between two validated points."""
    return haversine(a.latitude, a.longitude, b.latitude, b.longitude)
