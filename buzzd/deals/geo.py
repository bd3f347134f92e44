from __future__ import annotations

import math
from typing import Callable

from .models import Establishment, UserPosition

EARTH_RADIUS_KM = 6371.0
_WALKING_MINUTES_PER_KM = 12


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in km, rounded to 2 decimals."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_KM * c, 2)


def distance_fn(position: UserPosition | None) -> Callable[[Establishment], float | None]:
    """Build the per-establishment distance callback used by the ranker."""

    def _distance(establishment: Establishment) -> float | None:
        if position is None:
            return None
        return haversine_km(position.lat, position.lng, establishment.latitude, establishment.longitude)

    return _distance


def format_distance(km: float) -> str:
    if km < 1:
        return f"{round(km * 1000)}m"
    return f"{km:.1f}km"


def walking_minutes(km: float) -> int:
    return round(km * _WALKING_MINUTES_PER_KM)
