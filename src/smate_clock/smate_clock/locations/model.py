from __future__ import annotations

from dataclasses import dataclass

from ..common.geo import distance_meters


@dataclass(frozen=True)
class Location:
    """Geofenced site: a center point and an allowed radius in meters."""

    location_id: int
    name: str
    lat: float
    lng: float
    radius: float

    def distance_to(self, lat: float, lng: float) -> float:
        return distance_meters(lat, lng, self.lat, self.lng)

    def to_dict(self) -> dict:
        return {
            "id": self.location_id,
            "name": self.name,
            "lat": self.lat,
            "lng": self.lng,
            "radius": self.radius,
        }
