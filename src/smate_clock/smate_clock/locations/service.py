from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import NotFoundError
from .model import Location
from .repository import LocationRepository


class LocationRegistry:
    """Read-only lookup of geofenced sites."""

    def __init__(self, locations: LocationRepository):
        self._locations = locations

    def get(self, location_id: int) -> Optional[Location]:
        return self._locations.get_by_id(location_id)

    def require(self, location_id: int) -> Location:
        location = self.get(location_id)
        if not location:
            raise NotFoundError("Location not found")
        return location

    def list_all(self) -> Sequence[Location]:
        return self._locations.list_all()
