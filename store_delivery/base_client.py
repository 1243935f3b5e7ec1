"""Abstract interfaces for the services that feed the delivery resolver."""

from abc import ABC, abstractmethod
from dataclasses import replace

from store_delivery.models import Address, GeoPoint, Store


class StoreDirectory(ABC):
    """Source of the store records candidates are chosen from."""

    @abstractmethod
    def get_stores(self) -> list[Store]:
        """Fetch every store known to the directory.

        Returns:
            List of Store records, active or not.
        """


class Geocoder(ABC):
    """Turns free-text addresses into coordinates."""

    @abstractmethod
    def geocode(self, address: str) -> GeoPoint | None:
        """Resolve an address to a point.

        Returns:
            The GeoPoint, or None if the provider found no match.
        """

    def resolve_address(self, address: Address) -> Address:
        """Return ``address`` with coordinates, geocoding it if they are missing.

        The input is not modified; a copy carries the new coordinates. When
        the provider finds no match the copy still has no coordinates.
        """
        if address.point is not None:
            return address
        point = self.geocode(address.full_address)
        if point is None:
            return replace(address)
        return replace(address, latitude=point.latitude, longitude=point.longitude)
