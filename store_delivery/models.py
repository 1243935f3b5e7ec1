"""Shared data models for store selection and delivery quotes."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from store_delivery.geo import validate_coordinates


class DeliveryMode(str, Enum):
    """How the customer wants to receive the order."""

    DELIVERY = "delivery"
    PICKUP = "pickup"


@dataclass(frozen=True)
class GeoPoint:
    """A validated latitude/longitude pair in degrees."""

    latitude: float
    longitude: float

    def __post_init__(self):
        validate_coordinates(self.latitude, self.longitude)


@dataclass(frozen=True)
class Store:
    """A store location as published by the store directory.

    Fee fields left as ``None`` fall back to the global delivery settings.
    A negative ``delivery_radius_km`` means the store delivers anywhere.
    """

    id: int
    name: str
    location: GeoPoint
    is_delivery_location: bool = False
    is_pickup_location: bool = False
    is_active: bool = True
    delivery_radius_km: float | None = None
    delivery_base_fee: Decimal | None = None
    delivery_fee_per_km: Decimal | None = None
    free_delivery_threshold: Decimal | None = None
    minimum_order_value: Decimal | None = None
    formatted_address: str = ""


@dataclass
class Address:
    """A customer delivery address, possibly not yet geocoded."""

    address1: str
    address2: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""
    latitude: float | None = None
    longitude: float | None = None

    @property
    def full_address(self) -> str:
        parts = [self.address1, self.address2, self.city, self.state, self.postal_code, self.country]
        return ", ".join(p for p in parts if p)

    @property
    def point(self) -> GeoPoint | None:
        if self.latitude is None or self.longitude is None:
            return None
        return GeoPoint(self.latitude, self.longitude)


@dataclass(frozen=True)
class DeliveryQuote:
    """The outcome of a delivery request for one customer location."""

    fee: Decimal
    distance_km: float
    is_delivery_available: bool
    estimated_time_minutes: int
    message: str
    currency: str = "NGN"
    store_id: int | None = None


@dataclass(frozen=True)
class PickupOption:
    """A store the customer can collect from, with its distance if known."""

    store: Store
    distance_km: float | None = None
