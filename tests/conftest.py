"""Shared fixtures for store_delivery tests."""

from decimal import Decimal

import pytest

from store_delivery.config import DeliverySettings
from store_delivery.models import GeoPoint, Store

# Victoria Island and Yaba, Lagos.
VICTORIA_ISLAND = GeoPoint(6.4441339, 3.4910538)
LAGOS_MAINLAND = GeoPoint(6.5244, 3.3792)

# Every variable store_delivery.config reads; a local .env may set any of them.
ENV_VARS = (
    "DELIVERY_CURRENCY",
    "DELIVERY_BASE_FEE",
    "DELIVERY_FEE_PER_KM",
    "DELIVERY_FREE_THRESHOLD",
    "DELIVERY_MIN_ORDER",
    "DELIVERY_MAX_DISTANCE_KM",
    "STORE_API_URL",
    "GOOGLE_GEOCODING_KEY",
    "STORE_CACHE_TTL_SECONDS",
)


def make_store(store_id=1, latitude=6.4441339, longitude=3.4910538, **overrides) -> Store:
    fields = {
        "id": store_id,
        "name": f"Store {store_id}",
        "location": GeoPoint(latitude, longitude),
        "is_delivery_location": True,
        "is_pickup_location": True,
        "delivery_radius_km": -1,
        "delivery_base_fee": Decimal("1500"),
        "delivery_fee_per_km": Decimal("100"),
        "free_delivery_threshold": Decimal("10000000"),
        "minimum_order_value": Decimal("0"),
    }
    fields.update(overrides)
    return Store(**fields)


@pytest.fixture
def settings() -> DeliverySettings:
    return DeliverySettings()


@pytest.fixture
def store() -> Store:
    return make_store()


@pytest.fixture
def store_payload() -> dict:
    """One store record as the directory API returns it."""
    return {
        "id": 7,
        "name": "Lekki Phase 1",
        "formatted_address": "12 Admiralty Way, Lekki, Lagos",
        "latitude": 6.4474,
        "longitude": 3.4700,
        "is_delivery_location": True,
        "is_pickup_location": False,
        "is_active": True,
        "delivery_radius_km": 15,
        "delivery_base_fee": "1500.00",
        "delivery_price_per_km": "100.00",
        "free_delivery_threshold": "10000.00",
        "minimum_order_value": None,
    }
