"""Environment-driven settings for delivery pricing and external services."""

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from math import isfinite

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class DeliverySettings:
    """Global delivery defaults, used where a store leaves a field unset."""

    base_fee: Decimal = Decimal("500")
    fee_per_km: Decimal = Decimal("100")
    free_threshold: Decimal = Decimal("10000")
    min_order: Decimal = Decimal("0")
    max_distance_km: float = 20.0
    currency: str = "NGN"
    currency_symbol: str = "₦"


@dataclass(frozen=True)
class ServiceSettings:
    """Connection settings for the store directory and geocoder."""

    store_api_url: str = ""
    geocoding_key: str = ""
    cache_ttl_seconds: float = 60.0


_CURRENCY_SYMBOLS = {"NGN": "₦", "KES": "KSh", "USD": "$", "EUR": "€", "GBP": "£"}


def _env_decimal(name: str, default: Decimal) -> Decimal:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if not value.is_finite():
        raise ValueError(f"{name} must be finite, got {raw!r}")
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if not isfinite(value):
        raise ValueError(f"{name} must be finite, got {raw!r}")
    return value


def load_settings() -> DeliverySettings:
    """Build DeliverySettings from DELIVERY_* environment variables."""
    currency = os.getenv("DELIVERY_CURRENCY", "NGN").strip().upper() or "NGN"
    return DeliverySettings(
        base_fee=_env_decimal("DELIVERY_BASE_FEE", DeliverySettings.base_fee),
        fee_per_km=_env_decimal("DELIVERY_FEE_PER_KM", DeliverySettings.fee_per_km),
        free_threshold=_env_decimal("DELIVERY_FREE_THRESHOLD", DeliverySettings.free_threshold),
        min_order=_env_decimal("DELIVERY_MIN_ORDER", DeliverySettings.min_order),
        max_distance_km=_env_float("DELIVERY_MAX_DISTANCE_KM", DeliverySettings.max_distance_km),
        currency=currency,
        currency_symbol=_CURRENCY_SYMBOLS.get(currency, currency + " "),
    )


def load_service_settings() -> ServiceSettings:
    """Build ServiceSettings from STORE_API_URL, GOOGLE_GEOCODING_KEY and friends."""
    return ServiceSettings(
        store_api_url=os.getenv("STORE_API_URL", "").rstrip("/"),
        geocoding_key=os.getenv("GOOGLE_GEOCODING_KEY", ""),
        cache_ttl_seconds=_env_float("STORE_CACHE_TTL_SECONDS", ServiceSettings.cache_ttl_seconds),
    )
