"""Delivery fee and delivery time calculation for a chosen store."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from math import ceil
from typing import Callable

from store_delivery.config import DeliverySettings
from store_delivery.eligibility import is_delivery_eligible
from store_delivery.models import DeliveryQuote, Store

EstimateMinutes = Callable[[float], int]

# Fees are charged in whole currency units.
_WHOLE_UNIT = Decimal("1")


def default_estimate_minutes(distance: float) -> int:
    """Five minutes of handling plus three minutes per km, rounded up."""
    return 5 + ceil(distance * 3)


def round_fee(amount: Decimal) -> Decimal:
    return amount.quantize(_WHOLE_UNIT, rounding=ROUND_HALF_UP)


def to_money(value) -> Decimal:
    """Coerce an int, float, str or Decimal amount to a finite Decimal."""
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, float):
        amount = Decimal(repr(value))
    else:
        try:
            amount = Decimal(value)
        except (InvalidOperation, TypeError):
            raise ValueError(f"amount must be a number, got {value!r}") from None
    if not amount.is_finite():
        raise ValueError(f"amount must be finite, got {value!r}")
    return amount


def format_money(amount: Decimal, settings: DeliverySettings) -> str:
    return f"{settings.currency_symbol}{round_fee(amount):,}"


def unavailable_quote(message: str, settings: DeliverySettings, distance: float = 0.0,
                      store_id: int | None = None) -> DeliveryQuote:
    return DeliveryQuote(
        fee=Decimal("0"),
        distance_km=distance,
        is_delivery_available=False,
        estimated_time_minutes=0,
        message=message,
        currency=settings.currency,
        store_id=store_id,
    )


def quote(
    store: Store,
    distance: float,
    subtotal,
    settings: DeliverySettings | None = None,
    estimate_minutes: EstimateMinutes | None = None,
) -> DeliveryQuote:
    """Price delivery from ``store`` to a customer ``distance`` km away.

    The minimum-order check runs before the free-delivery threshold, so an
    order below the store minimum is never delivered, even when the
    threshold would make it free.

    Args:
        store: The store that would fulfil the order.
        distance: Great-circle distance in km from store to customer.
        subtotal: Cart subtotal in currency units.
        settings: Global defaults for fee fields the store leaves unset.
        estimate_minutes: Maps distance to an estimated delivery time.

    Returns:
        A DeliveryQuote; unavailability is reported in the quote, not raised.
    """
    settings = settings or DeliverySettings()
    estimate_minutes = estimate_minutes or default_estimate_minutes
    subtotal = to_money(subtotal)

    if not is_delivery_eligible(store, distance, settings):
        return unavailable_quote(
            "Sorry, we don't currently deliver to your location.",
            settings, distance, store.id,
        )

    base_fee = _store_or_default(store.delivery_base_fee, settings.base_fee)
    fee_per_km = _store_or_default(store.delivery_fee_per_km, settings.fee_per_km)
    free_threshold = _store_or_default(store.free_delivery_threshold, settings.free_threshold)
    min_order = _store_or_default(store.minimum_order_value, settings.min_order)

    if subtotal < min_order:
        return unavailable_quote(
            f"Minimum order for delivery is {format_money(min_order, settings)}. "
            "Please add more items.",
            settings, distance, store.id,
        )

    if subtotal >= free_threshold:
        fee = Decimal("0")
        message = "Free delivery for your order!"
    else:
        fee = round_fee(base_fee + fee_per_km * to_money(distance))
        message = f"Delivery fee: {format_money(fee, settings)} ({distance:.1f} km)"

    return DeliveryQuote(
        fee=fee,
        distance_km=distance,
        is_delivery_available=True,
        estimated_time_minutes=estimate_minutes(distance),
        message=message,
        currency=settings.currency,
        store_id=store.id,
    )


def _store_or_default(value, default: Decimal) -> Decimal:
    return default if value is None else to_money(value)
