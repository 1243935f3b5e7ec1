"""Resolve delivery or pickup options for a customer location and cart."""

import logging

from store_delivery.config import DeliverySettings
from store_delivery.eligibility import nearest_store, serves_mode
from store_delivery.errors import MissingCoordinates
from store_delivery.fees import EstimateMinutes, quote, to_money, unavailable_quote
from store_delivery.geo import distance_km
from store_delivery.models import DeliveryMode, DeliveryQuote, GeoPoint, PickupOption, Store

logger = logging.getLogger(__name__)


def resolve_delivery(
    stores: list[Store],
    customer_point: GeoPoint | None,
    subtotal,
    mode: DeliveryMode = DeliveryMode.DELIVERY,
    settings: DeliverySettings | None = None,
    estimate_minutes: EstimateMinutes | None = None,
    store_id: int | None = None,
) -> DeliveryQuote | list[PickupOption]:
    """Quote delivery, or list pickup stores, for one customer.

    Args:
        stores: Candidate stores from the store directory.
        customer_point: Geocoded customer location. Required for delivery.
        subtotal: Cart subtotal in currency units.
        mode: DeliveryMode.DELIVERY or DeliveryMode.PICKUP.
        settings: Global delivery defaults.
        estimate_minutes: Optional distance-to-minutes mapping.
        store_id: Quote this store instead of the nearest one.

    Returns:
        A DeliveryQuote in delivery mode, a list of PickupOption in pickup
        mode.

    Raises:
        MissingCoordinates: delivery was requested without a customer point.
        ValueError: the subtotal is not a finite amount.
    """
    settings = settings or DeliverySettings()
    mode = DeliveryMode(mode)

    if mode is DeliveryMode.PICKUP:
        return pickup_options(stores, customer_point)

    if customer_point is None:
        raise MissingCoordinates(
            "Customer address has no coordinates; geocode it before requesting delivery."
        )
    subtotal = to_money(subtotal)

    if store_id is not None:
        store = next((s for s in stores if s.id == store_id), None)
        if store is None:
            logger.debug("Requested store %s is not in the directory", store_id)
            return unavailable_quote("No valid store found for delivery", settings)
        return quote(store, distance_km(store.location, customer_point), subtotal,
                     settings, estimate_minutes)

    found = nearest_store(stores, customer_point, DeliveryMode.DELIVERY, settings)
    if found is None:
        logger.debug("No delivery store among %d candidates", len(stores))
        return unavailable_quote("No valid store found for delivery", settings)

    store, distance = found
    logger.debug("Nearest delivery store %s at %.2f km", store.id, distance)
    return quote(store, distance, subtotal, settings, estimate_minutes)


def pickup_options(stores: list[Store], customer_point: GeoPoint | None = None) -> list[PickupOption]:
    """Return every active pickup store, nearest first.

    Pickup is not limited by distance. Without a customer point the stores
    are returned in id order with no distance.
    """
    candidates = [s for s in stores if serves_mode(s, DeliveryMode.PICKUP)]
    if customer_point is None:
        return [PickupOption(store=s) for s in sorted(candidates, key=lambda s: s.id)]

    options = [PickupOption(store=s, distance_km=distance_km(s.location, customer_point)) for s in candidates]
    options.sort(key=lambda o: (o.distance_km, o.store.id))
    return options


def nearest_pickup_locations(
    stores: list[Store],
    customer_point: GeoPoint,
    max_distance_km: float = 50.0,
    limit: int = 10,
) -> list[PickupOption]:
    """Return up to ``limit`` pickup stores within ``max_distance_km``, nearest first."""
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")
    options = [o for o in pickup_options(stores, customer_point) if o.distance_km <= max_distance_km]
    return options[:limit]
