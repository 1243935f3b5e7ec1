"""Store eligibility rules and nearest-store selection."""

from store_delivery.config import DeliverySettings
from store_delivery.geo import distance_km
from store_delivery.models import DeliveryMode, GeoPoint, Store


def effective_radius_km(store: Store, settings: DeliverySettings) -> float:
    """Return the store's delivery radius, or the global maximum when unset."""
    if store.delivery_radius_km is None:
        return settings.max_distance_km
    return store.delivery_radius_km


def within_delivery_radius(radius_km: float, distance: float) -> bool:
    """Return True if ``distance`` falls inside ``radius_km``.

    A negative radius means the store has no distance limit.
    """
    if radius_km < 0:
        return True
    return distance <= radius_km


def is_delivery_eligible(store: Store, distance: float, settings: DeliverySettings) -> bool:
    """Return True if ``store`` delivers to a customer ``distance`` km away."""
    if not (store.is_active and store.is_delivery_location):
        return False
    return within_delivery_radius(effective_radius_km(store, settings), distance)


def serves_mode(store: Store, mode: DeliveryMode) -> bool:
    if not store.is_active:
        return False
    if mode is DeliveryMode.DELIVERY:
        return store.is_delivery_location
    return store.is_pickup_location


def nearest_store(
    stores: list[Store],
    point: GeoPoint,
    mode: DeliveryMode,
    settings: DeliverySettings,
) -> tuple[Store, float] | None:
    """Pick the closest active store offering ``mode``.

    For delivery, stores whose radius covers ``point`` win over closer stores
    that do not, so an out-of-range store is only returned when no store
    covers the customer. Equidistant stores are ordered by lowest id.

    Returns:
        ``(store, distance_km)``, or None when no store offers ``mode``.
    """
    best: tuple[tuple, Store, float] | None = None
    for store in stores:
        if not serves_mode(store, mode):
            continue
        d = distance_km(store.location, point)
        uncovered = mode is DeliveryMode.DELIVERY and not is_delivery_eligible(store, d, settings)
        key = (uncovered, d, store.id)
        if best is None or key < best[0]:
            best = (key, store, d)

    if best is None:
        return None
    return best[1], best[2]
