"""Tests for delivery eligibility and nearest-store selection."""

import pytest

from conftest import LAGOS_MAINLAND, VICTORIA_ISLAND, make_store
from store_delivery.eligibility import (
    effective_radius_km,
    is_delivery_eligible,
    nearest_store,
    within_delivery_radius,
)
from store_delivery.models import DeliveryMode, GeoPoint


class TestWithinDeliveryRadius:
    def test_unlimited_radius_covers_any_distance(self):
        assert within_delivery_radius(-1, 500.0)
        assert within_delivery_radius(-1, 20_000.0)

    def test_boundary_is_inclusive(self):
        assert within_delivery_radius(10, 10.0)

    def test_just_outside_boundary(self):
        assert not within_delivery_radius(10, 10.01)

    def test_zero_radius_only_covers_store_location(self):
        assert within_delivery_radius(0, 0.0)
        assert not within_delivery_radius(0, 0.001)


class TestIsDeliveryEligible:
    def test_unlimited_store_eligible_far_away(self, settings):
        store = make_store(delivery_radius_km=-1)
        assert is_delivery_eligible(store, 500.0, settings)

    def test_radius_ten(self, settings):
        store = make_store(delivery_radius_km=10)
        assert is_delivery_eligible(store, 10.0, settings)
        assert not is_delivery_eligible(store, 10.01, settings)

    def test_requires_delivery_flag(self, settings):
        store = make_store(is_delivery_location=False)
        assert not is_delivery_eligible(store, 1.0, settings)

    def test_inactive_store_not_eligible(self, settings):
        store = make_store(is_active=False)
        assert not is_delivery_eligible(store, 1.0, settings)

    def test_unset_radius_uses_global_max_distance(self, settings):
        store = make_store(delivery_radius_km=None)
        assert effective_radius_km(store, settings) == settings.max_distance_km
        assert is_delivery_eligible(store, 20.0, settings)
        assert not is_delivery_eligible(store, 20.5, settings)


class TestNearestStore:
    def test_picks_closest_delivery_store(self, settings):
        far = make_store(1, 6.60, 3.35)
        near = make_store(2, 6.52, 3.38)
        store, distance = nearest_store([far, near], LAGOS_MAINLAND, DeliveryMode.DELIVERY, settings)
        assert store.id == 2
        assert distance < 1.0

    def test_skips_stores_without_the_mode(self, settings):
        pickup_only = make_store(1, 6.5244, 3.3792, is_delivery_location=False)
        delivery = make_store(2, 6.60, 3.35, is_pickup_location=False)

        store, _ = nearest_store([pickup_only, delivery], LAGOS_MAINLAND, DeliveryMode.DELIVERY, settings)
        assert store.id == 2

        store, _ = nearest_store([pickup_only, delivery], LAGOS_MAINLAND, DeliveryMode.PICKUP, settings)
        assert store.id == 1

    def test_skips_inactive_stores(self, settings):
        closed = make_store(1, 6.5244, 3.3792, is_active=False)
        open_ = make_store(2, 6.60, 3.35)
        store, _ = nearest_store([closed, open_], LAGOS_MAINLAND, DeliveryMode.DELIVERY, settings)
        assert store.id == 2

    def test_covering_store_beats_closer_uncovered_store(self, settings):
        # 0.9 km away but only delivers within 0.5 km.
        tight = make_store(1, 6.5325, 3.3792, delivery_radius_km=0.5)
        wide = make_store(2, VICTORIA_ISLAND.latitude, VICTORIA_ISLAND.longitude, delivery_radius_km=-1)
        store, distance = nearest_store([tight, wide], LAGOS_MAINLAND, DeliveryMode.DELIVERY, settings)
        assert store.id == 2
        assert distance == pytest.approx(15.24, abs=0.05)

    def test_uncovered_store_returned_when_nothing_covers(self, settings):
        tight = make_store(1, 6.5325, 3.3792, delivery_radius_km=0.5)
        store, _ = nearest_store([tight], LAGOS_MAINLAND, DeliveryMode.DELIVERY, settings)
        assert store.id == 1

    def test_tie_broken_by_lowest_id(self, settings):
        point = GeoPoint(0.0, 0.0)
        east = make_store(9, 0.0, 0.1)
        west = make_store(4, 0.0, -0.1)
        store, _ = nearest_store([east, west], point, DeliveryMode.DELIVERY, settings)
        assert store.id == 4
        store, _ = nearest_store([west, east], point, DeliveryMode.DELIVERY, settings)
        assert store.id == 4

    def test_no_candidates_returns_none(self, settings):
        assert nearest_store([], LAGOS_MAINLAND, DeliveryMode.DELIVERY, settings) is None
        pickup_only = make_store(is_delivery_location=False)
        assert nearest_store([pickup_only], LAGOS_MAINLAND, DeliveryMode.DELIVERY, settings) is None
