#!/usr/bin/env python3
"""CLI entry point for quoting delivery and listing pickup stores."""

import argparse
import csv
import json
import logging
import sys

import requests

from store_delivery.config import load_settings
from store_delivery.errors import DeliveryError
from store_delivery.models import Address, DeliveryMode, GeoPoint
from store_delivery.parsing import parse_store_list
from store_delivery.resolver import resolve_delivery


def _print_quote(quote, settings):
    """Print a delivery quote to stdout."""
    print(f"\n{'=' * 70}")
    print("  DELIVERY QUOTE")
    print(f"{'=' * 70}\n")

    if not quote.is_delivery_available:
        print("  Delivery: not available")
        print(f"  {quote.message}")
        if quote.distance_km:
            print(f"  Distance: {quote.distance_km:.2f} km")
        print()
        return

    print(f"  Store:    {quote.store_id}")
    print(f"  Distance: {quote.distance_km:.2f} km")
    print(f"  Fee:      {settings.currency_symbol}{quote.fee:,} {quote.currency}")
    print(f"  Time:     under {quote.estimated_time_minutes} minutes")
    print(f"  {quote.message}")
    print()


def _print_pickup(options):
    """Print the pickup store list to stdout."""
    print(f"\n{'=' * 70}")
    print("  PICKUP LOCATIONS")
    print(f"  {len(options)} store(s)")
    print(f"{'=' * 70}\n")

    for i, option in enumerate(options, 1):
        store = option.store
        print(f"  {i}. {store.name} (store {store.id})")
        if store.formatted_address:
            print(f"    Address:  {store.formatted_address}")
        if option.distance_km is not None:
            print(f"    Distance: {option.distance_km:.2f} km")
        print()


def _export_csv(options, path):
    """Export the pickup list to a CSV file."""
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "rank", "store_id", "name", "address",
            "latitude", "longitude", "distance_km",
        ])
        for i, option in enumerate(options, 1):
            store = option.store
            writer.writerow([
                i, store.id, store.name, store.formatted_address,
                store.location.latitude, store.location.longitude,
                "" if option.distance_km is None else f"{option.distance_km:.3f}",
            ])
    print(f"Pickup locations exported to {path}")


def _load_stores(args):
    """Read stores from --stores-file, or from the store directory API."""
    if args.stores_file:
        with open(args.stores_file, encoding="utf-8") as f:
            return parse_store_list(json.load(f))

    from store_delivery.store_client import StoreDirectoryClient
    return StoreDirectoryClient(base_url=args.store_api_url).get_stores()


def _customer_point(args):
    """Return the customer's GeoPoint, geocoding --address when needed."""
    if args.lat is not None or args.lon is not None:
        if args.lat is None or args.lon is None:
            raise ValueError("--lat and --lon must be given together.")
        return GeoPoint(args.lat, args.lon)

    if not args.address:
        return None

    from store_delivery.geocoding_client import GoogleGeocoder
    resolved = GoogleGeocoder(api_key=args.geocoding_key).resolve_address(Address(address1=args.address))
    if resolved.point is None:
        raise ValueError("Unable to calculate delivery fee, please pick a different address.")
    return resolved.point


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="store-delivery",
        description="Quote delivery from the nearest store, or list pickup stores.",
    )
    parser.add_argument(
        "--mode",
        default="delivery",
        choices=[m.value for m in DeliveryMode],
        help='Fulfilment mode (default: "delivery").',
    )
    parser.add_argument(
        "--subtotal",
        type=float,
        help="Cart subtotal in whole currency units. Required for delivery.",
    )
    parser.add_argument(
        "--store-id",
        type=int,
        help="Quote this store instead of the nearest one.",
    )
    parser.add_argument(
        "--csv",
        metavar="FILE",
        help="Export the pickup list to a CSV file.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log resolver and API activity.",
    )

    location_group = parser.add_argument_group("Customer location")
    location_group.add_argument("--lat", type=float, help="Customer latitude in degrees.")
    location_group.add_argument("--lon", type=float, help="Customer longitude in degrees.")
    location_group.add_argument(
        "--address",
        help="Customer address to geocode when --lat/--lon are not given.",
    )
    location_group.add_argument(
        "--geocoding-key",
        help="Google Geocoding API key (overrides GOOGLE_GEOCODING_KEY env var).",
    )

    stores_group = parser.add_argument_group("Store source")
    stores_group.add_argument(
        "--stores-file",
        metavar="FILE",
        help='JSON file shaped like the API response: {"status": "success", "data": [...]}.',
    )
    stores_group.add_argument(
        "--store-api-url",
        help="Store directory base URL (overrides STORE_API_URL env var).",
    )
    return parser


def main(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.mode == DeliveryMode.DELIVERY.value and args.subtotal is None:
        parser.error("--subtotal is required for delivery quotes.")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings()
        point = _customer_point(args)
        stores = _load_stores(args)
        result = resolve_delivery(
            stores,
            point,
            args.subtotal if args.subtotal is not None else 0,
            mode=DeliveryMode(args.mode),
            settings=settings,
            store_id=args.store_id,
        )
    except (DeliveryError, ValueError, OSError, requests.RequestException) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if isinstance(result, list):
        if not result:
            print("No pickup locations found.")
            sys.exit(0)
        _print_pickup(result)
        if args.csv:
            _export_csv(result, args.csv)
    else:
        _print_quote(result, settings)


if __name__ == "__main__":
    main()
