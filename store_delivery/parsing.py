"""Normalize store-directory API payloads into Store records.

The directory answers with one envelope shape::

    {"status": "success", "data": [{...store...}, ...]}

Each store uses the backend's snake_case field names. Anything else is a
ResponseParseError; there are no alternative field names.
"""

from decimal import Decimal, InvalidOperation
from math import isfinite

from store_delivery.errors import InvalidCoordinate, ResponseParseError
from store_delivery.models import GeoPoint, Store

_MONEY_FIELDS = {
    "delivery_base_fee": "delivery_base_fee",
    "delivery_price_per_km": "delivery_fee_per_km",
    "free_delivery_threshold": "free_delivery_threshold",
    "minimum_order_value": "minimum_order_value",
}

_FLAG_FIELDS = ("is_delivery_location", "is_pickup_location", "is_active")


def _number(payload: dict, key: str) -> float:
    value = payload.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ResponseParseError(f"store field {key!r} must be a number, got {value!r}")
    try:
        number = float(value)
    except ValueError:
        raise ResponseParseError(f"store field {key!r} must be a number, got {value!r}") from None
    if not isfinite(number):
        raise ResponseParseError(f"store field {key!r} must be finite, got {value!r}")
    return number


def _money(payload: dict, key: str) -> Decimal | None:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ResponseParseError(f"store field {key!r} must be an amount, got {value!r}")
    try:
        amount = Decimal(repr(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, TypeError):
        raise ResponseParseError(f"store field {key!r} must be an amount, got {value!r}") from None
    if not amount.is_finite():
        raise ResponseParseError(f"store field {key!r} must be finite, got {value!r}")
    return amount


def _flag(payload: dict, key: str, default: bool) -> bool:
    value = payload.get(key, default)
    # The backend serializes booleans as 0/1 in some responses.
    if isinstance(value, bool):
        return value
    if value in (0, 1):
        return bool(value)
    raise ResponseParseError(f"store field {key!r} must be a boolean, got {value!r}")


def parse_store(payload: dict) -> Store:
    """Build a Store from one directory record.

    Raises:
        ResponseParseError: a required field is missing or malformed.
    """
    if not isinstance(payload, dict):
        raise ResponseParseError(f"store record must be an object, got {type(payload).__name__}")

    store_id = payload.get("id")
    if isinstance(store_id, bool) or not isinstance(store_id, int):
        raise ResponseParseError(f"store field 'id' must be an integer, got {store_id!r}")

    for key in ("latitude", "longitude"):
        if payload.get(key) is None:
            raise ResponseParseError(f"store {store_id} has no {key}")
    try:
        location = GeoPoint(_number(payload, "latitude"), _number(payload, "longitude"))
    except InvalidCoordinate as exc:
        raise ResponseParseError(f"store {store_id} has invalid coordinates: {exc}") from exc

    radius = payload.get("delivery_radius_km")
    kwargs = {
        "delivery_radius_km": None if radius is None else _number(payload, "delivery_radius_km"),
    }
    for source, target in _MONEY_FIELDS.items():
        kwargs[target] = _money(payload, source)
    for key in _FLAG_FIELDS:
        kwargs[key] = _flag(payload, key, default=(key == "is_active"))

    return Store(
        id=store_id,
        name=str(payload.get("name") or ""),
        location=location,
        formatted_address=str(payload.get("formatted_address") or ""),
        **kwargs,
    )


def parse_store_list(body: dict) -> list[Store]:
    """Parse a directory envelope into a list of Store records.

    Raises:
        ResponseParseError: the envelope reports an error or is malformed.
    """
    if not isinstance(body, dict):
        raise ResponseParseError(f"response must be an object, got {type(body).__name__}")
    status = body.get("status")
    if status != "success":
        message = body.get("message") or "no message"
        raise ResponseParseError(f"store directory returned status {status!r}: {message}")
    data = body.get("data")
    if not isinstance(data, list):
        raise ResponseParseError("response field 'data' must be a list")
    return [parse_store(record) for record in data]
