"""Exceptions raised by the delivery resolution library."""


class DeliveryError(Exception):
    """Base class for all store_delivery errors."""


class InvalidCoordinate(DeliveryError, ValueError):
    """Latitude or longitude is out of range or not a finite number."""


class MissingCoordinates(DeliveryError, ValueError):
    """Delivery was requested for a customer location that has not been geocoded."""


class ResponseParseError(DeliveryError, ValueError):
    """A store-directory payload did not match the expected shape."""


class GeocodingError(DeliveryError):
    """The geocoding provider returned an error status."""
