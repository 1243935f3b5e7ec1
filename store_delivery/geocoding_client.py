"""Google Geocoding API client for customer addresses."""

import logging

import requests

from store_delivery.base_client import Geocoder
from store_delivery.config import load_service_settings
from store_delivery.errors import GeocodingError
from store_delivery.models import GeoPoint

logger = logging.getLogger(__name__)

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

# Seconds before an unanswered request is abandoned.
REQUEST_TIMEOUT = 5


class GoogleGeocoder(Geocoder):
    """Forward geocoding through the Google Maps Geocoding API."""

    def __init__(
        self,
        api_key: str | None = None,
        region: str | None = None,
        session: requests.Session | None = None,
    ):
        self.api_key = api_key or load_service_settings().geocoding_key
        if not self.api_key:
            raise ValueError(
                "GOOGLE_GEOCODING_KEY must be set either as an argument or in a .env file."
            )
        self.region = region
        self.session = session or requests.Session()

    def geocode(self, address: str) -> GeoPoint | None:
        """Return the coordinates of the best match for ``address``.

        Raises:
            requests.HTTPError: the API answered with an HTTP error.
            GeocodingError: the API reported a status other than OK or
                ZERO_RESULTS (quota, denied key, invalid request), or an
                OK result without usable coordinates.
        """
        if not address.strip():
            return None

        params = {"address": address, "key": self.api_key}
        if self.region:
            params["region"] = self.region
        resp = self.session.get(GEOCODE_URL, params=params, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
        body = resp.json()

        status = body.get("status")
        if status == "ZERO_RESULTS" or (status == "OK" and not body.get("results")):
            logger.debug("No geocoding match for %r", address)
            return None
        if status != "OK":
            message = f"Geocoding failed with status {status}"
            if body.get("error_message"):
                message += f": {body['error_message']}"
            raise GeocodingError(message)

        try:
            location = body["results"][0]["geometry"]["location"]
            return GeoPoint(float(location["lat"]), float(location["lng"]))
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise GeocodingError(f"Malformed geocoding result for {address!r}: {exc!r}") from exc
