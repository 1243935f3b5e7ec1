"""Client for the storefront's store-directory API."""

import logging

import requests

from store_delivery.base_client import StoreDirectory
from store_delivery.cache import ResponseCache
from store_delivery.config import load_service_settings
from store_delivery.models import Store
from store_delivery.parsing import parse_store_list

logger = logging.getLogger(__name__)

# Seconds before an unanswered request is abandoned.
REQUEST_TIMEOUT = 10


class StoreDirectoryClient(StoreDirectory):
    """Client for the ``/pickup-locations`` endpoint of the storefront API."""

    def __init__(
        self,
        base_url: str | None = None,
        cache: ResponseCache | None = None,
        session: requests.Session | None = None,
    ):
        settings = load_service_settings()
        self.base_url = (base_url or settings.store_api_url).rstrip("/")
        if not self.base_url:
            raise ValueError(
                "STORE_API_URL must be set either as an argument or in a .env file."
            )
        self.cache = cache if cache is not None else ResponseCache(settings.cache_ttl_seconds)
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def _get(self, endpoint: str, params: dict | None = None) -> dict:
        url = f"{self.base_url}/{endpoint}"
        resp = self.session.get(url, params=params, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
        return resp.json()

    def get_stores(self) -> list[Store]:
        """Fetch and parse the store list, serving repeats from the cache.

        Raises:
            requests.HTTPError: the API answered with an error status.
            ResponseParseError: the body is not a valid store envelope.
        """
        # Copy so callers cannot edit the cached list.
        return list(self.cache.get_or_fetch(f"{self.base_url}/pickup-locations", self._fetch_stores))

    def _fetch_stores(self) -> list[Store]:
        stores = parse_store_list(self._get("pickup-locations"))
        logger.debug("Fetched %d stores from %s", len(stores), self.base_url)
        return stores
