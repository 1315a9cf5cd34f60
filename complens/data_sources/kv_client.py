"""
kv.ee listing client (safe mode)
- request delay (1.5-3s)
- block detection (403/429/503)
- page cache (24h)
"""

import time
import random
from typing import Optional
from loguru import logger

import httpx

from complens.config import settings
from complens.schemas.listing import PropertyRecord
from complens.data_sources.cache_manager import CacheManager, get_cache_manager
from complens.data_sources.kv_parser import ListingParseError, parse_listing


class BlockedError(Exception):
    """Raised when the portal starts blocking requests"""
    pass


class KvListingClient:
    """
    kv.ee listing client (safe mode)

    Safety:
    - random delay between requests
    - stops for good on 403/429/503
    - cached pages are not fetched again within the TTL
    """

    BLOCK_STATUS_CODES = [403, 429, 503]

    def __init__(
        self,
        delay_range: tuple[float, float] = None,
        client: Optional[httpx.Client] = None,
        cache: Optional[CacheManager] = None,
        use_cache: bool = True,
    ):
        if delay_range is None:
            delay_range = (settings.CRAWL_DELAY_MIN, settings.CRAWL_DELAY_MAX)
        self.delay_range = delay_range
        self.client = client or httpx.Client(
            headers=settings.KV_HEADERS,
            timeout=settings.KV_TIMEOUT,
        )
        self.logger = logger.bind(source="KvListing")
        self.cache = (cache or get_cache_manager()) if use_cache else None
        self._is_blocked = False

    def _delay(self):
        delay = random.uniform(*self.delay_range)
        if delay > 0:
            self.logger.debug(f"Waiting {delay:.1f}s...")
            time.sleep(delay)

    def _check_blocked(self):
        if self._is_blocked:
            raise BlockedError("Portal is blocking requests, try again later.")

    def _request(self, url: str) -> dict:
        self._check_blocked()
        self._delay()

        response = self.client.get(url)

        if response.status_code in self.BLOCK_STATUS_CODES:
            self._is_blocked = True
            self.logger.error(f"Blocked! Status: {response.status_code}")
            raise BlockedError(f"Portal blocked the request (HTTP {response.status_code})")

        response.raise_for_status()
        return response.json()

    def fetch_page(self, listing_id: str) -> str:
        """
        Listing page markup.

        The portal answers with JSON whose "content" field holds the page.

        Raises:
            BlockedError: If the portal blocks the request
            httpx.HTTPError: On transport errors and other non-2xx answers
            ListingParseError: If the answer has no page content
        """
        if self.cache is not None:
            cached = self.cache.get(listing_id)
            if cached is not None:
                return cached

        url = f"{settings.KV_BASE_URL}/{listing_id}"
        self.logger.info(f"Fetching listing {listing_id}")
        data = self._request(url)

        content = data.get("content") if isinstance(data, dict) else None
        if not content:
            raise ListingParseError(f"Listing {listing_id}: response has no content")

        if self.cache is not None:
            self.cache.set(listing_id, content)

        return content

    def get_listing(self, listing_id: str) -> PropertyRecord:
        """
        Fetch and parse one listing

        A cached page that fails to parse is dropped from the cache so the
        next call fetches it again.
        """
        page = self.fetch_page(listing_id)
        try:
            return parse_listing(page, str(listing_id))
        except ListingParseError:
            if self.cache is not None:
                self.cache.clear_by_listing(str(listing_id))
            raise

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
