"""
Collect Agent
Fetches the reference set for a list of listing ids.
"""

from typing import Callable, Optional

from .base import BaseAgent
from complens.schemas.listing import PropertyRecord
from complens.data_sources.kv_client import KvListingClient, BlockedError


class CollectResult:
    """Collect Agent output"""
    def __init__(self, records: list[PropertyRecord], skipped_ids: list[str]):
        self.records = records
        self.skipped_ids = skipped_ids


class CollectAgent(BaseAgent[list[str], CollectResult]):
    """
    Collect Agent

    Fetches listings one by one. A listing that fails to fetch or parse
    is logged and skipped; the remaining ids are still fetched. Blocking
    stops the whole collection.
    """

    name = "CollectAgent"

    def __init__(self, client_factory: Optional[Callable[[], KvListingClient]] = None):
        super().__init__()
        self.client_factory = client_factory or KvListingClient

    def _process(self, listing_ids: list[str]) -> CollectResult:
        records = []
        skipped = []

        with self.client_factory() as client:
            for listing_id in listing_ids:
                try:
                    records.append(client.get_listing(str(listing_id)))
                except BlockedError:
                    raise
                except Exception as e:
                    self.logger.warning(f"Skipping listing {listing_id}: {e}")
                    skipped.append(str(listing_id))

        self.logger.info(f"Collected {len(records)}/{len(listing_ids)} listings")
        return CollectResult(records=records, skipped_ids=skipped)
