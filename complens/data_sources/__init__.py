"""
Data source module
"""

from .kv_client import KvListingClient, BlockedError
from .kv_parser import ListingParseError, parse_listing
from .cache_manager import CacheManager, get_cache_manager

__all__ = [
    "KvListingClient",
    "BlockedError",
    "ListingParseError",
    "parse_listing",
    "CacheManager",
    "get_cache_manager",
]
