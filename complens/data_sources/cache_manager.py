"""
Listing page cache
One JSON file per listing id, expired after CACHE_TTL_HOURS.
"""

import json
import re
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional
from loguru import logger

from complens.config import settings

# listing ids become file names
_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9_-]")


class CacheManager:
    """
    Listing page cache
    - file per listing: {cache_dir}/{listing_id}.json
    - entries older than the TTL count as missing
    """

    def __init__(
        self,
        cache_dir: Optional[str] = None,
        ttl_hours: Optional[int] = None,
    ):
        self.cache_dir = Path(cache_dir or settings.CACHE_DIR)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.ttl = timedelta(hours=settings.CACHE_TTL_HOURS if ttl_hours is None else ttl_hours)
        self.logger = logger.bind(source="CacheManager")

    def _path(self, listing_id: str) -> Path:
        name = _UNSAFE_CHARS_RE.sub("_", str(listing_id))
        return self.cache_dir / f"{name}.json"

    def _entries(self):
        return sorted(self.cache_dir.glob("*.json"))

    @staticmethod
    def _load(path: Path) -> dict:
        with path.open(encoding="utf-8") as f:
            return json.load(f)

    def _age(self, entry: dict) -> timedelta:
        return datetime.now() - datetime.fromisoformat(entry["cached_at"])

    def get(self, listing_id: str) -> Optional[str]:
        """
        Cached page of a listing

        Returns:
            Page markup, or None when not cached or expired
        """
        path = self._path(listing_id)
        if not path.is_file():
            return None

        try:
            entry = self._load(path)
            if self._age(entry) > self.ttl:
                self.logger.debug(f"Expired page dropped: {listing_id}")
                path.unlink()
                return None
            page = entry["page"]
        except (OSError, ValueError, KeyError) as e:
            self.logger.warning(f"Unreadable cache entry for {listing_id}: {e}")
            return None

        self.logger.info(f"Cache hit: {listing_id}")
        return page

    def set(self, listing_id: str, page: str):
        """Store the page of a listing"""
        entry = {
            "listing_id": str(listing_id),
            "cached_at": datetime.now().isoformat(),
            "page": page,
        }
        try:
            with self._path(listing_id).open("w", encoding="utf-8") as f:
                json.dump(entry, f, ensure_ascii=False)
        except OSError as e:
            self.logger.warning(f"Could not cache listing {listing_id}: {e}")
            return
        self.logger.debug(f"Cached listing {listing_id}")

    def clear(self) -> int:
        """Delete every cached page"""
        entries = self._entries()
        for path in entries:
            path.unlink()
        self.logger.info(f"Cache cleared: {len(entries)} pages")
        return len(entries)

    def clear_expired(self) -> int:
        """Delete expired and unreadable entries"""
        removed = 0
        for path in self._entries():
            try:
                keep = self._age(self._load(path)) <= self.ttl
            except (OSError, ValueError, KeyError):
                keep = False
            if not keep:
                path.unlink()
                removed += 1
        self.logger.info(f"Expired pages cleared: {removed}")
        return removed

    def clear_by_listing(self, listing_id: str) -> int:
        """Delete the cached page of one listing"""
        path = self._path(listing_id)
        if not path.is_file():
            return 0
        path.unlink()
        self.logger.info(f"Cache cleared for listing {listing_id}")
        return 1

    def get_stats(self) -> dict:
        """Number of cached pages and their total size"""
        entries = self._entries()
        size = sum(path.stat().st_size for path in entries)
        return {"count": len(entries), "size_kb": round(size / 1024, 1)}

    def get_detailed_stats(self) -> list[dict]:
        """One row per cached listing, soonest to expire first"""
        rows = []
        for path in self._entries():
            try:
                entry = self._load(path)
                remaining = self.ttl - self._age(entry)
            except (OSError, ValueError, KeyError) as e:
                self.logger.warning(f"Skipping unreadable cache file {path.name}: {e}")
                continue

            rows.append({
                "listing_id": entry.get("listing_id", path.stem),
                "cached_at": datetime.fromisoformat(entry["cached_at"]).strftime("%Y-%m-%d %H:%M"),
                "expires_in": self._format_timedelta(remaining),
                "remaining_seconds": remaining.total_seconds(),
                "expired": remaining.total_seconds() < 0,
                "size_kb": round(path.stat().st_size / 1024, 1),
            })

        rows.sort(key=lambda row: row["remaining_seconds"])
        return rows

    @staticmethod
    def _format_timedelta(td: timedelta) -> str:
        """Short form: 1h 5m, 12m or expired"""
        seconds = int(td.total_seconds())
        if seconds < 0:
            return "expired"
        hours, minutes = seconds // 3600, seconds % 3600 // 60
        return f"{hours}h {minutes}m" if hours else f"{minutes}m"


_cache_manager: CacheManager | None = None


def get_cache_manager() -> CacheManager:
    """Process-wide cache manager"""
    global _cache_manager
    if _cache_manager is None:
        _cache_manager = CacheManager()
    return _cache_manager
