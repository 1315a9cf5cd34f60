#!/usr/bin/env python
"""
CompLens listing cache CLI

Usage:
    python scripts/cache_cli.py status            # cache summary
    python scripts/cache_cli.py clear             # delete every cached page
    python scripts/cache_cli.py clear-expired     # delete expired pages only
    python scripts/cache_cli.py clear 3435688     # delete one listing's page
    python scripts/cache_cli.py detail            # per-listing details
"""

import sys
from pathlib import Path

# project root on the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from complens.data_sources import get_cache_manager
from complens.log import setup_logging


def cmd_status():
    """Short cache summary"""
    cache = get_cache_manager()
    stats = cache.get_stats()

    print("=" * 40)
    print("CompLens listing cache")
    print("=" * 40)
    print(f"  Cached pages: {stats['count']}")
    print(f"  Total size: {stats['size_kb']}KB")
    print(f"  Location: {cache.cache_dir}")
    print("=" * 40)


def cmd_detail():
    """Per-listing cache details"""
    cache = get_cache_manager()
    detailed = cache.get_detailed_stats()

    print("=" * 60)
    print("CompLens listing cache details")
    print("=" * 60)

    if not detailed:
        print("  (empty)")
        return

    print(f"  {'Listing':<12} {'Cached at':<18} {'Expires in':<12} {'Size':<8}")
    print("-" * 60)

    for item in detailed:
        status = "x" if item["expired"] else " "
        print(
            f"{status} {item['listing_id']:<12} "
            f"{item['cached_at']:<18} "
            f"{item['expires_in']:<12} "
            f"{item['size_kb']}KB"
        )

    print("=" * 60)


def cmd_clear(listing_id: str = None):
    """Delete cached pages"""
    cache = get_cache_manager()

    if listing_id:
        count = cache.clear_by_listing(listing_id)
        print(f"Deleted {count} cached page(s) of listing {listing_id}")
    else:
        count = cache.clear()
        print(f"Deleted {count} cached page(s)")


def cmd_clear_expired():
    """Delete expired pages only"""
    cache = get_cache_manager()
    count = cache.clear_expired()

    if count > 0:
        print(f"Deleted {count} expired page(s)")
    else:
        print("No expired pages")


def print_help():
    print(__doc__)


def main():
    setup_logging("WARNING")

    if len(sys.argv) < 2:
        print_help()
        return

    command = sys.argv[1].lower()

    if command == "status":
        cmd_status()
    elif command == "detail":
        cmd_detail()
    elif command == "clear":
        listing_id = sys.argv[2] if len(sys.argv) > 2 else None
        cmd_clear(listing_id)
    elif command == "clear-expired":
        cmd_clear_expired()
    elif command in ["help", "-h", "--help"]:
        print_help()
    else:
        print(f"Unknown command: {command}")
        print_help()


if __name__ == "__main__":
    main()
