#!/usr/bin/env python
"""
CompLens valuation CLI

Collects the given kv.ee listings, ranks them and, when any feature
option is given, estimates a price for those features.

Usage:
    python scripts/valuate.py 3435688 3473089 3475429
    python scripts/valuate.py 3435688 3473089 --rooms 3 --year 1990 --area "70 m²"
"""

import argparse
import sys
from pathlib import Path

# project root on the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from complens.domain.errors import ValuationError
from complens.data_sources import BlockedError
from complens.log import setup_logging
from complens.pipeline import ValuationPipeline
from complens.schemas.listing import FeatureSet


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rank kv.ee listings and estimate a price")
    parser.add_argument("listing_ids", nargs="+", help="kv.ee listing ids")
    parser.add_argument("--rooms", help="Number of rooms")
    parser.add_argument("--year", help="Built-in year")
    parser.add_argument("--area", help='Total area, e.g. "70 m²"')
    parser.add_argument("--condition", help='Condition label, e.g. "Good condition"')
    parser.add_argument("--floors", help="Number of floors")
    parser.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL setting)")
    return parser


def build_query(args: argparse.Namespace):
    values = {
        "rooms": args.rooms,
        "builtInYear": args.year,
        "totalArea": args.area,
        "condition": args.condition,
        "numberOfFloors": args.floors,
    }
    if all(value is None for value in values.values()):
        return None
    return FeatureSet.model_validate(values)


def main() -> int:
    args = build_parser().parse_args()
    setup_logging(args.log_level)

    try:
        report = ValuationPipeline().run(listing_ids=args.listing_ids, query=build_query(args))
    except (ValuationError, BlockedError) as e:
        print(f"Valuation failed: {e}", file=sys.stderr)
        return 1

    print("=" * 50)
    print(f"Ranked {report.collected_count}/{len(report.requested_ids)} listings")
    if report.skipped_ids:
        print(f"Skipped: {', '.join(report.skipped_ids)}")
    print("=" * 50)

    for entry in report.curve:
        print(f"  {entry.id:<10} {entry.point:>10.1f}  {entry.price}")

    if report.estimate is not None:
        print("-" * 50)
        print(f"  Query point: {report.estimate.point:.1f}")
        print(f"  Estimated price: {report.estimate.price:,.0f} ({report.estimate.method})")

    return 0


if __name__ == "__main__":
    sys.exit(main())
