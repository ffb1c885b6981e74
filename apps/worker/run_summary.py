from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from packages.core.config import settings
from packages.ingest.fasten.store import get_store
from packages.transform import list_practitioners, transform_fasten_health_data


def main() -> int:
    parser = argparse.ArgumentParser(description="Summarize a Fasten Health bundle.")
    parser.add_argument("path", type=Path, help="Path to the bundle JSON file.")
    parser.add_argument("--top", type=int, default=5, help="Number of providers to list.")
    parser.add_argument("--json", action="store_true", help="Emit the health summary as JSON.")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level)

    try:
        store = get_store(args.path)
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    summary = transform_fasten_health_data(store)
    if args.json:
        print(summary.model_dump_json(by_alias=True))
        return 0

    print(f"Bundle: {args.path}")
    print(f"Reports: {len(store.diagnostic_reports)}")
    print(f"Observations: {len(store.observations)}")
    print(f"Practitioners: {len(store.practitioner_list)}")
    print(f"Encounters: {len(store.encounters)}")
    print(f"Medications: {len(summary.medications)}")
    print("Top providers:")
    for provider in list_practitioners(store)[: args.top]:
        print(f"- {provider.name} ({provider.engagement_count or 0})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
