from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from packages.categorize import get_categorized_providers_summary
from packages.core.config import settings
from packages.ingest.fasten.store import get_store
from packages.transform import list_categorized_providers


def main() -> int:
    parser = argparse.ArgumentParser(description="Categorize the providers in a bundle.")
    parser.add_argument("path", type=Path, help="Path to the bundle JSON file.")
    parser.add_argument("--json", action="store_true", help="Emit JSON output.")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level)

    try:
        store = get_store(args.path)
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    providers = list_categorized_providers(store)
    summary = get_categorized_providers_summary(providers)
    if args.json:
        print(summary.model_dump_json(by_alias=True))
        return 0

    print(f"Providers: {summary.total_providers}")
    for category in summary.categories:
        print(f"{category.name}: {category.count}")
        for sub in category.sub_categories or []:
            print(f"  {sub.name}: {sub.count}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
