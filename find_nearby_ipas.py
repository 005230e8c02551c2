#!/usr/bin/env python3
"""
Indigenous Protected Areas Explorer (command line)

Loads the national IPA dataset, then lists areas matching a name/state
filter and, optionally, the areas nearest to a town.

Examples:
  python find_nearby_ipas.py --name ngunya
  python find_nearby_ipas.py --state NT
  python find_nearby_ipas.py --town Ballina --state NSW
  python find_nearby_ipas.py --town "Alice Springs" --limit 10 --export nearby.geojson
  python find_nearby_ipas.py --validate
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List

from ipa_data import ALL_STATES, IPAConfig, ProtectedArea, ProtectedAreaExplorer
from ipa_data.sources.protected_areas import to_geodataframe
from ipa_data.utils.search import state_name
from ipa_data.validation import ValidationError, validate_feature_collection

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def print_areas(areas: List[ProtectedArea]) -> None:
    """Print one line per area."""
    if not areas:
        print("  No protected areas match your current filters.")
        return

    for area in areas:
        line = f"  [{area.id:4}] {area.name} ({area.state} · {area.type}) - {area.managing_body}"
        if area.distance_km is not None:
            line += f" - approx. {area.distance_km:.0f} km away"
        print(line)


def export_areas(areas: List[ProtectedArea], output: Path) -> None:
    """Write areas with coordinates to a GeoJSON file."""
    gdf = to_geodataframe(areas)
    if gdf.empty:
        logger.warning(f"Nothing to export to {output}")
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w") as f:
        f.write(gdf.to_json())
    print(f"\n💾 Exported {len(gdf)} areas to {output}")


async def run(args: argparse.Namespace) -> int:
    config = IPAConfig.from_env(nearest_limit=args.limit)
    explorer = ProtectedAreaExplorer(config)

    try:
        print("\nLoading Indigenous Protected Areas…")
        if not await explorer.load():
            print(f"❌ {explorer.load_error}")
            return 1

        print(f"✅ Loaded {len(explorer.areas)} areas")

        if args.validate:
            try:
                warnings = validate_feature_collection(explorer.collection, explorer.areas)
            except ValidationError as e:
                print(f"❌ Validation failed: {e}")
                return 1
            print(f"✅ Validation passed ({len(warnings)} warnings)")

        explorer.set_search_term(args.name)
        explorer.set_state_filter(args.state)

        results = explorer.filtered_areas
        if explorer.has_filter:
            print(f"\nIPAs matching your filters ({len(results)}):")
            print_areas(results)
        elif not args.town:
            print("\nAvailable states/territories:")
            for code in explorer.states:
                print(f"  {code:4} {state_name(code)}")

        if args.town:
            place = await explorer.search_town(args.town)
            if place is None:
                print(f"\n❌ {explorer.town_error}")
                return 1

            results = explorer.nearby_areas
            print(f"\nNearest Indigenous Protected Areas to {place.display_name}:")
            print_areas(results)

        if args.export:
            export_areas(results, args.export)

        if args.json:
            print(json.dumps([area.model_dump() for area in results], indent=2))

        return 0

    finally:
        await explorer.close()


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Explore Indigenous Protected Areas across Australia"
    )
    parser.add_argument("--name", default="", help="Part of an IPA name (case-insensitive)")
    parser.add_argument(
        "--state",
        default=ALL_STATES,
        help="State/territory code, e.g. NSW (default: all)",
    )
    parser.add_argument("--town", help="Town or community to find nearby IPAs for")
    parser.add_argument("--limit", type=int, default=5, help="Number of nearby IPAs (default: 5)")
    parser.add_argument("--export", type=Path, help="Write the listed areas to a GeoJSON file")
    parser.add_argument("--json", action="store_true", help="Print the listed areas as JSON")
    parser.add_argument("--validate", action="store_true", help="Run data quality checks")
    args = parser.parse_args()

    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
