"""CLI for trying the area resolver from a terminal.

Usage:
    python -m pinsight.data.resolve_cli --lat 1.3162 --lng 103.7649
    python -m pinsight.data.resolve_cli "Tampines"
    python -m pinsight.data.resolve_cli --areas
"""

import argparse
import asyncio

from pinsight.data.resolver import AreaResolver
from pinsight.engine.insights import density_label, dominant_dwelling
from pinsight.models.area import GeoPoint
from pinsight.models.resolution import Provenance, ResolutionFailure, ResolutionResult


def print_result(result: ResolutionResult) -> None:
    d = result.demographics
    print(f"\n{'=' * 60}")
    print(f"  {result.resolved_area}")
    print(f"{'=' * 60}")
    print(f"  Point:            {result.point.latitude:.5f}, {result.point.longitude:.5f}")
    if result.provenance is Provenance.OFFLINE_ESTIMATE:
        print("  Area source:      estimated (offline mode)")
    else:
        print("  Area source:      OneMap")
    print(f"  Data source:      {result.data_source}")
    print()
    print(f"  Population:       {d.population:,}")
    print(f"  Density:          {d.density:,} /km² ({density_label(d.density)})")
    print(f"  Median age:       {d.median_age}")
    print(f"  Median HH income: ${d.median_household_income:,} /month")
    dwell = d.dwellings
    print(
        f"  Dwellings:        HDB {dwell.hdb}%  Condo {dwell.condo}%  "
        f"Landed {dwell.landed}%  Other {dwell.other}%  (dominant: {dominant_dwelling(dwell).upper()})"
    )
    ages = d.age_groups
    print(f"  Age bands:        0-24 {ages.young}%  25-64 {ages.working}%  65+ {ages.senior}%")
    print()
    for tip in result.insights:
        print(f"  {tip.icon}  {tip.text}")
    print()


def print_failure(failure: ResolutionFailure) -> None:
    print(f"\n  No data found: {failure.message}\n")


async def main() -> None:
    parser = argparse.ArgumentParser(description="Resolve a Singapore location to its planning area")
    parser.add_argument("query", nargs="?", help="Place name, address or postal code")
    parser.add_argument("--lat", type=float, help="Latitude (WGS-84)")
    parser.add_argument("--lng", type=float, help="Longitude (WGS-84)")
    parser.add_argument("--areas", action="store_true", help="List known planning areas")

    args = parser.parse_args()
    resolver = AreaResolver()

    if args.areas:
        for name in resolver.reference.list_all_area_names():
            print(name)
        return

    if args.lat is not None and args.lng is not None:
        result = await resolver.resolve_point(GeoPoint(latitude=args.lat, longitude=args.lng))
    elif args.query:
        result = await resolver.resolve_query(args.query)
    else:
        parser.error("a query or both --lat and --lng are required (unless using --areas)")

    if isinstance(result, ResolutionFailure):
        print_failure(result)
    else:
        print_result(result)


if __name__ == "__main__":
    asyncio.run(main())
