#!/usr/bin/env python3
"""Manual check of the live geocoding providers.

Subcommands:
- ``reverse LAT LNG``: resolve a coordinate through the provider fallback chain
- ``search QUERY``: run a street autocomplete query in the service area
- ``click LAT LNG [LAT LNG ...]``: replay map clicks through a selection session

Environment variables ``RIDELOCATE_*`` are honoured (see ``LocatorConfig.from_env``).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from ridelocate import Coordinate, InMemoryForm, LocatorConfig, RecordingMap, RideLocator


def _coordinates(values: list[float]) -> list[Coordinate]:
    if len(values) % 2:
        raise SystemExit("coordinates must be given as LAT LNG pairs")
    return [Coordinate(lat=values[i], lng=values[i + 1]) for i in range(0, len(values), 2)]


async def _reverse(locator: RideLocator, args: argparse.Namespace) -> int:
    address = await locator.resolve(Coordinate(lat=args.lat, lng=args.lng))
    print(f"{address.text}  [{address.source}{f' via {address.provider}' if address.provider else ''}]")
    return 0 if not address.is_degraded else 2


async def _search(locator: RideLocator, args: argparse.Namespace) -> int:
    service = locator.new_autocomplete()
    results = await service.search(args.query, debounce_ms=0)
    if not results:
        print("no suggestions")
        return 1
    for suggestion in results:
        c = suggestion.coordinate
        print(f"{suggestion.short_label:<30} {c.format()}  {suggestion.display_text}")
    return 0


async def _click(locator: RideLocator, args: argparse.Namespace) -> int:
    form = InMemoryForm()
    surface = RecordingMap()
    selector = locator.new_selection(form, surface)
    for coordinate in _coordinates(args.coords):
        slot = selector.armed_slot
        await selector.on_click(coordinate)
        print(f"{slot:<8} {form.get_field(slot.field_name)}")
    print(selector.status_hint())
    return 0


async def _run(args: argparse.Namespace) -> int:
    config = LocatorConfig.from_env()
    async with RideLocator(config) as locator:
        handler = {"reverse": _reverse, "search": _search, "click": _click}[args.command]
        return await handler(locator, args)


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("-v", "--verbose", action="store_true", help="enable DEBUG logging")
    sub = parser.add_subparsers(dest="command", required=True)

    reverse = sub.add_parser("reverse", help="coordinate -> address")
    reverse.add_argument("lat", type=float)
    reverse.add_argument("lng", type=float)

    search = sub.add_parser("search", help="street autocomplete")
    search.add_argument("query")

    click = sub.add_parser("click", help="replay map clicks")
    click.add_argument("coords", type=float, nargs="+")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
