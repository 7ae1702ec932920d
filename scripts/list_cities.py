#!/usr/bin/env python3
"""List the stored city collection.

Usage
-----
Set environment variables and run::

    export WORLDWISE_SUPABASE_URL="https://<ref>.supabase.co"
    export WORLDWISE_API_KEY="..."
    python scripts/list_cities.py

Options::

    --json               Output as machine-readable JSON
    --city ID            Also load this city as the current city
    -v, --verbose        Enable DEBUG logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyworldwise import WorldwiseClient, WorldwiseConfig, WorldwiseConfigError  # noqa: E402


async def _run(args: argparse.Namespace) -> int:
    try:
        config = WorldwiseConfig.from_env()
    except WorldwiseConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    async with WorldwiseClient(config) as client:
        if args.city:
            await client.get_city(args.city)

        if client.error:
            print(client.error, file=sys.stderr)
            return 1

        if args.json:
            payload = {
                "cities": [city.model_dump(by_alias=True) for city in client.cities],
                "currentCity": client.current_city.model_dump(by_alias=True) if client.current_city else {},
            }
            print(json.dumps(payload, indent=2, ensure_ascii=False))
            return 0

        for city in client.cities:
            lat, lng = city.position.as_tuple()
            print(f"{city.emoji} {city.city_name} ({city.country})  {city.date}  [{lat:.4f}, {lng:.4f}]")
        if client.current_city is not None:
            print(f"\nCurrent: {client.current_city.city_name}: {client.current_city.notes}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument("--city", default=None, help="Load this city id as the current city")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
