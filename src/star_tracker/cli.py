"""
Command line entry point.

Points the mount at one or more catalog objects in turn. Each target is
planned relative to the previous one, and the resulting step commands are
posted to the actuator unless --dry-run is given.
"""

import argparse
import asyncio
import sys
from datetime import datetime, timezone

from .catalog import load_catalog
from .config import load_config, profile_from_config
from .coordinates import GeographicPosition
from .errors import (
    BelowHorizonError,
    ConfigurationError,
    CatalogError,
    LocationUnavailableError,
)
from .providers import FixedClock, StaticLocationProvider, SystemClock, location_from_config
from .session import PointingSession
from .transport import StepTransport


def parse_time(text: str) -> datetime:
    """ISO 8601 time; naive values are taken as UTC."""
    instant = datetime.fromisoformat(text)
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Point an alt-az stepper mount at catalog stars"
    )
    parser.add_argument("targets", nargs="+", help="Catalog object names, in order")
    parser.add_argument("-c", "--config", help="Path to a YAML config file")
    parser.add_argument("--lat", type=float, help="Observer latitude (deg)")
    parser.add_argument("--lon", type=float, help="Observer longitude (deg, east +)")
    parser.add_argument("-t", "--time", type=parse_time, help="UTC time, ISO 8601")
    parser.add_argument("-u", "--url", help="Actuator base URL")
    parser.add_argument(
        "-n", "--dry-run", action="store_true", help="Compute steps without sending"
    )
    return parser


async def run(args) -> int:
    try:
        config = load_config(args.config)
        profile = profile_from_config(config)
        catalog = load_catalog((config.get("catalog") or {}).get("path"))
    except (ConfigurationError, CatalogError) as e:
        print(f"Error: {e}")
        return 2

    if args.lat is not None and args.lon is not None:
        location = StaticLocationProvider(GeographicPosition(args.lat, args.lon))
    else:
        location = location_from_config(config)
    clock = FixedClock(args.time) if args.time else SystemClock()
    session = PointingSession(location, clock=clock, profile=profile)

    transport = None
    if not args.dry_run:
        transport = StepTransport.from_config(config)
        if args.url:
            transport.base_url = args.url.rstrip("/")

    status = 0
    try:
        for name in args.targets:
            try:
                entry = catalog.find(name)
                command = await session.point_at(entry.coordinate, name=entry.name)
            except CatalogError as e:
                print(f"Error: {e}")
                status = 1
                continue
            except BelowHorizonError as e:
                print(f"{name}: below the horizon (altitude {e.altitude:.1f}), skipped")
                status = 1
                continue
            except LocationUnavailableError as e:
                print(f"Error: {e}. Set observer latitude/longitude or use --lat/--lon.")
                return 1

            pos = session.current
            print(
                f"{entry.name}: AZM {pos.azimuth:7.2f} ALT {pos.altitude:6.2f} -> "
                f"steps AZM {command.azimuth_steps:+d} ALT {command.altitude_steps:+d}"
            )
            if transport is not None and not await transport.send(command):
                status = 1
    finally:
        if transport is not None:
            await transport.close()

    return status


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if (args.lat is None) != (args.lon is None):
        print("Error: --lat and --lon must be given together")
        return 2
    try:
        return asyncio.run(run(args))
    except ValueError as e:
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
