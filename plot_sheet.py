#!/usr/bin/env python3
"""
Universal Plotting Sheet

This script plots celestial lines of position on a universal plotting
sheet, reports where they intersect and saves the sheet as an image,
GeoJSON and CSV.
"""

import argparse
import sys
from typing import List, Optional

from pydantic import ValidationError

from plotsheet.codec import format_integer_latitude, format_integer_longitude, format_position
from plotsheet.config import ConfigError, FixEntry, SheetConfig
from plotsheet.draft import DraftIncompleteError
from plotsheet.export import save_geojson, save_intersections_csv, sheet_to_geojson
from plotsheet.logging_config import setup_logging
from plotsheet.session import PlottingSession


def parse_fix_argument(value: str) -> FixEntry:
    """Parse ``DIST,T|A,ZN,LAT,LON`` into a FixEntry."""
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 5:
        raise argparse.ArgumentTypeError(
            f"expected DIST,T|A,ZN,LAT,LON but got {value!r}"
        )
    distance, direction, azimuth, latitude, longitude = parts
    direction = direction.upper()
    if direction not in ("T", "A"):
        raise argparse.ArgumentTypeError(f"direction must be T or A, not {parts[1]!r}")
    return FixEntry(distance=distance, direction=direction, azimuth=azimuth,
                    latitude=latitude, longitude=longitude)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Plot lines of position on a universal plotting sheet")
    parser.add_argument("--config", help="Path to YAML sheet configuration")
    parser.add_argument("--center-lat", help="Sheet center latitude, e.g. 35N")
    parser.add_argument("--center-lon", help="Sheet center longitude, e.g. 145W")
    parser.add_argument("--fix", action="append", type=parse_fix_argument, default=[],
                        metavar="DIST,T|A,ZN,LAT,LON",
                        help="Line of position to add (repeatable), e.g. '20,T,340,35N,145 18 W'")
    parser.add_argument("--width", type=float, help="Sheet width in pixels")
    parser.add_argument("--height", type=float, help="Sheet height in pixels")
    parser.add_argument("--pixel-ratio", type=float, help="Device pixel ratio of the output image")
    parser.add_argument("--output", help="Save the sheet image (PNG, SVG or PDF)")
    parser.add_argument("--geojson", help="Save lines and intersections as GeoJSON")
    parser.add_argument("--csv", help="Save intersections as CSV")
    parser.add_argument("--pointer", type=float, nargs=2, metavar=("X", "Y"),
                        help="Print the coordinate readout at this sheet pixel")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level")
    parser.add_argument("--log-file", help="Also write the log to this file")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SheetConfig:
    """
    Load the YAML configuration and apply command line overrides.

    Raises:
        FileNotFoundError: If the configuration file doesn't exist
        ConfigError: If the configuration is invalid
    """
    config = SheetConfig.from_yaml(args.config) if args.config else SheetConfig()
    data = config.model_dump()

    if args.center_lat is not None:
        data["center"]["latitude"] = args.center_lat
    if args.center_lon is not None:
        data["center"]["longitude"] = args.center_lon
    for key, value in (("width", args.width), ("height", args.height),
                       ("pixel_ratio", args.pixel_ratio)):
        if value is not None:
            data["surface"][key] = value
    data["fixes"].extend(fix.model_dump() for fix in args.fix)

    try:
        return SheetConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the plotting sheet."""
    args = parse_arguments(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        config = build_config(args)
        session = PlottingSession(config)
    except (FileNotFoundError, ConfigError, DraftIncompleteError) as e:
        print(f"✗ {e}")
        return 1

    center = session.center
    print(f"✓ Sheet centered on {format_integer_latitude(center.latitude)} "
          f"{format_integer_longitude(center.longitude)}")
    print(f"✓ {len(session.fixes)} lines of position, "
          f"{len(session.intersections)} intersections on the sheet")
    for intersection in session.intersections:
        a, b = intersection.pair
        print(f"  {a + 1} x {b + 1}: {format_position(intersection.geo)}")

    if args.pointer:
        readout = session.pointer_moved(*args.pointer)
        marker = " (snapped)" if readout.snapped else ""
        print(f"Pointer: {readout.text}{marker}")

    if args.output:
        session.save(args.output)
        print(f"✓ Sheet saved to {args.output}")

    if args.geojson:
        save_geojson(sheet_to_geojson(session.fixes, session.intersections, session.frame),
                     args.geojson)
        print(f"✓ GeoJSON saved to {args.geojson}")

    if args.csv:
        save_intersections_csv(session.intersections, args.csv)
        print(f"✓ Intersections saved to {args.csv}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
