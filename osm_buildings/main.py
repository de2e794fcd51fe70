"""
OSM Buildings - Main CLI

Fetches an OSM building, assembles its model and prints the resolved
building snapshot.

Usage:
    python -m osm_buildings.main <way|relation> <id> [--osm-file <path>]

Example:
    python -m osm_buildings.main way 366300254
    python -m osm_buildings.main relation 2111134 --json --bundles
"""

import argparse
import json
import logging
import sys
from typing import List, Optional
from xml.etree.ElementTree import ParseError

from . import __version__
from .config import DOWNLOAD_TIMEOUT, ModelConfig
from .exceptions import OSMBuildingError
from .models.building import Building

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """
    Configure logging to console and optionally to file.

    Args:
        verbose: If True, use DEBUG level; otherwise INFO
        log_file: Optional path to log file. If provided, logs will be written to file.
    """
    level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    # Console goes to stderr so --json output stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)  # Always log DEBUG to file
        file_formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)


def build_report(building: Building, include_bundles: bool = False) -> dict:
    """Building snapshot, optionally with the render bundle of every part."""
    report = building.get_info()
    report['home'] = list(building.home)
    if include_bundles:
        report['bundles'] = [bundle.to_dict() for bundle in building.render_bundles()]
    return report


def print_summary(building: Building) -> None:
    options = building.options
    print(f"\n{building.type.value.capitalize()} {building.id}")
    print(f"Home: lon={building.home[0]:.7f} lat={building.home[1]:.7f}")
    print(f"Height: {options.building.height}m (min {options.building.min_height}m)")
    print(f"Roof: {options.roof.shape}, {options.roof.height}m")
    print(f"Parts: {len(building.parts)}")

    for bundle in building.render_bundles():
        roof = bundle.roof.shape.value if bundle.roof else 'none'
        print(f"  {bundle.part_id}: walls {bundle.wall_depth:.2f}m at {bundle.wall_base:.2f}m, "
              f"roof {roof}, material {bundle.wall_material.name}")
        for warning in bundle.warnings:
            print(f"    warning: {warning}")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='osm-buildings',
        description='OSM Buildings - Build a 3D-ready model of an OSM building'
    )

    parser.add_argument(
        'kind',
        choices=['way', 'relation'],
        help='OSM element kind of the building'
    )

    parser.add_argument(
        'id',
        type=int,
        help='OSM ID of the building way or relation'
    )

    parser.add_argument(
        '--osm-file',
        default=None,
        help='Read OSM data from a local .osm file instead of the OSM API'
    )

    parser.add_argument(
        '--server',
        action='append',
        default=None,
        help='OSM API base URL (repeatable; default: api.openstreetmap.org)'
    )

    parser.add_argument(
        '--timeout',
        type=float,
        default=DOWNLOAD_TIMEOUT,
        help=f'Request timeout in seconds (default: {DOWNLOAD_TIMEOUT})'
    )

    parser.add_argument(
        '--retries',
        type=int,
        default=2,
        help='Retries per request (default: 2)'
    )

    parser.add_argument(
        '--no-scope-parts',
        action='store_true',
        help='Keep every building:part in the data, not only those inside the building'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the building snapshot as JSON'
    )

    parser.add_argument(
        '--bundles',
        action='store_true',
        help='Include render bundles in the JSON snapshot'
    )

    parser.add_argument(
        '--output',
        default=None,
        help='Write the JSON snapshot to this file'
    )

    parser.add_argument(
        '--log-file',
        default=None,
        help='Also write a DEBUG log to this file'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose output'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = create_parser().parse_args(argv)

    setup_logging(args.verbose, args.log_file)

    try:
        config_kwargs = dict(
            timeout=args.timeout,
            retry_count=args.retries,
            osm_path=args.osm_file,
            scope_part_scan=not args.no_scope_parts,
            verbose=args.verbose,
        )
        if args.server:
            config_kwargs['api_servers'] = args.server
        config = ModelConfig(**config_kwargs)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    try:
        building = Building.create(args.kind, args.id, config=config)
    except (OSMBuildingError, ParseError) as e:
        logger.error(f"Failed to build {args.kind} {args.id}: {e}")
        if args.log_file:
            print(f"See log file for details: {args.log_file}", file=sys.stderr)
        return 1

    if args.json or args.output:
        report = build_report(building, include_bundles=args.bundles)
        text = json.dumps(report, indent=2)
        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(text)
            logger.info(f"Report saved to {args.output}")
        if args.json:
            print(text)
    else:
        print_summary(building)

    return 0


if __name__ == '__main__':
    sys.exit(main())
