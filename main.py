"""
Main entry point for the location hierarchy application.

This script provides the command-line interface for browsing the location
table, resolving and expanding search text, suggesting neighborhoods and
summarizing rating submissions.
"""

import argparse
import json
import sys
from pathlib import Path

# Add the current directory to Python path for imports
sys.path.insert(0, str(Path(__file__).parent))

from location_hierarchy.config import HierarchyConfig, VALID_LOG_LEVELS
from location_hierarchy.exceptions import LocationHierarchyError
from location_hierarchy.hierarchy import LocationHierarchy, to_path_segment
from location_hierarchy.logging_config import setup_logging
from location_hierarchy.ratings import RatingStore


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Location Hierarchy - canonical city, district and neighborhood lookups"
    )

    parser.add_argument(
        "--data-file",
        help="Path to a city,district,neighborhood CSV (default: packaged table)"
    )

    parser.add_argument(
        "--log-level",
        choices=VALID_LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)"
    )

    parser.add_argument(
        "--log-file",
        help="Optional log file path"
    )

    parser.add_argument(
        "--no-fuzzy",
        action="store_true",
        help="Disable fuzzy suggestions for misspelled search text"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("cities", help="List every city")

    districts = subparsers.add_parser("districts", help="List the districts of a city")
    districts.add_argument("city")

    neighborhoods = subparsers.add_parser("neighborhoods", help="List neighborhoods of a city")
    neighborhoods.add_argument("city")
    neighborhoods.add_argument("--district", help="Only this district's neighborhoods")

    expand = subparsers.add_parser("expand", help="Expand search text into neighborhoods")
    expand.add_argument("query")
    expand.add_argument("--city", required=True)

    resolve = subparsers.add_parser("resolve", help="Resolve a name to its district")
    resolve.add_argument("name")
    resolve.add_argument("--city", required=True)

    search = subparsers.add_parser("search", help="Suggest neighborhoods for partial text")
    search.add_argument("query")
    search.add_argument("--min-length", type=int, help="Minimum query length")
    search.add_argument("--limit", type=int, help="Maximum number of suggestions")

    subparsers.add_parser("validate", help="Validate the location table and print its size")

    ratings = subparsers.add_parser("ratings", help="Summarize a CSV of rating submissions")
    ratings.add_argument("file")
    ratings.add_argument("--json", action="store_true", help="Print summaries as JSON")

    return parser.parse_args(argv)


def print_lines(lines):
    """Print one value per line, or a marker when there are none."""
    if not lines:
        print("(no results)")
        return
    for line in lines:
        print(line)


def run_command(args, hierarchy: LocationHierarchy, logger) -> int:
    """Execute one subcommand against a loaded hierarchy."""
    if args.command == "cities":
        print_lines(hierarchy.list_cities())

    elif args.command == "districts":
        print_lines(hierarchy.list_districts(args.city))

    elif args.command == "neighborhoods":
        print_lines(hierarchy.list_neighborhoods(args.city, args.district))

    elif args.command == "expand":
        location_filter = hierarchy.resolve_filter(args.query, args.city)
        if location_filter is not None:
            logger.info(f"Resolved '{args.query}' to {location_filter.describe()}")
        print_lines(hierarchy.expand_search(args.query, args.city))

    elif args.command == "resolve":
        district = hierarchy.find_parent_district(args.name, args.city)
        if district is None:
            print("(no results)")
        else:
            print(district)
            print(f"/neighborhoods/{to_path_segment(args.name)}")

    elif args.command == "search":
        print_lines(hierarchy.search_by_prefix_or_substring(
            args.query, min_length=args.min_length, limit=args.limit
        ))

    elif args.command == "validate":
        stats = hierarchy.stats()
        print(f"Cities: {stats.cities}")
        print(f"Districts: {stats.districts}")
        print(f"Neighborhoods: {stats.neighborhoods}")

    elif args.command == "ratings":
        store = RatingStore(hierarchy, logger=logger.logger)
        stored, skipped = store.load_csv(args.file, show_progress=sys.stderr.isatty())
        logger.log_file_operation("Imported ratings", args.file, stored)
        if skipped:
            logger.log_data_quality_warning(f"{skipped} rating rows skipped")

        summaries = store.summaries()
        if args.json:
            print(json.dumps([summary.to_dict() for summary in summaries],
                             ensure_ascii=False, indent=2))
        else:
            for summary in summaries:
                label = hierarchy.format_display_name(*summary.key.as_tuple())
                print(f"{label}: {summary.overall:.1f} ({summary.count} ratings)")
            if not summaries:
                print("(no results)")

    return 0


def main(argv=None) -> int:
    """Main application entry point."""
    args = parse_arguments(argv)

    try:
        config = HierarchyConfig(
            data_file=args.data_file,
            enable_fuzzy_suggestions=not args.no_fuzzy,
            log_level=args.log_level,
            log_file=args.log_file
        )
        # stdout carries command output
        logger = setup_logging(config, stream=sys.stderr)

        hierarchy = LocationHierarchy.from_config(config, logger=logger.logger)
        logger.log_hierarchy_loaded(hierarchy.stats(), str(config.resolve_data_file()))

        return run_command(args, hierarchy, logger)

    except LocationHierarchyError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        for issue in e.context.get('issues', [])[1:]:
            print(f"  - {issue}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
