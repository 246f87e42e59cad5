"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

import pandas as pd

from gbif_names import __version__
from gbif_names.config import get_settings
from gbif_names.datasources.gbif import NameLookupResult, name_lookup
from gbif_names.errors import GbifNamesError
from gbif_names.schemas import Habitat, Output, TaxonomicStatus

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str) -> None:
    """Send package logs to stderr at ``level``."""
    logger = logging.getLogger("gbif_names")
    logger.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="gbif-names",
        description="Look up scientific names across GBIF checklists",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    lookup = subparsers.add_parser("lookup", help="Search names (GET /species/search)")
    lookup.add_argument("query", nargs="?", default=None, help="Full text query")
    lookup.add_argument("--rank", nargs="+", help="Rank filter(s), e.g. genus family")
    lookup.add_argument("--higher-taxon-key", nargs="+", help="Higher taxon key(s)")
    lookup.add_argument(
        "--status",
        nargs="+",
        type=str.lower,
        choices=[s.value for s in TaxonomicStatus],
        help="Taxonomic status (any case)",
    )
    lookup.add_argument(
        "--habitat", nargs="+", type=str.lower, choices=[h.value for h in Habitat]
    )
    lookup.add_argument("--name-type", nargs="+", help="Name type(s), e.g. cultivar")
    lookup.add_argument("--dataset-key", nargs="+", help="Checklist dataset key(s)")
    lookup.add_argument("--nomenclatural-status", nargs="+")
    extinct = lookup.add_mutually_exclusive_group()
    extinct.add_argument("--extinct", dest="is_extinct", action="store_true", default=None)
    extinct.add_argument("--not-extinct", dest="is_extinct", action="store_false", default=None)
    lookup.add_argument("--limit", type=int, default=100, help="Page size (default: 100)")
    lookup.add_argument("--start", type=int, default=None, help="Record offset")
    lookup.add_argument("--facet", nargs="+", help="Field(s) to facet on")
    # Kept as text: GBIF rejects a numeric facetMincount.
    lookup.add_argument("--facet-mincount", type=str, default=None)
    lookup.add_argument("--facet-multiselect", action="store_true", default=None)
    lookup.add_argument("--hl", action="store_true", default=None, help="Highlight matches")
    lookup.add_argument("--type", dest="search_type", default=None, help="GBIF search type")
    lookup.add_argument(
        "--output",
        choices=[o.value for o in Output],
        default=Output.ALL.value,
        help="View to print (default: all)",
    )
    lookup.add_argument("--verbose", action="store_true", help="Print raw result records")
    lookup.add_argument("--all-pages", action="store_true", help="Follow pages to the end")

    subparsers.add_parser("info", help="Show application info")

    return parser


def _render(view: Any) -> str:
    """Render a view as text."""
    if isinstance(view, NameLookupResult):
        return "\n\n".join(f"== {name} ==\n{_render(v)}" for name, v in view.as_dict().items())
    if isinstance(view, pd.DataFrame):
        return view.to_string(index=False) if not view.empty else "(empty)"
    if isinstance(view, dict):
        if not view:
            return "(empty)"
        return "\n\n".join(f"-- {key} --\n{_render(v)}" for key, v in view.items())
    return json.dumps(view, indent=2, default=str)


def cmd_lookup(args: argparse.Namespace) -> int:
    """Handle the 'lookup' command."""
    try:
        view = name_lookup(
            args.query,
            rank=args.rank,
            higher_taxon_key=args.higher_taxon_key,
            status=args.status,
            is_extinct=args.is_extinct,
            habitat=args.habitat,
            name_type=args.name_type,
            dataset_key=args.dataset_key,
            nomenclatural_status=args.nomenclatural_status,
            limit=args.limit,
            start=args.start,
            facet=args.facet,
            facet_mincount=args.facet_mincount,
            facet_multiselect=args.facet_multiselect,
            search_type=args.search_type,
            hl=args.hl,
            verbose=args.verbose,
            output=args.output,
            paginate=args.all_pages,
        )
    except GbifNamesError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(_render(view))
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"GBIF API: {settings.gbif_base_url}")
    print(f"Timeout: {settings.timeout}s")
    print(f"Debug: {settings.debug}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging("DEBUG" if args.debug or settings.debug else settings.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "lookup": cmd_lookup,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
