# =============================================================================
# src/cli/listing.py — Directory Listing Commands
# =============================================================================
#
# Sub-commands:
#   cities              — every city, featured ones marked with '*'
#   places <city>       — a city's places through the listing query engine;
#                         <city> is an id or a case-insensitive name
#   serve               — run the FastAPI app with uvicorn
#
# Listing flags map one-to-one onto the HTTP query parameters:
#   --category (repeatable), --rating any|3plus|4plus|4.5plus,
#   --tag (repeatable), --sort popular|rating|newest
#
# --json prints the camelCase wire format, the same bodies the API returns.
# --json implies --quiet so stdout holds only the JSON document.
# =============================================================================

"""Standalone CLI for browsing the esploraCitta directory.

Usage::

    python -m src.cli cities
    python -m src.cli places Firenze --category Musei
    python -m src.cli places 1 --rating 4plus --sort rating --json
    python -m src.cli serve --host 127.0.0.1 --port 8080
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

import structlog

from src.config.settings import Settings
from src.interfaces.entity_store import IEntityStore
from src.models.directory import Category, City, Place
from src.models.listing import ListingQuery, RatingThreshold, SortMode
from src.providers.store.memory_store import MemoryEntityStore
from src.services.listing_query import apply_listing_query
from src.utils.logging import configure_logging


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _format_cities(cities: Sequence[City]) -> str:
    lines = [f"{'*' if c.is_featured else ' '} {c.id:>3}  {c.name} ({c.country})" for c in cities]
    return "\n".join(lines) if lines else "(no cities)"


def _format_places(city: City, places: Sequence[Place]) -> str:
    """Render one line per place: id, name, category, rating, reviews, price, tags."""
    header = f"{city.name}: {len(places)} place(s)"
    if not places:
        return header

    lines = [header, "-" * len(header)]
    for place in places:
        tags = ", ".join(place.tags)
        lines.append(
            f"{place.id:>3}  {place.name}  [{place.category.value}]  "
            f"{place.display_rating}/5.0 ({place.review_count} recensioni)  "
            f"{place.price_level}" + (f"  | {tags}" if tags else "")
        )
    return "\n".join(lines)


def _dump_json(records: Sequence[City] | Sequence[Place]) -> str:
    return json.dumps(
        [record.model_dump(mode="json", by_alias=True) for record in records],
        indent=2,
        ensure_ascii=False,
    )


def _emit(text: str, output_file: str | None) -> None:
    if output_file:
        Path(output_file).write_text(text, encoding="utf-8")
        print(f"Results written to: {output_file}", file=sys.stderr)
    else:
        print(text)


def _suppress_logs() -> None:
    """Send structlog and stdlib logging to stderr at WARNING+ only."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    logging.getLogger().setLevel(logging.WARNING)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def _resolve_city(store: IEntityStore, ref: str) -> City | None:
    if ref.isdigit():
        return await store.get_city(int(ref))
    return await store.get_city_by_name(ref)


async def _run_cities(store: IEntityStore, args: argparse.Namespace) -> int:
    cities = await store.list_cities()
    _emit(_dump_json(cities) if args.json_output else _format_cities(cities), args.output)
    return 0


async def _run_places(store: IEntityStore, args: argparse.Namespace) -> int:
    """List a city's places filtered and sorted by the command-line flags.

    Returns 0 on success, 1 when the city does not exist.
    """
    city = await _resolve_city(store, args.city)
    if city is None:
        print(f"Error: City not found: {args.city}", file=sys.stderr)
        return 1

    query = ListingQuery(
        categories=frozenset(Category(value) for value in args.category),
        rating=RatingThreshold(args.rating),
        tags=frozenset(args.tag),
        sort=SortMode(args.sort),
    )
    places = apply_listing_query(await store.list_places_by_city(city.id), query)

    _emit(_dump_json(places) if args.json_output else _format_places(city, places), args.output)
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = Settings()
    uvicorn.run(
        "src.main:app",
        host=args.host or settings.app_host,
        port=args.port or settings.app_port,
        reload=args.reload,
    )
    return 0


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.cli",
        description="Browse the esploraCitta directory from the command line.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output the camelCase JSON the API returns.",
    )
    common.add_argument(
        "--output", "-o",
        default=None,
        help="Write results to a file instead of stdout.",
    )
    common.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress log output (implied by --json).",
    )

    sub.add_parser("cities", parents=[common], help="List all cities.")

    places = sub.add_parser("places", parents=[common], help="List a city's places.")
    places.add_argument("city", help="City id or name (case-insensitive).")
    places.add_argument(
        "--category",
        action="append",
        default=[],
        choices=[c.value for c in Category],
        help="Keep only this category; repeat for several.",
    )
    places.add_argument(
        "--rating",
        default=RatingThreshold.ANY.value,
        choices=[r.value for r in RatingThreshold],
        help="Minimum displayed rating.",
    )
    places.add_argument(
        "--tag",
        action="append",
        default=[],
        help="Keep places carrying this tag; repeat to match any of several.",
    )
    places.add_argument(
        "--sort",
        default=SortMode.POPULAR.value,
        choices=[s.value for s in SortMode],
        help="Ordering (default: popular).",
    )

    serve = sub.add_parser("serve", help="Run the HTTP API with uvicorn.")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--reload", action="store_true")

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments, run the selected command and exit with its status."""
    args = _build_parser().parse_args(argv)

    if args.command == "serve":
        sys.exit(_run_serve(args))

    if args.quiet or args.json_output:
        _suppress_logs()
    else:
        configure_logging(log_level=Settings().log_level)

    store = MemoryEntityStore(seed=True)
    if args.command == "cities":
        exit_code = asyncio.run(_run_cities(store, args))
    else:
        exit_code = asyncio.run(_run_places(store, args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
