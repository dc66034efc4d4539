"""Command-line interface for artwork-selector."""

import argparse
import json
import logging
import sys
from pathlib import Path

from artwork_selector.clients import ArtworksClient
from artwork_selector.controller import TableController
from artwork_selector.pagination import DEFAULT_ROWS, PaginationState
from schemas.artwork import Artwork

DEFAULT_BASE_URL = "https://api.artic.edu"
DISPLAY_FIELDS = [
    "id",
    "title",
    "place_of_origin",
    "artist_display",
    "inscriptions",
    "date_start",
    "date_end",
]
COLUMN_HEADERS = [
    "ID",
    "Title",
    "Place of Origin",
    "Artist",
    "Inscriptions",
    "Start Date",
    "End Date",
]
MAX_CELL_WIDTH = 30


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def build_config(base_url: str) -> dict:
    return {
        "base_url": base_url,
        "fields": DISPLAY_FIELDS,
        "headers": {
            "User-Agent": "artwork-selector/1.0",
        },
    }


def _cell(value) -> str:
    text = "" if value is None else " ".join(str(value).split())
    if len(text) > MAX_CELL_WIDTH:
        return text[: MAX_CELL_WIDTH - 1] + "…"
    return text


def format_rows(records: list[Artwork], selected_ids: frozenset[int] = frozenset()) -> str:
    """Render records as a fixed-width text table with a selection marker column."""
    table = [["", *COLUMN_HEADERS]]
    for record in records:
        marker = "[x]" if record.id in selected_ids else "[ ]"
        table.append([marker, *(_cell(getattr(record, name)) for name in DISPLAY_FIELDS)])

    widths = [max(len(row[i]) for row in table) for i in range(len(table[0]))]
    return "\n".join(
        "  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()
        for row in table
    )


def show_page(args: argparse.Namespace) -> int:
    """Execute the show-page command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        pagination = PaginationState(page=args.page, rows=args.rows)
    except ValueError as e:
        logger.error(str(e))
        return 1

    with ArtworksClient(build_config(args.base_url)) as client:
        controller = TableController(client, pagination=pagination)
        if not controller.reload():
            logger.error(f"Failed to fetch page {args.page}: {controller.last_error}")
            return 1
        view = controller.view()
        total_pages = controller.pagination.total_pages

    if not view.records:
        print("No data found")
        return 0

    print(format_rows(view.records))
    last = view.first + len(view.records)
    print(
        f"Showing {view.first + 1} to {last} of {view.total_records} entries "
        f"(page {view.page} of {total_pages})"
    )
    return 0


def select_count(args: argparse.Namespace) -> int:
    """Execute the select-count command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 when every requested record was selected, 1 otherwise)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    if args.count < 1:
        logger.error("--count must be at least 1")
        return 1

    try:
        pagination = PaginationState(page=args.page, rows=args.rows)
    except ValueError as e:
        logger.error(str(e))
        return 1

    with ArtworksClient(build_config(args.base_url)) as client:
        controller = TableController(client, pagination=pagination)
        try:
            result = controller.on_bulk_select_request(args.count)
        finally:
            controller.close()

    logger.info(f"Outcome: {result.outcome.value}")
    logger.info(f"  Requested: {result.requested}")
    logger.info(f"  Selected: {len(result.selected_ids)}")
    logger.info(f"  Pages fetched: {result.pages_fetched}")
    if result.exhausted:
        logger.info("  Collection exhausted before the requested count")
    if result.partial:
        logger.warning(f"  Stopped early: {result.error}")

    for record_id in result.selected_ids:
        print(record_id)

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(
            json.dumps(
                {
                    "requested": result.requested,
                    "outcome": result.outcome.value,
                    "partial": result.partial,
                    "selected_ids": list(result.selected_ids),
                },
                indent=2,
            )
        )
        logger.info(f"  Output: {args.output}")

    return 0 if result.succeeded else 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="artwork-selector",
        description="Browse and bulk-select records from the Art Institute of Chicago collection",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--base-url",
        type=str,
        default=DEFAULT_BASE_URL,
        help=f"Collection API base URL (default: {DEFAULT_BASE_URL})",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    show_parser = subparsers.add_parser(
        "show-page",
        help="Fetch and print one page of artworks",
        description="Fetch one page of the artworks collection and print it as a table.",
    )
    show_parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="1-based page number (default: 1)",
    )
    show_parser.add_argument(
        "--rows",
        type=int,
        default=DEFAULT_ROWS,
        help=f"Rows per page (default: {DEFAULT_ROWS})",
    )
    show_parser.set_defaults(func=show_page)

    select_parser = subparsers.add_parser(
        "select-count",
        help="Select the first N artworks starting at a page",
        description="Walk forward page by page from --page and select the first --count artworks in server order.",
    )
    select_parser.add_argument(
        "--count",
        type=int,
        required=True,
        help="Number of artworks to select",
    )
    select_parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="1-based page to start from (default: 1)",
    )
    select_parser.add_argument(
        "--rows",
        type=int,
        default=DEFAULT_ROWS,
        help=f"Rows per page (default: {DEFAULT_ROWS})",
    )
    select_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the selection result as JSON to this file",
    )
    select_parser.set_defaults(func=select_count)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
