"""Command-line entrypoint for parsing, indexing and searching the catalog."""

import argparse
import json
import logging
import sqlite3
import sys
from collections.abc import Sequence
from pathlib import Path

from fmhy_catalog.config import Settings, get_settings
from fmhy_catalog.database import CatalogDatabase
from fmhy_catalog.indexer import CatalogIndexer

logger = logging.getLogger("fmhy_catalog.cli")


def configure_logging(level: str, verbose: bool = False) -> None:
    """Configure root logging for the command line.

    Args:
        level: Name of the log level, e.g. ``INFO``.
        verbose: Force debug logging regardless of ``level``.

    Raises:
        ValueError: If ``level`` is not a known log level name.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        msg = f"Unknown log level: {level}"
        raise ValueError(msg)

    logging.basicConfig(
        level=logging.DEBUG if verbose else numeric_level,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


def command_parse(args: argparse.Namespace, settings: Settings) -> int:
    """Parse the documents and write the collection as JSON.

    Args:
        args: Parsed command-line arguments.
        settings: Active settings.

    Returns:
        Process exit status.
    """
    indexer = CatalogIndexer(version=settings.version)
    collection = indexer.load_directory(args.docs_path, args.documents)
    payload = json.dumps(collection.to_dict(), ensure_ascii=False, indent=2)

    if args.output:
        args.output.write_text(payload + "\n", encoding="utf-8")
        logger.info(
            "Wrote %d documents (%d items) to %s",
            collection.metadata.total_documents,
            collection.metadata.total_items,
            args.output,
        )
    else:
        sys.stdout.write(payload + "\n")
    return 0


def command_index(args: argparse.Namespace, settings: Settings) -> int:
    """Rebuild the item database from the documents.

    Args:
        args: Parsed command-line arguments.
        settings: Active settings.

    Returns:
        Process exit status.
    """
    database = CatalogDatabase(args.database)
    indexer = CatalogIndexer(database, version=settings.version)
    count = indexer.rebuild_index(args.docs_path, args.documents)
    logger.info("Indexed %d documents, %d items", count, database.get_item_count())
    return 0


def command_search(args: argparse.Namespace, settings: Settings) -> int:
    """Search indexed items and print one entry per match.

    Args:
        args: Parsed command-line arguments.
        settings: Active settings.

    Returns:
        Process exit status.
    """
    database = CatalogDatabase(args.database)
    results = database.search(args.query, document=args.document, starred_only=args.starred, limit=args.limit)
    for result in results:
        star = "* " if result.is_starred else ""
        location = " / ".join(part for part in (result.section, result.subsection) if part)
        sys.stdout.write(f"{star}{result.name} [{result.filename}: {location}]\n")
        if result.description:
            sys.stdout.write(f"    {result.description}\n")
    if not results:
        logger.info("No items matched %r", args.query)
    return 0


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    """Build the argument parser, taking defaults from settings.

    Args:
        settings: Active settings.

    Returns:
        ArgumentParser with the ``parse``, ``index`` and ``search`` subcommands.
    """
    parser = argparse.ArgumentParser(prog="fmhy-catalog", description=__doc__)
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    documents_help = "Only parse these filenames (default: configured document list)"

    parse_cmd = subparsers.add_parser("parse", help="Parse documents and write the collection as JSON")
    parse_cmd.add_argument("--docs-path", type=Path, default=settings.docs_path)
    parse_cmd.add_argument("--documents", nargs="+", default=settings.documents, help=documents_help)
    parse_cmd.add_argument("--all", dest="documents", action="store_const", const=None, help="Parse every *.md file")
    parse_cmd.add_argument("--output", type=Path, help="Write JSON here instead of stdout")
    parse_cmd.set_defaults(handler=command_parse)

    index_cmd = subparsers.add_parser("index", help="Rebuild the searchable item database")
    index_cmd.add_argument("--docs-path", type=Path, default=settings.docs_path)
    index_cmd.add_argument("--documents", nargs="+", default=settings.documents, help=documents_help)
    index_cmd.add_argument("--all", dest="documents", action="store_const", const=None, help="Index every *.md file")
    index_cmd.add_argument("--database", type=Path, default=settings.database_path)
    index_cmd.set_defaults(handler=command_index)

    search_cmd = subparsers.add_parser("search", help="Search indexed items")
    search_cmd.add_argument("query")
    search_cmd.add_argument("--database", type=Path, default=settings.database_path)
    search_cmd.add_argument("--document", help="Restrict results to one filename")
    search_cmd.add_argument("--starred", action="store_true", help="Only starred items")
    search_cmd.add_argument("--limit", type=int, default=10)
    search_cmd.set_defaults(handler=command_search)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line.

    Args:
        argv: Arguments to parse. Defaults to ``sys.argv[1:]``.

    Returns:
        Process exit status: 0 on success, 1 on a reported error.
    """
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)

    try:
        configure_logging(settings.log_level, args.verbose)
        return int(args.handler(args, settings))
    except (ValueError, sqlite3.Error) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
