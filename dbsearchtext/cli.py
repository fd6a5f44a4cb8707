#!/usr/bin/env python3
"""
dbsearchtext command line.

    dbsearchtext DIALECT CONNECTIONSTRING SUBSTRING

Connects with the given dialect, walks every base table and prints
each row/column whose text contains SUBSTRING:

    ========================================
    Table: shop.public.customers
    Primary key values: id=42
    Matching column: notes
    Matching value: call back after lunch
"""

import argparse
import logging
import sys

from .errors import DatabaseConnectionError
from .registry import default_registry

logger = logging.getLogger(__name__)

SEPARATOR = "=" * 40

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_UNKNOWN_DIALECT = 2
EXIT_CONNECTION = 3


def build_parser(registry):
    parser = argparse.ArgumentParser(
        prog="dbsearchtext",
        description="Connect to a database engine (according to DIALECT) using "
                    "CONNECTIONSTRING and search all textual columns in all "
                    "tables for SUBSTRING.",
        epilog="Supported dialects: " + ", ".join(registry.names()),
    )
    parser.add_argument("dialect", nargs="?", help="database dialect")
    parser.add_argument("connection_string", nargs="?", help="driver connection string")
    parser.add_argument("substring", nargs="?", help="literal text to look for")
    parser.add_argument("--list-dialects", action="store_true",
                        help="print the supported dialects and exit")
    parser.add_argument("--cross-database", action="store_true",
                        help="postgresql: search every database on the server")
    parser.add_argument("--keep-going", action="store_true",
                        help="log a failing table and continue with the next one")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log every statement issued")
    return parser


def format_match(name, match):
    pk = ", ".join(f"{k}={v}" for k, v in match.row_primary_key)
    return "\n".join([
        SEPARATOR,
        f"Table: {name.dotted()}",
        f"Primary key values: {pk}",
        f"Matching column: {match.column_name}",
        f"Matching value: {match.column_value}",
    ])


def search(adapter, substring, *, keep_going=False, out=None):
    """Search every table; print each match. Returns the number of matches."""
    out = out or sys.stdout
    count = 0
    # not every transport supports multiple active result sets
    names = list(adapter.list_tables())
    logger.info("%d table(s) to search", len(names))
    for name in names:
        try:
            tdef = adapter.get_table_definition(name)
            for match in adapter.get_substring_matches(tdef, substring):
                print(format_match(name, match), file=out)
                count += 1
        except Exception as e:
            if not keep_going:
                raise
            logger.warning("skipping %s: %s", name.dotted(), e)
    return count


def main(argv=None):
    registry = default_registry()
    parser = build_parser(registry)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if args.list_dialects:
        for name in registry.names():
            print(name)
        return EXIT_OK

    if not (args.dialect and args.connection_string and args.substring is not None):
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    if args.dialect not in registry:
        print(f"Unknown dialect '{args.dialect}'. Supported: {', '.join(registry.names())}",
              file=sys.stderr)
        return EXIT_UNKNOWN_DIALECT

    options = {}
    if args.cross_database:
        if args.dialect != "postgresql":
            print("--cross-database only applies to postgresql", file=sys.stderr)
            return EXIT_USAGE
        options["cross_database"] = True

    try:
        adapter = registry.resolve(args.dialect, args.connection_string, **options)
    except DatabaseConnectionError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_CONNECTION

    with adapter:
        search(adapter, args.substring, keep_going=args.keep_going)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
