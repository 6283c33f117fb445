#!/usr/bin/env python3
"""Command-line interface for pathalias.

Subcommands:
    - pathalias resolve: Show what a specifier is rewritten to
    - pathalias mappings: List the compiled alias mappings

Example:
    $ pathalias resolve @app/widgets/button -C /my/project
    $ pathalias mappings -p tsconfig.build.json -o table
"""

import argparse
import json
import logging
import sys

from . import __version__
from .config import load_config
from .errors import PathAliasError
from .mapping import MappingTable, build_mapping_table
from .patterns import ExactMatch
from .resolver import AliasResolver, Rewrite


def add_config_arguments(parser: argparse.ArgumentParser):
    """Add the configuration location arguments shared by all subcommands."""
    parser.add_argument(
        "-p",
        "--project",
        help="Configuration file (default: nearest tsconfig.json or jsconfig.json)",
    )
    parser.add_argument(
        "-C",
        "--context",
        default=None,
        help="Directory to search for configuration from (default: current directory)",
    )


def add_resolve_arguments(parser: argparse.ArgumentParser):
    """Add arguments for the resolve subcommand."""
    parser.add_argument("specifier", help="Import specifier to resolve (e.g. @app/button)")
    add_config_arguments(parser)
    parser.add_argument(
        "--compact", action="store_true", help="Output compact JSON (default: pretty-printed)"
    )


def add_mappings_arguments(parser: argparse.ArgumentParser):
    """Add arguments for the mappings subcommand."""
    add_config_arguments(parser)
    parser.add_argument(
        "-o",
        "--output",
        choices=["json", "table"],
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--all", action="store_true", help="Include typings-only mappings"
    )


def _load_table(args) -> MappingTable:
    return build_mapping_table(load_config(args.context, args.project))


def run_resolve(args):
    """Print the action taken for a specifier as JSON."""
    table = _load_table(args)
    action = AliasResolver(table).resolve(args.specifier)

    output = {"specifier": args.specifier, "action": "passthrough"}
    if isinstance(action, Rewrite):
        output.update(
            action="rewrite",
            target=action.specifier,
            alias=action.mapping.alias,
            description=action.description,
        )

    indent = None if args.compact else 2
    print(json.dumps(output, indent=indent))


def run_mappings(args):
    """Print the mapping table."""
    table = _load_table(args)
    mappings = table.mappings if args.all else table.active_mappings

    if args.output == "table":
        print(f"Base directory: {table.base_directory}")
        width = max((len(m.alias) for m in mappings), default=0)
        for m in mappings:
            flag = "  (typings)" if m.is_typing else ""
            print(f"  {m.alias.ljust(width)}  ->  {m.target}{flag}")
        return

    data = {
        "base_directory": table.base_directory,
        "base_url": table.base_url,
        "mappings": [
            {
                "alias": m.alias,
                "target": m.target,
                "kind": "exact" if isinstance(m.pattern, ExactMatch) else "prefix",
                "typings": m.is_typing,
            }
            for m in mappings
        ],
    }
    print(json.dumps(data, indent=2))


def main():
    """Unified command-line interface for pathalias.

    Usage:
        pathalias resolve SPECIFIER [-p CONFIG] [-C DIR] [--compact]
        pathalias mappings [-p CONFIG] [-C DIR] [-o json|table] [--all]
    """
    parser = argparse.ArgumentParser(
        prog="pathalias",
        description="Resolve tsconfig-style path aliases",
        epilog="Run 'pathalias <command> --help' for more information on a command.",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    # pathalias resolve
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Show what a specifier is rewritten to",
        description="Match a specifier against the configured aliases and print the rewrite.",
        epilog="Example: pathalias resolve @app/widgets/button",
    )
    add_resolve_arguments(resolve_parser)

    # pathalias mappings
    mappings_parser = subparsers.add_parser(
        "mappings",
        help="List the configured alias mappings",
        description="Print the compiled mapping table in configuration order.",
        epilog="Example: pathalias mappings -o table",
    )
    add_mappings_arguments(mappings_parser)

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        if args.command == "resolve":
            run_resolve(args)
        elif args.command == "mappings":
            run_mappings(args)
    except PathAliasError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
