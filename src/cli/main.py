"""Porter CLI entry points.
This module exposes commands for converting and inspecting archives.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import sys
from typing import Any, Sequence

from core.config import PorterConfig, load_timezone
from core.constants import SUPPORTED_DUPLICATE_NAME_POLICIES
from core.errors import PorterError
from core.logging_config import configure_cli_logging
from ingest.mela_reader import iter_mela_recipes
from ingest.pipeline import convert_archive
from store.paprika_reader import iter_paprika_recipes


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="porter",
        description="Convert Mela recipe exports into Paprika import archives",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every converted entry")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_convert_command(subparsers)
    _add_list_command(subparsers)
    _add_inspect_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Porter CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code; 1 when any conversion error occurs.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_cli_logging(args.verbose)
    try:
        if args.command == "convert":
            return _run_convert_command(args)
        if args.command == "list":
            return _run_list_command(args)
        if args.command == "inspect":
            return _run_inspect_command(args)
    except PorterError as error:
        print(f"porter: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(args: argparse.Namespace) -> PorterConfig:
    """Build config from environment with CLI overrides applied."""
    config = PorterConfig.from_env()
    if args.overwrite:
        config = replace(config, overwrite_output=True)
    if args.duplicate_names:
        config = replace(config, duplicate_names=args.duplicate_names)
    if args.timezone:
        load_timezone(args.timezone)
        config = replace(config, timezone=args.timezone)
    return config


def _run_convert_command(args: argparse.Namespace) -> int:
    """Handle convert command.

    Args:
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    count = convert_archive(args.source, args.output, _build_config(args))
    print(count)
    return 0


def _run_list_command(args: argparse.Namespace) -> int:
    """Print ordinal, title and id for each Mela entry."""
    for header, recipe in iter_mela_recipes(args.source):
        print(f"{header.ordinal}\t{header.title}\t{recipe.id}")
    return 0


def _run_inspect_command(args: argparse.Namespace) -> int:
    """Print name, created and source for each Paprika entry."""
    for recipe in iter_paprika_recipes(args.archive):
        print(f"{recipe.name}\t{recipe.created}\t{recipe.source or '-'}")
    return 0


def _add_convert_command(subparsers: Any) -> None:
    """Register convert subcommand."""
    parser = subparsers.add_parser("convert", help="Convert a Mela export to a Paprika archive")
    parser.add_argument("source", help="Source .melarecipes archive")
    parser.add_argument("output", help="Destination .paprikarecipes archive")
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace the destination archive if it exists",
    )
    parser.add_argument(
        "--duplicate-names",
        choices=SUPPORTED_DUPLICATE_NAME_POLICIES,
        help="How to handle recipes sharing a name (default: PORTER_DUPLICATE_NAMES or suffix)",
    )
    parser.add_argument("--timezone", help="IANA zone for created dates, e.g. UTC")


def _add_list_command(subparsers: Any) -> None:
    """Register list subcommand."""
    parser = subparsers.add_parser("list", help="List recipes in a Mela export")
    parser.add_argument("source", help="Source .melarecipes archive")


def _add_inspect_command(subparsers: Any) -> None:
    """Register inspect subcommand."""
    parser = subparsers.add_parser("inspect", help="List recipes in a Paprika archive")
    parser.add_argument("archive", help="Paprika .paprikarecipes archive")
