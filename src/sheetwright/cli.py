"""Command-line entry point for Sheetwright."""

import argparse
import asyncio
import sys
from pathlib import Path

import structlog

from sheetwright.config import get_settings
from sheetwright.database import close_db, init_db
from sheetwright.engine import (
    EnginePolicies,
    ProgressionPolicy,
    VitalityPolicy,
    calculate_character_sheet,
)
from sheetwright.errors import SheetLoadError, StructuralError
from sheetwright.log import configure_logging
from sheetwright.sheet import load_sheet_file

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID_SHEET = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="sheetwright",
        description="Character sheet storage and stat derivation.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    calc = subparsers.add_parser("calculate", help="Print the calculated sheet for a sheet file")
    calc.add_argument("file", type=Path, help="Raw character sheet (.json, .yaml or .yml)")
    calc.add_argument(
        "--vitality-policy",
        choices=[p.value for p in VitalityPolicy],
        default=None,
        help="Vitality tier formula (default from settings)",
    )
    calc.add_argument(
        "--progression-policy",
        choices=[p.value for p in ProgressionPolicy],
        default=None,
        help="Source of XP needed for the next level (default from settings)",
    )
    calc.add_argument("--indent", type=int, default=2, help="JSON indentation")

    subparsers.add_parser("init-db", help="Create database tables")

    return parser


def run_calculate(args: argparse.Namespace) -> int:
    """Calculate a sheet file and print it as JSON."""
    configured = get_settings().engine_policies()
    policies = EnginePolicies(
        vitality=VitalityPolicy(args.vitality_policy or configured.vitality),
        progression=ProgressionPolicy(args.progression_policy or configured.progression),
    )

    try:
        sheet = load_sheet_file(args.file)
    except (SheetLoadError, StructuralError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID_SHEET

    result = calculate_character_sheet(sheet, policies)
    print(result.model_dump_json(by_alias=True, indent=args.indent or None))
    return EXIT_OK


async def _init_db() -> None:
    try:
        await init_db()
        logger.info("database_initialized")
    finally:
        await close_db()


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and dispatch to the chosen subcommand."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    args = build_parser().parse_args(argv)

    if args.command == "init-db":
        asyncio.run(_init_db())
        return EXIT_OK

    return run_calculate(args)


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
