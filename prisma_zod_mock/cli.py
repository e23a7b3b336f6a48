"""
Command Line Interface
======================

prisma-zod-mock generate OPTIONS_FILE [--output DIR] [--format json|yaml]
prisma-zod-mock mock OPTIONS_FILE MODEL [--count N] [--seed S] [--depth D]
prisma-zod-mock analyze NAME [NAME ...]
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional
import argparse
import asyncio
import base64
import json
import sys

from prisma_zod_mock import __version__
from prisma_zod_mock.config.generator_config import parse_config
from prisma_zod_mock.config.logging import get_logger
from prisma_zod_mock.core.dmmf.parser import DMMFParseError
from prisma_zod_mock.core.mock.builder import MockDataBuilder
from prisma_zod_mock.core.mock.unique import UniqueValueError
from prisma_zod_mock.core.semantics.field_name_analyzer import analyze_field_name
from prisma_zod_mock.generator import OutputPathError, generate_from_file, load_options

logger = get_logger(__name__)


def to_jsonable(value: Any) -> Any:
    """json.dumps default hook for mock values."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _run_generate(args: argparse.Namespace) -> int:
    written = asyncio.run(generate_from_file(args.options_file, args.output, args.format))
    for path in written:
        print(path)
    return 0


def _run_mock(args: argparse.Namespace) -> int:
    options = asyncio.run(load_options(args.options_file, args.format))
    config = parse_config(options.generator.config)
    builder = MockDataBuilder(options.datamodel, config, seed=args.seed)
    mocks = builder.create_mock_batch(args.model, args.count, max_depth=args.depth)
    print(json.dumps(mocks, indent=2, default=to_jsonable, ensure_ascii=False))
    return 0


def _run_analyze(args: argparse.Namespace) -> int:
    for name in args.names:
        print(f"{name}\t{analyze_field_name(name).value}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="prisma-zod-mock",
        description="Generate Zod schemas and Faker mock factories from a Prisma datamodel",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_cmd = subparsers.add_parser("generate", help="Write TypeScript output files")
    generate_cmd.add_argument("options_file", help="Generator options or DMMF document (JSON/YAML)")
    generate_cmd.add_argument("--output", "-o", help="Output directory (overrides generator output)")
    generate_cmd.add_argument("--format", choices=["json", "yaml"], help="Document format")
    generate_cmd.set_defaults(handler=_run_generate)

    mock_cmd = subparsers.add_parser("mock", help="Print mock instances of a model as JSON")
    mock_cmd.add_argument("options_file", help="Generator options or DMMF document (JSON/YAML)")
    mock_cmd.add_argument("model", help="Model name")
    mock_cmd.add_argument("--count", "-n", type=int, default=1, help="Number of instances")
    mock_cmd.add_argument("--seed", type=int, help="Faker seed")
    mock_cmd.add_argument("--depth", type=int, help="Relation depth limit")
    mock_cmd.add_argument("--format", choices=["json", "yaml"], help="Document format")
    mock_cmd.set_defaults(handler=_run_mock)

    analyze_cmd = subparsers.add_parser("analyze", help="Show the semantic type of field names")
    analyze_cmd.add_argument("names", nargs="+", help="Field names")
    analyze_cmd.set_defaults(handler=_run_analyze)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return args.handler(args)
    except (DMMFParseError, OutputPathError, UniqueValueError, KeyError, ValueError, OSError) as e:
        logger.error("Command failed", command=args.command, error=str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
