from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

import structlog

from teamgen.colors import DEFAULT_PALETTE, validate_palette
from teamgen.errors import ConfigurationError, InfeasibleConstraints, TeamGenerationError
from teamgen.generator import generate_teams
from teamgen.validator import DEFAULT_MAX_ROSTER_SIZE, DEFAULT_MAX_TEAMS

EXIT_INVALID = 2
EXIT_INFEASIBLE = 3


def _configure_logging(level: str) -> None:
    # stdout carries the JSON result, so logs go to stderr
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def _palette_arg(value: str) -> tuple[str, ...]:
    try:
        return validate_palette(value.split(","))
    except ConfigurationError as exc:
        raise argparse.ArgumentTypeError(exc.reason) from exc


def configure_generate_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "request",
        type=Path,
        help="JSON file with players[], num_teams, locked_players, separated_players, use_jersey_colors.",
    )
    parser.add_argument(
        "--palette",
        type=_palette_arg,
        default=DEFAULT_PALETTE,
        help="Comma-separated jersey colors (default: Light,Dark).",
    )
    parser.add_argument(
        "--max-roster-size",
        type=int,
        default=DEFAULT_MAX_ROSTER_SIZE,
        help=f"Reject rosters larger than this (default: {DEFAULT_MAX_ROSTER_SIZE}).",
    )
    parser.add_argument(
        "--max-teams",
        type=int,
        default=DEFAULT_MAX_TEAMS,
        help=f"Reject requests for more teams than this (default: {DEFAULT_MAX_TEAMS}).",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indent for output.")


def configure_palette_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--palette",
        type=_palette_arg,
        default=DEFAULT_PALETTE,
        help="Comma-separated jersey colors to check and print.",
    )


def _load_request(path: Path) -> dict:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise TeamGenerationError(f"Cannot read {path}: {exc.strerror}") from exc
    except json.JSONDecodeError as exc:
        raise TeamGenerationError(f"{path} is not valid JSON: {exc.msg} (line {exc.lineno})") from exc
    if not isinstance(data, dict):
        raise TeamGenerationError(f"{path} must contain a JSON object")
    return data


def generate_from_parsed(args: argparse.Namespace) -> int:
    try:
        data = _load_request(args.request)
        assignment = generate_teams(
            data.get("players", []),
            data.get("num_teams"),
            data.get("locked_players"),
            data.get("separated_players"),
            data.get("use_jersey_colors", False),
            palette=args.palette,
            max_roster_size=args.max_roster_size,
            max_teams=args.max_teams,
        )
    except InfeasibleConstraints as exc:
        print(f"error: {exc.reason}", file=sys.stderr)
        return EXIT_INFEASIBLE
    except TeamGenerationError as exc:
        print(f"error: {exc.reason}", file=sys.stderr)
        return EXIT_INVALID

    print(json.dumps(assignment.to_dict(), indent=args.indent))
    return 0


def palette_from_parsed(args: argparse.Namespace) -> int:
    for index, color in enumerate(args.palette, start=1):
        print(f"{index}. {color}")
    return 0


def main(args: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Balanced team generator.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level for diagnostics written to stderr (default: WARNING).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate", help="Split a roster from a JSON request file into balanced teams"
    )
    configure_generate_parser(generate_parser)

    palette_parser = subparsers.add_parser("palette", help="Print the jersey color palette")
    configure_palette_parser(palette_parser)

    opts = parser.parse_args(args)
    _configure_logging(opts.log_level)

    if opts.command == "generate":
        return generate_from_parsed(opts)
    if opts.command == "palette":
        return palette_from_parsed(opts)
    parser.error(f"Unknown command {opts.command}")
    return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
