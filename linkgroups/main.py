"""Main CLI entry point for linkgroups.

Provides commands: assign, roots
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from linkgroups.cli.assign import assign_command
from linkgroups.cli.roots import roots_command

logger = logging.getLogger("linkgroups.cli")


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        description="Linkgroups - assign dependency graph targets to link groups",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    assign_parser = subparsers.add_parser(
        "assign",
        help="Assign every graph target to at most one group",
    )
    assign_parser.add_argument(
        "graph",
        help=(
            "Dependency graph JSON file, either {\"nodes\": {target: {...}}} "
            "or networkx node-link data"
        ),
    )
    assign_parser.add_argument(
        "-c",
        "--config",
        required=True,
        help=(
            "Group configuration. Can be a path to a TOML/JSON file "
            "(e.g. groups.toml) or an inline TOML/JSON string."
        ),
    )
    assign_parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Output JSON file for the group map report",
    )
    assign_parser.add_argument(
        "-w",
        "--workers",
        type=int,
        help="Threads used to resolve mappings (default: from config, 1)",
    )
    assign_parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not print the group summary table",
    )

    roots_parser = subparsers.add_parser(
        "roots",
        help="List the distinct roots referenced by the group configuration",
    )
    roots_parser.add_argument(
        "-c",
        "--config",
        required=True,
        help="Group configuration (TOML/JSON file or inline string)",
    )

    return parser


def main() -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args()

    setup_logging(args.verbose)

    if args.command == "assign":
        return assign_command(args)
    elif args.command == "roots":
        return roots_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
