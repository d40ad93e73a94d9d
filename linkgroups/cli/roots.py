"""CLI command listing the roots referenced by a group configuration."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console

from linkgroups.config import load_assign_config
from linkgroups.groups.assignment import get_dedupped_roots_from_groups
from linkgroups.groups.parse import parse_groups_definitions

logger = logging.getLogger("linkgroups.cli.roots")


def roots_command(args, console: Optional[Console] = None) -> int:
    """Print every distinct root target, one per line.

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    try:
        config = load_assign_config(args.config)
        groups = parse_groups_definitions(config.to_raw_definitions())
        roots = get_dedupped_roots_from_groups(groups)

        console = console or Console()
        for root in roots:
            console.print(str(root), markup=False, highlight=False)

        logger.info("Listed %d roots", len(roots))
        return 0

    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Roots command failed: %s", e, exc_info=True)
        return 1
