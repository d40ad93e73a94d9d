"""CLI command that assigns graph targets to groups.

Loads a dependency graph and a group configuration, runs the assignment
and writes the diagnostic JSON record. A per-group summary is printed to
the console.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional

from rich.console import Console
from rich.table import Table

from linkgroups.config import load_assign_config
from linkgroups.export.json import export_json
from linkgroups.graph.identifiers import TargetLabel
from linkgroups.graph.io import load_graph
from linkgroups.groups.assignment import compute_mappings
from linkgroups.groups.parse import build_groups_map, parse_groups_definitions
from linkgroups.groups.types import Group

logger = logging.getLogger("linkgroups.cli.assign")


def _render_summary(
    console: Console,
    groups_map: Mapping[str, Group],
    mappings: Mapping[TargetLabel, str],
    total_targets: int,
) -> None:
    """Print a table with the number of targets in each group."""
    counts: Dict[str, int] = {name: 0 for name in groups_map}
    for name in mappings.values():
        counts[name] = counts.get(name, 0) + 1

    table = Table(title="Group assignment")
    table.add_column("Group")
    table.add_column("Kind")
    table.add_column("Targets", justify="right")
    for name, count in counts.items():
        group = groups_map.get(name)
        kind = group.definition_type.value if group else "unknown"
        table.add_row(name, kind, str(count))

    console.print(table)
    console.print(
        f"{len(mappings)} of {total_targets} targets assigned, "
        f"{total_targets - len(mappings)} unassigned"
    )


def assign_command(args, console: Optional[Console] = None) -> int:
    """Execute the assign command.

    Args:
        args: Parsed command-line arguments (`graph`, `config`, `output`,
            optional `workers`, optional `quiet`).
        console: Rich console used for the summary.

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    try:
        graph = load_graph(Path(args.graph))
        config = load_assign_config(args.config)

        workers = getattr(args, "workers", None)
        max_workers = workers if isinstance(workers, int) and workers > 0 else config.max_workers

        groups = parse_groups_definitions(config.to_raw_definitions())
        groups_map = build_groups_map(groups)
        mappings = compute_mappings(groups_map, graph, max_workers=max_workers)

        output_path = Path(args.output).expanduser().resolve()
        export_json(groups_map.values(), mappings, output_path)

        if not getattr(args, "quiet", False):
            _render_summary(console or Console(), groups_map, mappings, len(graph))

        logger.info("Group map written to %s", output_path)
        return 0

    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Assign command failed: %s", e, exc_info=True)
        return 1
