"""JSON export of group definitions and target assignments.

The report is the only persisted artifact of a run. Keys are sorted on
write so that identical inputs produce byte-identical files.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from linkgroups.graph.identifiers import TargetLabel
from linkgroups.groups.errors import UnknownFilterKind
from linkgroups.groups.types import (
    BuildTargetFilter,
    Filter,
    Group,
    GroupMapping,
    LabelFilter,
    TargetRegexFilter,
)

logger = logging.getLogger("linkgroups.export.json")


def _make_json_info_for_filters(filters: Sequence[Filter]) -> List[Dict[str, Any]]:
    json_filters: List[Dict[str, Any]] = []
    for flt in filters:
        if isinstance(flt, LabelFilter):
            json_filters.append({"regex": flt.regex.pattern})
        elif isinstance(flt, BuildTargetFilter):
            json_filters.append(flt.pattern.to_json())
        elif isinstance(flt, TargetRegexFilter):
            json_filters.append({"target_regex": flt.regex.pattern})
        else:
            raise UnknownFilterKind(f"Unknown filter type: {flt!r}")
    return json_filters


def _make_json_info_for_group_mapping(mapping: GroupMapping) -> Dict[str, Any]:
    return {
        "filters": _make_json_info_for_filters(mapping.filters),
        "preferred_linkage": (
            mapping.preferred_linkage.value if mapping.preferred_linkage else None
        ),
        "roots": [str(root) for root in mapping.roots],
        "traversal": mapping.traversal.value,
    }


def _make_json_info_for_group(group: Group) -> Dict[str, Any]:
    attrs = asdict(group.attrs)
    attrs["exported_linker_flags"] = list(group.attrs.exported_linker_flags)
    attrs["linker_flags"] = list(group.attrs.linker_flags)
    return {
        "attrs": attrs,
        "mappings": [_make_json_info_for_group_mapping(m) for m in group.mappings],
        "name": group.name,
    }


def make_info_json(
    groups: Iterable[Group],
    mappings: Mapping[TargetLabel, str],
) -> Dict[str, Any]:
    """Build the diagnostic record for one assignment run.

    Args:
        groups: Groups to describe, including implicit ones.
        mappings: Target -> group name assignment.

    Returns:
        Dict[str, Any]: `{"groups": {name: info}, "mappings": {target: name}}`.
    """
    return {
        "groups": {group.name: _make_json_info_for_group(group) for group in groups},
        "mappings": {str(target): name for target, name in mappings.items()},
    }


def dumps_info_json(info: Mapping[str, Any]) -> str:
    """Serialize a diagnostic record in its canonical, diffable form."""
    return json.dumps(info, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def export_json(
    groups: Iterable[Group],
    mappings: Mapping[TargetLabel, str],
    output_path: Path,
) -> None:
    """Write the diagnostic record to `output_path`.

    Args:
        groups: Groups to describe, including implicit ones.
        mappings: Target -> group name assignment.
        output_path: Output file path.
    """
    logger.info("Exporting group map info to JSON: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    info = make_info_json(groups, mappings)

    with open(output_path, "w", encoding="utf-8") as f:
        f.write(dumps_info_json(info))

    logger.info(
        "JSON export completed: %d groups, %d assigned targets",
        len(info["groups"]),
        len(info["mappings"]),
    )
