"""Turning raw declarative group definitions into typed `Group` values.

A raw definition is a `(name, mappings, attrs)` sequence where `attrs` is
optional and every mapping is `(root, traversal, filters, preferred_linkage)`
with `preferred_linkage` optional::

    [
        ("app", [("//app:main", "tree", None)]),
        ("plugins", [(None, "subfolders", "label:plugin")], {"discard_group": False}),
    ]
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from linkgroups.graph.identifiers import TargetLabel
from linkgroups.groups.errors import (
    InvalidAttributeValue,
    UnknownAttribute,
    UnrecognizedLinkageKind,
    UnrecognizedTraversalKind,
)
from linkgroups.groups.filters import parse_filters
from linkgroups.groups.types import (
    Group,
    GroupAttrs,
    GroupDefinitionKind,
    GroupMapping,
    Linkage,
    Traversal,
)

logger = logging.getLogger("linkgroups.groups.parse")

_VALID_ATTRS = (
    "enable_distributed_thinlto",
    "enable_if_node_count_exceeds",
    "exported_linker_flags",
    "discard_group",
    "linker_flags",
    "requires_root_node_exists",
)
_BOOL_ATTRS = ("enable_distributed_thinlto", "discard_group", "requires_root_node_exists")
_FLAG_ATTRS = ("exported_linker_flags", "linker_flags")


def parse_traversal(entry: str) -> Traversal:
    """Parse a traversal string.

    Raises:
        UnrecognizedTraversalKind: For anything but tree/node/subfolders.
    """
    try:
        return Traversal(entry)
    except ValueError:
        raise UnrecognizedTraversalKind(
            f"Unrecognized group traversal type: {entry}"
        ) from None


def parse_linkage(entry: Any) -> Optional[Linkage]:
    """Parse an optional preferred linkage string; falsy values mean no hint.

    Raises:
        UnrecognizedLinkageKind: For anything but any/static/shared.
    """
    if not entry:
        return None
    try:
        return Linkage(entry)
    except ValueError:
        raise UnrecognizedLinkageKind(
            f"Unrecognized preferred linkage: {entry}"
        ) from None


def _check_attr_types(name: str, attrs: Mapping[str, Any]) -> None:
    for attr in _BOOL_ATTRS:
        if attr in attrs and not isinstance(attrs[attr], bool):
            raise InvalidAttributeValue(
                f"attr '{attr}' for link group '{name}' must be a bool, got {attrs[attr]!r}"
            )

    for attr in _FLAG_ATTRS:
        value = attrs.get(attr)
        if value is None:
            continue
        if not isinstance(value, (list, tuple)) or not all(isinstance(f, str) for f in value):
            raise InvalidAttributeValue(
                f"attr '{attr}' for link group '{name}' must be a list of strings, got {value!r}"
            )

    count = attrs.get("enable_if_node_count_exceeds")
    if count is not None and (isinstance(count, bool) or not isinstance(count, int)):
        raise InvalidAttributeValue(
            f"attr 'enable_if_node_count_exceeds' for link group '{name}' must be an int, "
            f"got {count!r}"
        )


def parse_group_attrs(name: str, attrs: Optional[Mapping[str, Any]]) -> GroupAttrs:
    """Validate attribute keys and value types and build GroupAttrs.

    Values are stored as given; flag lists only become tuples.

    Raises:
        UnknownAttribute: If a key is not one of the recognized attributes.
        InvalidAttributeValue: If a recognized attribute has the wrong type.
    """
    attrs = attrs or {}
    for attr in attrs:
        if attr not in _VALID_ATTRS:
            raise UnknownAttribute(
                f"invalid attr '{attr}' for link group '{name}' found. "
                f"Valid attributes are {list(_VALID_ATTRS)}."
            )
    _check_attr_types(name, attrs)

    return GroupAttrs(
        enable_distributed_thinlto=attrs.get("enable_distributed_thinlto", False),
        enable_if_node_count_exceeds=attrs.get("enable_if_node_count_exceeds", None),
        exported_linker_flags=tuple(attrs.get("exported_linker_flags") or ()),
        discard_group=attrs.get("discard_group", False),
        linker_flags=tuple(attrs.get("linker_flags") or ()),
        requires_root_node_exists=attrs.get("requires_root_node_exists", True),
    )


def parse_group_mapping(
    entry: Sequence[Any],
    parse_root: Callable[[Any], TargetLabel] = TargetLabel.parse,
) -> GroupMapping:
    """Parse one `(root, traversal, filters[, preferred_linkage])` entry.

    A falsy root (None or an empty string) means the mapping has no roots.
    """
    root = entry[0]

    return GroupMapping(
        roots=(parse_root(root),) if root else (),
        traversal=parse_traversal(entry[1]),
        filters=tuple(parse_filters(entry[2] if len(entry) > 2 else None)),
        preferred_linkage=parse_linkage(entry[3] if len(entry) > 3 else None),
    )


def parse_groups_definitions(
    definitions: Iterable[Sequence[Any]],
    parse_root: Callable[[Any], TargetLabel] = TargetLabel.parse,
) -> List[Group]:
    """Parse raw group definitions into explicit groups, preserving order.

    Args:
        definitions: Raw `(name, mappings[, attrs])` entries.
        parse_root: Converts a raw root value to a TargetLabel, allowing
            callers to use their own root representation.

    Returns:
        List[Group]: Parsed groups in declaration order.
    """
    groups: List[Group] = []
    for entry in definitions:
        name = entry[0]
        raw_mappings = entry[1]
        attrs = (entry[2] or {}) if len(entry) > 2 else {}

        group = Group(
            name=name,
            mappings=tuple(parse_group_mapping(m, parse_root) for m in raw_mappings),
            attrs=parse_group_attrs(name, attrs),
            definition_type=GroupDefinitionKind.EXPLICIT,
        )
        groups.append(group)

    logger.info("Parsed %d group definitions", len(groups))
    return groups


def build_groups_map(groups: Iterable[Group]) -> Dict[str, Group]:
    """Index groups by name in declaration order.

    A later definition with a duplicate name replaces the earlier one but
    keeps its original position.
    """
    groups_map: Dict[str, Group] = {}
    for group in groups:
        if group.name in groups_map:
            logger.warning("Group %s is defined more than once; using the last definition", group.name)
        groups_map[group.name] = group
    return groups_map


__all__ = [
    "build_groups_map",
    "parse_group_attrs",
    "parse_group_mapping",
    "parse_groups_definitions",
    "parse_linkage",
    "parse_traversal",
]
