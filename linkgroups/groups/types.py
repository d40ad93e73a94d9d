"""Typed group definitions.

A `Group` is a named bucket of targets, described by an ordered list of
`GroupMapping` rules. Groups are declared explicitly by the user or
synthesized during assignment for `subfolders` traversals.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union

from linkgroups.graph.identifiers import TargetLabel
from linkgroups.groups.pattern import BuildTargetPattern


class Traversal(str, Enum):
    """How far a mapping match propagates into the dependency graph.

    Attributes:
        TREE: The matched target and its whole (unclaimed) subtree.
        NODE: Only the matched target.
        SUBFOLDERS: Only the matched target, placed in a group derived
            from its package path.
    """

    TREE = "tree"
    NODE = "node"
    SUBFOLDERS = "subfolders"


class Linkage(str, Enum):
    """Preferred linkage hint carried through to the link step."""

    ANY = "any"
    STATIC = "static"
    SHARED = "shared"


class GroupDefinitionKind(str, Enum):
    """Origin of a group definition."""

    EXPLICIT = "explicit"
    IMPLICIT = "implicit"


class FilterType(str, Enum):
    """Discriminator for the filter variants."""

    LABEL = "label"
    TARGET_REGEX = "target_regex"
    PATTERN = "pattern"


@dataclass(frozen=True)
class LabelFilter:
    """Matches when any node label fully matches `regex`."""

    regex: "re.Pattern[str]"
    kind: ClassVar[FilterType] = FilterType.LABEL


@dataclass(frozen=True)
class TargetRegexFilter:
    """Matches when the unconfigured target string fully matches `regex`."""

    regex: "re.Pattern[str]"
    kind: ClassVar[FilterType] = FilterType.TARGET_REGEX


@dataclass(frozen=True)
class BuildTargetFilter:
    """Matches targets covered by a structural build target pattern."""

    pattern: BuildTargetPattern
    kind: ClassVar[FilterType] = FilterType.PATTERN


Filter = Union[LabelFilter, TargetRegexFilter, BuildTargetFilter]


@dataclass(frozen=True)
class GroupMapping:
    """One rule of a group.

    Attributes:
        roots: Explicit starting targets; empty means the whole graph is
            scanned with `filters`.
        traversal: Traversal mode.
        filters: Filters that all must match (see `matches_filters`).
        preferred_linkage: Optional linkage hint, not used by assignment.
    """

    roots: Tuple[TargetLabel, ...] = ()
    traversal: Traversal = Traversal.TREE
    filters: Tuple[Filter, ...] = ()
    preferred_linkage: Optional[Linkage] = None


@dataclass(frozen=True)
class GroupAttrs:
    """Link-step attributes of a group. Opaque to assignment."""

    enable_distributed_thinlto: bool = False
    enable_if_node_count_exceeds: Optional[int] = None
    exported_linker_flags: Tuple[str, ...] = ()
    discard_group: bool = False
    linker_flags: Tuple[str, ...] = ()
    requires_root_node_exists: bool = True


@dataclass(frozen=True)
class Group:
    """A named group definition."""

    name: str
    mappings: Tuple[GroupMapping, ...] = ()
    attrs: GroupAttrs = field(default_factory=GroupAttrs)
    definition_type: GroupDefinitionKind = GroupDefinitionKind.EXPLICIT


def create_group(
    group: Group,
    name: Optional[str] = None,
    mappings: Optional[Tuple[GroupMapping, ...]] = None,
    attrs: Optional[GroupAttrs] = None,
    definition_type: Optional[GroupDefinitionKind] = None,
) -> Group:
    """Copy `group`, overriding any of the given properties."""
    return replace(
        group,
        name=group.name if name is None else name,
        mappings=group.mappings if mappings is None else tuple(mappings),
        attrs=group.attrs if attrs is None else attrs,
        definition_type=group.definition_type if definition_type is None else definition_type,
    )


__all__ = [
    "BuildTargetFilter",
    "Filter",
    "FilterType",
    "Group",
    "GroupAttrs",
    "GroupDefinitionKind",
    "GroupMapping",
    "LabelFilter",
    "Linkage",
    "TargetRegexFilter",
    "Traversal",
    "create_group",
]
