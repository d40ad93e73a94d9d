"""Group definitions, target matching and group assignment."""

from linkgroups.groups.assignment import (
    AssignmentMap,
    GroupAssigner,
    add_to_implicit_group,
    compute_mappings,
    get_dedupped_roots_from_groups,
    group_members,
)
from linkgroups.groups.errors import (
    GroupError,
    InvalidAttributeValue,
    InvalidFilterSyntax,
    MissingRootOrFilter,
    UnknownAttribute,
    UnknownFilterKind,
    UnrecognizedLinkageKind,
    UnrecognizedTraversalKind,
)
from linkgroups.groups.filters import matches_filters, parse_filter, parse_filters
from linkgroups.groups.naming import (
    MAX_GROUP_NAME_LENGTH,
    generate_group_subfolder_name,
    hash_group_name,
    stable_string_hash,
)
from linkgroups.groups.parse import build_groups_map, parse_groups_definitions
from linkgroups.groups.pattern import (
    BuildTargetPattern,
    BuildTargetPatternKind,
    parse_build_target_pattern,
)
from linkgroups.groups.resolver import find_targets_in_mapping
from linkgroups.groups.types import (
    BuildTargetFilter,
    Filter,
    FilterType,
    Group,
    GroupAttrs,
    GroupDefinitionKind,
    GroupMapping,
    LabelFilter,
    Linkage,
    TargetRegexFilter,
    Traversal,
    create_group,
)

__all__ = [
    "AssignmentMap",
    "BuildTargetFilter",
    "BuildTargetPattern",
    "BuildTargetPatternKind",
    "Filter",
    "FilterType",
    "Group",
    "GroupAssigner",
    "GroupAttrs",
    "GroupDefinitionKind",
    "GroupError",
    "GroupMapping",
    "InvalidAttributeValue",
    "InvalidFilterSyntax",
    "LabelFilter",
    "Linkage",
    "MAX_GROUP_NAME_LENGTH",
    "MissingRootOrFilter",
    "TargetRegexFilter",
    "Traversal",
    "UnknownAttribute",
    "UnknownFilterKind",
    "UnrecognizedLinkageKind",
    "UnrecognizedTraversalKind",
    "add_to_implicit_group",
    "build_groups_map",
    "compute_mappings",
    "create_group",
    "find_targets_in_mapping",
    "generate_group_subfolder_name",
    "get_dedupped_roots_from_groups",
    "group_members",
    "hash_group_name",
    "matches_filters",
    "parse_build_target_pattern",
    "parse_filter",
    "parse_filters",
    "parse_groups_definitions",
    "stable_string_hash",
]
