"""Assignment of graph targets to groups.

Groups are applied strictly in declaration order and, inside a group,
mappings in declaration order. The first group to claim a target keeps it;
later claims are ignored. `subfolders` mappings place each matched target
in an implicit group named after the target's package, and those implicit
groups are registered in the shared groups map as they are created.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, Iterable, List, Mapping, MutableMapping, Optional, Tuple

from linkgroups.graph.identifiers import TargetLabel
from linkgroups.graph.model import GraphNode
from linkgroups.graph.traversal import breadth_first_traversal_by
from linkgroups.groups.naming import generate_group_subfolder_name, hash_group_name
from linkgroups.groups.resolver import find_targets_in_mapping
from linkgroups.groups.types import (
    Group,
    GroupDefinitionKind,
    GroupMapping,
    Traversal,
    create_group,
)

logger = logging.getLogger("linkgroups.groups.assignment")

AssignmentMap = Dict[TargetLabel, str]


def add_to_implicit_group(
    generated_group_name: str,
    group: Group,
    groups_map: MutableMapping[str, Group],
    target_to_group_map: MutableMapping[TargetLabel, str],
    target: TargetLabel,
) -> str:
    """Assign `target` to an implicit group derived from `group`.

    An unknown name registers a new implicit copy of `group`; an existing
    implicit group of that name is reused. A name taken by an explicit
    group is rehashed until it no longer is.

    Returns:
        str: The name the target was assigned to.
    """
    candidate = generated_group_name
    while True:
        existing = groups_map.get(candidate)
        if existing is None:
            groups_map[candidate] = create_group(
                group=group,
                name=candidate,
                definition_type=GroupDefinitionKind.IMPLICIT,
            )
            logger.debug("Registered implicit group %s (from %s)", candidate, group.name)
            break
        if existing.definition_type != GroupDefinitionKind.EXPLICIT:
            break

        rehashed = hash_group_name(group.name, candidate)
        logger.debug(
            "Implicit group name %s collides with an explicit group, trying %s",
            candidate,
            rehashed,
        )
        candidate = rehashed

    target_to_group_map[target] = candidate
    return candidate


class GroupAssigner:
    """Computes the target -> group name map for one graph.

    The assigner owns the assignment map and the set of targets that were
    claimed by node-only traversal. Both are built by a single thread; with
    `max_workers > 1` only the read-only mapping resolution runs in a pool.
    """

    def __init__(
        self,
        graph: Mapping[TargetLabel, GraphNode],
        groups_map: MutableMapping[str, Group],
        max_workers: int = 1,
    ) -> None:
        """Initialize the assigner.

        Args:
            graph: Dependency graph to classify.
            groups_map: Ordered name -> Group registry. Implicit groups are
                added to it during assignment.
            max_workers: Number of threads used to resolve mappings.
        """
        self.graph = graph
        self.groups_map = groups_map
        self.max_workers = max(1, max_workers)
        self.target_to_group_map: AssignmentMap = {}
        self._node_traversed_targets: Dict[TargetLabel, None] = {}

    def compute(self) -> AssignmentMap:
        """Run assignment over all groups and return the assignment map."""
        if not self.groups_map:
            return {}

        # Implicit groups added while applying are not themselves applied.
        work: List[Tuple[Group, GroupMapping]] = [
            (group, mapping)
            for group in list(self.groups_map.values())
            for mapping in group.mappings
        ]
        logger.info(
            "Assigning %d targets using %d groups (%d mappings)",
            len(self.graph),
            len(self.groups_map),
            len(work),
        )

        for index, targets in enumerate(self._resolve_all(work)):
            group, mapping = work[index]
            for target in targets:
                if target not in self.graph:
                    logger.debug("Skipping %s for group %s: not in graph", target, group.name)
                    continue
                self._update_target_to_group_mapping(group, mapping, target)

        logger.info(
            "Assigned %d of %d targets; %d groups registered",
            len(self.target_to_group_map),
            len(self.graph),
            len(self.groups_map),
        )
        return self.target_to_group_map

    def _resolve_all(
        self, work: List[Tuple[Group, GroupMapping]]
    ) -> Iterable[List[TargetLabel]]:
        """Yield matched targets per work item, in work order."""
        if self.max_workers == 1 or len(work) < 2:
            for _group, mapping in work:
                yield find_targets_in_mapping(self.graph, mapping)
            return

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures: List[Future] = [
                executor.submit(find_targets_in_mapping, self.graph, mapping)
                for _group, mapping in work
            ]
            for future in futures:
                yield future.result()

    def _assign_target_to_group(
        self,
        group: Group,
        mapping: GroupMapping,
        target: TargetLabel,
        node_traversal: bool,
    ) -> bool:
        """Assign `target` unless already claimed.

        Returns:
            bool: True when the target had already been assigned.
        """
        if target in self.target_to_group_map:
            return True

        if mapping.traversal == Traversal.SUBFOLDERS:
            generated_group_name = generate_group_subfolder_name(group.name, target.package)
            add_to_implicit_group(
                generated_group_name,
                group,
                self.groups_map,
                self.target_to_group_map,
                target,
            )
        else:
            self.target_to_group_map[target] = group.name

        if node_traversal:
            self._node_traversed_targets[target] = None
        return False

    def _update_target_to_group_mapping(
        self,
        group: Group,
        mapping: GroupMapping,
        target: TargetLabel,
    ) -> None:
        if mapping.traversal in (Traversal.NODE, Traversal.SUBFOLDERS):
            self._assign_target_to_group(group, mapping, target, node_traversal=True)
            return

        def transitively_add_targets(node: TargetLabel) -> tuple:
            previously_processed = self._assign_target_to_group(
                group, mapping, node, node_traversal=False
            )
            # Claimed by an earlier tree traversal: its subtree is already assigned.
            if previously_processed and node not in self._node_traversed_targets:
                return ()
            return self.graph[node].all_deps

        breadth_first_traversal_by(self.graph, [target], transitively_add_targets)


def compute_mappings(
    groups_map: MutableMapping[str, Group],
    graph: Mapping[TargetLabel, GraphNode],
    max_workers: int = 1,
) -> AssignmentMap:
    """Return the `{target: group name}` map for `graph`.

    Args:
        groups_map: Ordered name -> Group registry; implicit groups created
            by `subfolders` mappings are inserted into it.
        graph: Dependency graph.
        max_workers: Threads used for mapping resolution (1 = sequential).
    """
    return GroupAssigner(graph, groups_map, max_workers=max_workers).compute()


def get_dedupped_roots_from_groups(groups: Iterable[Group]) -> List[TargetLabel]:
    """Return every root referenced by the groups' mappings, deduplicated."""
    roots: Dict[TargetLabel, None] = {}
    for group in groups:
        for mapping in group.mappings:
            for root in mapping.roots:
                roots[root] = None
    return list(roots)


def group_members(
    target_to_group_map: Mapping[TargetLabel, str],
) -> Dict[str, List[TargetLabel]]:
    """Invert an assignment map into `{group name: sorted targets}`."""
    members: Dict[str, List[TargetLabel]] = {}
    for target, name in target_to_group_map.items():
        members.setdefault(name, []).append(target)
    for targets in members.values():
        targets.sort()
    return members


__all__ = [
    "AssignmentMap",
    "GroupAssigner",
    "add_to_implicit_group",
    "compute_mappings",
    "get_dedupped_roots_from_groups",
    "group_members",
]
