"""Resolution of a single group mapping to the targets it matches."""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping

from linkgroups.graph.identifiers import TargetLabel
from linkgroups.graph.model import GraphNode
from linkgroups.graph.traversal import breadth_first_traversal_by
from linkgroups.groups.errors import MissingRootOrFilter
from linkgroups.groups.filters import matches_filters
from linkgroups.groups.types import GroupMapping, Traversal

logger = logging.getLogger("linkgroups.groups.resolver")


def find_targets_in_mapping(
    graph: Mapping[TargetLabel, GraphNode],
    mapping: GroupMapping,
) -> List[TargetLabel]:
    """Return the targets selected by `mapping`.

    Without filters the explicit roots are returned as-is. With filters the
    graph is searched breadth-first from the roots (or every node when the
    mapping has no roots) and each node passing the filters is collected.
    Under `tree` traversal the search does not descend below a match; the
    subtree is claimed later during assignment.

    Raises:
        MissingRootOrFilter: If the mapping has neither roots nor filters.
    """
    if not mapping.filters:
        if not mapping.roots:
            raise MissingRootOrFilter(f"no filter or explicit root given: {mapping}")
        return list(mapping.roots)

    # Insertion-ordered set of matches.
    matching_targets: Dict[TargetLabel, None] = {}

    def find_matching_targets(node: TargetLabel) -> tuple:
        graph_node = graph[node]
        if matches_filters(mapping.filters, node, graph_node.labels):
            matching_targets[node] = None
            if mapping.traversal == Traversal.TREE:
                return ()
        return graph_node.all_deps

    if not mapping.roots:
        for node in graph:
            find_matching_targets(node)
    else:
        breadth_first_traversal_by(graph, mapping.roots, find_matching_targets)

    logger.debug(
        "Mapping (%s, %d filters) matched %d targets",
        mapping.traversal.value,
        len(mapping.filters),
        len(matching_targets),
    )
    return list(matching_targets)


__all__ = ["find_targets_in_mapping"]
