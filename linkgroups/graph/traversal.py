"""Graph traversal helpers."""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Iterable, List, Mapping, Set, TypeVar

logger = logging.getLogger("linkgroups.graph.traversal")

N = TypeVar("N")


def breadth_first_traversal_by(
    graph: Mapping[N, object],
    roots: Iterable[N],
    get_nodes_to_traverse: Callable[[N], Iterable[N]],
) -> List[N]:
    """Visit nodes breadth-first, letting the callback choose the next hop.

    Each node is visited at most once. Nodes missing from `graph` are
    skipped without invoking the callback.

    Args:
        graph: Graph mapping used for membership checks.
        roots: Seed nodes, visited in order.
        get_nodes_to_traverse: Called once per visited node; returns the
            nodes to enqueue next.

    Returns:
        List[N]: Visited nodes in visitation order.
    """
    visited: List[N] = []
    seen: Set[N] = set()
    queue = deque()

    for root in roots:
        if root not in seen:
            seen.add(root)
            queue.append(root)

    while queue:
        node = queue.popleft()
        if node not in graph:
            logger.debug("Skipping %s: not present in graph", node)
            continue

        visited.append(node)
        for child in get_nodes_to_traverse(node):
            if child not in seen:
                seen.add(child)
                queue.append(child)

    return visited


__all__ = ["breadth_first_traversal_by"]
