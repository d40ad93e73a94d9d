"""Read-only dependency graph consumed by the group assignment engine.

The graph is supplied fully materialized. Each node exposes its labels,
its direct dependencies and its exported dependencies; both dependency
lists are followed when traversing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterator, Mapping, Optional, Tuple

import networkx as nx

from linkgroups.graph.identifiers import TargetLabel

logger = logging.getLogger("linkgroups.graph.model")

DEPS_KIND = "deps"
EXPORTED_DEPS_KIND = "exported_deps"


class GraphFormatError(ValueError):
    """Raised when a serialized graph document cannot be interpreted."""


@dataclass(frozen=True)
class GraphNode:
    """Single node of the dependency graph.

    Attributes:
        labels: Free-form string labels attached to the target.
        deps: Direct dependencies, in declaration order.
        exported_deps: Dependencies re-exported to transitive consumers.
    """

    labels: FrozenSet[str] = field(default_factory=frozenset)
    deps: Tuple[TargetLabel, ...] = ()
    exported_deps: Tuple[TargetLabel, ...] = ()

    @property
    def all_deps(self) -> Tuple[TargetLabel, ...]:
        """Dependencies followed during traversal (`deps + exported_deps`)."""
        return self.deps + self.exported_deps


class DependencyGraph(Mapping[TargetLabel, GraphNode]):
    """Immutable mapping from target to graph node.

    Iteration order is the insertion order of the supplied nodes, which
    keeps full-graph scans deterministic.
    """

    def __init__(self, nodes: Optional[Mapping[TargetLabel, GraphNode]] = None) -> None:
        self._nodes: Dict[TargetLabel, GraphNode] = dict(nodes or {})
        logger.debug("DependencyGraph created with %d nodes", len(self._nodes))

    def __getitem__(self, target: TargetLabel) -> GraphNode:
        return self._nodes[target]

    def __iter__(self) -> Iterator[TargetLabel]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, target: object) -> bool:
        return target in self._nodes

    def edge_count(self) -> int:
        """Return the total number of dependency edges."""
        return sum(len(node.all_deps) for node in self._nodes.values())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DependencyGraph":
        """Build a graph from its JSON document form.

        The expected layout is::

            {"nodes": {"//pkg:a": {"labels": [...], "deps": [...],
                                   "exported_deps": [...]}}}

        Raises:
            GraphFormatError: If the document does not follow the layout.
        """
        raw_nodes = data.get("nodes")
        if not isinstance(raw_nodes, Mapping):
            raise GraphFormatError("Graph document must contain a 'nodes' mapping")

        nodes: Dict[TargetLabel, GraphNode] = {}
        for raw_id, raw_node in raw_nodes.items():
            raw_node = raw_node or {}
            if not isinstance(raw_node, Mapping):
                raise GraphFormatError(f"Node {raw_id!r} must be a mapping")
            try:
                target = TargetLabel.parse(raw_id)
                nodes[target] = GraphNode(
                    labels=frozenset(raw_node.get("labels") or ()),
                    deps=tuple(TargetLabel.parse(d) for d in raw_node.get("deps") or ()),
                    exported_deps=tuple(
                        TargetLabel.parse(d) for d in raw_node.get("exported_deps") or ()
                    ),
                )
            except ValueError as exc:
                raise GraphFormatError(f"Invalid node {raw_id!r}: {exc}") from exc

        return cls(nodes)

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON document form accepted by `from_dict`."""
        return {
            "nodes": {
                str(target): {
                    "labels": sorted(node.labels),
                    "deps": [str(d) for d in node.deps],
                    "exported_deps": [str(d) for d in node.exported_deps],
                }
                for target, node in self._nodes.items()
            }
        }

    @classmethod
    def from_networkx(cls, graph: nx.DiGraph) -> "DependencyGraph":
        """Build a graph from a networkx (Multi)DiGraph.

        Node identifiers may be strings or TargetLabel instances. Node
        labels are read from the `labels` attribute. Edges point from
        consumer to dependency; an edge whose `kind` attribute is
        `exported_deps` is an exported dependency, anything else is a
        direct dependency.
        """
        ids = {node_id: TargetLabel.parse(node_id) for node_id in graph.nodes}

        deps: Dict[TargetLabel, list] = {target: [] for target in ids.values()}
        exported: Dict[TargetLabel, list] = {target: [] for target in ids.values()}
        for source, dest, attrs in graph.edges(data=True):
            bucket = exported if (attrs or {}).get("kind") == EXPORTED_DEPS_KIND else deps
            dest_target = ids[dest]
            if dest_target not in bucket[ids[source]]:
                bucket[ids[source]].append(dest_target)

        nodes: Dict[TargetLabel, GraphNode] = {}
        for node_id, attrs in graph.nodes(data=True):
            target = ids[node_id]
            nodes[target] = GraphNode(
                labels=frozenset((attrs or {}).get("labels") or ()),
                deps=tuple(deps[target]),
                exported_deps=tuple(exported[target]),
            )

        logger.info(
            "Converted networkx graph: %d nodes, %d edges",
            graph.number_of_nodes(),
            graph.number_of_edges(),
        )
        return cls(nodes)

    def to_networkx(self) -> nx.MultiDiGraph:
        """Render the graph as a networkx MultiDiGraph keyed by target string."""
        graph = nx.MultiDiGraph()
        for target, node in self._nodes.items():
            graph.add_node(str(target), labels=sorted(node.labels))
        for target, node in self._nodes.items():
            for dep in node.deps:
                graph.add_edge(str(target), str(dep), kind=DEPS_KIND)
            for dep in node.exported_deps:
                graph.add_edge(str(target), str(dep), kind=EXPORTED_DEPS_KIND)
        return graph


__all__ = [
    "DEPS_KIND",
    "EXPORTED_DEPS_KIND",
    "DependencyGraph",
    "GraphFormatError",
    "GraphNode",
]
