"""Public graph API surface."""

from linkgroups.graph.identifiers import TargetLabel
from linkgroups.graph.io import graph_from_document, load_graph, save_graph
from linkgroups.graph.model import (
    DEPS_KIND,
    EXPORTED_DEPS_KIND,
    DependencyGraph,
    GraphFormatError,
    GraphNode,
)
from linkgroups.graph.traversal import breadth_first_traversal_by

__all__ = [
    "DEPS_KIND",
    "EXPORTED_DEPS_KIND",
    "DependencyGraph",
    "GraphFormatError",
    "GraphNode",
    "TargetLabel",
    "breadth_first_traversal_by",
    "graph_from_document",
    "load_graph",
    "save_graph",
]
