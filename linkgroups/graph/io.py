"""Loading and saving dependency graph documents."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import networkx as nx

from linkgroups.graph.model import DependencyGraph, GraphFormatError

logger = logging.getLogger("linkgroups.graph.io")


def graph_from_document(data: Dict[str, Any]) -> DependencyGraph:
    """Interpret a parsed JSON document as a dependency graph.

    Two layouts are accepted: the native `{"nodes": {...}}` mapping and
    networkx node-link data (`{"nodes": [...], "edges"|"links": [...]}`).

    Raises:
        GraphFormatError: If neither layout matches.
    """
    if not isinstance(data, dict):
        raise GraphFormatError("Top-level graph document must be a mapping")

    nodes = data.get("nodes")
    if isinstance(nodes, dict):
        return DependencyGraph.from_dict(data)

    if isinstance(nodes, list):
        edges_key = "edges" if "edges" in data else "links"
        # Dependency edges are directed even when the document omits the flag.
        data = {"directed": True, "multigraph": True, **data}
        try:
            native = nx.node_link_graph(data, edges=edges_key)
        except (KeyError, TypeError, nx.NetworkXError) as exc:
            raise GraphFormatError(f"Invalid node-link graph: {exc}") from exc
        try:
            return DependencyGraph.from_networkx(native)
        except ValueError as exc:
            raise GraphFormatError(f"Invalid node-link graph: {exc}") from exc

    raise GraphFormatError("Graph document must contain 'nodes'")


def load_graph(path: Union[str, Path]) -> DependencyGraph:
    """Load a dependency graph from a JSON file."""
    path = Path(path)
    logger.info("Loading dependency graph: %s", path)

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise GraphFormatError(f"{path}: {exc}") from exc

    graph = graph_from_document(data)
    logger.info("Loaded graph: %d nodes, %d edges", len(graph), graph.edge_count())
    return graph


def save_graph(graph: DependencyGraph, output_path: Union[str, Path]) -> None:
    """Write a dependency graph in the native JSON layout."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(graph.to_dict(), f, indent=2, sort_keys=True, ensure_ascii=False)

    logger.info("Graph saved: %s", output_path)


__all__ = ["graph_from_document", "load_graph", "save_graph"]
