"""
Graph assembly utilities.

assemble_graph() turns an unordered node mapping plus a prepared edge list into
a plain graph dict whose node order depends only on the node ids:

    {
      "nodes": [<node value>, ...],   # ordered by sorted node id
      "edges": <edge list, unchanged>
    }

to_networkx() loads such a graph into a NetworkX DiGraph.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Dict

import networkx as nx

logger = logging.getLogger(__name__)


def _utf16_order(node_id: str) -> bytes:
    # UTF-16 code unit order, so astral characters sort before U+E000..U+FFFF
    return node_id.encode("utf-16-be", "surrogatepass")


def assemble_graph(nodes: Mapping, edges: Iterable) -> Dict[str, Any]:
    """
    Build a graph dict from a node-id -> node-value mapping and an edge list.

    Node ids must be strings. Node values are emitted in node-id order,
    comparing ids by UTF-16 code units as JavaScript's default sort does. Edges
    are passed through as given (same object, no copy) and are not checked
    against the node ids.
    """
    if not isinstance(nodes, Mapping):
        raise TypeError(f"nodes must be a mapping of id -> node, got {type(nodes).__name__}")
    if edges is None or not isinstance(edges, Iterable):
        raise TypeError(f"edges must be iterable, got {type(edges).__name__}")
    for node_id in nodes.keys():
        if not isinstance(node_id, str):
            raise TypeError(f"Node ids must be strings, got {node_id!r} ({type(node_id).__name__})")

    return {
        "nodes": [nodes[node_id] for node_id in sorted(nodes.keys(), key=_utf16_order)],
        "edges": edges,
    }


def to_networkx(
    graph: Dict[str, Any],
    id_key: str = "id",
    source_key: str = "source",
    target_key: str = "target",
) -> nx.DiGraph:
    """
    Load an assembled graph into a networkx.DiGraph.

    Node values must be dicts carrying `id_key`; their other keys become node
    attributes. Edges must be dicts carrying `source_key` and `target_key`;
    their other keys become edge attributes.
    """
    G = nx.DiGraph()

    for node in graph.get("nodes", []):
        if not isinstance(node, Mapping) or id_key not in node:
            raise ValueError(f"Node is missing '{id_key}': {node!r}")
        attrs = {k: v for k, v in node.items() if k != id_key}
        G.add_node(node[id_key], **attrs)

    for edge in graph.get("edges") or []:
        if not isinstance(edge, Mapping) or source_key not in edge or target_key not in edge:
            raise ValueError(f"Edge is missing '{source_key}'/'{target_key}': {edge!r}")
        src = edge[source_key]
        tgt = edge[target_key]
        # Unlike assemble_graph, dangling references are an error here
        for endpoint in (src, tgt):
            if endpoint not in G.nodes:
                raise ValueError(f"Edge {src!r} -> {tgt!r} references unknown node {endpoint!r}")
        attrs = {k: v for k, v in edge.items() if k not in (source_key, target_key)}
        G.add_edge(src, tgt, **attrs)

    logger.debug(f"Built DiGraph with {G.number_of_nodes()} nodes and {G.number_of_edges()} edges")
    return G
