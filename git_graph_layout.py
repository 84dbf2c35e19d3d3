# git_graph_layout.py

import logging
from typing import Iterable

from git_graph_data import CommitGraph, CommitNode, CommitRecord, GraphEdge

COLUMN_X = 50
TOP_MARGIN = 50
ROW_HEIGHT = 60


def build_commit_graph(records: Iterable[CommitRecord]) -> CommitGraph:
    """
    Builds positioned CommitNodes and resolved parent edges from a commit list.
    The input is expected newest first (as produced by git log).
    Every commit gets its own row in input order, all in a single column.
    The newest commit is highlighted.
    Parent ids that are not part of the list (history cut by the depth limit)
    produce no edge.
    """
    nodes: list[CommitNode] = []
    for i, record in enumerate(records):
        node = CommitNode(record, index=i)
        node.x = COLUMN_X
        node.y = TOP_MARGIN + i * ROW_HEIGHT
        node.highlight = i == 0
        nodes.append(node)

    graph = CommitGraph(nodes)

    missing = 0
    for node in nodes:
        for parent_id in node.parent_ids:
            parent = graph.find(parent_id)
            if parent is None:
                missing += 1
                continue
            graph.edges.append(GraphEdge(node, parent))

    if missing:
        logging.debug("Omitted %d edges to commits outside the loaded history", missing)
    logging.debug("Built commit graph: %d nodes, %d edges", len(graph.nodes), len(graph.edges))
    return graph
