# git_graph_data.py

from typing import Optional

from PyQt6.QtCore import QPointF


class CommitRecord:
    """One commit as handed over by the repository data provider."""

    def __init__(
        self,
        id: str,
        message: str,
        author_name: str,
        parents: Optional[list[str]] = None,
        author_email: str = "",
        timestamp: int = 0,
    ):
        self.id: str = id
        self.message: str = message
        self.author_name: str = author_name
        self.author_email: str = author_email
        self.timestamp: int = timestamp
        self.parents: list[str] = list(parents) if parents else []

    @property
    def summary(self) -> str:
        return self.message.split("\n", 1)[0].strip()

    def __repr__(self) -> str:
        return f"CommitRecord(id='{self.id[:7]}', parents={[p[:7] for p in self.parents]})"


class CommitNode:
    def __init__(self, record: CommitRecord, index: int):
        self.id: str = record.id
        self.summary: str = record.summary
        self.message: str = record.message
        self.author: str = record.author_name
        self.author_email: str = record.author_email
        self.timestamp: int = record.timestamp
        self.parent_ids: list[str] = list(record.parents)
        self.index: int = index
        self.highlight: bool = False

        # Layout-related attributes, filled by the graph builder
        self.x: float = 0.0
        self.y: float = 0.0

    @property
    def position(self) -> QPointF:
        return QPointF(self.x, self.y)

    @property
    def short_id(self) -> str:
        return self.id[:7]

    def __repr__(self) -> str:
        return (
            f"CommitNode(id='{self.id[:7]}', "
            f"parents={[p[:7] for p in self.parent_ids]}, "
            f"summary='{self.summary[:20]}...', "
            f"x={self.x}, y={self.y}, "
            f"highlight={self.highlight})"
        )


class GraphEdge:
    """A resolved child -> parent link."""

    def __init__(self, child: CommitNode, parent: CommitNode):
        self.child = child
        self.parent = parent

    def __repr__(self) -> str:
        return f"GraphEdge({self.child.id[:7]} -> {self.parent.id[:7]})"


class CommitGraph:
    def __init__(self, nodes: Optional[list[CommitNode]] = None, edges: Optional[list[GraphEdge]] = None):
        self.nodes: list[CommitNode] = nodes or []
        self.edges: list[GraphEdge] = edges or []
        self.node_by_id: dict[str, CommitNode] = {}
        for node in self.nodes:
            # first occurrence wins for duplicate ids
            self.node_by_id.setdefault(node.id, node)

    @property
    def head(self) -> Optional[CommitNode]:
        return next((node for node in self.nodes if node.highlight), None)

    def find(self, commit_id: str) -> Optional[CommitNode]:
        return self.node_by_id.get(commit_id)

    def edges_from(self, node: CommitNode) -> list[GraphEdge]:
        return [edge for edge in self.edges if edge.child is node]

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return f"CommitGraph(nodes={len(self.nodes)}, edges={len(self.edges)})"
