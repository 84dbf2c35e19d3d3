import logging
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from PyQt6.QtCore import QPointF

from git_graph_data import CommitGraph, CommitNode
from git_graph_layout import build_commit_graph
from repository_loader import FileChange, RepositoryData, RepositoryLoader, TreeEntry
from viewport import ViewportController, ViewportState

DETAIL_ID_LENGTH = 8


class ToolView(Enum):
    GRAPH = "graph"
    BRANCHES = "branches"
    FILES = "files"
    STATS = "stats"
    HISTORY = "history"

    @property
    def title(self) -> str:
        return self.value.upper().replace("-", " ")


class StatusKind(Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class CommitDetails:
    def __init__(self, node: CommitNode, changes: List[FileChange]):
        self.id = node.id
        self.short_id = node.id[:DETAIL_ID_LENGTH]
        self.summary = node.summary
        self.message = node.message
        self.author = node.author
        self.date = format_timestamp(node.timestamp)
        self.is_root = not node.parent_ids
        self.changes = changes

    def __repr__(self) -> str:
        return f"CommitDetails('{self.short_id}', author='{self.author}', changes={len(self.changes)})"


class RepositoryStats:
    def __init__(self, commits: int, branches: int, contributors: int):
        self.commits = commits
        self.branches = branches
        self.contributors = contributors

    def __repr__(self) -> str:
        return f"RepositoryStats(commits={self.commits}, branches={self.branches}, contributors={self.contributors})"


def format_timestamp(timestamp: int) -> str:
    if not timestamp:
        return ""
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")


class GitStudio:
    """Session state shared by the canvas and the side views.

    Holds the current repository, its commit graph, the viewport and the
    active tool view. A repository load is a two step affair: begin_load()
    hands out a generation number, and only the result carrying the latest
    generation is applied. Earlier, still running loads are ignored when they
    finish, and a failed load leaves the previous graph in place.
    """

    def __init__(self):
        self.viewport = ViewportState()
        self.controller = ViewportController(self.viewport)
        self.graph = CommitGraph()
        self.branches: List[str] = []
        self.current_branch: Optional[str] = None
        self.repo_path: Optional[str] = None
        self.loader: Optional[RepositoryLoader] = None
        self.active_view = ToolView.GRAPH
        self.selected: Optional[CommitNode] = None
        self.status: Tuple[str, StatusKind] = ("", StatusKind.INFO)
        self.generation = 0

    @property
    def is_loaded(self) -> bool:
        return self.repo_path is not None

    # --- view switching ---

    def switch_tool(self, view: ToolView) -> ToolView:
        """Make ``view`` the active tool view and return the previous one."""
        previous = self.active_view
        self.active_view = view
        logging.debug("Switched tool view %s -> %s", previous.value, view.value)
        return previous

    # --- loading ---

    def begin_load(self, path: str) -> int:
        self.generation += 1
        self.set_status("LOADING REPOSITORY...", StatusKind.INFO)
        logging.info("Begin load #%d of %s", self.generation, path)
        return self.generation

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def apply_loaded(self, generation: int, data: RepositoryData, loader: Optional[RepositoryLoader] = None) -> bool:
        if not self.is_current(generation):
            logging.info("Discarding stale load #%d (current #%d)", generation, self.generation)
            return False

        self.graph = build_commit_graph(data.records)
        self.branches = list(data.branches)
        self.current_branch = data.current_branch
        self.repo_path = data.path
        self.loader = loader
        self.selected = None
        self.active_view = ToolView.GRAPH
        self.set_status("REPO LOADED", StatusKind.SUCCESS)
        return True

    def apply_failed(self, generation: int, message: str) -> bool:
        if not self.is_current(generation):
            logging.info("Discarding stale load failure #%d: %s", generation, message)
            return False
        logging.error("Loading repository failed: %s", message)
        self.set_status(f"ERROR: {message}", StatusKind.ERROR)
        return True

    def set_status(self, message: str, kind: StatusKind):
        self.status = (message, kind)

    # --- viewport ---

    def reset_view(self):
        self.controller.reset()

    def press(self, point: QPointF) -> Optional[CommitDetails]:
        """Pointer down on the canvas: select a commit or start panning."""
        node = self.controller.pointer_down(point, self.graph.nodes)
        if node is None:
            return None
        return self.select_commit(node)

    # --- derived data for the views ---

    def select_commit(self, node_or_id) -> Optional[CommitDetails]:
        node = self.graph.find(node_or_id) if isinstance(node_or_id, str) else node_or_id
        if node is None:
            return None
        self.selected = node
        return CommitDetails(node, self._commit_changes(node))

    def _commit_changes(self, node: CommitNode) -> List[FileChange]:
        if self.loader is None or not node.parent_ids:
            return []
        try:
            return self.loader.get_commit_changes(node.id)
        except Exception as e:
            logging.warning("Could not read changes of %s: %s", node.short_id, e)
            return []

    def repository_summary(self) -> List[Tuple[str, str]]:
        return [
            ("BRANCH", self.current_branch or "None"),
            ("COMMITS", str(len(self.graph))),
            ("BRANCHES", str(len(self.branches))),
        ]

    def branch_rows(self) -> List[Tuple[str, bool]]:
        return [(branch, branch == self.current_branch) for branch in self.branches]

    def stats(self) -> RepositoryStats:
        contributors = {node.author for node in self.graph.nodes}
        return RepositoryStats(len(self.graph), len(self.branches), len(contributors))

    def history_rows(self) -> List[Tuple[CommitNode, str]]:
        return [(node, format_timestamp(node.timestamp).split(" ")[0]) for node in self.graph.nodes]

    def list_files(self) -> List[TreeEntry]:
        head = self.graph.head
        if self.loader is None or head is None:
            return []
        return self.loader.list_tree(head.id)
