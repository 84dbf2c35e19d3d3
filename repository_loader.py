import logging
import os
from typing import List, Optional

import git

from git_graph_data import CommitRecord

DEFAULT_HISTORY_DEPTH = 100
DETACHED_HEAD_LABEL = "HEAD (Detached)"


class RepositoryLoadError(Exception):
    """Raised when a folder cannot be read as a git repository."""


class RepositoryData:
    def __init__(self, path: str, records: List[CommitRecord], branches: List[str], current_branch: Optional[str]):
        self.path = path
        self.records = records
        self.branches = branches
        self.current_branch = current_branch

    def __repr__(self) -> str:
        return (
            f"RepositoryData(path='{self.path}', commits={len(self.records)}, "
            f"branches={self.branches}, current_branch={self.current_branch!r})"
        )


class TreeEntry:
    def __init__(self, path: str, kind: str, object_id: str):
        self.path = path
        self.kind = kind  # "tree", "blob" or "commit" (submodule)
        self.object_id = object_id

    @property
    def is_dir(self) -> bool:
        return self.kind == "tree"

    @property
    def short_id(self) -> str:
        return self.object_id[:7]

    def __repr__(self) -> str:
        return f"TreeEntry('{self.path}', {self.kind}, {self.short_id})"


class FileChange:
    def __init__(self, change_type: str, path: str):
        self.change_type = change_type  # git letter: A, D, M, R, T
        self.path = path

    def __repr__(self) -> str:
        return f"FileChange({self.change_type} {self.path})"


class RepositoryLoader:
    """Reads commit history, branches and trees of a local repository through GitPython."""

    def __init__(self, repo_path: str, depth: int = DEFAULT_HISTORY_DEPTH):
        self.repo_path = repo_path
        self.depth = depth
        self.repo: Optional[git.Repo] = None

    def open(self) -> git.Repo:
        if self.repo is None:
            if not os.path.isdir(self.repo_path):
                raise RepositoryLoadError(f"Folder does not exist: {self.repo_path}")
            try:
                self.repo = git.Repo(self.repo_path)
            except git.InvalidGitRepositoryError as e:
                raise RepositoryLoadError(f"Not a git repository: {self.repo_path}") from e
            except git.NoSuchPathError as e:
                raise RepositoryLoadError(f"Folder does not exist: {self.repo_path}") from e
        return self.repo

    def load(self) -> RepositoryData:
        """Read the newest ``depth`` commits reachable from HEAD, newest first."""
        repo = self.open()
        logging.info("Loading repository %s (depth=%d)", self.repo_path, self.depth)

        try:
            commits = list(repo.iter_commits(max_count=self.depth))
        except ValueError as e:
            # unborn HEAD: the repository has no commits yet
            raise RepositoryLoadError(f"Repository has no commits: {self.repo_path}") from e
        except git.GitCommandError as e:
            error_message = f"Reading history failed: {e!s}"
            if e.stderr:
                error_message += f"\nDetails: {e.stderr.strip()}"
            raise RepositoryLoadError(error_message) from e

        records = [
            CommitRecord(
                id=commit.hexsha,
                message=commit.message,
                author_name=commit.author.name,
                author_email=commit.author.email,
                timestamp=commit.authored_date,
                parents=[parent.hexsha for parent in commit.parents],
            )
            for commit in commits
        ]

        data = RepositoryData(
            path=self.repo_path,
            records=records,
            branches=self.get_branches(),
            current_branch=self.get_current_branch(),
        )
        logging.info("Loaded %r", data)
        return data

    def get_branches(self) -> List[str]:
        repo = self.open()
        return [head.name for head in repo.heads]

    def get_current_branch(self) -> Optional[str]:
        repo = self.open()
        if repo.head.is_detached:
            return DETACHED_HEAD_LABEL
        try:
            return repo.active_branch.name
        except TypeError:
            return None

    def list_tree(self, commit_id: str) -> List[TreeEntry]:
        """Top-level entries of a commit's tree, directories first."""
        repo = self.open()
        tree = repo.commit(commit_id).tree
        entries = [TreeEntry(item.path, item.type, item.hexsha) for item in tree]
        return sorted(entries, key=lambda entry: not entry.is_dir)

    def get_commit_changes(self, commit_id: str) -> List[FileChange]:
        """Files changed by a commit relative to its first parent. Empty for root commits."""
        repo = self.open()
        commit = repo.commit(commit_id)
        if not commit.parents:
            return []
        changes = []
        for diff_item in commit.parents[0].diff(commit):
            changes.append(FileChange(diff_item.change_type, diff_item.b_path or diff_item.a_path))
        return changes
