"""
Repository snapshot domain object for gitsim.

A snapshot is the whole simulated repository at one point in time:
commits, branches, HEAD, staging area, working directory and the
command log. Collections are tuples so a snapshot is an immutable value
that can be handed to any number of readers.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple, Dict, Any

from .commit import Commit, Branch, FileEntry


@dataclass(frozen=True)
class HistoryEntry:
    """One executed terminal command and what it printed."""
    command: str
    output: str
    error: bool
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            'command': self.command,
            'output': self.output,
            'error': self.error,
            'timestamp': self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class RepositorySnapshot:
    """
    Immutable state of the simulated repository.

    Attributes:
        initialized: True once `git init` has run
        commits: All commits in creation order (append-only)
        branches: All branches in creation order
        current_branch: Checked out branch name ("" when detached)
        head: Commit the next operation builds from ("" before any commit)
        detached_head: True when HEAD points at a commit directly
        staged: Files staged for the next commit
        working_dir: Files not staged
        command_history: Executed commands (append-only)
    """

    initialized: bool = False
    commits: Tuple[Commit, ...] = ()
    branches: Tuple[Branch, ...] = ()
    current_branch: str = ""
    head: str = ""
    detached_head: bool = False
    staged: Tuple[FileEntry, ...] = ()
    working_dir: Tuple[FileEntry, ...] = ()
    command_history: Tuple[HistoryEntry, ...] = ()

    @classmethod
    def empty(cls) -> 'RepositorySnapshot':
        """The pristine, uninitialized repository."""
        return cls()

    def find_branch(self, name: str) -> Optional[Branch]:
        for branch in self.branches:
            if branch.name == name:
                return branch
        return None

    def find_commit(self, commit_id: str) -> Optional[Commit]:
        for commit in self.commits:
            if commit.id == commit_id:
                return commit
        return None

    def resolve_commit_prefix(self, prefix: str) -> Optional[Commit]:
        """
        Resolve an abbreviated commit id.

        The first commit in creation order whose id starts with ``prefix``
        wins, so an ambiguous prefix silently picks the oldest match.
        """
        if not prefix:
            return None
        for commit in self.commits:
            if commit.id.startswith(prefix):
                return commit
        return None

    @property
    def head_commit(self) -> Optional[Commit]:
        return self.find_commit(self.head) if self.head else None

    def working_file(self, name: str) -> Optional[FileEntry]:
        for entry in self.working_dir:
            if entry.name == name:
                return entry
        return None

    def staged_file(self, name: str) -> Optional[FileEntry]:
        for entry in self.staged:
            if entry.name == name:
                return entry
        return None

    def has_file(self, name: str) -> bool:
        """True if the name is in the working directory or staging area."""
        return self.working_file(name) is not None or self.staged_file(name) is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'initialized': self.initialized,
            'commits': [c.to_dict() for c in self.commits],
            'branches': [b.to_dict() for b in self.branches],
            'current_branch': self.current_branch,
            'head': self.head,
            'detached_head': self.detached_head,
            'staged': [f.to_dict() for f in self.staged],
            'working_dir': [f.to_dict() for f in self.working_dir],
            'command_history': [h.to_dict() for h in self.command_history],
        }
