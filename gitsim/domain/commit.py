"""
Commit, branch and file domain objects for gitsim.

These are immutable value objects. The store never mutates them in place;
a transition builds new objects with dataclasses.replace().
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple, Dict, Any


AUTHOR = "User"
DEFAULT_BRANCH = "main"
PLACEHOLDER_FILE = "README.md"
SHORT_ID_LENGTH = 7

BRANCH_COLORS = (
    '#10B981',  # green
    '#3B82F6',  # blue
    '#F59E0B',  # amber
    '#EF4444',  # red
    '#8B5CF6',  # violet
    '#06B6D4',  # cyan
    '#F97316',  # orange
    '#EC4899',  # pink
)


def branch_color(index: int) -> str:
    """Palette color for the branch created at position ``index``."""
    return BRANCH_COLORS[index % len(BRANCH_COLORS)]


def short_id(commit_id: str) -> str:
    return commit_id[:SHORT_ID_LENGTH]


class FileStatus(Enum):
    """State of a file in the working directory or staging area."""
    UNTRACKED = "untracked"
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


@dataclass(frozen=True)
class FileEntry:
    """A file in exactly one of the working directory or the staging area."""
    name: str
    status: FileStatus = FileStatus.UNTRACKED

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'status': self.status.value}


@dataclass(frozen=True)
class Commit:
    """
    A simulated commit.

    Attributes:
        id: Short opaque token, unique within a session
        message: Commit message
        author: Display author (always AUTHOR)
        timestamp: Creation time (naive datetime, local time)
        branch: Branch the commit was created on ("" when detached)
        parent: Single parent id, None for a root commit
        parents: Both parents of a merge commit, mainline first
        is_merge: True for merge commits
    """

    id: str
    message: str
    author: str
    timestamp: datetime
    branch: str
    parent: Optional[str] = None
    parents: Optional[Tuple[str, ...]] = None
    is_merge: bool = False

    @property
    def short_id(self) -> str:
        return short_id(self.id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'id': self.id,
            'message': self.message,
            'author': self.author,
            'timestamp': self.timestamp.isoformat(),
            'branch': self.branch,
            'parent': self.parent,
            'is_merge': self.is_merge,
        }
        if self.parents is not None:
            result['parents'] = list(self.parents)
        return result

    def __str__(self) -> str:
        return f"{self.short_id} {self.message}"


@dataclass(frozen=True)
class Branch:
    """Named, movable pointer to a commit. ``commit`` is "" before the first commit."""
    name: str
    commit: str = ""
    color: str = BRANCH_COLORS[0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'commit': self.commit,
            'color': self.color,
        }
