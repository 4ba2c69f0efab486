"""
Domain layer for gitsim.

Contains pure domain objects with no I/O or side effects:
- Commit, Branch, FileEntry: entities of the simulated repository
- RepositorySnapshot: the whole repository state at one point in time
- action: the closed set of state transitions the store applies

These objects are immutable and provide serialization methods for
JSON output.
"""

from .commit import (
    Commit,
    Branch,
    FileEntry,
    FileStatus,
    AUTHOR,
    DEFAULT_BRANCH,
    PLACEHOLDER_FILE,
    BRANCH_COLORS,
    branch_color,
    short_id,
)
from .snapshot import RepositorySnapshot, HistoryEntry
from . import action

__all__ = [
    'Commit',
    'Branch',
    'FileEntry',
    'FileStatus',
    'RepositorySnapshot',
    'HistoryEntry',
    'AUTHOR',
    'DEFAULT_BRANCH',
    'PLACEHOLDER_FILE',
    'BRANCH_COLORS',
    'branch_color',
    'short_id',
    'action',
]
