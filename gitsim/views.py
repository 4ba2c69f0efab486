"""
Read-only view models for gitsim presentation layers.

Renderers (the rich terminal, a web page, a notebook) should not walk
snapshots themselves. These functions turn a RepositorySnapshot into
plain records for the commit graph, the status panel, the command
history panel and the terminal prompt. Nothing here mutates state.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any, List, Optional, Tuple

from .domain import RepositorySnapshot, Commit, FileEntry, HistoryEntry, short_id


def prompt(
    snapshot: RepositorySnapshot,
    user: str = "user",
    host: str = "computer",
    repo_host: str = "repo",
) -> str:
    """Terminal prompt for the current state."""
    if not snapshot.initialized:
        return f"{user}@{host}:~$ "
    if snapshot.detached_head:
        return f"{user}@{repo_host}:(({short_id(snapshot.head)}))$ "
    return f"{user}@{repo_host}:({snapshot.current_branch})$ "


def prompt_from_config(snapshot: RepositorySnapshot, config: Dict[str, Any]) -> str:
    """Prompt using the config's ``prompt`` section; unknown keys are ignored."""
    settings = config.get('prompt') or {}
    return prompt(
        snapshot,
        user=str(settings.get('user', 'user')),
        host=str(settings.get('host', 'computer')),
        repo_host=str(settings.get('repo_host', 'repo')),
    )


@dataclass(frozen=True)
class GraphNode:
    """A commit placed on the graph grid."""
    id: str
    short_id: str
    message: str
    lane: int
    column: int
    color: str
    is_head: bool = False
    is_merge: bool = False
    labels: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'short_id': self.short_id,
            'message': self.message,
            'lane': self.lane,
            'column': self.column,
            'color': self.color,
            'is_head': self.is_head,
            'is_merge': self.is_merge,
            'labels': list(self.labels),
        }


@dataclass(frozen=True)
class GraphEdge:
    """Parent to child link. ``merge`` marks the second parent of a merge."""
    parent: str
    child: str
    merge: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {'parent': self.parent, 'child': self.child, 'merge': self.merge}


@dataclass(frozen=True)
class CommitGraph:
    """
    Commit graph laid out on a lane/column grid.

    Lanes follow branch creation order; columns follow commit creation
    order. Commits made while detached go to lane 0.
    """
    nodes: Tuple[GraphNode, ...] = ()
    edges: Tuple[GraphEdge, ...] = ()
    lanes: Tuple[Tuple[str, str], ...] = ()  # (branch name, color)
    detached_head: bool = False

    @property
    def empty(self) -> bool:
        return not self.nodes

    def node(self, commit_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.id == commit_id:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nodes': [n.to_dict() for n in self.nodes],
            'edges': [e.to_dict() for e in self.edges],
            'lanes': [{'branch': name, 'color': color} for name, color in self.lanes],
            'detached_head': self.detached_head,
        }


def build_graph(snapshot: RepositorySnapshot) -> CommitGraph:
    """Lay out the snapshot's commits for drawing."""
    lane_of = {b.name: i for i, b in enumerate(snapshot.branches)}
    color_of = {b.name: b.color for b in snapshot.branches}
    default_color = snapshot.branches[0].color if snapshot.branches else ""

    labels: Dict[str, List[str]] = {}
    for branch in snapshot.branches:
        if branch.commit:
            labels.setdefault(branch.commit, []).append(branch.name)

    nodes = []
    edges = []
    for column, commit in enumerate(snapshot.commits):
        nodes.append(GraphNode(
            id=commit.id,
            short_id=commit.short_id,
            message=commit.message,
            lane=lane_of.get(commit.branch, 0),
            column=column,
            color=color_of.get(commit.branch, default_color),
            is_head=commit.id == snapshot.head,
            is_merge=commit.is_merge,
            labels=tuple(labels.get(commit.id, ())),
        ))
        if commit.parents:
            edges.extend(
                GraphEdge(parent=p, child=commit.id, merge=i > 0)
                for i, p in enumerate(commit.parents)
            )
        elif commit.parent:
            edges.append(GraphEdge(parent=commit.parent, child=commit.id))

    return CommitGraph(
        nodes=tuple(nodes),
        edges=tuple(edges),
        lanes=tuple((b.name, b.color) for b in snapshot.branches),
        detached_head=snapshot.detached_head,
    )


@dataclass(frozen=True)
class BranchRow:
    name: str
    color: str
    commit: str
    current: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'color': self.color, 'commit': self.commit, 'current': self.current}


@dataclass(frozen=True)
class StatusPanel:
    """Everything the repository status panel shows."""
    initialized: bool
    head: str = ""
    current_branch: str = ""
    detached_head: bool = False
    commit_count: int = 0
    staged: Tuple[FileEntry, ...] = ()
    working_dir: Tuple[FileEntry, ...] = ()
    branches: Tuple[BranchRow, ...] = ()
    recent_commits: Tuple[Commit, ...] = ()
    clean: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'initialized': self.initialized,
            'head': self.head,
            'current_branch': self.current_branch,
            'detached_head': self.detached_head,
            'commit_count': self.commit_count,
            'staged': [f.to_dict() for f in self.staged],
            'working_dir': [f.to_dict() for f in self.working_dir],
            'branches': [b.to_dict() for b in self.branches],
            'recent_commits': [c.to_dict() for c in self.recent_commits],
            'clean': self.clean,
        }


def build_status_panel(snapshot: RepositorySnapshot, recent: int = 3) -> StatusPanel:
    """Summarize the snapshot for the status panel."""
    if not snapshot.initialized:
        return StatusPanel(initialized=False)

    branches = tuple(
        BranchRow(
            name=b.name,
            color=b.color,
            commit=short_id(b.commit),
            current=b.name == snapshot.current_branch and not snapshot.detached_head,
        )
        for b in snapshot.branches
    )
    recent_commits = tuple(reversed(snapshot.commits[-recent:])) if recent > 0 else ()

    return StatusPanel(
        initialized=True,
        head=short_id(snapshot.head),
        current_branch=snapshot.current_branch,
        detached_head=snapshot.detached_head,
        commit_count=len(snapshot.commits),
        staged=snapshot.staged,
        working_dir=snapshot.working_dir,
        branches=branches,
        recent_commits=recent_commits,
        clean=not snapshot.staged and not snapshot.working_dir and bool(snapshot.commits),
    )


@dataclass(frozen=True)
class HistoryRow:
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
class HistoryPanel:
    rows: Tuple[HistoryRow, ...] = ()
    total: int = 0

    @property
    def truncated(self) -> bool:
        """True when older entries are hidden."""
        return self.total > len(self.rows)


def preview(text: str, limit: int) -> str:
    """Shorten ``text`` to ``limit`` characters followed by an ellipsis."""
    if limit <= 0 or len(text) <= limit:
        return text
    return text[:limit] + "..."


def build_history_panel(
    snapshot: RepositorySnapshot,
    limit: int = 10,
    preview_chars: int = 100,
) -> HistoryPanel:
    """The last ``limit`` log entries, oldest first, with shortened output."""
    entries: Tuple[HistoryEntry, ...] = snapshot.command_history[-limit:] if limit > 0 else ()
    rows = tuple(
        HistoryRow(
            command=e.command,
            output=preview(e.output, preview_chars),
            error=e.error,
            timestamp=e.timestamp,
        )
        for e in entries
    )
    return HistoryPanel(rows=rows, total=len(snapshot.command_history))
