"""
Repository state store for gitsim.

The store is the only thing that changes a RepositorySnapshot. It is a
pure transition function: apply(snapshot, action) returns a new
snapshot and never raises. Actions that do not apply to the current
state return the input snapshot unchanged, so callers that need to
explain *why* nothing happened must validate before dispatching.
"""

from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional
import logging
import uuid

from ..domain import (
    Branch,
    Commit,
    FileEntry,
    FileStatus,
    HistoryEntry,
    RepositorySnapshot,
    AUTHOR,
    DEFAULT_BRANCH,
    PLACEHOLDER_FILE,
    branch_color,
)
from ..domain import action as actions
from ..domain.commit import SHORT_ID_LENGTH

logger = logging.getLogger(__name__)


def generate_commit_id() -> str:
    """Random 7 character hex token."""
    return uuid.uuid4().hex[:SHORT_ID_LENGTH]


class RepositoryStore:
    """
    Applies actions to repository snapshots.

    The id factory and clock are injectable so tests can produce
    predictable commit ids and timestamps.

    Example:
        store = RepositoryStore()
        snapshot = store.apply(RepositorySnapshot.empty(), actions.Initialize())
        snapshot = store.apply(snapshot, actions.Stage((actions.STAGE_ALL,)))
        snapshot = store.apply(snapshot, actions.Commit("first"))
    """

    def __init__(
        self,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.id_factory = id_factory or generate_commit_id
        self.clock = clock or datetime.now
        self._transitions = {
            actions.Initialize: self._initialize,
            actions.CreateFile: self._create_file,
            actions.ModifyFile: self._modify_file,
            actions.Stage: self._stage,
            actions.Commit: self._commit,
            actions.Checkout: self._checkout,
            actions.CheckoutCommit: self._checkout_commit,
            actions.CreateBranch: self._create_branch,
            actions.CreateAndCheckoutBranch: self._create_and_checkout_branch,
            actions.Merge: self._merge,
            actions.Reset: self._reset,
            actions.RecordHistory: self._record_history,
            actions.ResetAll: self._reset_all,
        }

    def apply(self, snapshot: RepositorySnapshot, action) -> RepositorySnapshot:
        """
        Apply one action and return the resulting snapshot.

        Args:
            snapshot: Current repository state
            action: One of the gitsim.domain.action records

        Returns:
            New snapshot, or ``snapshot`` itself when the action is
            unknown or does not apply
        """
        transition = self._transitions.get(type(action))
        if transition is None:
            logger.debug(f"Ignoring unknown action: {action!r}")
            return snapshot
        return transition(snapshot, action)

    def _new_commit_id(self, snapshot: RepositorySnapshot) -> str:
        existing = {c.id for c in snapshot.commits}
        commit_id = self.id_factory()
        while commit_id in existing:
            commit_id = self.id_factory()
        return commit_id

    def _move_current_branch(self, snapshot: RepositorySnapshot, commit_id: str):
        return tuple(
            replace(b, commit=commit_id) if b.name == snapshot.current_branch else b
            for b in snapshot.branches
        )

    def _initialize(self, snapshot, action):
        return replace(
            snapshot,
            initialized=True,
            current_branch=DEFAULT_BRANCH,
            branches=(Branch(name=DEFAULT_BRANCH, commit="", color=branch_color(0)),),
            working_dir=(FileEntry(PLACEHOLDER_FILE, FileStatus.UNTRACKED),),
            detached_head=False,
        )

    def _create_file(self, snapshot, action):
        # Staged names count too, so a file is never in both collections
        if snapshot.has_file(action.name):
            return snapshot
        return replace(
            snapshot,
            working_dir=snapshot.working_dir + (FileEntry(action.name, FileStatus.UNTRACKED),),
        )

    def _modify_file(self, snapshot, action):
        if snapshot.working_file(action.name) is None:
            return snapshot
        return replace(
            snapshot,
            working_dir=tuple(
                replace(f, status=FileStatus.MODIFIED) if f.name == action.name else f
                for f in snapshot.working_dir
            ),
        )

    def _stage(self, snapshot, action):
        if actions.STAGE_ALL in action.names:
            names = [f.name for f in snapshot.working_dir]
        else:
            names = [n for n in action.names if snapshot.working_file(n) is not None]
        if not names:
            return snapshot

        moved = []
        for name in dict.fromkeys(names):
            entry = snapshot.working_file(name)
            if entry.status == FileStatus.UNTRACKED:
                entry = replace(entry, status=FileStatus.ADDED)
            moved.append(entry)

        moved_names = {f.name for f in moved}
        return replace(
            snapshot,
            staged=tuple(f for f in snapshot.staged if f.name not in moved_names) + tuple(moved),
            working_dir=tuple(f for f in snapshot.working_dir if f.name not in moved_names),
        )

    def _commit(self, snapshot, action):
        if not snapshot.staged:
            return snapshot

        commit = Commit(
            id=self._new_commit_id(snapshot),
            message=action.message,
            author=AUTHOR,
            timestamp=self.clock(),
            branch=snapshot.current_branch,
            parent=snapshot.head or None,
        )
        logger.debug(f"Created commit {commit.id} on '{commit.branch}'")
        return replace(
            snapshot,
            commits=snapshot.commits + (commit,),
            head=commit.id,
            staged=(),
            detached_head=False,
            branches=self._move_current_branch(snapshot, commit.id),
        )

    def _checkout(self, snapshot, action):
        branch = snapshot.find_branch(action.branch)
        if branch is None:
            return snapshot
        return replace(
            snapshot,
            current_branch=branch.name,
            head=branch.commit,
            detached_head=False,
        )

    def _checkout_commit(self, snapshot, action):
        commit = snapshot.resolve_commit_prefix(action.commit_prefix)
        if commit is None:
            return snapshot
        return replace(
            snapshot,
            head=commit.id,
            detached_head=True,
            current_branch="",
        )

    def _create_branch(self, snapshot, action):
        if snapshot.find_branch(action.name) is not None:
            return snapshot
        branch = Branch(
            name=action.name,
            commit=action.from_commit or snapshot.head,
            color=branch_color(len(snapshot.branches)),
        )
        return replace(snapshot, branches=snapshot.branches + (branch,))

    def _create_and_checkout_branch(self, snapshot, action):
        created = self._create_branch(snapshot, actions.CreateBranch(action.name))
        if created is snapshot:
            return snapshot
        return self._checkout(created, actions.Checkout(action.name))

    def _merge(self, snapshot, action):
        source = snapshot.find_branch(action.branch)
        if source is None or source.name == snapshot.current_branch:
            return snapshot
        # Both sides need a commit, otherwise the merge would carry a dangling parent
        if not source.commit or not snapshot.head:
            return snapshot

        commit = Commit(
            id=self._new_commit_id(snapshot),
            message=f"Merge branch '{source.name}' into {snapshot.current_branch}",
            author=AUTHOR,
            timestamp=self.clock(),
            branch=snapshot.current_branch,
            parent=snapshot.head,
            parents=(snapshot.head, source.commit),
            is_merge=True,
        )
        logger.debug(f"Created merge commit {commit.id} ({snapshot.head} + {source.commit})")
        return replace(
            snapshot,
            commits=snapshot.commits + (commit,),
            head=commit.id,
            branches=self._move_current_branch(snapshot, commit.id),
        )

    def _reset(self, snapshot, action):
        if action.target != actions.RESET_TARGET:
            return snapshot
        current = snapshot.head_commit
        if current is None or not current.parent:
            return snapshot

        hard = action.mode == "hard"
        return replace(
            snapshot,
            head=current.parent,
            branches=self._move_current_branch(snapshot, current.parent),
            staged=() if hard else snapshot.staged,
            working_dir=() if hard else snapshot.working_dir,
        )

    def _record_history(self, snapshot, action):
        entry = HistoryEntry(
            command=action.command,
            output=action.output,
            error=bool(action.error),
            timestamp=self.clock(),
        )
        return replace(snapshot, command_history=snapshot.command_history + (entry,))

    def _reset_all(self, snapshot, action):
        return RepositorySnapshot.empty()


_default_store = RepositoryStore()


def apply(snapshot: RepositorySnapshot, action) -> RepositorySnapshot:
    """Apply an action using a store with random ids and the wall clock."""
    return _default_store.apply(snapshot, action)
