"""Tests for the repository state store."""

from datetime import datetime

import pytest

from gitsim.domain import (
    RepositorySnapshot,
    FileEntry,
    FileStatus,
    BRANCH_COLORS,
    PLACEHOLDER_FILE,
)
from gitsim.domain import action as actions
from gitsim.services import RepositoryStore, apply, generate_commit_id


def run(store, snapshot, *steps):
    for step in steps:
        snapshot = store.apply(snapshot, step)
    return snapshot


@pytest.fixture
def initialized(store, empty):
    return store.apply(empty, actions.Initialize())


@pytest.fixture
def committed(store, initialized):
    """One commit on main containing README.md and a.txt."""
    return run(
        store, initialized,
        actions.CreateFile("a.txt"),
        actions.Stage((actions.STAGE_ALL,)),
        actions.Commit("first"),
    )


class TestApply:
    """Tests for dispatch itself."""

    def test_unknown_action_is_noop(self, store, initialized):
        assert store.apply(initialized, object()) is initialized

    def test_module_level_apply(self, empty):
        snapshot = apply(empty, actions.Initialize())
        assert snapshot.initialized

    def test_generated_ids(self):
        commit_id = generate_commit_id()
        assert len(commit_id) == 7
        int(commit_id, 16)

    def test_input_snapshot_is_not_changed(self, store, initialized):
        after = store.apply(initialized, actions.CreateFile("a.txt"))
        assert after is not initialized
        assert initialized.working_file("a.txt") is None


class TestInitialize:
    """Tests for Initialize."""

    def test_initialize(self, initialized):
        assert initialized.initialized
        assert initialized.current_branch == "main"
        assert [b.name for b in initialized.branches] == ["main"]
        assert initialized.branches[0].commit == ""
        assert initialized.branches[0].color == BRANCH_COLORS[0]
        assert initialized.working_dir == (FileEntry(PLACEHOLDER_FILE, FileStatus.UNTRACKED),)
        assert initialized.head == ""
        assert not initialized.detached_head

    def test_reset_all(self, store, committed):
        assert store.apply(committed, actions.ResetAll()) == RepositorySnapshot.empty()


class TestFiles:
    """Tests for CreateFile and ModifyFile."""

    def test_create_file(self, store, initialized):
        snapshot = store.apply(initialized, actions.CreateFile("a.txt"))
        assert snapshot.working_file("a.txt").status == FileStatus.UNTRACKED

    def test_create_existing_is_noop(self, store, initialized):
        assert store.apply(initialized, actions.CreateFile(PLACEHOLDER_FILE)) is initialized

    def test_create_staged_name_is_noop(self, store, initialized):
        staged = store.apply(initialized, actions.Stage((PLACEHOLDER_FILE,)))
        assert store.apply(staged, actions.CreateFile(PLACEHOLDER_FILE)) is staged

    def test_modify_file(self, store, initialized):
        snapshot = store.apply(initialized, actions.ModifyFile(PLACEHOLDER_FILE))
        assert snapshot.working_file(PLACEHOLDER_FILE).status == FileStatus.MODIFIED

    def test_modify_unknown_is_noop(self, store, initialized):
        assert store.apply(initialized, actions.ModifyFile("nope.txt")) is initialized


class TestStage:
    """Tests for Stage."""

    def test_stage_all(self, store, initialized):
        snapshot = run(store, initialized, actions.CreateFile("a.txt"), actions.Stage((".",)))
        assert [f.name for f in snapshot.staged] == [PLACEHOLDER_FILE, "a.txt"]
        assert snapshot.working_dir == ()

    def test_untracked_becomes_added(self, store, initialized):
        snapshot = store.apply(initialized, actions.Stage((PLACEHOLDER_FILE,)))
        assert snapshot.staged_file(PLACEHOLDER_FILE).status == FileStatus.ADDED

    def test_modified_stays_modified(self, store, initialized):
        snapshot = run(
            store, initialized,
            actions.ModifyFile(PLACEHOLDER_FILE),
            actions.Stage((PLACEHOLDER_FILE,)),
        )
        assert snapshot.staged_file(PLACEHOLDER_FILE).status == FileStatus.MODIFIED

    def test_stage_single_leaves_others(self, store, initialized):
        snapshot = run(store, initialized, actions.CreateFile("a.txt"), actions.Stage(("a.txt",)))
        assert [f.name for f in snapshot.staged] == ["a.txt"]
        assert [f.name for f in snapshot.working_dir] == [PLACEHOLDER_FILE]

    def test_unknown_names_are_skipped(self, store, initialized):
        assert store.apply(initialized, actions.Stage(("nope.txt",))) is initialized

    def test_duplicates_staged_once(self, store, initialized):
        snapshot = store.apply(initialized, actions.Stage((PLACEHOLDER_FILE, PLACEHOLDER_FILE)))
        assert len(snapshot.staged) == 1

    def test_stage_empty_working_dir_is_noop(self, store, committed):
        assert store.apply(committed, actions.Stage((".",))) is committed


class TestCommit:
    """Tests for Commit."""

    def test_first_commit(self, committed):
        assert len(committed.commits) == 1
        commit = committed.commits[0]
        assert commit.id == "c000001"
        assert commit.message == "first"
        assert commit.author == "User"
        assert commit.timestamp == datetime(2024, 1, 15, 10, 30, 0)
        assert commit.branch == "main"
        assert commit.parent is None
        assert not commit.is_merge
        assert committed.head == commit.id
        assert committed.find_branch("main").commit == commit.id
        assert committed.staged == ()
        assert committed.working_dir == ()

    def test_second_commit_has_parent(self, store, committed):
        snapshot = run(
            store, committed,
            actions.CreateFile("b.txt"),
            actions.Stage(("b.txt",)),
            actions.Commit("second"),
        )
        assert snapshot.commits[-1].parent == "c000001"
        assert snapshot.head == "c000002"

    def test_commit_moves_only_staged(self, store, initialized):
        snapshot = run(
            store, initialized,
            actions.CreateFile("a.txt"),
            actions.Stage(("a.txt",)),
            actions.Commit("only a"),
        )
        assert snapshot.staged == ()
        assert [f.name for f in snapshot.working_dir] == [PLACEHOLDER_FILE]

    def test_empty_staging_is_noop(self, store, committed):
        assert store.apply(committed, actions.Commit("nothing")) is committed

    def test_colliding_ids_are_regenerated(self, empty):
        ids = iter(["aaaaaaa", "aaaaaaa", "bbbbbbb"])
        store = RepositoryStore(id_factory=lambda: next(ids))
        snapshot = run(
            store, empty,
            actions.Initialize(),
            actions.Stage((".",)),
            actions.Commit("one"),
            actions.CreateFile("b.txt"),
            actions.Stage((".",)),
            actions.Commit("two"),
        )
        assert [c.id for c in snapshot.commits] == ["aaaaaaa", "bbbbbbb"]

    def test_commit_while_detached(self, store, committed):
        """Detached commits move HEAD but no branch pointer."""
        snapshot = run(
            store, committed,
            actions.CheckoutCommit("c000001"),
            actions.CreateFile("d.txt"),
            actions.Stage((".",)),
            actions.Commit("detached work"),
        )
        assert snapshot.head == "c000002"
        assert snapshot.commits[-1].branch == ""
        assert snapshot.find_branch("main").commit == "c000001"
        assert not snapshot.detached_head


class TestCheckout:
    """Tests for Checkout, CheckoutCommit and branch creation."""

    def test_create_branch_at_head(self, store, committed):
        snapshot = store.apply(committed, actions.CreateBranch("feature"))
        branch = snapshot.find_branch("feature")
        assert branch.commit == "c000001"
        assert branch.color == BRANCH_COLORS[1]
        assert snapshot.current_branch == "main"

    def test_create_branch_from_commit(self, store, committed):
        snapshot = store.apply(committed, actions.CreateBranch("old", from_commit="c000001"))
        assert snapshot.find_branch("old").commit == "c000001"

    def test_create_existing_branch_is_noop(self, store, committed):
        assert store.apply(committed, actions.CreateBranch("main")) is committed

    def test_create_branch_before_any_commit(self, store, initialized):
        snapshot = store.apply(initialized, actions.CreateBranch("early"))
        assert snapshot.find_branch("early").commit == ""

    def test_checkout_branch(self, store, committed):
        snapshot = run(store, committed, actions.CreateBranch("feature"), actions.Checkout("feature"))
        assert snapshot.current_branch == "feature"
        assert snapshot.head == "c000001"
        assert not snapshot.detached_head

    def test_checkout_unknown_branch_is_noop(self, store, committed):
        assert store.apply(committed, actions.Checkout("nope")) is committed

    def test_create_and_checkout(self, store, committed):
        snapshot = store.apply(committed, actions.CreateAndCheckoutBranch("feature"))
        assert snapshot.current_branch == "feature"
        assert snapshot.find_branch("feature").commit == "c000001"

    def test_create_and_checkout_existing_is_noop(self, store, committed):
        assert store.apply(committed, actions.CreateAndCheckoutBranch("main")) is committed

    def test_checkout_commit_detaches(self, store, committed):
        snapshot = store.apply(committed, actions.CheckoutCommit("c00"))
        assert snapshot.detached_head
        assert snapshot.current_branch == ""
        assert snapshot.head == "c000001"

    def test_checkout_branch_reattaches(self, store, committed):
        snapshot = run(store, committed, actions.CheckoutCommit("c000001"), actions.Checkout("main"))
        assert not snapshot.detached_head
        assert snapshot.current_branch == "main"

    def test_checkout_unknown_commit_is_noop(self, store, committed):
        assert store.apply(committed, actions.CheckoutCommit("zzz")) is committed


class TestMerge:
    """Tests for Merge."""

    @pytest.fixture
    def diverged(self, store, committed):
        """main at c000001, feature at c000002."""
        return run(
            store, committed,
            actions.CreateAndCheckoutBranch("feature"),
            actions.CreateFile("b.txt"),
            actions.Stage((".",)),
            actions.Commit("second"),
            actions.Checkout("main"),
        )

    def test_merge_creates_two_parent_commit(self, store, diverged):
        snapshot = store.apply(diverged, actions.Merge("feature"))
        merge = snapshot.commits[-1]
        assert len(snapshot.commits) == 3
        assert merge.is_merge
        assert merge.parents == ("c000001", "c000002")
        assert merge.parent == "c000001"
        assert merge.message == "Merge branch 'feature' into main"
        assert merge.branch == "main"
        assert snapshot.head == merge.id
        assert snapshot.find_branch("main").commit == merge.id
        assert snapshot.find_branch("feature").commit == "c000002"

    def test_self_merge_is_noop(self, store, diverged):
        assert store.apply(diverged, actions.Merge("main")) is diverged

    def test_unknown_branch_is_noop(self, store, diverged):
        assert store.apply(diverged, actions.Merge("nope")) is diverged

    def test_commitless_branch_is_noop(self, store, initialized):
        snapshot = store.apply(initialized, actions.CreateBranch("early"))
        assert store.apply(snapshot, actions.Merge("early")) is snapshot


class TestReset:
    """Tests for Reset."""

    @pytest.fixture
    def two_commits(self, store, committed):
        return run(
            store, committed,
            actions.CreateFile("b.txt"),
            actions.Stage((".",)),
            actions.Commit("second"),
            actions.CreateFile("c.txt"),
            actions.CreateFile("d.txt"),
            actions.Stage(("d.txt",)),
        )

    def test_hard_reset_moves_to_parent(self, store, two_commits):
        snapshot = store.apply(two_commits, actions.Reset("hard"))
        assert snapshot.head == "c000001"
        assert snapshot.find_branch("main").commit == "c000001"
        assert snapshot.staged == ()
        assert snapshot.working_dir == ()
        assert len(snapshot.commits) == 2

    def test_soft_reset_keeps_files(self, store, two_commits):
        snapshot = store.apply(two_commits, actions.Reset("soft"))
        assert snapshot.head == "c000001"
        assert snapshot.staged == two_commits.staged
        assert snapshot.working_dir == two_commits.working_dir

    def test_reset_on_root_is_noop(self, store, committed):
        assert store.apply(committed, actions.Reset("hard")) is committed

    def test_reset_without_commits_is_noop(self, store, initialized):
        assert store.apply(initialized, actions.Reset("hard")) is initialized

    def test_other_targets_are_noop(self, store, two_commits):
        assert store.apply(two_commits, actions.Reset("hard", target="HEAD~2")) is two_commits


class TestRecordHistory:
    """Tests for RecordHistory."""

    def test_appends_entry(self, store, initialized):
        snapshot = run(
            store, initialized,
            actions.RecordHistory("git init", "Initialized"),
            actions.RecordHistory("bogus", "Command not found", error=True),
        )
        assert [h.command for h in snapshot.command_history] == ["git init", "bogus"]
        assert snapshot.command_history[1].error is True
        assert snapshot.command_history[0].timestamp == datetime(2024, 1, 15, 10, 30, 0)
