"""Tests for the read-only view models."""

import pytest

from gitsim.domain import RepositorySnapshot, BRANCH_COLORS
from gitsim.views import (
    prompt,
    prompt_from_config,
    build_graph,
    build_status_panel,
    build_history_panel,
    preview,
)


@pytest.fixture
def merged(first_commit):
    """main: c000001 -> merge c000003; feature: c000002."""
    first_commit.run_script([
        "git checkout -b feature",
        "touch b.txt",
        "git add .",
        'git commit -m "second"',
        "git checkout main",
        "git merge feature",
    ])
    return first_commit.snapshot


class TestPrompt:

    def test_uninitialized(self):
        assert prompt(RepositorySnapshot.empty()) == "user@computer:~$ "

    def test_on_branch(self, first_commit):
        assert prompt(first_commit.snapshot) == "user@repo:(main)$ "

    def test_detached(self, first_commit):
        first_commit.run("git checkout c000001")
        assert prompt(first_commit.snapshot) == "user@repo:((c000001))$ "

    def test_custom_names(self, first_commit):
        text = prompt(first_commit.snapshot, user="ada", repo_host="lab")
        assert text == "ada@lab:(main)$ "

    def test_from_config(self, first_commit):
        config = {'prompt': {'user': 'ada', 'repo_host': 'lab', 'symbol': '#'}}
        assert prompt_from_config(first_commit.snapshot, config) == "ada@lab:(main)$ "

    def test_from_config_without_section(self):
        assert prompt_from_config(RepositorySnapshot.empty(), {}) == "user@computer:~$ "


class TestGraph:

    def test_empty(self, session):
        session.run("git init")
        graph = build_graph(session.snapshot)
        assert graph.empty
        assert graph.lanes == (("main", BRANCH_COLORS[0]),)

    def test_lanes_and_columns(self, merged):
        graph = build_graph(merged)
        assert [name for name, _ in graph.lanes] == ["main", "feature"]
        first, second, merge = graph.nodes
        assert (first.lane, first.column) == (0, 0)
        assert (second.lane, second.column) == (1, 1)
        assert (merge.lane, merge.column) == (0, 2)
        assert second.color == BRANCH_COLORS[1]

    def test_head_and_labels(self, merged):
        graph = build_graph(merged)
        merge = graph.node("c000003")
        assert merge.is_head
        assert merge.is_merge
        assert merge.labels == ("main",)
        assert graph.node("c000002").labels == ("feature",)
        assert graph.node("c000001").labels == ()

    def test_edges(self, merged):
        graph = build_graph(merged)
        pairs = {(e.parent, e.child, e.merge) for e in graph.edges}
        assert pairs == {
            ("c000001", "c000002", False),
            ("c000001", "c000003", False),
            ("c000002", "c000003", True),
        }

    def test_detached_commit_goes_to_lane_zero(self, first_commit):
        first_commit.run_script([
            "git branch side",
            "git checkout c000001",
            "touch d.txt",
            "git add .",
            'git commit -m "loose"',
        ])
        graph = build_graph(first_commit.snapshot)
        assert graph.node("c000002").lane == 0

    def test_to_dict(self, merged):
        data = build_graph(merged).to_dict()
        assert len(data['nodes']) == 3
        assert data['lanes'][1] == {'branch': 'feature', 'color': BRANCH_COLORS[1]}
        assert data['detached_head'] is False


class TestStatusPanel:

    def test_uninitialized(self):
        panel = build_status_panel(RepositorySnapshot.empty())
        assert not panel.initialized
        assert panel.branches == ()

    def test_fresh_repository_is_not_clean(self, session):
        session.run("git init")
        session.run("git add .")
        panel = build_status_panel(session.snapshot)
        assert not panel.clean
        assert [f.name for f in panel.staged] == ["README.md"]

    def test_clean_after_commit(self, first_commit):
        panel = build_status_panel(first_commit.snapshot)
        assert panel.clean
        assert panel.commit_count == 1
        assert panel.head == "c000001"

    def test_branch_rows(self, merged):
        panel = build_status_panel(merged)
        rows = {row.name: row for row in panel.branches}
        assert rows["main"].current
        assert not rows["feature"].current
        assert rows["feature"].commit == "c000002"
        assert rows["feature"].color == BRANCH_COLORS[1]

    def test_recent_commits_newest_first(self, merged):
        panel = build_status_panel(merged, recent=2)
        assert [c.id for c in panel.recent_commits] == ["c000003", "c000002"]

    def test_detached(self, first_commit):
        first_commit.run("git checkout c000001")
        panel = build_status_panel(first_commit.snapshot)
        assert panel.detached_head
        assert not any(row.current for row in panel.branches)

    def test_to_dict(self, first_commit):
        data = build_status_panel(first_commit.snapshot).to_dict()
        assert data['clean'] is True
        assert data['recent_commits'][0]['message'] == "first"


class TestHistoryPanel:

    def test_preview(self):
        assert preview("short", 10) == "short"
        assert preview("abcdefghij", 4) == "abcd..."
        assert preview("anything", 0) == "anything"

    def test_last_entries(self, session):
        for i in range(5):
            session.run(f"echo line {i}")
        panel = build_history_panel(session.snapshot, limit=3)
        assert [row.output for row in panel.rows] == ["line 2", "line 3", "line 4"]
        assert panel.total == 5
        assert panel.truncated

    def test_outputs_are_shortened(self, session):
        session.run("help")
        panel = build_history_panel(session.snapshot, preview_chars=20)
        assert panel.rows[0].output.endswith("...")
        assert len(panel.rows[0].output) == 23

    def test_errors_are_flagged(self, session):
        session.run("nonsense")
        panel = build_history_panel(session.snapshot)
        assert panel.rows[0].error
        assert not panel.truncated
