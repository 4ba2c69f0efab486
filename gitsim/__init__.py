"""
gitsim - An in-memory git simulator for learning git.

gitsim interprets a small subset of git and shell commands against a
simulated repository held entirely in memory. Nothing touches disk.

Quick Start:
    import gitsim

    session = gitsim.RepositorySession()
    session.run("git init")
    session.run('echo "hello" > notes.txt')
    session.run("git add .")
    result = session.run('git commit -m "first"')
    print(result.output)

    # Inspect state
    snapshot = session.snapshot
    print(snapshot.current_branch, len(snapshot.commits))

    # Derived views
    graph = gitsim.build_graph(snapshot)
    panel = gitsim.build_status_panel(snapshot)

    # Topic catalog
    for topic in gitsim.search_topics("undo"):
        print(topic.id, topic.name)

Domain Objects:
    RepositorySnapshot - Whole repository state at one point in time
    Commit - Immutable commit record (merge commits carry two parents)
    Branch - Named pointer to a commit
    FileEntry - Working-directory or staged file with a status

Services:
    RepositoryStore - Applies actions to snapshots
    CommandInterpreter - Turns a terminal line into output and an action
    RepositorySession - Runs lines and keeps the command history
"""

__version__ = "0.3.0"

# Domain objects
from .domain import (
    RepositorySnapshot,
    HistoryEntry,
    Commit,
    Branch,
    FileEntry,
    FileStatus,
)

# Services
from .services import (
    RepositoryStore,
    CommandInterpreter,
    CommandResult,
    RepositorySession,
)

# Views and topics
from .views import build_graph, build_status_panel, build_history_panel, prompt, prompt_from_config
from .topics import Topic, TOPICS, get_topic, search_topics

# Configuration
from .config import load_config, save_config

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "RepositorySnapshot",
    "HistoryEntry",
    "Commit",
    "Branch",
    "FileEntry",
    "FileStatus",
    # Services
    "RepositoryStore",
    "CommandInterpreter",
    "CommandResult",
    "RepositorySession",
    # Views
    "build_graph",
    "build_status_panel",
    "build_history_panel",
    "prompt",
    "prompt_from_config",
    # Topics
    "Topic",
    "TOPICS",
    "get_topic",
    "search_topics",
    # Configuration
    "load_config",
    "save_config",
]
