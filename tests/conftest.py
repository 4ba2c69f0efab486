"""Shared fixtures for the gitsim test suite."""

import itertools
from datetime import datetime

import pytest

from gitsim.domain import RepositorySnapshot
from gitsim.services import RepositoryStore, RepositorySession, CommandInterpreter

FIXED_TIME = datetime(2024, 1, 15, 10, 30, 0)


def counting_ids(prefix="c"):
    """Id factory producing c000001, c000002, ..."""
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter):06d}"


@pytest.fixture
def store():
    """Store with predictable commit ids and a frozen clock."""
    return RepositoryStore(id_factory=counting_ids(), clock=lambda: FIXED_TIME)


@pytest.fixture
def interpreter():
    return CommandInterpreter()


@pytest.fixture
def session(store, interpreter):
    return RepositorySession(store=store, interpreter=interpreter)


@pytest.fixture
def empty():
    return RepositorySnapshot.empty()


@pytest.fixture
def first_commit(session):
    """Session after init, touch a.txt, add everything and commit."""
    session.run_script([
        "git init",
        "touch a.txt",
        "git add .",
        'git commit -m "first"',
    ])
    return session
