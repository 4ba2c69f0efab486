"""
Service layer for gitsim.

- RepositoryStore: pure transition function over repository snapshots
- CommandInterpreter: parses and validates terminal commands
- RepositorySession: owns one snapshot and runs commands against it

Sessions are the primary API for shells and commands to use.
"""

from .store import RepositoryStore, apply, generate_commit_id
from .interpreter import CommandInterpreter, CommandResult, CommandFamily, GitSubcommand
from .session import RepositorySession

__all__ = [
    'RepositoryStore',
    'apply',
    'generate_commit_id',
    'CommandInterpreter',
    'CommandResult',
    'CommandFamily',
    'GitSubcommand',
    'RepositorySession',
]
