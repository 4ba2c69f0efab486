"""
Process exit statuses for the gitsim CLI.

A simulated git command that fails is not a process failure; it is a
CommandResult with error=True. Only the CLI surfaces (bad config,
`run --strict`) turn failures into a non-zero exit.
"""
import sys
from typing import Optional

SUCCESS = 0
GENERAL_ERROR = 1
USAGE_ERROR = 2          # click reports bad arguments with this status

SCRIPT_FAILED = 64       # `run --strict`: a replayed line reported an error
CONFIG_ERROR = 66        # unreadable or invalid configuration
DATA_ERROR = 70          # malformed input data
INTERRUPTED = 130        # SIGINT

# Statuses for exceptions that are not CommandErrors, keyed by class name
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': GENERAL_ERROR,
    'JSONDecodeError': DATA_ERROR,
    'ValueError': DATA_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: BaseException) -> int:
    """Exit status for ``exc``; CommandErrors carry their own."""
    if isinstance(exc, CommandError):
        return exc.exit_code
    return EXCEPTION_EXIT_CODES.get(type(exc).__name__, GENERAL_ERROR)


def exit_with_code(code: int, message: Optional[str] = None):
    """Print ``message`` to stderr, if given, and terminate with ``code``."""
    if message:
        print(message, file=sys.stderr)
    sys.exit(code)


class CommandError(Exception):
    """Base class for CLI failures that map to a specific exit status."""

    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(CommandError):
    """The configuration cannot be used as requested."""

    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)


class ScriptFailedError(CommandError):
    """Raised by `gitsim run --strict` when replayed commands reported errors."""

    def __init__(self, message: str, failed: int = 0, total: int = 0):
        super().__init__(message, SCRIPT_FAILED)
        self.failed = failed
        self.total = total
