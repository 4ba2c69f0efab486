"""
Repository session for gitsim.

A RepositorySession owns one snapshot and ties the interpreter to the
store: each line is interpreted against the current snapshot, its
action (if any) is applied exactly once, and the line is appended to
the command log. Sessions never share snapshots, so several of them
can live side by side.
"""

from typing import Optional
import logging

from ..domain import RepositorySnapshot
from ..domain import action as actions
from .interpreter import CommandInterpreter, CommandResult
from .store import RepositoryStore
from ..views import prompt as render_prompt

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "An error occurred while executing the command."


class RepositorySession:
    """
    One user's simulated repository.

    Example:
        session = RepositorySession()
        session.run("git init")
        session.run("git add .")
        result = session.run('git commit -m "first"')
        print(result.output)
        print(len(session.snapshot.commits))
    """

    def __init__(
        self,
        store: Optional[RepositoryStore] = None,
        interpreter: Optional[CommandInterpreter] = None,
        snapshot: Optional[RepositorySnapshot] = None,
    ):
        self.store = store or RepositoryStore()
        self.interpreter = interpreter or CommandInterpreter()
        self._snapshot = snapshot or RepositorySnapshot.empty()

    @property
    def snapshot(self) -> RepositorySnapshot:
        """Current repository state (immutable)."""
        return self._snapshot

    @property
    def prompt(self) -> str:
        return render_prompt(self._snapshot)

    def dispatch(self, action) -> RepositorySnapshot:
        """Apply a single action to the owned snapshot."""
        self._snapshot = self.store.apply(self._snapshot, action)
        return self._snapshot

    def run(self, line: str) -> CommandResult:
        """
        Execute one terminal line.

        Args:
            line: Raw command text

        Returns:
            The CommandResult; it has already been applied and logged
        """
        try:
            result = self.interpreter.execute(self._snapshot, line)
        except Exception as e:
            logger.exception(f"Interpreter failed on {line!r}: {e}")
            result = CommandResult(output=INTERNAL_ERROR, error=True)

        if result.action is not None:
            self.dispatch(result.action)
        if result.record:
            self.dispatch(actions.RecordHistory(line.strip(), result.output, result.error))

        logger.debug(f"{line.strip()!r} -> error={result.error} action={result.action!r}")
        return result

    def run_script(self, lines) -> list:
        """Run several lines in order and return their results."""
        return [self.run(line) for line in lines]

    def reset(self) -> RepositorySnapshot:
        """Discard everything and return to the uninitialized repository."""
        return self.dispatch(actions.ResetAll())
