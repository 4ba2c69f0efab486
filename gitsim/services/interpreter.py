"""
Command interpreter for gitsim.

Turns one line of terminal input into a CommandResult: the text to
print, whether it is an error, and at most one store action to apply.
The interpreter is stateless. Every response is composed from the
snapshot it was given, which is the state *before* the returned action
is applied, so `git commit` reports the HEAD it builds on.

Failures are never raised; they come back as results with error=True.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional
import logging
import re

from ..domain import RepositorySnapshot, FileStatus, short_id
from ..domain import action as actions

logger = logging.getLogger(__name__)

NOT_A_REPOSITORY = "fatal: not a git repository (or any of the parent directories): .git"
NO_COMMITS_YET = "fatal: your current branch does not have any commits yet"
LOG_DATE_FORMAT = "%a %b %d %H:%M:%S %Y"

HELP_TEXT = """Available commands:
git init              - Initialize a new Git repository
git add <file>        - Add file to staging area
git add .             - Add all files to staging area
git commit -m "msg"   - Commit staged changes
git checkout <branch> - Switch branches
git checkout -b <br>  - Create and switch to new branch
git branch [name]     - List branches or create new branch
git merge <branch>    - Merge a branch
git status            - Show repository status
git log               - Show commit history
git reset --hard HEAD~1 - Reset to previous commit
touch <file>          - Create a new file
echo "text" > <file>  - Modify a file
clear                 - Clear terminal and reset
help                  - Show this help message"""

REDIRECT_OPERATORS = ('>', '>>')


class CommandFamily(Enum):
    """First word of a terminal line."""
    GIT = "git"
    TOUCH = "touch"
    ECHO = "echo"
    CLEAR = "clear"
    HELP = "help"
    UNKNOWN = None

    @classmethod
    def from_token(cls, token: str) -> 'CommandFamily':
        try:
            return cls(token)
        except ValueError:
            return cls.UNKNOWN


class GitSubcommand(Enum):
    """Second word of a `git` line."""
    INIT = "init"
    ADD = "add"
    COMMIT = "commit"
    CHECKOUT = "checkout"
    BRANCH = "branch"
    MERGE = "merge"
    STATUS = "status"
    LOG = "log"
    RESET = "reset"
    UNRECOGNIZED = None

    @classmethod
    def from_token(cls, token: str) -> 'GitSubcommand':
        try:
            return cls(token)
        except ValueError:
            return cls.UNRECOGNIZED


@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of interpreting one line.

    Attributes:
        output: Text to show in the terminal
        error: True if the command failed
        action: Store action to apply, if any
        record: False when the line must not be added to the command log
    """
    output: str = ""
    error: bool = False
    action: Optional[object] = None
    record: bool = True


def ok(output: str, action=None) -> CommandResult:
    return CommandResult(output=output, error=False, action=action)


def fail(output: str) -> CommandResult:
    return CommandResult(output=output, error=True)


Handler = Callable[[RepositorySnapshot, List[str]], CommandResult]


class CommandInterpreter:
    """
    Parses and validates terminal commands against a snapshot.

    Example:
        interpreter = CommandInterpreter()
        result = interpreter.execute(snapshot, 'git commit -m "first"')
        if result.action is not None:
            snapshot = store.apply(snapshot, result.action)
    """

    def __init__(self):
        self._families: Dict[CommandFamily, Handler] = {
            CommandFamily.GIT: self._git,
            CommandFamily.TOUCH: self._touch,
            CommandFamily.ECHO: self._echo,
            CommandFamily.CLEAR: self._clear,
            CommandFamily.HELP: self._help,
            CommandFamily.UNKNOWN: self._unknown,
        }
        self._git_handlers: Dict[GitSubcommand, Handler] = {
            GitSubcommand.INIT: self._git_init,
            GitSubcommand.ADD: self._git_add,
            GitSubcommand.COMMIT: self._git_commit,
            GitSubcommand.CHECKOUT: self._git_checkout,
            GitSubcommand.BRANCH: self._git_branch,
            GitSubcommand.MERGE: self._git_merge,
            GitSubcommand.STATUS: self._git_status,
            GitSubcommand.LOG: self._git_log,
            GitSubcommand.RESET: self._git_reset,
        }
        missing = (set(CommandFamily) - set(self._families)) | (
            set(GitSubcommand) - set(self._git_handlers) - {GitSubcommand.UNRECOGNIZED}
        )
        if missing:
            raise RuntimeError(f"No handler for: {sorted(m.name for m in missing)}")

    def execute(self, snapshot: RepositorySnapshot, raw_line: str) -> CommandResult:
        """
        Interpret one terminal line.

        Args:
            snapshot: Current repository state (read only)
            raw_line: Text as typed by the user

        Returns:
            CommandResult. Blank input gives an empty result with record=False.
        """
        parts = raw_line.split()
        if not parts:
            return CommandResult(record=False)

        family = CommandFamily.from_token(parts[0])
        logger.debug(f"Interpreting {family.name}: {parts!r}")
        return self._families[family](snapshot, parts)

    # Top-level commands

    def _git(self, snapshot, parts):
        token = parts[1] if len(parts) > 1 else None
        subcommand = GitSubcommand.from_token(token) if token else None

        if not snapshot.initialized and subcommand != GitSubcommand.INIT:
            return fail(NOT_A_REPOSITORY)
        if subcommand is None:
            return fail("usage: git <command> [<args>]")
        if subcommand == GitSubcommand.UNRECOGNIZED:
            return fail(f"git: '{token}' is not a git command. See 'git --help'.")
        return self._git_handlers[subcommand](snapshot, parts[2:])

    def _touch(self, snapshot, parts):
        if len(parts) < 2:
            return fail("usage: touch <filename>")
        filename = parts[1]
        return ok(f"Created file: {filename}", actions.CreateFile(filename))

    def _echo(self, snapshot, parts):
        # echo <text...> > <file>: only the modification is simulated, the text is dropped
        if len(parts) >= 4 and parts[-2] in REDIRECT_OPERATORS:
            filename = parts[-1]
            if snapshot.working_file(filename) is not None:
                return ok(f"Modified file: {filename}", actions.ModifyFile(filename))
            if snapshot.staged_file(filename) is not None:
                return ok(f"Modified file: {filename}")
            return ok(f"Created file: {filename}", actions.CreateFile(filename))
        return ok(" ".join(parts[1:]))

    def _clear(self, snapshot, parts):
        return CommandResult(action=actions.ResetAll(), record=False)

    def _help(self, snapshot, parts):
        return ok(HELP_TEXT)

    def _unknown(self, snapshot, parts):
        return fail(f"Command not found: {parts[0]}. Type 'help' for available commands.")

    # git subcommands

    def _git_init(self, snapshot, args):
        if snapshot.initialized:
            return ok("Reinitialized existing Git repository in .git/")
        return ok("Initialized empty Git repository in .git/", actions.Initialize())

    def _git_add(self, snapshot, args):
        if not args:
            return fail("Nothing specified, nothing added.\nMaybe you wanted to say 'git add .'?")

        target = args[0]
        if target == actions.STAGE_ALL:
            if not snapshot.working_dir:
                return ok("No files to add.")
            return ok(
                f"Added {len(snapshot.working_dir)} file(s) to staging area",
                actions.Stage((actions.STAGE_ALL,)),
            )

        if snapshot.working_file(target) is None:
            return fail(f"pathspec '{target}' did not match any files")
        return ok(f"Added '{target}' to staging area", actions.Stage((target,)))

    def _git_commit(self, snapshot, args):
        if not snapshot.staged:
            return fail("nothing to commit, working tree clean")
        if len(args) < 2 or args[0] != '-m':
            return fail('usage: git commit -m "commit message"')

        message = re.sub(r"['\"]", "", " ".join(args[1:])).strip()
        if not message:
            return fail("Aborting commit due to empty commit message.")

        return ok(
            f"[{snapshot.current_branch} {short_id(snapshot.head)}] {message}\n"
            f" {len(snapshot.staged)} file(s) changed",
            actions.Commit(message),
        )

    def _git_checkout(self, snapshot, args):
        if not args:
            return fail("usage: git checkout <branch> or git checkout -b <branch>")

        if args[0] == '-b':
            if len(args) < 2:
                return fail("usage: git checkout <branch> or git checkout -b <branch>")
            name = args[1]
            if snapshot.find_branch(name) is not None:
                return fail(f"fatal: A branch named '{name}' already exists.")
            return ok(f"Switched to a new branch '{name}'", actions.CreateAndCheckoutBranch(name))

        target = args[0]
        if snapshot.find_branch(target) is not None:
            return ok(f"Switched to branch '{target}'", actions.Checkout(target))
        if snapshot.resolve_commit_prefix(target) is not None:
            return ok(
                f"Note: switching to '{target}'.\n\nYou are in 'detached HEAD' state.",
                actions.CheckoutCommit(target),
            )
        return fail(f"error: pathspec '{target}' did not match any file(s) known to git")

    def _git_branch(self, snapshot, args):
        if args:
            name = args[0]
            if snapshot.find_branch(name) is not None:
                return fail(f"fatal: A branch named '{name}' already exists.")
            return ok(f"Created branch '{name}'", actions.CreateBranch(name))

        lines = []
        if snapshot.detached_head:
            lines.append(f"* (HEAD detached at {short_id(snapshot.head)})")
        for branch in snapshot.branches:
            current = branch.name == snapshot.current_branch and not snapshot.detached_head
            lines.append(f"{'* ' if current else '  '}{branch.name}")
        return ok("\n".join(lines))

    def _git_merge(self, snapshot, args):
        if not args:
            return fail("usage: git merge <branch>")

        name = args[0]
        source = snapshot.find_branch(name)
        if name == snapshot.current_branch:
            return ok(f"Already on '{name}'")
        if source is None or not source.commit:
            return fail(f"merge: {name} - not something we can merge")
        if not snapshot.head:
            return fail(NO_COMMITS_YET)
        return ok("Merge made by the 'recursive' strategy.", actions.Merge(name))

    def _git_status(self, snapshot, args):
        """
        Sections follow real git rather than the bare staged/untracked
        listing: modified working files go under "Changes not staged for
        commit:" and every section is preceded by a blank line.
        """
        if snapshot.detached_head:
            lines = [f"HEAD detached at {short_id(snapshot.head)}"]
        else:
            lines = [f"On branch {snapshot.current_branch}"]

        if snapshot.staged:
            lines.append("")
            lines.append("Changes to be committed:")
            lines.extend(f"  {f.status.value}: {f.name}" for f in snapshot.staged)

        modified = [f for f in snapshot.working_dir if f.status == FileStatus.MODIFIED]
        untracked = [f for f in snapshot.working_dir if f.status != FileStatus.MODIFIED]
        if modified:
            lines.append("")
            lines.append("Changes not staged for commit:")
            lines.extend(f"  modified: {f.name}" for f in modified)
        if untracked:
            lines.append("")
            lines.append("Untracked files:")
            lines.extend(f"  {f.name}" for f in untracked)

        if not snapshot.staged and not snapshot.working_dir:
            lines.append("")
            lines.append("nothing to commit, working tree clean")
        return ok("\n".join(lines))

    def _git_log(self, snapshot, args):
        if not snapshot.commits:
            return fail(NO_COMMITS_YET)

        commits = list(snapshot.commits)
        if snapshot.detached_head:
            reachable = reachable_from(snapshot, snapshot.head)
            commits = [c for c in commits if c.id in reachable]

        entries = [
            f"commit {c.id}\n"
            f"Author: {c.author}\n"
            f"Date: {c.timestamp.strftime(LOG_DATE_FORMAT)}\n"
            f"\n"
            f"    {c.message}\n"
            for c in reversed(commits)
        ]
        return ok("\n".join(entries))

    def _git_reset(self, snapshot, args):
        """
        Only ``--hard HEAD~1``. The reply names the pre-reset HEAD, which is
        empty on a branch created before the first commit; the store then
        leaves the state unchanged.
        """
        if args != ['--hard', actions.RESET_TARGET]:
            return fail("usage: git reset --hard HEAD~1")
        if not snapshot.commits:
            return fail(f"fatal: ambiguous argument '{actions.RESET_TARGET}': unknown revision")
        return ok(
            f"HEAD is now at {short_id(snapshot.head)}",
            actions.Reset(mode="hard", target=actions.RESET_TARGET),
        )


def reachable_from(snapshot: RepositorySnapshot, commit_id: str) -> set:
    """
    Ids reachable from ``commit_id`` by following ``parent`` links.

    Only the first parent of a merge commit is followed.
    """
    reachable = set()
    current = commit_id
    while current and current not in reachable:
        reachable.add(current)
        commit = snapshot.find_commit(current)
        current = commit.parent if commit else None
    return reachable
