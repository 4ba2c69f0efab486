"""
State-transition actions for gitsim.

The closed vocabulary of changes the repository store understands.
Each action is a small immutable record; the store maps its type to a
transition function.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

STAGE_ALL = "."
RESET_TARGET = "HEAD~1"


@dataclass(frozen=True)
class Initialize:
    pass


@dataclass(frozen=True)
class CreateFile:
    name: str


@dataclass(frozen=True)
class ModifyFile:
    name: str


@dataclass(frozen=True)
class Stage:
    """Stage files by name. STAGE_ALL expands to the whole working directory."""
    names: Tuple[str, ...]


@dataclass(frozen=True)
class Commit:
    message: str


@dataclass(frozen=True)
class Checkout:
    branch: str


@dataclass(frozen=True)
class CheckoutCommit:
    commit_prefix: str


@dataclass(frozen=True)
class CreateBranch:
    name: str
    from_commit: Optional[str] = None


@dataclass(frozen=True)
class CreateAndCheckoutBranch:
    """CreateBranch followed by Checkout, applied as one transition."""
    name: str


@dataclass(frozen=True)
class Merge:
    branch: str


@dataclass(frozen=True)
class Reset:
    mode: str  # soft, mixed, hard
    target: str = RESET_TARGET


@dataclass(frozen=True)
class RecordHistory:
    command: str
    output: str
    error: bool = False


@dataclass(frozen=True)
class ResetAll:
    pass


Action = Union[
    Initialize,
    CreateFile,
    ModifyFile,
    Stage,
    Commit,
    Checkout,
    CheckoutCommit,
    CreateBranch,
    CreateAndCheckoutBranch,
    Merge,
    Reset,
    RecordHistory,
    ResetAll,
]
