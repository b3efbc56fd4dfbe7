"""Data models for gitprompt."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Query:
    """A read-only shell command producing at most one line of output."""

    command: str


@dataclass(frozen=True)
class WorkUnit(Generic[T]):
    """One independently schedulable piece of work and the slot it fills."""

    slot: str
    run: Callable[[], T]


@dataclass(frozen=True)
class BranchRef:
    """The current branch, or the detached-head sentinel when name is None."""

    name: str | None


@dataclass(frozen=True)
class UpstreamConfig:
    """Raw branch.<name>.remote / branch.<name>.merge values."""

    remote: str
    merge: str


@dataclass(frozen=True)
class DivergenceResult:
    """Commit counts ahead/behind the upstream, with the branch label."""

    label: str
    ahead: int
    behind: int


@dataclass(frozen=True)
class StatusReport:
    """Aggregated working tree state, one per invocation."""

    branch: str
    ahead: int
    behind: int
    staged: int
    conflicts: int
    modified: int
    untracked: int
    deleted: int
