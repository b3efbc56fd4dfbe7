"""Ahead/behind counting against the branch's configured upstream."""

import logging
from typing import Protocol

from gitprompt import git_ops
from gitprompt.errors import QueryError
from gitprompt.models import BranchRef, DivergenceResult, Query, UpstreamConfig

logger = logging.getLogger(__name__)

DETACHED_MARKER = ":"
LOCAL_REMOTE = "."
HEADS_NAMESPACE = "refs/heads/"
AHEAD_MARKER = ">"


class Executor(Protocol):
    def first_line(self, query: Query) -> str: ...

    def lines(self, query: Query) -> list[str]: ...


def parse_merge_ref(merge: str) -> str | None:
    """Extract the branch name from a branch.<name>.merge value.

    Accepts `refs/heads/<branch>` and a bare `<branch>`. Returns None for
    values that cannot name a branch.
    """
    name = merge.removeprefix(HEADS_NAMESPACE)
    if not name or name != name.strip() or any(ch.isspace() for ch in name):
        return None
    if name.startswith("refs/"):
        return None
    return name


def comparison_ref(upstream: UpstreamConfig) -> str | None:
    """Resolve the ref HEAD is compared against, or None if unusable."""
    if upstream.remote == LOCAL_REMOTE:
        return upstream.merge or None
    branch = parse_merge_ref(upstream.merge)
    if branch is None:
        logger.debug("unrecognised merge ref %r", upstream.merge)
        return None
    return f"refs/remotes/{upstream.remote}/{branch}"


def read_upstream(executor: Executor, branch: str) -> UpstreamConfig | None:
    """Read the upstream config for a branch; None when it is not configured."""
    try:
        remote = executor.first_line(git_ops.branch_config_query(branch, "remote"))
        merge = executor.first_line(git_ops.branch_config_query(branch, "merge"))
    except QueryError:
        return None
    return UpstreamConfig(remote=remote, merge=merge)


def count_left_right(lines: list[str]) -> tuple[int, int]:
    """Split `rev-list --left-right` output into (ahead, behind)."""
    ahead = 0
    behind = 0
    for line in lines:
        if line.startswith(AHEAD_MARKER):
            ahead += 1
        else:
            behind += 1
    return ahead, behind


def compute_divergence(executor: Executor, branch: BranchRef) -> DivergenceResult:
    """Compute the label and ahead/behind counts for the current branch."""
    if branch.name is None:
        short_head = executor.first_line(git_ops.SHORT_HEAD)
        return DivergenceResult(label=f"{DETACHED_MARKER}{short_head}", ahead=0, behind=0)

    upstream = read_upstream(executor, branch.name)
    if upstream is None:
        logger.debug("no upstream configured for %s", branch.name)
        return DivergenceResult(label=branch.name, ahead=0, behind=0)

    ref = comparison_ref(upstream)
    if ref is None:
        return DivergenceResult(label=branch.name, ahead=0, behind=0)

    try:
        lines = executor.lines(git_ops.rev_list_query(ref))
    except QueryError as exc:
        logger.debug("cannot list divergence against %s: %s", ref, exc)
        return DivergenceResult(label=branch.name, ahead=0, behind=0)

    ahead, behind = count_left_right(lines)
    return DivergenceResult(label=branch.name, ahead=ahead, behind=behind)
