"""Status collection: prerequisites, fan-out and aggregation."""

import logging
from functools import partial

from gitprompt import git_ops
from gitprompt.divergence import Executor, compute_divergence
from gitprompt.errors import BranchUnresolvableError, NotARepositoryError, QueryError
from gitprompt.fanout import run_all
from gitprompt.models import BranchRef, StatusReport, WorkUnit
from gitprompt.report import build_report

logger = logging.getLogger(__name__)

DIVERGENCE_SLOT = "divergence"


def resolve_branch(executor: Executor) -> BranchRef:
    """Check for a work tree and resolve the current branch."""
    try:
        inside = executor.first_line(git_ops.IS_INSIDE_WORK_TREE)
    except QueryError as exc:
        raise NotARepositoryError("not inside a git work tree") from exc
    if inside != "true":
        raise NotARepositoryError("not inside a git work tree")

    try:
        name = executor.first_line(git_ops.CURRENT_BRANCH)
    except QueryError as exc:
        raise BranchUnresolvableError(f"cannot resolve current branch: {exc.reason}") from exc
    if not name:
        raise BranchUnresolvableError("cannot resolve current branch: empty name")
    if name == git_ops.DETACHED_HEAD:
        return BranchRef(name=None)
    return BranchRef(name=name)


def build_units(executor: Executor, branch: BranchRef) -> list[WorkUnit]:
    """Create the counting units plus the divergence unit."""
    units: list[WorkUnit] = [
        WorkUnit(slot=slot, run=partial(executor.first_line, query))
        for slot, query in git_ops.COUNT_QUERIES.items()
    ]
    units.append(WorkUnit(slot=DIVERGENCE_SLOT, run=partial(compute_divergence, executor, branch)))
    return units


def collect_status(executor: Executor, max_workers: int | None = None) -> StatusReport:
    """Collect the full working tree status or raise."""
    branch = resolve_branch(executor)
    logger.debug("branch: %s", branch.name or "(detached)")
    results = run_all(build_units(executor, branch), max_workers=max_workers)
    divergence = results.pop(DIVERGENCE_SLOT)
    return build_report(results, divergence)
