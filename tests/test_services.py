from __future__ import annotations

import pytest

from gitprompt import git_ops
from gitprompt.errors import BranchUnresolvableError, NotARepositoryError, UnitFailedError
from gitprompt.models import BranchRef, StatusReport
from gitprompt.services import DIVERGENCE_SLOT, build_units, collect_status, resolve_branch


def _repo_outputs(**counts: str) -> dict[str, object]:
    outputs: dict[str, object] = {
        git_ops.IS_INSIDE_WORK_TREE.command: "true",
        git_ops.CURRENT_BRANCH.command: "main",
        git_ops.branch_config_query("main", "remote").command: "origin",
        git_ops.branch_config_query("main", "merge").command: "refs/heads/main",
        git_ops.rev_list_query("refs/remotes/origin/main").command: [">abc"],
    }
    for slot, query in git_ops.COUNT_QUERIES.items():
        outputs[query.command] = counts.get(slot, "0")
    return outputs


def test_collect_status(make_executor) -> None:
    executor = make_executor(
        _repo_outputs(staged="2", conflicts="1", modified="0", untracked="4", deleted="1")
    )
    assert collect_status(executor) == StatusReport(
        branch="main",
        ahead=1,
        behind=0,
        staged=2,
        conflicts=1,
        modified=0,
        untracked=4,
        deleted=1,
    )


def test_collect_status_is_stable(make_executor) -> None:
    outputs = _repo_outputs(staged="5", untracked="3")
    reports = {collect_status(make_executor(outputs), max_workers=n) for n in (1, 2, 6, None)}
    assert len(reports) == 1


def test_not_a_repository(make_executor) -> None:
    with pytest.raises(NotARepositoryError):
        collect_status(make_executor({}))


def test_inside_git_dir_is_not_a_work_tree(make_executor) -> None:
    executor = make_executor({git_ops.IS_INSIDE_WORK_TREE.command: "false"})
    with pytest.raises(NotARepositoryError):
        resolve_branch(executor)


def test_branch_unresolvable(make_executor) -> None:
    executor = make_executor({git_ops.IS_INSIDE_WORK_TREE.command: "true"})
    with pytest.raises(BranchUnresolvableError):
        resolve_branch(executor)


def test_detached_branch_ref(make_executor) -> None:
    executor = make_executor(
        {git_ops.IS_INSIDE_WORK_TREE.command: "true", git_ops.CURRENT_BRANCH.command: "HEAD"}
    )
    assert resolve_branch(executor) == BranchRef(name=None)


def test_failing_count_unit_aborts(make_executor) -> None:
    outputs = _repo_outputs()
    del outputs[git_ops.COUNT_QUERIES["untracked"].command]
    with pytest.raises(UnitFailedError) as excinfo:
        collect_status(make_executor(outputs))
    assert excinfo.value.slot == "untracked"


def test_build_units_slots(make_executor) -> None:
    units = build_units(make_executor({}), BranchRef(name="main"))
    assert [unit.slot for unit in units] == [*git_ops.COUNT_QUERIES, DIVERGENCE_SLOT]
