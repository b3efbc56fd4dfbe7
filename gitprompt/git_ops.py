"""Git subprocess queries."""

import logging
import shlex
import subprocess
import time
from pathlib import Path

from gitprompt.errors import QueryError
from gitprompt.models import Query

logger = logging.getLogger(__name__)

IS_INSIDE_WORK_TREE = Query("git rev-parse --is-inside-work-tree")
CURRENT_BRANCH = Query("git rev-parse --abbrev-ref HEAD")
SHORT_HEAD = Query("git rev-parse --short HEAD")

# Dispatch order of the counting units; also the report field order.
# Unmerged paths are counted only as conflicts: `diff --cached` lists them
# too, and `diff` reports them with both a U and an M row.
COUNT_QUERIES: dict[str, Query] = {
    "staged": Query("git diff --cached --name-only --diff-filter=u | wc -l"),
    "conflicts": Query("git --no-pager diff --name-only --diff-filter=U | wc -l"),
    "modified": Query(
        "git --no-pager diff --name-status"
        " | awk -F '\\t' '$1 == \"M\" { m[$2] = 1 } $1 == \"U\" { u[$2] = 1 }"
        " END { n = 0; for (p in m) if (!(p in u)) n++; print n }'"
    ),
    "untracked": Query("git ls-files --others --exclude-standard | wc -l"),
    "deleted": Query("git --no-pager diff --name-only --diff-filter=D | wc -l"),
}

# `git rev-parse --abbrev-ref HEAD` prints this when HEAD is detached.
DETACHED_HEAD = "HEAD"


def branch_config_query(branch: str, key: str) -> Query:
    """Build a lookup of branch.<branch>.<key>."""
    return Query(f"git config {shlex.quote(f'branch.{branch}.{key}')}")


def rev_list_query(ref: str) -> Query:
    """Build the side-marked symmetric difference listing between ref and HEAD."""
    return Query(f"git rev-list --left-right {shlex.quote(f'{ref}...HEAD')}")


class QueryExecutor:
    """Runs read-only queries and captures their output.

    Exit codes are never inspected: a query that prints something has
    succeeded, a query that prints nothing (or cannot be started) has not.
    """

    def __init__(self, cwd: Path | None = None, timeout: float | None = None) -> None:
        self.cwd = cwd
        self.timeout = timeout

    def _run(self, query: Query) -> str:
        started = time.monotonic()
        try:
            result = subprocess.run(
                query.command,
                shell=True,
                cwd=self.cwd,
                check=False,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise QueryError(query.command, f"timed out after {self.timeout}s") from exc
        except OSError as exc:
            raise QueryError(query.command, str(exc)) from exc
        logger.debug(
            "%s -> exit %d in %.1fms",
            query.command,
            result.returncode,
            (time.monotonic() - started) * 1000,
        )
        return result.stdout

    def first_line(self, query: Query) -> str:
        """Return the first output line without its line terminator."""
        out = self._run(query)
        if not out:
            raise QueryError(query.command, "no output")
        line, _, _ = out.partition("\n")
        return line.removesuffix("\r")

    def lines(self, query: Query) -> list[str]:
        """Return every output line; an empty listing is not an error."""
        return self._run(query).splitlines()
