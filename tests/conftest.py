from __future__ import annotations

from collections.abc import Callable
from typing import Union

import pytest

from gitprompt.errors import QueryError
from gitprompt.models import Query

Output = Union[str, list[str], Exception]


class FakeExecutor:
    """Answers queries from a command -> output table; unknown commands print nothing."""

    def __init__(self, outputs: dict[str, Output]) -> None:
        self.outputs = outputs
        self.calls: list[str] = []

    def _lookup(self, query: Query) -> Output | None:
        self.calls.append(query.command)
        value = self.outputs.get(query.command)
        if isinstance(value, Exception):
            raise value
        return value

    def first_line(self, query: Query) -> str:
        value = self._lookup(query)
        if value is None:
            raise QueryError(query.command, "no output")
        if isinstance(value, list):
            return value[0]
        return value

    def lines(self, query: Query) -> list[str]:
        value = self._lookup(query)
        if value is None:
            return []
        if isinstance(value, str):
            return value.splitlines()
        return value


@pytest.fixture
def make_executor() -> Callable[[dict[str, Output]], FakeExecutor]:
    return FakeExecutor
