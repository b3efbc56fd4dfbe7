from __future__ import annotations

import pytest

from gitprompt.models import DivergenceResult, StatusReport
from gitprompt.report import build_report, format_report, parse_count


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("3", 3),
        ("       12", 12),
        ("007", 7),
        ("4 files", 4),
        ("", 0),
        ("abc", 0),
        ("-2", 0),
    ],
)
def test_parse_count(text: str, expected: int) -> None:
    assert parse_count(text) == expected


def test_build_and_format_report() -> None:
    counts = {"staged": "2", "conflicts": "1", "modified": "0", "untracked": "  4", "deleted": "1"}
    report = build_report(counts, DivergenceResult(label="main", ahead=1, behind=0))
    assert report == StatusReport(
        branch="main",
        ahead=1,
        behind=0,
        staged=2,
        conflicts=1,
        modified=0,
        untracked=4,
        deleted=1,
    )
    assert format_report(report) == "main 1 0 2 1 0 4 1"


def test_format_detached_label() -> None:
    counts = dict.fromkeys(["staged", "conflicts", "modified", "untracked", "deleted"], "0")
    report = build_report(counts, DivergenceResult(label=":abc1234", ahead=0, behind=0))
    assert format_report(report) == ":abc1234 0 0 0 0 0 0 0"
