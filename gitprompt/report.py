"""Status report aggregation and formatting."""

import re

from gitprompt.models import DivergenceResult, StatusReport

_LEADING_COUNT = re.compile(r"\s*(\d+)")


def parse_count(text: str) -> int:
    """Parse the leading decimal count of a line; anything else counts as 0."""
    match = _LEADING_COUNT.match(text)
    return int(match.group(1)) if match else 0


def build_report(counts: dict[str, str], divergence: DivergenceResult) -> StatusReport:
    """Combine the raw count lines and the divergence result."""
    return StatusReport(
        branch=divergence.label,
        ahead=divergence.ahead,
        behind=divergence.behind,
        staged=parse_count(counts["staged"]),
        conflicts=parse_count(counts["conflicts"]),
        modified=parse_count(counts["modified"]),
        untracked=parse_count(counts["untracked"]),
        deleted=parse_count(counts["deleted"]),
    )


def format_report(report: StatusReport) -> str:
    """Render the report as a single space-separated line."""
    fields = [
        report.branch,
        report.ahead,
        report.behind,
        report.staged,
        report.conflicts,
        report.modified,
        report.untracked,
        report.deleted,
    ]
    return " ".join(str(field) for field in fields)
