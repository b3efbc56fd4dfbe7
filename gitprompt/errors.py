"""Exceptions raised while building a status report."""


class GitPromptError(Exception):
    """Base class for errors that abort the report."""


class QueryError(GitPromptError):
    """A query produced no usable output."""

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        self.reason = reason
        super().__init__(f"{command}: {reason}")


class NotARepositoryError(GitPromptError):
    """Current directory is not inside a git work tree."""


class BranchUnresolvableError(GitPromptError):
    """The current branch could not be determined."""


class UnitFailedError(GitPromptError):
    """A fan-out work unit failed."""

    def __init__(self, slot: str, cause: BaseException) -> None:
        self.slot = slot
        self.cause = cause
        super().__init__(f"{slot} failed: {cause}")


class SettingsError(GitPromptError):
    """Settings file or environment override is invalid."""
