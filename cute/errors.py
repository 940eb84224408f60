"""Exceptions raised by the test engine."""


class CuteError(Exception):
    """Base class for engine errors."""


class UsageError(CuteError):
    """Raised for invalid command line usage or run configuration."""


class UnknownTestError(UsageError):
    """Raised when a selection pattern matches no registered test."""

    def __init__(self, pattern: str) -> None:
        super().__init__(f"Unrecognized unit test '{pattern}'")
        self.pattern = pattern


class DuplicateTestError(CuteError):
    """Raised when two registered tests share a name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate unit test name '{name}'")
        self.name = name


class ReporterNotFoundError(CuteError):
    """Raised when a reporter is not found."""


class NoActiveTestError(CuteError):
    """Raised when the condition API is used outside of a running test."""
