"""Models for test execution results."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from cute.models.registry import TestCase, TestRegistry

type TestStatus = Literal["passed", "failed", "aborted", "crashed"]

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

# Exit statuses of an isolated worker process. Anything else is a crash.
WORKER_EXIT_PASSED = 0
WORKER_EXIT_FAILED = 1
WORKER_EXIT_ABORTED = 3


@dataclass(frozen=True, kw_only=True)
class ConditionEvent:
    """Outcome of a single checked condition."""

    passed: bool
    file: str | None
    line: int | None
    description: str
    case_name: str | None = None


@dataclass(frozen=True, kw_only=True)
class TestReport:
    """Classification of one finished test, as handed to reporters."""

    __test__ = False

    test: TestCase
    sequence: int
    status: TestStatus
    duration: float
    failure_count: int | None = None
    diagnostic: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == "passed"


@dataclass(kw_only=True)
class TestOutcome:
    """Per-test record, zero-initialised before the run starts."""

    __test__ = False

    ran: bool = False
    succeeded: bool = False
    failed: bool = False
    duration: float = 0.0

    def record(self, report: TestReport) -> None:
        """Store the result of the finished test."""
        if self.ran:
            raise RuntimeError(f"Outcome of '{report.test.name}' already recorded")
        self.ran = True
        self.succeeded = report.succeeded
        self.failed = not report.succeeded
        self.duration = report.duration


@dataclass(kw_only=True)
class AggregateStats:
    """Run-wide counters used for the summary and the exit code."""

    units_run: int = 0
    units_failed: int = 0

    def add(self, report: TestReport) -> None:
        self.units_run += 1
        if not report.succeeded:
            self.units_failed += 1


@dataclass(frozen=True, kw_only=True)
class RunResult:
    """Everything the summary reporters need once the run is over."""

    registry: TestRegistry
    outcomes: Sequence[TestOutcome]
    stats: AggregateStats

    @property
    def units_skipped(self) -> int:
        return len(self.registry) - self.stats.units_run

    @property
    def exit_code(self) -> int:
        return EXIT_SUCCESS if self.stats.units_failed == 0 else EXIT_FAILURE
