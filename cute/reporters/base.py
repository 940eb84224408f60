"""Abstract base class for result reporters."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from cute.context import TestContext
from cute.models.result import ConditionEvent, RunResult, TestReport


class Reporter(ABC):
    """Consumer of engine events.

    Per-condition events and :meth:`test_executed` are emitted by the process
    that runs the test body, which is a child process when tests are
    isolated. :meth:`test_started`, :meth:`test_finished` and the run-level
    events are always emitted by the coordinating process. Reporters keep no
    per-test state of their own; whatever they need lives on the
    :class:`TestContext`.
    """

    def run_started(self, total: int) -> None:
        """Called once before the first test with the number of tests to run."""

    def test_started(self, context: TestContext) -> None:
        """Called before a test starts."""

    def case_started(self, context: TestContext) -> None:
        """Called when the running test enters a named case."""

    def condition_recorded(self, context: TestContext, event: ConditionEvent) -> None:
        """Called for every checked condition."""

    def diagnostic(self, context: TestContext, lines: Sequence[str]) -> None:
        """Called with extra text attached to a failed condition."""

    def dump(
        self,
        context: TestContext,
        title: str,
        rows: Sequence[str],
        truncated: int,
    ) -> None:
        """Called with a hex dump attached to a failed condition."""

    def test_executed(self, context: TestContext, duration: float) -> None:
        """Called by the executing process once the test body is done."""

    @abstractmethod
    def test_finished(self, context: TestContext, report: TestReport) -> None:
        """Called with the final classification of a test."""

    @abstractmethod
    def run_finished(self, result: RunResult) -> None:
        """Called once after the last test."""


@dataclass(frozen=True)
class CompositeReporter(Reporter):
    """Forwards every event to several reporters, in order."""

    reporters: Sequence[Reporter]

    def run_started(self, total: int) -> None:
        for reporter in self.reporters:
            reporter.run_started(total)

    def test_started(self, context: TestContext) -> None:
        for reporter in self.reporters:
            reporter.test_started(context)

    def case_started(self, context: TestContext) -> None:
        for reporter in self.reporters:
            reporter.case_started(context)

    def condition_recorded(self, context: TestContext, event: ConditionEvent) -> None:
        for reporter in self.reporters:
            reporter.condition_recorded(context, event)

    def diagnostic(self, context: TestContext, lines: Sequence[str]) -> None:
        for reporter in self.reporters:
            reporter.diagnostic(context, lines)

    def dump(
        self,
        context: TestContext,
        title: str,
        rows: Sequence[str],
        truncated: int,
    ) -> None:
        for reporter in self.reporters:
            reporter.dump(context, title, rows, truncated)

    def test_executed(self, context: TestContext, duration: float) -> None:
        for reporter in self.reporters:
            reporter.test_executed(context, duration)

    def test_finished(self, context: TestContext, report: TestReport) -> None:
        for reporter in self.reporters:
            reporter.test_finished(context, report)

    def run_finished(self, result: RunResult) -> None:
        for reporter in self.reporters:
            reporter.run_finished(result)
