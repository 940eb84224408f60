"""Execution engine running one test under the run's isolation policy."""

import logging
import time
import traceback
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Literal

from cute.abort import TestAborted
from cute.context import TestContext, activate
from cute.isolation import ExitStatus, IsolationBackend
from cute.models.config import TimerKind
from cute.models.registry import TestRegistry
from cute.models.result import (
    WORKER_EXIT_ABORTED,
    WORKER_EXIT_FAILED,
    WORKER_EXIT_PASSED,
    TestReport,
    TestStatus,
)
from cute.recorder import Location, message, record_condition
from cute.reporters.base import Reporter

log = logging.getLogger(__name__)

type Invocation = Literal["completed", "aborted"]

CLOCKS: Mapping[TimerKind, Callable[[], float]] = {
    "real": time.perf_counter,
    "cpu": time.process_time,
}

EXIT_STATUS_TO_RESULT: Mapping[int, TestStatus] = {
    WORKER_EXIT_PASSED: "passed",
    WORKER_EXIT_FAILED: "failed",
    WORKER_EXIT_ABORTED: "aborted",
}


def classify_exit(status: ExitStatus) -> tuple[TestStatus, str | None]:
    """Classify an isolated test from its exit status alone.

    A worker only ever exits with 0, 1 or 3; any other code or a signal
    means the test crashed.
    """
    if status.signal is None and status.exit_code in EXIT_STATUS_TO_RESULT:
        return EXIT_STATUS_TO_RESULT[status.exit_code], None
    return "crashed", status.describe()


def classify_inline(context: TestContext) -> TestStatus:
    """Classify a test that ran in the current process."""
    if context.aborted:
        return "aborted"
    if context.failure_count == 0:
        return "passed"
    return "failed"


@dataclass(frozen=True, kw_only=True)
class ExecutionEngine:
    """Runs single tests, measures them and classifies their outcome."""

    registry: TestRegistry
    reporter: Reporter
    verbosity: int = 2
    timer: TimerKind | None = None
    backend: IsolationBackend | None = None

    @property
    def clock(self) -> Callable[[], float]:
        return CLOCKS[self.timer or "real"]

    def new_context(self, index: int, sequence: int, *, worker: bool) -> TestContext:
        """Create the fresh per-test state for one invocation."""
        return TestContext(
            test=self.registry[index],
            sequence=sequence,
            reporter=self.reporter,
            verbosity=self.verbosity,
            worker=worker,
            teardown=self.registry.teardown,
            clock=self.clock,
        )

    def run_test(self, index: int, sequence: int, *, isolated: bool) -> TestReport:
        """Run the test at ``index`` and return its classification.

        Args:
            index: Position of the test in the registry
            sequence: 1-based position of the test in this run
            isolated: Run the test body in a child process

        Returns:
            The report of the finished test

        """
        context = self.new_context(index, sequence, worker=False)
        self.reporter.test_started(context)

        diagnostic: str | None = None
        failure_count: int | None = None
        start = self.clock()
        if isolated and self.backend is not None:
            log.debug("Running test %s in a child process", context.test.name)
            status, diagnostic, cpu_time = self._run_isolated(index, sequence)
            duration = self.clock() - start
            if self.timer == "cpu" and cpu_time is not None:
                duration = cpu_time
        else:
            log.debug("Running test %s inline", context.test.name)
            self.execute(context)
            status = classify_inline(context)
            failure_count = context.failure_count
            duration = self.clock() - start

        report = TestReport(
            test=context.test,
            sequence=sequence,
            status=status,
            duration=duration,
            failure_count=failure_count,
            diagnostic=diagnostic,
        )
        self.reporter.test_finished(context, report)
        return report

    def run_worker(self, index: int, sequence: int) -> int:
        """Run a test inside an isolated worker and return the exit status.

        An abort normally ends the worker process directly with the aborted
        status before this returns.
        """
        context = self.new_context(index, sequence, worker=True)
        self.execute(context)
        match classify_inline(context):
            case "aborted":
                return WORKER_EXIT_ABORTED
            case "passed":
                return WORKER_EXIT_PASSED
            case _:
                return WORKER_EXIT_FAILED

    def execute(self, context: TestContext) -> Invocation:
        """Run setup, body and teardown of a test in the current process."""
        context.started = self.clock()
        with activate(context):
            invocation = self._invoke(context)
        self.reporter.test_executed(context, self.clock() - context.started)
        return invocation

    def _invoke(self, context: TestContext) -> Invocation:
        name = context.test.name
        invocation: Invocation = "completed"

        try:
            if self.registry.setup is not None:
                self.registry.setup(name)
            context.test.entry()
        except TestAborted:
            invocation = "aborted"
        except (Exception, SystemExit) as exc:
            self._record_exception(exc)

        teardown, context.teardown = context.teardown, None
        if teardown is not None:
            try:
                teardown(name)
            except TestAborted:
                invocation = "aborted"
            except (Exception, SystemExit) as exc:
                self._record_exception(exc)

        return invocation

    def _record_exception(self, exc: Exception | SystemExit) -> None:
        """Turn an exception escaping the test into one failed condition.

        A SystemExit raised by the test is handled the same way.
        """
        frames = traceback.extract_tb(exc.__traceback__)
        location = (
            Location(frames[-1].filename, frames[-1].lineno)
            if frames
            else Location(None, None)
        )
        record_condition(False, location, f"Unhandled {type(exc).__name__}")
        message(f"Caught exception: {exc}" if str(exc) else "Caught exception")

    def _run_isolated(
        self, index: int, sequence: int
    ) -> tuple[TestStatus, str | None, float | None]:
        assert self.backend is not None
        try:
            exit_status = self.backend.run_isolated(index, sequence)
        except OSError as exc:
            log.error("Cannot create unit test subprocess: %s", exc)
            return "crashed", f"Cannot create unit test subprocess. {exc}", None

        status, diagnostic = classify_exit(exit_status)
        return status, diagnostic, exit_status.cpu_time
