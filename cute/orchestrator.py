"""Run coordinator: selects tests, runs them in order and aggregates results."""

import logging
from dataclasses import dataclass, replace

from cute.context import RunContext
from cute.detection import isolation_unwanted
from cute.engine import ExecutionEngine
from cute.isolation import IsolationBackend, default_backend
from cute.models.config import RunConfig
from cute.models.registry import TestRegistry
from cute.models.result import RunResult, TestOutcome
from cute.models.selection import RunSelection
from cute.reporters.base import Reporter

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class TestOrchestrator:
    """Runs the selected tests of a registry one after another."""

    __test__ = False

    registry: TestRegistry
    config: RunConfig
    reporter: Reporter
    backend: IsolationBackend | None = None

    def run(self, selection: RunSelection) -> RunResult:
        """Run the effective tests of the selection and report the summary.

        Tests run strictly in registration order. A failing, aborted or
        crashed test never stops the run.

        Args:
            selection: Tests marked by the name resolver

        Returns:
            Outcomes of every registered test and the aggregate counters

        """
        tests = selection.effective(skip=self.config.skip)
        isolated = self.isolate(len(tests))
        engine = self._engine(isolated)

        run = RunContext(
            config=self.config,
            reporter=self.reporter,
            outcomes=[TestOutcome() for _ in self.registry],
        )

        log.info(
            "Running %d of %d test(s) %s",
            len(tests),
            len(self.registry),
            "in child processes" if isolated else "inline",
        )
        self.reporter.run_started(len(tests))

        for sequence, (index, test) in enumerate(tests, start=1):
            report = engine.run_test(index, sequence, isolated=isolated)
            run.outcomes[index].record(report)
            run.stats.add(report)
            log.info(
                "Test completed: test=%s status=%s duration=%.3fs",
                test.name,
                report.status,
                report.duration,
            )

        result = RunResult(
            registry=self.registry, outcomes=run.outcomes, stats=run.stats
        )
        self.reporter.run_finished(result)
        return result

    def run_worker(self, index: int, sequence: int) -> int:
        """Run one test as an isolated worker and return its exit status."""
        return self._engine(isolated=False).run_worker(index, sequence)

    def isolate(self, count: int) -> bool:
        """Decide once for the whole run whether tests run in child processes."""
        match self.config.exec_mode:
            case "always":
                return True
            case "never":
                return False

        if count <= 1:
            return False
        if (reason := isolation_unwanted()) is not None:
            log.info("Running tests inline because %s", reason)
            return False
        return True

    def _engine(self, isolated: bool) -> ExecutionEngine:
        engine = ExecutionEngine(
            registry=self.registry,
            reporter=self.reporter,
            verbosity=self.config.verbosity,
            timer=self.config.timer,
        )
        if not isolated:
            return engine

        backend = self.backend or default_backend(
            self.config, self.registry, worker=engine.run_worker
        )
        return replace(engine, backend=backend)
