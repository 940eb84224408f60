"""Tests for result models."""

import pytest

from cute.models.registry import TestRegistry
from cute.models.result import AggregateStats, RunResult, TestOutcome
from cute.testing.factories import TestReportFactory


def test_outcome_records_passed_report() -> None:
    """A passed report marks the outcome ran and succeeded."""
    outcome = TestOutcome()
    report = TestReportFactory.build(status="passed", duration=0.5)

    outcome.record(report)

    assert outcome.ran is True
    assert outcome.succeeded is True
    assert outcome.failed is False
    assert outcome.duration == 0.5


@pytest.mark.parametrize("status", ["failed", "aborted", "crashed"])
def test_outcome_records_unsuccessful_report(status: str) -> None:
    """Failed, aborted and crashed tests all count as failed."""
    outcome = TestOutcome()

    outcome.record(TestReportFactory.build(status=status))

    assert outcome.ran is True
    assert outcome.succeeded is False
    assert outcome.failed is True


def test_outcome_is_recorded_once() -> None:
    """Recording a second report for the same test is an error."""
    outcome = TestOutcome()
    outcome.record(TestReportFactory.build())

    with pytest.raises(RuntimeError):
        outcome.record(TestReportFactory.build())


def test_stats_count_failures() -> None:
    """Every report counts as run, unsuccessful ones also as failed."""
    stats = AggregateStats()

    for status in ("passed", "failed", "crashed", "passed"):
        stats.add(TestReportFactory.build(status=status))

    assert stats.units_run == 4
    assert stats.units_failed == 2


def test_run_result_exit_code_and_skipped() -> None:
    """Skipped tests are the registered ones that did not run."""
    registry = TestRegistry.from_pairs([(name, lambda: None) for name in "abc"])
    outcomes = [TestOutcome() for _ in registry]

    passing = RunResult(
        registry=registry,
        outcomes=outcomes,
        stats=AggregateStats(units_run=2, units_failed=0),
    )
    failing = RunResult(
        registry=registry,
        outcomes=outcomes,
        stats=AggregateStats(units_run=3, units_failed=1),
    )

    assert passing.units_skipped == 1
    assert passing.exit_code == 0
    assert failing.units_skipped == 0
    assert failing.exit_code == 1
