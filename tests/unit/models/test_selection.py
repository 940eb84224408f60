"""Tests for run selections."""

import pytest

from cute.models.registry import TestRegistry
from cute.models.selection import RunSelection


@pytest.fixture
def registry() -> TestRegistry:
    """Registry with four tests."""
    return TestRegistry.from_pairs(
        [(name, lambda: None) for name in ("a", "b", "c", "d")]
    )


def test_mark_is_idempotent(registry: TestRegistry) -> None:
    """Marking the same test twice keeps it once."""
    selection = RunSelection(registry=registry)

    assert selection.mark(2) is True
    assert selection.mark(2) is False
    assert len(selection) == 1
    assert 2 in selection


def test_empty_selection_runs_everything(registry: TestRegistry) -> None:
    """Without marks every registered test runs."""
    selection = RunSelection(registry=registry)

    effective = selection.effective(skip=False)

    assert [index for index, _ in effective] == [0, 1, 2, 3]


def test_marked_tests_run_in_registration_order(registry: TestRegistry) -> None:
    """Marked tests run in registration order, not marking order."""
    selection = RunSelection(registry=registry)
    selection.mark(3)
    selection.mark(0)

    effective = selection.effective(skip=False)

    assert [test.name for _, test in effective] == ["a", "d"]
    assert list(selection) == [0, 3]


def test_skip_runs_the_complement(registry: TestRegistry) -> None:
    """Skip mode runs every test that is not marked."""
    selection = RunSelection(registry=registry)
    selection.mark(1)

    effective = selection.effective(skip=True)

    assert [test.name for _, test in effective] == ["a", "c", "d"]


def test_skip_without_marks_runs_everything(registry: TestRegistry) -> None:
    """Skipping nothing runs every test."""
    selection = RunSelection(registry=registry)

    assert len(selection.effective(skip=True)) == 4
