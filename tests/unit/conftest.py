"""Shared fixtures for unit tests."""

from collections.abc import Iterator

import pytest

from cute.context import TestContext, activate
from cute.models.registry import TestCase
from cute.testing.recording import RecordingReporter


@pytest.fixture
def reporter() -> RecordingReporter:
    """Reporter recording every event."""
    return RecordingReporter()


@pytest.fixture
def context(reporter: RecordingReporter) -> Iterator[TestContext]:
    """Active context of a running inline test."""
    test_context = TestContext(
        test=TestCase(name="sample", entry=lambda: None),
        sequence=1,
        reporter=reporter,
    )
    with activate(test_context):
        yield test_context
