"""Per-run and per-test state."""

import time
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cute.errors import NoActiveTestError
from cute.models.config import RunConfig
from cute.models.registry import TestCase, TestHook
from cute.models.result import AggregateStats, TestOutcome

if TYPE_CHECKING:
    from cute.reporters.base import Reporter

CASE_NAME_MAXSIZE = 64


@dataclass(kw_only=True)
class TestContext:
    """State of the one test currently executing.

    Created fresh for every test invocation and discarded when it ends, so
    nothing leaks from one test into the next.
    """

    __test__ = False

    test: TestCase
    sequence: int
    reporter: "Reporter" = field(repr=False)
    verbosity: int = 2
    worker: bool = False
    teardown: TestHook | None = field(default=None, repr=False)
    clock: Callable[[], float] = field(default=time.perf_counter, repr=False)
    started: float = 0.0

    failure_count: int = 0
    already_logged: bool = False
    last_failed: bool = False
    case_name: str | None = None
    case_logged: bool = False
    aborted: bool = False


@dataclass(kw_only=True)
class RunContext:
    """State shared by all tests of one run."""

    config: RunConfig
    reporter: "Reporter" = field(repr=False)
    outcomes: Sequence[TestOutcome]
    stats: AggregateStats = field(default_factory=AggregateStats)


_active: ContextVar[TestContext | None] = ContextVar("cute_active_test", default=None)


def current_test() -> TestContext:
    """Return the context of the running test.

    Raises:
        NoActiveTestError: If no test is executing.

    """
    if (context := _active.get()) is None:
        raise NoActiveTestError("No unit test is currently running")
    return context


def active_test() -> TestContext | None:
    """Return the context of the running test, if any."""
    return _active.get()


@contextmanager
def activate(context: TestContext) -> Iterator[TestContext]:
    """Publish the context as the target of the condition API."""
    token = _active.set(context)
    try:
        yield context
    finally:
        _active.reset(token)
