"""Test Anything Protocol reporter.

See https://testanything.org/ for the format.
"""

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TextIO

from cute.context import TestContext
from cute.models.result import RunResult
from cute.reporters.tap.config import TapConfig
from cute.reporters.text import TextReporter


@dataclass(frozen=True, kw_only=True)
class TapReporter(TextReporter):
    """TAP stream: a ``1..N`` plan, then one ``ok``/``not ok`` line per test.

    Verdict lines are written whatever the verbosity, detail lines are
    prefixed with ``#`` so TAP harnesses treat them as comments.
    """

    config: TapConfig

    @classmethod
    @contextmanager
    def from_config(
        cls, config: TapConfig, stream: TextIO | None = None
    ) -> Iterator["TapReporter"]:
        """Create a TAP reporter writing to stdout."""
        yield cls(config=config, stream=stream)
        (stream or sys.stdout).flush()

    def _indent(self, level: int) -> str:
        width = level * 2
        if width == 0:
            return ""
        return "#" + " " * (width - 1)

    def run_started(self, total: int) -> None:
        self._write(f"1..{total}\n")

    def _write_verdict_failed(self, context: TestContext) -> None:
        self._write(f"not ok {context.sequence} - {context.test.name}\n")

    def test_executed(self, context: TestContext, duration: float) -> None:
        if not self._passed(context):
            self._close_failed(context)
            return
        self._write(f"ok {context.sequence} - {context.test.name}\n")
        if self.config.timer:
            self._write(f"# Duration: {self._format_duration(duration)}\n")
        context.already_logged = True

    def run_finished(self, result: RunResult) -> None:
        """TAP harnesses compute their own summary."""
