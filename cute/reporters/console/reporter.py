"""Human-readable console reporter."""

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TextIO

from cute.context import TestContext
from cute.models.result import RunResult
from cute.reporters.console.config import ConsoleConfig
from cute.reporters.text import TextReporter

TEST_LINE_WIDTH = 48


@dataclass(frozen=True, kw_only=True)
class ConsoleReporter(TextReporter):
    """Console output with one line per test and optional ANSI colours.

    Verbosity levels:
    - 0: silent
    - 1: one line per test and the summary
    - 2: as 1, plus failed conditions and diagnostics
    - 3: every condition, per-test footers and an extended summary
    """

    config: ConsoleConfig

    @classmethod
    @contextmanager
    def from_config(
        cls, config: ConsoleConfig, stream: TextIO | None = None
    ) -> Iterator["ConsoleReporter"]:
        """Create a console reporter writing to stdout."""
        yield cls(config=config, stream=stream)
        (stream or sys.stdout).flush()

    def test_started(self, context: TestContext) -> None:
        if context.verbosity >= 3:
            self._colored("bold", f"Test {context.test.name}:")
            self._write("\n")
            context.already_logged = True
        elif context.verbosity >= 1:
            width = self._colored("bold", f"Test {context.test.name}... ")
            if width < TEST_LINE_WIDTH:
                self._write(" " * (TEST_LINE_WIDTH - width))
        else:
            context.already_logged = True

    def _write_verdict_failed(self, context: TestContext) -> None:
        if 1 <= context.verbosity <= 2:
            self._write("[ ")
            self._colored("red-bold", "FAILED")
            self._write(" ]\n")

    def test_executed(self, context: TestContext, duration: float) -> None:
        if context.verbosity >= 3:
            self._write_footer(context, duration)
        elif not self._passed(context):
            self._close_failed(context)
        elif context.verbosity >= 1:
            self._write("[ ")
            self._colored("green-bold", "OK")
            self._write(" ]")
            if self.config.timer:
                self._write(f"  {self._format_duration(duration)}")
            self._write("\n")
            context.already_logged = True

    def _write_footer(self, context: TestContext, duration: float) -> None:
        self._write(self._indent(1))
        if self._passed(context):
            self._colored("green-bold", "SUCCESS: ")
            self._write("All conditions have passed.\n")
            if self.config.timer:
                self._write(
                    f"{self._indent(1)}Duration: {self._format_duration(duration)}\n"
                )
        else:
            self._colored("red-bold", "FAILED: ")
            if context.aborted:
                self._write("Aborted.\n")
            else:
                count = context.failure_count
                self._write(
                    f"{count} condition{'' if count == 1 else 's'} "
                    f"{'has' if count == 1 else 'have'} failed.\n"
                )
        self._write("\n")

    def run_finished(self, result: RunResult) -> None:
        verbosity = self.config.verbosity
        if self.config.no_summary or verbosity < 1:
            return

        stats = result.stats
        if verbosity >= 3:
            self._colored("bold", "Summary:")
            self._write("\n")
            self._write(f"  Count of all unit tests:     {len(result.registry):4d}\n")
            self._write(f"  Count of run unit tests:     {stats.units_run:4d}\n")
            self._write(f"  Count of failed unit tests:  {stats.units_failed:4d}\n")
            self._write(f"  Count of skipped unit tests: {result.units_skipped:4d}\n")

        if stats.units_failed == 0:
            self._colored("green-bold", "SUCCESS:")
            self._write(" All unit tests have passed.\n")
        else:
            self._colored("red-bold", "FAILED:")
            self._write(
                f" {stats.units_failed} of {stats.units_run} unit tests "
                f"{'has' if stats.units_failed == 1 else 'have'} failed.\n"
            )

        if verbosity >= 3:
            self._write("\n")
