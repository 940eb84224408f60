"""Shared rendering for the line-oriented console and TAP reporters."""

import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal, TextIO

from rich.console import Console
from rich.text import Text

from cute.context import TestContext
from cute.models.base import DerivedModel
from cute.models.config import TimerKind
from cute.models.result import ConditionEvent, TestReport
from cute.reporters.base import Reporter

type Color = Literal["default", "green", "red", "bold", "green-bold", "red-bold"]

STYLES: Mapping[Color, str] = {
    "default": "none",
    "green": "green",
    "red": "red",
    "bold": "bold",
    "green-bold": "bold green",
    "red-bold": "bold red",
}


class TextConfig(DerivedModel):
    """Options shared by the text reporters."""

    verbosity: int = 2
    colorize: bool = False
    timer: TimerKind | None = None


@dataclass(frozen=True, kw_only=True)
class TextReporter(Reporter):
    """Writes condition-level detail common to console and TAP output.

    ``context.already_logged`` tells whether the verdict of the running test
    has already been written; the first failed condition writes it.
    """

    config: TextConfig
    stream: TextIO | None = field(default=None, repr=False)

    def _write(self, text: str) -> None:
        (self.stream or sys.stdout).write(text)

    def _colored(self, color: Color, text: str) -> int:
        if not self.config.colorize:
            self._write(text)
            return len(text)

        console = Console(
            file=self.stream or sys.stdout,
            force_terminal=True,
            color_system="standard",
            highlight=False,
            soft_wrap=True,
        )
        console.print(Text(text, style=STYLES[color]), end="")
        return len(text)

    def _indent(self, level: int) -> str:
        return "  " * level

    def _detail_level(self, context: TestContext, base: int) -> int:
        return base + 1 if context.case_name else base

    def _write_verdict_failed(self, context: TestContext) -> None:
        """Write the "failed" verdict of the running test."""

    def _passed(self, context: TestContext) -> bool:
        return context.failure_count == 0 and not context.aborted

    def _close_failed(self, context: TestContext) -> None:
        if not context.already_logged:
            self._write_verdict_failed(context)
            context.already_logged = True

    def condition_recorded(self, context: TestContext, event: ConditionEvent) -> None:
        if not event.passed:
            self._close_failed(context)

        if context.verbosity < (3 if event.passed else 2):
            return

        if context.case_name and not context.case_logged:
            self._write_case_header(context)

        self._write(self._indent(self._detail_level(context, 1)))
        if event.file is not None:
            self._write(f"{os.path.basename(event.file)}:{event.line}: Check ")
        self._write(f"{event.description}... ")
        if event.passed:
            self._colored("green", "ok")
        else:
            self._colored("red", "failed")
        self._write("\n")

    def case_started(self, context: TestContext) -> None:
        if context.verbosity >= 3:
            self._write_case_header(context)

    def _write_case_header(self, context: TestContext) -> None:
        self._write(self._indent(1))
        self._colored("bold", f"Case {context.case_name}:")
        self._write("\n")
        context.case_logged = True

    def diagnostic(self, context: TestContext, lines: Sequence[str]) -> None:
        if context.verbosity < 2:
            return
        indent = self._indent(self._detail_level(context, 2))
        for line in lines:
            self._write(f"{indent}{line}\n")

    def dump(
        self,
        context: TestContext,
        title: str,
        rows: Sequence[str],
        truncated: int,
    ) -> None:
        if context.verbosity < 2:
            return
        title_indent = self._indent(self._detail_level(context, 2))
        row_indent = self._indent(self._detail_level(context, 3))
        self._write(f"{title_indent}{title if title.endswith(':') else title + ':'}\n")
        for row in rows:
            self._write(f"{row_indent}{row}\n")
        if truncated > 0:
            self._write(f"{row_indent}           ... (and more {truncated} bytes)\n")

    def _write_error(self, context: TestContext, text: str) -> None:
        if context.verbosity < 2:
            return
        self._write(self._indent(1))
        if context.verbosity >= 3:
            self._colored("red-bold", "ERROR: ")
        self._write(f"{text}\n")
        if context.verbosity >= 3:
            self._write("\n")

    def test_finished(self, context: TestContext, report: TestReport) -> None:
        if report.status != "crashed":
            return
        self._close_failed(context)
        if report.diagnostic:
            self._write_error(context, report.diagnostic)

    def _format_duration(self, duration: float) -> str:
        return f"{duration:.6f} secs"
