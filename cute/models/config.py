"""Run configuration consumed by the engine."""

from collections.abc import Sequence
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, model_validator

from cute.models.base import Model

type ExecMode = Literal["auto", "always", "never"]
type TimerKind = Literal["real", "cpu"]

# TAP needs the verdict of a test before anything else about it is printed.
TAP_MAX_VERBOSITY = 2


class RunConfig(Model):
    """Options of a single run, usually parsed from the command line."""

    patterns: Sequence[str] = Field(
        default=(), description="Test names or patterns selecting tests"
    )
    skip: bool = Field(default=False, description="Run every test but the selected")
    exec_mode: ExecMode = Field(
        default="auto", description="Whether tests run in child processes"
    )
    timer: TimerKind | None = Field(
        default=None, description="Print test durations using this timer"
    )
    tap: bool = Field(default=False, description="Produce TAP output")
    xml_output: Path | None = Field(default=None, description="XUnit report file")
    verbosity: int = Field(default=2, ge=0, description="Verbosity level (0-3)")
    colorize: bool = Field(default=False, description="Use ANSI colours")
    no_summary: bool = Field(default=False, description="Suppress the summary")
    worker: int | None = Field(
        default=None, ge=0, description="Internal: run one test as a worker"
    )
    program: str = Field(default="cute", description="Program name (argv[0])")

    @model_validator(mode="before")
    @classmethod
    def _apply_tap_rules(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("tap"):
            data = dict(data)
            data["no_summary"] = True
            verbosity = data.get("verbosity", 2)
            if isinstance(verbosity, int) and verbosity > TAP_MAX_VERBOSITY:
                data["verbosity"] = TAP_MAX_VERBOSITY
        return data

    @property
    def suite_name(self) -> str:
        return Path(self.program).name or self.program
