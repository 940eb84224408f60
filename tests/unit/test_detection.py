"""Tests for debugger and tracer detection."""

from pathlib import Path
from unittest.mock import patch

import pytest

from cute.detection import isolation_unwanted, memory_checker_active, tracer_pid


def test_tracer_pid_reads_status(tmp_path: Path) -> None:
    """The tracer PID is read from the status file."""
    status = tmp_path / "status"
    status.write_text("Name:\tpython\nTracerPid:\t1234\nUid:\t0\n")

    assert tracer_pid(status) == 1234


def test_tracer_pid_untraced(tmp_path: Path) -> None:
    """An untraced process reports zero."""
    status = tmp_path / "status"
    status.write_text("TracerPid:\t0\n")

    assert tracer_pid(status) == 0


def test_tracer_pid_without_status_file(tmp_path: Path) -> None:
    """Platforms without procfs report zero."""
    assert tracer_pid(tmp_path / "missing") == 0


def test_memory_checker_detects_valgrind(monkeypatch: pytest.MonkeyPatch) -> None:
    """A valgrind preload counts as a memory checker."""
    monkeypatch.setenv("LD_PRELOAD", "/usr/lib/valgrind/vgpreload_memcheck.so")

    assert memory_checker_active() is True


def test_isolation_unwanted_under_debugger() -> None:
    """An attached debugger disables isolation."""
    with patch("cute.detection.python_debugger_attached", return_value=True):
        assert isolation_unwanted() == "a debugger is attached"


def test_isolation_unwanted_when_traced() -> None:
    """A tracing process disables isolation."""
    with (
        patch("cute.detection.python_debugger_attached", return_value=False),
        patch("cute.detection.tracer_pid", return_value=77),
    ):
        assert isolation_unwanted() == "the process is traced by PID 77"


def test_isolation_wanted_in_plain_environment() -> None:
    """Nothing attached means tests may be isolated."""
    with (
        patch("cute.detection.python_debugger_attached", return_value=False),
        patch("cute.detection.tracer_pid", return_value=0),
        patch("cute.detection.memory_checker_active", return_value=False),
    ):
        assert isolation_unwanted() is None
