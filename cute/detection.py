"""Detect debuggers, tracers and memory checkers attached to the process.

Running tests in child processes defeats breakpoints and instrumentation,
so the run falls back to inline execution when any of these is present.
"""

import logging
import os
import sys
import tracemalloc
from pathlib import Path

log = logging.getLogger(__name__)

PROC_STATUS = Path("/proc/self/status")


def tracer_pid(status_path: Path = PROC_STATUS) -> int:
    """Return the PID of the process tracing us on Linux, or 0."""
    try:
        status = status_path.read_text()
    except OSError:
        return 0

    for line in status.splitlines():
        if line.startswith("TracerPid:"):
            value = line.removeprefix("TracerPid:").strip()
            return int(value) if value.isdigit() else 0
    return 0


def python_debugger_attached() -> bool:
    """Check for a trace function or a registered sys.monitoring debugger."""
    if sys.gettrace() is not None:
        return True
    monitoring = getattr(sys, "monitoring", None)
    if monitoring is not None:
        return monitoring.get_tool(monitoring.DEBUGGER_ID) is not None
    return False


def memory_checker_active() -> bool:
    """Check for tracemalloc or a valgrind preload."""
    if tracemalloc.is_tracing():
        return True
    return "vgpreload" in os.environ.get("LD_PRELOAD", "")


def isolation_unwanted() -> str | None:
    """Return why tests should not run in child processes, if they shouldn't."""
    if python_debugger_attached():
        return "a debugger is attached"
    if (pid := tracer_pid()) != 0:
        return f"the process is traced by PID {pid}"
    if memory_checker_active():
        return "a memory checker is active"
    return None
