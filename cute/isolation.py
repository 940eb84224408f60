"""Backends running a single test in a child process."""

import logging
import os
import signal
import subprocess
import sys
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from cute.models.config import RunConfig
from cute.models.registry import TestRegistry

log = logging.getLogger(__name__)

type Worker = Callable[[int, int], int]


@dataclass(frozen=True, kw_only=True)
class ExitStatus:
    """How an isolated test process terminated."""

    exit_code: int | None = None
    signal: int | None = None
    cpu_time: float | None = None

    def describe(self) -> str:
        if self.signal is not None:
            try:
                name = signal.Signals(self.signal).name
            except ValueError:
                name = f"signal {self.signal}"
            return f"Test interrupted by {name}."
        return f"Unexpected exit code [{self.exit_code}]"


class IsolationBackend(ABC):
    """Runs one registered test in a fresh process and reports how it ended."""

    @abstractmethod
    def run_isolated(self, index: int, sequence: int) -> ExitStatus:
        """Run the test at ``index`` in a child process and wait for it.

        Args:
            index: Position of the test in the registry
            sequence: 1-based position of the test in this run

        Returns:
            The termination status of the child

        Raises:
            OSError: If the child process cannot be created

        """


def _flush_std_streams() -> None:
    sys.stdout.flush()
    sys.stderr.flush()


@dataclass(frozen=True, kw_only=True)
class ForkBackend(IsolationBackend):
    """POSIX backend: fork, run the worker in the child, wait for it."""

    worker: Worker = field(repr=False)

    def run_isolated(self, index: int, sequence: int) -> ExitStatus:
        # The child must start with empty buffers or it would repeat them.
        _flush_std_streams()

        pid = os.fork()
        if pid == 0:
            self._run_child(index, sequence)

        _, status, usage = os.wait4(pid, 0)
        cpu_time = usage.ru_utime + usage.ru_stime
        if os.WIFSIGNALED(status):
            return ExitStatus(signal=os.WTERMSIG(status), cpu_time=cpu_time)
        return ExitStatus(exit_code=os.WEXITSTATUS(status), cpu_time=cpu_time)

    def _run_child(self, index: int, sequence: int) -> None:
        code = os.EX_SOFTWARE
        try:
            code = self.worker(index, sequence)
        except SystemExit as exc:
            code = exc.code if isinstance(exc.code, int) else int(exc.code is not None)
        except BaseException:
            log.exception("Worker of test #%d ended abnormally", sequence)
        finally:
            _flush_std_streams()
            os._exit(code)


@dataclass(frozen=True, kw_only=True)
class SpawnBackend(IsolationBackend):
    """Backend for platforms without fork: re-executes the test program.

    The child gets ``--worker=SEQ`` and the exact test name, plus the output
    options of the parent so it renders the same way.
    """

    config: RunConfig
    registry: TestRegistry = field(repr=False)
    executable: str = field(default_factory=lambda: sys.executable)

    def command(self, index: int, sequence: int) -> Sequence[str]:
        """Build the command line of the worker process."""
        config = self.config
        args = [
            self.executable,
            config.program,
            f"--worker={sequence}",
            "--no-exec",
            "--no-summary",
            f"--verbose={config.verbosity}",
            f"--color={'always' if config.colorize else 'never'}",
        ]
        if config.timer:
            args.append(f"--time={config.timer}")
        if config.tap:
            args.append("--tap")
        name = self.registry[index].name
        if name.startswith("-"):
            args.append("--")
        args.append(name)
        return args

    def run_isolated(self, index: int, sequence: int) -> ExitStatus:
        _flush_std_streams()
        completed = subprocess.run(self.command(index, sequence), check=False)
        if completed.returncode < 0:
            return ExitStatus(signal=-completed.returncode)
        return ExitStatus(exit_code=completed.returncode)


def default_backend(
    config: RunConfig, registry: TestRegistry, worker: Worker
) -> IsolationBackend:
    """Pick the isolation backend for this platform."""
    if hasattr(os, "fork"):
        return ForkBackend(worker=worker)
    log.debug("fork() unavailable, isolating tests by re-executing %s", config.program)
    return SpawnBackend(config=config, registry=registry)
