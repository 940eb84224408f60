"""Abort channel unwinding the current test after a fatal check."""

import logging
import os
import sys
from typing import NoReturn

from cute.context import TestContext, current_test
from cute.models.result import WORKER_EXIT_ABORTED

log = logging.getLogger(__name__)


class TestAborted(BaseException):
    """Unwinds the current test up to the engine's invocation frame.

    Derives from BaseException so that ``except Exception`` blocks in test
    code cannot swallow it. Only the engine catches it.
    """

    __test__ = False


def abort() -> NoReturn:
    """Abandon the rest of the current test.

    Inline, the test unwinds to the engine through TestAborted. Inside an
    isolated worker the teardown runs, the test is reported as executed and
    the process exits with a status the parent classifies as aborted.
    """
    context = current_test()
    context.aborted = True
    if context.worker:
        _exit_worker(context)
    raise TestAborted(context.test.name)


def _exit_worker(context: TestContext) -> NoReturn:
    teardown, context.teardown = context.teardown, None
    if teardown is not None:
        try:
            teardown(context.test.name)
        except Exception:
            log.exception("Teardown of aborted test %s failed", context.test.name)
    context.reporter.test_executed(context, context.clock() - context.started)
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(WORKER_EXIT_ABORTED)
