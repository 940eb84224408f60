"""Unit-test engine embedded in the program under test.

A test program registers its tests and hands control to :func:`main`::

    import cute

    def test_tutorial():
        cute.check(1 + 1 == 2)

    if __name__ == "__main__":
        cute.main([("tutorial", test_tutorial)])
"""

from cute.abort import TestAborted, abort
from cute.cli import main
from cute.errors import (
    CuteError,
    DuplicateTestError,
    NoActiveTestError,
    ReporterNotFoundError,
    UnknownTestError,
    UsageError,
)
from cute.models.config import RunConfig
from cute.models.registry import TestCase, TestRegistry
from cute.recorder import case, check, dump, message, raises, record_condition, require

__all__ = [
    "CuteError",
    "DuplicateTestError",
    "NoActiveTestError",
    "ReporterNotFoundError",
    "RunConfig",
    "TestAborted",
    "TestCase",
    "TestRegistry",
    "UnknownTestError",
    "UsageError",
    "abort",
    "case",
    "check",
    "dump",
    "main",
    "message",
    "raises",
    "record_condition",
    "require",
]
