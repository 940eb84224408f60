"""Fixtures for module tests running tests in real child processes."""

import sys
from pathlib import Path

import pytest

SUITE_SCRIPT = """\
from cute import main
from cute.testing.suites import sample_registry

if __name__ == "__main__":
    main(sample_registry())
"""


@pytest.fixture(scope="session")
def suite_program(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Write a test program registering every sample test."""
    program = tmp_path_factory.mktemp("suite") / "suite.py"
    program.write_text(SUITE_SCRIPT)
    return program


@pytest.fixture(scope="session")
def python() -> str:
    """Interpreter running the test program."""
    return sys.executable
