"""Tests for the run configuration."""

import pytest
from pydantic import ValidationError

from cute.models.config import RunConfig


def test_defaults() -> None:
    """Defaults match a plain run of the test program."""
    config = RunConfig()

    assert config.patterns == ()
    assert config.exec_mode == "auto"
    assert config.verbosity == 2
    assert config.timer is None
    assert config.no_summary is False
    assert config.worker is None


def test_tap_suppresses_summary() -> None:
    """TAP output never prints the console summary."""
    config = RunConfig(tap=True)

    assert config.no_summary is True


@pytest.mark.parametrize(("requested", "expected"), [(0, 0), (2, 2), (3, 2), (7, 2)])
def test_tap_caps_verbosity(requested: int, expected: int) -> None:
    """TAP output caps the verbosity at 2."""
    config = RunConfig(tap=True, verbosity=requested)

    assert config.verbosity == expected


def test_verbosity_is_not_capped_without_tap() -> None:
    """Console output accepts the extended verbosity."""
    assert RunConfig(verbosity=3).verbosity == 3


def test_rejects_unknown_exec_mode() -> None:
    """Only auto, always and never are valid isolation policies."""
    with pytest.raises(ValidationError):
        RunConfig(exec_mode="sometimes")


def test_rejects_unknown_fields() -> None:
    """Unknown options are rejected."""
    with pytest.raises(ValidationError):
        RunConfig(unknown=True)


def test_suite_name_is_program_basename() -> None:
    """The suite is named after the program file."""
    assert RunConfig(program="/usr/local/bin/test-suite").suite_name == "test-suite"
