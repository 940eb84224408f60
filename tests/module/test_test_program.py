"""Module tests running a test program as a separate process."""

import subprocess
from pathlib import Path
from xml.etree import ElementTree as ET

from cute.isolation import ExitStatus, SpawnBackend
from cute.models.config import RunConfig
from cute.testing.suites import sample_registry


def _run(python: str, program: Path, *argv: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [python, str(program), "--no-color", *argv],
        capture_output=True,
        text=True,
        check=False,
    )


def test_passing_run_exits_zero(python: str, suite_program: Path) -> None:
    """Selected passing tests make the program exit with 0."""
    completed = _run(python, suite_program, "tutorial")

    assert completed.returncode == 0
    assert completed.stdout.splitlines() == [
        "Test tutorial... " + " " * 31 + "[ OK ]",
        "SUCCESS: All unit tests have passed.",
    ]


def test_failing_run_exits_one(python: str, suite_program: Path) -> None:
    """Failures, aborts and crashes all make the program exit with 1."""
    completed = _run(
        python, suite_program, "--exec=always", "tutorial", "fail", "abort", "crash"
    )

    assert completed.returncode == 1
    assert "FAILED: 3 of 4 unit tests have failed." in completed.stdout


def test_list_option(python: str, suite_program: Path) -> None:
    """--list prints every registered test."""
    completed = _run(python, suite_program, "--list")

    assert completed.returncode == 0
    assert completed.stdout.splitlines()[0] == "Unit tests:"
    assert "  memory" in completed.stdout.splitlines()


def test_unknown_test_is_usage_error(python: str, suite_program: Path) -> None:
    """An unmatched test name exits with 2."""
    completed = _run(python, suite_program, "nonexistent")

    assert completed.returncode == 2
    assert "Unrecognized unit test 'nonexistent'" in completed.stderr


def test_tap_output(python: str, suite_program: Path) -> None:
    """TAP output numbers the tests of the run."""
    completed = _run(
        python, suite_program, "--tap", "--exec=always", "tutorial", "cases"
    )

    lines = completed.stdout.splitlines()
    assert lines[0] == "1..2"
    assert lines[1] == "ok 1 - tutorial"
    assert lines[2] == "not ok 2 - cases"
    assert "# Case value 3:" in lines


def test_xml_output(python: str, suite_program: Path, tmp_path: Path) -> None:
    """The XML report lists run and skipped tests."""
    report = tmp_path / "report.xml"

    completed = _run(python, suite_program, "-x", str(report), "-q", "fail")

    assert completed.returncode == 1
    suite = ET.parse(report).getroot()
    assert suite.get("name") == "suite.py"
    assert suite.get("failures") == "1"
    assert suite.get("skip") == str(len(sample_registry()) - 1)


def test_spawn_backend_runs_worker(python: str, suite_program: Path) -> None:
    """The re-executing backend classifies workers by exit status."""
    registry = sample_registry()
    backend = SpawnBackend(
        config=RunConfig(program=str(suite_program), verbosity=0),
        registry=registry,
        executable=python,
    )

    statuses = {
        name: backend.run_isolated(registry.names.index(name), 1)
        for name in ("tutorial", "fail", "abort")
    }

    assert statuses == {
        "tutorial": ExitStatus(exit_code=0),
        "fail": ExitStatus(exit_code=1),
        "abort": ExitStatus(exit_code=3),
    }


def test_tap_output_for_aborted_test(python: str, suite_program: Path) -> None:
    """An aborted worker still writes its TAP verdict line."""
    completed = _run(
        python, suite_program, "--tap", "--exec=always", "bail", "tutorial"
    )

    assert completed.returncode == 1
    assert completed.stdout.splitlines() == [
        "1..2",
        "not ok 1 - bail",
        "ok 2 - tutorial",
    ]


def test_aborted_footer_in_worker(python: str, suite_program: Path) -> None:
    """The verbose footer of an aborted test is written by the worker."""
    completed = _run(
        python, suite_program, "--verbose=3", "--exec=always", "abort", "bail"
    )

    lines = completed.stdout.splitlines()
    assert lines.count("  FAILED: Aborted.") == 2
    assert "  Count of failed unit tests:     2" in lines


def test_aborted_verdict_in_worker(python: str, suite_program: Path) -> None:
    """An abort without failed checks closes the test line as failed."""
    completed = _run(python, suite_program, "--exec=always", "bail", "tutorial")

    lines = completed.stdout.splitlines()
    assert lines[0] == "Test bail... " + " " * 35 + "[ FAILED ]"
    assert lines[-1] == "FAILED: 1 of 2 unit tests has failed."
