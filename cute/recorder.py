"""Condition recording API used inside test bodies.

Every check goes through :func:`record_condition`, which updates the running
test's failure count and notifies the reporter. Diagnostics attached with
:func:`message` or :func:`dump` are only emitted when the most recently
recorded condition of the test failed, so they can follow a check
unconditionally::

    cute.check(produced == expected)
    cute.message(f"Expected: {expected}")
    cute.message(f"Produced: {produced}")
"""

import ast
import linecache
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from types import FrameType
from typing import NamedTuple

from cute.abort import abort
from cute.context import CASE_NAME_MAXSIZE, current_test
from cute.models.result import ConditionEvent

MESSAGE_MAXSIZE = 1024
DUMP_MAXSIZE = 1024
DUMP_BYTES_PER_LINE = 16


class Location(NamedTuple):
    """Source position of a checked condition."""

    file: str | None
    line: int | None


def record_condition(passed: bool, location: Location, description: str) -> bool:
    """Record the outcome of one condition of the running test.

    Returns:
        The ``passed`` value, so call sites can guard dependent checks.

    """
    context = current_test()
    if not passed:
        context.failure_count += 1
    context.last_failed = not passed

    context.reporter.condition_recorded(
        context,
        ConditionEvent(
            passed=passed,
            file=location.file,
            line=location.line,
            description=description,
            case_name=context.case_name,
        ),
    )
    return passed


def check(condition: object, description: str | None = None) -> bool:
    """Check a condition; a failure fails the test but execution continues."""
    frame = sys._getframe(1)
    return record_condition(
        bool(condition),
        _location(frame),
        description or _describe(frame, "check"),
    )


def require(condition: object, description: str | None = None) -> None:
    """Check a condition and abort the current test if it fails."""
    frame = sys._getframe(1)
    if not record_condition(
        bool(condition),
        _location(frame),
        description or _describe(frame, "require"),
    ):
        abort()


@contextmanager
def raises(
    expected: type[BaseException] | tuple[type[BaseException], ...],
    description: str | None = None,
) -> Iterator[None]:
    """Check that the block raises one of the expected exceptions.

    Unexpected exceptions are recorded as a failed condition and swallowed.
    """
    frame = sys._getframe(2)
    location = _location(frame)
    names = (
        ", ".join(exc.__name__ for exc in expected)
        if isinstance(expected, tuple)
        else expected.__name__
    )
    description = description or f"Exception {names} is raised"
    try:
        yield
    except expected:
        record_condition(True, location, description)
    except Exception as exc:
        record_condition(False, location, description)
        message(f"Raised instead: {type(exc).__name__}: {exc}")
    else:
        record_condition(False, location, description)
        message("No exception was raised.")


def case(name: str | None) -> None:
    """Label the following conditions of the test.

    Starting a case ends the previous one; ``None`` ends the current case.
    """
    context = current_test()
    if context.case_name is not None:
        context.case_name = None
        context.case_logged = False

    if name is None:
        return

    context.case_name = name[: CASE_NAME_MAXSIZE - 1]
    context.reporter.case_started(context)


def message(text: str) -> None:
    """Attach extra text to the most recent condition if it failed."""
    context = current_test()
    if not context.last_failed:
        return

    text = text[: MESSAGE_MAXSIZE - 1]
    lines = text.splitlines() or [""]
    context.reporter.diagnostic(context, lines)


def dump(title: str, data: bytes | bytearray | memoryview) -> None:
    """Attach a hex dump of a memory block to the most recent failed condition."""
    context = current_test()
    if not context.last_failed:
        return

    block = bytes(data)
    truncated = max(0, len(block) - DUMP_MAXSIZE)
    context.reporter.dump(
        context, title, hexdump_rows(block[:DUMP_MAXSIZE]), truncated
    )


def hexdump_rows(block: bytes) -> Sequence[str]:
    """Render bytes as ``offset: hex  ascii`` rows of 16 bytes."""
    rows: list[str] = []
    for offset in range(0, len(block), DUMP_BYTES_PER_LINE):
        chunk = block[offset : offset + DUMP_BYTES_PER_LINE]
        hex_part = "".join(f" {byte:02x}" for byte in chunk)
        hex_part += "   " * (DUMP_BYTES_PER_LINE - len(chunk))
        text_part = "".join(chr(b) if 0x20 <= b < 0x7F else "." for b in chunk)
        rows.append(f"{offset:08x}: {hex_part}  {text_part}")
    return rows


def _location(frame: FrameType) -> Location:
    return Location(frame.f_code.co_filename, frame.f_lineno)


def _describe(frame: FrameType, function: str) -> str:
    """Recover the checked expression from the caller's source line."""
    line = linecache.getline(frame.f_code.co_filename, frame.f_lineno).strip()
    if not line:
        return "condition"

    for source in (line, f"{line} pass"):
        try:
            tree = ast.parse(source)
        except SyntaxError:
            continue
        for node in ast.walk(tree):
            if isinstance(node, ast.Call) and node.args and _called(node) == function:
                return ast.unparse(node.args[0])
        break

    return line


def _called(node: ast.Call) -> str | None:
    if isinstance(node.func, ast.Name):
        return node.func.id
    if isinstance(node.func, ast.Attribute):
        return node.func.attr
    return None
