"""Command line entry point of a test program."""

import argparse
import logging
import os
import sys
from collections.abc import Iterable, Sequence
from contextlib import ExitStack
from pathlib import Path
from typing import Any, NoReturn, TextIO

from cute.errors import UnknownTestError
from cute.models.config import RunConfig
from cute.models.registry import TestEntry, TestRegistry
from cute.models.result import EXIT_SUCCESS
from cute.orchestrator import TestOrchestrator
from cute.reporters.loading import open_reporters
from cute.resolver import build_selection

DEFAULT_VERBOSITY = 2
HELP_LIST_LIMIT = 16

DESCRIPTION = """\
Run the specified unit tests; or if the option '--skip' is used, run all
tests in the suite but those listed.  By default, if no tests are specified
on the command line, all unit tests in the suite are run."""

VERBOSITY_HELP = """\
set verbose level to LEVEL:
0 ... be silent
1 ... output one line per test (and summary)
2 ... as 1 and failed conditions (this is default)
3 ... as 1 and all conditions (and extended summary)"""


class VerbosityAction(argparse.Action):
    """Sets the verbosity level, or raises it by one without a value."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        if values is None or values == []:
            setattr(namespace, self.dest, getattr(namespace, self.dest) + 1)
        else:
            setattr(namespace, self.dest, values)


def format_test_list(registry: TestRegistry) -> str:
    """Render the names of the registered tests."""
    return "Unit tests:\n" + "".join(f"  {name}\n" for name in registry.names)


def build_parser(registry: TestRegistry, prog: str) -> argparse.ArgumentParser:
    """Create the argument parser of a test program."""
    epilog = format_test_list(registry) if len(registry) < HELP_LIST_LIMIT else None
    parser = argparse.ArgumentParser(
        prog=prog,
        description=DESCRIPTION,
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("patterns", nargs="*", metavar="test", help="test to run")
    parser.add_argument(
        "-s",
        "--skip",
        action="store_true",
        help="execute all unit tests but the listed ones",
    )
    parser.add_argument(
        "--exec",
        dest="exec_mode",
        nargs="?",
        const="always",
        default="auto",
        choices=["auto", "always", "never"],
        metavar="WHEN",
        help="if supported, execute unit tests as child processes\n"
        "(WHEN is one of 'auto', 'always', 'never')",
    )
    parser.add_argument(
        "-E",
        "--no-exec",
        dest="exec_mode",
        action="store_const",
        const="never",
        help="same as --exec=never",
    )
    parser.add_argument(
        "-t",
        dest="timer",
        action="store_const",
        const="real",
        help="measure test duration (real time)",
    )
    parser.add_argument(
        "--time",
        "--timer",
        dest="timer",
        nargs="?",
        const="real",
        choices=["real", "cpu"],
        metavar="TIMER",
        help="measure test duration, using given timer\n"
        "(TIMER is one of 'real', 'cpu')",
    )
    parser.add_argument(
        "--no-summary",
        action="store_true",
        help="suppress printing of test results summary",
    )
    parser.add_argument(
        "--tap",
        action="store_true",
        help="produce TAP-compliant output\n(see https://testanything.org/)",
    )
    parser.add_argument(
        "-x",
        "--xml-output",
        type=Path,
        metavar="FILE",
        help="enable XUnit output to the given file",
    )
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="list unit tests in the suite and exit",
    )
    parser.add_argument(
        "-v",
        dest="verbosity",
        action=VerbosityAction,
        nargs=0,
        help="make output more verbose",
    )
    parser.add_argument(
        "--verbose",
        dest="verbosity",
        action=VerbosityAction,
        nargs="?",
        type=int,
        metavar="LEVEL",
        help=VERBOSITY_HELP,
    )
    parser.add_argument(
        "-q",
        "--quiet",
        dest="verbosity",
        action="store_const",
        const=0,
        help="same as --verbose=0",
    )
    parser.add_argument(
        "--color",
        nargs="?",
        const="always",
        default="auto",
        choices=["auto", "always", "never"],
        metavar="WHEN",
        help="enable colorized output\n(WHEN is one of 'auto', 'always', 'never')",
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_const",
        const="never",
        help="same as --color=never",
    )
    parser.add_argument("--worker", type=int, help=argparse.SUPPRESS)
    parser.set_defaults(
        verbosity=DEFAULT_VERBOSITY, exec_mode="auto", color="auto"
    )
    return parser


def resolve_color(when: str, stream: TextIO) -> bool:
    """Decide whether output gets ANSI colours."""
    if when == "auto":
        return stream.isatty()
    return when == "always"


def parse_config(
    registry: TestRegistry,
    argv: Sequence[str],
    program: str,
    parser: argparse.ArgumentParser | None = None,
) -> RunConfig:
    """Parse command line arguments into a run configuration.

    ``--list`` and ``--help`` exit with status 0, usage errors with 2.
    """
    parser = parser or build_parser(registry, Path(program).name)
    args = parser.parse_intermixed_args(argv)

    if args.list:
        sys.stdout.write(format_test_list(registry))
        sys.exit(EXIT_SUCCESS)

    return RunConfig(
        patterns=args.patterns,
        skip=args.skip,
        exec_mode=args.exec_mode,
        timer=args.timer,
        tap=args.tap,
        xml_output=args.xml_output,
        verbosity=max(args.verbosity, 0),
        colorize=resolve_color(args.color, sys.stdout),
        no_summary=args.no_summary,
        worker=args.worker,
        program=program,
    )


def run(
    registry: TestRegistry,
    config: RunConfig,
    parser: argparse.ArgumentParser | None = None,
) -> int:
    """Run the tests of a registry and return the process exit code."""
    log = logging.getLogger("cute")
    parser = parser or build_parser(registry, config.suite_name)

    try:
        selection = build_selection(registry, config.patterns)
    except UnknownTestError as exc:
        parser.error(f"{exc}\nTry '{parser.prog} --list' for list of unit tests.")

    with ExitStack() as stack:
        try:
            reporter = stack.enter_context(open_reporters(config))
        except OSError as exc:
            parser.error(f"Unable to open '{exc.filename}': {exc.strerror}")

        orchestrator = TestOrchestrator(
            registry=registry, config=config, reporter=reporter
        )

        if config.worker is not None:
            if len(selection) != 1:
                parser.error("--worker requires exactly one test name")
            index = next(iter(selection))
            log.debug("Worker running test %s", registry[index].name)
            return orchestrator.run_worker(index, config.worker)

        result = orchestrator.run(selection)

    return result.exit_code


def configure_logging() -> None:
    """Send engine logs to stderr; CUTE_DEBUG enables debug output."""
    logging.basicConfig(
        level=logging.DEBUG if os.environ.get("CUTE_DEBUG") else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def main(
    registry: TestRegistry | Iterable[tuple[str, TestEntry] | None],
    argv: Sequence[str] | None = None,
) -> NoReturn:
    """Entry point of a test program: parse argv, run the tests and exit.

    Exit status is 0 when every selected test passed, 1 when any failed and
    2 on usage errors.
    """
    if not isinstance(registry, TestRegistry):
        registry = TestRegistry.from_pairs(registry)

    program = sys.argv[0] if sys.argv and sys.argv[0] else "cute"
    parser = build_parser(registry, Path(program).name)
    config = parse_config(
        registry, sys.argv[1:] if argv is None else argv, program, parser
    )

    configure_logging()

    exit_code = run(registry, config, parser)
    sys.exit(exit_code)

