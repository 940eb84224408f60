"""XUnit-style XML reporter."""

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import BinaryIO

from cute.context import TestContext
from cute.models.result import RunResult, TestReport
from cute.reporters.base import Reporter
from cute.reporters.xml.config import XmlConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class XmlReporter(Reporter):
    """Writes a ``<testsuite>`` document once the run is over.

    Every registered test gets a ``<testcase>``; failed ones contain
    ``<failure />`` and tests that did not run contain ``<skipped />``.
    """

    config: XmlConfig
    output: BinaryIO = field(repr=False)
    diagnostics: dict[str, str] = field(default_factory=dict, repr=False)

    @classmethod
    @contextmanager
    def from_config(cls, config: XmlConfig) -> Iterator["XmlReporter"]:
        """Create an XML reporter owning the output file.

        The file is opened up front so an unwritable path fails the run
        before any test executes.
        """
        with config.xml_output.open("wb") as output:
            yield cls(config=config, output=output)

    def test_finished(self, context: TestContext, report: TestReport) -> None:
        if report.diagnostic:
            self.diagnostics[report.test.name] = report.diagnostic

    def run_finished(self, result: RunResult) -> None:
        document = self.build(result)
        ET.indent(document, space="  ")
        document.write(self.output, encoding="UTF-8", xml_declaration=True)
        log.info("Wrote XML report to %s", self.config.xml_output)

    def build(self, result: RunResult) -> ET.ElementTree:
        """Build the XML document for a finished run."""
        stats = result.stats
        suite = ET.Element(
            "testsuite",
            {
                "name": self.config.suite_name,
                "tests": str(len(result.registry)),
                "errors": str(stats.units_failed),
                "failures": str(stats.units_failed),
                "skip": str(result.units_skipped),
            },
        )
        for test, outcome in zip(result.registry, result.outcomes, strict=True):
            case = ET.SubElement(
                suite,
                "testcase",
                {"name": test.name, "time": f"{outcome.duration:.2f}"},
            )
            if outcome.failed:
                attributes = {}
                if diagnostic := self.diagnostics.get(test.name):
                    attributes["message"] = diagnostic
                ET.SubElement(case, "failure", attributes)
            elif not outcome.succeeded:
                ET.SubElement(case, "skipped")
        return ET.ElementTree(suite)
