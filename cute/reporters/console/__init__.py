"""Console reporter module."""

from cute.reporters.console.config import ConsoleConfig
from cute.reporters.console.manifest import console_manifest
from cute.reporters.console.reporter import ConsoleReporter

__all__ = ["ConsoleConfig", "ConsoleReporter", "console_manifest"]
