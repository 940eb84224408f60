"""Console reporter manifest."""

from cute.reporters.manifest import ReporterManifest
from cute.reporters.console.config import ConsoleConfig
from cute.reporters.console.reporter import ConsoleReporter

console_manifest = ReporterManifest(
    config_cls=ConsoleConfig,
    reporter_factory=ConsoleReporter.from_config,
)
