"""TAP reporter manifest."""

from cute.reporters.manifest import ReporterManifest
from cute.reporters.tap.config import TapConfig
from cute.reporters.tap.reporter import TapReporter

tap_manifest = ReporterManifest(
    config_cls=TapConfig,
    reporter_factory=TapReporter.from_config,
)
