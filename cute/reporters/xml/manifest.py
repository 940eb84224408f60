"""XML reporter manifest."""

from cute.reporters.manifest import ReporterManifest
from cute.reporters.xml.config import XmlConfig
from cute.reporters.xml.reporter import XmlReporter

xml_manifest = ReporterManifest(
    config_cls=XmlConfig,
    reporter_factory=XmlReporter.from_config,
)
