"""XML reporter module."""

from cute.reporters.xml.config import XmlConfig
from cute.reporters.xml.manifest import xml_manifest
from cute.reporters.xml.reporter import XmlReporter

__all__ = ["XmlConfig", "XmlReporter", "xml_manifest"]
