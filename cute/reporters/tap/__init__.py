"""TAP reporter module."""

from cute.reporters.tap.config import TapConfig
from cute.reporters.tap.manifest import tap_manifest
from cute.reporters.tap.reporter import TapReporter

__all__ = ["TapConfig", "TapReporter", "tap_manifest"]
