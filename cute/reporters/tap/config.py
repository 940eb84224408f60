"""Configuration for the TAP reporter."""

from cute.reporters.text import TextConfig


class TapConfig(TextConfig):
    """Configuration for the TAP reporter.

    Verbosity is already capped by the run configuration when TAP is on.
    """
