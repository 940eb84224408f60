"""Configuration for the console reporter."""

from cute.reporters.text import TextConfig


class ConsoleConfig(TextConfig):
    """Configuration for the console reporter."""

    no_summary: bool = False
