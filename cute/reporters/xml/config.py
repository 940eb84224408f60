"""Configuration for the XML reporter."""

from pathlib import Path

from cute.models.base import DerivedModel


class XmlConfig(DerivedModel):
    """Configuration for the XML reporter."""

    xml_output: Path
    suite_name: str = "cute"
