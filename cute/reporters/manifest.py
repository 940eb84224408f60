"""Reporter manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass

from pydantic import BaseModel

from cute.reporters.base import Reporter


@dataclass(frozen=True, kw_only=True)
class ReporterManifest[ConfigT: BaseModel]:
    """Manifest describing a reporter plugin.

    The configuration class is populated from the run configuration; the
    factory returns a context manager owning the reporter's resources.
    """

    config_cls: type[ConfigT]
    reporter_factory: Callable[[ConfigT], AbstractContextManager[Reporter]]
