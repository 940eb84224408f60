"""Loading of reporters from entry points."""

from collections.abc import Iterator, Sequence
from contextlib import ExitStack, contextmanager
from importlib.metadata import entry_points
from typing import Any

from cute.errors import ReporterNotFoundError
from cute.models.config import RunConfig
from cute.reporters.base import CompositeReporter, Reporter
from cute.reporters.manifest import ReporterManifest

ENTRY_POINT_GROUP = "cute.reporters"


def load_reporter_manifests(keys: Sequence[str]) -> list[ReporterManifest[Any]]:
    """Load the manifests of several reporters, in the given order.

    Every key is checked before any plugin module is imported.

    Raises:
        ReporterNotFoundError: If a key names no registered reporter

    """
    entries = {entry.name: entry for entry in entry_points(group=ENTRY_POINT_GROUP)}

    for key in keys:
        if key not in entries:
            raise ReporterNotFoundError(
                f"Reporter '{key}' not found. Available reporters: {sorted(entries)}"
            )

    return [entries[key].load() for key in keys]


def load_reporter_manifest(key: str) -> ReporterManifest[Any]:
    """Load a reporter manifest by key ("console", "tap" or "xml")."""
    (manifest,) = load_reporter_manifests([key])
    return manifest


def reporter_keys(config: RunConfig) -> Sequence[str]:
    """Return the reporters a run configuration asks for.

    TAP replaces the console output; the XML report comes on top of either.
    """
    keys = ["tap" if config.tap else "console"]
    if config.xml_output is not None:
        keys.append("xml")
    return keys


@contextmanager
def open_reporters(config: RunConfig) -> Iterator[Reporter]:
    """Open every reporter the configuration asks for as one reporter.

    Each reporter gets its own configuration model derived from the run
    configuration. Reporters opened before a failing one are closed again.
    """
    manifests = load_reporter_manifests(reporter_keys(config))

    with ExitStack() as stack:
        reporters = [
            stack.enter_context(
                manifest.reporter_factory(
                    manifest.config_cls.model_validate(config, from_attributes=True)
                )
            )
            for manifest in manifests
        ]
        yield reporters[0] if len(reporters) == 1 else CompositeReporter(reporters)
