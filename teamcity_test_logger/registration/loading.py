"""Loading of loggers from entry points."""

from importlib.metadata import entry_points
from typing import Any

from teamcity_test_logger.errors import LoggerNotFoundError
from teamcity_test_logger.registration.manifest import LoggerManifest

ENTRY_POINT_GROUP = "teamcity_test_logger.loggers"


def load_logger_manifest(key: str) -> LoggerManifest[Any]:
    """Load a logger manifest by entry point name, friendly name or URI.

    Args:
        key: The entry point name as registered in pyproject.toml
             (e.g., "teamcity"), the friendly name (e.g., "TeamCity") or
             the extension URI (e.g., "logger://TeamCityLogger")

    Returns:
        The logger manifest instance

    Raises:
        LoggerNotFoundError: If no logger matches the given key

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            manifest: LoggerManifest[Any] = entry.load()
            return manifest

    for entry in entries:
        manifest = entry.load()
        if manifest.matches(key):
            return manifest

    available = [e.name for e in entries]
    raise LoggerNotFoundError(
        f"Logger '{key}' not found. Available loggers: {available}"
    )
