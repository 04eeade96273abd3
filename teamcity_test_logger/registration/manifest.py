"""Logger manifest definition for the plugin system."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

from teamcity_test_logger.logger import TeamCityLogger

ConfigT = TypeVar("ConfigT", bound=BaseModel)


@dataclass(frozen=True, kw_only=True)
class LoggerManifest(Generic[ConfigT]):
    """Manifest describing a logger plugin.

    The friendly name and extension URI are what a test host uses to select
    the logger; the factory builds it from validated configuration and an
    output sink.
    """

    friendly_name: str
    extension_uri: str
    config_cls: type[ConfigT]
    logger_factory: Callable[[ConfigT, Callable[[str], None]], TeamCityLogger]

    def matches(self, key: str) -> bool:
        """Check whether key selects this logger."""
        return (
            key.casefold() == self.friendly_name.casefold()
            or key == self.extension_uri
        )
