"""TeamCity logger manifest."""

from teamcity_test_logger.config import LoggerConfig
from teamcity_test_logger.logger import TeamCityLogger
from teamcity_test_logger.registration.manifest import LoggerManifest

teamcity_manifest = LoggerManifest(
    friendly_name="TeamCity",
    extension_uri="logger://TeamCityLogger",
    config_cls=LoggerConfig,
    logger_factory=TeamCityLogger.from_config,
)
