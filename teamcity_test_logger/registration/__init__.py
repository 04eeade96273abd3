"""Discovery of loggers registered through entry points."""

from teamcity_test_logger.registration.loading import load_logger_manifest
from teamcity_test_logger.registration.manifest import LoggerManifest
from teamcity_test_logger.registration.teamcity import teamcity_manifest

__all__ = ["LoggerManifest", "load_logger_manifest", "teamcity_manifest"]
