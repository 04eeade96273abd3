"""Nested progress-report writers."""

from teamcity_test_logger.writer.base import (
    Block,
    MessageWriter,
    SuiteWriter,
    TestWriter,
)
from teamcity_test_logger.writer.teamcity import TeamCityWriter

__all__ = ["Block", "MessageWriter", "SuiteWriter", "TeamCityWriter", "TestWriter"]
