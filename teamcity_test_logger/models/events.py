"""Models for events delivered by a test run."""

from collections.abc import Sequence
from datetime import timedelta
from typing import Literal, TypeAlias

from pydantic import Field

from teamcity_test_logger.models.base import Model
from teamcity_test_logger.models.result import TestRunStatistics

TestOutcome: TypeAlias = Literal["none", "passed", "failed", "skipped", "not_found"]


class TestRunMessage(Model):
    """Diagnostic message emitted by the test platform."""

    __test__ = False

    level: str = Field(
        ..., description="Severity: informational, warning or error"
    )
    text: str = Field(default="", description="Free message text")


class ResultMessage(Model):
    """Output entry captured while a test was running."""

    category: str = Field(..., description="Output channel, e.g. StdOutMsgs")
    text: str = Field(default="", description="Captured text")


class TestCaseResult(Model):
    """Outcome of a single executed test case."""

    __test__ = False

    source: str = Field(..., description="Path of the assembly holding the test")
    fully_qualified_name: str = Field(..., description="Fully qualified test name")
    outcome: TestOutcome = Field(default="none", description="Test outcome")
    error_message: str | None = Field(default=None, description="Failure message")
    error_stack_trace: str | None = Field(
        default=None, description="Failure stack trace"
    )
    messages: Sequence[ResultMessage] = Field(
        default_factory=list, description="Captured output in arrival order"
    )
    duration: timedelta = Field(
        default=timedelta(0), description="Elapsed test time"
    )


class TestRunComplete(Model):
    """Signal that the test run has finished."""

    __test__ = False

    statistics: TestRunStatistics | None = Field(
        default=None, description="Aggregate counts, when the source provides them"
    )
