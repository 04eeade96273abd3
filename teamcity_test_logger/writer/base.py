"""Abstract writer contract for nested progress-report messages."""

from abc import ABC, abstractmethod
from datetime import timedelta
from types import TracebackType
from typing import Self


class Block(ABC):
    """Scope that must be closed before the block that opened it.

    Blocks are context managers so that they are released on every exit path.
    """

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @abstractmethod
    def close(self) -> None:
        """Close the block; calls after the first are ignored."""


class MessageWriter(Block):
    """Writer for free-form build messages and top-level test suites."""

    @abstractmethod
    def write_message(self, text: str) -> None:
        """Write an informational message."""

    @abstractmethod
    def write_warning(self, text: str) -> None:
        """Write a warning message."""

    @abstractmethod
    def write_error(self, text: str, details: str | None = None) -> None:
        """Write an error message with optional details (e.g. a traceback)."""

    @abstractmethod
    def open_test_suite(self, name: str) -> "SuiteWriter":
        """Open a nested test suite block."""


class SuiteWriter(MessageWriter):
    """Writer scoped to an open test suite."""

    @abstractmethod
    def open_test(self, name: str) -> "TestWriter":
        """Open a test block inside this suite."""


class TestWriter(Block):
    """Writer scoped to a single open test."""

    __test__ = False

    @abstractmethod
    def write_ignored(self, reason: str) -> None:
        """Mark the test as ignored."""

    @abstractmethod
    def write_failed(self, reason: str, details: str) -> None:
        """Mark the test as failed."""

    @abstractmethod
    def write_std_output(self, text: str) -> None:
        """Attach standard output text to the test."""

    @abstractmethod
    def write_duration(self, elapsed: timedelta) -> None:
        """Record how long the test took."""
