"""Writer emitting TeamCity service messages."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta

from teamcity_test_logger.config import LoggerConfig
from teamcity_test_logger.errors import ProtocolIntegrityError
from teamcity_test_logger.writer.base import (
    Block,
    MessageWriter,
    SuiteWriter,
    TestWriter,
)
from teamcity_test_logger.writer.service_messages import ServiceMessageEmitter

MESSAGE_STATUS = {
    "message": "NORMAL",
    "warning": "WARNING",
    "error": "ERROR",
}


@dataclass(kw_only=True, eq=False)
class _TeamCityBlock(Block):
    """Tracks nesting so that blocks only ever close in LIFO order."""

    emitter: ServiceMessageEmitter
    parent: "_TeamCityBlock | None" = field(default=None, repr=False)
    closed: bool = field(default=False, init=False)
    _child: "_TeamCityBlock | None" = field(default=None, init=False, repr=False)

    def _ensure_writable(self) -> None:
        if self.closed:
            raise ProtocolIntegrityError(f"Cannot write to closed block {self!r}")

    def _adopt(
        self, child: "_TeamCityBlock", message: str, attributes: dict[str, str]
    ) -> None:
        """Emit the start message, then register child as the open block."""
        self._ensure_writable()
        if self._child is not None:
            raise ProtocolIntegrityError(
                f"Cannot open {child!r} while {self._child!r} is still open"
            )
        self.emitter.emit(message, attributes)
        self._child = child

    def close(self) -> None:
        """Close the block once all of its children have been closed."""
        if self.closed:
            return
        if self._child is not None:
            raise ProtocolIntegrityError(
                f"Cannot close {self!r} while {self._child!r} is still open"
            )
        try:
            self._finish()
        finally:
            self.closed = True
            if self.parent is not None:
                self.parent._child = None

    def _finish(self) -> None:
        """Emit whatever marks the end of the block."""


class _MessagesMixin(_TeamCityBlock):
    def _write(self, kind: str, text: str, details: str | None = None) -> None:
        self._ensure_writable()
        attributes = {"text": text, "status": MESSAGE_STATUS[kind]}
        if details is not None:
            attributes["errorDetails"] = details
        self.emitter.emit("message", attributes)

    def write_message(self, text: str) -> None:
        """Write an informational message."""
        self._write("message", text)

    def write_warning(self, text: str) -> None:
        """Write a warning message."""
        self._write("warning", text)

    def write_error(self, text: str, details: str | None = None) -> None:
        """Write an error message."""
        self._write("error", text, details)

    def open_test_suite(self, name: str) -> "TeamCitySuiteWriter":
        """Open a nested test suite and emit testSuiteStarted."""
        if not name:
            raise ValueError("Test suite name must not be empty")
        suite = TeamCitySuiteWriter(emitter=self.emitter, parent=self, name=name)
        self._adopt(suite, "testSuiteStarted", {"name": name})
        return suite


@dataclass(kw_only=True, eq=False)
class TeamCityWriter(_MessagesMixin, MessageWriter):
    """Root writer; closing it emits nothing but checks all suites are closed."""

    @classmethod
    def from_config(
        cls, config: LoggerConfig, sink: Callable[[str], None]
    ) -> "TeamCityWriter":
        """Create a root writer sending lines to sink."""
        emitter = ServiceMessageEmitter(
            sink=sink,
            flow_id=config.flow_id,
            add_timestamps=config.add_timestamps,
        )
        return cls(emitter=emitter)


@dataclass(kw_only=True, eq=False)
class TeamCitySuiteWriter(_MessagesMixin, SuiteWriter):
    """Writer for an open testSuiteStarted block."""

    name: str

    def open_test(self, name: str) -> "TeamCityTestWriter":
        """Open a test and emit testStarted."""
        if not name:
            raise ValueError("Test name must not be empty")
        test = TeamCityTestWriter(emitter=self.emitter, parent=self, name=name)
        self._adopt(
            test, "testStarted", {"name": name, "captureStandardOutput": "false"}
        )
        return test

    def _finish(self) -> None:
        self.emitter.emit("testSuiteFinished", {"name": self.name})


@dataclass(kw_only=True, eq=False)
class TeamCityTestWriter(_TeamCityBlock, TestWriter):
    """Writer for an open testStarted block."""

    name: str
    duration: timedelta | None = field(default=None, init=False)

    def write_ignored(self, reason: str) -> None:
        """Emit testIgnored."""
        self._ensure_writable()
        self.emitter.emit("testIgnored", {"name": self.name, "message": reason})

    def write_failed(self, reason: str, details: str) -> None:
        """Emit testFailed."""
        self._ensure_writable()
        self.emitter.emit(
            "testFailed",
            {"name": self.name, "message": reason, "details": details},
        )

    def write_std_output(self, text: str) -> None:
        """Emit testStdOut."""
        self._ensure_writable()
        self.emitter.emit("testStdOut", {"name": self.name, "out": text})

    def write_duration(self, elapsed: timedelta) -> None:
        """Remember the duration; it is reported on testFinished."""
        self._ensure_writable()
        self.duration = elapsed

    def _finish(self) -> None:
        attributes = {"name": self.name}
        if self.duration is not None:
            millis = max(self.duration // timedelta(milliseconds=1), 0)
            attributes["duration"] = str(millis)
        self.emitter.emit("testFinished", attributes)
