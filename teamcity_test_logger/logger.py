"""Translation of test run events into nested TeamCity blocks."""

import logging
import traceback
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import PureWindowsPath

from teamcity_test_logger.config import LoggerConfig
from teamcity_test_logger.errors import ProtocolIntegrityError
from teamcity_test_logger.hierarchy import HierarchyStateMachine
from teamcity_test_logger.models.events import (
    TestCaseResult,
    TestRunComplete,
    TestRunMessage,
)
from teamcity_test_logger.writer.base import MessageWriter
from teamcity_test_logger.writer.teamcity import TeamCityWriter

log = logging.getLogger(__name__)

ERROR_TEXT = "TeamCity Logger Error"


def assembly_key(source: str) -> str:
    """Return the file name of a test source, ignoring its directory.

    Both POSIX and Windows separators are accepted.
    """
    return PureWindowsPath(source).name


@dataclass(frozen=True, kw_only=True)
class TeamCityLogger:
    """Receives test run events and reports them as TeamCity service messages.

    Each handler runs to completion before the next event is delivered.
    Failures while translating a message or a result are reported in-band and
    do not stop the run; failures while completing the run propagate.
    """

    writer: MessageWriter
    hierarchy: HierarchyStateMachine

    @classmethod
    def from_config(
        cls, config: LoggerConfig, sink: Callable[[str], None]
    ) -> "TeamCityLogger":
        """Create a logger writing service message lines to sink."""
        writer = TeamCityWriter.from_config(config, sink)
        hierarchy = HierarchyStateMachine(
            writer=writer, root_suite_name=config.root_suite_name
        )
        return cls(writer=writer, hierarchy=hierarchy)

    def on_message(self, message: TestRunMessage) -> None:
        """Handle a diagnostic message from the test platform."""
        self.hierarchy.ensure_run_open()
        try:
            write = {
                "informational": self.writer.write_message,
                "warning": self.writer.write_warning,
                "error": self.writer.write_error,
            }.get(message.level)
            if write is None:
                log.debug("Ignoring message with unknown level %r", message.level)
                return
            write(message.text)
        except ProtocolIntegrityError:
            raise
        except Exception as exc:
            self._report_error("message", exc)

    def on_result(self, result: TestCaseResult) -> None:
        """Handle the result of a single test case."""
        self.hierarchy.ensure_run_open()
        try:
            self.hierarchy.enter_assembly(assembly_key(result.source))
            self.hierarchy.record_test(
                result.fully_qualified_name,
                result.outcome,
                result.error_message,
                result.error_stack_trace,
                result.messages,
                result.duration,
            )
        except ProtocolIntegrityError:
            raise
        except Exception as exc:
            self._report_error("result", exc)

    def on_run_complete(self, complete: TestRunComplete) -> None:
        """Close every open block and log the run totals."""
        self.hierarchy.close_all()
        self.writer.close()

        if (statistics := complete.statistics) is not None:
            log.info("Total Executed: %d", statistics.executed)
            log.info("Total Passed: %d", statistics.passed)
            log.info("Total Failed: %d", statistics.failed)
            log.info("Total Skipped: %d", statistics.skipped)

    def _report_error(self, kind: str, exc: Exception) -> None:
        log.error("Failed to translate %s event: %s", kind, exc, exc_info=exc)
        details = "".join(traceback.format_exception(exc))
        self.writer.write_error(ERROR_TEXT, details)
