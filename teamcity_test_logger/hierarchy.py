"""State machine keeping run, assembly and test blocks strictly nested."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Literal, TypeAlias

from teamcity_test_logger.errors import ProtocolIntegrityError
from teamcity_test_logger.models.events import ResultMessage, TestOutcome
from teamcity_test_logger.writer.base import MessageWriter, SuiteWriter

log = logging.getLogger(__name__)

STDOUT_CATEGORY = "StdOutMsgs"

HierarchyState: TypeAlias = Literal["unopened", "run-open", "assembly-open", "run-closed"]


@dataclass(kw_only=True)
class HierarchyStateMachine:
    """Owns the open run and assembly blocks of a single test run.

    The run block is opened lazily by the first event that needs it and
    closed exactly once. At most one assembly block is open at a time;
    switching assemblies closes the previous one first. Test blocks never
    outlive the call that records them.
    """

    writer: MessageWriter
    root_suite_name: str = "VSTest"
    state: HierarchyState = field(default="unopened", init=False)
    assembly_key: str | None = field(default=None, init=False)
    _run: SuiteWriter | None = field(default=None, init=False, repr=False)
    _assembly: SuiteWriter | None = field(default=None, init=False, repr=False)

    def ensure_run_open(self) -> None:
        """Open the run block unless it is already open."""
        if self.state == "unopened":
            self._run = self.writer.open_test_suite(self.root_suite_name)
            self.state = "run-open"
            log.debug("Opened run suite %s", self.root_suite_name)
        elif self.state == "run-closed":
            raise ProtocolIntegrityError("Run suite was already closed")

    def enter_assembly(self, key: str) -> None:
        """Make key the open assembly, closing a different one first."""
        if self.state == "assembly-open" and self.assembly_key == key:
            return
        run = self._require_run()
        self._close_assembly()

        self._assembly = run.open_test_suite(key)
        self.assembly_key = key
        self.state = "assembly-open"
        log.debug("Opened assembly suite %s", key)

    def record_test(
        self,
        name: str,
        outcome: TestOutcome,
        error_message: str | None,
        stack_trace: str | None,
        messages: Sequence[ResultMessage],
        duration: timedelta,
    ) -> None:
        """Write one complete test block inside the open assembly."""
        if self.state != "assembly-open" or self._assembly is None:
            raise ProtocolIntegrityError(
                f"Cannot record test {name!r} without an open assembly"
            )

        with self._assembly.open_test(name) as test:
            if outcome == "skipped":
                test.write_ignored(error_message or "")
            elif outcome == "failed":
                test.write_failed(error_message or "", stack_trace or "")

            for message in messages:
                if message.category.casefold() != STDOUT_CATEGORY.casefold():
                    continue
                test.write_std_output(message.text)

            test.write_duration(duration)

    def close_all(self) -> None:
        """Close the open assembly and then the run, if they were opened."""
        if self.state in {"unopened", "run-closed"}:
            return

        self._close_assembly()
        run = self._require_run()
        self._run = None
        self.state = "run-closed"
        run.close()
        log.debug("Closed run suite %s", self.root_suite_name)

    def _close_assembly(self) -> None:
        if self._assembly is None:
            return
        assembly, key = self._assembly, self.assembly_key
        self._assembly = None
        self.assembly_key = None
        self.state = "run-open"
        assembly.close()
        log.debug("Closed assembly suite %s", key)

    def _require_run(self) -> SuiteWriter:
        if self.state not in {"run-open", "assembly-open"} or self._run is None:
            raise ProtocolIntegrityError(f"Run suite is not open (state={self.state})")
        return self._run
