"""JSON-lines source of test run events."""

import logging
from collections.abc import Iterable
from typing import Annotated, Literal

from pydantic import Field, TypeAdapter, ValidationError

from teamcity_test_logger.logger import TeamCityLogger
from teamcity_test_logger.models.events import (
    TestCaseResult,
    TestRunComplete,
    TestRunMessage,
)

log = logging.getLogger(__name__)


class MessageEvent(TestRunMessage):
    """Diagnostic message line."""

    event: Literal["message"]


class ResultEvent(TestCaseResult):
    """Test result line."""

    event: Literal["result"]


class CompleteEvent(TestRunComplete):
    """Run completion line."""

    event: Literal["complete"]


StreamEvent = Annotated[
    MessageEvent | ResultEvent | CompleteEvent, Field(discriminator="event")
]

_event_adapter: TypeAdapter[StreamEvent] = TypeAdapter(StreamEvent)


def parse_event(line: str) -> MessageEvent | ResultEvent | CompleteEvent:
    """Parse one JSON line into an event.

    Raises:
        ValidationError: If the line is not valid JSON or not a known event

    """
    return _event_adapter.validate_json(line)


def dispatch_events(lines: Iterable[str], logger: TeamCityLogger) -> bool:
    """Push every event from lines to logger, in order.

    Malformed lines and events after run completion are skipped. When the
    stream ends without a completion event one is synthesised so that the
    open blocks still get closed.

    Returns:
        True if the stream contained a completion event

    """
    completed = False

    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        if completed:
            log.warning("Ignoring event on line %d after run completion", number)
            continue

        try:
            event = parse_event(line)
        except ValidationError as exc:
            log.warning("Skipping malformed event on line %d: %s", number, exc)
            continue

        if isinstance(event, MessageEvent):
            logger.on_message(event)
        elif isinstance(event, ResultEvent):
            logger.on_result(event)
        else:
            logger.on_run_complete(event)
            completed = True

    if not completed:
        log.warning("Event stream ended without run completion, closing open blocks")
        logger.on_run_complete(TestRunComplete())

    return completed
