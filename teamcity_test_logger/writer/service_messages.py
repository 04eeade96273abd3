"""Encoding of TeamCity service messages."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone

ESCAPES: Mapping[str, str] = {
    "|": "||",
    "'": "|'",
    "\n": "|n",
    "\r": "|r",
    "[": "|[",
    "]": "|]",
    "\u0085": "|x",
    "\u2028": "|l",
    "\u2029": "|p",
}


def escape_value(value: str) -> str:
    """Escape an attribute value for a service message."""
    return "".join(ESCAPES.get(char, char) for char in value)


def format_timestamp(moment: datetime) -> str:
    """Format a timestamp the way TeamCity expects, in UTC."""
    moment = moment.astimezone(timezone.utc)
    millis = moment.microsecond // 1000
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{millis:03d}+0000"


def format_message(name: str, attributes: Mapping[str, str]) -> str:
    """Render a service message line.

    Example:
        >>> format_message("testStarted", {"name": "T1"})
        "##teamcity[testStarted name='T1']"

    """
    parts = [name]
    parts.extend(
        f"{key}='{escape_value(value)}'" for key, value in attributes.items()
    )
    return f"##teamcity[{' '.join(parts)}]"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, kw_only=True)
class ServiceMessageEmitter:
    """Formats service messages and hands each line to the sink."""

    sink: Callable[[str], None] = field(repr=False)
    flow_id: str | None = None
    add_timestamps: bool = False
    clock: Callable[[], datetime] = field(default=_utc_now, repr=False)

    def emit(self, name: str, attributes: Mapping[str, str]) -> None:
        """Emit one service message with the common attributes appended."""
        message_attributes = dict(attributes)
        if self.flow_id is not None:
            message_attributes["flowId"] = self.flow_id
        if self.add_timestamps:
            message_attributes["timestamp"] = format_timestamp(self.clock())
        self.sink(format_message(name, message_attributes))
