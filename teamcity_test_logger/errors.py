"""Exceptions raised by the TeamCity test logger."""


class TeamCityLoggerError(Exception):
    """Base class for all logger errors."""


class ProtocolIntegrityError(TeamCityLoggerError):
    """Raised when a block would be opened or closed out of nesting order.

    Reaching this means the service-message tree is already broken; it is
    never caught inside the package.
    """


class LoggerNotFoundError(TeamCityLoggerError):
    """Raised when a logger is not found."""
