"""Models for aggregate test run results."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class TestRunStatistics:
    """Aggregate counts reported when a test run completes.

    Used only for end-of-run diagnostics, never for hierarchy decisions.
    """

    __test__ = False

    executed: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
