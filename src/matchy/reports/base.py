"""Base reporter protocol for matchy run output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from matchy.suites.runner import RunResult, TestOutcome


class Reporter(Protocol):
    """Protocol defining the interface for run reporters."""

    def on_no_tests_found(self) -> None:
        """Called when no suite declared any runnable test."""
        ...

    def on_test_complete(self, outcome: TestOutcome) -> None:
        """Called after each test completes."""
        ...

    def on_run_complete(self, run_result: RunResult) -> None:
        """Called after all tests complete."""
        ...
