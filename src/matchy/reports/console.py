"""Rich console reporter."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from matchy.suites.runner import RunResult, TestOutcome, TestStatus


_STYLES = {
    TestStatus.PASSED: ("green", "."),
    TestStatus.FAILED: ("red", "F"),
    TestStatus.ERROR: ("red", "E"),
    TestStatus.SKIPPED: ("yellow", "s"),
    TestStatus.XFAILED: ("yellow", "x"),
    TestStatus.XPASSED: ("red", "X"),
}


class ConsoleReporter:
    """Prints progress, failures and a summary line."""

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        self.console = console or Console()
        self.verbosity = verbosity

    def on_no_tests_found(self) -> None:
        self.console.print("[yellow]No tests found.[/yellow]")

    def on_test_complete(self, outcome: TestOutcome) -> None:
        style, mark = _STYLES[outcome.status]
        if self.verbosity > 0:
            self.console.print(
                f"[{style}]{outcome.status.value.upper():8}[/{style}] "
                f"{escape(outcome.description)}: {escape(outcome.test_id)}"
            )
        elif self.verbosity == 0:
            self.console.print(f"[{style}]{mark}[/{style}]", end="")

    def on_run_complete(self, run_result: RunResult) -> None:
        if self.verbosity == 0:
            self.console.print()

        problems = [
            outcome
            for outcome in run_result.outcomes
            if outcome.status in {TestStatus.FAILED, TestStatus.ERROR, TestStatus.XPASSED}
        ]
        for outcome in problems:
            style, _ = _STYLES[outcome.status]
            self.console.rule(f"[{style}]{escape(outcome.test_id)}[/{style}]")
            if outcome.message:
                self.console.print(escape(outcome.message))

        summary = (
            f"{run_result.passed} passed, {run_result.failed} failed, "
            f"{run_result.errors} errors, {run_result.skipped} skipped "
            f"in {run_result.total} tests"
        )
        color = "green" if run_result.successful else "red"
        self.console.print(f"[bold {color}]{summary}[/bold {color}]")


__all__ = ["ConsoleReporter"]
