"""Run declared suites with the standard ``unittest`` machinery."""

from __future__ import annotations

import time
import unittest
from collections.abc import Callable, Iterable
from enum import Enum
from types import TracebackType
from typing import Any

from pydantic import BaseModel, Field

from matchy.suites.suite import get_suite, get_suite_registry


ExcInfo = tuple[type[BaseException], BaseException, TracebackType | None]


class TestStatus(Enum):
    """Outcome of a single test."""

    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"
    SKIPPED = "skipped"
    XFAILED = "xfailed"
    XPASSED = "xpassed"


class TestOutcome(BaseModel):
    """Result of one test method.

    Attributes:
    ----------
    test_id : str
        ``unittest`` id of the test (``module.Suite.test_method``).
    suite : str
        Name of the suite class.
    description : str
        Human description of the suite.
    status : TestStatus
        How the test ended.
    message : str | None
        Failure message, error text or skip reason.
    duration_ms : float
        Wall time spent in the test.
    """

    __test__ = False

    test_id: str
    suite: str
    description: str = ""
    status: TestStatus
    message: str | None = None
    duration_ms: float = 0.0


class RunResult(BaseModel):
    """Aggregate of every outcome in a run."""

    outcomes: list[TestOutcome] = Field(default_factory=list)

    def _count(self, status: TestStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def passed(self) -> int:
        return self._count(TestStatus.PASSED)

    @property
    def failed(self) -> int:
        return self._count(TestStatus.FAILED) + self._count(TestStatus.XPASSED)

    @property
    def errors(self) -> int:
        return self._count(TestStatus.ERROR)

    @property
    def skipped(self) -> int:
        return self._count(TestStatus.SKIPPED)

    @property
    def successful(self) -> bool:
        return self.failed == 0 and self.errors == 0


class OutcomeCollector(unittest.TestResult):
    """``unittest`` result that records :class:`TestOutcome` objects."""

    def __init__(self, on_outcome: Callable[[TestOutcome], Any] | None = None) -> None:
        super().__init__()
        self.outcomes: list[TestOutcome] = []
        self._on_outcome = on_outcome
        self._started = time.perf_counter()

    def startTest(self, test: unittest.TestCase) -> None:
        super().startTest(test)
        self._started = time.perf_counter()

    def addSuccess(self, test: unittest.TestCase) -> None:
        super().addSuccess(test)
        self._record(test, TestStatus.PASSED)

    def addFailure(self, test: unittest.TestCase, err: ExcInfo) -> None:  # type: ignore[override]
        super().addFailure(test, err)
        self._record(test, TestStatus.FAILED, str(err[1]))

    def addError(self, test: unittest.TestCase, err: ExcInfo) -> None:  # type: ignore[override]
        super().addError(test, err)
        self._record(test, TestStatus.ERROR, f"{err[0].__name__}: {err[1]}")

    def addSkip(self, test: unittest.TestCase, reason: str) -> None:
        super().addSkip(test, reason)
        self._record(test, TestStatus.SKIPPED, reason)

    def addExpectedFailure(self, test: unittest.TestCase, err: ExcInfo) -> None:  # type: ignore[override]
        super().addExpectedFailure(test, err)
        self._record(test, TestStatus.XFAILED, str(err[1]))

    def addUnexpectedSuccess(self, test: unittest.TestCase) -> None:
        super().addUnexpectedSuccess(test)
        self._record(test, TestStatus.XPASSED, "expected failure passed")

    def _record(self, test: unittest.TestCase, status: TestStatus, message: str | None = None) -> None:
        suite = type(test)
        outcome = TestOutcome(
            test_id=test.id(),
            suite=suite.__name__,
            description=getattr(suite, "description", "") or "",
            status=status,
            message=message,
            duration_ms=(time.perf_counter() - self._started) * 1000,
        )
        self.outcomes.append(outcome)
        if self._on_outcome is not None:
            self._on_outcome(outcome)


def build_test_suite(suites: Iterable[Any], keyword: str | None = None) -> unittest.TestSuite:
    """Collect the runnable tests of ``suites``, optionally filtered by keyword.

    The keyword is matched case-insensitively against ``Suite.test_method``
    and the suite description. ``suites`` may hold suite classes or bodies
    declared with the ``@testing`` decorator.
    """
    loader = unittest.TestLoader()
    test_suite = unittest.TestSuite()
    for target in suites:
        cls = get_suite(target)
        for method_name in loader.getTestCaseNames(cls):
            haystack = f"{cls.__name__}.{method_name} {getattr(cls, 'description', '')}"
            if keyword and keyword.lower() not in haystack.lower():
                continue
            test_suite.addTest(cls(method_name))
    return test_suite


def run_suites(
    suites: Iterable[Any] | None = None,
    *,
    keyword: str | None = None,
    on_outcome: Callable[[TestOutcome], Any] | None = None,
) -> RunResult:
    """Run ``suites`` (default: every registered suite) and summarize."""
    if suites is None:
        suites = list(get_suite_registry().values())
    collector = OutcomeCollector(on_outcome=on_outcome)
    build_test_suite(suites, keyword=keyword).run(collector)
    return RunResult(outcomes=collector.outcomes)


__all__ = [
    "OutcomeCollector",
    "RunResult",
    "TestOutcome",
    "TestStatus",
    "build_test_suite",
    "run_suites",
]
