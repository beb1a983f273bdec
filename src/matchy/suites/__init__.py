"""Suite declaration DSL and runner.

Provides ``testing()`` to declare ``unittest`` suites from a block, and
``run_suites()`` to run them.
"""

from .runner import RunResult, TestOutcome, TestStatus, build_test_suite, run_suites
from .suite import (
    SharedExamples,
    SuiteCapabilities,
    clear_suite_registry,
    current_suite,
    declare,
    get_suite,
    get_suite_registry,
    helper,
    setup,
    teardown,
    test,
    testing,
)


__all__ = [
    "RunResult",
    "SharedExamples",
    "SuiteCapabilities",
    "TestOutcome",
    "TestStatus",
    "build_test_suite",
    "clear_suite_registry",
    "current_suite",
    "declare",
    "get_suite",
    "get_suite_registry",
    "helper",
    "run_suites",
    "setup",
    "teardown",
    "test",
    "testing",
]
