"""matchy - expectation matchers and a suite DSL for unittest."""

from collections.abc import Callable

from .config import configure, get_config, load_config
from .errors import AssertionFailedError
from .expectations import Expectation, expect
from .matchers import (
    Matcher,
    be,
    be_close,
    be_kind_of,
    build_matcher,
    def_matcher,
    eql,
    equal,
    exist,
    find_matcher,
    match,
    raise_error,
    respond_to,
    satisfy,
)
from .suites import (
    SharedExamples,
    get_suite,
    helper,
    run_suites,
    setup,
    teardown,
    test,
    testing,
)
from .version import __version__


def __getattr__(name: str) -> Callable[..., Matcher]:
    builder = find_matcher(name)
    if builder is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    return builder


__all__ = [
    # Expectations
    "expect",
    "Expectation",
    "AssertionFailedError",
    # Matchers
    "Matcher",
    "build_matcher",
    "def_matcher",
    "be",
    "be_close",
    "be_kind_of",
    "eql",
    "equal",
    "exist",
    "match",
    "raise_error",
    "respond_to",
    "satisfy",
    # Suites
    "testing",
    "test",
    "setup",
    "teardown",
    "helper",
    "SharedExamples",
    "get_suite",
    "run_suites",
    # Configuration
    "configure",
    "get_config",
    "load_config",
    "__version__",
]
