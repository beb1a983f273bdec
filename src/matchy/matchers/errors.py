"""Error expectations: does calling the receiver raise?"""

from __future__ import annotations

import re
from typing import Any

from matchy.matchers.base import Matcher, build_matcher
from matchy.matchers.registry import register_builtin


ErrorSpec = type[BaseException] | str | re.Pattern[str] | None


def _describe(expected: ErrorSpec) -> str:
    if expected is None:
        return "an exception"
    if isinstance(expected, type):
        return expected.__name__
    if isinstance(expected, re.Pattern):
        return f"an error with message matching /{expected.pattern}/"
    return f"an error with message {expected!r}"


def _describe_raised(expected: ErrorSpec, exc: BaseException) -> str:
    if isinstance(expected, (str, re.Pattern)):
        return f"{type(exc).__name__}({str(exc)!r})"
    return type(exc).__name__


def _error_matches(expected: ErrorSpec, exc: BaseException) -> bool:
    if expected is None:
        return isinstance(exc, Exception)
    if isinstance(expected, type):
        return isinstance(exc, expected)
    if isinstance(expected, re.Pattern):
        return expected.search(str(exc)) is not None
    return str(exc) == expected


@register_builtin
def raise_error(expected: ErrorSpec = None) -> Matcher:
    """Calls the receiver and checks what it raises.

    ``expected`` is an exception class, an exact message, a compiled regular
    expression searched in the message, or None for any ``Exception``.
    Exceptions outside ``Exception`` (KeyboardInterrupt, SystemExit...)
    propagate unless they are what ``expected`` names. A receiver that is not
    callable raises TypeError instead of counting as a raised error.

    Examples
    --------
        expect(lambda: int("x")).should(raise_error(ValueError))
        expect(lambda: 1 / 0).should(raise_error(re.compile("division")))
        expect(lambda: "fine").should_not(raise_error())
    """

    def evaluate(receiver: Any, matcher: Matcher, args: tuple[Any, ...]) -> bool:
        expected = args[0]
        description = _describe(expected)
        matcher.receiver, matcher.expected = receiver, expected
        if not callable(receiver):
            raise TypeError(
                f"raise_error expects a zero-argument callable, got {type(receiver).__name__}"
            )
        matcher.negative_msg = f"Expected {receiver!r} to not raise {description}."
        try:
            receiver()
        except BaseException as exc:
            if not isinstance(exc, Exception) and not _error_matches(expected, exc):
                raise
            if _error_matches(expected, exc):
                matcher.positive_msg = f"Expected {receiver!r} to raise {description}."
                return True
            matcher.positive_msg = (
                f"Expected {receiver!r} to raise {description}, "
                f"but {_describe_raised(expected, exc)} was raised instead."
            )
            return False

        matcher.positive_msg = f"Expected {receiver!r} to raise {description}, but none was raised."
        return False

    return build_matcher("raise_error", (expected,), evaluate)


__all__ = ["raise_error"]
