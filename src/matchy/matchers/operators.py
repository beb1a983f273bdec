"""Operator expectations: ``expect(x).should() == y``."""

from __future__ import annotations

import operator
import re
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from matchy.matchers.base import Matcher, build_matcher
from matchy.matchers.registry import register_builtin

if TYPE_CHECKING:
    from matchy.expectations import Expectation


OPERATORS: dict[str, Callable[[Any, Any], Any]] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


def operator_matcher(op: str, expected: Any) -> Matcher:
    """Build a matcher comparing the receiver to ``expected`` with ``op``."""
    compare = OPERATORS[op]

    def evaluate(receiver: Any, matcher: Matcher, args: tuple[Any, ...]) -> bool:
        matcher.receiver, matcher.expected = receiver, args[0]
        matcher.positive_msg = f"Expected {receiver!r} to {op} {args[0]!r}."
        matcher.negative_msg = f"Expected {receiver!r} to not {op} {args[0]!r}."
        return bool(compare(receiver, args[0]))

    return build_matcher(op, (expected,), evaluate)


@register_builtin
def match(pattern: str | re.Pattern[str]) -> Matcher:
    """Checks that ``pattern`` is found somewhere in the receiver.

    Examples
    --------
        expect("hello world").should(match(r"o w"))
    """

    def evaluate(receiver: Any, matcher: Matcher, args: tuple[Any, ...]) -> bool:
        pattern = re.compile(args[0]) if isinstance(args[0], str) else args[0]
        matcher.receiver, matcher.expected = receiver, pattern
        matcher.positive_msg = f"Expected {receiver!r} to match /{pattern.pattern}/."
        matcher.negative_msg = f"Expected {receiver!r} to not match /{pattern.pattern}/."
        return pattern.search(receiver) is not None

    return build_matcher("match", (pattern,), evaluate)


class OperatorMatcher:
    """Returned by ``should()`` / ``should_not()`` when no matcher is given.

    Each comparison evaluates immediately and raises on failure.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, expectation: Expectation, *, negated: bool = False) -> None:
        self._expectation = expectation
        self._negated = negated

    def _check(self, matcher: Matcher) -> bool:
        self._expectation.check(matcher, negated=self._negated)
        return True

    def __eq__(self, other: Any) -> bool:  # type: ignore[override]
        return self._check(operator_matcher("==", other))

    def __ne__(self, other: Any) -> bool:  # type: ignore[override]
        return self._check(operator_matcher("!=", other))

    def __lt__(self, other: Any) -> bool:
        return self._check(operator_matcher("<", other))

    def __le__(self, other: Any) -> bool:
        return self._check(operator_matcher("<=", other))

    def __gt__(self, other: Any) -> bool:
        return self._check(operator_matcher(">", other))

    def __ge__(self, other: Any) -> bool:
        return self._check(operator_matcher(">=", other))

    def match(self, pattern: str | re.Pattern[str]) -> bool:
        return self._check(match(pattern))


__all__ = ["OPERATORS", "OperatorMatcher", "match", "operator_matcher"]
