"""The ``should`` / ``should_not`` entry point."""

from __future__ import annotations

from typing import Generic, TypeVar

from matchy.config import get_config
from matchy.errors import AssertionFailedError
from matchy.matchers.base import MatcherLike
from matchy.matchers.operators import OperatorMatcher


T = TypeVar("T")


class Expectation(Generic[T]):
    """Wraps a value so matchers can be applied to it.

    ``should(matcher)`` raises the configured assertion error when the matcher
    does not match; ``should_not(matcher)`` when it does. Without a matcher
    both return an :class:`OperatorMatcher` for ``==``, ``<``... comparisons.
    """

    def __init__(self, value: T) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"expect({self.value!r})"

    def should(self, matcher: MatcherLike | None = None) -> OperatorMatcher | None:
        if matcher is None:
            return OperatorMatcher(self)
        self.check(matcher)
        return None

    def should_not(self, matcher: MatcherLike | None = None) -> OperatorMatcher | None:
        if matcher is None:
            return OperatorMatcher(self, negated=True)
        self.check(matcher, negated=True)
        return None

    def check(self, matcher: MatcherLike, *, negated: bool = False) -> None:
        """Evaluate ``matcher`` and raise if the result has the wrong polarity."""
        if bool(matcher.matches(self.value)) is negated:
            message = matcher.negative_failure_message if negated else matcher.failure_message
            error = get_config().assertion_failed_error
            if issubclass(error, AssertionFailedError):
                raise error(message, matcher)
            raise error(message)


def expect(value: T) -> Expectation[T]:
    """Enter expectation syntax: ``expect(2 + 2).should(be(4))``."""
    return Expectation(value)


__all__ = ["Expectation", "expect"]
