"""Built-in truth matchers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from matchy.matchers.base import Matcher, build_matcher
from matchy.matchers.registry import call_predicate, register_builtin


DEFAULT_DELTA = 0.3


def _strictly_equal(expected: Any, actual: Any) -> bool:
    """Equality that also requires matching types, recursing into containers."""
    if type(expected) is not type(actual):
        return False
    if isinstance(expected, (list, tuple)):
        return len(expected) == len(actual) and all(
            _strictly_equal(e, a) for e, a in zip(expected, actual)
        )
    if isinstance(expected, dict):
        return expected.keys() == actual.keys() and all(
            _strictly_equal(value, actual[key]) for key, value in expected.items()
        )
    return bool(expected == actual)


@register_builtin
def be(expected: Any) -> Matcher:
    """Checks that the receiver equals ``expected``.

    Examples
    --------
        expect("hello").should(be("hello"))
        expect(13 < 20).should(be(True))
    """

    def evaluate(receiver: Any, matcher: Matcher, args: tuple[Any, ...]) -> bool:
        matcher.receiver, matcher.expected = receiver, args[0]
        matcher.positive_msg = f"Expected {receiver!r} to be {args[0]!r}."
        matcher.negative_msg = f"Expected {receiver!r} to not be {args[0]!r}."
        return bool(args[0] == receiver)

    return build_matcher("be", (expected,), evaluate)


@register_builtin
def be_kind_of(klass: type | tuple[type, ...]) -> Matcher:
    """Checks that the receiver is an instance of ``klass`` (or a subclass).

    Examples
    --------
        expect("hello").should(be_kind_of(str))
        expect(3).should(be_kind_of(int))
    """

    def evaluate(receiver: Any, matcher: Matcher, args: tuple[Any, ...]) -> bool:
        matcher.receiver, matcher.expected = receiver, args[0]
        matcher.positive_msg = f"Expected {receiver!r} to be kind of {args[0]!r}."
        matcher.negative_msg = f"Expected {receiver!r} to not be kind of {args[0]!r}."
        return isinstance(receiver, args[0])

    return build_matcher("be_kind_of", (klass,), evaluate)


@register_builtin
def be_close(expected: Any, delta: float = DEFAULT_DELTA) -> Matcher:
    """Checks that the receiver is within ``delta`` of ``expected``.

    Examples
    --------
        expect(20.0 - 2.0).should(be_close(18.0))
        expect(13.0 - 4.0).should(be_close(9.0, 0.5))
    """

    def evaluate(receiver: Any, matcher: Matcher, args: tuple[Any, ...]) -> bool:
        expected, delta = args
        matcher.receiver, matcher.expected = receiver, expected
        matcher.positive_msg = (
            f"Expected {receiver!r} to be close to {expected!r} (delta: {delta})."
        )
        matcher.negative_msg = (
            f"Expected {receiver!r} to not be close to {expected!r} (delta: {delta})."
        )
        return abs(receiver - expected) < delta

    return build_matcher("be_close", (expected, delta), evaluate)


@register_builtin
def exist() -> Matcher:
    """Calls the ``exist`` (or ``exists``) predicate on the receiver.

    Examples
    --------
        expect(Path("setup.cfg")).should_not(exist())
    """

    def evaluate(receiver: Any, matcher: Matcher, args: tuple[Any, ...]) -> Any:
        matcher.receiver = receiver
        matcher.positive_msg = f"Expected {receiver!r} to exist."
        matcher.negative_msg = f"Expected {receiver!r} to not exist."
        return call_predicate(receiver, "exist", "exists")

    return build_matcher("exist", (), evaluate)


@register_builtin
def eql(expected: Any) -> Matcher:
    """Checks that the receiver has the same value and the same type.

    Examples
    --------
        expect(1).should_not(eql(1.0))
        expect(12 // 2).should(eql(6))
    """

    def evaluate(receiver: Any, matcher: Matcher, args: tuple[Any, ...]) -> bool:
        matcher.receiver, matcher.expected = receiver, args[0]
        matcher.positive_msg = f"Expected {receiver!r} to eql {args[0]!r}."
        matcher.negative_msg = f"Expected {receiver!r} to not eql {args[0]!r}."
        return _strictly_equal(args[0], receiver)

    return build_matcher("eql", (expected,), evaluate)


@register_builtin
def equal(expected: Any) -> Matcher:
    """Checks that the receiver is the very same object as ``expected``.

    Examples
    --------
        x = [1, 2, 3]
        y = [1, 2, 3]

        # Equal values, different objects
        expect(x).should_not(equal(y))

        # The same object
        expect(x[0]).should(equal(y[0]))
    """

    def evaluate(receiver: Any, matcher: Matcher, args: tuple[Any, ...]) -> bool:
        matcher.receiver, matcher.expected = receiver, args[0]
        matcher.positive_msg = f"Expected {receiver!r} to equal {args[0]!r}."
        matcher.negative_msg = f"Expected {receiver!r} to not equal {args[0]!r}."
        return args[0] is receiver

    return build_matcher("equal", (expected,), evaluate)


@register_builtin
def satisfy(predicate: Callable[[Any], Any]) -> Matcher:
    """Passes when ``predicate(receiver)`` returns exactly ``True``.

    A last resort; prefer a dedicated matcher when one exists.

    Examples
    --------
        expect(13 - 4).should(satisfy(lambda i: i < 20))
        expect("hello").should_not(satisfy(lambda s: "hi" in s))
    """

    def evaluate(receiver: Any, matcher: Matcher, args: tuple[Any, ...]) -> bool:
        matcher.receiver, matcher.expected = receiver, args[0]
        matcher.positive_msg = f"Expected {receiver!r} to satisfy given block."
        matcher.negative_msg = f"Expected {receiver!r} to not satisfy given block."
        return args[0](receiver) is True

    return build_matcher("satisfy", (predicate,), evaluate)


@register_builtin
def respond_to(name: str) -> Matcher:
    """Checks that the receiver has an attribute called ``name``.

    Examples
    --------
        expect("foo").should(respond_to("upper"))
        expect({}).should(respond_to("keys"))
    """

    def evaluate(receiver: Any, matcher: Matcher, args: tuple[Any, ...]) -> bool:
        matcher.receiver, matcher.expected = receiver, args[0]
        matcher.positive_msg = f"Expected {receiver!r} to respond to {args[0]!r}."
        matcher.negative_msg = f"Expected {receiver!r} to not respond to {args[0]!r}."
        return hasattr(receiver, args[0])

    return build_matcher("respond_to", (name,), evaluate)


__all__ = [
    "DEFAULT_DELTA",
    "be",
    "be_close",
    "be_kind_of",
    "eql",
    "equal",
    "exist",
    "respond_to",
    "satisfy",
]
