"""Matcher registry and predicate synthesis.

Named builders (``be``, ``eql``, ``be_close``...) are explicit registry
entries. A requested name that is not registered but reads ``be_<predicate>``
gets a builder synthesized on the spot, whose matcher queries ``<predicate>``
on the receiver.
"""

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Callable
from typing import Any, TypeVar

from matchy.matchers.base import Evaluator, Matcher, build_matcher


logger = logging.getLogger(__name__)

PREDICATE_PATTERN = re.compile(r"^be_(.+)$")

B = TypeVar("B", bound=Callable[..., Matcher])

_MISSING = object()

_matcher_registry: dict[str, Callable[..., Matcher]] = {}
_builtin_registry: dict[str, Callable[..., Matcher]] = {}


def matcher(
    fn: B | None = None,
    *,
    enabled: bool = True,
    name: str | None = None,
) -> B | Any:
    """Register a matcher builder.

    Can be used as a decorator with or without arguments:

        @matcher
        def be_even(): ...

        @matcher(name="be_odd")
        def odd(): ...

    Args:
        fn: The builder to register.
        enabled: Whether to register this builder (default True).
        name: Custom name for lookup (defaults to the function name).
    """

    def decorator(fn: B) -> B:
        if enabled:
            _matcher_registry[name or fn.__name__] = fn
        return fn

    if fn is not None:
        return decorator(fn)
    return decorator


def register_builtin(fn: B) -> B:
    """Register a built-in matcher builder (persists through clear)."""
    _matcher_registry[fn.__name__] = fn
    _builtin_registry[fn.__name__] = fn
    return fn


def get_matcher_registry() -> dict[str, Callable[..., Matcher]]:
    """Get the global matcher registry."""
    return _matcher_registry


def clear_matcher_registry() -> None:
    """Clear all registered matchers, keeping built-ins."""
    _matcher_registry.clear()
    _matcher_registry.update(_builtin_registry)


def def_matcher(name: str) -> Callable[[Evaluator], Callable[..., Matcher]]:
    """Turn an evaluator into a registered matcher builder.

    The evaluator receives ``(receiver, matcher, args)`` and sets the
    matcher's messages itself:

        @def_matcher("be_even")
        def _(receiver, matcher, args):
            matcher.positive_msg = f"Expected {receiver!r} to be even."
            matcher.negative_msg = f"Expected {receiver!r} to not be even."
            return receiver % 2 == 0

    Registered names take priority over predicate synthesis.
    """

    def decorator(evaluate: Evaluator) -> Callable[..., Matcher]:
        def builder(*args: Any) -> Matcher:
            return build_matcher(name, args, evaluate)

        builder.__name__ = name
        builder.__qualname__ = name
        builder.__doc__ = evaluate.__doc__
        _matcher_registry[name] = builder
        return builder

    return decorator


def _lookup(receiver: Any, name: str) -> Any:
    """Read ``name`` from ``receiver``, or ``_MISSING`` when it is not defined.

    Presence is checked statically, so an AttributeError raised inside a
    property getter propagates. Only receivers with a ``__getattr__`` hook
    are probed dynamically.
    """
    try:
        inspect.getattr_static(receiver, name)
    except AttributeError:
        try:
            inspect.getattr_static(receiver, "__getattr__")
        except AttributeError:
            return _MISSING
        try:
            return getattr(receiver, name)
        except AttributeError:
            return _MISSING
    return getattr(receiver, name)


def call_predicate(receiver: Any, *names: str) -> Any:
    """Query the first predicate of ``names`` the receiver has.

    Each name is tried as is, then with an ``is_`` prefix. Callable attributes
    are called with no arguments; anything else is returned as read.
    """
    candidates: list[str] = []
    for name in names:
        candidates.extend([name, f"is_{name}"])

    for candidate in candidates:
        attr = _lookup(receiver, candidate)
        if attr is _MISSING:
            continue
        return attr() if callable(attr) else attr

    raise AttributeError(
        f"{type(receiver).__name__!r} object has no predicate {names[0]!r} "
        f"(tried {', '.join(candidates)})",
        name=names[0],
        obj=receiver,
    )


def predicate_matcher(name: str, predicate: str, args: tuple[Any, ...] = ()) -> Matcher:
    """Build a matcher that is satisfied when ``predicate`` holds for the receiver."""

    def evaluate(receiver: Any, matcher: Matcher, args: tuple[Any, ...]) -> Any:
        matcher.receiver = receiver
        matcher.positive_msg = f"Expected {receiver!r} to return true for {predicate}?."
        matcher.negative_msg = f"Expected {receiver!r} to return false for {predicate}?."
        return call_predicate(receiver, predicate)

    return build_matcher(name, args, evaluate)


def find_matcher(name: str) -> Callable[..., Matcher] | None:
    """Return the builder for ``name``, synthesizing predicate matchers.

    Returns None when ``name`` is neither registered nor a ``be_<predicate>``.
    """
    if name in _matcher_registry:
        return _matcher_registry[name]

    match = PREDICATE_PATTERN.match(name)
    if match is None:
        return None

    predicate = match.group(1)
    logger.debug("Synthesizing predicate matcher %s for %s", name, predicate)

    def builder(*args: Any) -> Matcher:
        return predicate_matcher(name, predicate, args)

    builder.__name__ = name
    builder.__qualname__ = name
    return builder


def resolve_matcher(name: str) -> Callable[..., Matcher]:
    """Like :func:`find_matcher` but raises AttributeError for unknown names."""
    builder = find_matcher(name)
    if builder is None:
        raise AttributeError(f"no matcher named {name!r}", name=name)
    return builder


class MatcherNamespace:
    """Attribute-style access to every matcher: ``matchers.be_empty()``."""

    def __getattr__(self, name: str) -> Callable[..., Matcher]:
        builder = find_matcher(name)
        if builder is None:
            raise AttributeError(
                f"{type(self).__name__!r} object has no attribute {name!r}",
                name=name,
                obj=self,
            )
        return builder

    def __dir__(self) -> list[str]:
        return sorted(_matcher_registry)


matchers = MatcherNamespace()


__all__ = [
    "PREDICATE_PATTERN",
    "MatcherNamespace",
    "call_predicate",
    "clear_matcher_registry",
    "def_matcher",
    "find_matcher",
    "get_matcher_registry",
    "matcher",
    "matchers",
    "predicate_matcher",
    "register_builtin",
    "resolve_matcher",
]
