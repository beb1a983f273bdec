"""Matcher library.

Any ``be_<predicate>`` attribute not explicitly defined here is synthesized on
access, e.g. ``from matchy.matchers import be_empty``.
"""

from collections.abc import Callable

from .base import Matcher, MatcherLike, build_matcher
from .errors import raise_error
from .operators import OperatorMatcher, match
from .registry import (
    clear_matcher_registry,
    def_matcher,
    find_matcher,
    get_matcher_registry,
    matcher,
    matchers,
    resolve_matcher,
)
from .truth import be, be_close, be_kind_of, eql, equal, exist, respond_to, satisfy


def __getattr__(name: str) -> Callable[..., Matcher]:
    builder = find_matcher(name)
    if builder is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    return builder


__all__ = [
    "Matcher",
    "MatcherLike",
    "OperatorMatcher",
    "be",
    "be_close",
    "be_kind_of",
    "build_matcher",
    "clear_matcher_registry",
    "def_matcher",
    "eql",
    "equal",
    "exist",
    "find_matcher",
    "get_matcher_registry",
    "match",
    "matcher",
    "matchers",
    "raise_error",
    "resolve_matcher",
    "respond_to",
    "satisfy",
]
