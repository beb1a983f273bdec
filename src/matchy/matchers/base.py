"""Matcher objects and the factory that builds them."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol


Evaluator = Callable[[Any, "Matcher", tuple[Any, ...]], Any]


class MatcherLike(Protocol):
    """Anything `should` / `should_not` can evaluate."""

    def matches(self, receiver: Any) -> Any: ...

    @property
    def failure_message(self) -> str | None: ...

    @property
    def negative_failure_message(self) -> str | None: ...


@dataclass(eq=False)
class Matcher:
    """A single comparison plus the messages describing its failure.

    Attributes
    ----------
    name
        Identifier of the matcher kind (``"be"``, ``"be_close"``, ``"be_empty"``...).
    args
        Arguments given to the builder call, in order.
    evaluate
        Callable of ``(receiver, matcher, args)``. It returns the match result
        and sets ``positive_msg`` / ``negative_msg`` on the matcher as it runs.
    positive_msg, negative_msg
        Failure messages; only meaningful once :meth:`matches` has run.
    receiver, expected
        Values captured by ``evaluate`` for message rendering.
    """

    name: str
    args: tuple[Any, ...] = ()
    evaluate: Evaluator | None = field(default=None, repr=False)
    positive_msg: str | None = None
    negative_msg: str | None = None
    receiver: Any = field(default=None, repr=False)
    expected: Any = field(default=None, repr=False)
    result: Any = None

    def matches(self, receiver: Any) -> Any:
        """Evaluate against ``receiver`` and return the result."""
        if self.evaluate is None:
            raise TypeError(f"Matcher {self.name!r} has no evaluator")
        self.result = self.evaluate(receiver, self, self.args)
        return self.result

    @property
    def failure_message(self) -> str | None:
        return self.positive_msg

    @property
    def negative_failure_message(self) -> str | None:
        return self.negative_msg


def build_matcher(
    name: str,
    args: Sequence[Any] = (),
    evaluate: Evaluator | None = None,
) -> Matcher:
    """Build a :class:`Matcher` named ``name`` over ``args``.

    ``evaluate`` receives ``(receiver, matcher, args)``; any exception it
    raises propagates out of :meth:`Matcher.matches`.
    """
    return Matcher(name=str(name), args=tuple(args), evaluate=evaluate)


__all__ = ["Evaluator", "Matcher", "MatcherLike", "build_matcher"]
