"""Suite declaration: the ``testing()`` DSL.

Each ``testing()`` call builds a new test-case class:

    @testing("Adder")
    def adder_suite():
        @test("adds small numbers")
        def _(self):
            expect(2 + 2).should(be(4))

The class is bound as ``AdderTest`` in the declaring module, so ``unittest``
and ``pytest`` discovery pick it up. Every suite only runs the tests declared
in its own body: tests it would inherit from its base or from sibling suites
are hidden once the body has run.
"""

from __future__ import annotations

import inspect
import logging
import re
import sys
import types
import unittest
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, TypeVar

from matchy.config import get_config
from matchy.errors import SuiteBodyError, SuiteDefinitionError, SuiteNameError


logger = logging.getLogger(__name__)

TEST_PREFIX = unittest.TestLoader.testMethodPrefix
SUITE_SUFFIX = "Test"
SUITE_OPTIONS = frozenset({"type", "testcase"})

F = TypeVar("F", bound=Callable[..., Any])
B = TypeVar("B", bound=Callable[[], Any])

_NON_WORD = re.compile(r"[\W_]+")


class SuiteCapabilities:
    """Own/all test tracking, mixed into every suite base.

    ``own_tests()`` are the method names registered by the suite's own body;
    ``all_tests()`` are the ones the ``unittest`` loader would collect on it,
    inherited ones included.
    """

    description: str = ""
    _own_tests: dict[str, str] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._own_tests = {}
        if "description" not in cls.__dict__:
            cls.description = cls.__name__

    @classmethod
    def register_test(cls, name: str, fn: Callable[..., Any]) -> Callable[..., Any]:
        """Add ``fn`` as the test called ``name``."""
        method_name = test_method_name(name)
        if method_name in cls._own_tests.values():
            raise SuiteDefinitionError(f"{cls.__name__} already defines a test named {name!r}")
        setattr(cls, method_name, fn)
        cls._own_tests[str(name)] = method_name
        return fn

    @classmethod
    def own_tests(cls) -> set[str]:
        return set(cls.__dict__.get("_own_tests", {}).values())

    @classmethod
    def all_tests(cls) -> set[str]:
        return {
            name
            for name in dir(cls)
            if name.startswith(TEST_PREFIX) and callable(getattr(cls, name))
        }

    @classmethod
    def suite_types(cls) -> list[type[SuiteCapabilities]]:
        """This class and every suite class below it."""
        found: list[type[SuiteCapabilities]] = []
        seen: set[int] = set()
        pending: list[type] = [cls]
        while pending:
            klass = pending.pop()
            if id(klass) in seen:
                continue
            seen.add(id(klass))
            if issubclass(klass, SuiteCapabilities):
                found.append(klass)
            pending.extend(klass.__subclasses__())
        return found


class SharedExamples:
    """Examples and helpers shared by several suites.

        class Collections(SharedExamples):
            def make(self):
                return []

        @Collections.example("starts empty")
        def _(self):
            expect(self.make()).should(be_empty())

        @Collections.declare("List")
        def list_suite():
            @test("appends")
            def _(self):
                ...

    A suite declared through ``declare`` inherits the shared class (so its
    helpers resolve on ``self``) and owns its examples as its own tests.
    """

    _examples: dict[str, Callable[..., Any]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._examples = {}

    @classmethod
    def example(cls, name: str) -> Callable[[F], F]:
        def decorator(fn: F) -> F:
            cls._examples[str(name)] = fn
            return fn

        return decorator

    @classmethod
    def examples(cls) -> dict[str, Callable[..., Any]]:
        merged: dict[str, Callable[..., Any]] = {}
        for klass in reversed(cls.__mro__):
            merged.update(klass.__dict__.get("_examples", {}))
        return merged

    @classmethod
    def declare(
        cls,
        identifier: Any,
        description: str | None = None,
        body: Callable[[], Any] | None = None,
        **options: Any,
    ) -> Any:
        """Like :func:`testing`, with this class mixed into the suite."""
        _check_description(description)
        if body is not None:
            return declare(identifier, description, body, shared=cls, **options)

        def decorator(body: B) -> B:
            body.__matchy_suite__ = declare(  # type: ignore[attr-defined]
                identifier, description, body, shared=cls, **options
            )
            return body

        return decorator


CURRENT_SUITE: ContextVar[type[SuiteCapabilities] | None] = ContextVar(
    "current_suite", default=None
)

_suite_registry: dict[str, type[SuiteCapabilities]] = {}
_adapted_bases: dict[type, type[SuiteCapabilities]] = {}


@contextmanager
def suite_scope(cls: type[SuiteCapabilities]) -> Iterator[None]:
    token = CURRENT_SUITE.set(cls)
    try:
        yield
    finally:
        CURRENT_SUITE.reset(token)


def current_suite() -> type[SuiteCapabilities]:
    """The suite whose body is being evaluated."""
    cls = CURRENT_SUITE.get()
    if cls is None:
        raise SuiteDefinitionError("No suite is being declared; use this inside a testing() body")
    return cls


def get_suite(target: Any) -> type[SuiteCapabilities]:
    """Return the suite class for ``target``: a suite class or a decorated body."""
    if isinstance(target, type) and issubclass(target, SuiteCapabilities):
        return target
    suite = getattr(target, "__matchy_suite__", None)
    if suite is None:
        raise SuiteDefinitionError(f"{target!r} is neither a suite nor a suite body")
    return suite


def get_suite_registry() -> dict[str, type[SuiteCapabilities]]:
    """Get the registry of declared suites, keyed by class name."""
    return _suite_registry


def clear_suite_registry() -> None:
    _suite_registry.clear()


def _identifier_text(identifier: Any) -> str:
    if isinstance(identifier, type):
        return identifier.__name__
    return str(identifier)


def constantize(identifier: Any) -> str:
    """Turn ``"a thing"`` / ``"a_thing"`` / ``AThing`` into ``"AThing"``."""
    words = [word for word in _NON_WORD.split(_identifier_text(identifier)) if word]
    if not words:
        raise SuiteNameError(identifier, "it contains no letters or digits")
    name = "".join(word[0].upper() + word[1:] for word in words)
    if not name.isidentifier():
        raise SuiteNameError(identifier, f"{name!r} is not a valid class name")
    return name


def suite_class_name(identifier: Any) -> str:
    return constantize(identifier) + SUITE_SUFFIX


def test_method_name(name: str) -> str:
    """``"adds two numbers"`` -> ``"test_adds_two_numbers"``."""
    slug = _NON_WORD.sub("_", str(name)).strip("_")
    if not slug:
        raise SuiteDefinitionError(f"Cannot derive a test method name from {name!r}")
    return f"{TEST_PREFIX}_{slug}"


def ensure_suite_capabilities(base: type) -> type[SuiteCapabilities]:
    """Return ``base`` with own/all test tracking, adapting it at most once."""
    if not isinstance(base, type):
        raise TypeError(f"Suite base must be a class, got {base!r}")
    if issubclass(base, SuiteCapabilities):
        return base
    adapted = _adapted_bases.get(base)
    if adapted is None:
        adapted = types.new_class(
            base.__name__,
            (SuiteCapabilities, base),
            exec_body=lambda ns: ns.update(__module__=base.__module__),
        )
        _adapted_bases[base] = adapted
    return adapted


def _check_description(description: Any) -> None:
    if callable(description):
        raise SuiteBodyError(
            f"Suite description must not be callable, got {description!r}; "
            "pass the body as the third argument or use the decorator form"
        )


def _check_body(body: Any) -> Callable[[], Any]:
    if not callable(body):
        raise SuiteBodyError(f"Suite body must be callable, got {type(body).__name__}")
    try:
        signature = inspect.signature(body)
    except (TypeError, ValueError):
        return body
    required = [
        param.name
        for param in signature.parameters.values()
        if param.default is param.empty
        and param.kind not in (param.VAR_POSITIONAL, param.VAR_KEYWORD)
    ]
    if required:
        raise SuiteBodyError(
            f"Suite body must take no arguments, but {body!r} requires {', '.join(required)}"
        )
    return body


def register_suite(cls: type[SuiteCapabilities], module_name: str) -> None:
    """Record ``cls`` in the registry and bind it on its declaring module."""
    previous = _suite_registry.get(cls.__name__)
    if previous is not None and previous is not cls:
        logger.debug("Redeclaring suite %s", cls.__name__)
    _suite_registry[cls.__name__] = cls
    module = sys.modules.get(module_name)
    if module is not None:
        setattr(module, cls.__name__, cls)


def include_examples(cls: type[SuiteCapabilities], shared: type[SharedExamples]) -> None:
    for name, fn in shared.examples().items():
        cls.register_test(name, fn)


def prune_inherited_tests(base: type[SuiteCapabilities]) -> None:
    """Hide, on every suite under ``base``, the tests that suite does not own.

    The result only depends on which tests each suite owns, not on the order
    the suites were declared in.
    """
    for suite in base.suite_types():
        for name in sorted(suite.all_tests() - suite.own_tests()):
            setattr(suite, name, None)
            logger.debug("Pruned inherited test %s from %s", name, suite.__name__)


def declare(
    identifier: Any,
    description: str | None = None,
    body: Callable[[], Any] | None = None,
    *,
    shared: type[SharedExamples] | None = None,
    **options: Any,
) -> type[SuiteCapabilities]:
    """Build, register and populate the suite for ``identifier``.

    Args:
        identifier: Suite name; ``"Adder"`` produces the class ``AdderTest``.
        description: Human description (defaults to the identifier).
        body: Zero-argument callable declaring the suite's tests.
        shared: SharedExamples class to mix into the suite.
        **options: ``type`` or ``testcase`` overrides the configured base class.

    Raises:
        SuiteNameError: If the identifier cannot become a class name.
        SuiteBodyError: If the body is not a zero-argument callable.
    """
    unknown = set(options) - SUITE_OPTIONS
    if unknown:
        raise TypeError(f"Unknown suite options: {', '.join(sorted(unknown))}")
    _check_description(description)
    body = _check_body(body)

    base = options.get("type") or options.get("testcase") or get_config().test_case_class
    if hasattr(base, "__matchy_suite__"):
        base = get_suite(base)
    base = ensure_suite_capabilities(base)
    class_name = suite_class_name(identifier)
    module_name = getattr(body, "__module__", None) or __name__
    bases: tuple[type, ...] = (shared, base) if shared is not None else (base,)

    cls = types.new_class(
        class_name,
        bases,
        exec_body=lambda ns: ns.update(__module__=module_name, __qualname__=class_name),
    )
    cls.description = description if isinstance(description, str) else _identifier_text(identifier)

    try:
        with suite_scope(cls):
            if shared is not None:
                include_examples(cls, shared)
            body()
    finally:
        prune_inherited_tests(base)
    register_suite(cls, module_name)
    logger.debug(
        "Declared suite %s with %d test(s) on %s",
        class_name,
        len(cls.own_tests()),
        base.__name__,
    )
    return cls


def testing(
    identifier: Any,
    description: str | None = None,
    body: Callable[[], Any] | None = None,
    **options: Any,
) -> Any:
    """Declare a suite.

    Called with a body, returns the new suite class. Used as a decorator, it
    returns the body unchanged with the suite attached as ``__matchy_suite__``
    (see :func:`get_suite`), so test collectors only see the suite under its
    generated name.
    """
    _check_description(description)
    if body is not None:
        return declare(identifier, description, body, **options)

    def decorator(body: B) -> B:
        body.__matchy_suite__ = declare(identifier, description, body, **options)  # type: ignore[attr-defined]
        return body

    return decorator


def test(name: str) -> Callable[[F], F]:
    """Register the decorated function as a test of the current suite."""

    def decorator(fn: F) -> F:
        current_suite().register_test(name, fn)
        return fn

    return decorator


def setup(fn: F) -> F:
    """Run ``fn`` before each test of the current suite."""
    current_suite().setUp = fn  # type: ignore[attr-defined]
    return fn


def teardown(fn: F) -> F:
    """Run ``fn`` after each test of the current suite."""
    current_suite().tearDown = fn  # type: ignore[attr-defined]
    return fn


def helper(fn: F) -> F:
    """Make ``fn`` a method of the current suite."""
    setattr(current_suite(), fn.__name__, fn)
    return fn


# Keep pytest from collecting the DSL functions from modules that import them.
testing.__test__ = False  # type: ignore[attr-defined]
test.__test__ = False  # type: ignore[attr-defined]
test_method_name.__test__ = False  # type: ignore[attr-defined]


__all__ = [
    "CURRENT_SUITE",
    "SharedExamples",
    "SuiteCapabilities",
    "clear_suite_registry",
    "constantize",
    "current_suite",
    "declare",
    "ensure_suite_capabilities",
    "get_suite",
    "get_suite_registry",
    "helper",
    "prune_inherited_tests",
    "register_suite",
    "setup",
    "suite_class_name",
    "suite_scope",
    "teardown",
    "test",
    "test_method_name",
    "testing",
]
