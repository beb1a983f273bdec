"""Error types raised by matchy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from matchy.matchers.base import Matcher


class AssertionFailedError(AssertionError):
    """AssertionError with the matcher that produced it attached."""

    def __init__(self, message: str | None, matcher: Matcher | Any = None):
        self.matcher = matcher
        super().__init__(message or "Expectation not met.")


class SuiteDefinitionError(Exception):
    """Raised when a suite cannot be declared as written (developer error)."""


class SuiteNameError(SuiteDefinitionError, ValueError):
    """Raised when a suite identifier cannot be turned into a class name."""

    def __init__(self, identifier: Any, reason: str) -> None:
        self.identifier = identifier
        super().__init__(f"Cannot derive a suite name from {identifier!r}: {reason}")


class SuiteBodyError(SuiteDefinitionError, TypeError):
    """Raised when a suite body is not a zero-argument callable."""


class ConfigError(ValueError):
    """Raised when a configuration value cannot be resolved."""
