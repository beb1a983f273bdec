"""Shared fixtures for unit tests."""

import pytest

from matchy.config import reset_config
from matchy.matchers.registry import clear_matcher_registry
from matchy.suites.suite import clear_suite_registry


@pytest.fixture(autouse=True)
def isolated_state():
    """Reset registries and configuration around each test."""
    clear_matcher_registry()
    clear_suite_registry()
    reset_config()
    yield
    clear_matcher_registry()
    clear_suite_registry()
    reset_config()


class Door:
    """Receiver exposing predicates in the shapes matchy looks up."""

    def __init__(self, open_: bool = True) -> None:
        self._open = open_

    def __repr__(self) -> str:
        return f"<Door open={self._open}>"

    def ready(self) -> bool:
        return True

    def is_open(self) -> bool:
        return self._open

    @property
    def locked(self) -> bool:
        return not self._open

    def exists(self) -> bool:
        return True


@pytest.fixture
def door() -> Door:
    return Door()
