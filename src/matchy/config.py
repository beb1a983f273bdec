"""Process-wide configuration.

Values come from ``configure()`` calls or from ``[tool.matchy]`` in the
nearest ``pyproject.toml``:

    [tool.matchy]
    test_case_class = "unittest:IsolatedAsyncioTestCase"
    assertion_failed_error = "myproject.errors:ExpectationError"
"""

from __future__ import annotations

import importlib
import logging
import tomllib
import unittest
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from matchy.errors import AssertionFailedError, ConfigError


logger = logging.getLogger(__name__)

PYPROJECT = "pyproject.toml"


def import_object(import_path: str) -> Any:
    """Import an object from an import string.

    Supports formats:
        - "module.path:Name"
        - "module.path.Name"
    """
    if ":" in import_path:
        module_path, name = import_path.rsplit(":", 1)
    elif "." in import_path:
        module_path, name = import_path.rsplit(".", 1)
    else:
        msg = f"Invalid import path: {import_path}"
        raise ConfigError(msg)

    module = importlib.import_module(module_path)
    try:
        return getattr(module, name)
    except AttributeError as exc:
        msg = f"{module_path} has no attribute {name}"
        raise ConfigError(msg) from exc


class MatchyConfig(BaseModel):
    """Settings read by the suite builder and by ``should`` / ``should_not``.

    Attributes
    ----------
    test_case_class
        Default base class for suites declared with ``testing()``.
    assertion_failed_error
        Exception raised when an expectation is not met.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")

    test_case_class: type = unittest.TestCase
    assertion_failed_error: type[BaseException] = AssertionFailedError

    @field_validator("test_case_class", "assertion_failed_error", mode="before")
    @classmethod
    def _resolve_import_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return import_object(value)
        return value


_config = MatchyConfig()


def get_config() -> MatchyConfig:
    """Get the active configuration."""
    return _config


def configure(**options: Any) -> MatchyConfig:
    """Update the active configuration in place and return it."""
    global _config
    try:
        _config = MatchyConfig(**{**dict(_config), **options})
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
    return _config


def reset_config() -> MatchyConfig:
    """Restore the default configuration."""
    global _config
    _config = MatchyConfig()
    return _config


def find_pyproject(start: Path | None = None) -> Path | None:
    """Walk up from ``start`` (default: cwd) looking for a pyproject.toml."""
    current = (start or Path.cwd()).resolve()
    for directory in [current, *current.parents]:
        candidate = directory / PYPROJECT
        if candidate.is_file():
            return candidate
    return None


def load_config(start: Path | None = None) -> MatchyConfig:
    """Install the ``[tool.matchy]`` table of the nearest pyproject.toml."""
    path = find_pyproject(start)
    if path is None:
        return get_config()

    with path.open("rb") as f:
        data = tomllib.load(f)
    options = data.get("tool", {}).get("matchy", {})
    if options:
        logger.debug("Loading matchy configuration from %s", path)
    return configure(**options)


__all__ = [
    "MatchyConfig",
    "configure",
    "find_pyproject",
    "get_config",
    "import_object",
    "load_config",
    "reset_config",
]
