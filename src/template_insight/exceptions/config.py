"""Errors in how a run was set up: template root, settings, dimension names."""

from pathlib import Path
from typing import Any, Iterable

from .base import TemplateInsightError


class ConfigurationError(TemplateInsightError):
    """The run cannot start as configured. Nothing is analyzed."""


class InvalidPathError(ConfigurationError):
    """The template root is missing or unusable."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Template root is not usable: {path}", details={"path": str(path), "reason": reason}
        )
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """A threshold, weight or other setting has a value the analysis cannot use."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class InvalidDimensionError(ConfigurationError, ValueError):
    """A dimension slug that no evaluator, grader or health weight knows."""

    def __init__(self, name: str, valid: Iterable[str]):
        valid = sorted(valid)
        super().__init__(
            f"Unknown dimension: {name!r}",
            details={"dimension": name, "valid": ", ".join(valid)},
        )
        self.name = name
        self.valid = valid
