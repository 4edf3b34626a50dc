"""Exception hierarchy for Template Insight."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    TemplateParseError,
)
from .base import TemplateInsightError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidDimensionError,
    InvalidPathError,
)

__all__ = [
    "TemplateInsightError",
    "AnalysisError",
    "FileAccessError",
    "TemplateParseError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "InvalidDimensionError",
]
