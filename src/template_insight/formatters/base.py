"""Base formatter interface for Template Insight report rendering."""

from abc import ABC, abstractmethod

from ..report.models import Report


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, report: Report) -> None:
        """Write the report to stdout."""

    @abstractmethod
    def format(self, report: Report) -> str:
        """Return formatted string representation of the report."""
