"""Errors for a single template: unreadable files and syntax errors."""

from pathlib import Path
from typing import Dict, Optional

from .base import TemplateInsightError


class AnalysisError(TemplateInsightError):
    """One template could not be analyzed.

    Batch runs log these and leave the template out of the results.
    """


class FileAccessError(AnalysisError):
    """A template file (or the directory holding it) could not be read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot read template file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class TemplateParseError(AnalysisError):
    """Jinja2 rejected the template source."""

    def __init__(self, template: str, reason: str, lineno: Optional[int] = None):
        details: Dict[str, str] = {"template": template, "reason": reason}
        if lineno is not None:
            details["line"] = str(lineno)

        super().__init__(f"Template syntax error in {template}", details=details)
        self.template = template
        self.reason = reason
        self.lineno = lineno
