"""Root of the errors raised while scanning, parsing and grading templates."""

from typing import Dict, Optional


class TemplateInsightError(Exception):
    """Something stopped a template, or the whole run, from being analyzed.

    ``details`` carries string context (template path, source line, config
    key) and is appended to the message, so one log line is enough to find
    the offending template.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
