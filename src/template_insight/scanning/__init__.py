"""Template discovery and parsing."""

from .finder import TemplateFinder, should_skip_file
from .models import TemplateFile
from .parser import TemplateParser

__all__ = [
    "TemplateFile",
    "TemplateFinder",
    "TemplateParser",
    "should_skip_file",
]
