"""JSON formatter for Template Insight."""

import json

from ..report.models import Report
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the report document as JSON."""

    def render(self, report: Report) -> None:
        print(self.format(report))

    def format(self, report: Report) -> str:
        return json.dumps(report.to_dict(), indent=2, default=str)
