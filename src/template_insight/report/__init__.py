"""Report document model and builders."""

from .builder import QualityAssessment, QualityReportBuilder, build_dimension_report
from .models import (
    ChartSection,
    KeyValueSection,
    ListSection,
    Report,
    ReportSection,
    TableSection,
    TextSection,
)

__all__ = [
    "ChartSection",
    "KeyValueSection",
    "ListSection",
    "QualityAssessment",
    "QualityReportBuilder",
    "Report",
    "ReportSection",
    "TableSection",
    "TextSection",
    "build_dimension_report",
]
