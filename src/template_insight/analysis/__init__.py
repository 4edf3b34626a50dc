"""Per-template and corpus-wide analysis."""

from .result import AnalysisResult, MetricKey
from .traverser import AstTraverser
from .rating import TemplateRating
from .template_analyzer import TemplateAnalyzer, categorize_template
from .batch import AnalysisFailure, BatchAnalysisResult, BatchAnalyzer

__all__ = [
    "AnalysisResult",
    "MetricKey",
    "AstTraverser",
    "TemplateRating",
    "TemplateAnalyzer",
    "categorize_template",
    "AnalysisFailure",
    "BatchAnalysisResult",
    "BatchAnalyzer",
]
