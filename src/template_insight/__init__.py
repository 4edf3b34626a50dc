"""
Template Insight - static quality metrics for Jinja2 template codebases.

Parses every template once, feeds the tree to a set of collectors, and turns
the per-template counts into graded dimensions and an overall health score.
"""

__version__ = "0.1.0"

from .analysis import AnalysisResult, BatchAnalyzer, TemplateAnalyzer
from .config import AnalysisConfig, MetricsConfig, load_config
from .exceptions import TemplateInsightError

__all__ = [
    "AnalysisConfig",
    "AnalysisResult",
    "BatchAnalyzer",
    "MetricsConfig",
    "TemplateAnalyzer",
    "TemplateInsightError",
    "load_config",
    "__version__",
]
