"""Single-template analysis: parse, traverse, merge collector output."""

import posixpath
import time
from typing import Any, Dict, List, Optional

from ..collectors import RelationshipCollector, SourceCollector, default_collectors
from ..collectors.base import Collector
from ..collectors.relationships import ParentResolver
from ..config import MetricsConfig
from ..logging_config import get_logger
from ..scanning.models import TemplateFile
from ..scanning.parser import TemplateParser
from .rating import TemplateRating
from .result import AnalysisResult
from .traverser import AstTraverser

logger = get_logger(__name__)

# Checked in order against the template's directory
CATEGORY_MARKERS = ("component", "page", "layout", "form", "email", "admin")


def categorize_template(relative_path: str) -> str:
    """Coarse role of a template, guessed from its directory name."""
    directory = posixpath.dirname(relative_path)
    if not directory:
        return "root"
    for marker in CATEGORY_MARKERS:
        if marker in directory:
            return marker
    return "other"


class TemplateAnalyzer:
    """Produces one AnalysisResult per template.

    The same collector instances are reused for every template; the
    traverser resets them before each walk.
    """

    def __init__(
        self,
        config: Optional[MetricsConfig] = None,
        collectors: Optional[List[Collector]] = None,
        parser: Optional[TemplateParser] = None,
        traverser: Optional[AstTraverser] = None,
        resolver: Optional[ParentResolver] = None,
    ):
        self.config = config or MetricsConfig()
        self.collectors = collectors if collectors is not None else default_collectors(self.config, resolver)
        self.parser = parser or TemplateParser()
        self.traverser = traverser or AstTraverser()
        self.rating = TemplateRating(self.config)

    def analyze(self, template: TemplateFile, encoding: str = "utf-8") -> AnalysisResult:
        """
        Analyze a template on disk.

        Raises:
            FileAccessError: If the file cannot be read
            TemplateParseError: If the template has a syntax error
        """
        source = template.read(encoding)
        return self.analyze_source(
            template.relative_path, source, size_bytes=len(source.encode(encoding))
        )

    def analyze_source(
        self, relative_path: str, source: str, size_bytes: Optional[int] = None
    ) -> AnalysisResult:
        """
        Analyze template text.

        Args:
            relative_path: "/"-separated path used as the template's identity
            source: Template text
            size_bytes: Size on disk; defaults to the UTF-8 encoded length

        Raises:
            TemplateParseError: If the template has a syntax error
        """
        start = time.perf_counter()

        for collector in self.collectors:
            if isinstance(collector, RelationshipCollector):
                collector.set_current_template(relative_path)

        ast = self.parser.parse(source, name=relative_path)
        self.traverser.traverse(ast, self.collectors)

        metrics: Dict[str, Any] = {}
        for collector in self.collectors:
            if isinstance(collector, SourceCollector):
                collector.collect_source(source)
            metrics.update(collector.get_data())

        if size_bytes is None:
            size_bytes = len(source.encode("utf-8"))
        metrics.update(self._enrich(relative_path, metrics, size_bytes))

        elapsed = time.perf_counter() - start
        logger.debug("Analyzed %s in %.4fs", relative_path, elapsed)
        return AnalysisResult(relative_path=relative_path, metrics=metrics, analysis_time=elapsed)

    def _enrich(self, relative_path: str, metrics: Dict[str, Any], size_bytes: int) -> Dict[str, Any]:
        lines = metrics.get("lines", 0)
        complexity = metrics.get("complexity_score", 0)
        functions = metrics.get("functions", 0)
        extension = posixpath.splitext(relative_path)[1].lstrip(".")

        return {
            "file_size_bytes": size_bytes,
            "file_category": categorize_template(relative_path),
            "file_extension": extension,
            "complexity_per_line": round(complexity / lines, 2) if lines > 0 else 0.0,
            "function_density": round(functions / lines * 100, 1) if lines > 0 else 0.0,
            "size_rating": self.rating.size_rating(lines),
            "complexity_rating": self.rating.complexity_rating(complexity, metrics.get("max_depth", 0)),
            "callables_rating": self.rating.callables_rating(metrics),
        }
