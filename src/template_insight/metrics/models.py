"""Value objects produced by the corpus analyzers and dimension evaluators."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class BlockMetrics:
    """How the blocks defined across the corpus are used."""

    total_defined: int = 0
    total_used: int = 0
    orphaned_blocks: List[str] = field(default_factory=list)
    usage_ratio: float = 0.0
    average_reuse: float = 0.0


@dataclass(frozen=True)
class CouplingMetrics:
    """Fan-in/fan-out between templates and circular references."""

    avg_fan_in: float = 0.0
    avg_fan_out: float = 0.0
    max_coupling: int = 0
    instability_index: float = 0.0
    circular_refs: int = 0


@dataclass(frozen=True)
class SecurityMetrics:
    """Risky and deprecated callable usage. ``score`` is 0-100."""

    score: int = 100
    risks: Dict[str, int] = field(default_factory=dict)
    deprecated_count: int = 0
    debug_calls: int = 0


@dataclass(frozen=True)
class StyleMetrics:
    """Formatting violations per kind and corpus-wide style scores."""

    violations: Dict[str, List[str]] = field(default_factory=dict)
    consistency_score: float = 100.0
    formatting_entropy: float = 0.0
    readability_score: float = 100.0


@dataclass(frozen=True)
class DimensionMetrics:
    """Score, grade and supporting figures for one analysis dimension."""

    name: str
    score: float
    grade: str
    core_metrics: Dict[str, Any] = field(default_factory=dict)
    detail_metrics: Dict[str, Any] = field(default_factory=dict)
    distributions: Dict[str, Any] = field(default_factory=dict)
    insights: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
