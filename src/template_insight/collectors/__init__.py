"""Per-template collectors driven by the AST traverser."""

from typing import List, Optional

from ..config import MetricsConfig
from .base import Collector, SourceCollector
from .callables import CallableCollector
from .code_style import CodeStyleCollector
from .complexity import ComplexityCollector
from .control_flow import ControlFlowCollector
from .inheritance import InheritanceCollector
from .relationships import ParentResolver, RelationshipCollector


def default_collectors(
    config: Optional[MetricsConfig] = None, resolver: Optional[ParentResolver] = None
) -> List[Collector]:
    """One instance of every collector, in merge order."""
    config = config or MetricsConfig()
    return [
        CodeStyleCollector(config),
        ComplexityCollector(config),
        CallableCollector(config),
        InheritanceCollector(),
        ControlFlowCollector(),
        RelationshipCollector(resolver),
    ]


__all__ = [
    "Collector",
    "SourceCollector",
    "CallableCollector",
    "CodeStyleCollector",
    "ComplexityCollector",
    "ControlFlowCollector",
    "InheritanceCollector",
    "RelationshipCollector",
    "ParentResolver",
    "default_collectors",
]
