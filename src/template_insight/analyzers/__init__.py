"""Corpus-wide analyzers feeding the dimension evaluators."""

from .blocks import BlockUsageAnalyzer
from .coupling import CouplingAnalyzer
from .security import CallableSecurityAnalyzer
from .style import StyleConsistencyAnalyzer

__all__ = [
    "BlockUsageAnalyzer",
    "CallableSecurityAnalyzer",
    "CouplingAnalyzer",
    "StyleConsistencyAnalyzer",
]
