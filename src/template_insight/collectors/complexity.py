"""Conditionals, loops, operators and nesting depth."""

from typing import Any, Dict, Optional, Set

from jinja2 import nodes

from ..config import MetricsConfig
from .base import NESTING_NODES, elif_ids


class ComplexityCollector:
    """Counts decision points and tracks the deepest nesting level.

    An ``elif`` branch counts as a condition but stays at the nesting level
    of its ``if``.
    """

    name = "complexity"

    def __init__(self, config: Optional[MetricsConfig] = None):
        self.config = config or MetricsConfig()
        self.reset()

    def reset(self) -> None:
        self.conditions = 0
        self.loops = 0
        self.ternary = 0
        self.logical_operators = 0
        self.tests = 0
        self.max_depth = 0
        self._depth = 0
        self._elifs: Set[int] = set()

    def enter_node(self, node: nodes.Node) -> None:
        if isinstance(node, nodes.If):
            self.conditions += 1
            self._elifs.update(elif_ids(node))
        elif isinstance(node, nodes.For):
            self.loops += 1
        elif isinstance(node, nodes.CondExpr):
            self.ternary += 1
        elif isinstance(node, (nodes.And, nodes.Or)):
            self.logical_operators += 1
        elif isinstance(node, nodes.Test):
            self.tests += 1

        if self._opens_level(node):
            self._depth += 1
            self.max_depth = max(self.max_depth, self._depth)

    def leave_node(self, node: nodes.Node) -> None:
        if self._opens_level(node):
            self._depth -= 1

    def _opens_level(self, node: nodes.Node) -> bool:
        return isinstance(node, NESTING_NODES) and id(node) not in self._elifs

    @property
    def complexity_score(self) -> int:
        cfg = self.config
        return (
            self.conditions * cfg.if_points
            + self.loops * cfg.for_points
            + self.ternary * cfg.ternary_points
            + self.logical_operators * cfg.logical_operator_points
            + self.max_depth * cfg.depth_points
        )

    def get_data(self) -> Dict[str, Any]:
        return {
            "conditions": self.conditions,
            "loops": self.loops,
            "ternary": self.ternary,
            "logical_operators": self.logical_operators,
            "tests": self.tests,
            "max_depth": self.max_depth,
            "complexity_score": self.complexity_score,
        }
