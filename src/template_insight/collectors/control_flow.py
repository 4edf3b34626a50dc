"""Branching constructs: ifs, loops, blocks, macros and assignments."""

from typing import Any, Dict, List, Set

from jinja2 import nodes

from .base import elif_ids


class ControlFlowCollector:
    """Counts branching statements and flags nested loops and long if chains.

    An ``if`` with at least one ``elif`` is a complex condition; a ``for``
    inside another ``for`` is a nested loop.
    """

    name = "control_flow"

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.ifs = 0
        self.fors = 0
        self.variables_set = 0
        self.nested_loops = 0
        self.complex_conditions = 0
        self.block_names: List[str] = []
        self.macro_names: List[str] = []
        self._loop_depth = 0
        self._elifs: Set[int] = set()

    def enter_node(self, node: nodes.Node) -> None:
        if isinstance(node, nodes.If):
            if id(node) in self._elifs:
                return
            self.ifs += 1
            branches = elif_ids(node)
            self._elifs.update(branches)
            if branches:
                self.complex_conditions += 1
        elif isinstance(node, nodes.For):
            self.fors += 1
            self._loop_depth += 1
            if self._loop_depth > 1:
                self.nested_loops += 1
        elif isinstance(node, nodes.Block):
            self.block_names.append(node.name)
        elif isinstance(node, nodes.Macro):
            self.macro_names.append(node.name)
        elif isinstance(node, (nodes.Assign, nodes.AssignBlock)):
            self.variables_set += 1

    def leave_node(self, node: nodes.Node) -> None:
        if isinstance(node, nodes.For):
            self._loop_depth -= 1

    def get_data(self) -> Dict[str, Any]:
        unique_blocks = sorted(set(self.block_names))
        unique_macros = sorted(set(self.macro_names))
        return {
            "ifs": self.ifs,
            "fors": self.fors,
            "macros": len(unique_macros),
            "variables_set": self.variables_set,
            "unique_blocks": len(unique_blocks),
            "block_names": unique_blocks,
            "macro_names": unique_macros,
            "nested_loops": self.nested_loops,
            "complex_conditions": self.complex_conditions,
            "has_nested_loops": self.nested_loops > 0,
            "has_complex_conditions": self.complex_conditions > 0,
        }
