"""Depth-first walk over a Jinja2 syntax tree driving a set of collectors."""

from typing import Sequence

from jinja2 import nodes

from ..collectors.base import Collector


class AstTraverser:
    """Stateless traversal engine, reusable across templates.

    Every collector is reset, then sees ``enter_node`` for a node before any
    of its children and ``leave_node`` after all of them. Children are visited
    in source order, collectors in list order.
    """

    def traverse(self, root: nodes.Node, collectors: Sequence[Collector]) -> None:
        if not collectors:
            raise ValueError("traverse() needs at least one collector")

        for collector in collectors:
            collector.reset()
        self._visit(root, collectors)

    def _visit(self, node: nodes.Node, collectors: Sequence[Collector]) -> None:
        for collector in collectors:
            collector.enter_node(node)

        for child in node.iter_child_nodes():
            self._visit(child, collectors)

        for collector in collectors:
            collector.leave_node(node)
