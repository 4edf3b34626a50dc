"""Dependencies between templates and the blocks they provide or use."""

from collections import Counter
from typing import Any, Callable, Dict, List, Optional

from jinja2 import nodes

from .base import template_names

# Given a template name, the name of the template it extends (if known)
ParentResolver = Callable[[str], Optional[str]]


class RelationshipCollector:
    """Builds the dependency list and block contract of a template.

    Blocks defined in a template that does not extend another are rendered in
    place, so they count as both provided and used. In a child template they
    are only provided; the parent decides whether they are rendered.
    ``self.name()`` calls are block uses wherever they appear.
    """

    name = "relationships"

    def __init__(self, resolver: Optional[ParentResolver] = None):
        self.resolver = resolver
        self.current_template: Optional[str] = None
        self.reset()

    def set_current_template(self, name: Optional[str]) -> None:
        self.current_template = name

    def reset(self) -> None:
        self.dependencies: List[Dict[str, str]] = []
        self.provided_blocks: List[str] = []
        self.used_blocks: List[str] = []
        self.parent: Optional[str] = None
        self._extends = False

    def enter_node(self, node: nodes.Node) -> None:
        if isinstance(node, nodes.Extends):
            self._extends = True
            for name in template_names(node.template):
                self.parent = self.parent or name
                self._add_dependency(name, "extends")
        elif isinstance(node, nodes.Include):
            for name in template_names(node.template):
                self._add_dependency(name, "includes")
        elif isinstance(node, (nodes.Import, nodes.FromImport)):
            for name in template_names(node.template):
                self._add_dependency(name, "imports")
        elif isinstance(node, nodes.Block):
            if node.name not in self.provided_blocks:
                self.provided_blocks.append(node.name)
        elif isinstance(node, nodes.Call):
            callee = node.node
            if (
                isinstance(callee, nodes.Getattr)
                and isinstance(callee.node, nodes.Name)
                and callee.node.name == "self"
            ):
                self.used_blocks.append(callee.attr)

    def leave_node(self, node: nodes.Node) -> None:
        if isinstance(node, nodes.Template) and not self._extends:
            self.used_blocks.extend(self.provided_blocks)

    def _add_dependency(self, template: str, kind: str) -> None:
        self.dependencies.append({"template": template, "type": kind})

    @property
    def inheritance_depth(self) -> int:
        """Length of the extends chain above this template.

        1 for a direct child; the resolver, when set, walks further up and
        stops at the first repeated template.
        """
        if not self._extends:
            return 0
        depth = 1
        if self.resolver is None or self.parent is None:
            return depth
        visited = {self.current_template, self.parent}
        current = self.parent
        while (grandparent := self.resolver(current)) and grandparent not in visited:
            visited.add(grandparent)
            current = grandparent
            depth += 1
        return depth

    def get_data(self) -> Dict[str, Any]:
        depth = self.inheritance_depth
        deps = len(self.dependencies)
        return {
            "dependencies": [dict(d) for d in self.dependencies],
            "dependency_types": dict(Counter(d["type"] for d in self.dependencies)),
            "provided_blocks": list(self.provided_blocks),
            "used_blocks": list(self.used_blocks),
            "inheritance_depth": depth,
            "coupling_score": deps * 2 + len(set(self.used_blocks)) + depth * 3,
            "reusability_score": max(0, 100 - deps * 5 - depth * 10 + len(self.provided_blocks) * 5),
        }
