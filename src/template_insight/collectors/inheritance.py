"""Template inheritance: extends, includes, imports and block declarations."""

from collections import Counter
from typing import Any, Dict, List

from jinja2 import nodes

from .base import template_names

TOP_TEMPLATES = 5


class InheritanceCollector:
    """Records which templates are extended, included or imported."""

    name = "inheritance"

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.extends = 0
        self.extends_from: List[str] = []
        self.includes = 0
        self.includes_templates: Counter = Counter()
        self.imports = 0
        self.imported_templates: Counter = Counter()
        self.blocks_detail: List[str] = []

    def enter_node(self, node: nodes.Node) -> None:
        if isinstance(node, nodes.Extends):
            self.extends += 1
            self.extends_from.extend(template_names(node.template))
        elif isinstance(node, nodes.Include):
            self.includes += 1
            self.includes_templates.update(template_names(node.template))
        elif isinstance(node, (nodes.Import, nodes.FromImport)):
            self.imports += 1
            self.imported_templates.update(template_names(node.template))
        elif isinstance(node, nodes.Block):
            self.blocks_detail.append(node.name)

    def leave_node(self, node: nodes.Node) -> None:
        pass

    def get_data(self) -> Dict[str, Any]:
        return {
            "extends": self.extends,
            "extends_from": list(self.extends_from),
            "includes": self.includes,
            "includes_templates": dict(sorted(self.includes_templates.items())),
            "top_includes_templates": dict(self.includes_templates.most_common(TOP_TEMPLATES)),
            "imports": self.imports,
            "imported_templates": dict(sorted(self.imported_templates.items())),
            "blocks": len(self.blocks_detail),
            "blocks_detail": list(self.blocks_detail),
        }
