"""Collector capability and shared node helpers.

A collector is any object with ``reset``, ``enter_node``, ``leave_node`` and
``get_data``. The traverser calls ``reset`` once per template, then
``enter_node``/``leave_node`` around each node in depth-first order.
Collectors ignore node types they do not care about.
"""

from typing import Any, Dict, Iterator, List, Optional, Protocol, runtime_checkable

from jinja2 import nodes

# Constructs that open a nesting level
NESTING_NODES = (nodes.If, nodes.For, nodes.Block, nodes.Macro)


@runtime_checkable
class Collector(Protocol):
    """Stateful per-template observer driven by the traverser."""

    name: str

    def reset(self) -> None: ...

    def enter_node(self, node: nodes.Node) -> None: ...

    def leave_node(self, node: nodes.Node) -> None: ...

    def get_data(self) -> Dict[str, Any]: ...


@runtime_checkable
class SourceCollector(Protocol):
    """Collector that also needs the raw template text."""

    def collect_source(self, source: str) -> None: ...


def const_string(node: Optional[nodes.Node]) -> Optional[str]:
    """The string value of a literal node, or None for dynamic expressions."""
    if isinstance(node, nodes.Const) and isinstance(node.value, str):
        return node.value
    return None


def template_names(node: Optional[nodes.Node]) -> List[str]:
    """Literal template names referenced by an extends/include/import target.

    Handles ``"a.html"`` and ``["a.html", "b.html"]``; dynamic names are skipped.
    """
    if isinstance(node, (nodes.List, nodes.Tuple)):
        return [name for item in node.items if (name := const_string(item)) is not None]
    name = const_string(node)
    return [name] if name is not None else []


def target_names(node: nodes.Node) -> Iterator[str]:
    """Names bound by an assignment or loop target (``x`` or ``k, v``)."""
    if isinstance(node, nodes.Name):
        yield node.name
    else:
        for name_node in node.find_all(nodes.Name):
            yield name_node.name


def elif_ids(node: nodes.Node) -> List[int]:
    """Identities of the ``elif`` branches hanging off an ``if`` node."""
    if isinstance(node, nodes.If):
        return [id(branch) for branch in node.elif_]
    return []
