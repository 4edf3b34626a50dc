"""Function, filter, test, macro and variable usage."""

from collections import Counter
from typing import Any, Dict, List, Optional, Set, Tuple

from jinja2 import nodes

from ..config import MetricsConfig
from .base import const_string, target_names

# Names the template engine provides inside loops, macros and call blocks
RESERVED_NAMES = frozenset(
    {"loop", "self", "super", "caller", "varargs", "kwargs", "true", "false", "none"}
)

DEBUG_EXTENSION = "DebugExtension"


class CallableCollector:
    """Counts how often each callable and context variable is used.

    Calls to a bare name are resolved once the whole template has been seen:
    names of macros defined in the template or pulled in with
    ``{% from ... import %}`` count as macro calls, everything else as a
    function call. ``alias.name()`` counts as a macro call when ``alias`` comes
    from ``{% import ... as alias %}``; other attribute calls are method calls
    on data and are not counted.
    """

    name = "callables"

    def __init__(self, config: Optional[MetricsConfig] = None):
        self.config = config or MetricsConfig()
        self.reset()

    def reset(self) -> None:
        self.filters: Counter = Counter()
        self.tests: Counter = Counter()
        self.macro_definitions: Counter = Counter()
        self.macro_imports: Counter = Counter()
        self.variables: Counter = Counter()
        self.debug_tags = 0
        self._name_calls: Counter = Counter()
        self._attribute_calls: Counter = Counter()
        self._macro_names: Set[str] = set()
        self._import_aliases: Set[str] = set()
        self._callee_ids: Set[int] = set()
        self._scopes: List[Set[str]] = []

    def enter_node(self, node: nodes.Node) -> None:
        if isinstance(node, nodes.Macro):
            self.macro_definitions[node.name] += 1
            self._macro_names.add(node.name)
            self._scopes.append({arg.name for arg in node.args})
        elif isinstance(node, nodes.CallBlock):
            self._scopes.append({arg.name for arg in node.args})
        elif isinstance(node, nodes.For):
            self._scopes.append(set(target_names(node.target)))
        elif isinstance(node, nodes.Import):
            self._import_aliases.add(node.target)
            self.macro_imports[const_string(node.template) or node.target] += 1
        elif isinstance(node, nodes.FromImport):
            for entry in node.names:
                name, alias = entry if isinstance(entry, tuple) else (entry, None)
                self._macro_names.add(alias or name)
                self.macro_imports[name] += 1
        elif isinstance(node, nodes.Call):
            self._record_call(node)
        elif isinstance(node, nodes.Filter):
            if node.name:
                self.filters[node.name] += 1
        elif isinstance(node, nodes.Test):
            self.tests[node.name] += 1
        elif isinstance(node, nodes.Name):
            self._record_name(node)

    def leave_node(self, node: nodes.Node) -> None:
        if isinstance(node, (nodes.Macro, nodes.CallBlock, nodes.For)):
            self._scopes.pop()

    def _record_call(self, node: nodes.Call) -> None:
        callee = node.node
        if isinstance(callee, nodes.Name):
            self._callee_ids.add(id(callee))
            if callee.name not in RESERVED_NAMES:
                self._name_calls[callee.name] += 1
        elif isinstance(callee, nodes.Getattr) and isinstance(callee.node, nodes.Name):
            self._attribute_calls[(callee.node.name, callee.attr)] += 1
        elif isinstance(callee, nodes.ExtensionAttribute):
            if callee.identifier.endswith(DEBUG_EXTENSION):
                self.debug_tags += 1

    def _record_name(self, node: nodes.Name) -> None:
        if node.ctx != "load" or id(node) in self._callee_ids:
            return
        if node.name in RESERVED_NAMES or node.name in self._import_aliases:
            return
        if any(node.name in scope for scope in self._scopes):
            return
        self.variables[node.name] += 1

    def _resolve_calls(self) -> Tuple[Counter, Counter]:
        functions: Counter = Counter()
        macro_calls: Counter = Counter()
        for name, count in self._name_calls.items():
            if name in self._macro_names:
                macro_calls[name] += count
            else:
                functions[name] += count
        for (alias, attr), count in self._attribute_calls.items():
            if alias in self._import_aliases:
                macro_calls[f"{alias}.{attr}"] += count
        return functions, macro_calls

    def get_data(self) -> Dict[str, Any]:
        functions, macro_calls = self._resolve_calls()
        data: Dict[str, Any] = {}
        for key, counter in (
            ("functions", functions),
            ("filters", self.filters),
            ("tests_used", self.tests),
            ("macro_definitions", self.macro_definitions),
            ("macro_calls", macro_calls),
            ("macro_imports", self.macro_imports),
            ("variables", self.variables),
        ):
            data[key] = sum(counter.values())
            data[f"unique_{key}"] = len(counter)
            data[f"{key}_detail"] = dict(sorted(counter.items()))

        deprecated = set(self.config.deprecated_callables)
        data["deprecated_callables"] = sum(
            count
            for counter in (functions, self.filters, self.tests)
            for name, count in counter.items()
            if name in deprecated
        )
        data["debug_calls"] = self.debug_tags + sum(
            functions[name] for name in self.config.debug_functions
        )
        return data
