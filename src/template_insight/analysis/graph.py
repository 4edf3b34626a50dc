"""Dependency graph helpers shared by batch analysis and the coupling analyzer."""

from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .result import AnalysisResult

DependencyGraph = Dict[str, List[str]]


def resolve_template(name: str, known: Set[str]) -> Optional[str]:
    """
    Map a referenced template name onto an analyzed template path.

    Exact matches win; otherwise a known path ending in ``/name`` is used,
    so ``"base.html"`` resolves to ``"layouts/base.html"`` when unambiguous.
    """
    if name in known:
        return name
    suffix = "/" + name.lstrip("/")
    matches = sorted(path for path in known if path.endswith(suffix))
    if len(matches) == 1:
        return matches[0]
    return None


def build_dependency_graph(results: Sequence[AnalysisResult], kind: Optional[str] = None) -> DependencyGraph:
    """
    Template path -> referenced templates, in reference order.

    References that resolve to an analyzed template use its relative path;
    the rest keep their literal name.
    """
    known = {r.relative_path for r in results}
    graph: DependencyGraph = {}
    for result in results:
        graph[result.relative_path] = [
            resolve_template(target, known) or target
            for target in result.dependency_targets(kind)
        ]
    return graph


def reference_counts(graph: DependencyGraph) -> Dict[str, int]:
    """How many references point at each template in the graph (duplicates count)."""
    counts = {node: 0 for node in graph}
    for targets in graph.values():
        for target in targets:
            if target in counts:
                counts[target] += 1
    return counts


def find_cycles(graph: DependencyGraph) -> List[Tuple[str, str]]:
    """
    Back edges found by depth-first search, one per detected cycle.

    Nodes are visited in graph order, so the result is deterministic.
    """
    visited: Set[str] = set()
    on_stack: Set[str] = set()
    back_edges: List[Tuple[str, str]] = []

    def visit(node: str) -> None:
        visited.add(node)
        on_stack.add(node)
        for target in graph.get(node, []):
            if target not in visited:
                visit(target)
            elif target in on_stack:
                back_edges.append((node, target))
        on_stack.discard(node)

    for node in graph:
        if node not in visited:
            visit(node)
    return back_edges


def inheritance_depths(parents: Dict[str, Optional[str]]) -> Dict[str, int]:
    """Length of each template's extends chain, stopping at repeats."""
    depths: Dict[str, int] = {}
    for template, parent in parents.items():
        depth = 0
        seen = {template}
        current = parent
        while current is not None:
            depth += 1
            if current in seen:
                break
            seen.add(current)
            current = parents.get(current)
        depths[template] = depth
    return depths


def unique_edges(graph: DependencyGraph) -> Iterable[Tuple[str, List[str]]]:
    """Each node with its targets de-duplicated, first occurrence kept."""
    for node, targets in graph.items():
        yield node, list(dict.fromkeys(targets))


def isolated_templates(graph: DependencyGraph) -> List[str]:
    """Templates that reference nothing and are referenced by nothing."""
    counts = reference_counts(graph)
    return [node for node, targets in graph.items() if not targets and counts.get(node, 0) == 0]
