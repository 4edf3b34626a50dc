"""Fan-in/fan-out coupling between templates."""

from typing import Dict, Sequence

from ..analysis.graph import build_dependency_graph, find_cycles, unique_edges
from ..analysis.result import AnalysisResult
from ..metrics.models import CouplingMetrics


class CouplingAnalyzer:
    """Coupling metrics over the template dependency graph.

    Fan-out counts distinct templates a template references; fan-in counts
    distinct templates referencing it. Referenced templates outside the
    analyzed set take part in fan-in and instability but not in max coupling.
    """

    def analyze(self, results: Sequence[AnalysisResult]) -> CouplingMetrics:
        graph = build_dependency_graph(results)
        fan_in: Dict[str, int] = {node: 0 for node in graph}
        fan_out: Dict[str, int] = {}

        for node, targets in unique_edges(graph):
            fan_out[node] = len(targets)
            for target in targets:
                fan_in[target] = fan_in.get(target, 0) + 1

        max_coupling = max(
            (fan_in.get(node, 0) + fan_out.get(node, 0) for node in graph), default=0
        )

        return CouplingMetrics(
            avg_fan_in=_average(fan_in),
            avg_fan_out=_average(fan_out),
            max_coupling=max_coupling,
            instability_index=self.instability(fan_in, fan_out),
            circular_refs=len(find_cycles(graph)),
        )

    @staticmethod
    def instability(fan_in: Dict[str, int], fan_out: Dict[str, int]) -> float:
        """
        Mean of out / (in + out) over every node; isolated nodes count as 0.
        """
        nodes = set(fan_in) | set(fan_out)
        if not nodes:
            return 0.0
        total = 0.0
        for node in nodes:
            incoming = fan_in.get(node, 0)
            outgoing = fan_out.get(node, 0)
            if incoming + outgoing > 0:
                total += outgoing / (incoming + outgoing)
        return total / len(nodes)


def _average(values: Dict[str, int]) -> float:
    return sum(values.values()) / len(values) if values else 0.0
