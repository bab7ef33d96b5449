"""Run results - the sole observable outcome of a successful run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from agentgraph.core.types import Usage


@dataclass(frozen=True)
class VisitResult:
    """Result of one visit to one node.

    Attributes:
        node: Node name.
        visit: 1-based visit index, scoped to the node.
        input: Input the step received.
        output: Output the step produced.
        usage: Token usage of the visit.
        cost: Cost of the visit in dollars.
        duration_ms: Wall-clock duration of the step call.
        metadata: Metadata the step attached to its StepResult.
    """

    node: str
    visit: int
    input: str
    output: str
    usage: Usage = field(default_factory=Usage)
    cost: float = 0.0
    duration_ms: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict, hash=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "node": self.node,
            "visit": self.visit,
            "input": self.input,
            "output": self.output,
            "usage": self.usage.to_dict(),
            "cost": self.cost,
            "duration_ms": self.duration_ms,
            "metadata": dict(self.metadata),
        }


@dataclass
class RunResult:
    """Aggregated outcome of one successful graph run.

    Created fresh per run and owned by the caller.

    Attributes:
        run_id: Unique identifier of the run.
        graph_name: Name of the graph that ran.
        output: Output of the node the run terminated at.
        total_cost: Sum of all visit costs.
        total_usage: Sum of all visit usages.
        node_results: Per-node visit results in chronological order.
        path: Node names in execution order.
    """

    run_id: str
    graph_name: str
    output: str
    total_cost: float = 0.0
    total_usage: Usage = field(default_factory=Usage)
    node_results: dict[str, list[VisitResult]] = field(default_factory=dict)
    path: list[str] = field(default_factory=list)

    @property
    def visits(self) -> int:
        """Total number of step invocations in the run."""
        return len(self.path)

    @property
    def final_node(self) -> str | None:
        """Node the run terminated at."""
        return self.path[-1] if self.path else None

    def visit_count(self, node: str) -> int:
        """Number of times a node was visited."""
        return len(self.node_results.get(node, []))

    def last(self, node: str) -> VisitResult | None:
        """Most recent visit of a node, or None if never visited."""
        results = self.node_results.get(node)
        return results[-1] if results else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "run_id": self.run_id,
            "graph_name": self.graph_name,
            "output": self.output,
            "total_cost": self.total_cost,
            "total_usage": self.total_usage.to_dict(),
            "path": list(self.path),
            "node_results": {
                name: [r.to_dict() for r in results]
                for name, results in self.node_results.items()
            },
        }
