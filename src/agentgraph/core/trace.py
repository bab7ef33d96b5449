"""Execution tracing for graph run observability.

Traces provide visibility into what happened during a run:
- Which nodes ran, in what order, and on which visit
- Timing information per visit
- Input/output for each visit
- Errors that occurred

Tracing is opt-in via Graph.run(..., trace=...) to avoid overhead
when not needed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal


@dataclass
class VisitTrace:
    """Trace record for a single node visit.

    Attributes:
        node: The node that was executed.
        visit: 1-based visit index of the node within the run.
        input: Input provided to the step.
        output: Output produced by the step (None if error).
        error: Error message if the step failed (None if success).
        start_time: When the step started.
        end_time: When the step completed.
        duration_ms: Execution time in milliseconds.
        tokens_used: Total tokens reported by the step.
        cost: Cost reported by the step.
        next_node: Node selected by routing (None when the run ended here).
    """

    node: str
    visit: int
    input: str
    output: str | None
    error: str | None
    start_time: datetime
    end_time: datetime
    duration_ms: float
    tokens_used: int = 0
    cost: float = 0.0
    next_node: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "node": self.node,
            "visit": self.visit,
            "input": self.input,
            "output": self.output,
            "error": self.error,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "duration_ms": self.duration_ms,
            "tokens_used": self.tokens_used,
            "cost": self.cost,
            "next_node": self.next_node,
        }


@dataclass
class ExecutionTrace:
    """Trace record for an entire graph run.

    Attributes:
        graph_name: The graph that ran.
        start_time: When the run started.
        run_id: Run identifier (set by the executor).
        end_time: When the run ended (None if still running).
        status: Run status.
        visits: Visit traces in execution order.
        total_tokens: Sum of tokens across all visits.
        total_cost: Sum of costs across all visits.
        error: Error message if the run failed.

    Example:
        >>> trace = ExecutionTrace(graph_name="review-loop")
        >>> result = await graph.run("hello", trace=trace)
        >>> print(trace.explain())
    """

    graph_name: str
    start_time: datetime = field(default_factory=datetime.now)
    run_id: str | None = None
    end_time: datetime | None = None
    status: Literal["running", "completed", "failed", "cancelled"] = "running"
    visits: list[VisitTrace] = field(default_factory=list)
    total_tokens: int = 0
    total_cost: float = 0.0
    error: str | None = None

    def add_visit(self, visit: VisitTrace) -> None:
        """Add a visit trace to the run."""
        self.visits.append(visit)
        self.total_tokens += visit.tokens_used
        self.total_cost += visit.cost

    def complete(self, error: str | None = None) -> None:
        """Mark the run as finished.

        Args:
            error: Error message if the run failed.
        """
        self.end_time = datetime.now()
        if error:
            self.status = "failed"
            self.error = error
        else:
            self.status = "completed"

    def cancel(self, reason: str = "cancelled") -> None:
        """Mark the run as cancelled."""
        self.end_time = datetime.now()
        self.status = "cancelled"
        self.error = reason

    @property
    def duration_ms(self) -> float | None:
        """Total run duration in milliseconds, None while running."""
        if self.end_time is None:
            return None
        delta = self.end_time - self.start_time
        return delta.total_seconds() * 1000

    @property
    def path(self) -> list[str]:
        """Node names in execution order."""
        return [v.node for v in self.visits]

    def explain(self) -> str:
        """Generate human-readable run summary.

        Returns:
            Multi-line string describing the run.
        """
        lines = [
            f"Graph: {self.graph_name}",
            f"Status: {self.status}",
        ]

        if self.run_id:
            lines.append(f"Run: {self.run_id}")

        if self.duration_ms is not None:
            lines.append(f"Duration: {self.duration_ms:.0f}ms")

        if self.total_tokens > 0:
            lines.append(f"Tokens: {self.total_tokens}")

        if self.total_cost > 0:
            lines.append(f"Cost: ${self.total_cost:.6f}")

        lines.append(f"Visits: {len(self.visits)}")

        for visit in self.visits:
            status_indicator = "x" if visit.error else "+"
            arrow = f" -> {visit.next_node}" if visit.next_node else ""
            lines.append(
                f"  [{status_indicator}] {visit.node}#{visit.visit}: "
                f"{visit.duration_ms:.0f}ms{arrow}"
            )
            if visit.error:
                lines.append(f"      Error: {visit.error}")

        if self.error:
            lines.append(f"Error: {self.error}")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "graph_name": self.graph_name,
            "run_id": self.run_id,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "status": self.status,
            "duration_ms": self.duration_ms,
            "visits": [visit.to_dict() for visit in self.visits],
            "total_tokens": self.total_tokens,
            "total_cost": self.total_cost,
            "error": self.error,
        }
