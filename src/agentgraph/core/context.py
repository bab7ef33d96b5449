"""ExecutionContext - runtime context handed to each step.

ExecutionContext carries everything a step may need to know about the
visit it is serving:
- Which run, graph, and node it belongs to
- The 1-based visit index of the node within the run
- The cancellation token for the run (optional)
- The execution trace for the run (optional)

Steps must treat the context as read-only. The executor derives one
context per visit with for_visit().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from agentgraph.core.cancellation import CancellationToken
    from agentgraph.core.trace import ExecutionTrace


@dataclass(frozen=True)
class ExecutionContext:
    """Context passed to Step.run().

    Attributes:
        run_id: Unique identifier of the current run.
        graph_name: Name of the graph being run.
        node: Name of the node being visited (None outside a visit).
        visit: 1-based visit index of the node (0 outside a visit).
        cancellation: Token for cooperative cancellation (optional).
        trace: Execution trace for observability (optional).
        metadata: Free-form, caller-supplied values.

    Example:
        >>> context = ExecutionContext(run_id="r1", graph_name="demo")
        >>> visit_context = context.for_visit("writer", 1)
        >>> result = await step.run(visit_context, "hello")
    """

    run_id: str | None = None
    graph_name: str | None = None
    node: str | None = None
    visit: int = 0
    cancellation: CancellationToken | None = None
    trace: ExecutionTrace | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def for_visit(self, node: str, visit: int) -> ExecutionContext:
        """Create a context scoped to one node visit.

        Args:
            node: Node name.
            visit: 1-based visit index.

        Returns:
            New ExecutionContext with node and visit set.
        """
        return replace(self, node=node, visit=visit)

    @property
    def is_cancelled(self) -> bool:
        """True if the run's cancellation token has fired."""
        return self.cancellation is not None and self.cancellation.is_cancelled

    def check_cancelled(self) -> None:
        """Raise CancelledError if cancellation was requested.

        Long-running steps may call this at safe points.

        Raises:
            CancelledError: If cancellation was requested.
        """
        if self.cancellation:
            if self.cancellation.is_cancelled:
                logger.debug(
                    "cancellation_triggered: run_id=%s, node=%s",
                    self.run_id,
                    self.node,
                )
            self.cancellation.check()
