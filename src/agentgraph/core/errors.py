"""Error taxonomy for graph construction and execution.

Build-time errors are raised from GraphBuilder.build() and never leave a
partial Graph behind. Run-time errors are raised from Graph.run() and
never accompany a partial RunResult.

Hierarchy:
    GraphError
        GraphBuildError
            DuplicateNodeError
            InvalidEdgeError
            NoStartNodeError
            AmbiguousStartNodeError
        GraphRunError
            StepError
            CancelledError
            MaxIterationsExceededError
            BudgetExceededError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agentgraph.core.types import Usage


class GraphError(Exception):
    """Base class for all agentgraph errors."""


class GraphBuildError(GraphError):
    """Raised when a graph definition fails validation."""


class DuplicateNodeError(GraphBuildError):
    """Two nodes were registered under the same name.

    Attributes:
        name: The duplicated node name.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Duplicate node '{name}'")


class InvalidEdgeError(GraphBuildError):
    """An edge references an unknown node, carries more than one predicate,
    or is a second unconditional edge leaving the same node.

    Attributes:
        source: Edge source node name.
        target: Edge destination node name.
        reason: What is wrong with the edge.
    """

    def __init__(self, source: str, target: str, reason: str):
        self.source = source
        self.target = target
        self.reason = reason
        super().__init__(f"Invalid edge '{source}' -> '{target}': {reason}")


class NoStartNodeError(GraphBuildError):
    """Every node has at least one incoming edge (or there are no nodes)."""

    def __init__(self, message: str = "No start node: every node has an incoming edge"):
        super().__init__(message)


class AmbiguousStartNodeError(GraphBuildError):
    """More than one node has no incoming edges.

    Attributes:
        candidates: Names of all nodes without incoming edges, in insertion order.
    """

    def __init__(self, candidates: list[str]):
        self.candidates = list(candidates)
        super().__init__(
            f"Ambiguous start node: {len(self.candidates)} nodes have no incoming edges "
            f"({', '.join(self.candidates)})"
        )


class GraphRunError(GraphError):
    """Raised when a graph run stops without reaching a terminating node."""


class StepError(GraphRunError):
    """A step invocation (or an edge predicate evaluated on its output) failed.

    The original exception is available both as ``cause`` and as
    ``__cause__``.

    Attributes:
        node: Name of the node whose step failed.
        visit: 1-based visit index of that node when it failed.
        cause: The underlying exception.
    """

    def __init__(self, node: str, visit: int, cause: BaseException):
        self.node = node
        self.visit = visit
        self.cause = cause
        super().__init__(f"Step '{node}' failed on visit {visit}: {cause}")


class CancelledError(GraphRunError):
    """The run was cancelled or timed out.

    Named after asyncio.CancelledError but deliberately an ordinary
    Exception: it reports a cancelled *run*, not a cancelled task.

    Attributes:
        reason: "timeout" for deadline expiry, otherwise the reason given to
            CancellationToken.cancel() ("cancelled" by default).
    """

    def __init__(self, reason: str = "cancelled"):
        self.reason = reason
        super().__init__(f"Run {reason}")


class MaxIterationsExceededError(GraphRunError):
    """The run reached its total visit bound without terminating.

    Attributes:
        max_iterations: The configured bound.
    """

    def __init__(self, max_iterations: int):
        self.max_iterations = max_iterations
        super().__init__(
            f"Max iterations exceeded: {max_iterations} step executions without "
            f"reaching a terminating node"
        )


class BudgetExceededError(GraphRunError):
    """The run's accumulated usage or cost reached a configured budget.

    Attributes:
        reason: Which limit was hit.
        usage: Accumulated token usage at the time.
        cost: Accumulated cost in dollars at the time.
    """

    def __init__(self, reason: str, usage: Usage, cost: float):
        self.reason = reason
        self.usage = usage
        self.cost = cost
        super().__init__(reason)
