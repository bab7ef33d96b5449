"""agentgraph - Compose agent steps into directed, possibly cyclic graphs.

A graph is declared with GraphBuilder, validated and frozen by build(),
and run with Graph.run(). Edges may be guarded by predicates on the
source node's output; the first matching edge wins and a node with no
matching edge ends the run. max_iterations bounds the total number of
step executions so loops always terminate.

Layers:
    core/       Pure orchestration logic (graph, steps, errors, tracing)
    frontends/  User interfaces (CLI)

Quick Start:
    >>> from agentgraph import GraphBuilder, ScriptedStep, contains
    >>>
    >>> graph = (
    ...     GraphBuilder("review-loop")
    ...     .add_node("writer", ScriptedStep(fallback="Draft"))
    ...     .add_node("reviewer", ScriptedStep(["REVISE: more detail", "APPROVED"]))
    ...     .add_node("reviser", ScriptedStep(fallback="Better draft"))
    ...     .add_edge("writer", "reviewer")
    ...     .add_edge("reviewer", "reviser", contains("REVISE"))
    ...     .add_edge("reviser", "reviewer")
    ...     .options(max_iterations=6)
    ...     .build()
    ... )
    >>> result = await graph.run("Write about graphs.")
    >>> result.path
    ['writer', 'reviewer', 'reviser', 'reviewer']
    >>> print(graph.to_dot())
"""

from agentgraph.__version__ import __version__

# Re-export core for convenience
from agentgraph.core import (
    AmbiguousStartNodeError,
    Budget,
    BudgetExceededError,
    CancellationToken,
    CancelledError,
    DuplicateNodeError,
    ExecutionContext,
    ExecutionTrace,
    FunctionStep,
    Graph,
    GraphBuildError,
    GraphBuilder,
    GraphConfig,
    GraphError,
    GraphRunError,
    InvalidEdgeError,
    MaxIterationsExceededError,
    NoStartNodeError,
    RunResult,
    ScriptedStep,
    Step,
    StepError,
    StepResult,
    Usage,
    VisitResult,
    always,
    contains,
    when,
)

__all__ = [
    "AmbiguousStartNodeError",
    "Budget",
    "BudgetExceededError",
    "CancellationToken",
    "CancelledError",
    "DuplicateNodeError",
    "ExecutionContext",
    "ExecutionTrace",
    "FunctionStep",
    "Graph",
    "GraphBuildError",
    "GraphBuilder",
    "GraphConfig",
    "GraphError",
    "GraphRunError",
    "InvalidEdgeError",
    "MaxIterationsExceededError",
    "NoStartNodeError",
    "RunResult",
    "ScriptedStep",
    "Step",
    "StepError",
    "StepResult",
    "Usage",
    "VisitResult",
    "__version__",
    "always",
    "contains",
    "when",
]
