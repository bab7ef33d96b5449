"""Core - graph orchestration of agent steps.

This module contains no knowledge of:
- Model providers or network clients
- The CLI or any other frontend
- How steps produce their output

Architecture:
    graph/      GraphBuilder, Graph, executor state machine, DOT export
    steps/      Step protocol, FunctionStep, ScriptedStep
    patterns/   Ready-made graph shapes (review loop)
    context     ExecutionContext handed to each step
    errors      Build-time and run-time error taxonomy

Key Concepts:
    Step:       Unit of work: text in, text plus usage and cost out
    Node:       A named binding of a Step within a graph
    Edge:       Directed transition, optionally guarded by a predicate
    Run:        One execution from the start node to termination or failure

Example:
    >>> from agentgraph.core import FunctionStep, GraphBuilder, contains
    >>>
    >>> async def main():
    ...     graph = (
    ...         GraphBuilder("echo")
    ...         .add_node("upper", FunctionStep(lambda ctx, text: text.upper()))
    ...         .build()
    ...     )
    ...     result = await graph.run("hello")
    ...     print(result.output)  # HELLO
"""

from agentgraph.core.budget import Budget
from agentgraph.core.cancellation import CancellationToken
from agentgraph.core.context import ExecutionContext
from agentgraph.core.errors import (
    AmbiguousStartNodeError,
    BudgetExceededError,
    CancelledError,
    DuplicateNodeError,
    GraphBuildError,
    GraphError,
    GraphRunError,
    InvalidEdgeError,
    MaxIterationsExceededError,
    NoStartNodeError,
    StepError,
)
from agentgraph.core.graph import (
    DEFAULT_MAX_ITERATIONS,
    Edge,
    Graph,
    GraphBuilder,
    GraphConfig,
    Node,
    Predicate,
    RunResult,
    VisitResult,
    always,
    contains,
    when,
)
from agentgraph.core.steps import FunctionStep, ScriptedStep, Step
from agentgraph.core.trace import ExecutionTrace, VisitTrace
from agentgraph.core.types import StepResult, Usage

__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "AmbiguousStartNodeError",
    "Budget",
    "BudgetExceededError",
    "CancellationToken",
    "CancelledError",
    "DuplicateNodeError",
    "Edge",
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
    "Node",
    "Predicate",
    "RunResult",
    "ScriptedStep",
    "Step",
    "StepError",
    "StepResult",
    "Usage",
    "VisitResult",
    "VisitTrace",
    "always",
    "contains",
    "when",
]
