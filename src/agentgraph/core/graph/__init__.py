"""Graph - directed, possibly cyclic orchestration of steps.

A graph is declared with GraphBuilder, frozen by build(), and run any
number of times:
- Nodes bind a name to a Step
- Edges are unconditional or guarded by a predicate on the source output
- Routing is first-match in declaration order; no match terminates the run
- Runs are bounded by max_iterations, and optionally a timeout and budget
"""

from agentgraph.core.graph.builder import GraphBuilder
from agentgraph.core.graph.config import DEFAULT_MAX_ITERATIONS, GraphConfig
from agentgraph.core.graph.dot import to_dot
from agentgraph.core.graph.edges import Edge, Node, Predicate, always, contains, when
from agentgraph.core.graph.executor import Executor
from agentgraph.core.graph.graph import Graph
from agentgraph.core.graph.result import RunResult, VisitResult
from agentgraph.core.graph.state import Failed, Running, RunState, Terminated, is_terminal

__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "Edge",
    "Executor",
    "Failed",
    "Graph",
    "GraphBuilder",
    "GraphConfig",
    "Node",
    "Predicate",
    "RunResult",
    "RunState",
    "Running",
    "Terminated",
    "VisitResult",
    "always",
    "contains",
    "is_terminal",
    "to_dot",
    "when",
]
