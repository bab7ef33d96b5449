"""Graph - immutable, validated graph definition.

Graphs are produced by GraphBuilder.build() and expose no mutators. A
single Graph may be run many times, including concurrently; each run
owns its own executor state and RunResult.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from agentgraph.core.graph.config import GraphConfig
from agentgraph.core.graph.edges import Edge, Node

if TYPE_CHECKING:
    from agentgraph.core.cancellation import CancellationToken
    from agentgraph.core.graph.result import RunResult
    from agentgraph.core.steps.base import Step
    from agentgraph.core.trace import ExecutionTrace


class Graph:
    """Directed, possibly cyclic graph of steps with a single start node.

    Do not construct directly; use GraphBuilder, which enforces the
    invariants this class relies on:
    - Node names are unique
    - Every edge references existing nodes
    - Exactly one node has no incoming edges (the start node)
    - Each node has at most one unconditional outgoing edge

    Example:
        >>> graph = (
        ...     GraphBuilder("review-loop")
        ...     .add_node("writer", writer)
        ...     .add_node("reviewer", reviewer)
        ...     .add_node("reviser", reviser)
        ...     .add_edge("writer", "reviewer")
        ...     .add_edge("reviewer", "reviser", contains("REVISE"))
        ...     .add_edge("reviser", "reviewer")
        ...     .options(max_iterations=5)
        ...     .build()
        ... )
        >>> result = await graph.run("Write a paragraph about graphs.")
        >>> print(result.output)
        >>> print(graph.to_dot())
    """

    def __init__(
        self,
        name: str,
        nodes: Mapping[str, Node],
        edges: tuple[Edge, ...],
        start_node: str,
        config: GraphConfig,
    ) -> None:
        self._name = name
        self._nodes: Mapping[str, Node] = MappingProxyType(dict(nodes))
        self._edges = tuple(edges)
        self._start_node = start_node
        self._config = config

        outgoing: dict[str, list[Edge]] = {n: [] for n in self._nodes}
        for edge in self._edges:
            outgoing[edge.source].append(edge)
        self._outgoing: Mapping[str, tuple[Edge, ...]] = MappingProxyType(
            {n: tuple(es) for n, es in outgoing.items()}
        )

    @property
    def name(self) -> str:
        """Graph name."""
        return self._name

    @property
    def start_node(self) -> str:
        """The unique node with no incoming edges."""
        return self._start_node

    @property
    def config(self) -> GraphConfig:
        """Run configuration."""
        return self._config

    def nodes(self) -> list[str]:
        """Node names in the order they were added."""
        return list(self._nodes)

    def edges(self) -> tuple[Edge, ...]:
        """Edges in declaration order."""
        return self._edges

    def with_config(self, config: GraphConfig) -> Graph:
        """Copy of this graph with a different run configuration.

        Topology is shared; the original graph is unchanged.
        """
        return Graph(
            name=self._name,
            nodes=self._nodes,
            edges=self._edges,
            start_node=self._start_node,
            config=config,
        )

    def get_step(self, name: str) -> Step:
        """Get the step bound to a node.

        Raises:
            KeyError: If the node does not exist.
        """
        try:
            return self._nodes[name].step
        except KeyError:
            raise KeyError(f"Node '{name}' not found in graph '{self._name}'") from None

    def outgoing(self, name: str) -> tuple[Edge, ...]:
        """Outgoing edges of a node in declaration order."""
        return self._outgoing[name]

    def terminal_nodes(self) -> list[str]:
        """Nodes with no outgoing edges, in insertion order."""
        return [n for n, es in self._outgoing.items() if not es]

    def select_next(self, name: str, output: str) -> str | None:
        """Choose the node that follows ``name`` given its latest output.

        Conditional edges are evaluated in declaration order and the first
        whose predicate returns True wins. Failing that, the node's
        unconditional edge (if any) is taken. None means no edge matched
        and the run terminates at ``name``.

        Args:
            name: Node that just ran.
            output: Its output.

        Returns:
            Next node name, or None.

        Raises:
            Exception: Whatever a predicate raises.
        """
        fallback: str | None = None
        for edge in self._outgoing[name]:
            if edge.predicate is None:
                fallback = edge.target
            elif edge.matches(output):
                return edge.target
        return fallback

    async def run(
        self,
        input: str,
        *,
        cancellation: CancellationToken | None = None,
        trace: ExecutionTrace | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> RunResult:
        """Run the graph from its start node.

        Args:
            input: Input for the start node.
            cancellation: Token that aborts the run (and the in-flight step).
            trace: Trace to record visits into.
            metadata: Values exposed to steps via ExecutionContext.metadata.

        Returns:
            RunResult of the run.

        Raises:
            StepError: A step (or a predicate on its output) raised.
            CancelledError: The token fired or the timeout expired.
            MaxIterationsExceededError: max_iterations visits without terminating.
            BudgetExceededError: The configured budget was reached.
        """
        from agentgraph.core.graph.executor import Executor

        executor = Executor(self, cancellation=cancellation, trace=trace, metadata=metadata)
        return await executor.run(input)

    def to_dot(self) -> str:
        """Render the topology in Graphviz DOT format."""
        from agentgraph.core.graph.dot import to_dot

        return to_dot(self)

    def __repr__(self) -> str:
        return (
            f"Graph(name={self._name!r}, nodes={len(self._nodes)}, "
            f"edges={len(self._edges)}, start={self._start_node!r})"
        )

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, name: object) -> bool:
        return name in self._nodes
