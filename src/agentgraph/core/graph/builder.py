"""GraphBuilder - mutable accumulation of nodes, edges, and options.

Nodes and edges may be added in any order; references are only checked
by build(), so an edge can be declared before its nodes:

    graph = (
        GraphBuilder("review-loop")
        .add_edge("writer", "reviewer")
        .add_node("writer", writer)
        .add_node("reviewer", reviewer)
        .build()
    )

build() fails fast: it raises the first problem found and never
returns a partial graph.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from agentgraph.core.errors import (
    AmbiguousStartNodeError,
    DuplicateNodeError,
    GraphBuildError,
    InvalidEdgeError,
    NoStartNodeError,
)
from agentgraph.core.graph.config import GraphConfig
from agentgraph.core.graph.edges import Edge, Node, Predicate
from agentgraph.core.graph.graph import Graph
from agentgraph.core.run_logging import log_start
from agentgraph.core.validation import validate_name

if TYPE_CHECKING:
    from agentgraph.core.steps.base import Step

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Fluent builder that validates and freezes a Graph.

    Every mutator returns the builder for chaining. Problems that the
    graph model itself defines (duplicate nodes, over-guarded edges) are
    recorded and raised by build(); programming errors (an empty name, a
    non-callable predicate) raise immediately.

    Args:
        name: Graph name (used in logs, traces, and DOT output).

    Raises:
        ValueError: If name is invalid.
    """

    def __init__(self, name: str) -> None:
        validate_name(name, "graph")
        self._name = name
        self._nodes: dict[str, Node] = {}
        self._edges: list[Edge] = []
        self._config = GraphConfig()
        self._error: GraphBuildError | None = None

    @property
    def name(self) -> str:
        """Graph name."""
        return self._name

    def add_node(self, name: str, step: Step) -> GraphBuilder:
        """Register a node.

        Args:
            name: Unique node name.
            step: Step run on each visit of the node.

        Returns:
            Self for chaining.

        Raises:
            ValueError: If name is invalid.
            TypeError: If step has no run() method.
        """
        validate_name(name, "node")
        if not callable(getattr(step, "run", None)):
            raise TypeError(f"Node '{name}': step must have a run() method")

        if name in self._nodes:
            self._record(DuplicateNodeError(name))
            return self

        self._nodes[name] = Node(name=name, step=step)
        return self

    def add_edge(self, source: str, target: str, *predicates: Predicate) -> GraphBuilder:
        """Register a directed edge.

        Args:
            source: Source node name.
            target: Destination node name.
            *predicates: Zero (unconditional) or one guard. More than one
                is recorded as InvalidEdgeError; compose guards into one
                callable instead.

        Returns:
            Self for chaining.

        Raises:
            TypeError: If the predicate is not callable.
        """
        if len(predicates) > 1:
            self._record(
                InvalidEdgeError(
                    source, target, f"at most one predicate allowed, got {len(predicates)}"
                )
            )
            return self

        predicate = predicates[0] if predicates else None
        if predicate is not None and not callable(predicate):
            raise TypeError(
                f"Edge '{source}' -> '{target}': predicate must be callable, "
                f"got {type(predicate).__name__}"
            )

        self._edges.append(Edge(source=source, target=target, predicate=predicate))
        return self

    def options(self, config: GraphConfig | None = None, **overrides: Any) -> GraphBuilder:
        """Set the run configuration.

        Last call wins; nothing is merged with earlier calls.

        Args:
            config: Complete configuration. Defaults to GraphConfig().
            **overrides: GraphConfig fields applied on top of ``config``
                (e.g. max_iterations=3).

        Returns:
            Self for chaining.

        Raises:
            ValueError: If the resulting configuration is invalid.
            TypeError: If an override names an unknown field.
        """
        base = config if config is not None else GraphConfig()
        self._config = replace(base, **overrides) if overrides else base
        return self

    def build(self) -> Graph:
        """Validate and freeze the graph.

        Checks, in order:
        1. Problems recorded while adding nodes and edges
        2. Edges referencing unknown nodes
        3. More than one unconditional edge leaving a node
        4. Exactly one node without incoming edges

        Returns:
            Immutable Graph.

        Raises:
            DuplicateNodeError: Two nodes share a name.
            InvalidEdgeError: An edge is over-guarded, dangling, or a second
                unconditional edge from the same node.
            NoStartNodeError: No nodes, or every node has an incoming edge.
            AmbiguousStartNodeError: Several nodes have no incoming edges.
        """
        if self._error is not None:
            raise self._error

        for edge in self._edges:
            if edge.source not in self._nodes:
                raise InvalidEdgeError(edge.source, edge.target, f"unknown node '{edge.source}'")
            if edge.target not in self._nodes:
                raise InvalidEdgeError(edge.source, edge.target, f"unknown node '{edge.target}'")

        unconditional: dict[str, str] = {}
        for edge in self._edges:
            if edge.conditional:
                continue
            if edge.source in unconditional:
                raise InvalidEdgeError(
                    edge.source,
                    edge.target,
                    (
                        f"node already has an unconditional edge to "
                        f"'{unconditional[edge.source]}'; fan-out is not supported"
                    ),
                )
            unconditional[edge.source] = edge.target

        if not self._nodes:
            raise NoStartNodeError("No start node: graph has no nodes")

        targets = {edge.target for edge in self._edges}
        starts = [name for name in self._nodes if name not in targets]
        if not starts:
            raise NoStartNodeError()
        if len(starts) > 1:
            raise AmbiguousStartNodeError(starts)

        log_start(
            logger,
            self._name,
            "graph_built",
            nodes=len(self._nodes),
            edges=len(self._edges),
            start=starts[0],
            max_iterations=self._config.max_iterations,
        )

        return Graph(
            name=self._name,
            nodes=self._nodes,
            edges=tuple(self._edges),
            start_node=starts[0],
            config=self._config,
        )

    def _record(self, error: GraphBuildError) -> None:
        """Remember the first build error; later ones are dropped."""
        if self._error is None:
            self._error = error

    def __repr__(self) -> str:
        return (
            f"GraphBuilder(name={self._name!r}, nodes={len(self._nodes)}, "
            f"edges={len(self._edges)})"
        )
