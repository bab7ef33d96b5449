"""Graph file loading for the CLI."""

from __future__ import annotations

import logging
from typing import Any

from agentgraph.core.graph import GraphBuilder, GraphConfig, always, contains, when
from agentgraph.core.graph.graph import Graph
from agentgraph.core.run_logging import log_info
from agentgraph.core.steps import FunctionStep, ScriptedStep
from agentgraph.core.types import StepResult, Usage

logger = logging.getLogger(__name__)


def load_graph_from_file(filepath: str) -> Graph:
    """Load a graph from a Python file.

    The file is executed with the common agentgraph names already in
    scope and must bind ``graph`` to a Graph or a GraphBuilder:

        writer = FunctionStep(lambda ctx, text: f"Draft: {text}")
        graph = GraphBuilder("one-step").add_node("writer", writer)

    A GraphBuilder is built before it is returned.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file defines no ``graph``.
        TypeError: If ``graph`` is neither a Graph nor a GraphBuilder.
        GraphBuildError: If building the graph fails.
    """
    namespace: dict[str, Any] = {
        "GraphBuilder": GraphBuilder,
        "GraphConfig": GraphConfig,
        "FunctionStep": FunctionStep,
        "ScriptedStep": ScriptedStep,
        "StepResult": StepResult,
        "Usage": Usage,
        "always": always,
        "contains": contains,
        "when": when,
        "__name__": "__agentgraph_graph__",
        "__file__": filepath,
    }

    with open(filepath) as f:
        code = f.read()

    exec(compile(code, filepath, "exec"), namespace)

    if "graph" not in namespace:
        raise ValueError(f"No 'graph' variable found in {filepath}")

    graph = namespace["graph"]
    if isinstance(graph, GraphBuilder):
        graph = graph.build()
    if isinstance(graph, Graph):
        log_info(logger, graph.name, "graph_loaded", file=filepath, nodes=len(graph))
        return graph
    raise TypeError(
        f"'graph' in {filepath} must be a Graph or GraphBuilder, got {type(graph).__name__}"
    )
