"""Tests for the frozen Graph and its accessors."""

import pytest

from agentgraph.core.errors import MaxIterationsExceededError
from agentgraph.core.graph import Graph, GraphBuilder, GraphConfig, contains
from agentgraph.core.graph.result import RunResult, VisitResult
from agentgraph.core.graph.state import Failed, Running, Terminated, is_terminal
from agentgraph.core.steps import ScriptedStep
from agentgraph.core.types import Usage


@pytest.fixture
def graph():
    return (
        GraphBuilder("g")
        .add_node("a", ScriptedStep())
        .add_node("b", ScriptedStep())
        .add_node("c", ScriptedStep())
        .add_edge("a", "b")
        .add_edge("a", "c", contains("C"))
        .add_edge("c", "b", contains("B"))
        .options(max_iterations=5)
        .build()
    )


class TestGraphAccessors:
    """Tests for read-only accessors."""

    def test_basics(self, graph):
        """Name, start node, config, and size."""
        assert graph.name == "g"
        assert graph.start_node == "a"
        assert graph.config.max_iterations == 5
        assert len(graph) == 3
        assert "b" in graph
        assert "z" not in graph

    def test_outgoing(self, graph):
        """outgoing() lists edges in declaration order."""
        assert [e.target for e in graph.outgoing("a")] == ["b", "c"]
        assert graph.outgoing("b") == ()

    def test_get_step(self, graph):
        """get_step returns the bound step or raises KeyError."""
        assert isinstance(graph.get_step("a"), ScriptedStep)
        with pytest.raises(KeyError, match="'z' not found"):
            graph.get_step("z")

    def test_select_next(self, graph):
        """select_next applies first-match routing with fallback."""
        assert graph.select_next("a", "C please") == "c"
        assert graph.select_next("a", "plain") == "b"
        assert graph.select_next("c", "B") == "b"
        assert graph.select_next("c", "nothing") is None
        assert graph.select_next("b", "anything") is None

    def test_with_config(self, graph):
        """with_config copies the topology with a new config."""
        other = graph.with_config(GraphConfig(max_iterations=2))
        assert other.config.max_iterations == 2
        assert graph.config.max_iterations == 5
        assert other.nodes() == graph.nodes()
        assert other.edges() == graph.edges()

    def test_no_mutators(self, graph):
        """The graph exposes no add methods."""
        assert isinstance(graph, Graph)
        assert not hasattr(graph, "add_node")
        assert not hasattr(graph, "add_edge")


class TestStates:
    """Tests for executor state types."""

    def test_is_terminal(self):
        """Only Terminated and Failed are terminal."""
        assert is_terminal(Running(node="a", visits=0, input="x")) is False
        assert is_terminal(Terminated(output="done")) is True
        assert is_terminal(Failed(error=MaxIterationsExceededError(3))) is True


class TestRunResult:
    """Tests for RunResult helpers."""

    def test_helpers_and_to_dict(self):
        """Derived values and serialization."""
        visit = VisitResult(node="a", visit=1, input="x", output="y", usage=Usage(1, 1, 2))
        result = RunResult(
            run_id="r1",
            graph_name="g",
            output="y",
            total_usage=Usage(1, 1, 2),
            node_results={"a": [visit]},
            path=["a"],
        )

        assert result.visits == 1
        assert result.final_node == "a"
        assert result.last("a") is visit
        assert result.last("b") is None

        data = result.to_dict()
        assert data["path"] == ["a"]
        assert data["node_results"]["a"][0]["output"] == "y"
        assert data["total_usage"]["total_tokens"] == 2

    def test_visit_metadata(self):
        """Visit metadata is serialized and does not break hashing."""
        visit = VisitResult(node="a", visit=1, input="x", output="y", metadata={"model": "m"})
        assert visit.to_dict()["metadata"] == {"model": "m"}
        assert isinstance(hash(visit), int)
