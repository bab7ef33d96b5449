"""Tests for agentgraph.core.errors module."""

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
from agentgraph.core.types import Usage


class TestHierarchy:
    """Tests for the error class hierarchy."""

    def test_build_errors(self):
        """Build-time errors derive from GraphBuildError."""
        for error in (
            DuplicateNodeError("a"),
            InvalidEdgeError("a", "b", "unknown node 'b'"),
            NoStartNodeError(),
            AmbiguousStartNodeError(["a", "b"]),
        ):
            assert isinstance(error, GraphBuildError)
            assert isinstance(error, GraphError)
            assert not isinstance(error, GraphRunError)

    def test_run_errors(self):
        """Run-time errors derive from GraphRunError."""
        for error in (
            StepError("a", 1, RuntimeError("boom")),
            CancelledError(),
            MaxIterationsExceededError(3),
            BudgetExceededError("Token limit exceeded: 5/5", Usage(total_tokens=5), 0.0),
        ):
            assert isinstance(error, GraphRunError)
            assert isinstance(error, GraphError)
            assert not isinstance(error, GraphBuildError)


class TestMessages:
    """Tests for error attributes and messages."""

    def test_duplicate_node(self):
        """DuplicateNodeError carries the name."""
        error = DuplicateNodeError("writer")
        assert error.name == "writer"
        assert "writer" in str(error)

    def test_invalid_edge(self):
        """InvalidEdgeError carries both endpoints and the reason."""
        error = InvalidEdgeError("a", "b", "unknown node 'b'")
        assert (error.source, error.target) == ("a", "b")
        assert str(error) == "Invalid edge 'a' -> 'b': unknown node 'b'"

    def test_ambiguous_start(self):
        """AmbiguousStartNodeError lists the candidates."""
        error = AmbiguousStartNodeError(["a", "c"])
        assert error.candidates == ["a", "c"]
        assert "a, c" in str(error)

    def test_step_error(self):
        """StepError names the node and visit and keeps the cause."""
        cause = RuntimeError("boom")
        error = StepError("reviewer", 2, cause)
        assert error.node == "reviewer"
        assert error.visit == 2
        assert error.cause is cause
        assert str(error) == "Step 'reviewer' failed on visit 2: boom"

    def test_max_iterations(self):
        """MaxIterationsExceededError carries the bound."""
        error = MaxIterationsExceededError(3)
        assert error.max_iterations == 3
        assert "3" in str(error)

    def test_budget_exceeded(self):
        """BudgetExceededError carries the totals at the time."""
        error = BudgetExceededError("Cost limit exceeded", Usage(total_tokens=7), 0.5)
        assert error.reason == "Cost limit exceeded"
        assert error.usage.total_tokens == 7
        assert error.cost == 0.5
