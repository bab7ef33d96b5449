"""Tests for agentgraph.core.budget module."""

import pytest

from agentgraph.core.budget import Budget
from agentgraph.core.types import Usage


class TestBudget:
    """Tests for Budget dataclass."""

    def test_default_values(self):
        """Test default values (no limits)."""
        budget = Budget()

        assert budget.max_tokens is None
        assert budget.max_cost_dollars is None
        assert budget.is_limited() is False

    def test_is_limited_true(self):
        """Test is_limited returns True when a limit is set."""
        assert Budget(max_tokens=100).is_limited() is True
        assert Budget(max_cost_dollars=1.0).is_limited() is True

    def test_rejects_non_positive_limits(self):
        """Limits must be positive."""
        with pytest.raises(ValueError, match="max_tokens"):
            Budget(max_tokens=0)
        with pytest.raises(ValueError, match="max_cost_dollars"):
            Budget(max_cost_dollars=-1.0)

    def test_frozen(self):
        """Budgets cannot be mutated."""
        budget = Budget(max_tokens=10)
        with pytest.raises(AttributeError):
            budget.max_tokens = 20  # type: ignore[misc]


class TestBudgetExceededBy:
    """Tests for Budget.exceeded_by()."""

    def test_unlimited_never_exceeded(self):
        """A budget without limits is never exceeded."""
        exceeded, reason = Budget().exceeded_by(Usage(total_tokens=10**9), 10**6)
        assert exceeded is False
        assert reason is None

    def test_under_token_limit(self):
        """Usage below the token limit is not exceeded."""
        exceeded, _ = Budget(max_tokens=100).exceeded_by(Usage(total_tokens=99), 0.0)
        assert exceeded is False

    def test_token_limit_reached(self):
        """Reaching the token limit counts as exceeded."""
        exceeded, reason = Budget(max_tokens=100).exceeded_by(Usage(total_tokens=100), 0.0)
        assert exceeded is True
        assert reason == "Token limit exceeded: 100/100"

    def test_cost_limit_reached(self):
        """Reaching the cost limit counts as exceeded."""
        exceeded, reason = Budget(max_cost_dollars=0.01).exceeded_by(Usage(), 0.02)
        assert exceeded is True
        assert reason is not None
        assert reason.startswith("Cost limit exceeded")
