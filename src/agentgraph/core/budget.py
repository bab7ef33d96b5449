"""Budget limits for graph runs.

Budgets cap resource consumption across a whole run:
- Token usage
- Cost in dollars

Visit count is bounded separately by GraphConfig.max_iterations and
wall-clock time by GraphConfig.timeout_seconds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agentgraph.core.types import Usage


@dataclass(frozen=True)
class Budget:
    """Resource limits for a graph run.

    All limits are optional - only set limits are enforced.
    A budget with no limits set allows unlimited execution.

    Limits are checked before each visit against the totals accumulated
    so far, so the visit that crosses a limit still completes and is
    counted; the next one does not start.

    Attributes:
        max_tokens: Maximum total tokens allowed.
        max_cost_dollars: Maximum cost in dollars.

    Example:
        # Stop once 10000 tokens or $0.50 have been spent
        budget = Budget(max_tokens=10000, max_cost_dollars=0.50)
    """

    max_tokens: int | None = None
    max_cost_dollars: float | None = None

    def __post_init__(self) -> None:
        """Validate limits."""
        if self.max_tokens is not None and self.max_tokens <= 0:
            raise ValueError("max_tokens must be > 0")
        if self.max_cost_dollars is not None and self.max_cost_dollars <= 0:
            raise ValueError("max_cost_dollars must be > 0")

    def is_limited(self) -> bool:
        """Check if any limits are set."""
        return self.max_tokens is not None or self.max_cost_dollars is not None

    def exceeded_by(self, usage: Usage, cost: float) -> tuple[bool, str | None]:
        """Check if accumulated usage and cost exceed this budget.

        Args:
            usage: Accumulated token usage.
            cost: Accumulated cost in dollars.

        Returns:
            Tuple of (exceeded: bool, reason: str | None).
            If exceeded is True, reason explains which limit was hit.
        """
        if self.max_tokens is not None and usage.total_tokens >= self.max_tokens:
            return True, f"Token limit exceeded: {usage.total_tokens}/{self.max_tokens}"

        if self.max_cost_dollars is not None and cost >= self.max_cost_dollars:
            return (
                True,
                f"Cost limit exceeded: ${cost:.4f}/${self.max_cost_dollars:.4f}",
            )

        return False, None
