"""Run configuration for graphs.

GraphConfig carries the run-time bounds of a graph. It is frozen so a
built Graph can be shared between concurrent runs.

Environment Variables (read by GraphConfig.from_env):
    AGENTGRAPH_MAX_ITERATIONS: Total node executions allowed per run
    AGENTGRAPH_TIMEOUT_SECONDS: Wall-clock limit for a run
    AGENTGRAPH_MAX_TOKENS: Token budget for a run
    AGENTGRAPH_MAX_COST_DOLLARS: Cost budget for a run
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from agentgraph.core.budget import Budget

DEFAULT_MAX_ITERATIONS = 10


@dataclass(frozen=True)
class GraphConfig:
    """Execution bounds for a graph run.

    Attributes:
        max_iterations: Hard cap on total node executions in one run
            (not per node). Reaching it without terminating fails the run
            with MaxIterationsExceededError.
        timeout_seconds: Wall-clock limit for the whole run. None means
            no limit beyond the caller's own.
        budget: Optional token/cost ceilings.

    Example:
        >>> config = GraphConfig(max_iterations=5, timeout_seconds=30.0)
        >>> graph = GraphBuilder("review").options(config)...
    """

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    timeout_seconds: float | None = None
    budget: Budget | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, int):
            raise ValueError(
                f"max_iterations must be an integer, got {type(self.max_iterations).__name__}"
            )
        if self.max_iterations <= 0:
            raise ValueError("max_iterations must be > 0")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")

    @classmethod
    def from_env(
        cls,
        prefix: str = "AGENTGRAPH_",
        environ: Mapping[str, str] | None = None,
    ) -> GraphConfig:
        """Build a config from environment variables.

        Unset variables keep their defaults.

        Args:
            prefix: Variable name prefix.
            environ: Mapping to read from (defaults to os.environ).

        Returns:
            GraphConfig built from the environment.

        Raises:
            ValueError: If a variable is set to an invalid value.
        """
        env = os.environ if environ is None else environ

        max_iterations = _read(env, f"{prefix}MAX_ITERATIONS", int)
        timeout_seconds = _read(env, f"{prefix}TIMEOUT_SECONDS", float)
        max_tokens = _read(env, f"{prefix}MAX_TOKENS", int)
        max_cost = _read(env, f"{prefix}MAX_COST_DOLLARS", float)

        budget = None
        if max_tokens is not None or max_cost is not None:
            budget = Budget(max_tokens=max_tokens, max_cost_dollars=max_cost)

        return cls(
            max_iterations=DEFAULT_MAX_ITERATIONS if max_iterations is None else max_iterations,
            timeout_seconds=timeout_seconds,
            budget=budget,
        )


def _read(env: Mapping[str, str], key: str, convert: type) -> int | float | None:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return None
    try:
        return convert(raw.strip())
    except ValueError:
        raise ValueError(f"{key} must be {convert.__name__}, got {raw!r}") from None
