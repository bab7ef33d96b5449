"""Step abstraction - the unit of work a graph node wraps.

A Step takes text input and produces a StepResult (text output plus
usage and cost). The graph executor depends only on this contract and
never on how a step talks to a model or tool.

- Step: Protocol every step satisfies
- FunctionStep: Wraps a sync or async callable
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from agentgraph.core.run_logging import log_complete, log_error, log_start
from agentgraph.core.types import StepResult

if TYPE_CHECKING:
    from agentgraph.core.context import ExecutionContext

logger = logging.getLogger(__name__)


@runtime_checkable
class Step(Protocol):
    """Protocol for all executable units of work.

    Each invocation is independent: the executor keeps no hidden state
    between visits of the same node. A step signals failure by raising;
    the executor wraps the exception in StepError and fails the run.

    Example:
        >>> class Upper:
        ...     async def run(self, context, input):
        ...         return StepResult(output=input.upper())
    """

    async def run(self, context: ExecutionContext, input: str) -> StepResult:
        """Run this step.

        Args:
            context: Context of the visit (run id, node, visit index, ...).
            input: Text input, either the caller's initial input or the
                previous node's output.

        Returns:
            The step's StepResult.
        """
        ...


def coerce_result(value: Any) -> StepResult:
    """Normalise a step return value into a StepResult.

    Args:
        value: A StepResult or a plain string.

    Returns:
        StepResult (strings become a result with zero usage and cost).

    Raises:
        TypeError: If the value is neither.
    """
    if isinstance(value, StepResult):
        return value
    if isinstance(value, str):
        return StepResult(output=value)
    raise TypeError(f"Step must return StepResult or str, got {type(value).__name__}")


@dataclass
class FunctionStep:
    """Wraps a sync or async callable as a step.

    The wrapped function receives (context, input) and returns either a
    StepResult or a plain string. Both sync and async functions are
    supported.

    Args:
        fn: Sync or async callable accepting (ExecutionContext, str).
        name: Label used in logs (defaults to the function name).

    Example:
        >>> step = FunctionStep(lambda ctx, text: text.upper())

        # Async function reporting usage
        >>> async def summarize(ctx, text):
        ...     reply = await client.complete(text)
        ...     return StepResult(output=reply.text, usage=reply.usage, cost=reply.cost)
        >>> step = FunctionStep(summarize)
    """

    fn: Callable[[ExecutionContext, str], Any]
    name: str | None = None
    def __post_init__(self) -> None:
        if not callable(self.fn):
            raise TypeError(f"FunctionStep requires a callable, got {type(self.fn).__name__}")
        if self.name is None:
            self.name = getattr(self.fn, "__name__", repr(self.fn))

    async def run(self, context: ExecutionContext, input: str) -> StepResult:
        """Call the wrapped function and normalise its result."""
        identifier = context.node or str(self.name)
        log_start(logger, identifier, "function_start", fn=self.name, visit=context.visit)

        start_mono = time.monotonic()
        try:
            result = self.fn(context, input)
            if asyncio.iscoroutine(result):
                result = await result
            step_result = coerce_result(result)
        except Exception as e:
            log_error(
                logger,
                identifier,
                "function_failed",
                e,
                fn=self.name,
                duration_s=f"{time.monotonic() - start_mono:.1f}",
            )
            raise

        log_complete(logger, identifier, "function_complete", time.monotonic() - start_mono)
        return step_result

    def __repr__(self) -> str:
        return f"FunctionStep(name={self.name!r})"
