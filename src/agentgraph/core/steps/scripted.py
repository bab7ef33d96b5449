"""ScriptedStep - deterministic canned responses.

Plays back a fixed sequence of results, one per call, then a fallback.
Useful for tests, demos, and dry runs of graph topologies without a
model behind the steps.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import TYPE_CHECKING

from agentgraph.core.steps.base import coerce_result
from agentgraph.core.types import StepResult

if TYPE_CHECKING:
    from agentgraph.core.context import ExecutionContext


class ScriptedStep:
    """Step that returns pre-programmed results in order.

    Args:
        responses: Results (or plain strings) returned one per call.
        fallback: Result returned once responses are exhausted. If None,
            an empty output is returned.
        error: Exception raised instead of responding. With fail_count,
            only the first fail_count calls raise.
        fail_count: Number of initial calls that raise ``error``.
        delay: Seconds to sleep before responding (simulated latency).

    Example:
        >>> reviewer = ScriptedStep(["REVISE: too vague", "APPROVED"])
        >>> writer = ScriptedStep(fallback="Draft")
    """

    def __init__(
        self,
        responses: Iterable[StepResult | str] = (),
        fallback: StepResult | str | None = None,
        error: Exception | None = None,
        fail_count: int = 0,
        delay: float = 0.0,
    ) -> None:
        if fail_count < 0:
            raise ValueError("fail_count cannot be negative")
        if delay < 0:
            raise ValueError("delay cannot be negative")

        self._responses = [coerce_result(r) for r in responses]
        self._fallback = coerce_result(fallback) if fallback is not None else None
        self._error = error
        self._fail_count = fail_count
        self._delay = delay
        self._calls = 0
        self._inputs: list[str] = []

    @property
    def calls(self) -> int:
        """Total number of run() calls made."""
        return self._calls

    @property
    def inputs(self) -> list[str]:
        """Inputs received, in call order."""
        return list(self._inputs)

    async def run(self, context: ExecutionContext, input: str) -> StepResult:
        """Return the next scripted result."""
        self._calls += 1
        call_num = self._calls
        self._inputs.append(input)

        if self._delay > 0:
            await asyncio.sleep(self._delay)

        if self._error is not None and (self._fail_count == 0 or call_num <= self._fail_count):
            raise self._error

        index = call_num - self._fail_count - 1
        if 0 <= index < len(self._responses):
            return self._responses[index]

        if self._fallback is not None:
            return self._fallback

        return StepResult(output="")

    def reset(self) -> None:
        """Clear the call counter and recorded inputs."""
        self._calls = 0
        self._inputs = []

    def __repr__(self) -> str:
        return f"ScriptedStep(responses={len(self._responses)}, calls={self._calls})"
