"""Pure data types shared by steps and the graph executor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Usage:
    """Token usage reported by a step.

    Attributes:
        prompt_tokens: Tokens in the request.
        completion_tokens: Tokens in the response.
        total_tokens: Total tokens (usually prompt + completion).
    """

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __add__(self, other: Usage) -> Usage:
        if not isinstance(other, Usage):
            return NotImplemented
        return Usage(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            completion_tokens=self.completion_tokens + other.completion_tokens,
            total_tokens=self.total_tokens + other.total_tokens,
        )

    def to_dict(self) -> dict[str, int]:
        """Convert to JSON-serializable dict."""
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass(frozen=True)
class StepResult:
    """What a single step invocation produces.

    Attributes:
        output: Text output, forwarded verbatim to the next node.
        usage: Token usage of the invocation.
        cost: Cost of the invocation in dollars.
        metadata: Free-form extra data (model name, turns, ...), copied onto
            the VisitResult of the visit. Excluded from hashing.
    """

    output: str
    usage: Usage = field(default_factory=Usage)
    cost: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict, hash=False)
