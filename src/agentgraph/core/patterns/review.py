"""Review loop: writer -> reviewer <-> reviser.

The writer drafts once. The reviewer answers with either a revision
request (containing the revise marker) or an approval. A revision
request routes to the reviser, whose output goes back to the reviewer.
An approval matches no outgoing edge, so the run terminates with the
reviewer's verdict as the final output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from agentgraph.core.graph.builder import GraphBuilder
from agentgraph.core.graph.edges import contains
from agentgraph.core.steps.scripted import ScriptedStep
from agentgraph.core.types import StepResult, Usage

if TYPE_CHECKING:
    from agentgraph.core.graph.graph import Graph
    from agentgraph.core.steps.base import Step

DEFAULT_REVISE_MARKER = "REVISE"
DEFAULT_MAX_ROUNDS = 3


def build_review_loop(
    writer: Step,
    reviewer: Step,
    reviser: Step,
    *,
    revise_marker: str = DEFAULT_REVISE_MARKER,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
    name: str = "review-loop",
) -> Graph:
    """Build a write-review-revise graph.

    Each round is one reviewer visit. A run approved in the last round
    visits the writer once, the reviewer max_rounds times and the
    reviser max_rounds - 1 times, so the graph allows 2 * max_rounds
    visits in total. A reviewer that keeps asking for revisions fails
    the run with MaxIterationsExceededError.

    Args:
        writer: Produces the first draft from the caller's input.
        reviewer: Reviews a draft; includes ``revise_marker`` to ask for changes.
        reviser: Revises based on the reviewer's feedback.
        revise_marker: Substring that routes the reviewer to the reviser.
        max_rounds: Maximum number of reviewer visits.
        name: Graph name.

    Returns:
        Built Graph.

    Raises:
        ValueError: If max_rounds < 1 or revise_marker is empty.
    """
    if max_rounds < 1:
        raise ValueError(f"max_rounds must be >= 1, got {max_rounds}")

    return (
        GraphBuilder(name)
        .add_node("writer", writer)
        .add_node("reviewer", reviewer)
        .add_node("reviser", reviser)
        .add_edge("writer", "reviewer")
        .add_edge("reviewer", "reviser", contains(revise_marker))
        .add_edge("reviser", "reviewer")
        .options(max_iterations=2 * max_rounds)
        .build()
    )


def demo_steps() -> tuple[ScriptedStep, ScriptedStep, ScriptedStep]:
    """Scripted writer, reviewer, and reviser for demos and tests.

    The reviewer asks for one revision, then approves.
    """
    writer = ScriptedStep(
        fallback=StepResult(
            output=(
                "Draft: agentgraph runs steps as a graph. "
                "It supports loops and conditional edges."
            ),
            usage=Usage(prompt_tokens=20, completion_tokens=20, total_tokens=40),
            cost=0.0004,
        )
    )
    reviewer = ScriptedStep(
        [
            StepResult(
                output=(
                    "REVISE: Too vague. Explain how routing works "
                    "and how loops are bounded."
                ),
                usage=Usage(prompt_tokens=30, completion_tokens=20, total_tokens=50),
                cost=0.0005,
            ),
            StepResult(
                output="APPROVED: Clear, specific, and well-structured. Good to publish.",
                usage=Usage(prompt_tokens=50, completion_tokens=12, total_tokens=62),
                cost=0.0006,
            ),
        ]
    )
    reviser = ScriptedStep(
        fallback=StepResult(
            output=(
                "agentgraph runs steps as a directed graph. Edges are chosen by the "
                "first matching predicate, and max_iterations bounds every loop."
            ),
            usage=Usage(prompt_tokens=40, completion_tokens=30, total_tokens=70),
            cost=0.0007,
        )
    )
    return writer, reviewer, reviser
