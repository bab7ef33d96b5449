"""Pytest configuration and fixtures."""

from __future__ import annotations

import logging

import pytest

from agentgraph.core import logging_config
from agentgraph.core.graph import GraphBuilder, contains
from agentgraph.core.steps import FunctionStep, ScriptedStep


@pytest.fixture
def echo_step():
    """Step that returns its input unchanged."""
    return FunctionStep(lambda ctx, text: text, name="echo")


@pytest.fixture
def review_steps():
    """Writer, reviewer, and reviser for the canonical review scenario.

    The reviewer asks for a revision on its first call and approves on
    its second.
    """
    writer = ScriptedStep(fallback="D1")
    reviewer = ScriptedStep(["REVISE: add detail", "APPROVED: ship it"])
    reviser = ScriptedStep(fallback="D2")
    return writer, reviewer, reviser


@pytest.fixture
def review_builder(review_steps):
    """Builder for writer -> reviewer -> (reviser -> reviewer) without options."""
    writer, reviewer, reviser = review_steps
    return (
        GraphBuilder("review-loop")
        .add_node("writer", writer)
        .add_node("reviewer", reviewer)
        .add_node("reviser", reviser)
        .add_edge("writer", "reviewer")
        .add_edge("reviewer", "reviser", contains("REVISE"))
        .add_edge("reviser", "reviewer")
    )


@pytest.fixture
def restore_logging():
    """Restore root logger state after tests that call configure_logging()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    configured = logging_config._configured

    yield root

    root.handlers[:] = handlers
    root.setLevel(level)
    logging_config._configured = configured
