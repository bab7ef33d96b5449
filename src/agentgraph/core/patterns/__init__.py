"""Patterns - ready-made graph shapes."""

from agentgraph.core.patterns.review import build_review_loop, demo_steps

__all__ = ["build_review_loop", "demo_steps"]
