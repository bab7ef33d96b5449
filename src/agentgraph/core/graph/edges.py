"""Nodes, edges, and edge predicates.

A Predicate is a pure callable from the source node's latest output to a
bool. An edge without a predicate is unconditional.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agentgraph.core.steps.base import Step

Predicate = Callable[[str], bool]


@dataclass(frozen=True)
class Node:
    """A named binding of a Step within a graph.

    Attributes:
        name: Unique identifier within the graph.
        step: The step run on each visit.
    """

    name: str
    step: Step


@dataclass(frozen=True)
class Edge:
    """Directed, optionally guarded transition between two nodes.

    Attributes:
        source: Source node name.
        target: Destination node name.
        predicate: Guard evaluated on the source's latest output.
            None means the edge is unconditional.
    """

    source: str
    target: str
    predicate: Predicate | None = None

    @property
    def conditional(self) -> bool:
        """True if the edge carries a predicate."""
        return self.predicate is not None

    def matches(self, output: str) -> bool:
        """Evaluate the guard against a step output.

        Unconditional edges always match.
        """
        if self.predicate is None:
            return True
        return bool(self.predicate(output))


def when(fn: Callable[[str], bool]) -> Predicate:
    """Wrap a function as an edge predicate.

    Exists for readability at the call site:

        builder.add_edge("reviewer", "reviser", when(lambda out: "REVISE" in out))

    Raises:
        TypeError: If fn is not callable.
    """
    if not callable(fn):
        raise TypeError(f"Predicate must be callable, got {type(fn).__name__}")
    return fn


def contains(marker: str, case_sensitive: bool = True) -> Predicate:
    """Predicate that is true when the output contains ``marker``.

    Args:
        marker: Substring to look for.
        case_sensitive: Match case exactly (default True).
    """
    if not marker:
        raise ValueError("marker cannot be empty")

    if case_sensitive:

        def _contains(output: str) -> bool:
            return marker in output

    else:
        folded = marker.casefold()

        def _contains(output: str) -> bool:
            return folded in output.casefold()

    _contains.__name__ = f"contains({marker!r})"
    return _contains


def always() -> Predicate:
    """Predicate that is always true.

    Unlike an unconditional edge it is still evaluated in declaration
    order alongside the other guarded edges, so it acts as an explicit
    catch-all placed wherever the caller wants.
    """

    def _always(output: str) -> bool:
        return True

    return _always
