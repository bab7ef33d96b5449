"""Executor states.

A run is always in exactly one of three states:

    Running(node, visits, input) -> Running | Terminated | Failed

Terminated and Failed are terminal. The executor loop dispatches on the
state type, so a Failed run has no output to leak and a Terminated run
has no error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from agentgraph.core.errors import GraphRunError


@dataclass(frozen=True)
class Running:
    """The run is about to visit ``node``.

    Attributes:
        node: Node to visit next.
        visits: Total step executions so far in the run.
        input: Input the node's step will receive.
    """

    node: str
    visits: int
    input: str


@dataclass(frozen=True)
class Terminated:
    """The run ended at a node with no matching outgoing edge.

    Attributes:
        output: That node's output; the run's final output.
    """

    output: str


@dataclass(frozen=True)
class Failed:
    """The run stopped with an error.

    Attributes:
        error: Why the run stopped.
    """

    error: GraphRunError


RunState = Union[Running, Terminated, Failed]


def is_terminal(state: RunState) -> bool:
    """True for Terminated and Failed."""
    return isinstance(state, (Terminated, Failed))
