"""Steps - units of work wrapped by graph nodes."""

from agentgraph.core.steps.base import FunctionStep, Step, coerce_result
from agentgraph.core.steps.scripted import ScriptedStep

__all__ = [
    "FunctionStep",
    "ScriptedStep",
    "Step",
    "coerce_result",
]
