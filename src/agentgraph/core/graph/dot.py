"""DOT export for Graphviz visualization.

Output is a pure function of the frozen graph: nodes render in insertion
order, edges in declaration order, so the text is stable across runs
and diffable in tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agentgraph.core.graph.graph import Graph


def quote(value: str) -> str:
    """Quote a string as a DOT ID."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def to_dot(graph: Graph) -> str:
    """Render a graph in Graphviz DOT format.

    The start node is drawn with a double border and guarded edges are
    dashed and labelled "guarded".

    Example output:
        digraph "review-loop" {
          rankdir=LR;
          node [shape=box, style=rounded];
          "writer" [peripheries=2];
          "reviewer";
          "writer" -> "reviewer";
          "reviewer" -> "reviser" [label="guarded", style=dashed];
        }
    """
    lines = [
        f"digraph {quote(graph.name)} {{",
        "  rankdir=LR;",
        "  node [shape=box, style=rounded];",
    ]

    for name in graph.nodes():
        if name == graph.start_node:
            lines.append(f"  {quote(name)} [peripheries=2];")
        else:
            lines.append(f"  {quote(name)};")

    for edge in graph.edges():
        line = f"  {quote(edge.source)} -> {quote(edge.target)}"
        if edge.conditional:
            line += ' [label="guarded", style=dashed]'
        lines.append(line + ";")

    lines.append("}")
    return "\n".join(lines) + "\n"
