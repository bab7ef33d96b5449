"""Output formatting for CLI commands."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import rich_click as click
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from agentgraph.core.graph.result import RunResult
    from agentgraph.core.trace import ExecutionTrace


def output_json(data: Any, indent: int = 2) -> None:
    """Output data as formatted JSON."""
    click.echo(json.dumps(data, indent=indent))


def print_run_result(console: Console, result: RunResult) -> None:
    """Print the visits, totals and final output of a run.

    Args:
        console: Rich console for output.
        result: Result of the run.
    """
    table = Table(title=f"Run {result.run_id}", title_justify="left")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Node", style="bold")
    table.add_column("Visit", justify="right")
    table.add_column("Tokens", justify="right")
    table.add_column("Cost", justify="right")
    table.add_column("Output", overflow="ellipsis", no_wrap=True, max_width=48)

    # path and node_results describe the same visits; walk both in order
    seen: dict[str, int] = {}
    for index, node in enumerate(result.path, 1):
        visit = result.node_results[node][seen.get(node, 0)]
        seen[node] = seen.get(node, 0) + 1
        table.add_row(
            str(index),
            escape(node),
            str(visit.visit),
            str(visit.usage.total_tokens),
            f"${visit.cost:.6f}",
            escape(visit.output.replace("\n", " ")),
        )

    console.print(table)
    console.print(
        f"[bold]Visits:[/] {result.visits}  "
        f"[bold]Tokens:[/] {result.total_usage.total_tokens}  "
        f"[bold]Cost:[/] ${result.total_cost:.6f}"
    )
    console.print()
    console.print(f"[bold green]Final output[/] ({escape(result.final_node or '-')}):")
    console.print(escape(result.output), soft_wrap=True)


def print_trace(console: Console, trace: ExecutionTrace) -> None:
    """Print a trace summary."""
    console.print()
    console.print("[bold]Trace[/]")
    console.print(escape(trace.explain()), soft_wrap=True)


def print_error(console: Console, error: BaseException) -> None:
    """Print an error in red."""
    console.print(f"[bold red]Error:[/] [red]{escape(str(error))}[/]", soft_wrap=True)
