"""CLI entry point."""

from __future__ import annotations

import asyncio
import sys
from dataclasses import replace
from typing import NoReturn

import rich_click as click
from dotenv import find_dotenv, load_dotenv
from rich.console import Console

from agentgraph.core.errors import GraphError
from agentgraph.core.graph import GraphConfig
from agentgraph.core.logging_config import LOG_LEVELS, configure_logging
from agentgraph.core.patterns import build_review_loop, demo_steps
from agentgraph.core.trace import ExecutionTrace
from agentgraph.frontends.cli.loader import load_graph_from_file
from agentgraph.frontends.cli.output import (
    output_json,
    print_error,
    print_run_result,
    print_trace,
)

# Configure rich-click styling
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running '--help' for more information."
click.rich_click.ERRORS_EPILOGUE = ""
click.rich_click.MAX_WIDTH = 100

DEMO_INPUT = "Write a one-paragraph description of agentgraph."


def _fail(error: BaseException) -> NoReturn:
    print_error(Console(stderr=True), error)
    sys.exit(1)


def _execute(graph, input: str, json_output: bool, show_trace: bool) -> None:
    """Run a graph and print the outcome; exits with 1 on failure."""
    trace = ExecutionTrace(graph_name=graph.name)
    console = Console()

    try:
        result = asyncio.run(graph.run(input, trace=trace))
    except GraphError as e:
        if json_output:
            output_json({"error": str(e), "error_type": type(e).__name__, "trace": trace.to_dict()})
        elif show_trace:
            print_trace(console, trace)
        _fail(e)

    if json_output:
        data = result.to_dict()
        if show_trace:
            data["trace"] = trace.to_dict()
        output_json(data)
        return

    print_run_result(console, result)
    if show_trace:
        print_trace(console, trace)


# =========================================================================
# Root CLI
# =========================================================================
@click.group()
@click.version_option(package_name="agentgraph")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level (default: $AGENTGRAPH_LOG_LEVEL or WARNING)",
)
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default=None,
    help="Log format (default: $AGENTGRAPH_LOG_FORMAT or text)",
)
def cli(log_level: str | None, log_format: str | None):
    """agentgraph - Run steps as a directed, possibly cyclic graph.

    Graph files are Python files that bind `graph` to a Graph or a
    GraphBuilder. A `.env` file in the working directory (or a parent)
    is loaded before the environment is read.

    **Commands:**

        agentgraph dot      Print the graph in Graphviz DOT format

        agentgraph run      Run the graph on an input

        agentgraph demo     Run the scripted review loop
    """
    env_path = find_dotenv(usecwd=True)
    if env_path:
        load_dotenv(env_path)
    try:
        configure_logging(level=log_level, format=log_format, force=True)
    except ValueError as e:
        _fail(e)


# =========================================================================
# Commands
# =========================================================================
@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def dot(file: str):
    """Print a graph file's topology in Graphviz DOT format.

    **Examples:**

        agentgraph dot review.py

        agentgraph dot review.py | dot -Tsvg -o review.svg
    """
    try:
        graph = load_graph_from_file(file)
    except Exception as e:
        _fail(e)

    click.echo(graph.to_dot(), nl=False)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("input")
@click.option(
    "--max-iterations",
    "-n",
    type=click.IntRange(min=1),
    default=None,
    help="Override the graph's total visit bound",
)
@click.option(
    "--timeout",
    "-t",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Wall-clock limit for the run, in seconds",
)
@click.option(
    "--env-config",
    "-e",
    is_flag=True,
    help="Take run bounds from AGENTGRAPH_* environment variables",
)
@click.option("--json", "-j", "json_output", is_flag=True, help="Output as JSON")
@click.option("--trace", "show_trace", is_flag=True, help="Show the execution trace")
def run(
    file: str,
    input: str,
    max_iterations: int | None,
    timeout: float | None,
    env_config: bool,
    json_output: bool,
    show_trace: bool,
):
    """Run a graph file on INPUT.

    Run bounds come from the graph itself, or from the environment with
    `--env-config`. `--max-iterations` and `--timeout` override either.

    **Examples:**

        agentgraph run review.py "Write a paragraph about graphs."

        agentgraph run review.py "..." --max-iterations 6 --trace

        AGENTGRAPH_MAX_COST_DOLLARS=0.10 agentgraph run review.py "..." -e --json
    """
    try:
        graph = load_graph_from_file(file)
        config = GraphConfig.from_env() if env_config else graph.config
        if max_iterations is not None:
            config = replace(config, max_iterations=max_iterations)
        if timeout is not None:
            config = replace(config, timeout_seconds=timeout)
    except Exception as e:
        _fail(e)

    _execute(graph.with_config(config), input, json_output, show_trace)


@cli.command()
@click.argument("input", required=False, default=DEMO_INPUT)
@click.option(
    "--max-rounds",
    "-r",
    type=click.IntRange(min=1),
    default=3,
    show_default=True,
    help="Maximum number of reviewer visits",
)
@click.option("--dot", "show_dot", is_flag=True, help="Print the graph as DOT and exit")
@click.option("--json", "-j", "json_output", is_flag=True, help="Output as JSON")
@click.option("--trace", "show_trace", is_flag=True, help="Show the execution trace")
def demo(input: str, max_rounds: int, show_dot: bool, json_output: bool, show_trace: bool):
    """Run the scripted write-review-revise loop.

    The scripted reviewer asks for one revision and then approves, so
    the run visits writer, reviewer, reviser, reviewer. With
    `--max-rounds 1` the run fails with MaxIterationsExceededError.
    """
    graph = build_review_loop(*demo_steps(), max_rounds=max_rounds)
    if show_dot:
        click.echo(graph.to_dot(), nl=False)
        return

    _execute(graph, input, json_output, show_trace)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
