"""CLI frontend for agentgraph.

Commands:
    agentgraph dot      Print a graph file's topology as DOT
    agentgraph run      Run a graph file
    agentgraph demo     Run the scripted review loop

Example:
    $ agentgraph dot review.py | dot -Tpng -o review.png
    $ agentgraph run review.py "Write a paragraph about graphs." --trace
"""

from agentgraph.frontends.cli.main import main

__all__ = ["main"]
