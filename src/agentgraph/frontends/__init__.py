"""Frontends - User interfaces for agentgraph.

Submodules:
    cli/    Command-line interface
"""
