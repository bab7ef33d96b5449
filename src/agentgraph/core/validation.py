"""Name validation for graphs and nodes.

Provides consistent validation rules for naming entities in agentgraph.
Names end up quoted in DOT output, so any printable text is accepted.
"""

from __future__ import annotations

MAX_NAME_LENGTH = 64


def validate_name(name: str, entity: str = "name") -> None:
    """Validate a graph or node name.

    Rules:
    - Must be a string
    - 1-64 characters
    - Cannot be whitespace-only
    - Cannot contain control characters (newlines, tabs, ...)

    Args:
        name: The name to validate.
        entity: What the name is for (used in error messages).

    Raises:
        ValueError: If the name is invalid.

    Example:
        >>> validate_name("writer", "node")      # OK
        >>> validate_name("Review Loop", "graph")  # OK
        >>> validate_name("   ", "node")         # ValueError
    """
    entity_cap = entity.capitalize()

    if not isinstance(name, str):
        raise ValueError(f"{entity_cap} name must be a string, got {type(name).__name__}")

    if not name or not name.strip():
        raise ValueError(f"{entity_cap} name cannot be empty")

    if len(name) > MAX_NAME_LENGTH:
        raise ValueError(f"{entity_cap} name must be {MAX_NAME_LENGTH} characters or less")

    if any(not ch.isprintable() for ch in name):
        raise ValueError(f"{entity_cap} name cannot contain control characters")


def is_valid_name(name: str) -> bool:
    """Check if a name is valid without raising.

    Args:
        name: The name to check.

    Returns:
        True if valid, False otherwise.
    """
    try:
        validate_name(name)
    except ValueError:
        return False
    return True
