"""Exceptions raised for diagrams that cannot be built.

Only configuration problems are fatal. Routing and layout degradations are
recovered inside the engine and never surface here.
"""

from __future__ import annotations


class DiagramError(ValueError):
    """Base class for every fatal input problem."""


class DiagramParseError(DiagramError):
    """Raised when diagram source text or a dict is malformed."""


class ConfigError(DiagramError):
    """Raised when a configuration value is missing or out of range."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"invalid config '{field}': {message}")


class DuplicateNodeError(DiagramError):
    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"duplicate node id '{node_id}'")


class UnknownNodeError(DiagramError):
    def __init__(self, connection_index: int, node_id: str, role: str) -> None:
        self.connection_index = connection_index
        self.node_id = node_id
        self.role = role
        super().__init__(f"connection {connection_index}: '{role}' references unknown node '{node_id}'")


class SelfLoopError(DiagramError):
    def __init__(self, connection_index: int, node_id: str) -> None:
        self.connection_index = connection_index
        self.node_id = node_id
        super().__init__(f"connection {connection_index}: self-loop on node '{node_id}' cannot be routed")
