"""TaskFlow: role-gated task, project and team tracking over an in-memory store."""

__version__ = "0.1.0"
