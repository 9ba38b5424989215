"""PEMDAS package: calculation pipeline, undo and history for a symbolic calculator."""

__all__ = [
    "config",
    "parser",
    "engine",
    "operations",
    "decorators",
    "factory",
    "facade",
    "command",
    "memento",
    "formula",
    "history",
    "session",
    "cli",
    "types",
    "logging_config",
]
