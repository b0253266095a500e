"""Command-line client for a desktop mascot simulator's local HTTP API, with environment and text helpers."""

__version__ = "0.1.0"

__all__ = ["args", "catalog", "cli", "environment", "formatting"]