"""Manage a hierarchy of administrative regions stored as JSON, with an interactive menu."""

__version__ = "0.1.0"
__all__ = ["cli", "history", "jsontext", "queue", "session", "tree"]