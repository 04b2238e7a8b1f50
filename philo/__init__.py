"""Dining philosophers simulation: argument parsing, the threaded table and its command line."""

__version__ = "1.0.0"
__all__ = ["args", "table", "cli"]