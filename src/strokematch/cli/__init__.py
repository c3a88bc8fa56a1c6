"""Command-line interface for strokematch.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Library file management (init, add, remove, clear, list)
- Recognition with a ranked candidate table
- Entry comparison, weight and precision tuning
- Quiet mode and optional log file
"""

from strokematch.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
