"""Command-line interface for clipbridge.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Boolean operations, offsetting and rectangle clipping on JSON documents
- Result tables with per-path bounds
- Verbose/quiet output modes
- JSON output files
"""

from clipbridge.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
