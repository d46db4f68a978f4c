"""Command-line interface for msdfkit.

This module provides the CLI using Typer with rich output for
progress reporting.

Key features:
- Progress bars for glyph rendering
- Quiet output mode
- Structured log files
"""

from msdfkit.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
