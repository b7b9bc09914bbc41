"""Command-line interface for iconspec.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Preset and sample listings
- Expand, validate and compile single documents
- Parallel batch builds with progress bars
- Issue tables with codes and JSON paths
"""

from iconspec.cli.app import cli, main

__all__ = ["cli", "main"]
