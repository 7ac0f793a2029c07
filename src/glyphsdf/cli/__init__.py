"""Command-line interface for glyphsdf.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for instance rasterization
- Verbose/quiet output modes
- Atlas inspection for individual characters
- Detailed error reporting
"""

from glyphsdf.cli.app import cli, main

__all__ = ["cli", "main"]
