"""Command-line interface for gridfont.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Corpus validation with a full issue listing
- Progress bars for glyph compilation
- Generation of block element and braille glyph sources
"""

from gridfont.cli.app import cli, main

__all__ = ["cli", "main"]
