"""
PaperHome CLI module.

This module provides the command-line interface for PaperHome.
"""

from paperhome.cli.main import cli, main

__all__ = ["cli", "main"]
