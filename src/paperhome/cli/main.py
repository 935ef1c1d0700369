"""
Main CLI entry point for PaperHome.

This module provides the main CLI group and global options.
"""

import sys
from pathlib import Path
from typing import Optional

import click

from paperhome import __version__
from paperhome.cli.formatting import console, print_error
from paperhome.cli.utils import load_config, setup_logging
from paperhome.core.config import AppConfig


class CLIContext:
    """Context object for CLI commands."""

    def __init__(self):
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.quiet: bool = False
        self._config: Optional[AppConfig] = None

    @property
    def config(self) -> AppConfig:
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config


pass_context = click.make_pass_decorator(CLIContext, ensure=True)


@click.group()
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to config file (default: paperhome.yml, else environment)",
)
@click.option(
    "--verbose", "-v",
    count=True,
    help="Enable verbose logging (can be repeated: -vv)",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    help="Suppress non-error output",
)
@click.version_option(version=__version__, prog_name="PaperHome")
@click.pass_context
def cli(ctx, config: Optional[Path], verbose: int, quiet: bool):
    """
    PaperHome - find the right journal for your paper.

    Ranks national (SINTA) journals from a curated directory and
    international journals from Scopus against your research field and
    keywords.

    \b
    Typical workflow:
      1. paperhome analyze paper.pdf       # Extract field and keywords
      2. paperhome recommend -f FIELD -k KEYWORD ...

    \b
    Set ELSEVIER_API_KEY to include international journals.
    """
    cli_ctx = ctx.ensure_object(CLIContext)
    cli_ctx.config_path = config
    cli_ctx.verbose = verbose
    cli_ctx.quiet = quiet

    setup_logging(verbose=verbose, quiet=quiet)


# Commands register at import time
from paperhome.cli.analyze import analyze  # noqa: E402
from paperhome.cli.directory import directory  # noqa: E402
from paperhome.cli.recommend import recommend  # noqa: E402

cli.add_command(recommend)
cli.add_command(analyze)
cli.add_command(directory)


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        if "--verbose" in sys.argv or "-v" in sys.argv:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
