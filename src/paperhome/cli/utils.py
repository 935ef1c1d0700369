"""
Shared CLI helpers.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from paperhome.core.config import AppConfig, load_config as load_config_file
from paperhome.utils.exceptions import ConfigurationError
from paperhome.utils.logging import configure_library_logging
from paperhome.utils.logging import setup_logging as configure_logging


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load configuration from file, else from the environment.

    Args:
        config_path: Path to config file (YAML). If None, looks for paperhome.yml

    Returns:
        Loaded and validated AppConfig

    Raises:
        click.ClickException: If config is invalid
    """
    if config_path is None:
        default = Path("paperhome.yml")
        if not default.exists():
            try:
                return AppConfig.from_env()
            except ConfigurationError as e:
                raise click.ClickException(str(e))
        config_path = default

    try:
        return load_config_file(config_path)
    except (FileNotFoundError, ConfigurationError) as e:
        raise click.ClickException(str(e))


def setup_logging(verbose: int = 0, quiet: bool = False) -> None:
    """Set up logging based on verbosity level.

    Args:
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG)
        quiet: If True, suppress all non-error output
    """
    if quiet:
        level = "ERROR"
    elif verbose == 0:
        level = "WARNING"
    elif verbose == 1:
        level = "INFO"
    else:
        level = "DEBUG"

    configure_logging(level=level)
    configure_library_logging(quiet=verbose < 2)
    logging.captureWarnings(True)
