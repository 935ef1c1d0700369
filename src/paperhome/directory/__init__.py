"""National journal directory collaborators."""

from .local import DEFAULT_DIRECTORY_PATH, BaseDirectory, LocalDirectory

__all__ = ["BaseDirectory", "LocalDirectory", "DEFAULT_DIRECTORY_PATH"]
