"""Exception hierarchy shared by the splitter, loaders and chains."""

from __future__ import annotations


class RagkitError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(RagkitError, ValueError):
    """Invalid settings or splitter parameters; raised at construction."""


class InputError(RagkitError, TypeError):
    """A document handed to the splitter has no usable text content."""

    def __init__(self, message: str, index: int | None = None):
        self.index = index
        if index is not None:
            message = f"document {index}: {message}"
        super().__init__(message)
