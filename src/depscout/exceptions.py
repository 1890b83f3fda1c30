# depscout/exceptions.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Exceptions for dependency scanning and environment provisioning."""


class DepscoutError(Exception):
    """Base class for all depscout errors."""
    pass


class PathNotFoundError(DepscoutError):
    """Raised when the target file or directory does not exist."""
    pass


class ManifestParseError(DepscoutError):
    """Raised when a requirements manifest cannot be read or decoded.

    The resolver treats the manifest as absent and falls back to scanning.
    """
    pass


class MappingParseError(DepscoutError):
    """Raised when a module -> package mapping file is malformed."""
    pass


class FileReadError(DepscoutError):
    """Raised when a single source file cannot be read."""
    pass


class StandardLibraryQueryError(DepscoutError):
    """Raised when the interpreter cannot be asked for its stdlib module names.

    Without that list third-party and standard modules cannot be told apart,
    so this is fatal unless the baked-in fallback list is enabled.
    """
    pass


class ExternalCommandError(DepscoutError):
    """Raised when venv creation or pip install exits with a failure status."""

    def __init__(self, message: str, returncode: int = 1):
        super().__init__(message)
        self.returncode = returncode
