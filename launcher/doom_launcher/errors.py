"""
Error taxonomy shared by stores, the launch pipeline and the API layer.
"""

from __future__ import annotations


class LauncherError(Exception):
    """Base class for all launcher errors."""


class ValidationError(LauncherError):
    """A required field is missing or malformed (e.g. empty file path)."""


class NotFound(LauncherError):
    """A mod or version id has no backing record."""


class CorruptRecord(LauncherError):
    """A record exists on disk but cannot be parsed."""


class ConfigurationError(LauncherError):
    """The engine executable is unset or does not point to an existing file."""


class LaunchError(LauncherError):
    """The OS refused to spawn the engine process."""


class AlreadyExists(ValidationError):
    """A record with the same unique key (e.g. version slug) already exists."""
