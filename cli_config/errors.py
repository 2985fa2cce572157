"""Configuration file domain exceptions."""

from pathlib import Path
from typing import Optional


class ConfigError(Exception):
    """Base exception for configuration file operations."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.message = message
        self.path = path


class ResolutionError(ConfigError):
    """The configuration file location could not be resolved."""

    pass


class ConfigRootNotFoundError(ResolutionError):
    """No per-user configuration root is known on this platform."""

    pass


class ConfigCreateError(ResolutionError):
    """Creating the configuration directory or file failed."""

    def __init__(self, message: str, path: Optional[Path] = None, cause: Optional[OSError] = None):
        super().__init__(message, path)
        self.cause = cause


class ConfigIOError(ConfigError):
    """Reading or writing a resolved configuration file failed."""

    def __init__(self, message: str, path: Optional[Path] = None, cause: Optional[OSError] = None):
        super().__init__(message, path)
        self.cause = cause

    @property
    def missing(self) -> bool:
        return isinstance(self.cause, FileNotFoundError)


class ConfigDecodeError(ConfigError):
    """File content does not decode into the expected structure."""

    def __init__(self, message: str, path: Optional[Path] = None, format_name: str = '', cause: Optional[Exception] = None):
        super().__init__(message, path)
        self.format_name = format_name
        self.cause = cause


class ConfigEncodeError(ConfigError):
    """A value cannot be represented in the target format."""

    def __init__(self, message: str, path: Optional[Path] = None, format_name: str = '', cause: Optional[Exception] = None):
        super().__init__(message, path)
        self.format_name = format_name
        self.cause = cause


__all__ = [
    'ConfigCreateError',
    'ConfigDecodeError',
    'ConfigEncodeError',
    'ConfigError',
    'ConfigIOError',
    'ConfigRootNotFoundError',
    'ResolutionError',
]
