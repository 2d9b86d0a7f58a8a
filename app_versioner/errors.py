"""
errors.py

Exception types raised by app_versioner. Every error is raised to the immediate
caller; nothing in the library catches or retries.
"""

from __future__ import annotations


class VersionerError(RuntimeError):
    pass


class NotFoundError(VersionerError):
    """A descriptor, stylesheet or copy source does not exist."""


class ParseError(VersionerError):
    """A JSON file could not be parsed."""


class MissingFieldError(VersionerError):
    """The descriptor has no usable `version` field."""


class InvalidBumpKindError(VersionerError, ValueError):
    pass


class VersionFormatError(VersionerError, ValueError):
    pass


class MarkerError(VersionerError, ValueError):
    """Region markers cannot be turned into a search pattern."""


class ConfigError(VersionerError, ValueError):
    pass
