"""Exception types raised by retreat."""

from __future__ import annotations


class RetreatError(Exception):
    """Base class for all retreat errors."""


class ConfigurationError(RetreatError, ValueError):
    """Raised when a history is built from invalid settings."""
