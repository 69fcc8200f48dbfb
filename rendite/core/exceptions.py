"""Custom exceptions for rendite.

Domain-specific exception types raised by the caller-side services.
The projection engine itself raises none of them.
"""

from __future__ import annotations

from typing import Any


class RenditeError(Exception):
    """Base exception for all rendite errors."""
    pass


# --- Input Errors ---

class InvalidParameterError(RenditeError):
    """Invalid parameter value provided."""

    def __init__(self, param_name: str, value: Any, reason: str = ""):
        self.param_name = param_name
        self.value = value
        self.reason = reason
        msg = f"Invalid parameter '{param_name}': {value}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)


class IncompleteParametersError(RenditeError):
    """Required fields are missing before a calculation can run."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__("Missing required fields: " + ", ".join(self.missing))


# --- Serialization Errors ---

class ShareLinkError(RenditeError):
    """Share-link payload could not be decoded."""
    pass


class ExportError(RenditeError):
    """Failed to write an export file."""
    pass


# --- Configuration Errors ---

class ConfigurationError(RenditeError):
    """Error in application configuration."""
    pass
