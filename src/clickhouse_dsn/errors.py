"""
Error hierarchy for DSN parsing.
"""

from __future__ import annotations

from typing import Optional


class DSNError(ValueError):
    """Base error for all DSN parsing and configuration failures."""


class MalformedDSNError(DSNError):
    """Raised when the DSN is not a syntactically valid URL."""

    def __init__(self, message: str, dsn: str | None = None, original_error: Optional[Exception] = None) -> None:
        self.dsn = dsn
        self.original_error = original_error
        super().__init__(message)


class DSNConfigurationError(DSNError):
    """Raised when a DSN cannot be obtained from the environment."""


class DSNOptionError(DSNError):
    """
    Raised when a query option carries a value that cannot be converted.

    ``key`` names the offending query parameter.
    """

    def __init__(self, message: str, key: str) -> None:
        self.key = key
        super().__init__(message)


class InvalidDurationError(DSNOptionError):
    def __init__(self, key: str, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid duration value for '{key}': {value!r}", key)


class UnknownTimezoneError(DSNOptionError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Unknown time zone {value!r}", "location")


class InvalidBooleanError(DSNOptionError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid boolean value for 'debug': {value!r}", "debug")


class UnknownOptionError(DSNOptionError):
    def __init__(self, key: str) -> None:
        super().__init__(f"unknown option '{key}'", key)
