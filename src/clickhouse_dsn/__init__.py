"""
clickhouse-dsn public package initialization.

Converts between DSN strings and ``Config`` objects for the ClickHouse HTTP
interface.
"""

from .config import RESERVED_KEYS, Config, new_config  # noqa: F401
from .dsn import dsn_from_env, format_dsn, parse_dsn, parse_dsn_params  # noqa: F401
from .errors import (  # noqa: F401
    DSNConfigurationError,
    DSNError,
    DSNOptionError,
    InvalidBooleanError,
    InvalidDurationError,
    MalformedDSNError,
    UnknownOptionError,
    UnknownTimezoneError,
)
from .values import format_duration, load_location, parse_bool, parse_duration  # noqa: F401

__all__ = [
    "Config",
    "RESERVED_KEYS",
    "new_config",
    "parse_dsn",
    "parse_dsn_params",
    "format_dsn",
    "dsn_from_env",
    "parse_duration",
    "format_duration",
    "parse_bool",
    "load_location",
    "DSNError",
    "MalformedDSNError",
    "DSNConfigurationError",
    "DSNOptionError",
    "InvalidDurationError",
    "UnknownTimezoneError",
    "InvalidBooleanError",
    "UnknownOptionError",
]
