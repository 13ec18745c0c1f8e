"""
Utility helpers shared across clickhouse-dsn modules.
"""

from .logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
