"""
Typed conversions for DSN query values.

Durations use the ``<number><unit>`` notation of the HTTP driver (``5s``,
``100ms``, ``1h30m``) and booleans use the strict ``1/0``, ``t/f``,
``true/false`` spellings. Every parser raises ``ValueError``; callers attach
the offending key.
"""

from __future__ import annotations

import re
from datetime import timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

UTC = ZoneInfo("UTC")

_NANOSECOND = 1
_MICROSECOND = 1000 * _NANOSECOND
_MILLISECOND = 1000 * _MICROSECOND
_SECOND = 1000 * _MILLISECOND
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE

_UNIT_NANOS = {
    "ns": _NANOSECOND,
    "us": _MICROSECOND,
    "µs": _MICROSECOND,  # micro sign
    "μs": _MICROSECOND,  # greek mu
    "ms": _MILLISECOND,
    "s": _SECOND,
    "m": _MINUTE,
    "h": _HOUR,
}

_DURATION_COMPONENT_RE = re.compile(r"([0-9]*)(?:\.([0-9]*))?(ns|us|µs|μs|ms|s|m|h)")

_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}


def parse_duration(text: str) -> timedelta:
    """
    Parse a duration such as ``"300ms"``, ``"-1.5h"`` or ``"2h45m"``.

    Components are summed. Sub-microsecond precision is rounded away because
    ``timedelta`` cannot hold it.
    """

    remainder = text
    negative = False
    if remainder[:1] in ("-", "+"):
        negative = remainder[0] == "-"
        remainder = remainder[1:]
    if remainder == "0":
        return timedelta(0)
    if not remainder:
        raise ValueError(f"invalid duration {text!r}")

    nanos = 0
    position = 0
    while position < len(remainder):
        match = _DURATION_COMPONENT_RE.match(remainder, position)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        whole, fraction, unit = match.groups()
        if not whole and not fraction:
            raise ValueError(f"invalid duration {text!r}")
        scale = _UNIT_NANOS[unit]
        nanos += int(whole or 0) * scale
        if fraction:
            nanos += int(fraction) * scale // 10 ** len(fraction)
        position = match.end()

    micros = (nanos + _MICROSECOND // 2) // _MICROSECOND
    try:
        return timedelta(microseconds=-micros if negative else micros)
    except OverflowError as exc:
        raise ValueError(f"invalid duration {text!r}: out of range") from exc


def _with_fraction(value: int, digits: int) -> str:
    whole, fraction = divmod(value, 10**digits)
    if not fraction:
        return str(whole)
    return f"{whole}.{fraction:0{digits}d}".rstrip("0")


def format_duration(value: timedelta) -> str:
    """
    Render ``value`` in canonical form: ``0s``, ``1.5ms``, ``90s`` -> ``1m30s``,
    one hour -> ``1h0m0s``.
    """

    nanos = (value // timedelta(microseconds=1)) * _MICROSECOND
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)

    if nanos < _SECOND:
        if nanos < _MICROSECOND:
            return f"{sign}{nanos}ns"
        if nanos < _MILLISECOND:
            return f"{sign}{_with_fraction(nanos, 3)}µs"
        return f"{sign}{_with_fraction(nanos, 6)}ms"

    rendered = f"{_with_fraction(nanos % _MINUTE, 9)}s"
    minutes = nanos // _MINUTE
    if minutes:
        hours, minutes = divmod(minutes, 60)
        rendered = f"{minutes}m{rendered}"
        if hours:
            rendered = f"{hours}h{rendered}"
    return sign + rendered


def parse_bool(text: str) -> bool:
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean {text!r}")


def load_location(name: str) -> ZoneInfo:
    """
    Resolve an IANA time zone name. The empty string and ``"UTC"`` map to UTC.
    """

    if name in ("", "UTC"):
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise ValueError(f"unknown time zone {name!r}") from exc


def location_name(zone: tzinfo | None) -> str:
    if zone is None:
        return "UTC"
    key = getattr(zone, "key", None)
    if key:
        return key
    return str(zone)


def is_utc(zone: tzinfo | None) -> bool:
    return location_name(zone) == "UTC"
