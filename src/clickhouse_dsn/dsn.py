"""DSN parsing and formatting."""

from __future__ import annotations

import os
import re
from typing import Any, Mapping, Sequence
from urllib.parse import parse_qs, unquote, urlsplit

from .config import DURATION_KEYS, REJECTED_KEYS, Config, build_url, new_config
from .errors import (
    DSNConfigurationError,
    InvalidBooleanError,
    InvalidDurationError,
    MalformedDSNError,
    UnknownOptionError,
    UnknownTimezoneError,
)
from .utils import get_logger
from .values import format_duration, is_utc, load_location, location_name, parse_bool, parse_duration

logger = get_logger("dsn")

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_BAD_HOST_CHAR_RE = re.compile(r"[^A-Za-z0-9\-._~!$&'()*+,;=:\[\]%<>\"\x80-\U0010ffff]")


def _check_escapes(text: str, dsn: str) -> None:
    match = _BAD_ESCAPE_RE.search(text)
    if match:
        raise MalformedDSNError(f"invalid URL escape {text[match.start() : match.start() + 3]!r}", dsn)


def _check_host(host: str, dsn: str) -> None:
    match = _BAD_HOST_CHAR_RE.search(host)
    if match:
        raise MalformedDSNError(f"invalid character {match.group()!r} in host name", dsn)
    if host.startswith("["):
        closing = host.find("]")
        tail = host[closing + 1 :]
        if tail and not tail.startswith(":"):
            raise MalformedDSNError(f"invalid host {host!r}", dsn)
        port = tail[1:]
    else:
        _, sep, port = host.rpartition(":")
        if not sep:
            return
    if port and not (port.isascii() and port.isdigit()):
        raise MalformedDSNError(f"invalid port {port!r} after host", dsn)


def parse_dsn(dsn: str) -> Config:
    """
    Parse ``scheme://[user[:password]@]host[:port]/[database][?key=value&...]``.

    Raises ``MalformedDSNError`` for invalid URL syntax and a
    ``DSNOptionError`` subclass for query values that fail to convert.
    """

    if not isinstance(dsn, str):
        raise MalformedDSNError(f"DSN must be a string, got {type(dsn).__name__}", None)
    if _CONTROL_CHARS_RE.search(dsn):
        raise MalformedDSNError("DSN contains control characters", dsn)
    if dsn.startswith(":"):
        raise MalformedDSNError("missing protocol scheme", dsn)
    try:
        parts = urlsplit(dsn)
    except ValueError as exc:
        raise MalformedDSNError(f"Invalid DSN: {exc}", dsn, exc) from exc

    _check_escapes(parts.netloc, dsn)
    _check_escapes(parts.path, dsn)
    userinfo, at, host = parts.netloc.rpartition("@")
    _check_host(host, dsn)

    config = new_config()
    config.scheme = parts.scheme
    config.host = host
    # "scheme:opaque" has no hierarchical path, so no database
    path = unquote(parts.path)
    if path.startswith("/") and len(path) > 1:
        config.database = path[1:]
    if at:
        # an empty password is indistinguishable from no password
        user, _, password = userinfo.partition(":")
        config.user = unquote(user)
        config.password = unquote(password)

    parse_dsn_params(config, parse_qs(parts.query, keep_blank_values=True))
    logger.debug(
        "Parsed DSN %s://%s/%s",
        config.scheme,
        config.host,
        config.database,
        extra={"params": sorted(config.params)},
    )
    return config


def parse_dsn_params(config: Config, params: Mapping[str, Sequence[str]]) -> Config:
    """
    Apply decoded query parameters to ``config``.

    Only the first value of each key is used. ``config`` is left untouched
    when any value fails to convert.
    """

    updates: dict[str, Any] = {}
    passthrough: dict[str, str] = {}
    for key, values in params.items():
        if len(values) == 0:
            continue
        value = values[0]

        if key in DURATION_KEYS:
            try:
                updates[key] = parse_duration(value)
            except ValueError as exc:
                raise InvalidDurationError(key, value) from exc
        elif key == "location":
            try:
                updates[key] = load_location(value)
            except ValueError as exc:
                raise UnknownTimezoneError(value) from exc
        elif key == "debug":
            try:
                updates[key] = parse_bool(value)
            except ValueError as exc:
                raise InvalidBooleanError(value) from exc
        elif key in REJECTED_KEYS:
            raise UnknownOptionError(key)
        else:
            passthrough[key] = value

    for name, value in updates.items():
        setattr(config, name, value)
    if passthrough:
        if config.params is None:
            config.params = {}
        config.params.update(passthrough)
    return config


def format_dsn(config: Config) -> str:
    """
    Format ``config`` as a DSN accepted by ``parse_dsn``.

    Typed options equal to their default are omitted. Passthrough params are
    written last and win over a typed option of the same name.
    """

    defaults = new_config()
    query: dict[str, str] = {}
    for key in DURATION_KEYS:
        value = getattr(config, key)
        if value != getattr(defaults, key):
            query[key] = format_duration(value)
    if not is_utc(config.location):
        query["location"] = location_name(config.location)
    if config.debug:
        query["debug"] = "1"

    for key, value in (config.params or {}).items():
        if key in query:
            logger.warning("Passthrough parameter '%s' overrides the typed option of the same name", key)
        query[key] = value

    return build_url(config, "/" + config.database, query)


def dsn_from_env(env_var: str) -> Config:
    value = os.getenv(env_var)
    if not value:
        raise DSNConfigurationError(f"Environment variable {env_var} is not set")
    return parse_dsn(value)
