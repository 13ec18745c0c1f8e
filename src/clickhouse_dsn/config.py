"""
Connection configuration for the ClickHouse HTTP interface.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta, tzinfo
from typing import Any, Mapping, Optional
from urllib.parse import quote, urlencode

from .values import UTC

DEFAULT_SCHEME = "http"
DEFAULT_HOST = "localhost:8123"
DEFAULT_IDLE_TIMEOUT = timedelta(hours=1)

DURATION_KEYS = ("timeout", "idle_timeout", "read_timeout", "write_timeout")
REJECTED_KEYS = frozenset({"default_format", "query", "database"})
RESERVED_KEYS = frozenset(DURATION_KEYS) | {"location", "debug"} | REJECTED_KEYS

_USERINFO_SAFE = "!$&'()*+,;="
_PATH_SAFE = "/!$&'()*+,;=:@"


@dataclass
class Config:
    """
    Typed view of a DSN.

    A zero duration means "not configured"; ``idle_timeout`` is the exception
    and defaults to one hour. ``location`` of ``None`` behaves like UTC.
    """

    user: str = ""
    password: str = ""
    scheme: str = DEFAULT_SCHEME
    host: str = DEFAULT_HOST
    database: str = ""
    timeout: timedelta = field(default_factory=timedelta)
    idle_timeout: timedelta = DEFAULT_IDLE_TIMEOUT
    read_timeout: timedelta = field(default_factory=timedelta)
    write_timeout: timedelta = field(default_factory=timedelta)
    location: Optional[tzinfo] = UTC
    debug: bool = False
    params: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dsn(cls, dsn: str) -> "Config":
        from .dsn import parse_dsn

        return parse_dsn(dsn)

    @classmethod
    def from_env(cls, env_var: str) -> "Config":
        from .dsn import dsn_from_env

        return dsn_from_env(env_var)

    def format_dsn(self) -> str:
        from .dsn import format_dsn

        return format_dsn(self)

    def url(self, extra: Mapping[str, str] | None = None, *, dsn: bool = False) -> str:
        """
        Build the URL requests are sent to.

        The database travels as the ``database`` query parameter unless
        ``dsn`` is true, in which case it becomes the path as in a DSN.
        ``params`` and then ``extra`` are merged into the query string.
        """

        query: dict[str, str] = {}
        path = "/"
        if self.database:
            if dsn:
                path += self.database
            else:
                query["database"] = self.database
        query.update(self.params)
        if extra:
            query.update(extra)
        return build_url(self, path, query)


def new_config() -> Config:
    """Return a config populated with the driver defaults."""

    return Config()


def build_url(config: Config, path: str, query: Mapping[str, Any]) -> str:
    netloc = config.host
    if config.user:
        userinfo = quote(config.user, safe=_USERINFO_SAFE)
        if config.password:
            userinfo += ":" + quote(config.password, safe=_USERINFO_SAFE)
        netloc = f"{userinfo}@{netloc}"

    result = f"{config.scheme}://{netloc}{quote(path, safe=_PATH_SAFE)}"
    if query:
        result += "?" + urlencode(sorted(query.items()))
    return result
