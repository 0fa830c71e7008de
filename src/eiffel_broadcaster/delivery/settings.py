"""Delivery – immutable broker connection settings snapshot."""
from __future__ import annotations

import dataclasses
from urllib.parse import quote, urlsplit, urlunsplit

AMQP_SCHEMES = ("amqp", "amqps")


@dataclasses.dataclass(frozen=True)
class ConnectionSettings:
    """Broker URI, virtual host and credentials.

    Instances are swapped whole by ``DeliveryEngine.initialize`` and read by
    the worker thread without locking.
    """

    uri: str
    virtual_host: str | None = None
    user_name: str | None = None
    password: str | None = dataclasses.field(default=None, repr=False)

    def url(self) -> str:
        """Return the URI with user name, password and virtual host folded in."""
        parts = urlsplit(self.uri)
        netloc = parts.netloc
        if self.user_name:
            host = netloc.rsplit("@", 1)[-1]
            userinfo = quote(self.user_name, safe="")
            if self.password:
                userinfo += ":" + quote(self.password, safe="")
            netloc = f"{userinfo}@{host}"
        path = parts.path
        if self.virtual_host:
            path = "/" + quote(self.virtual_host, safe="")
        return urlunsplit((parts.scheme, netloc, path, parts.query, parts.fragment))

    def redacted_uri(self) -> str:
        parts = urlsplit(self.uri)
        return urlunsplit((parts.scheme, parts.netloc.rsplit("@", 1)[-1], parts.path, "", ""))


def has_amqp_scheme(uri: str | None) -> bool:
    if not uri:
        return False
    parts = urlsplit(uri)
    return parts.scheme in AMQP_SCHEMES and bool(parts.hostname)


__all__ = ["AMQP_SCHEMES", "ConnectionSettings", "has_amqp_scheme"]
