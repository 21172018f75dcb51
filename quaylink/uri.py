"""Building request URIs for the different kinds of daemon connection."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union
from urllib.parse import quote, quote_plus, urljoin, urlsplit

__all__ = [
    "ClientType",
    "ClientVersion",
    "Request",
    "socket_scheme",
    "socket_host",
    "encode_query",
    "build_uri",
    "socket_path_dest",
]

QueryParams = Union[Mapping[str, Any], Iterable[tuple[str, Any]]]

_HEX_RE = re.compile(r"(?:[0-9a-fA-F]{2})*")
_PATH_SAFE = "/%:@!$&'()*+,;=?#[]|^"


class ClientType(Enum):
    """How the client reaches the daemon."""

    HTTP = "http"
    SSL = "ssl"
    UNIX = "unix"
    NAMED_PIPE = "named_pipe"


@dataclass(frozen=True)
class ClientVersion:
    """API version spoken by the client."""

    major_version: int
    minor_version: int

    def __str__(self) -> str:
        return f"{self.major_version}.{self.minor_version}"


@dataclass
class Request:
    """Description of a single API call: method, path, query, body and headers."""

    method: str
    path: str
    query: Optional[QueryParams] = None
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)


_SCHEMES = {
    ClientType.HTTP: "http",
    ClientType.SSL: "https",
    ClientType.UNIX: "unix",
    ClientType.NAMED_PIPE: "net.pipe",
}


def socket_scheme(client_type: ClientType) -> str:
    """Return the URI scheme used for a client type."""
    return _SCHEMES[client_type]


def socket_host(socket: Union[str, bytes, os.PathLike], client_type: ClientType) -> str:
    """Return the URI host for a socket: verbatim for TCP, hex-encoded for local sockets."""
    text = os.fsencode(socket).decode("utf-8", "replace")
    if client_type in (ClientType.UNIX, ClientType.NAMED_PIPE):
        return text.encode("utf-8").hex()
    return text


def _query_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return _query_scalar(value.value)
    if isinstance(value, (str, int, float)):
        return str(value)
    raise TypeError(f"unsupported query value of type {type(value).__name__}")


def _form_escape(text: str) -> str:
    return quote_plus(text, safe="*").replace("~", "%7E")


def encode_query(params: QueryParams) -> str:
    """Encode parameters as an application/x-www-form-urlencoded string.

    Booleans become ``true``/``false`` and ``None`` values are left out.
    """
    items = params.items() if isinstance(params, Mapping) else params
    pairs = [
        f"{_form_escape(str(key))}={_form_escape(_query_scalar(value))}"
        for key, value in items
        if value is not None
    ]
    return "&".join(pairs)


def build_uri(
    socket: Union[str, os.PathLike],
    client_type: ClientType,
    path: str,
    query: Optional[QueryParams],
    client_version: ClientVersion,
) -> str:
    """Build the full request URI for ``path`` on the given socket.

    The path is resolved against the versioned base URI, so an absolute path
    replaces the version prefix.  When ``query`` is given it replaces any
    query carried by the path.
    """
    scheme = socket_scheme(client_type)
    host = socket_host(socket, client_type)
    if client_type in (ClientType.HTTP, ClientType.SSL) and not host:
        raise ValueError("empty host in socket address")

    quoted_path = quote(path, safe=_PATH_SAFE)
    base = (
        f"http://{host}/v{client_version.major_version}."
        f"{client_version.minor_version}{quoted_path}"
    )
    parts = urlsplit(urljoin(base, quoted_path))

    uri = f"{scheme}://{parts.netloc}{parts.path or '/'}"
    if query is not None:
        uri += "?" + encode_query(query)
    elif parts.query:
        uri += "?" + parts.query
    if parts.fragment:
        uri += "#" + parts.fragment
    return uri


def _uri_host(uri: str) -> str:
    netloc = urlsplit(uri).netloc.rsplit("@", 1)[-1]
    if netloc.startswith("["):
        return netloc.split("]", 1)[0] + "]"
    return netloc.split(":", 1)[0]


def socket_path_dest(destination: str, client_type: ClientType) -> Optional[str]:
    """Recover the socket path hex-encoded in the host of ``destination``.

    Returns ``None`` when the host is missing or is not valid hex.
    """
    host = _uri_host(destination) or "UNKNOWN_HOST"
    rebuilt = f"{socket_scheme(client_type)}://{host}"
    decoded_host = _uri_host(rebuilt)
    if not decoded_host or not _HEX_RE.fullmatch(decoded_host):
        return None
    return bytes.fromhex(decoded_host).decode("utf-8", "replace")