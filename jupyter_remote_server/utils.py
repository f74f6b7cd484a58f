"""URL helpers shared by the settings resolver and the resource rewriter."""

import typing as t
from urllib.parse import urlsplit, urlunsplit

from tornado.escape import url_escape

DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443}

WEBSOCKET_SCHEMES = {"http": "ws", "https": "wss"}

# absolute URLs without an authority part
OPAQUE_SCHEMES = {"data", "blob", "about", "mailto"}


class RemoteServerConfigError(ValueError):
    """A configured URL or configuration document cannot be used."""


def _origin_parts(url: str) -> t.Tuple[str, str, int]:
    try:
        parsed = urlsplit(url)
        port = parsed.port
    except ValueError as e:
        raise RemoteServerConfigError(f"Invalid URL {url!r}: {e}") from e

    scheme = parsed.scheme.lower()
    if scheme not in DEFAULT_PORTS or not parsed.hostname:
        raise RemoteServerConfigError(f"Not an absolute http(s) URL: {url!r}")

    return scheme, parsed.hostname, port if port is not None else DEFAULT_PORTS[scheme]


def url_origin(url: str) -> str:
    """Return ``scheme://host[:port]`` for ``url``.

    The default port of the scheme is omitted, so ``http://a:80/x`` and
    ``http://a`` share the origin ``http://a``.

    Raises
    ------
    RemoteServerConfigError
        If ``url`` has no http(s)/ws(s) scheme or no host.
    """
    scheme, host, port = _origin_parts(url)
    if ":" in host:
        host = f"[{host}]"
    if port == DEFAULT_PORTS[scheme]:
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


def same_origin(url: str, other: str) -> bool:
    """Whether two absolute URLs share scheme, host and effective port."""
    return _origin_parts(url) == _origin_parts(other)


def is_absolute_url(value: str) -> bool:
    # protocol-relative references name a host too
    if value.startswith("//"):
        return True
    try:
        scheme = urlsplit(value).scheme
    except ValueError:
        return False
    if not scheme:
        return False
    # "logo.png:2" parses with a scheme but is a relative name
    return value[len(scheme) + 1:].startswith("//") or scheme.lower() in OPAQUE_SCHEMES


def websocket_url(url: str, token: str = "", append_token: bool = False) -> str:
    """Derive the WebSocket URL for an http(s) ``url``.

    When ``append_token`` is set and ``token`` is not empty, the token is
    added as the ``token`` query parameter, after any existing query.
    """
    try:
        parsed = urlsplit(url)
    except ValueError as e:
        raise RemoteServerConfigError(f"Invalid URL {url!r}: {e}") from e

    scheme = WEBSOCKET_SCHEMES.get(parsed.scheme.lower())
    if scheme is None or not parsed.netloc:
        raise RemoteServerConfigError(f"Not an absolute http(s) URL: {url!r}")

    query = parsed.query
    if append_token and token:
        param = f"token={url_escape(token, plus=False)}"
        query = f"{query}&{param}" if query else param

    return urlunsplit((scheme, parsed.netloc, parsed.path, query, parsed.fragment))
