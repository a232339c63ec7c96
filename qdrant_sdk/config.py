"""
Connection configuration for the Qdrant SDK.

Turns the connection arguments accepted by the clients (``url`` or
``host``/``port``/``prefix``, ``https``, ``api_key``) into a normalized,
immutable ConnectionConfig holding the base URI every request is resolved
against.
"""

import re
import warnings
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from .exceptions import ConfigError

REST_DEFAULT_HOST = "localhost"
REST_DEFAULT_PORT = 6333
GRPC_DEFAULT_HOST = "127.0.0.1"
GRPC_DEFAULT_PORT = 6334

_HOST_PORT_PATTERN = re.compile(r":\d+$")


@dataclass(frozen=True)
class ConnectionConfig:
    """Resolved connection settings for one client."""

    scheme: str
    host: str
    port: Optional[int]
    prefix: str
    uri: str

    @property
    def https(self) -> bool:
        return self.scheme == "https"

    @property
    def address(self) -> str:
        """``host:port``, or just ``host`` when no port is set."""
        if self.port is None:
            return self.host
        return f"{self.host}:{self.port}"


def normalize_prefix(prefix: Optional[str]) -> str:
    """Return ``prefix`` with a leading slash, or an empty string."""
    prefix = prefix or ""
    if prefix and not prefix.startswith("/"):
        prefix = f"/{prefix}"
    return prefix


def build_uri(scheme: str, host: str, port: Optional[int], prefix: str) -> str:
    address = host if port is None else f"{host}:{port}"
    return f"{scheme}://{address}{prefix}"


def resolve_connection(
    url: Optional[str] = None,
    host: Optional[str] = None,
    port: Optional[int] = REST_DEFAULT_PORT,
    https: Optional[bool] = None,
    prefix: Optional[str] = None,
    api_key: Optional[str] = None,
    default_host: str = REST_DEFAULT_HOST,
) -> ConnectionConfig:
    """Resolve connection arguments into a ConnectionConfig.

    Args:
        url: Full base URL, e.g. ``https://xyz.cloud.qdrant.io:6333``.
        host: Bare host name without scheme or port.
        port: Port to use when ``url`` carries none. ``None`` leaves the port
            out of the URI entirely.
        https: Force the scheme. Defaults to https when an API key is set.
        prefix: Path prefix added after the address.
        api_key: API key, only used to pick the scheme and warn about
            insecure connections.
        default_host: Host used when neither ``url`` nor ``host`` is given.

    Returns:
        The resolved ConnectionConfig.

    Raises:
        ConfigError: If the arguments are contradictory or malformed.
    """
    if url and host:
        raise ConfigError(
            f"Only one of `url`, `host` params can be set. Url is {url}, host is {host}"
        )

    if host and (
        host.startswith("http://")
        or host.startswith("https://")
        or _HOST_PORT_PATTERN.search(host)
    ):
        raise ConfigError(
            "The `host` param is not expected to contain neither protocol "
            "(http:// or https://) nor port (:6333).\n"
            "Try to use the `url` parameter instead."
        )

    use_https = https if https is not None else api_key is not None
    scheme = "https" if use_https else "http"
    prefix = normalize_prefix(prefix)

    if url:
        if not (url.startswith("http://") or url.startswith("https://")):
            raise ConfigError(
                "The `url` param expected to contain a valid URL starting with "
                "a protocol (http:// or https://)."
            )
        parsed = urlparse(url)
        try:
            url_port = parsed.port
        except ValueError:
            raise ConfigError(f"The `url` param contains an invalid port: {url}")
        if not parsed.hostname:
            raise ConfigError(f"The `url` param does not contain a host: {url}")

        host = parsed.hostname
        if ":" in host:
            host = f"[{host}]"
        scheme = parsed.scheme
        if url_port is not None:
            port = url_port

        url_path = parsed.path.rstrip("/")
        if url_path:
            if prefix:
                raise ConfigError(
                    "Prefix can be set either in `url` or in `prefix`.\n"
                    f"url is {url}, prefix is {parsed.path}"
                )
            prefix = url_path
    else:
        host = host or default_host

    if api_key is not None and scheme == "http":
        warnings.warn("Api key is used with an insecure connection.", UserWarning, stacklevel=3)

    return ConnectionConfig(
        scheme=scheme,
        host=host,
        port=port,
        prefix=prefix,
        uri=build_uri(scheme, host, port, prefix),
    )
