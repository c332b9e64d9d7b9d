r"""Build the HTTP client used by a single request.

A fresh ``httpx.Client`` is built for every outbound call. It is scoped
to the origin of the request and configured from the ``http_*`` fields
of the session ``Options`` through an explicit table of settings.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_PORTS",
    "TRANSPORT_SETTINGS",
    "ClientSettings",
    "RequestSpec",
    "build_client",
    "configure_settings",
]

import ssl
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, urlsplit

import httpx

if TYPE_CHECKING:
    from collections.abc import Callable

    from storagenet.core.config import Options

DEFAULT_PORTS = {"http": 80, "https": 443}

# Defaults of the settings that have no counterpart in Options
DEFAULT_WRITE_TIMEOUT = 60.0
DEFAULT_POOL_TIMEOUT = 60.0
DEFAULT_KEEP_ALIVE_TIMEOUT = 5.0
DEFAULT_MAX_CONNECTIONS = 100


@dataclass(frozen=True)
class RequestSpec:
    """An outbound request: an absolute URL and an optional raw body.

    The URL is parsed once when the instance is created.

    Args:
        url: The absolute URL of the request.
        body: The raw request body, if any.

    Raises:
        ValueError: If the URL is not an absolute http(s) URL.

    Example:
        ```pycon
        >>> from storagenet.transport import RequestSpec
        >>> spec = RequestSpec("https://g.api.example.com/cs?id=1")
        >>> spec.host, spec.port, spec.request_uri
        ('g.api.example.com', 443, '/cs?id=1')
        >>> spec.origin
        'https://g.api.example.com:443'

        ```
    """

    url: str
    body: str | bytes | None = None
    _parsed: httpx.URL = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        parsed = httpx.URL(self.url)
        if parsed.scheme not in DEFAULT_PORTS or not parsed.host:
            msg = f"url must be an absolute http(s) URL, got {self.url!r}"
            raise ValueError(msg)
        object.__setattr__(self, "_parsed", parsed)

    @property
    def scheme(self) -> str:
        return self._parsed.scheme

    @property
    def host(self) -> str:
        return self._parsed.host

    @property
    def port(self) -> int:
        return self._parsed.port or DEFAULT_PORTS[self.scheme]

    @property
    def use_ssl(self) -> bool:
        return self.scheme == "https"

    @property
    def request_uri(self) -> str:
        """The path and query string of the URL."""
        return self._parsed.raw_path.decode("ascii") or "/"

    @property
    def origin(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{self.scheme}://{host}:{self.port}"


@dataclass
class ClientSettings:
    """Mutable settings of the client of a single request.

    Instances are created by ``configure_settings`` and turned into the
    keyword arguments of ``httpx.Client`` by ``client_kwargs``.
    """

    origin: str
    use_ssl: bool = False
    trust_env: bool = True
    proxy_address: str | None = None
    proxy_port: int | None = None
    proxy_user: str | None = None
    proxy_pass: str | None = None
    open_timeout: float | None = None
    read_timeout: float | None = None
    write_timeout: float | None = DEFAULT_WRITE_TIMEOUT
    pool_timeout: float | None = DEFAULT_POOL_TIMEOUT
    keep_alive_timeout: float | None = DEFAULT_KEEP_ALIVE_TIMEOUT
    max_connections: int | None = DEFAULT_MAX_CONNECTIONS
    ca_file: str | None = None
    cert_file: str | None = None
    key_file: str | None = None
    verify_mode: int | None = None

    def proxy_url(self) -> str | None:
        """Return the URL of the explicit proxy, or ``None`` if there is
        no explicit proxy.

        A port given in ``proxy_address`` takes precedence over
        ``proxy_port``.

        Example:
            ```pycon
            >>> from storagenet.transport import ClientSettings
            >>> settings = ClientSettings(origin="https://example.com:443")
            >>> settings.proxy_url() is None
            True
            >>> settings.proxy_address = "proxy"
            >>> settings.proxy_port = 3128
            >>> settings.proxy_url()
            'http://proxy:3128'
            >>> settings.proxy_address = "proxy:8080"
            >>> settings.proxy_url()
            'http://proxy:8080'

            ```
        """
        if not self.proxy_address:
            return None
        scheme, sep, location = self.proxy_address.partition("://")
        if not sep:
            scheme, location = "http", self.proxy_address
        host, sep, path = location.partition("/")
        if self.proxy_port and urlsplit(f"//{host}").port is None:
            location = f"{host}:{self.proxy_port}{sep}{path}"
        if self.proxy_user:
            credentials = quote(self.proxy_user, safe="")
            if self.proxy_pass:
                credentials = f"{credentials}:{quote(self.proxy_pass, safe='')}"
            location = f"{credentials}@{location}"
        return f"{scheme}://{location}"

    def custom_ssl(self) -> bool:
        """Indicate if a certificate setting differs from the httpx
        defaults.

        Without one, httpx builds its own context and honors
        ``SSL_CERT_FILE`` and ``SSL_CERT_DIR``.
        """
        return any(
            value is not None for value in (self.ca_file, self.cert_file, self.verify_mode)
        )

    def ssl_context(self) -> ssl.SSLContext:
        """Create the SSL context used to verify the server and present
        the client certificate."""
        context = ssl.create_default_context(cafile=self.ca_file)
        if self.cert_file:
            context.load_cert_chain(self.cert_file, self.key_file)
        if self.verify_mode == ssl.CERT_NONE:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        return context

    def client_kwargs(self) -> dict[str, Any]:
        """Return the keyword arguments of ``httpx.Client``."""
        return {
            "base_url": self.origin,
            "timeout": httpx.Timeout(
                None,
                connect=self.open_timeout,
                read=self.read_timeout,
                write=self.write_timeout,
                pool=self.pool_timeout,
            ),
            "limits": httpx.Limits(
                max_connections=self.max_connections,
                keepalive_expiry=self.keep_alive_timeout,
            ),
            "proxy": self.proxy_url(),
            "trust_env": self.trust_env,
            "verify": self.ssl_context() if self.use_ssl and self.custom_ssl() else True,
        }


def _is_set(value: Any) -> bool:
    return value is not None and value is not False


def _assign(
    name: str, convert: Callable[[Any], Any] | None = None
) -> Callable[[ClientSettings, Any], None]:
    def apply(settings: ClientSettings, value: Any) -> None:
        setattr(settings, name, value if convert is None else convert(value))

    return apply


def _ignore(settings: ClientSettings, value: Any) -> None:  # noqa: ARG001
    return


TRANSPORT_SETTINGS: dict[str, Callable[[ClientSettings, Any], None]] = {
    "proxy_address": _assign("proxy_address", str),
    "proxy_port": _assign("proxy_port", int),
    "proxy_user": _assign("proxy_user", str),
    "proxy_pass": _assign("proxy_pass", str),
    "open_timeout": _assign("open_timeout", float),
    "read_timeout": _assign("read_timeout", float),
    "write_timeout": _assign("write_timeout", float),
    "pool_timeout": _assign("pool_timeout", float),
    "keep_alive_timeout": _assign("keep_alive_timeout", float),
    "max_connections": _assign("max_connections", int),
    "ca_file": _assign("ca_file", str),
    "cert_file": _assign("cert_file", str),
    "key_file": _assign("key_file", str),
    "verify_mode": _assign("verify_mode"),
}


def configure_settings(request: RequestSpec, options: Options) -> ClientSettings:
    """Compute the client settings of a request.

    The environment proxy configuration is disabled when an explicit
    proxy address is given. Then every ``http_*`` option that is set is
    applied through ``TRANSPORT_SETTINGS``. ``None`` and ``False`` values
    are skipped and unknown setting names are ignored.

    Args:
        request: The request the client is built for.
        options: The session options.

    Returns:
        The client settings.

    Example:
        ```pycon
        >>> from storagenet.core import Options
        >>> from storagenet.transport import RequestSpec, configure_settings
        >>> settings = configure_settings(
        ...     RequestSpec("https://example.com/cs"),
        ...     Options(http_proxy_address="proxy:8080"),
        ... )
        >>> settings.trust_env, settings.proxy_url()
        (False, 'http://proxy:8080')

        ```
    """
    settings = ClientSettings(origin=request.origin, use_ssl=request.use_ssl)
    if _is_set(options.http_proxy_address):
        settings.trust_env = False
    for name, value in options.http_settings():
        if _is_set(value):
            TRANSPORT_SETTINGS.get(name, _ignore)(settings, value)
    return settings


def build_client(request: RequestSpec, options: Options) -> httpx.Client:
    """Build the HTTP client of a request.

    Args:
        request: The request the client is built for.
        options: The session options.

    Returns:
        A new ``httpx.Client``. The caller is responsible for closing it.
    """
    return httpx.Client(**configure_settings(request, options).client_kwargs())
