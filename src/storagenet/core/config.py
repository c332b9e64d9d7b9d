r"""Options dataclass and defaults for the storage transport.

This module provides the configuration constants and the immutable
``Options`` record shared by every request of a client session. The
``http_*`` fields are forwarded to the transport client by
``storagenet.transport.build_client``.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_HTTP_OPEN_TIMEOUT",
    "DEFAULT_HTTP_READ_TIMEOUT",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRY_INTERVAL",
    "HTTP_OPTION_PREFIX",
    "Options",
]

from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any

from storagenet.core.validation import validate_retry_params

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

# Default maximum number of retry attempts
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 10

# Default number of seconds to sleep between two attempts
DEFAULT_RETRY_INTERVAL = 3.0

# Default connect and read timeouts in seconds
# Large transfers to the storage servers can stall for a while
DEFAULT_HTTP_OPEN_TIMEOUT = 180.0
DEFAULT_HTTP_READ_TIMEOUT = 180.0

# Prefix of the options forwarded to the transport client
HTTP_OPTION_PREFIX = "http_"


@dataclass(frozen=True)
class Options:
    """Immutable options of a storage client session.

    The ``http_*`` fields are applied to the transport client of every
    request: the prefix is stripped and the remaining name selects the
    client setting. Absent or falsy values are not applied. Extra
    ``http_*`` settings unknown to this dataclass can be passed in
    ``http_extra`` and are forwarded the same way.

    Args:
        max_retries: Maximum number of retry attempts for transient
            failures. Must be >= 0.
        retry_interval: Seconds to sleep between two attempts. Must be >= 0.
        http_proxy_address: Optional proxy host (or URL). When set, the
            proxy settings of the environment are ignored.
        http_proxy_port: Optional proxy port.
        http_proxy_user: Optional proxy user name.
        http_proxy_pass: Optional proxy password.
        http_open_timeout: Seconds to wait for the connection to open.
        http_read_timeout: Seconds to wait for a chunk of the response.
        http_write_timeout: Seconds to wait for a chunk of the request to
            be sent.
        http_keep_alive_timeout: Seconds an idle connection is kept open.
        http_ca_file: Optional path to a CA bundle used to verify the
            server certificate.
        http_cert_file: Optional path to a client certificate.
        http_key_file: Optional path to the client certificate key.
        http_verify_mode: Optional ``ssl.VerifyMode``. ``ssl.CERT_NONE``
            disables the server certificate verification.
        http_extra: Additional ``http_*`` settings keyed by their full name.
            A mapping or an iterable of ``(name, value)`` pairs is
            accepted. It is stored as a tuple of pairs sorted by name so
            the options stay hashable and picklable.

    Example:
        ```pycon
        >>> from storagenet.core.config import Options
        >>> options = Options(max_retries=2, http_proxy_address="proxy")
        >>> options.max_retries
        2
        >>> options.merge(max_retries=5).max_retries
        5
        >>> dict(options.http_settings())["proxy_address"]
        'proxy'

        ```
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    retry_interval: float = DEFAULT_RETRY_INTERVAL
    http_proxy_address: str | None = None
    http_proxy_port: int | None = None
    http_proxy_user: str | None = None
    http_proxy_pass: str | None = None
    http_open_timeout: float | None = DEFAULT_HTTP_OPEN_TIMEOUT
    http_read_timeout: float | None = DEFAULT_HTTP_READ_TIMEOUT
    http_write_timeout: float | None = None
    http_keep_alive_timeout: float | None = None
    http_ca_file: str | None = None
    http_cert_file: str | None = None
    http_key_file: str | None = None
    http_verify_mode: int | None = None
    http_extra: tuple[tuple[str, Any], ...] = ()

    def __post_init__(self) -> None:
        """Validate the retry options and normalize ``http_extra``.

        Raises:
            ValueError: If max_retries or retry_interval are negative.
        """
        validate_retry_params(max_retries=self.max_retries, retry_interval=self.retry_interval)
        object.__setattr__(self, "http_extra", _freeze_extra(self.http_extra))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> Options:
        """Create options from a plain mapping.

        Keys matching a field are assigned to it. Unknown keys starting
        with ``http_`` are collected in ``http_extra``.

        Args:
            mapping: The option names and values.

        Returns:
            The options.

        Raises:
            TypeError: If a key is neither a field nor an ``http_*`` name.

        Example:
            ```pycon
            >>> from storagenet.core.config import Options
            >>> options = Options.from_mapping({"max_retries": 1, "http_ssl_timeout": 5})
            >>> options.max_retries
            1
            >>> options.http_extra
            (('http_ssl_timeout', 5),)

            ```
        """
        names = {f.name for f in fields(cls)} - {"http_extra"}
        known: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in mapping.items():
            if key in names:
                known[key] = value
            elif key.startswith(HTTP_OPTION_PREFIX):
                extra[key] = value
            else:
                msg = f"Unknown option: {key!r}"
                raise TypeError(msg)
        return cls(**known, http_extra=extra)

    def merge(self, **overrides: Any) -> Options:
        """Create new options with the specified values overridden.

        Only non-None override values are applied.

        Args:
            **overrides: The option values to override.

        Returns:
            A new ``Options`` instance. The original is unchanged.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def http_settings(self) -> Iterator[tuple[str, Any]]:
        """Iterate over the transport settings.

        The ``http_`` prefix is stripped from every name. The values are
        yielded as they are, including the falsy ones.

        Yields:
            The ``(setting, value)`` pairs, the declared fields first.
        """
        for f in fields(self):
            if f.name == "http_extra" or not f.name.startswith(HTTP_OPTION_PREFIX):
                continue
            yield f.name[len(HTTP_OPTION_PREFIX) :], getattr(self, f.name)
        for name, value in self.http_extra:
            if name.startswith(HTTP_OPTION_PREFIX):
                yield name[len(HTTP_OPTION_PREFIX) :], value


def _freeze_extra(
    extra: Mapping[str, Any] | Iterable[tuple[str, Any]],
) -> tuple[tuple[str, Any], ...]:
    items = extra.items() if hasattr(extra, "items") else extra
    return tuple(sorted(dict(items).items(), key=lambda item: item[0]))
