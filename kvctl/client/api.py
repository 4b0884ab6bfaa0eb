"""
HTTP Client for the Cluster Agent.

Thin synchronous wrapper around the agent's /v1 HTTP API. One client is
built per command invocation and closed when the command finishes.
Nothing here retries; every failure surfaces as an OperationError.
"""

import ssl
from collections.abc import Iterator
from typing import IO, Any
from urllib.parse import quote

import httpx

from kvctl import __version__
from kvctl.client.models import ClientConfig, KVPair
from kvctl.core.exceptions import AgentConnectionError, OperationError
from kvctl.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

TOKEN_HEADER = "X-Consul-Token"
RESTORE_CHUNK_SIZE = 64 * 1024

_UNIX_BASE_URL = "http://localhost"


def _kv_path(key: str) -> str:
    return "/v1/kv/" + quote(key, safe="/")


def _iter_chunks(stream: IO[bytes], chunk_size: int = RESTORE_CHUNK_SIZE) -> Iterator[bytes]:
    """Yield the stream in fixed-size chunks until EOF."""
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            return
        yield chunk


def parse_address(address: str, default_scheme: str = "http") -> tuple[str, str | None]:
    """
    Split an agent address into (base_url, unix_socket_path).

    Accepts host:port, http://host:port, https://host:port and
    unix:///path/to/socket.

    Raises:
        AgentConnectionError: On an empty address or an unknown scheme.
    """
    if "://" in address:
        scheme, rest = address.split("://", 1)
        if not rest:
            raise AgentConnectionError(f"Missing host in agent address: {address}")
        if scheme == "unix":
            return _UNIX_BASE_URL, rest
        if scheme not in ("http", "https"):
            raise AgentConnectionError(f"Unknown protocol scheme: {scheme}")
        return f"{scheme}://{rest.rstrip('/')}", None

    if not address:
        raise AgentConnectionError("Missing agent address")
    return f"{default_scheme}://{address.rstrip('/')}", None


class ClusterClient:
    """
    Client for the agent's key-value and snapshot endpoints.

    Usage:
        with new_client(ClientConfig(address="10.0.0.5:8500")) as client:
            pairs = client.list_pairs("app/")
            client.delete("app/flag")
    """

    def __init__(self, http: httpx.Client, config: ClientConfig) -> None:
        self._http = http
        self.config = config

    def __enter__(self) -> "ClusterClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP transport."""
        if not self._http.is_closed:
            self._http.close()

    def _params(self, datacenter: str | None, **extra: str) -> dict[str, str]:
        params: dict[str, str] = {}
        dc = datacenter or self.config.datacenter
        if dc:
            params["dc"] = dc
        params.update(extra)
        return params

    def _request(
        self,
        method: str,
        path: str,
        *,
        accept: tuple[int, ...] = (200,),
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Issue one request and check its status.

        Raises:
            OperationError: On transport failure or a status outside `accept`.
        """
        log_with_source(logger, "client", "debug", "API request", method=method, path=path)

        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger, "client", "debug", "API request failed",
                method=method, path=path, error=str(e),
            )
            raise OperationError(str(e)) from e

        log_with_source(
            logger, "client", "debug", "API response",
            method=method, path=path, status_code=response.status_code,
        )

        if response.status_code not in accept:
            raise OperationError(
                f"Unexpected response code: {response.status_code} ({response.text.strip()})",
                status_code=response.status_code,
            )
        return response

    def list_pairs(
        self,
        prefix: str,
        datacenter: str | None = None,
        allow_stale: bool = False,
    ) -> list[KVPair]:
        """
        List every pair whose key starts with prefix, ordered by key.

        A prefix matching nothing yields an empty list.
        """
        params = self._params(datacenter, recurse="")
        if allow_stale:
            params["stale"] = ""

        response = self._request("GET", _kv_path(prefix), params=params, accept=(200, 404))
        if response.status_code == 404:
            return []
        try:
            return [KVPair.model_validate(entry) for entry in response.json() or []]
        except ValueError as e:
            raise OperationError(f"Failed to decode response: {e}") from e

    def delete(self, key: str, datacenter: str | None = None) -> None:
        """Delete a single key. Deleting a missing key is not an error."""
        self._request("DELETE", _kv_path(key), params=self._params(datacenter))

    def delete_tree(self, prefix: str, datacenter: str | None = None) -> None:
        """Delete every key starting with prefix."""
        self._request("DELETE", _kv_path(prefix), params=self._params(datacenter, recurse=""))

    def delete_cas(self, key: str, modify_index: int, datacenter: str | None = None) -> bool:
        """
        Delete key only if its ModifyIndex still equals modify_index.

        Returns:
            True if the key was deleted, False if the agent rejected the swap.
        """
        response = self._request(
            "DELETE",
            _kv_path(key),
            params=self._params(datacenter, cas=str(modify_index)),
        )
        return response.text.strip() == "true"

    def restore(self, stream: IO[bytes]) -> None:
        """
        Stream a snapshot to the agent, replacing the cluster state.

        The stream is sent unmodified in one attempt.
        """
        self._request(
            "PUT",
            "/v1/snapshot",
            params=self._params(None),
            content=_iter_chunks(stream),
            headers={"Content-Type": "application/octet-stream"},
        )


def new_client(
    config: ClientConfig,
    transport: httpx.BaseTransport | None = None,
) -> ClusterClient:
    """
    Build a ClusterClient from config.

    Args:
        config: Connection settings.
        transport: Optional transport override, used by tests.

    Raises:
        AgentConnectionError: If the address or TLS settings are unusable.
    """
    base_url, uds = parse_address(config.address, config.scheme)

    if transport is None and uds is not None:
        transport = httpx.HTTPTransport(uds=uds)

    verify: ssl.SSLContext | bool = config.verify_ssl
    if config.verify_ssl and config.ca_file:
        try:
            verify = ssl.create_default_context(cafile=config.ca_file)
        except OSError as e:
            raise AgentConnectionError(f"Error loading CA file {config.ca_file}: {e}") from e

    headers = {"User-Agent": f"kvctl/{__version__}"}
    if config.token:
        headers[TOKEN_HEADER] = config.token

    auth = None
    if config.http_auth:
        username, _, password = config.http_auth.partition(":")
        auth = httpx.BasicAuth(username, password)

    try:
        http = httpx.Client(
            base_url=base_url,
            timeout=config.timeout,
            headers=headers,
            auth=auth,
            verify=verify,
            transport=transport,
        )
    except (httpx.InvalidURL, ValueError) as e:
        raise AgentConnectionError(str(e)) from e

    return ClusterClient(http, config)
