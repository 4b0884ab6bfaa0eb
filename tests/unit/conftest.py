"""
Unit Test Fixtures.

Fixtures for unit tests. The agent is never contacted: commands get a
mocked ClusterClient and the client itself talks to httpx.MockTransport.
"""

import json
from collections.abc import Callable, Generator
from unittest.mock import MagicMock, patch

import httpx
import pytest

from kvctl.client import ClientConfig, ClusterClient, new_client


# =============================================================================
# Command Fixtures
# =============================================================================


@pytest.fixture
def mock_client() -> MagicMock:
    """
    Mock ClusterClient for command tests.

    Usage:
        def test_delete(mock_client, patch_kv_client):
            mock_client.delete_cas.return_value = False
    """
    client = MagicMock(spec=ClusterClient)
    client.__enter__.return_value = client
    client.__exit__.return_value = None
    client.list_pairs.return_value = []
    client.delete_cas.return_value = True
    return client


@pytest.fixture
def patch_kv_client(mock_client: MagicMock) -> Generator[MagicMock, None, None]:
    """Patch the kv commands' client factory. Yields the factory mock."""
    with patch("kvctl.cli.commands.kv.build_client", return_value=mock_client) as factory:
        yield factory


@pytest.fixture
def patch_snapshot_client(mock_client: MagicMock) -> Generator[MagicMock, None, None]:
    """Patch the snapshot commands' client factory. Yields the factory mock."""
    with patch("kvctl.cli.commands.snapshot.build_client", return_value=mock_client) as factory:
        yield factory


# =============================================================================
# HTTP Fixtures
# =============================================================================


class RecordingHandler:
    """
    httpx.MockTransport handler that records requests and replays one response.

    Streaming bodies are read so tests can inspect them.
    """

    def __init__(self, status_code: int = 200, body: object = None, text: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        self.text = text
        self.requests: list[httpx.Request] = []
        self.bodies: list[bytes] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.bodies.append(request.read())
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, content=json.dumps(self.body).encode())

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_client() -> Callable[..., tuple[ClusterClient, RecordingHandler]]:
    """
    Build a ClusterClient wired to a RecordingHandler.

    Usage:
        client, handler = make_client(status_code=200, body=[...])
    """
    def _make(
        status_code: int = 200,
        body: object = None,
        text: str | None = None,
        **config: object,
    ) -> tuple[ClusterClient, RecordingHandler]:
        handler = RecordingHandler(status_code=status_code, body=body, text=text)
        client = new_client(ClientConfig(**config), transport=httpx.MockTransport(handler))
        return client, handler

    return _make
