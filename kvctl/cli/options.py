"""
Shared CLI Options.

Flag declarations, argument helpers, output helpers and the client factory
used by every command. Flags take precedence over the environment, which
takes precedence over config/settings/client.yaml.
"""

from typing import List, Optional

import typer
from rich.console import Console

from kvctl.client import ClientConfig, ClusterClient, new_client
from kvctl.core.config import get_app_config, get_settings
from kvctl.core.exceptions import AgentConnectionError, ArgumentError

err_console = Console(stderr=True, highlight=False)


HttpAddrOption = typer.Option(
    None,
    "--http-addr",
    metavar="<address>",
    help=(
        "Address of the agent with the port. May be an IP address or DNS "
        "address, optionally with an http://, https:// or unix:// scheme. "
        "Defaults to KVCTL_HTTP_ADDR or 127.0.0.1:8500."
    ),
)

TokenOption = typer.Option(
    "",
    "--token",
    metavar="<value>",
    help="ACL token to use in the request. Defaults to KVCTL_HTTP_TOKEN.",
)

DatacenterOption = typer.Option(
    "",
    "--datacenter",
    metavar="<name>",
    help="Name of the datacenter to query. Defaults to the agent's datacenter.",
)


def info(message: str) -> None:
    """Write a result line to stdout, verbatim. Tabs are preserved."""
    typer.echo(message)


def error(message: str) -> None:
    """Write an error line to stderr, verbatim."""
    err_console.out(message, style="red", highlight=False)


def normalize_key(key: str) -> str:
    """
    Strip leading slashes from a key or prefix.

    Stored keys never start with "/", but users often type "/" or "/foo".
    """
    return key.lstrip("/")


def single_argument(args: Optional[List[str]], missing: str | None = None) -> str:
    """
    Return the one positional argument, or "" if none was given.

    Args:
        args: Positional arguments collected by Typer.
        missing: Error message when the argument is required.

    Raises:
        ArgumentError: On two or more arguments, or none when required.
    """
    args = args or []
    if len(args) > 1:
        raise ArgumentError(f"Too many arguments (expected 1, got {len(args)})")
    if not args:
        if missing is not None:
            raise ArgumentError(missing)
        return ""
    return args[0]


def build_client(
    http_addr: str | None = None,
    token: str = "",
    datacenter: str = "",
) -> ClusterClient:
    """
    Build a client from flag values layered over environment and YAML.

    Raises:
        AgentConnectionError: If the environment or YAML settings are invalid,
            or the resulting configuration is unusable.
    """
    try:
        settings = get_settings()
        client_settings = get_app_config().client
    except ValueError as e:
        raise AgentConnectionError(f"Invalid configuration: {e}") from e

    scheme = client_settings.scheme
    if settings.http_ssl is not None:
        scheme = "https" if settings.http_ssl else "http"

    verify_ssl = client_settings.verify_ssl
    if settings.http_ssl_verify is not None:
        verify_ssl = settings.http_ssl_verify

    config = ClientConfig(
        address=http_addr or settings.http_addr or client_settings.address,
        scheme=scheme,
        token=token or settings.http_token,
        datacenter=datacenter,
        http_auth=settings.http_auth,
        timeout=client_settings.timeout,
        verify_ssl=verify_ssl,
        ca_file=settings.cacert or client_settings.ca_file,
    )
    return new_client(config)
