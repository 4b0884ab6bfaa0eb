"""
Snapshot Commands.

Restore a point-in-time snapshot of the cluster state from a local file.
"""

from typing import IO, List, Optional

import typer
from pydantic import BaseModel, ConfigDict

from kvctl.cli.options import (
    DatacenterOption,
    HttpAddrOption,
    TokenOption,
    build_client,
    error,
    info,
    single_argument,
)
from kvctl.core.exceptions import (
    AgentConnectionError,
    ArgumentError,
    OperationError,
    SnapshotFileError,
)
from kvctl.core.logging import get_logger, log_with_source

app = typer.Typer(help="Save and restore snapshots of server state")
logger = get_logger(__name__)


class RestoreOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    file: str
    datacenter: str = ""
    token: str = ""
    http_addr: str | None = None


def open_snapshot(path: str) -> IO[bytes]:
    """
    Open a snapshot file for streaming read.

    Raises:
        SnapshotFileError: If the file cannot be opened.
    """
    try:
        return open(path, "rb")
    except OSError as e:
        raise SnapshotFileError(str(e)) from e


@app.command()
def restore(
    files: Optional[List[str]] = typer.Argument(
        None, metavar="FILE", help="Snapshot file to restore.",
    ),
    datacenter: str = DatacenterOption,
    token: str = TokenOption,
    http_addr: Optional[str] = HttpAddrOption,
) -> None:
    """
    Restores snapshot of server state.

    Restores an atomic, point-in-time snapshot of the state of the servers,
    which includes key/value entries, service catalog, prepared queries,
    sessions and ACLs.

    A restore is a low-level operation that is not designed to survive
    server failures while it runs. It is intended for disaster recovery
    into a fresh cluster. If ACLs are enabled, a management token is
    required.

    Examples:
        kvctl snapshot restore backup.snap
    """
    try:
        file = single_argument(files, missing="Missing FILE argument")
    except ArgumentError as e:
        error(e.message)
        raise typer.Exit(1)

    _restore(RestoreOptions(file=file, datacenter=datacenter, token=token, http_addr=http_addr))


def _restore(options: RestoreOptions) -> None:
    try:
        client = build_client(options.http_addr, options.token, options.datacenter)
    except AgentConnectionError as e:
        error(f"Error connecting to agent: {e}")
        raise typer.Exit(1)

    with client:
        try:
            snapshot = open_snapshot(options.file)
        except SnapshotFileError as e:
            error(f"Error opening snapshot file: {e}")
            raise typer.Exit(1)

        with snapshot:
            try:
                client.restore(snapshot)
            except OperationError as e:
                error(f"Error restoring snapshot: {e}")
                raise typer.Exit(1)

    log_with_source(logger, "cli", "info", "Restored snapshot", file=options.file)
    info("Restored snapshot")
