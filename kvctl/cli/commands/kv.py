"""
Key-Value Commands.

Export a tree of the key-value store as JSON and delete keys or prefixes.
"""

import base64
import json
from typing import List, Optional

import typer
from pydantic import BaseModel, ConfigDict

from kvctl.cli.options import (
    DatacenterOption,
    HttpAddrOption,
    TokenOption,
    build_client,
    error,
    info,
    normalize_key,
    single_argument,
)
from kvctl.client import KVPair
from kvctl.core.exceptions import AgentConnectionError, ArgumentError, OperationError
from kvctl.core.logging import get_logger, log_with_source

app = typer.Typer(help="Interact with the key-value store")
logger = get_logger(__name__)


class ExportOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = ""
    datacenter: str = ""
    token: str = ""
    stale: bool = False
    http_addr: str | None = None


class DeleteOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = ""
    datacenter: str = ""
    token: str = ""
    cas: bool = False
    modify_index: int = 0
    recurse: bool = False
    http_addr: str | None = None

    def check(self) -> None:
        """
        Validate flag combinations. Rules are checked in order; the first
        failing rule is reported.

        Raises:
            ArgumentError: On the first violated rule.
        """
        if not self.key and not self.recurse:
            raise ArgumentError("Error! Missing KEY argument")
        if self.cas and self.modify_index == 0:
            raise ArgumentError("Must specify -modify-index with -cas!")
        if self.modify_index != 0 and not self.cas:
            raise ArgumentError("Cannot specify -modify-index without -cas!")
        if self.recurse and self.cas:
            raise ArgumentError("Cannot specify both -cas and -recurse!")


def to_export_entry(pair: KVPair) -> dict:
    """Render a pair as an export record with a base64 value."""
    return {
        "key": pair.key,
        "flags": pair.flags,
        "value": base64.b64encode(pair.value).decode("ascii"),
    }


def _read_key(keys: Optional[List[str]]) -> str:
    try:
        return normalize_key(single_argument(keys))
    except ArgumentError as e:
        error(e.message)
        raise typer.Exit(1)


@app.command()
def export(
    keys: Optional[List[str]] = typer.Argument(
        None, metavar="[KEY_OR_PREFIX]", help="Key or prefix to export. Defaults to the whole tree.",
    ),
    datacenter: str = DatacenterOption,
    token: str = TokenOption,
    stale: bool = typer.Option(
        False, "--stale",
        help="Permit any server to answer the query, not only the leader.",
    ),
    http_addr: Optional[str] = HttpAddrOption,
) -> None:
    """
    Exports a tree from the KV store as JSON.

    Retrieves key-value pairs for the given prefix and writes a JSON
    representation to stdout. Values are base64 encoded.

    Examples:
        kvctl kv export vault
        kvctl kv export --stale /
    """
    options = ExportOptions(
        key=_read_key(keys),
        datacenter=datacenter,
        token=token,
        stale=stale,
        http_addr=http_addr,
    )
    _export(options)


def _export(options: ExportOptions) -> None:
    try:
        client = build_client(options.http_addr, options.token)
    except AgentConnectionError as e:
        error(f"Error connecting to agent: {e}")
        raise typer.Exit(1)

    with client:
        try:
            pairs = client.list_pairs(
                options.key,
                datacenter=options.datacenter or None,
                allow_stale=options.stale,
            )
        except OperationError as e:
            error(f"Error querying agent: {e}")
            raise typer.Exit(1)

    try:
        marshaled = json.dumps([to_export_entry(pair) for pair in pairs], indent="\t")
    except (TypeError, ValueError) as e:
        error(f"Error exporting KV data: {e}")
        raise typer.Exit(1)

    log_with_source(logger, "cli", "info", "Exported keys", prefix=options.key, count=len(pairs))
    info(marshaled)


@app.command()
def delete(
    keys: Optional[List[str]] = typer.Argument(
        None, metavar="KEY_OR_PREFIX", help="Key to delete, or prefix with --recurse.",
    ),
    datacenter: str = DatacenterOption,
    token: str = TokenOption,
    cas: bool = typer.Option(
        False, "--cas",
        help="Perform a Check-And-Set operation. Requires --modify-index.",
    ),
    modify_index: int = typer.Option(
        0, "--modify-index", min=0, max=2**64 - 1, metavar="<uint>",
        help="ModifyIndex of the key, used in combination with --cas.",
    ),
    recurse: bool = typer.Option(
        False, "--recurse",
        help="Recursively delete all keys with the path.",
    ),
    http_addr: Optional[str] = HttpAddrOption,
) -> None:
    """
    Removes data from the KV store.

    Removes the value at the given path. If no key exists at the path, no
    action is taken. With --recurse every key starting with the prefix is
    removed, so "foo" also removes "food" and "foo/bar/zip".

    Examples:
        kvctl kv delete foo
        kvctl kv delete --recurse foo
        kvctl kv delete --cas --modify-index 42 foo
    """
    options = DeleteOptions(
        key=_read_key(keys),
        datacenter=datacenter,
        token=token,
        cas=cas,
        modify_index=modify_index,
        recurse=recurse,
        http_addr=http_addr,
    )
    try:
        options.check()
    except ArgumentError as e:
        error(e.message)
        raise typer.Exit(1)

    _delete(options)


def _delete(options: DeleteOptions) -> None:
    try:
        client = build_client(options.http_addr, options.token)
    except AgentConnectionError as e:
        error(f"Error connecting to agent: {e}")
        raise typer.Exit(1)

    key = options.key
    dc = options.datacenter or None

    with client:
        if options.recurse:
            try:
                client.delete_tree(key, datacenter=dc)
            except OperationError as e:
                error(f"Error! Did not delete prefix {key}: {e}")
                raise typer.Exit(1)

            log_with_source(logger, "cli", "info", "Deleted prefix", prefix=key)
            info(f"Success! Deleted keys with prefix: {key}")

        elif options.cas:
            try:
                deleted = client.delete_cas(key, options.modify_index, datacenter=dc)
            except OperationError as e:
                error(f"Error! Did not delete key {key}: {e}")
                raise typer.Exit(1)
            if not deleted:
                log_with_source(
                    logger, "cli", "info", "CAS delete rejected",
                    key=key, modify_index=options.modify_index,
                )
                error(f"Error! Did not delete key {key}: CAS failed")
                raise typer.Exit(1)

            log_with_source(logger, "cli", "info", "Deleted key", key=key, modify_index=options.modify_index)
            info(f"Success! Deleted key: {key}")

        else:
            try:
                client.delete(key, datacenter=dc)
            except OperationError as e:
                error(f"Error deleting key {key}: {e}")
                raise typer.Exit(1)

            log_with_source(logger, "cli", "info", "Deleted key", key=key)
            info(f"Success! Deleted key: {key}")
