"""
CLI Entry Point.

Command-line client for the cluster agent.
Built with Typer for type-safe commands.

Usage:
    kvctl --help                                   # Show help

    # Key-value store
    kvctl kv export [KEY_OR_PREFIX]                # Export a tree as JSON
    kvctl kv delete KEY                            # Delete one key
    kvctl kv delete --recurse PREFIX               # Delete a prefix
    kvctl kv delete --cas --modify-index N KEY     # Check-and-set delete

    # Snapshots
    kvctl snapshot restore FILE                    # Restore server state

Options:
    --verbose, -v     Enable verbose output (INFO level logging)
    --debug, -d       Enable debug mode (DEBUG level logging)
    --help            Show help message
"""

import typer

from kvctl.cli.commands import kv_app, snapshot_app
from kvctl.cli.options import error

USAGE_ERROR_EXIT_CODE = 2

app = typer.Typer(
    name="kvctl",
    help="Command-line client for the cluster agent's key-value and snapshot API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(kv_app, name="kv")
app.add_typer(snapshot_app, name="snapshot")


@app.callback()
def callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    kvctl.

    Talks to a cluster agent over HTTP. Agent address and token come from
    --http-addr/--token, KVCTL_HTTP_ADDR/KVCTL_HTTP_TOKEN, or
    config/settings/client.yaml, in that order.
    """
    from kvctl.core.logging import setup_logging

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    else:
        level = None

    try:
        setup_logging(level=level)
    except ValueError as e:
        error(f"Error loading configuration: {e}")
        raise typer.Exit(1)


def main() -> int:
    """
    Console script entry point.

    Flag parse errors exit with 1, like every other argument error.
    """
    try:
        app()
    except SystemExit as e:
        if e.code is None:
            return 0
        if not isinstance(e.code, int):
            return 1
        # Click reports usage errors with 2.
        return 1 if e.code == USAGE_ERROR_EXIT_CODE else e.code
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
