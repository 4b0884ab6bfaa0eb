"""
CLI Commands.

Organized by API area.
"""

from kvctl.cli.commands.kv import app as kv_app
from kvctl.cli.commands.snapshot import app as snapshot_app

__all__ = [
    "kv_app",
    "snapshot_app",
]
