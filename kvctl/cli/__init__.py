"""
CLI Module.

Command-line client built with Typer for the cluster agent's HTTP API.

Architecture:
- CLI is a thin presentation layer
- All storage, snapshot and consensus logic lives in the agent
- CLI calls the agent via HTTP (httpx), one client per invocation

Usage:
    kvctl --help
    kvctl kv export vault
    kvctl kv delete --recurse vault
    kvctl snapshot restore backup.snap
"""
