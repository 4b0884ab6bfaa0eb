"""
kvctl.

Command-line client for a cluster agent's key-value and snapshot HTTP API.
"""

__version__ = "0.1.0"
