"""CLI command implementations for cityhash_tools.

This module contains all command-line interface implementations:
- hash: Compute digests of files, strings or hex bytes
- verify: Check a file against a recorded digest
- inspect: Show how an input length is hashed
"""

from cityhash_tools.commands.hash import hash_command
from cityhash_tools.commands.inspect import inspect
from cityhash_tools.commands.verify import verify

__all__ = ["hash_command", "inspect", "verify"]
