"""
Command modules for the faster CLI.

Each submodule defines one or more Typer commands that are registered
with the main app in faster_cli/__init__.py.
"""

from faster_cli.commands import aggregate, per_read, table

__all__ = ["aggregate", "per_read", "table"]
