"""
faster CLI - a Typer-based command-line interface for the faster statistics engine.

Usage:
    faster table reads.fastq.gz other.bam
    faster nx 0.5 reads.fastq
    faster qyield 30 reads.fastq
    faster len reads.fastq
    faster --help
"""

import sys

import typer

from faster_cli.app import app

# Import commands to register them with the app
from faster_cli.commands import aggregate, per_read, table  # noqa: F401
from faster_cli.utils import err_console

__all__ = ["app", "main"]


def main() -> None:
    """Main entry point for the faster CLI."""
    try:
        app()
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except typer.Exit:
        # Normal exit from Typer - re-raise to preserve exit code
        raise
    except typer.Abort:
        sys.exit(1)
