"""Entry point for running the CLI directly.

Usage:
    python -m dbdock list
"""

from .cli.main import cli

if __name__ == "__main__":
    cli()
