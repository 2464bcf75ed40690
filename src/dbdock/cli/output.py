"""Terminal output for the dbdock CLI.

All rendering lives here: the orchestrator returns structured results
and :data:`out` turns them into text.  Messages go to stdout, errors to
stderr.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..orchestrator.database.summary import ConnectionSummary, ContainerSummary
from ..orchestrator.operations import OperationReporter


class Output:
    """Colored message helpers and result formatters."""

    def __init__(self, console: Console | None = None, err_console: Console | None = None):
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    # -------------------------------------------------------------------------
    # Messages
    # -------------------------------------------------------------------------

    def info(self, msg: str) -> None:
        self.console.print(f"[cyan]ℹ[/cyan] {msg}")

    def success(self, msg: str) -> None:
        self.console.print(f"[bold green]✔[/bold green] {msg}")

    def warning(self, msg: str) -> None:
        self.console.print(f"[yellow]⚠ {msg}[/yellow]")

    def dim(self, msg: str) -> None:
        self.console.print(f"[dim]{msg}[/dim]")

    def error(self, msg: str) -> None:
        self.err_console.print(f"[bold red]✘ Error:[/bold red] {escape(msg)}", soft_wrap=True)

    def hint(self, msg: str) -> None:
        self.err_console.print(f"[cyan]→[/cyan] {msg}", soft_wrap=True)

    # -------------------------------------------------------------------------
    # Results
    # -------------------------------------------------------------------------

    def connection_details(self, summary: ConnectionSummary) -> None:
        """Print connection details, management commands and URIs."""
        arrow = "[cyan]→[/cyan]"
        lines = [
            f"  {arrow} Host: {escape(summary.host)}",
            f"  {arrow} Port: {summary.port or 'not published'}",
            f"  {arrow} User: {escape(summary.username)}",
            f"  {arrow} Password: {escape(summary.password)}",
            f"  {arrow} Database: {escape(summary.database)}",
        ]
        if summary.volume:
            lines.append(f"  {arrow} Data Volume: {escape(summary.volume)}")
        if summary.ssl_mode != "disable":
            lines.append(f"  {arrow} SSL Mode: {summary.ssl_mode}")

        self.console.print()
        self.info("Connection Details:")
        for line in lines:
            self.console.print(line)

        self.console.print()
        self.info("Management Commands:")
        for label, command in (
            ("Stop:   ", f"dbdock stop {summary.name}"),
            ("Start:  ", f"dbdock start {summary.name}"),
            ("Remove: ", f"dbdock remove {summary.name}"),
            ("Logs:   ", f"docker logs {summary.name}"),
        ):
            self.console.print(f"  {arrow} {label} {command}")

        self.console.print()
        if summary.uri is None:
            self.warning("No host port is published; start the container to connect")
            return
        self.info("Connection String:")
        self.console.print(f"  {arrow} {escape(summary.uri)}", soft_wrap=True)
        if summary.external_uri:
            self.console.print()
            self.info("External Connection String:")
            self.console.print(f"  {arrow} {escape(summary.external_uri)}", soft_wrap=True)

    def container_table(self, containers: list[ContainerSummary]) -> None:
        """Print the container list, or a notice when it is empty."""
        if not containers:
            self.warning("No PostgreSQL containers found")
            return

        table = Table(title="PostgreSQL Containers")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Status")
        table.add_column("Port", style="yellow")
        table.add_column("Container ID", style="dim")

        for c in containers:
            if c.running:
                uptime = c.status.removeprefix("Up").strip()
                status = f"[green]● Running[/green] {uptime}".rstrip()
            else:
                status = "[red]● Stopped[/red]"
            table.add_row(escape(c.name), status, c.port or "N/A", c.short_id)

        self.console.print(table)


class CliReporter(OperationReporter):
    """Operation reporter that writes progress to the terminal."""

    def __init__(self, output: Output):
        self._out = output

    def info(self, msg: str) -> None:
        self._out.info(msg)

    def dim(self, msg: str) -> None:
        self._out.dim(msg)

    def warning(self, msg: str) -> None:
        self._out.warning(msg)

    def success(self, msg: str) -> None:
        self._out.success(msg)


def setup_logging(level: int | str = logging.WARNING) -> None:
    """Send log records to stderr through rich."""
    handler = RichHandler(console=out.err_console, show_path=False, markup=False)
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


out = Output()
