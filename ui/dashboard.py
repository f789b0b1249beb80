"""Real-time CLI dashboard for relay monitoring."""

from datetime import datetime
from threading import Lock
from typing import Any

import httpx
from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import write_cli_log, write_forward_log, write_incoming_log

console = Console()


class RelayInfo:
    """Info about a single relay."""

    def __init__(self, relay_id: str, filename: str, target_url: str, size: int, timestamp: datetime):
        self.relay_id = relay_id
        self.filename = filename
        self.target = httpx.URL(target_url).host or target_url
        self.target_url = target_url
        self.size = size
        self.timestamp = timestamp
        self.status: int | None = None


class Dashboard:
    """Real-time dashboard showing recent relays and errors."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._relays: list[RelayInfo] = []
        self._max_relays = 10
        self._counts = {"relayed": 0, "failed": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_incoming(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        body: Any,
    ) -> None:
        """Log an authenticated inbound request."""
        write_incoming_log(method, path, headers, body)

    def log_relay(
        self,
        relay_id: str,
        file_url: str,
        target_url: str,
        *,
        method: str,
        filename: str,
        size: int,
        headers: dict[str, str],
        fields: int,
    ) -> None:
        """Log a relay about to be forwarded."""
        with self._lock:
            self._relays.insert(0, RelayInfo(relay_id, filename, target_url, size, datetime.now()))
            self._relays = self._relays[: self._max_relays]
            self._refresh()

            write_forward_log(
                file_url,
                target_url,
                method=method,
                filename=filename,
                size=size,
                headers=headers,
                fields=fields,
            )
            write_cli_log("RELAY", file_url, target=target_url, filename=filename, size=size)

    def log_response(self, relay_id: str, status: int) -> None:
        """Record the target endpoint's status for one relay."""
        with self._lock:
            self._counts["relayed"] += 1
            info = self._find_relay(relay_id)
            if info:
                info.status = status
            self._refresh()
            write_cli_log("RESPONSE", info.target_url if info else relay_id, status=status)

    def _find_relay(self, relay_id: str) -> RelayInfo | None:
        return next((info for info in self._relays if info.relay_id == relay_id), None)

    def log_error(self, stage: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            self._counts["failed"] += 1
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{stage} {status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message[:200], stage=stage, status=status)

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="relays"),
            Layout(name="footer", size=5),
        )
        layout["header"].update(self._build_header())
        layout["relays"].update(self._build_relays_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("File Relay", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Relayed: {self._counts['relayed']}", style="green")
        stats.append("  |  ")
        stats.append(f"Failed: {self._counts['failed']}", style="red")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_relays_panel(self) -> Panel:
        """Build recent relays panel."""
        if self._relays:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("File", ratio=1)
            table.add_column("Size", justify="right", width=10)
            table.add_column("Target", ratio=2)
            table.add_column("Status", width=6)

            for info in self._relays:
                if info.status is None:
                    status = "[dim]...[/dim]"
                elif info.status < 400:
                    status = f"[green]{info.status}[/green]"
                else:
                    status = f"[red]{info.status}[/red]"
                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.filename,
                    _format_size(info.size),
                    info.target,
                    status,
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Recent Relays[/blue]", border_style="blue")

    def _build_footer(self) -> Panel:
        """Build footer with errors and help."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            content = Text(
                f"POST http://{self.config.proxy.host}:{self.config.proxy.port}/ "
                f"with header {self.config.auth.header_name}",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")


def _format_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB"):
        if value < 1024:
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"
