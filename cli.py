"""CLI entry point for file-relay."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from auth import print_auth_status
from core.config import CONFIG_FILE, load_config
from ui.dashboard import Dashboard
from ui.log_utils import CLI_LOG_FILE, clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    config = load_config()

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg in ("--check", "--auth"):
            print_auth_status(config)
            return

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            console.print(f"[bold]Log:[/bold] {CLI_LOG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

    # Refuse to run an open relay
    if not config.auth.api_key:
        console.print("[red][ERROR][/red] API key not configured!")
        console.print(f"[dim]Edit {CONFIG_FILE} and set auth.api_key[/dim]")
        sys.exit(1)

    # Clear previous logs and start dashboard
    clear_logs()
    dashboard = Dashboard(config)

    import uvicorn

    app = create_app(config, dashboard)

    # Run with dashboard
    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
        timeout_keep_alive=config.limits.keep_alive_timeout,
    )
    server = uvicorn.Server(uvicorn_config)

    dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Relay started", host=config.proxy.host, port=config.proxy.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Relay stopped", duration=str(duration))
        dashboard.stop()


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]File Relay[/bold cyan]

Downloads a file from file_url and re-posts it as multipart/form-data to endpoint.

[bold]Usage:[/bold]
    file-relay              Start with live dashboard
    file-relay --check      Check API key status
    file-relay --config     Show config and log locations
    file-relay --help       Show this help

[bold]Request:[/bold]
    POST / with header pabbly_api_key and a JSON body:
    {"file_url": "...", "endpoint": "...", "method": "POST",
     "headers_to_forward": ["Authorization"], "body": {...}, "file_key": "file"}
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
