"""Shared-secret API key check for inbound relay requests."""

import secrets

from rich.console import Console

from core.config import CONFIG_FILE, Config, load_config

console = Console()


class ApiKeyGate:
    """Compare the inbound API key header against the configured secret."""

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def check(self, header_value: str | None) -> bool:
        """Return True if the header carries the configured key."""
        if not self._api_key or header_value is None:
            return False
        return secrets.compare_digest(header_value.encode(), self._api_key.encode())


def print_auth_status(config: Config) -> bool:
    """Print whether an API key is configured."""
    key = config.auth.api_key
    if key:
        masked = key[:4] + "..." + key[-4:] if len(key) > 10 else "***"
        console.print(
            f"[green]API key configured[/green] ({masked}, header [bold]{config.auth.header_name}[/bold])"
        )
        return True
    console.print("[yellow]API key not configured[/yellow]")
    console.print(f"\n[dim]Set auth.api_key in:[/dim] {CONFIG_FILE}")
    return False


def main():
    """CLI entry point for auth check."""
    print_auth_status(load_config())


if __name__ == "__main__":
    main()
