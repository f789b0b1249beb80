"""Shared protocol definitions."""

from typing import Any, Protocol


class RelayLogger(Protocol):
    """Protocol for relay logging (Dashboard)."""

    def log_incoming(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        body: Any,
    ) -> None: ...
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
    ) -> None: ...
    def log_response(self, relay_id: str, status: int) -> None: ...
    def log_error(self, stage: str, status: int, message: str) -> None: ...
