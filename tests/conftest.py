"""Shared fixtures for relay tests."""

from typing import Any

import pytest

from core.config import AuthSettings, Config

API_KEY = "3be0fa73-bd3b-4953-a5f7-3ebdfae0feea"


class RecordingLogger:
    """RelayLogger that keeps calls in memory instead of writing files."""

    def __init__(self) -> None:
        self.incoming: list[dict[str, Any]] = []
        self.relays: list[dict[str, Any]] = []
        self.responses: list[tuple[str, int]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_incoming(self, method: str, path: str, headers: dict[str, str], body: Any) -> None:
        self.incoming.append({"method": method, "path": path, "headers": headers, "body": body})

    def log_relay(self, relay_id: str, file_url: str, target_url: str, **kwargs: Any) -> None:
        self.relays.append({"relay_id": relay_id, "file_url": file_url, "target_url": target_url, **kwargs})

    def log_response(self, relay_id: str, status: int) -> None:
        self.responses.append((relay_id, status))

    def log_error(self, stage: str, status: int, message: str) -> None:
        self.errors.append((stage, status, message))


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def config() -> Config:
    return Config(auth=AuthSettings(api_key=API_KEY))
