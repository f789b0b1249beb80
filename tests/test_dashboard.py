"""Tests for the relay dashboard bookkeeping."""

import pytest

import ui.dashboard
from core.config import Config
from ui.dashboard import Dashboard


@pytest.fixture
def dashboard(monkeypatch) -> Dashboard:
    for name in ("write_incoming_log", "write_forward_log", "write_cli_log"):
        monkeypatch.setattr(ui.dashboard, name, lambda *args, **kwargs: None)
    return Dashboard(Config())


def _log_relay(dashboard: Dashboard, relay_id: str, filename: str) -> None:
    dashboard.log_relay(
        relay_id,
        f"https://files.test/{filename}",
        "https://api.test/upload",
        method="POST",
        filename=filename,
        size=10,
        headers={},
        fields=0,
    )


class TestDashboard:
    def test_status_goes_to_matching_relay(self, dashboard) -> None:
        _log_relay(dashboard, "first", "a.pdf")
        _log_relay(dashboard, "second", "b.pdf")

        dashboard.log_response("first", 502)
        dashboard.log_response("second", 201)

        statuses = {info.filename: info.status for info in dashboard._relays}
        assert statuses == {"a.pdf": 502, "b.pdf": 201}
        assert dashboard._counts["relayed"] == 2

    def test_unknown_relay_id_only_counts(self, dashboard) -> None:
        _log_relay(dashboard, "known", "a.pdf")

        dashboard.log_response("evicted", 200)

        assert dashboard._relays[0].status is None
        assert dashboard._counts["relayed"] == 1

    def test_errors_are_kept_short(self, dashboard) -> None:
        for i in range(5):
            dashboard.log_error("ForwardError", 500, f"Error: failure {i}")

        assert len(dashboard._errors) == 3
        assert dashboard._errors[0] == "ForwardError 500: Error: failure 4"
        assert dashboard._counts["failed"] == 5
