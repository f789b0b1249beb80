"""Shared logging utilities."""

import json
import shutil
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "proxy.log"


def write_incoming_log(
    method: str,
    path: str,
    headers: dict[str, str],
    body: Any,
    *,
    log_root: Path = LOG_ROOT,
) -> Path:
    """Write a single incoming request log entry."""
    payload = {
        "timestamp": _utc_now(),
        "method": method,
        "path": path,
        "headers": _redact_headers(headers),
        "body": _maybe_json(body),
    }
    return _write_json(log_root / "incoming", payload)


def write_forward_log(
    file_url: str,
    target_url: str,
    *,
    method: str,
    filename: str,
    size: int,
    headers: dict[str, str],
    fields: int,
    log_root: Path = LOG_ROOT,
) -> Path:
    """Write a single forwarded request log entry (file bytes are not logged)."""
    payload = {
        "timestamp": _utc_now(),
        "file_url": file_url,
        "target": target_url,
        "method": method,
        "filename": filename,
        "size": size,
        "fields": fields,
        "headers": _redact_headers(headers),
    }
    return _write_json(log_root / "forward", payload)


def write_cli_log(
    level: str,
    message: str,
    **extra: Any,
) -> None:
    """Append a line to the rolling CLI log file."""
    CLI_LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    line = f"[{timestamp}] {level}: {message}"
    if extra_str:
        line += f" {extra_str}"
    line += "\n"
    with CLI_LOG_FILE.open("a") as f:
        f.write(line)


def clear_logs(log_root: Path = LOG_ROOT) -> None:
    """Remove log folders from a previous run."""
    for folder in ("incoming", "forward"):
        shutil.rmtree(log_root / folder, ignore_errors=True)


def _write_json(folder: Path, payload: dict[str, Any]) -> Path:
    """Write payload to a unique JSON file in the given folder."""
    folder.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S.%fZ")
    file_path = folder / f"{timestamp}_{uuid4().hex}.json"
    file_path.write_text(json.dumps(payload, indent=2, default=str))
    return file_path


def _maybe_json(body: Any) -> Any:
    if not isinstance(body, str):
        return body
    try:
        return json.loads(body)
    except json.JSONDecodeError:
        return body


def _redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact sensitive headers."""
    redacted = {}
    for key, value in headers.items():
        if "key" in key.lower() or "authorization" in key.lower():
            redacted[key] = _mask(value)
        else:
            redacted[key] = value
    return redacted


def _mask(value: str) -> str:
    if len(value) <= 10:
        return "***"
    return value[:6] + "..." + value[-4:]


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()
