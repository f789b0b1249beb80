"""Configuration models and loading."""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

CONFIG_DIR = Path.home() / ".config" / "file-relay"
CONFIG_FILE = CONFIG_DIR / "config.json"


class ProxySettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8787


class AuthSettings(BaseModel):
    api_key: str = ""
    header_name: str = "pabbly_api_key"


class UpstreamSettings(BaseModel):
    fetch_timeout: float = 60.0
    forward_timeout: float = 120.0
    max_connections: int = 100
    max_keepalive_connections: int = 20


class LimitsSettings(BaseModel):
    max_body_size: int = 10 * 1024 * 1024  # 10MB
    keep_alive_timeout: int = 5


class Config(BaseModel):
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)
    limits: LimitsSettings = Field(default_factory=LimitsSettings)


def load_config(config_file: Path = CONFIG_FILE) -> Config:
    """Load configuration from JSON file, creating default if needed."""
    if not config_file.exists():
        config_file.parent.mkdir(parents=True, exist_ok=True)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default

    try:
        data = json.loads(config_file.read_text())
        return Config.model_validate(data)
    except (json.JSONDecodeError, ValidationError):
        # Backup corrupted config and recreate default
        backup = config_file.with_suffix(".json.bak")
        config_file.rename(backup)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default
