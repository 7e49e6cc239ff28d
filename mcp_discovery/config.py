# mcp_discovery/config.py
from __future__ import annotations
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

APP_NAME = "mcp-discovery"
APP_VERSION = "0.2.0"

LOG_LEVELS = ("error", "warn", "info", "debug", "trace")


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _env_log_level(key: str, default: str) -> str:
    raw = (os.getenv(key) or "").strip().lower()
    return raw if raw in LOG_LEVELS else default


@dataclass
class Settings:
    # Logging
    log_level: str = "info"

    # MCP server launch
    timeout: float = 60.0
    launch_retries: int = 1

    def __post_init__(self):
        self.log_level = _env_log_level("MCP_DISCOVERY_LOG_LEVEL", self.log_level)
        self.timeout = _env_float("MCP_DISCOVERY_TIMEOUT", self.timeout)
        self.launch_retries = max(1, _env_int("MCP_DISCOVERY_LAUNCH_RETRIES", self.launch_retries))

settings = Settings()
