"""Centralized configuration from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from toolgate.core.models import ToolKind
from toolgate.shield.redactor import DEFAULT_SECRETS_ENV_VAR


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


def _env_float(name: str) -> float | None:
    raw = os.environ.get(name)
    return float(raw) if raw else None


def _env_tools(name: str, default: str) -> list[ToolKind]:
    raw = os.environ.get(name, default)
    return [ToolKind.from_name(t.strip().lower()) for t in raw.split(",") if t.strip()]


@dataclass
class ToolGateSettings:
    """All ToolGate configuration accessible from environment variables."""

    # Redaction
    secrets_env_var: str = field(
        default_factory=lambda: os.environ.get("TOOLGATE_SECRETS_VAR", DEFAULT_SECRETS_ENV_VAR)
    )
    # File-tool blocking
    guarded_tools: list[ToolKind] = field(
        default_factory=lambda: _env_tools("TOOLGATE_GUARDED_TOOLS", "read,write,edit")
    )
    patterns_file: str | None = field(default_factory=lambda: os.environ.get("TOOLGATE_PATTERNS_FILE") or None)
    # Shell
    confirm_shell: bool = field(default_factory=lambda: _env_bool("TOOLGATE_CONFIRM_SHELL", "true"))
    shell: str = field(default_factory=lambda: os.environ.get("TOOLGATE_SHELL", "bash"))
    shell_timeout: float | None = field(default_factory=lambda: _env_float("TOOLGATE_SHELL_TIMEOUT"))
    # Logging
    log_level: str = field(default_factory=lambda: os.environ.get("TOOLGATE_LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: os.environ.get("TOOLGATE_LOG_FORMAT", "text"))


def get_settings() -> ToolGateSettings:
    """Create settings from current environment."""
    return ToolGateSettings()
