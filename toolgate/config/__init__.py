"""Unified configuration for ToolGate."""

from toolgate.config.loader import build_gate, build_patterns, load_extra_patterns, validate_settings
from toolgate.config.settings import ToolGateSettings, get_settings

__all__ = [
    "ToolGateSettings",
    "build_gate",
    "build_patterns",
    "get_settings",
    "load_extra_patterns",
    "validate_settings",
]
