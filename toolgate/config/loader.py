"""Config loader for ToolGate.

Loads optional deployment-specific sensitive-path rules from YAML and builds
fully-configured :class:`PolicyGate` instances from settings.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from toolgate.approval.base import InteractiveSurface
from toolgate.config.settings import ToolGateSettings, get_settings
from toolgate.core.exceptions import ConfigError
from toolgate.shield.executor import ShellExecutor, SubprocessExecutor
from toolgate.shield.gate import PolicyGate
from toolgate.shield.matcher import DEFAULT_PATTERNS, PatternKind, SensitivePattern, SensitivePatternSet

logger = logging.getLogger(__name__)

_VALID_LOG_FORMATS = ("text", "json")


def load_extra_patterns(path: str | Path) -> list[SensitivePattern]:
    """Load additional sensitive-path rules from a YAML file.

    Expected layout::

        patterns:
          - kind: contains_segment
            value: /.kube/
            description: Kubernetes config
          - kind: exact_name
            value: credentials.json

    Raises:
        ConfigError: if the file is missing or malformed.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError("Patterns file not found", file_path=str(path))

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", file_path=str(path)) from e

    if raw is None:
        return []
    if not isinstance(raw, dict) or not isinstance(raw.get("patterns", []), list):
        raise ConfigError("Expected a mapping with a 'patterns' list", file_path=str(path))

    patterns: list[SensitivePattern] = []
    for index, entry in enumerate(raw.get("patterns", [])):
        if not isinstance(entry, dict):
            raise ConfigError(f"patterns[{index}] must be a mapping", file_path=str(path))
        kind_raw = str(entry.get("kind", "")).lower()
        try:
            kind = PatternKind(kind_raw)
        except ValueError:
            valid = ", ".join(k.value for k in PatternKind)
            raise ConfigError(
                f"patterns[{index}]: unknown kind {kind_raw!r}. Must be one of: {valid}",
                file_path=str(path),
            ) from None
        value = entry.get("value")
        if not isinstance(value, str) or not value:
            raise ConfigError(f"patterns[{index}]: 'value' must be a non-empty string", file_path=str(path))
        patterns.append(SensitivePattern(kind, value, str(entry.get("description", ""))))

    logger.debug("Loaded %d extra sensitive patterns from %s", len(patterns), path)
    return patterns


def build_patterns(settings: ToolGateSettings | None = None) -> SensitivePatternSet:
    """Built-in blocklist plus any rules from ``settings.patterns_file``."""
    settings = settings or get_settings()
    if not settings.patterns_file:
        return DEFAULT_PATTERNS
    return DEFAULT_PATTERNS.extend(load_extra_patterns(settings.patterns_file))


def validate_settings(settings: ToolGateSettings) -> None:
    """Raise :class:`ConfigError` listing every invalid setting."""
    errors: list[str] = []
    if settings.log_format.lower() not in _VALID_LOG_FORMATS:
        errors.append(f"TOOLGATE_LOG_FORMAT={settings.log_format} must be 'text' or 'json'")
    if settings.shell_timeout is not None and settings.shell_timeout <= 0:
        errors.append(f"TOOLGATE_SHELL_TIMEOUT={settings.shell_timeout} must be positive")
    if not settings.secrets_env_var.strip():
        errors.append("TOOLGATE_SECRETS_VAR must not be empty")
    if errors:
        raise ConfigError("Configuration errors:\n" + "\n".join(f"  - {e}" for e in errors))


def build_gate(
    settings: ToolGateSettings | None = None,
    surface: InteractiveSurface | None = None,
    executor: ShellExecutor | None = None,
) -> PolicyGate:
    """Create a :class:`PolicyGate` from settings."""
    settings = settings or get_settings()
    validate_settings(settings)
    return PolicyGate(
        patterns=build_patterns(settings),
        surface=surface,
        executor=executor or SubprocessExecutor(shell=settings.shell, timeout=settings.shell_timeout),
        secrets_env_var=settings.secrets_env_var,
        guarded_tools=settings.guarded_tools,
        confirm_shell=settings.confirm_shell,
    )
