# ToolGate test configuration

import logging

import pytest

from toolgate.core.exceptions import ExecutionFailure
from toolgate.shield.executor import ExecResult, ShellExecutor

SECRET = "sk-12345"


class FakeExecutor(ShellExecutor):
    """Records commands and returns a canned result (or raises)."""

    def __init__(self, result: ExecResult | None = None, error: Exception | None = None):
        self.result = result or ExecResult(stdout="", stderr="", code=0)
        self.error = error
        self.calls: list[tuple[str, str | None]] = []

    async def run(self, command, cwd=None):
        self.calls.append((command, cwd))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def secret_env(monkeypatch):
    """Configure API_KEY=sk-12345 as the only redacted variable."""
    monkeypatch.setenv("API_KEY", SECRET)
    monkeypatch.setenv("PI_SENSITIVE_ENV_VARS", "API_KEY")
    return SECRET


@pytest.fixture
def no_secrets(monkeypatch):
    monkeypatch.delenv("PI_SENSITIVE_ENV_VARS", raising=False)


@pytest.fixture(autouse=True)
def _clean_toolgate_env(monkeypatch):
    for var in (
        "TOOLGATE_SECRETS_VAR",
        "TOOLGATE_GUARDED_TOOLS",
        "TOOLGATE_PATTERNS_FILE",
        "TOOLGATE_CONFIRM_SHELL",
        "TOOLGATE_SHELL",
        "TOOLGATE_SHELL_TIMEOUT",
        "TOOLGATE_LOG_FORMAT",
        "TOOLGATE_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def spawn_failure():
    return ExecutionFailure("echo hi", FileNotFoundError(2, "No such file or directory", "bash"))


@pytest.fixture(autouse=True)
def _reset_toolgate_logger():
    logger = logging.getLogger("toolgate")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)
