"""Tests for SubprocessExecutor and the end-to-end operator-shell path."""

import asyncio
import os
import shutil
import time

import pytest

from toolgate.core.exceptions import ExecutionFailure
from toolgate.core.models import UserBashEvent
from toolgate.shield.executor import SubprocessExecutor
from toolgate.shield.gate import PolicyGate

pytestmark = pytest.mark.skipif(shutil.which("bash") is None, reason="bash not installed")

BACKGROUND_JOB = "sleep 30 & echo $! > pid; wait"


async def _read_pid(path, deadline=5.0):
    end = time.monotonic() + deadline
    while time.monotonic() < end:
        text = path.read_text() if path.exists() else ""
        if text.endswith("\n"):
            return int(text)
        await asyncio.sleep(0.05)
    raise AssertionError(f"{path} was never written")


async def _is_alive(pid, grace=2.0):
    end = time.monotonic() + grace
    while time.monotonic() < end:
        if not _running(pid):
            return False
        await asyncio.sleep(0.05)
    return True


def _running(pid):
    # Zombies awaiting their new parent count as gone.
    try:
        with open(f"/proc/{pid}/stat") as f:
            return f.read().rsplit(")", 1)[1].split()[0] != "Z"
    except FileNotFoundError:
        pass
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    return True


class TestSubprocessExecutor:
    @pytest.mark.asyncio
    async def test_stdout_stderr_and_code(self):
        result = await SubprocessExecutor().run("echo out; echo err >&2; exit 4")
        assert result.stdout == "out\n"
        assert result.stderr == "err\n"
        assert result.code == 4
        assert result.killed is False

    @pytest.mark.asyncio
    async def test_cwd(self, tmp_path):
        result = await SubprocessExecutor().run("pwd", cwd=str(tmp_path))
        assert result.stdout.strip() == str(tmp_path.resolve())

    @pytest.mark.asyncio
    async def test_missing_shell_raises(self):
        with pytest.raises(ExecutionFailure):
            await SubprocessExecutor(shell="/nonexistent/shell").run("echo hi")

    @pytest.mark.asyncio
    async def test_missing_cwd_raises(self, tmp_path):
        with pytest.raises(ExecutionFailure):
            await SubprocessExecutor().run("echo hi", cwd=str(tmp_path / "missing"))

    @pytest.mark.asyncio
    async def test_signal_marks_killed(self):
        result = await SubprocessExecutor().run("kill -9 $$")
        assert result.killed is True
        assert result.code == -9

    @pytest.mark.asyncio
    async def test_timeout_kills(self):
        result = await SubprocessExecutor(timeout=0.2).run("sleep 5")
        assert result.killed is True
        assert result.code is not None

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        task = asyncio.create_task(SubprocessExecutor().run("sleep 5"))
        await asyncio.sleep(0.2)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    @pytest.mark.asyncio
    async def test_timeout_kills_background_jobs(self, tmp_path):
        started = time.monotonic()
        result = await SubprocessExecutor(timeout=0.5).run(BACKGROUND_JOB, cwd=str(tmp_path))
        assert time.monotonic() - started < 10
        assert result.killed is True
        pid = await _read_pid(tmp_path / "pid")
        assert not await _is_alive(pid)

    @pytest.mark.asyncio
    async def test_cancellation_kills_background_jobs(self, tmp_path):
        task = asyncio.create_task(SubprocessExecutor().run(BACKGROUND_JOB, cwd=str(tmp_path)))
        pid = await _read_pid(tmp_path / "pid")
        task.cancel()
        started = time.monotonic()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert time.monotonic() - started < 10
        assert not await _is_alive(pid)

    @pytest.mark.asyncio
    async def test_background_output_is_captured(self):
        result = await SubprocessExecutor(timeout=10).run("(sleep 0.1; echo late) & wait; echo done")
        assert result.stdout == "late\ndone\n"
        assert result.killed is False

    @pytest.mark.asyncio
    async def test_invalid_utf8_replaced(self):
        result = await SubprocessExecutor().run("printf '\\377ok'")
        assert result.stdout.endswith("ok")


class TestOperatorShellEndToEnd:
    @pytest.mark.asyncio
    async def test_echo_secret_is_masked(self, secret_env):
        gate = PolicyGate()
        decision = await gate.on_user_bash(UserBashEvent(command="echo $API_KEY"))
        shell = decision.shell_result
        assert shell.output == "*" * len(secret_env) + "\n"
        assert secret_env not in shell.output
        assert shell.exit_code == 0
        assert shell.cancelled is False

    @pytest.mark.asyncio
    async def test_exit_code_reflects_child(self, secret_env):
        decision = await PolicyGate().on_user_bash(UserBashEvent(command="echo $API_KEY >&2; exit 7"))
        assert decision.shell_result.exit_code == 7
        assert decision.shell_result.output == "*" * len(secret_env) + "\n"
