"""Shell execution for operator-typed commands.

The gate runs these commands itself so it can redact the output before the
host records it. Each command runs as the leader of its own process group;
on timeout or cancellation the whole group is killed so background jobs
cannot outlive the call or hold its pipes open. The leader is always
reaped, whether it completes, times out, fails or the awaiting task is
cancelled.
"""

from __future__ import annotations

import asyncio
import logging
import os
import signal
from abc import ABC, abstractmethod
from dataclasses import dataclass

from toolgate.core.exceptions import ExecutionFailure

logger = logging.getLogger("toolgate.executor")


@dataclass(frozen=True)
class ExecResult:
    """Separated output of a finished command."""

    stdout: str
    stderr: str
    code: int | None
    killed: bool = False


class ShellExecutor(ABC):
    """Capability to run a shell command in a working directory."""

    @abstractmethod
    async def run(self, command: str, cwd: str | None = None) -> ExecResult:
        """Run *command* and return its output.

        Raises:
            ExecutionFailure: if the process could not be started.
        """


class SubprocessExecutor(ShellExecutor):
    """Runs ``<shell> -c <command>`` through asyncio subprocesses."""

    def __init__(self, shell: str = "bash", timeout: float | None = None) -> None:
        self._shell = shell
        self._timeout = timeout

    async def run(self, command: str, cwd: str | None = None) -> ExecResult:
        try:
            process = await asyncio.create_subprocess_exec(
                self._shell,
                "-c",
                command,
                cwd=cwd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=True,
            )
        except OSError as e:
            logger.warning("Could not start %s in %s: %s", self._shell, cwd or ".", e)
            raise ExecutionFailure(command, e) from e

        killed = False
        try:
            if self._timeout is not None:
                stdout_bytes, stderr_bytes = await asyncio.wait_for(process.communicate(), timeout=self._timeout)
            else:
                stdout_bytes, stderr_bytes = await process.communicate()
        except asyncio.TimeoutError:
            logger.warning("Command exceeded %.1fs timeout, killing pid %s", self._timeout, process.pid)
            await _kill_and_reap(process)
            return ExecResult(stdout="", stderr="", code=process.returncode, killed=True)
        except asyncio.CancelledError:
            await _kill_and_reap(process)
            raise

        code = process.returncode
        if code is not None and code < 0:
            killed = True

        return ExecResult(
            stdout=_decode(stdout_bytes),
            stderr=_decode(stderr_bytes),
            code=code,
            killed=killed,
        )


async def _kill_and_reap(process: asyncio.subprocess.Process) -> None:
    # The leader may already be gone while its background jobs are not.
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass
    await process.wait()


def _decode(data: bytes | None) -> str:
    return data.decode("utf-8", errors="replace") if data else ""
