"""Host runtime adapter.

Translates the host's camelCase event dictionaries into ToolGate models and
gate decisions back into the outbound shapes the host enforces:

- ``None``: pass-through
- ``{"block": True, "reason": ...}``
- ``{"content": [...], "details": ..., "isError": ...}``: replacement result
- ``{"result": {"output", "exitCode", "cancelled", "truncated"}}``: operator shell
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from toolgate.approval.base import InteractiveSurface
from toolgate.core.exceptions import ConfirmationError
from toolgate.core.models import (
    ContentPart,
    EventKind,
    GateDecision,
    InterceptedCall,
    NotifyLevel,
    ToolResultEvent,
    UserBashEvent,
    Verdict,
)
from toolgate.shield.gate import PolicyGate

logger = logging.getLogger("toolgate.host")

BLOCKED_FILES_COMMAND = "blocked-files"

HostHandler = Callable[[dict], Awaitable[dict | None]]


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def parse_tool_call(event: dict) -> InterceptedCall:
    tool_input = event.get("input") or {}
    return InterceptedCall(
        tool_name=str(event.get("toolName", "")),
        path=_optional_str(tool_input.get("path")),
        command=_optional_str(tool_input.get("command")),
        cwd=_optional_str(tool_input.get("cwd")),
    )


def parse_tool_result(event: dict) -> ToolResultEvent:
    return ToolResultEvent(
        content=[ContentPart.model_validate(item) for item in event.get("content") or []],
        details=event.get("details"),
        is_error=bool(event.get("isError", False)),
    )


def parse_user_bash(event: dict) -> UserBashEvent:
    return UserBashEvent(command=str(event.get("command", "")), cwd=_optional_str(event.get("cwd")))


def to_host(decision: GateDecision) -> dict | None:
    """Render *decision* in the host's outbound shape."""
    if decision.verdict == Verdict.PASS:
        return None
    if decision.verdict == Verdict.BLOCK:
        return {"block": True, "reason": decision.reason}
    if decision.shell_result is not None:
        shell = decision.shell_result
        return {
            "result": {
                "output": shell.output,
                "exitCode": shell.exit_code,
                "cancelled": shell.cancelled,
                "truncated": shell.truncated,
            }
        }
    if decision.replacement is not None:
        replacement = decision.replacement
        return {
            "content": [part.model_dump(exclude_unset=True) for part in replacement.content],
            "details": replacement.details,
            "isError": replacement.is_error,
        }
    raise ValueError("Replace decision carries neither a replacement result nor a shell result")


class HostAdapter:
    """Registers a :class:`PolicyGate` against the host's event kinds."""

    def __init__(self, gate: PolicyGate, surface: InteractiveSurface | None = None) -> None:
        self._gate = gate
        self._surface = surface or gate.surface
        self.handlers: dict[str, HostHandler] = {
            EventKind.TOOL_CALL.value: self.on_tool_call,
            EventKind.TOOL_RESULT.value: self.on_tool_result,
            EventKind.USER_BASH.value: self.on_user_bash,
        }
        self.commands: dict[str, Callable[[], str]] = {
            BLOCKED_FILES_COMMAND: self.blocked_files_command,
        }

    async def handle(self, kind: str, event: dict) -> dict | None:
        """Dispatch a raw host event by kind."""
        try:
            handler = self.handlers[kind]
        except KeyError:
            raise ValueError(f"Unsupported event kind: {kind!r}") from None
        return await handler(event)

    async def on_tool_call(self, event: dict) -> dict | None:
        call = parse_tool_call(event)
        try:
            decision = await self._gate.on_tool_call(call)
        except ConfirmationError as e:
            # Fail closed: a broken prompt is never an implicit allow.
            logger.warning("Blocking %s after confirmation failure", call.tool_name)
            return {"block": True, "reason": f"Confirmation failed: {e}"}
        return to_host(decision)

    async def on_tool_result(self, event: dict) -> dict | None:
        return to_host(await self._gate.on_tool_result(parse_tool_result(event)))

    async def on_user_bash(self, event: dict) -> dict | None:
        return to_host(await self._gate.on_user_bash(parse_user_bash(event)))

    def blocked_files_command(self) -> str:
        """List blocked patterns and secret variable names; notify when interactive."""
        text = self._gate.listing().format()
        if self._surface is not None:
            self._surface.notify(text, NotifyLevel.INFO)
        return text
