"""PolicyGate — async orchestrator for ToolGate.

Every handler is a pure function of its event, the gate's immutable
configuration and the secret value set materialized for that one
invocation. Concurrent invocations share no mutable state.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from typing import Any

from toolgate.approval.base import InteractiveSurface
from toolgate.core.exceptions import ConfirmationError, ExecutionFailure
from toolgate.core.models import (
    ContentPart,
    EventKind,
    GateDecision,
    GateListing,
    InterceptedCall,
    NotifyLevel,
    ToolKind,
    ToolResultEvent,
    UserBashEvent,
)
from toolgate.shield.executor import ShellExecutor, SubprocessExecutor
from toolgate.shield.matcher import DEFAULT_PATTERNS, SensitivePatternSet
from toolgate.shield.redactor import (
    DEFAULT_SECRETS_ENV_VAR,
    SecretRedactor,
    load_secret_values,
    secret_var_names,
)
from toolgate.shield.verdict import DecisionBuilder

logger = logging.getLogger("toolgate")

ALLOW_CHOICE = "Allow"
BLOCK_CHOICE = "Block"

DEFAULT_GUARDED_TOOLS = frozenset({ToolKind.READ, ToolKind.WRITE, ToolKind.EDIT})

SecretSource = Callable[[], Sequence[str]]


class PolicyGate:
    """Decides allow/block/replace for tool invocations and their results."""

    def __init__(
        self,
        patterns: SensitivePatternSet | None = None,
        surface: InteractiveSurface | None = None,
        executor: ShellExecutor | None = None,
        secret_source: SecretSource | None = None,
        secrets_env_var: str = DEFAULT_SECRETS_ENV_VAR,
        guarded_tools: Iterable[ToolKind] = DEFAULT_GUARDED_TOOLS,
        confirm_shell: bool = True,
    ):
        """Initialize PolicyGate.

        Args:
            patterns: Sensitive-path rules. Defaults to the built-in blocklist.
            surface: Interactive surface, or None for headless operation.
            executor: Runs operator-typed commands. Defaults to bash via asyncio.
            secret_source: Returns the current secret values. Called once per
                invocation. Defaults to reading ``secrets_env_var`` from the
                process environment.
            secrets_env_var: Name of the variable listing secret variable names.
            guarded_tools: File tools whose path is checked against *patterns*.
            confirm_shell: Ask the operator before agent-invoked shell commands.
        """
        self._patterns = DEFAULT_PATTERNS if patterns is None else patterns
        self._surface = surface
        self._executor = executor or SubprocessExecutor()
        self._secrets_env_var = secrets_env_var
        self._secret_source = secret_source or (lambda: load_secret_values(names_var=secrets_env_var))
        # Only file tools carry a path to check.
        self._guarded_tools = frozenset(guarded_tools) & DEFAULT_GUARDED_TOOLS
        self._confirm_shell = confirm_shell
        self._builder = DecisionBuilder()
        self._handlers: dict[EventKind, Callable[[Any], Awaitable[GateDecision]]] = {
            EventKind.TOOL_CALL: self.on_tool_call,
            EventKind.TOOL_RESULT: self.on_tool_result,
            EventKind.USER_BASH: self.on_user_bash,
        }

    @property
    def surface(self) -> InteractiveSurface | None:
        return self._surface

    @property
    def patterns(self) -> SensitivePatternSet:
        return self._patterns

    # ── Dispatch ─────────────────────────────────────────────────────

    async def dispatch(self, kind: EventKind, event: Any) -> GateDecision:
        """Route *event* to the handler registered for *kind*."""
        handler = self._handlers[EventKind(kind)]
        return await handler(event)

    def _redactor(self) -> SecretRedactor:
        """Materialize the secret value set for one invocation."""
        return SecretRedactor(self._secret_source())

    # ── tool_call ────────────────────────────────────────────────────

    async def on_tool_call(self, call: InterceptedCall) -> GateDecision:
        """Pre-execution check of an agent tool call."""
        kind = call.kind
        if kind in self._guarded_tools:
            return self._check_file_access(call)
        if kind == ToolKind.BASH:
            return await self._confirm_bash(call)
        return self._builder.pass_through()

    def _check_file_access(self, call: InterceptedCall) -> GateDecision:
        path = call.path
        if not path:
            logger.debug("%s call without a path, passing through", call.tool_name)
            return self._builder.pass_through()

        matched = self._patterns.first_match(path)
        if matched is None:
            return self._builder.pass_through()

        logger.info("Blocked %s of sensitive file %s (rule: %s)", call.tool_name, path, matched)
        if self._surface is not None:
            self._surface.notify(
                self._builder.notification_for_block(call.tool_name, path),
                NotifyLevel.WARNING,
            )
        return self._builder.block_sensitive(call.tool_name, path)

    async def _confirm_bash(self, call: InterceptedCall) -> GateDecision:
        # Headless runs must never hang on a prompt nobody can answer.
        if not self._confirm_shell or self._surface is None:
            return self._builder.pass_through()

        message = self._builder.confirmation_message(call.command or "", call.cwd)
        try:
            choice = await self._surface.select(message, [ALLOW_CHOICE, BLOCK_CHOICE])
        except Exception as e:
            logger.warning("Confirmation prompt failed: %s", e)
            raise ConfirmationError(f"Confirmation prompt failed: {e}") from e

        if choice != ALLOW_CHOICE:
            logger.info("Operator blocked bash command")
            return self._builder.block_by_user()
        return self._builder.pass_through()

    # ── tool_result ──────────────────────────────────────────────────

    async def on_tool_result(self, result: ToolResultEvent) -> GateDecision:
        """Post-execution redaction of a tool result."""
        redactor = self._redactor()
        if not redactor.active:
            return self._builder.pass_through()

        if not any(redactor.contains_secret(text) for text in result.text_parts()):
            return self._builder.pass_through()

        masked = sum(redactor.count(text) for text in result.text_parts())
        logger.info("Redacted %d secret occurrence(s) from tool result", masked)
        content = [_redact_part(part, redactor) for part in result.content]
        return self._builder.replace_result(
            ToolResultEvent(content=content, details=result.details, is_error=result.is_error)
        )

    # ── user_bash ────────────────────────────────────────────────────

    async def on_user_bash(self, event: UserBashEvent) -> GateDecision:
        """Run an operator-typed command and redact its output.

        Without configured secrets the host's own execution path is used.
        """
        redactor = self._redactor()
        if not redactor.active:
            return self._builder.pass_through()

        try:
            result = await self._executor.run(event.command, cwd=event.cwd)
        except ExecutionFailure as e:
            return self._builder.spawn_failure(redactor.redact(f"{e}\n"))

        output = redactor.redact(result.stdout) + redactor.redact(result.stderr)
        logger.debug("Operator command exited with %s (killed=%s)", result.code, result.killed)
        return self._builder.replace_shell(output=output, exit_code=result.code, cancelled=result.killed)

    # ── Introspection ────────────────────────────────────────────────

    def listing(self) -> GateListing:
        """Active blocklist patterns and configured secret variable names."""
        return GateListing(
            patterns=self._patterns.describe(),
            secret_env_var=self._secrets_env_var,
            secret_var_names=secret_var_names(names_var=self._secrets_env_var),
        )


def _redact_part(part: ContentPart, redactor: SecretRedactor) -> ContentPart:
    if not part.is_text or part.text is None:
        return part
    return part.model_copy(update={"text": redactor.redact(part.text)})
