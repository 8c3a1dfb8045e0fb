"""Decision builder for ToolGate — constructs GateDecision objects and their messages."""

from __future__ import annotations

from toolgate.core.models import (
    GateDecision,
    ShellRunResult,
    ToolResultEvent,
    Verdict,
)

BLOCKED_BY_USER = "Blocked by user"

# Exit status reported when the gate's own shell could not be started.
SPAWN_FAILURE_EXIT_CODE = 127


class DecisionBuilder:
    """Builds GateDecision objects.

    Block reasons name the tool and the target so the agent can tell what
    was refused and why.
    """

    def pass_through(self) -> GateDecision:
        """Build a PASS decision (no opinion)."""
        return GateDecision(verdict=Verdict.PASS)

    def block(self, reason: str) -> GateDecision:
        """Build a BLOCK decision with a free-form reason."""
        return GateDecision(verdict=Verdict.BLOCK, reason=reason)

    def block_sensitive(self, tool_name: str, path: str) -> GateDecision:
        """Build a BLOCK decision for a file tool targeting a sensitive path."""
        return self.block(
            f'{tool_name} access to "{path}" is blocked because it appears to be a sensitive file containing secrets.'
        )

    def block_by_user(self) -> GateDecision:
        return self.block(BLOCKED_BY_USER)

    def replace_result(self, result: ToolResultEvent) -> GateDecision:
        """Build a REPLACE decision substituting a tool result."""
        return GateDecision(verdict=Verdict.REPLACE, replacement=result)

    def replace_shell(
        self,
        output: str,
        exit_code: int | None,
        cancelled: bool = False,
    ) -> GateDecision:
        """Build a REPLACE decision carrying a synthesized shell completion."""
        return GateDecision(
            verdict=Verdict.REPLACE,
            shell_result=ShellRunResult(
                output=output,
                exit_code=exit_code,
                cancelled=cancelled,
                truncated=False,
            ),
        )

    def spawn_failure(self, message: str) -> GateDecision:
        """Build the failed completion reported when the shell could not start."""
        return self.replace_shell(output=message, exit_code=SPAWN_FAILURE_EXIT_CODE)

    @staticmethod
    def notification_for_block(tool_name: str, path: str) -> str:
        return f"Blocked {tool_name} of sensitive file: {path}"

    @staticmethod
    def confirmation_message(command: str, cwd: str | None = None) -> str:
        """Format the prompt shown before an agent-invoked shell command.

        Format::

            Execute bash command?

            Working directory: <cwd>     (only when cwd is known)

            Command:
              <command>
        """
        message = "Execute bash command?"
        if cwd:
            message += f"\n\nWorking directory: {cwd}"
        message += f"\n\nCommand:\n  {command}"
        return message
