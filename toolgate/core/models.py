"""Core data models for ToolGate."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from toolgate.core.exceptions import PolicyBlock


# --- Enums ---


class ToolKind(str, Enum):
    """Tool identifiers the gate knows about."""

    READ = "read"
    WRITE = "write"
    EDIT = "edit"
    BASH = "bash"
    OTHER = "other"

    @classmethod
    def from_name(cls, name: str) -> ToolKind:
        """Map a host tool name to a kind; unknown names become OTHER."""
        try:
            return cls(name)
        except ValueError:
            return cls.OTHER


class EventKind(str, Enum):
    """Inbound events dispatched by the host runtime."""

    TOOL_CALL = "tool_call"
    TOOL_RESULT = "tool_result"
    USER_BASH = "user_bash"


class Verdict(str, Enum):
    """Outcome of a gate decision."""

    PASS = "PASS"
    BLOCK = "BLOCK"
    REPLACE = "REPLACE"


class NotifyLevel(str, Enum):
    """Severity of a fire-and-forget notification."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


# --- Inbound events ---


class InterceptedCall(BaseModel):
    """A pending tool invocation, as seen by the gate."""

    model_config = ConfigDict(frozen=True)

    tool_name: str
    path: str | None = None
    command: str | None = None
    cwd: str | None = None

    @property
    def kind(self) -> ToolKind:
        return ToolKind.from_name(self.tool_name)


class ContentPart(BaseModel):
    """One part of a tool result. Unknown fields (image data etc.) are kept."""

    model_config = ConfigDict(frozen=True, extra="allow")

    type: str
    text: str | None = None

    @property
    def is_text(self) -> bool:
        return self.type == "text" and bool(self.text)


class ToolResultEvent(BaseModel):
    """Result of an executed tool, before it reaches the transcript."""

    model_config = ConfigDict(frozen=True)

    content: list[ContentPart] = Field(default_factory=list)
    details: Any = None
    is_error: bool = False

    def text_parts(self) -> list[str]:
        """Return the text of every textual part, in order."""
        return [part.text for part in self.content if part.is_text and part.text is not None]


class UserBashEvent(BaseModel):
    """A shell command typed directly by the operator."""

    model_config = ConfigDict(frozen=True)

    command: str
    cwd: str | None = None


# --- Outbound decisions ---


class ShellRunResult(BaseModel):
    """Synthesized completion record for an operator-typed command."""

    model_config = ConfigDict(frozen=True)

    output: str
    exit_code: int | None = None
    cancelled: bool = False
    truncated: bool = False


class GateDecision(BaseModel):
    """Result of one gate invocation.

    Exactly one shape is valid per verdict:

    - ``PASS``: no payload, the host proceeds unmodified.
    - ``BLOCK``: ``reason`` is set.
    - ``REPLACE``: exactly one of ``replacement`` / ``shell_result`` is set.
    """

    model_config = ConfigDict(frozen=True)

    verdict: Verdict
    reason: str = ""
    replacement: ToolResultEvent | None = None
    shell_result: ShellRunResult | None = None

    @model_validator(mode="after")
    def _check_shape(self) -> GateDecision:
        has_replacement = self.replacement is not None
        has_shell = self.shell_result is not None
        if self.verdict == Verdict.PASS and (self.reason or has_replacement or has_shell):
            raise ValueError("PASS decisions carry no payload")
        if self.verdict == Verdict.BLOCK and (not self.reason or has_replacement or has_shell):
            raise ValueError("BLOCK decisions carry only a reason")
        if self.verdict == Verdict.REPLACE and has_replacement == has_shell:
            raise ValueError("REPLACE decisions carry exactly one of replacement or shell_result")
        return self

    @property
    def passed(self) -> bool:
        return self.verdict == Verdict.PASS

    @property
    def blocked(self) -> bool:
        return self.verdict == Verdict.BLOCK

    def raise_for_block(self) -> GateDecision:
        """Raise :class:`PolicyBlock` if this decision blocks, else return self."""
        if self.blocked:
            raise PolicyBlock(self.reason)
        return self


class GateListing(BaseModel):
    """Active blocklist and configured secret variable names (never values)."""

    model_config = ConfigDict(frozen=True)

    patterns: list[str]
    secret_env_var: str
    secret_var_names: list[str] = Field(default_factory=list)

    def format(self) -> str:
        names = ",".join(self.secret_var_names) if self.secret_var_names else "(none configured)"
        return (
            "Blocked file patterns:\n"
            + "\n".join(self.patterns)
            + f"\n\nSensitive env vars ({self.secret_env_var}):\n{names}"
        )
