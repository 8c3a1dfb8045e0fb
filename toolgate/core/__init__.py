"""Core models and exceptions for ToolGate."""

from toolgate.core.exceptions import (
    ConfigError,
    ConfirmationError,
    ExecutionFailure,
    PolicyBlock,
    ToolGateError,
)
from toolgate.core.models import (
    ContentPart,
    EventKind,
    GateDecision,
    GateListing,
    InterceptedCall,
    NotifyLevel,
    ShellRunResult,
    ToolKind,
    ToolResultEvent,
    UserBashEvent,
    Verdict,
)

__all__ = [
    "ConfigError",
    "ConfirmationError",
    "ContentPart",
    "EventKind",
    "ExecutionFailure",
    "GateDecision",
    "GateListing",
    "InterceptedCall",
    "NotifyLevel",
    "PolicyBlock",
    "ShellRunResult",
    "ToolGateError",
    "ToolKind",
    "ToolResultEvent",
    "UserBashEvent",
    "Verdict",
]
