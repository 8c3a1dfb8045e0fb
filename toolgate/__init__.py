"""ToolGate — Policy gate and secret redaction for AI agent tool calls."""

import sys

if sys.version_info < (3, 10):
    raise RuntimeError(
        f"ToolGate requires Python 3.10+, but you're running {sys.version}. "
        "Please upgrade Python or use a virtual environment with 3.10+."
    )

__version__ = "0.3.0"

from toolgate.core.models import (  # noqa: E402, F401
    GateDecision,
    InterceptedCall,
    ToolKind,
    ToolResultEvent,
    UserBashEvent,
    Verdict,
)
from toolgate.shield.gate import PolicyGate  # noqa: E402, F401
from toolgate.shield.matcher import is_sensitive  # noqa: E402, F401
from toolgate.shield.redactor import SecretRedactor, load_secret_values, redact  # noqa: E402, F401

__all__ = [
    "__version__",
    "GateDecision",
    "InterceptedCall",
    "PolicyGate",
    "SecretRedactor",
    "ToolKind",
    "ToolResultEvent",
    "UserBashEvent",
    "Verdict",
    "is_sensitive",
    "load_secret_values",
    "redact",
]
