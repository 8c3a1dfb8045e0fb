"""Shield module for ToolGate."""

from toolgate.shield.executor import ExecResult, ShellExecutor, SubprocessExecutor
from toolgate.shield.gate import PolicyGate
from toolgate.shield.matcher import DEFAULT_PATTERNS, PatternKind, SensitivePattern, SensitivePatternSet
from toolgate.shield.redactor import SecretRedactor
from toolgate.shield.verdict import DecisionBuilder

__all__ = [
    "DEFAULT_PATTERNS",
    "DecisionBuilder",
    "ExecResult",
    "PatternKind",
    "PolicyGate",
    "SecretRedactor",
    "SensitivePattern",
    "SensitivePatternSet",
    "ShellExecutor",
    "SubprocessExecutor",
]
