"""Interactive surfaces for confirmations and notifications."""

from toolgate.approval.base import InteractiveSurface
from toolgate.approval.cli_backend import CLISurface
from toolgate.approval.memory import InMemorySurface, Prompt

__all__ = [
    "CLISurface",
    "InMemorySurface",
    "InteractiveSurface",
    "Prompt",
]
