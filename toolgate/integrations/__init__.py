"""Host runtime integrations for ToolGate."""

from toolgate.integrations.host import BLOCKED_FILES_COMMAND, HostAdapter, to_host

__all__ = [
    "BLOCKED_FILES_COMMAND",
    "HostAdapter",
    "to_host",
]
