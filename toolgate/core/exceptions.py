"""ToolGate custom exceptions."""


class ToolGateError(Exception):
    """Base exception for ToolGate runtime errors."""


class PolicyBlock(ToolGateError):
    """Raised when a caller prefers an exception over a BLOCK decision."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class ExecutionFailure(ToolGateError):
    """Raised when the gate's own shell execution cannot be started."""

    def __init__(self, command: str, cause: BaseException | None = None):
        self.command = command
        self.cause = cause
        message = f"Failed to execute command: {cause}" if cause else "Failed to execute command"
        super().__init__(message)


class ConfirmationError(ToolGateError):
    """Raised when the interactive surface fails while asking for confirmation."""


class ConfigError(ToolGateError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, file_path: str | None = None):
        self.file_path = file_path
        if file_path:
            message = f"{file_path}: {message}"
        super().__init__(message)
