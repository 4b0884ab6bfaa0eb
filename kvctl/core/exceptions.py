"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Commands catch these at the command boundary and turn them into exit codes.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ArgumentError(ApplicationError):
    """Raised when arguments or flag combinations are invalid."""

    def __init__(self, message: str = "Invalid arguments") -> None:
        super().__init__(message, code="CLI_ARGUMENT_ERROR")


class AgentConnectionError(ApplicationError):
    """Raised when a client for the agent cannot be constructed."""

    def __init__(self, message: str = "Could not connect to agent") -> None:
        super().__init__(message, code="CLI_CONNECTION_ERROR")


class OperationError(ApplicationError):
    """Raised when the store rejects or fails a call."""

    def __init__(
        self,
        message: str = "Store operation failed",
        status_code: int | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, code="STORE_OPERATION_ERROR")


class SnapshotFileError(ApplicationError):
    """Raised when a snapshot file cannot be opened."""

    def __init__(self, message: str = "Snapshot file unavailable") -> None:
        super().__init__(message, code="CLI_RESOURCE_ERROR")
