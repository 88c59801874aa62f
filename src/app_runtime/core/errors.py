"""Runtime exception hierarchy."""


class AppRuntimeError(Exception):
    """Base class for all runtime errors."""

    pass


class ToolExecutionError(AppRuntimeError):
    """A tool handler failed."""

    def __init__(self, tool_id: str, message: str) -> None:
        super().__init__(message)
        self.tool_id = tool_id


class ServiceCallError(AppRuntimeError):
    """The service gateway rejected or failed a remote tool call."""

    pass


class OrchestratorError(AppRuntimeError):
    """The app orchestrator returned an error."""

    pass


class ProtocolError(AppRuntimeError):
    """An inbound protocol frame could not be understood."""

    pass
