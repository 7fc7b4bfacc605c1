"""
Lifecycle exceptions.

Every lifecycle failure is terminal at process scope: the process logs it
and exits with status 1. Recovery is a process restart by the supervisor.
"""


class LifecycleError(Exception):
    """Base exception for server lifecycle errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class StartupError(LifecycleError):
    """Raised when the listener cannot bind or the application fails to load."""

    def __init__(self, message: str):
        super().__init__(message, code="STARTUP_ERROR")


class ShutdownError(LifecycleError):
    """Raised when closing the listener or draining connections fails."""

    def __init__(self, message: str, in_flight: int = 0):
        """
        Initialize ShutdownError.

        Args:
            message: Failure description
            in_flight: Requests still in flight when the failure occurred
        """
        super().__init__(message, code="SHUTDOWN_ERROR")
        self.in_flight = in_flight


class InvalidStateTransitionError(LifecycleError):
    """Raised when a listener is moved along a transition that does not exist."""

    def __init__(self, current: str, target: str):
        super().__init__(
            f"Invalid listener transition: {current} -> {target}",
            code="INVALID_STATE_TRANSITION",
        )
        self.current = current
        self.target = target
