from utils.constants import GENERIC_ERROR_MESSAGE


class ApiError(Exception):
    """Unknown or server-side failure. ``message`` is safe to show to the user."""

    def __init__(self, message: str = GENERIC_ERROR_MESSAGE, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NetworkError(ApiError):
    """No response from the backend (connection refused, DNS, timeout)."""


class AuthenticationError(ApiError):
    """401 from the backend. The session has already been cleared when this is raised."""


class ValidationError(ApiError):
    """4xx with a message from the backend, shown to the user verbatim."""
