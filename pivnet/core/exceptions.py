"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
The CLI maps every PivnetError to a red message on stderr and exit code 1.
"""


class PivnetError(Exception):
    """Base exception for all pivnet errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotLoggedInError(PivnetError):
    """Raised when a protected command runs without stored credentials."""

    def __init__(
        self,
        message: str = "Not logged in. Please run 'pivnet login --api-token=<token>' first.",
    ) -> None:
        super().__init__(message, code="AUTH_NOT_LOGGED_IN")


class AuthenticationError(PivnetError):
    """Raised when the API rejects the token."""

    def __init__(
        self,
        message: str = "Failed to authenticate - please provide a valid API token",
    ) -> None:
        super().__init__(message, code="AUTH_UNAUTHORIZED")


class AuthorizationError(PivnetError):
    """Raised when the token is valid but lacks permission."""

    def __init__(self, message: str = "Permission denied") -> None:
        super().__init__(message, code="AUTHZ_FORBIDDEN")


class NotFoundError(PivnetError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ExternalServiceError(PivnetError):
    """Raised when the API is unreachable or answers with an unexpected error."""

    def __init__(self, message: str = "External service error", status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message, code="SYS_EXTERNAL_SERVICE_ERROR")


class ConfigurationError(PivnetError):
    """Raised when the rc file cannot be read, parsed or written."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="CFG_INVALID")
