# core/exceptions.py

from typing import Any

from fastapi import HTTPException, status


class AuthEngineException(Exception):
    def __init__(
        self, message: str, error_code: str | None = None, details: dict[str, Any] | None = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class AuthenticationError(AuthEngineException):
    pass


class APIError(AuthEngineException):
    """
    Error reported by the provider's API in its ``{"errors": [...]}`` body.

    ``code`` is the provider's own error code (e.g. "ERR401"), not ours.
    """

    status = 500

    def __init__(self, message: str | None, code: Any = None):
        self.code = code
        super().__init__(
            message or "",
            error_code="PROVIDER_API_ERROR",
            details={"provider_code": code},
        )


class InternalOAuthError(AuthEngineException):
    """Wraps a failure raised by the OAuth 1.0a client or its transport."""

    def __init__(self, message: str, oauth_error: BaseException | None = None):
        self.oauth_error = oauth_error
        super().__init__(message, error_code="INTERNAL_OAUTH_ERROR")

    def __str__(self) -> str:
        if self.oauth_error is not None:
            return f"{self.message} ({self.oauth_error})"
        return self.message


class ProfileParseError(AuthEngineException):
    def __init__(self, message: str = "Failed to parse user profile"):
        super().__init__(message, error_code="PROFILE_PARSE_ERROR")


class OAuthTransportError(Exception):
    """
    Raised by the OAuth client when a signed request fails.

    ``data`` holds the raw response body when the provider answered at all,
    and is None for connection-level failures.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        data: str | bytes | None = None,
    ):
        self.status_code = status_code
        self.data = data
        super().__init__(message)


# HTTP Exception converters
def convert_to_http_exception(exc: AuthEngineException) -> HTTPException:
    status_map = {
        "PROVIDER_API_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_OAUTH_ERROR": status.HTTP_502_BAD_GATEWAY,
        "PROFILE_PARSE_ERROR": status.HTTP_502_BAD_GATEWAY,
    }

    if isinstance(exc, AuthenticationError):
        status_code = status.HTTP_401_UNAUTHORIZED
    else:
        status_code = status_map.get(exc.error_code or "", status.HTTP_500_INTERNAL_SERVER_ERROR)

    return HTTPException(
        status_code=status_code,
        detail={"message": exc.message, "error_code": exc.error_code, "details": exc.details},
    )
