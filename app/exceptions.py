import enum
from http import HTTPStatus
from typing import Any


class ErrorType(enum.Enum):
    ENTITY_ALREADY_EXISTS = "entity_already_exists"
    ENTITY_NOT_FOUND = "entity_not_found"
    INVALID_DATA = "invalid_data"
    NOT_SUPPORTED = "not_supported"
    THIRD_PARTY_REQUEST = "third_party_request"
    UNHANDLED_EXCEPTION = "unhandled_exception"
    UNAUTHORIZED_REQUEST = "unauthorized_request"
    UNSPECIFIED = "unspecified"


class BaseError(Exception):
    """
    Application error rendered by the API error handler as ``{"error", "error_description"}``.

    Subclasses pick their error type and HTTP status through class attributes; ``kind`` and
    ``action`` keyword arguments end up in ``extra`` for structured logging.
    """

    default_error_type: ErrorType = ErrorType.UNSPECIFIED
    default_status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    extra: dict[str, Any]

    def __init__(
        self,
        message: str,
        error_type: ErrorType | None = None,
        status_code: HTTPStatus | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type or self.default_error_type
        self.status_code = status_code or self.default_status_code
        self.extra = {key: kwargs[key] for key in ("action", "kind") if kwargs.get(key)}

    def __str__(self) -> str:
        return f"error: {self.error_type.value}; description: {self.message}"


class AuthenticationError(BaseError):
    default_error_type = ErrorType.UNAUTHORIZED_REQUEST
    default_status_code = HTTPStatus.UNAUTHORIZED


class EntityAlreadyExistError(BaseError):
    default_error_type = ErrorType.ENTITY_ALREADY_EXISTS
    default_status_code = HTTPStatus.BAD_REQUEST


class NotFoundError(BaseError):
    default_error_type = ErrorType.ENTITY_NOT_FOUND
    default_status_code = HTTPStatus.NOT_FOUND


class InvalidDataError(BaseError):
    default_error_type = ErrorType.INVALID_DATA
    default_status_code = HTTPStatus.BAD_REQUEST


class UnsupportedProviderError(BaseError):
    default_error_type = ErrorType.NOT_SUPPORTED
    default_status_code = HTTPStatus.BAD_REQUEST


class UpstreamProviderError(BaseError):
    """Raised when a call to Facebook, Nylas or Google fails."""

    default_error_type = ErrorType.THIRD_PARTY_REQUEST
    default_status_code = HTTPStatus.BAD_GATEWAY

    failures: list[str]

    def __init__(
        self,
        message: str,
        error_type: ErrorType | None = None,
        status_code: HTTPStatus | None = None,
        failures: list[str] | None = None,
        upstream_status: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_type, status_code, **kwargs)
        self.failures = failures or []
        self.upstream_status = upstream_status
        if self.failures:
            self.extra["failures"] = self.failures
