import enum
from http import HTTPStatus
from typing import Any


class ErrorType(enum.Enum):
    ENTITY_NOT_FOUND = "entity_not_found"
    INTERNAL_ERROR = "internal_error"
    INVALID_DATA = "invalid_data"
    NETWORK_ERROR = "network_error"
    NO_FIELDS = "no_fields"
    PERSISTENCE_ERROR = "persistence_error"
    REQUEST_TIMEOUT = "request_timeout"
    UNAUTHORIZED_REQUEST = "unauthorized_request"
    UNEXPECTED_RESPONSE = "unexpected_response"
    UNHANDLED_EXCEPTION = "unhandled_exception"
    UNSPECIFIED = "unspecified"


class BaseError(Exception):
    extra: dict[str, Any]

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.UNSPECIFIED,
        status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.status_code = status_code
        self.extra = {}

        action = kwargs.get("action")
        if action:
            self.extra["action"] = action
        entity_id = kwargs.get("entity_id")
        if entity_id:
            self.extra["entity_id"] = str(entity_id)

    def __str__(self) -> str:
        return f"error: {self.error_type.value}; description: {self.message}"


class AuthError(BaseError):
    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.UNAUTHORIZED_REQUEST,
        status_code: HTTPStatus = HTTPStatus.UNAUTHORIZED,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_type, status_code, **kwargs)


class EntityNotFoundError(BaseError):
    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.ENTITY_NOT_FOUND,
        status_code: HTTPStatus = HTTPStatus.NOT_FOUND,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_type, status_code, **kwargs)


class InvalidDataError(BaseError):
    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.INVALID_DATA,
        status_code: HTTPStatus = HTTPStatus.BAD_REQUEST,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_type, status_code, **kwargs)


class NoFieldsError(InvalidDataError):
    def __init__(
        self,
        message: str = "No fields to update",
        error_type: ErrorType = ErrorType.NO_FIELDS,
        status_code: HTTPStatus = HTTPStatus.BAD_REQUEST,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_type, status_code, **kwargs)


class PersistenceError(BaseError):
    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.PERSISTENCE_ERROR,
        status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_type, status_code, **kwargs)


# Errors raised on the consuming side of the API by the directory client.


class DirectoryClientError(BaseError):
    """Base class for every failure the directory client reports to its callers."""


class ApiResponseError(DirectoryClientError):
    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.UNEXPECTED_RESPONSE,
        status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_type, status_code, **kwargs)


class RequestTimeoutError(DirectoryClientError):
    def __init__(
        self,
        message: str = "Operation timed out. Please check your internet connection or try again.",
        error_type: ErrorType = ErrorType.REQUEST_TIMEOUT,
        status_code: HTTPStatus = HTTPStatus.GATEWAY_TIMEOUT,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_type, status_code, **kwargs)


class NetworkError(DirectoryClientError):
    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.NETWORK_ERROR,
        status_code: HTTPStatus = HTTPStatus.BAD_GATEWAY,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_type, status_code, **kwargs)
