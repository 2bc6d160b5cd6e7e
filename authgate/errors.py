"""Error taxonomy and the mapping from errors to HTTP responses."""

from enum import StrEnum

from fastapi import status


class ErrorKind(StrEnum):
    """Categories of failure surfaced to API callers."""

    INVALID_INPUT = "invalid_input"
    UNAUTHORIZED = "unauthorized"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    DELIVERY = "delivery"
    INTERNAL = "internal"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.DELIVERY: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ServiceError(Exception):
    """Base class for expected failures raised by services."""

    kind: ErrorKind = ErrorKind.INTERNAL
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        self.message = message or self.message
        self.status_code = status_code
        super().__init__(self.message)


class InvalidInput(ServiceError):
    kind = ErrorKind.INVALID_INPUT
    message = "Invalid input"


class InvalidCode(InvalidInput):
    message = "Invalid OTP"


class InvalidCredentials(InvalidInput):
    message = "Invalid credentials"


class Unauthorized(ServiceError):
    kind = ErrorKind.UNAUTHORIZED
    message = "Unauthorized"


class TokenMismatch(Unauthorized):
    message = "Token mismatch"


class InvalidToken(Unauthorized):
    message = "Invalid token"


class ExpiredToken(InvalidToken):
    message = "Token expired"


class Conflict(ServiceError):
    kind = ErrorKind.CONFLICT
    message = "Resource already exists"


class NotFound(ServiceError):
    kind = ErrorKind.NOT_FOUND
    message = "Not found"


class DeliveryError(ServiceError):
    kind = ErrorKind.DELIVERY
    message = "Failed to send email"


class InternalError(ServiceError):
    kind = ErrorKind.INTERNAL


def error_response(exc: ServiceError) -> tuple[int, str]:
    """Map a service error to an HTTP status code and client-facing message.

    Delivery and internal failures never leak their message to the caller.
    """
    status_code = exc.status_code or STATUS_BY_KIND[exc.kind]
    if exc.kind in (ErrorKind.DELIVERY, ErrorKind.INTERNAL):
        return status_code, "Internal server error"
    return status_code, exc.message
