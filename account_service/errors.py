"""
Error kinds raised across the store, token, service and gate layers.

Every failure the service can report is an ``AccountError`` subclass carrying an
``ErrorKind``. ``STATUS_BY_KIND`` is the single place where kinds become HTTP
status codes.
"""
from enum import Enum
from typing import Dict, Optional

from fastapi import status


class ErrorKind(str, Enum):
    VALIDATION_FAILURE = "validation_failure"
    DUPLICATE_EMAIL = "duplicate_email"
    OPERATION_FAILED = "operation_failed"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    INTERNAL_FAILURE = "internal_failure"


STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION_FAILURE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DUPLICATE_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorKind.OPERATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INTERNAL_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class AccountError(Exception):
    """Base class for every reported failure."""

    kind: ErrorKind = ErrorKind.INTERNAL_FAILURE
    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        self.message = message or self.default_message
        # Underlying text (validation or store error); only sent for kinds that expose it
        self.detail = detail
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.detail and self.kind in (ErrorKind.VALIDATION_FAILURE, ErrorKind.OPERATION_FAILED):
            body["error"] = self.detail
        return body


class ValidationFailure(AccountError):
    kind = ErrorKind.VALIDATION_FAILURE
    default_message = "Validation failed"


class DuplicateEmail(AccountError):
    kind = ErrorKind.DUPLICATE_EMAIL
    default_message = "Email already in use"


class OperationFailed(AccountError):
    """A register or login request the store could not complete; carries the store's text."""

    kind = ErrorKind.OPERATION_FAILED
    default_message = "Request could not be completed"


class InvalidCredentials(AccountError):
    kind = ErrorKind.INVALID_CREDENTIALS
    default_message = "Invalid email or password"


class Unauthorized(AccountError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Not authorized, token failed"


class TokenExpired(Unauthorized):
    default_message = "Token expired, please log in again"


class TokenSignatureInvalid(Unauthorized):
    default_message = "Token signature is invalid"


class TokenMalformed(Unauthorized):
    default_message = "Token is malformed"


class Forbidden(AccountError):
    kind = ErrorKind.FORBIDDEN
    default_message = "Not authorized for this resource"


class NotFound(AccountError):
    kind = ErrorKind.NOT_FOUND
    default_message = "User not found"


class InternalFailure(AccountError):
    kind = ErrorKind.INTERNAL_FAILURE
    default_message = "Something went wrong"
