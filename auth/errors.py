"""
Error taxonomy for the service.

Every failure a handler can produce is an ``AppError`` carrying an
``ErrorKind``.  ``STATUS_BY_KIND`` is the single place where kinds are
mapped to HTTP status codes; ``api.errors`` renders them as JSON bodies.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class ErrorKind(str, Enum):
    VALIDATION = "ValidationError"
    DUPLICATE_USER = "DuplicateUser"
    INVALID_CREDENTIALS = "InvalidCredentials"
    NO_TOKEN = "NoToken"
    TOKEN_MALFORMED = "TokenMalformed"
    SIGNATURE_INVALID = "SignatureInvalid"
    TOKEN_EXPIRED = "TokenExpired"
    UNAUTHORIZED = "Unauthorized"
    USER_NOT_FOUND = "UserNotFound"
    RECORDS_NOT_FOUND = "RecordsNotFound"
    CONFIGURATION_MISSING = "ConfigurationMissing"
    STORE_FAILURE = "StoreFailure"


STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.DUPLICATE_USER: 400,
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.NO_TOKEN: 401,
    ErrorKind.TOKEN_MALFORMED: 401,
    ErrorKind.SIGNATURE_INVALID: 401,
    ErrorKind.TOKEN_EXPIRED: 401,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.USER_NOT_FOUND: 404,
    ErrorKind.RECORDS_NOT_FOUND: 404,
    ErrorKind.CONFIGURATION_MISSING: 500,
    ErrorKind.STORE_FAILURE: 500,
}


class AppError(Exception):
    """Base class; ``message`` is what the client sees."""

    kind: ErrorKind = ErrorKind.STORE_FAILURE
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ValidationError(AppError):
    kind = ErrorKind.VALIDATION
    default_message = "Invalid request"


class DuplicateUserError(AppError):
    kind = ErrorKind.DUPLICATE_USER
    default_message = "User already exists"


class InvalidCredentialsError(AppError):
    # Same message for unknown email and wrong password.
    kind = ErrorKind.INVALID_CREDENTIALS
    default_message = "Invalid credentials"


class NoTokenError(AppError):
    kind = ErrorKind.NO_TOKEN
    default_message = "No token provided"


class TokenError(AppError):
    """Token verification failures.  Never shown to clients as-is."""

    default_message = "Invalid token"


class TokenMalformedError(TokenError):
    kind = ErrorKind.TOKEN_MALFORMED


class SignatureInvalidError(TokenError):
    kind = ErrorKind.SIGNATURE_INVALID


class TokenExpiredError(TokenError):
    kind = ErrorKind.TOKEN_EXPIRED


class UnauthorizedError(AppError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Invalid or expired token"


class UserNotFoundError(AppError):
    kind = ErrorKind.USER_NOT_FOUND
    default_message = "User not found"


class RecordsNotFoundError(AppError):
    kind = ErrorKind.RECORDS_NOT_FOUND
    default_message = "No records found"


class ConfigurationMissingError(AppError):
    kind = ErrorKind.CONFIGURATION_MISSING
    default_message = "Server is not configured for authentication"


class StoreFailureError(AppError):
    kind = ErrorKind.STORE_FAILURE
    default_message = "Storage operation failed"
