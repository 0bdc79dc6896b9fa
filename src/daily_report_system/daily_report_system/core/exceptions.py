from __future__ import annotations

from typing import Any, Optional

from .enums import ErrorCode, ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations.

    Workflows return instances inside ``Left`` instead of raising them; only the
    throw-style service facade raises.
    """

    kind: ErrorKind = ErrorKind.BUSINESS_RULE_VIOLATION

    def __init__(self, message: str, *, code: Optional[ErrorCode] = None, details: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details

    def to_dict(self) -> dict:
        return {
            "type": self.kind.value,
            "code": self.code.value if self.code else None,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        code = self.code.value if self.code else None
        return f"{type(self).__name__}(kind={self.kind.value!r}, code={code!r}, message={self.message!r})"


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    kind = ErrorKind.NOT_FOUND


class AlreadyExistsError(DomainError):
    """Raised when a natural key (email, user/date) is already taken."""

    kind = ErrorKind.ALREADY_EXISTS


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = ErrorKind.VALIDATION_ERROR


class AuthenticationError(DomainError):
    """Raised when login credentials or tokens are invalid."""

    kind = ErrorKind.UNAUTHORIZED


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = ErrorKind.FORBIDDEN


class BusinessRuleViolation(DomainError):
    """Raised when an operation is not allowed in the current state."""

    kind = ErrorKind.BUSINESS_RULE_VIOLATION


def not_found(message: str, *, code: Optional[ErrorCode] = None, details: Any = None) -> NotFoundError:
    return NotFoundError(message, code=code, details=details)


def already_exists(message: str, *, code: Optional[ErrorCode] = None, details: Any = None) -> AlreadyExistsError:
    return AlreadyExistsError(message, code=code, details=details)


def validation_error(message: str, *, code: Optional[ErrorCode] = None, details: Any = None) -> ValidationError:
    return ValidationError(message, code=code, details=details)


def unauthorized(
    message: str, *, code: Optional[ErrorCode] = ErrorCode.UNAUTHORIZED, details: Any = None
) -> AuthenticationError:
    return AuthenticationError(message, code=code, details=details)


def forbidden(
    message: str, *, code: Optional[ErrorCode] = ErrorCode.FORBIDDEN, details: Any = None
) -> AuthorizationError:
    return AuthorizationError(message, code=code, details=details)


def business_rule_violation(
    message: str, *, code: Optional[ErrorCode] = None, details: Any = None
) -> BusinessRuleViolation:
    return BusinessRuleViolation(message, code=code, details=details)


class DuplicateKeyError(Exception):
    """Raised by a store when a uniqueness constraint rejects a write."""

    def __init__(self, message: str, *, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


class InvalidIdentifierError(ValueError):
    """Raised when an identifier does not have the expected shape."""
