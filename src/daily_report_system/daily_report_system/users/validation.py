"""Pure validation rules for user registration."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import ErrorCode
from ..core.exceptions import DomainError, validation_error
from ..core.result import Either, left, right

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class PasswordPolicy:
    """Password strength rules. ``require_special`` is off unless configured."""

    min_length: int = MIN_PASSWORD_LENGTH
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_digit: bool = True
    require_special: bool = False


def is_valid_email(email: str) -> bool:
    return bool(email) and EMAIL_RE.fullmatch(email) is not None


def validate_email(email: str) -> Either[DomainError, str]:
    if not is_valid_email(email):
        return left(validation_error("Please enter a valid email address", code=ErrorCode.INVALID_EMAIL))
    return right(email)


def _weak(message: str) -> DomainError:
    return validation_error(message, code=ErrorCode.WEAK_PASSWORD)


def validate_password(password: str, policy: PasswordPolicy = PasswordPolicy()) -> Either[DomainError, str]:
    password = password or ""
    if len(password) < policy.min_length:
        return left(_weak(f"Password must be at least {policy.min_length} characters long"))
    if policy.require_uppercase and not re.search(r"[A-Z]", password):
        return left(_weak("Password must contain at least one uppercase letter"))
    if policy.require_lowercase and not re.search(r"[a-z]", password):
        return left(_weak("Password must contain at least one lowercase letter"))
    if policy.require_digit and not re.search(r"[0-9]", password):
        return left(_weak("Password must contain at least one digit"))
    if policy.require_special and not re.search(r"[^A-Za-z0-9]", password):
        return left(_weak("Password must contain at least one special character"))
    return right(password)
