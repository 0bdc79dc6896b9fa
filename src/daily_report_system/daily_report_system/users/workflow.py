from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

import jwt

from ..auth.password_hasher import PasswordHasher
from ..auth.token_generator import TokenGenerator
from ..common.datetime_utils import now_utc
from ..core.enums import ErrorCode, Role
from ..core.exceptions import DomainError, DuplicateKeyError, already_exists, not_found, unauthorized, validation_error
from ..core.ids import UserId, generate_user_id
from ..core.result import Either, Left, left, right
from .model import AuthenticateUser, AuthToken, CreateUser, TokenClaims, UpdateUser, User
from .repository import UserRepository
from .validation import PasswordPolicy, validate_email, validate_password

logger = logging.getLogger(__name__)

# One message for every login failure so callers cannot probe which accounts exist.
INVALID_CREDENTIALS = "Invalid email or password"


def _email_taken() -> DomainError:
    return already_exists("This email address is already in use", code=ErrorCode.USER_ALREADY_EXISTS)


class UserWorkflow:
    """Use cases: register, update and authenticate users."""

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: Optional[TokenGenerator] = None,
        *,
        password_policy: PasswordPolicy = PasswordPolicy(),
        clock: Callable[[], datetime] = now_utc,
        id_factory: Callable[[], UserId] = generate_user_id,
    ):
        self._users = users
        self._hasher = hasher
        self._tokens = tokens
        self._policy = password_policy
        self._clock = clock
        self._id_factory = id_factory

    def create(self, command: CreateUser) -> Either[DomainError, User]:
        email = validate_email(command.email)
        if isinstance(email, Left):
            return email

        password = validate_password(command.password, self._policy)
        if isinstance(password, Left):
            return password

        if self._users.find_by_email(command.email):
            return left(_email_taken())

        now = self._clock()
        user = User(
            id=self._id_factory(),
            email=command.email,
            name=command.name,
            role=command.role,
            department_id=command.department_id,
            is_active=True,
            created_at=now,
            updated_at=now,
            password_hash=self._hasher.hash(command.password),
        )

        try:
            created = self._users.create(user)
        except DuplicateKeyError:
            return left(_email_taken())

        logger.info("user %s registered with role %s", created.id, created.role.value)
        return right(created.without_password())

    def update(self, command: UpdateUser) -> Either[DomainError, User]:
        user = self._users.find_by_id(command.id)
        if not user:
            return left(not_found("User not found"))

        if command.clear_department and command.department_id is not None:
            return left(validation_error("Cannot set and clear the department in one update"))

        department_id = user.department_id
        if command.clear_department:
            department_id = None
        elif command.department_id is not None:
            department_id = command.department_id

        updated = replace(
            user,
            name=command.name if command.name is not None else user.name,
            role=command.role if command.role is not None else user.role,
            department_id=department_id,
            is_active=command.is_active if command.is_active is not None else user.is_active,
            updated_at=self._clock(),
        )
        result = self._users.update(updated)
        return right(result.without_password())

    def authenticate(self, command: AuthenticateUser) -> Either[DomainError, AuthToken]:
        if self._tokens is None:
            raise RuntimeError("UserWorkflow was built without a token generator")

        user = self._users.find_by_email(command.email)
        if not user or not user.is_active or not user.password_hash:
            return left(unauthorized(INVALID_CREDENTIALS))

        if not self._hasher.verify(command.password, user.password_hash):
            logger.info("failed login for user %s", user.id)
            return left(unauthorized(INVALID_CREDENTIALS))

        return right(self._tokens.generate(user.id, user.role.value))

    def verify_token(self, token: str) -> Either[DomainError, TokenClaims]:
        if self._tokens is None:
            raise RuntimeError("UserWorkflow was built without a token generator")

        try:
            claims = self._tokens.decode(token)
            role = Role(claims.get("role"))
        except (jwt.InvalidTokenError, ValueError):
            return left(unauthorized("Invalid or expired token"))
        return right(TokenClaims(user_id=UserId(claims["sub"]), role=role))
