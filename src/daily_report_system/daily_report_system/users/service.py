from __future__ import annotations

from typing import Optional

from ..core.result import unwrap
from .model import AuthenticateUser, AuthToken, CreateUser, TokenClaims, UpdateUser, User
from .repository import UserRepository
from .workflow import UserWorkflow


class AuthService:
    """Use case: authenticate user (login) and resolve bearer tokens."""

    def __init__(self, workflow: UserWorkflow):
        self.workflow = workflow

    def authenticate(self, email: str, password: str) -> AuthToken:
        return unwrap(self.workflow.authenticate(AuthenticateUser(email=email, password=password)))

    def verify_token(self, token: str) -> TokenClaims:
        return unwrap(self.workflow.verify_token(token))


class UserService:
    """Use case: register and manage users."""

    def __init__(self, workflow: UserWorkflow, users: UserRepository):
        self.workflow = workflow
        self._users = users

    def create_account(self, command: CreateUser) -> User:
        return unwrap(self.workflow.create(command))

    def update_account(self, command: UpdateUser) -> User:
        return unwrap(self.workflow.update(command))

    def find_by_id(self, user_id: str) -> Optional[User]:
        user = self._users.find_by_id(user_id)
        return user.without_password() if user else None

    def find_by_email(self, email: str) -> Optional[User]:
        user = self._users.find_by_email(email)
        return user.without_password() if user else None
