from __future__ import annotations

from typing import Optional, Protocol

from .model import Approver, User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the workflow layer depends on this interface, not on a concrete DB.
    ``create`` raises ``DuplicateKeyError`` when the email is already stored.
    """

    def find_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def find_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create(self, user: User) -> User:
        raise NotImplementedError

    def update(self, user: User) -> User:
        raise NotImplementedError


class ApproverLookup(Protocol):
    def find_approver(self, user_id: str) -> Optional[Approver]:
        raise NotImplementedError


class UserStore(UserRepository, ApproverLookup, Protocol):
    """Full user store: both the repository and the lightweight approver lookup."""
