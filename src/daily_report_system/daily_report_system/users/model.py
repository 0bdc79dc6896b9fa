from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import Role
from ..core.ids import DepartmentId, UserId


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object (no DB access code). ``password_hash`` is ``None``
    whenever the user leaves the workflow layer.
    """

    id: UserId
    email: str
    name: str
    role: Role
    department_id: Optional[DepartmentId]
    created_at: datetime
    updated_at: datetime
    is_active: bool = True
    password_hash: Optional[str] = None

    def without_password(self) -> "User":
        return replace(self, password_hash=None) if self.password_hash is not None else self

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "departmentId": self.department_id,
            "isActive": self.is_active,
            "createdAt": isoformat_or_none(self.created_at),
            "updatedAt": isoformat_or_none(self.updated_at),
        }


@dataclass(frozen=True)
class Approver:
    """Lightweight view used for approval checks."""

    id: UserId
    role: Role


@dataclass(frozen=True)
class CreateUser:
    email: str
    name: str
    password: str
    role: Role = Role.EMPLOYEE
    department_id: Optional[DepartmentId] = None


@dataclass(frozen=True)
class UpdateUser:
    """Partial update; ``None`` fields keep the stored value.

    ``clear_department`` removes the department; it cannot be combined with
    a new ``department_id``.
    """

    id: UserId
    name: Optional[str] = None
    role: Optional[Role] = None
    department_id: Optional[DepartmentId] = None
    is_active: Optional[bool] = None
    clear_department: bool = False


@dataclass(frozen=True)
class AuthenticateUser:
    email: str
    password: str


@dataclass(frozen=True)
class AuthToken:
    access_token: str
    refresh_token: str
    expires_in: int

    def to_dict(self) -> dict:
        return {
            "accessToken": self.access_token,
            "refreshToken": self.refresh_token,
            "expiresIn": self.expires_in,
        }


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified access token."""

    user_id: UserId
    role: Role
