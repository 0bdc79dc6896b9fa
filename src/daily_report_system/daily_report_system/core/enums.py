from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"

    @property
    def can_approve(self) -> bool:
        return self in (Role.ADMIN, Role.MANAGER)


class ReportStatus(str, Enum):
    """Lifecycle state of a daily report."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_editable(self) -> bool:
        return self in (ReportStatus.DRAFT, ReportStatus.REJECTED)


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"


class ErrorCode(str, Enum):
    """Finer-grained codes attached to some domain errors."""

    DAILY_REPORT_NOT_FOUND = "DAILY_REPORT_NOT_FOUND"
    DAILY_REPORT_ALREADY_EXISTS = "DAILY_REPORT_ALREADY_EXISTS"
    INVALID_TASK_HOURS = "INVALID_TASK_HOURS"
    INVALID_PROGRESS_VALUE = "INVALID_PROGRESS_VALUE"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    INVALID_EMAIL = "INVALID_EMAIL"
    WEAK_PASSWORD = "WEAK_PASSWORD"
