from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import ReportStatus
from ..core.ids import DailyReportId, ProjectId, UserId


@dataclass(frozen=True)
class Task:
    """One line item of a daily report (a.k.a. work record)."""

    project_id: ProjectId
    description: str
    hours_spent: float
    progress: int

    def to_dict(self) -> dict:
        return {
            "projectId": self.project_id,
            "description": self.description,
            "hoursSpent": self.hours_spent,
            "progress": self.progress,
        }


@dataclass(frozen=True)
class DailyReport:
    """Domain entity: one day's work log for one user.

    Note: plain data object, it holds no persistence code.
    """

    id: DailyReportId
    user_id: UserId
    date: date
    tasks: tuple[Task, ...]
    challenges: str
    next_day_plan: str
    status: ReportStatus
    created_at: datetime
    updated_at: datetime
    submitted_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    approved_by: Optional[UserId] = None
    feedback: Optional[str] = None

    @property
    def total_hours(self) -> float:
        return sum(t.hours_spent for t in self.tasks)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "date": self.date.isoformat(),
            "tasks": [t.to_dict() for t in self.tasks],
            "challenges": self.challenges,
            "nextDayPlan": self.next_day_plan,
            "status": self.status.value,
            "submittedAt": isoformat_or_none(self.submitted_at),
            "approvedAt": isoformat_or_none(self.approved_at),
            "approvedBy": self.approved_by,
            "feedback": self.feedback,
            "createdAt": isoformat_or_none(self.created_at),
            "updatedAt": isoformat_or_none(self.updated_at),
        }


@dataclass(frozen=True)
class CreateDailyReport:
    user_id: UserId
    date: date
    tasks: tuple[Task, ...]
    challenges: str = ""
    next_day_plan: str = ""


@dataclass(frozen=True)
class UpdateDailyReport:
    """Partial update; ``None`` fields keep the stored value.

    ``user_id`` is the caller. When given, it must match the report owner.
    """

    id: DailyReportId
    user_id: Optional[UserId] = None
    tasks: Optional[tuple[Task, ...]] = None
    challenges: Optional[str] = None
    next_day_plan: Optional[str] = None


@dataclass(frozen=True)
class SubmitDailyReport:
    id: DailyReportId
    user_id: UserId


@dataclass(frozen=True)
class ApproveDailyReport:
    id: DailyReportId
    approver_id: UserId
    feedback: Optional[str] = None


@dataclass(frozen=True)
class RejectDailyReport:
    id: DailyReportId
    approver_id: UserId
    feedback: str
