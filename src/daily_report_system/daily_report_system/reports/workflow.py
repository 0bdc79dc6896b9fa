"""Daily report state machine.

    draft --submit--> submitted --approve--> approved
                      submitted --reject---> rejected --update/submit--> submitted

Every method returns ``Either[DomainError, DailyReport]``. Expected failures come
back as ``Left``; repository I/O errors propagate as exceptions.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_utc, to_date_only
from ..core.enums import ErrorCode, ReportStatus
from ..core.exceptions import (
    DomainError,
    DuplicateKeyError,
    business_rule_violation,
    forbidden,
    not_found,
)
from ..core.ids import DailyReportId, generate_daily_report_id
from ..core.result import Either, Left, left, right
from ..users.repository import ApproverLookup
from .model import (
    ApproveDailyReport,
    CreateDailyReport,
    DailyReport,
    RejectDailyReport,
    SubmitDailyReport,
    UpdateDailyReport,
)
from .repository import DailyReportRepository
from .validation import validate_feedback, validate_tasks

logger = logging.getLogger(__name__)

ReportResult = Either[DomainError, DailyReport]


def _report_not_found() -> DomainError:
    return not_found("Daily report not found", code=ErrorCode.DAILY_REPORT_NOT_FOUND)


def _report_exists() -> DomainError:
    return business_rule_violation(
        "A daily report already exists for this date",
        code=ErrorCode.DAILY_REPORT_ALREADY_EXISTS,
    )


class DailyReportWorkflow:
    """Use cases: create / update / submit / approve / reject a daily report."""

    def __init__(
        self,
        reports: DailyReportRepository,
        users: ApproverLookup,
        *,
        clock: Callable[[], datetime] = now_utc,
        id_factory: Callable[[], DailyReportId] = generate_daily_report_id,
    ):
        self._reports = reports
        self._users = users
        self._clock = clock
        self._id_factory = id_factory

    def _rejected(self, action: str, error: DomainError) -> Left[DomainError]:
        logger.info(
            "%s refused: %s", action, error.message,
            extra={"error_kind": error.kind.value, "error_code": error.code.value if error.code else None},
        )
        return left(error)

    def _check_approver(self, approver_id: str, action: str) -> Optional[DomainError]:
        approver = self._users.find_approver(approver_id)
        if not approver:
            return not_found("Approver not found")
        if not approver.role.can_approve:
            return forbidden(f"Only managers or admins can {action} daily reports")
        return None

    def create(self, command: CreateDailyReport) -> ReportResult:
        checked = validate_tasks(command.tasks)
        if isinstance(checked, Left):
            return self._rejected("create", checked.error)

        if not self._users.find_approver(command.user_id):
            return self._rejected("create", not_found("User not found"))

        report_date = to_date_only(command.date)
        if self._reports.find_by_user_and_date(command.user_id, report_date):
            return self._rejected("create", _report_exists())

        now = self._clock()
        report = DailyReport(
            id=self._id_factory(),
            user_id=command.user_id,
            date=report_date,
            tasks=checked.value,
            challenges=command.challenges,
            next_day_plan=command.next_day_plan,
            status=ReportStatus.DRAFT,
            created_at=now,
            updated_at=now,
        )

        try:
            created = self._reports.create(report)
        except DuplicateKeyError:
            # lost the race against a concurrent create for the same day
            return self._rejected("create", _report_exists())

        logger.info("daily report %s created for user %s on %s", created.id, created.user_id, created.date)
        return right(created)

    def update(self, command: UpdateDailyReport) -> ReportResult:
        report = self._reports.find_by_id(command.id)
        if not report:
            return self._rejected("update", _report_not_found())

        if command.user_id is not None and command.user_id != report.user_id:
            return self._rejected("update", forbidden("You cannot edit another user's daily report"))

        if not report.status.is_editable:
            return self._rejected(
                "update",
                business_rule_violation(
                    "Submitted or approved daily reports cannot be edited",
                    code=ErrorCode.INVALID_STATUS_TRANSITION,
                    details={"status": report.status.value},
                ),
            )

        tasks = report.tasks
        if command.tasks is not None:
            checked = validate_tasks(command.tasks)
            if isinstance(checked, Left):
                return self._rejected("update", checked.error)
            tasks = checked.value

        updated = replace(
            report,
            tasks=tasks,
            challenges=command.challenges if command.challenges is not None else report.challenges,
            next_day_plan=command.next_day_plan if command.next_day_plan is not None else report.next_day_plan,
            updated_at=self._clock(),
        )
        return right(self._reports.update(updated))

    def submit(self, command: SubmitDailyReport) -> ReportResult:
        report = self._reports.find_by_id(command.id)
        if not report:
            return self._rejected("submit", _report_not_found())

        if report.user_id != command.user_id:
            return self._rejected("submit", forbidden("You cannot submit another user's daily report"))

        if report.status in (ReportStatus.SUBMITTED, ReportStatus.APPROVED):
            return self._rejected(
                "submit",
                business_rule_violation(
                    "This daily report has already been submitted or approved",
                    code=ErrorCode.INVALID_STATUS_TRANSITION,
                    details={"status": report.status.value},
                ),
            )

        now = self._clock()
        result = self._reports.update(
            replace(report, status=ReportStatus.SUBMITTED, submitted_at=now, updated_at=now)
        )
        logger.info("daily report %s submitted (was %s)", report.id, report.status.value)
        return right(result)

    def approve(self, command: ApproveDailyReport) -> ReportResult:
        error = self._check_approver(command.approver_id, "approve")
        if error:
            return self._rejected("approve", error)

        report = self._reports.find_by_id(command.id)
        if not report:
            return self._rejected("approve", _report_not_found())

        if report.status != ReportStatus.SUBMITTED:
            return self._rejected(
                "approve",
                business_rule_violation(
                    "Only submitted daily reports can be approved",
                    code=ErrorCode.INVALID_STATUS_TRANSITION,
                    details={"status": report.status.value},
                ),
            )

        now = self._clock()
        result = self._reports.update(
            replace(
                report,
                status=ReportStatus.APPROVED,
                approved_at=now,
                approved_by=command.approver_id,
                feedback=command.feedback,
                updated_at=now,
            )
        )
        logger.info("daily report %s approved by %s", report.id, command.approver_id)
        return right(result)

    def reject(self, command: RejectDailyReport) -> ReportResult:
        feedback = validate_feedback(command.feedback)
        if isinstance(feedback, Left):
            return self._rejected("reject", feedback.error)

        error = self._check_approver(command.approver_id, "reject")
        if error:
            return self._rejected("reject", error)

        report = self._reports.find_by_id(command.id)
        if not report:
            return self._rejected("reject", _report_not_found())

        if report.status != ReportStatus.SUBMITTED:
            return self._rejected(
                "reject",
                business_rule_violation(
                    "Only submitted daily reports can be rejected",
                    code=ErrorCode.INVALID_STATUS_TRANSITION,
                    details={"status": report.status.value},
                ),
            )

        result = self._reports.update(
            replace(report, status=ReportStatus.REJECTED, feedback=feedback.value, updated_at=self._clock())
        )
        logger.info("daily report %s rejected by %s", report.id, command.approver_id)
        return right(result)
