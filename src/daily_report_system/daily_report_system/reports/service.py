from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.result import is_right, unwrap
from ..notifications.notifier import Notifier
from .model import (
    ApproveDailyReport,
    CreateDailyReport,
    DailyReport,
    RejectDailyReport,
    SubmitDailyReport,
    UpdateDailyReport,
)
from .repository import DailyReportRepository
from .workflow import DailyReportWorkflow


class DailyReportService:
    """Throw-style facade over DailyReportWorkflow.

    Each method returns the report or raises the workflow's ``DomainError``
    unchanged. Callers that want to branch without exceptions use ``workflow``.
    """

    def __init__(
        self,
        workflow: DailyReportWorkflow,
        reports: DailyReportRepository,
        notifier: Optional[Notifier] = None,
    ):
        self.workflow = workflow
        self._reports = reports
        self._notifier = notifier

    def create(self, command: CreateDailyReport) -> DailyReport:
        return unwrap(self.workflow.create(command))

    def update(self, command: UpdateDailyReport) -> DailyReport:
        return unwrap(self.workflow.update(command))

    def submit(self, command: SubmitDailyReport) -> DailyReport:
        result = self.workflow.submit(command)
        if self._notifier and is_right(result):
            self._notifier.report_submitted(result.value)
        return unwrap(result)

    def approve(self, command: ApproveDailyReport) -> DailyReport:
        result = self.workflow.approve(command)
        if self._notifier and is_right(result):
            self._notifier.report_approved(result.value)
        return unwrap(result)

    def reject(self, command: RejectDailyReport) -> DailyReport:
        result = self.workflow.reject(command)
        if self._notifier and is_right(result):
            self._notifier.report_rejected(result.value)
        return unwrap(result)

    def find_by_id(self, report_id: str) -> Optional[DailyReport]:
        return self._reports.find_by_id(report_id)

    def find_by_user_and_date(self, user_id: str, report_date: date) -> Optional[DailyReport]:
        return self._reports.find_by_user_and_date(user_id, report_date)
