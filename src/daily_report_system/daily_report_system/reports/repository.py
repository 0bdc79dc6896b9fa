from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import DailyReport


class DailyReportRepository(Protocol):
    """Repository interface for DailyReport.

    Every method returns the full report, tasks included. ``create`` raises
    ``DuplicateKeyError`` when a report already exists for (user_id, date);
    ``update`` replaces the stored task list atomically.
    """

    def find_by_id(self, report_id: str) -> Optional[DailyReport]:
        raise NotImplementedError

    def find_by_user_and_date(self, user_id: str, report_date: date) -> Optional[DailyReport]:
        raise NotImplementedError

    def create(self, report: DailyReport) -> DailyReport:
        raise NotImplementedError

    def update(self, report: DailyReport) -> DailyReport:
        raise NotImplementedError
