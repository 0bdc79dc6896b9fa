from __future__ import annotations

import logging
from typing import Protocol

from ..reports.model import DailyReport

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Outbound notifications about report state changes (chat, mail, ...)."""

    def report_submitted(self, report: DailyReport) -> None:
        raise NotImplementedError

    def report_approved(self, report: DailyReport) -> None:
        raise NotImplementedError

    def report_rejected(self, report: DailyReport) -> None:
        raise NotImplementedError


class LoggingNotifier:
    """Stub notifier: records the event in the log and delivers nothing."""

    def report_submitted(self, report: DailyReport) -> None:
        logger.info("notify: report %s of user %s submitted for %s", report.id, report.user_id, report.date)

    def report_approved(self, report: DailyReport) -> None:
        logger.info("notify: report %s approved by %s", report.id, report.approved_by)

    def report_rejected(self, report: DailyReport) -> None:
        logger.info("notify: report %s rejected: %s", report.id, report.feedback)
