from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from ..core.enums import ReportStatus
from ..core.ids import DailyReportId, ProjectId, UserId
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    duplicate_key_as_domain,
    fetchall,
    fetchone,
    from_db_datetime,
    to_db_datetime,
)
from .model import DailyReport, Task
from .repository import DailyReportRepository

_REPORT_COLUMNS = """
    id, user_id, report_date, challenges, next_day_plan, status,
    submitted_at, approved_at, approved_by, feedback, created_at, updated_at
"""


class MySQLDailyReportRepository(DailyReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _load_tasks(cur, report_id: str) -> tuple[Task, ...]:
        cur.execute(
            """
            SELECT project_id, description, hours_spent, progress
            FROM tasks
            WHERE daily_report_id=%s
            ORDER BY position
            """,
            (report_id,),
        )
        return tuple(
            Task(
                project_id=ProjectId(r["project_id"]),
                description=r["description"],
                hours_spent=float(r["hours_spent"]),
                progress=int(r["progress"]),
            )
            for r in fetchall(cur)
        )

    @staticmethod
    def _insert_tasks(cur, report: DailyReport) -> None:
        if not report.tasks:
            return
        cur.executemany(
            """
            INSERT INTO tasks(daily_report_id, position, project_id, description, hours_spent, progress)
            VALUES(%s,%s,%s,%s,%s,%s)
            """,
            [
                (report.id, position, t.project_id, t.description, t.hours_spent, t.progress)
                for position, t in enumerate(report.tasks)
            ],
        )

    def _to_domain(self, cur, row: Dict[str, Any]) -> DailyReport:
        return DailyReport(
            id=DailyReportId(row["id"]),
            user_id=UserId(row["user_id"]),
            date=row["report_date"],
            tasks=self._load_tasks(cur, row["id"]),
            challenges=row["challenges"],
            next_day_plan=row["next_day_plan"],
            status=ReportStatus(row["status"]),
            submitted_at=from_db_datetime(row.get("submitted_at")),
            approved_at=from_db_datetime(row.get("approved_at")),
            approved_by=UserId(row["approved_by"]) if row.get("approved_by") else None,
            feedback=row.get("feedback"),
            created_at=from_db_datetime(row["created_at"]),
            updated_at=from_db_datetime(row["updated_at"]),
        )

    def find_by_id(self, report_id: str) -> Optional[DailyReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_REPORT_COLUMNS} FROM daily_reports WHERE id=%s", (report_id,))
            row = fetchone(cur)
            return self._to_domain(cur, row) if row else None

    def find_by_user_and_date(self, user_id: str, report_date: date) -> Optional[DailyReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_REPORT_COLUMNS} FROM daily_reports WHERE user_id=%s AND report_date=%s",
                (user_id, report_date),
            )
            row = fetchone(cur)
            return self._to_domain(cur, row) if row else None

    def create(self, report: DailyReport) -> DailyReport:
        with db_cursor(self._conn_factory) as (_, cur), duplicate_key_as_domain("uq_daily_reports_user_date"):
            cur.execute(
                """
                INSERT INTO daily_reports(id, user_id, report_date, challenges, next_day_plan, status,
                                          submitted_at, approved_at, approved_by, feedback, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    report.id,
                    report.user_id,
                    report.date,
                    report.challenges,
                    report.next_day_plan,
                    report.status.value,
                    to_db_datetime(report.submitted_at),
                    to_db_datetime(report.approved_at),
                    report.approved_by,
                    report.feedback,
                    to_db_datetime(report.created_at),
                    to_db_datetime(report.updated_at),
                ),
            )
            self._insert_tasks(cur, report)
        return report

    def update(self, report: DailyReport) -> DailyReport:
        # Report row and task rows change in one transaction: a failure while
        # re-inserting tasks rolls back the delete as well.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE daily_reports
                SET challenges=%s, next_day_plan=%s, status=%s, submitted_at=%s,
                    approved_at=%s, approved_by=%s, feedback=%s, updated_at=%s
                WHERE id=%s
                """,
                (
                    report.challenges,
                    report.next_day_plan,
                    report.status.value,
                    to_db_datetime(report.submitted_at),
                    to_db_datetime(report.approved_at),
                    report.approved_by,
                    report.feedback,
                    to_db_datetime(report.updated_at),
                    report.id,
                ),
            )
            cur.execute("DELETE FROM tasks WHERE daily_report_id=%s", (report.id,))
            self._insert_tasks(cur, report)
        return report
