from __future__ import annotations

import os
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from typing import Optional

import pytest

os.environ.setdefault("APP_ENV", "testing")

from daily_report_system.core.enums import Role  # noqa: E402
from daily_report_system.core.exceptions import DuplicateKeyError  # noqa: E402
from daily_report_system.core.ids import generate_project_id, generate_user_id  # noqa: E402
from daily_report_system.reports.model import DailyReport, Task  # noqa: E402
from daily_report_system.reports.workflow import DailyReportWorkflow  # noqa: E402
from daily_report_system.users.model import Approver, User  # noqa: E402
from daily_report_system.users.workflow import UserWorkflow  # noqa: E402


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class InMemoryUsers:
    """UserStore kept in a dict. Like the MySQL store, ``update`` keeps the stored hash."""

    def __init__(self):
        self._by_id: dict[str, User] = {}

    def add(self, user: User) -> User:
        self._by_id[user.id] = user
        return user

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self._by_id.get(user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)

    def find_approver(self, user_id: str) -> Optional[Approver]:
        user = self._by_id.get(user_id)
        return Approver(id=user.id, role=user.role) if user else None

    def create(self, user: User) -> User:
        if any(u.email == user.email for u in self._by_id.values()):
            raise DuplicateKeyError("duplicate email", key="uq_users_email")
        self._by_id[user.id] = user
        return user

    def update(self, user: User) -> User:
        stored = self._by_id[user.id]
        self._by_id[user.id] = replace(user, password_hash=stored.password_hash)
        return self._by_id[user.id]


class InMemoryReports:
    def __init__(self):
        self._by_id: dict[str, DailyReport] = {}
        self.writes: list[str] = []

    def find_by_id(self, report_id: str) -> Optional[DailyReport]:
        return self._by_id.get(report_id)

    def find_by_user_and_date(self, user_id: str, report_date: date) -> Optional[DailyReport]:
        return next(
            (r for r in self._by_id.values() if r.user_id == user_id and r.date == report_date),
            None,
        )

    def create(self, report: DailyReport) -> DailyReport:
        if self.find_by_user_and_date(report.user_id, report.date):
            raise DuplicateKeyError("duplicate report", key="uq_daily_reports_user_date")
        self._by_id[report.id] = report
        self.writes.append("create")
        return report

    def update(self, report: DailyReport) -> DailyReport:
        self._by_id[report.id] = report
        self.writes.append("update")
        return report


class FakeHasher:
    def hash(self, password: str) -> str:
        return "hashed:" + password

    def verify(self, password: str, password_hash: str) -> bool:
        return password_hash == "hashed:" + password


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def reports_repo() -> InMemoryReports:
    return InMemoryReports()


@pytest.fixture
def hasher() -> FakeHasher:
    return FakeHasher()


@pytest.fixture
def make_user(users_repo, fixed_now):
    def _make(role: Role = Role.EMPLOYEE, *, email: Optional[str] = None, password: Optional[str] = None) -> User:
        user_id = generate_user_id()
        return users_repo.add(
            User(
                id=user_id,
                email=email or f"{user_id.lower()}@example.com",
                name=f"{role.value} user",
                role=role,
                department_id=None,
                created_at=fixed_now,
                updated_at=fixed_now,
                password_hash="hashed:" + password if password else None,
            )
        )

    return _make


@pytest.fixture
def employee(make_user) -> User:
    return make_user(Role.EMPLOYEE)


@pytest.fixture
def manager(make_user) -> User:
    return make_user(Role.MANAGER)


@pytest.fixture
def project_id():
    return generate_project_id()


@pytest.fixture
def make_task(project_id):
    def _make(hours: float = 4, progress: int = 50, description: str = "Implement feature") -> Task:
        return Task(project_id=project_id, description=description, hours_spent=hours, progress=progress)

    return _make


@pytest.fixture
def report_workflow(reports_repo, users_repo, clock) -> DailyReportWorkflow:
    return DailyReportWorkflow(reports_repo, users_repo, clock=clock)


@pytest.fixture
def user_workflow(users_repo, hasher, clock) -> UserWorkflow:
    return UserWorkflow(users_repo, hasher, clock=clock)


class FakeCursor:
    """Records statements; rows are served from the queues on the owning connection."""

    def __init__(self, conn: "FakeConnection"):
        self._conn = conn
        self.closed = False

    def _run(self, sql: str, params):
        statement = " ".join(sql.split())
        self._conn.statements.append((statement, params))
        for prefix, error in self._conn.fail_on.items():
            if statement.startswith(prefix):
                raise error

    def execute(self, sql: str, params=None):
        self._run(sql, params)

    def executemany(self, sql: str, seq_params):
        self._run(sql, list(seq_params))

    def fetchone(self):
        return self._conn.one_rows.pop(0) if self._conn.one_rows else None

    def fetchall(self):
        return self._conn.all_rows.pop(0) if self._conn.all_rows else []

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self):
        self.statements: list[tuple[str, object]] = []
        self.fail_on: dict[str, Exception] = {}
        self.one_rows: list[dict] = []
        self.all_rows: list[list[dict]] = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self, dictionary: bool = False):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


class FakeConnectionFactory:
    """Stands in for DatabaseConnection; hands out the same fake connection."""

    def __init__(self):
        self.conn = FakeConnection()

    def connect(self):
        return self.conn


@pytest.fixture
def fake_db() -> FakeConnectionFactory:
    return FakeConnectionFactory()
