from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .auth.password_hasher import PasswordHasher, WerkzeugPasswordHasher
from .auth.token_generator import JwtTokenGenerator, TokenGenerator
from .common.datetime_utils import now_utc
from .database.connection import DBConfig, DatabaseConnection
from .notifications.notifier import LoggingNotifier, Notifier
from .reports.mysql_report_repository import MySQLDailyReportRepository
from .reports.repository import DailyReportRepository
from .reports.service import DailyReportService
from .reports.workflow import DailyReportWorkflow
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserStore
from .users.service import AuthService, UserService
from .users.validation import PasswordPolicy
from .users.workflow import UserWorkflow


@dataclass(frozen=True)
class Container:
    users_repo: UserStore
    reports_repo: DailyReportRepository
    auth_service: AuthService
    user_service: UserService
    report_service: DailyReportService
    conn: Optional[DatabaseConnection] = None


def assemble_container(
    *,
    users_repo: UserStore,
    reports_repo: DailyReportRepository,
    hasher: PasswordHasher,
    tokens: TokenGenerator,
    notifier: Optional[Notifier] = None,
    password_policy: PasswordPolicy = PasswordPolicy(),
    clock: Callable[[], datetime] = now_utc,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire workflows and services over the given ports."""
    user_workflow = UserWorkflow(users_repo, hasher, tokens, password_policy=password_policy, clock=clock)
    report_workflow = DailyReportWorkflow(reports_repo, users_repo, clock=clock)

    return Container(
        users_repo=users_repo,
        reports_repo=reports_repo,
        auth_service=AuthService(user_workflow),
        user_service=UserService(user_workflow, users_repo),
        report_service=DailyReportService(report_workflow, reports_repo, notifier),
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    access_token_days: int,
    refresh_token_days: int,
    password_policy: PasswordPolicy = PasswordPolicy(),
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return assemble_container(
        users_repo=MySQLUserRepository(conn),
        reports_repo=MySQLDailyReportRepository(conn),
        hasher=WerkzeugPasswordHasher(),
        tokens=JwtTokenGenerator(
            jwt_secret,
            access_token_days=access_token_days,
            refresh_token_days=refresh_token_days,
        ),
        notifier=LoggingNotifier(),
        password_policy=password_policy,
        conn=conn,
    )
