"""Typed identifiers.

Every id is a 26-character ULID string (Crockford base32, time-sortable). The
``NewType`` wrappers keep the kinds apart for type checkers; the ``create_*``
constructors validate the shape at runtime.
"""

from __future__ import annotations

import re
from typing import NewType

from ulid import ULID

from .constants import ID_LENGTH
from .exceptions import InvalidIdentifierError

UserId = NewType("UserId", str)
DailyReportId = NewType("DailyReportId", str)
DepartmentId = NewType("DepartmentId", str)
ProjectId = NewType("ProjectId", str)

# first char <= 7 keeps the 48-bit timestamp in range
_ULID_RE = re.compile(r"^[0-7][0-9A-HJKMNP-TV-Z]{%d}$" % (ID_LENGTH - 1))


def is_valid_id(value: object) -> bool:
    return isinstance(value, str) and _ULID_RE.fullmatch(value) is not None


def _checked(value: object, kind: str) -> str:
    if not is_valid_id(value):
        raise InvalidIdentifierError(f"Invalid {kind}: {value!r}")
    return str(value)


def create_user_id(value: str) -> UserId:
    return UserId(_checked(value, "UserId"))


def create_daily_report_id(value: str) -> DailyReportId:
    return DailyReportId(_checked(value, "DailyReportId"))


def create_department_id(value: str) -> DepartmentId:
    return DepartmentId(_checked(value, "DepartmentId"))


def create_project_id(value: str) -> ProjectId:
    return ProjectId(_checked(value, "ProjectId"))


def generate_user_id() -> UserId:
    return UserId(str(ULID()))


def generate_daily_report_id() -> DailyReportId:
    return DailyReportId(str(ULID()))


def generate_department_id() -> DepartmentId:
    return DepartmentId(str(ULID()))


def generate_project_id() -> ProjectId:
    return ProjectId(str(ULID()))
