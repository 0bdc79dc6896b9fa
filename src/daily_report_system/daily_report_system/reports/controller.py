from __future__ import annotations

from datetime import date
from typing import Optional

from flask import Flask, g

from ..common.datetime_utils import parse_iso_date
from ..common.web import json_body, ok, optional_json_body, parse_id, require_field, token_required
from ..core.enums import ErrorCode
from ..core.exceptions import AuthorizationError, ValidationError, not_found
from ..core.ids import create_daily_report_id, create_project_id
from .model import (
    ApproveDailyReport,
    CreateDailyReport,
    RejectDailyReport,
    SubmitDailyReport,
    Task,
    UpdateDailyReport,
)


def _parse_task(raw) -> Task:
    if not isinstance(raw, dict):
        raise ValidationError("Each task must be an object")
    try:
        hours = float(require_field(raw, "hoursSpent"))
        progress = int(require_field(raw, "progress"))
    except (TypeError, ValueError):
        raise ValidationError("hoursSpent and progress must be numbers")
    return Task(
        project_id=parse_id(create_project_id, raw.get("projectId"), "projectId"),
        description=str(raw.get("description") or ""),
        hours_spent=hours,
        progress=progress,
    )


def _parse_tasks(payload: dict, *, required: bool) -> Optional[tuple[Task, ...]]:
    raw = payload.get("tasks")
    if raw is None:
        if required:
            raise ValidationError("Missing field: tasks")
        return None
    if not isinstance(raw, list):
        raise ValidationError("tasks must be a list")
    return tuple(_parse_task(t) for t in raw)


def _parse_date(value) -> date:
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError("Invalid date (YYYY-MM-DD)")


def register(app: Flask, container) -> None:
    login_required = token_required(container)

    def _report_id(value: str):
        return parse_id(create_daily_report_id, value, "report id")

    @app.route("/api/reports", methods=["POST"], endpoint="create_report")
    @login_required
    def create_report():
        payload = json_body()
        report = container.report_service.create(
            CreateDailyReport(
                user_id=g.claims.user_id,
                date=_parse_date(require_field(payload, "date")),
                tasks=_parse_tasks(payload, required=True),
                challenges=str(payload.get("challenges") or ""),
                next_day_plan=str(payload.get("nextDayPlan") or ""),
            )
        )
        return ok(report, 201)

    @app.route("/api/reports/<report_id>", methods=["GET"], endpoint="get_report")
    @login_required
    def get_report(report_id: str):
        report = container.report_service.find_by_id(_report_id(report_id))
        if not report:
            raise not_found("Daily report not found", code=ErrorCode.DAILY_REPORT_NOT_FOUND)
        if report.user_id != g.claims.user_id and not g.claims.role.can_approve:
            raise AuthorizationError("You cannot view another user's daily report", code=ErrorCode.FORBIDDEN)
        return ok(report)

    @app.route("/api/reports/<report_id>", methods=["PUT"], endpoint="update_report")
    @login_required
    def update_report(report_id: str):
        payload = json_body()
        challenges = payload.get("challenges")
        next_day_plan = payload.get("nextDayPlan")
        report = container.report_service.update(
            UpdateDailyReport(
                id=_report_id(report_id),
                user_id=g.claims.user_id,
                tasks=_parse_tasks(payload, required=False),
                challenges=str(challenges) if challenges is not None else None,
                next_day_plan=str(next_day_plan) if next_day_plan is not None else None,
            )
        )
        return ok(report)

    @app.route("/api/reports/<report_id>/submit", methods=["POST"], endpoint="submit_report")
    @login_required
    def submit_report(report_id: str):
        report = container.report_service.submit(
            SubmitDailyReport(id=_report_id(report_id), user_id=g.claims.user_id)
        )
        return ok(report)

    @app.route("/api/reports/<report_id>/approve", methods=["POST"], endpoint="approve_report")
    @login_required
    def approve_report(report_id: str):
        payload = optional_json_body()
        feedback = payload.get("feedback")
        report = container.report_service.approve(
            ApproveDailyReport(
                id=_report_id(report_id),
                approver_id=g.claims.user_id,
                feedback=str(feedback) if feedback else None,
            )
        )
        return ok(report)

    @app.route("/api/reports/<report_id>/reject", methods=["POST"], endpoint="reject_report")
    @login_required
    def reject_report(report_id: str):
        payload = optional_json_body()
        report = container.report_service.reject(
            RejectDailyReport(
                id=_report_id(report_id),
                approver_id=g.claims.user_id,
                feedback=str(payload.get("feedback") or ""),
            )
        )
        return ok(report)
