from __future__ import annotations

from flask import Flask, g

from ..common.web import json_body, ok, parse_id, require_field, require_role, token_required
from ..core.enums import Role
from ..core.exceptions import ValidationError, not_found
from ..core.ids import create_department_id, create_user_id
from .model import CreateUser, UpdateUser


def _parse_role(value) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("Invalid role")


def _parse_department(payload: dict):
    value = payload.get("departmentId")
    return parse_id(create_department_id, value, "departmentId") if value else None


def register(app: Flask, container) -> None:
    login_required = token_required(container)

    @app.route("/api/auth/register", methods=["POST"], endpoint="register")
    def register_account():
        payload = json_body()
        # self-registration always creates employees; other roles go through /api/users
        user = container.user_service.create_account(
            CreateUser(
                email=str(payload.get("email") or ""),
                name=str(require_field(payload, "name")),
                password=str(payload.get("password") or ""),
                role=Role.EMPLOYEE,
                department_id=_parse_department(payload),
            )
        )
        return ok(user, 201)

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        payload = json_body()
        token = container.auth_service.authenticate(
            str(payload.get("email") or ""),
            str(payload.get("password") or ""),
        )
        return ok(token)

    @app.route("/api/users/me", methods=["GET"], endpoint="current_user")
    @login_required
    def current_user():
        user = container.user_service.find_by_id(g.claims.user_id)
        if not user:
            raise not_found("User not found")
        return ok(user)

    @app.route("/api/users", methods=["POST"], endpoint="add_user")
    @login_required
    def add_user():
        require_role(Role.ADMIN)
        payload = json_body()
        user = container.user_service.create_account(
            CreateUser(
                email=str(payload.get("email") or ""),
                name=str(require_field(payload, "name")),
                password=str(payload.get("password") or ""),
                role=_parse_role(payload.get("role", Role.EMPLOYEE.value)),
                department_id=_parse_department(payload),
            )
        )
        return ok(user, 201)

    @app.route("/api/users/<user_id>", methods=["PATCH"], endpoint="update_user")
    @login_required
    def update_user(user_id: str):
        require_role(Role.ADMIN)
        payload = json_body()

        is_active = payload.get("isActive")
        if is_active is not None and not isinstance(is_active, bool):
            raise ValidationError("isActive must be a boolean")

        user = container.user_service.update_account(
            UpdateUser(
                id=parse_id(create_user_id, user_id, "user id"),
                name=payload.get("name"),
                role=_parse_role(payload["role"]) if payload.get("role") is not None else None,
                department_id=_parse_department(payload),
                is_active=is_active,
                # an explicit null unassigns the department
                clear_department="departmentId" in payload and payload["departmentId"] is None,
            )
        )
        return ok(user)
