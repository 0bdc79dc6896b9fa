from __future__ import annotations

import pytest

from daily_report_system.auth.token_generator import JwtTokenGenerator
from daily_report_system.container import assemble_container
from daily_report_system.core.enums import Role
from daily_report_system.core.ids import generate_daily_report_id, generate_department_id
from daily_report_system.main import create_app

SECRET = "api-test-secret-with-at-least-32-bytes!!"
PASSWORD = "Secret123"


@pytest.fixture
def app(users_repo, reports_repo, hasher):
    container = assemble_container(
        users_repo=users_repo,
        reports_repo=reports_repo,
        hasher=hasher,
        tokens=JwtTokenGenerator(SECRET),
    )
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client, make_user):
    def _login(role: Role = Role.EMPLOYEE):
        user = make_user(role, password=PASSWORD)
        res = client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})
        assert res.status_code == 200, res.get_json()
        return user, {"Authorization": f"Bearer {res.get_json()['data']['accessToken']}"}

    return _login


def _report_payload(project_id, hours=(4, 3)):
    return {
        "date": "2026-03-02",
        "tasks": [
            {"projectId": project_id, "description": f"task {i}", "hoursSpent": h, "progress": 50}
            for i, h in enumerate(hours)
        ],
        "challenges": "None",
        "nextDayPlan": "Review",
    }


# auth & users


def test_register_creates_an_employee_without_exposing_the_hash(client):
    res = client.post(
        "/api/auth/register",
        json={"email": "bob@example.com", "name": "Bob", "password": PASSWORD, "role": "admin"},
    )

    assert res.status_code == 201
    data = res.get_json()["data"]
    assert data["role"] == "employee"
    assert data["email"] == "bob@example.com"
    assert "passwordHash" not in data and "password_hash" not in data


def test_register_errors_map_to_status_codes(client):
    weak = client.post("/api/auth/register", json={"email": "bob@example.com", "name": "Bob", "password": "weak"})
    assert weak.status_code == 400
    assert weak.get_json() == {
        "success": False,
        "error": {
            "type": "VALIDATION_ERROR",
            "code": "WEAK_PASSWORD",
            "message": "Password must be at least 8 characters long",
            "details": None,
        },
    }

    payload = {"email": "bob@example.com", "name": "Bob", "password": PASSWORD}
    assert client.post("/api/auth/register", json=payload).status_code == 201
    taken = client.post("/api/auth/register", json=payload)
    assert taken.status_code == 409
    assert taken.get_json()["error"]["code"] == "USER_ALREADY_EXISTS"


def test_login_and_me(client, login):
    user, headers = login()

    res = client.get("/api/users/me", headers=headers)

    assert res.status_code == 200
    assert res.get_json()["data"]["id"] == user.id


def test_bad_credentials_and_missing_token_are_401(client, make_user):
    user = make_user(password=PASSWORD)

    wrong = client.post("/api/auth/login", json={"email": user.email, "password": "Wrong1234"})
    anonymous = client.get("/api/users/me")
    garbage = client.get("/api/users/me", headers={"Authorization": "Bearer nope"})

    assert wrong.status_code == 401
    assert wrong.get_json()["error"]["message"] == "Invalid email or password"
    assert anonymous.status_code == 401
    assert garbage.status_code == 401


def test_non_json_body_is_a_validation_error(client):
    res = client.post("/api/auth/login", data="email=x", content_type="text/plain")
    assert res.status_code == 400
    assert res.get_json()["error"]["type"] == "VALIDATION_ERROR"


def test_admin_manages_users(client, login):
    _, admin_headers = login(Role.ADMIN)
    _, employee_headers = login(Role.EMPLOYEE)
    payload = {"email": "carol@example.com", "name": "Carol", "password": PASSWORD, "role": "manager"}

    assert client.post("/api/users", json=payload, headers=employee_headers).status_code == 403

    created = client.post("/api/users", json=payload, headers=admin_headers)
    assert created.status_code == 201
    carol = created.get_json()["data"]
    assert carol["role"] == "manager"

    patched = client.patch(f"/api/users/{carol['id']}", json={"isActive": False}, headers=admin_headers)
    assert patched.status_code == 200
    assert patched.get_json()["data"]["isActive"] is False

    bad_flag = client.patch(f"/api/users/{carol['id']}", json={"isActive": "no"}, headers=admin_headers)
    bad_role = client.patch(f"/api/users/{carol['id']}", json={"role": "boss"}, headers=admin_headers)
    bad_id = client.patch("/api/users/123", json={"name": "x"}, headers=admin_headers)
    assert (bad_flag.status_code, bad_role.status_code, bad_id.status_code) == (400, 400, 400)


# reports


def test_report_lifecycle_over_http(client, login, project_id):
    employee, employee_headers = login(Role.EMPLOYEE)
    manager, manager_headers = login(Role.MANAGER)

    created = client.post("/api/reports", json=_report_payload(project_id), headers=employee_headers)
    assert created.status_code == 201
    report = created.get_json()["data"]
    assert report["status"] == "draft"
    assert report["userId"] == employee.id
    assert [t["hoursSpent"] for t in report["tasks"]] == [4, 3]

    url = f"/api/reports/{report['id']}"
    updated = client.put(url, json={"nextDayPlan": "Ship it"}, headers=employee_headers)
    assert updated.get_json()["data"]["nextDayPlan"] == "Ship it"

    assert client.post(f"{url}/submit", headers=employee_headers).get_json()["data"]["status"] == "submitted"
    assert client.post(f"{url}/approve", headers=employee_headers).status_code == 403

    approved = client.post(f"{url}/approve", json={"feedback": "Nice"}, headers=manager_headers)
    assert approved.status_code == 200
    body = approved.get_json()["data"]
    assert body["status"] == "approved"
    assert body["approvedBy"] == manager.id
    assert body["approvedAt"] is not None

    again = client.post(f"{url}/approve", headers=manager_headers)
    assert again.status_code == 422
    assert again.get_json()["error"]["code"] == "INVALID_STATUS_TRANSITION"


def test_reject_requires_feedback(client, login, project_id):
    _, employee_headers = login(Role.EMPLOYEE)
    _, manager_headers = login(Role.MANAGER)
    report = client.post("/api/reports", json=_report_payload(project_id), headers=employee_headers).get_json()["data"]
    url = f"/api/reports/{report['id']}"
    client.post(f"{url}/submit", headers=employee_headers)

    no_body = client.post(f"{url}/reject", headers=manager_headers)
    assert no_body.status_code == 400

    rejected = client.post(f"{url}/reject", json={"feedback": "Too vague"}, headers=manager_headers)
    assert rejected.get_json()["data"]["status"] == "rejected"
    assert rejected.get_json()["data"]["feedback"] == "Too vague"
    assert rejected.get_json()["data"]["approvedAt"] is None


def test_create_report_errors(client, login, project_id):
    _, headers = login(Role.EMPLOYEE)

    too_long = client.post("/api/reports", json=_report_payload(project_id, hours=(12, 13)), headers=headers)
    assert too_long.status_code == 400
    assert too_long.get_json()["error"]["code"] == "INVALID_TASK_HOURS"

    assert client.post("/api/reports", json=_report_payload(project_id), headers=headers).status_code == 201
    duplicate = client.post("/api/reports", json=_report_payload(project_id), headers=headers)
    assert duplicate.status_code == 422
    assert duplicate.get_json()["error"]["code"] == "DAILY_REPORT_ALREADY_EXISTS"

    bad_project = _report_payload("not-a-ulid")
    bad_date = dict(_report_payload(project_id), date="02/03/2026")
    no_tasks = {"date": "2026-03-03"}
    for payload in (bad_project, bad_date, no_tasks):
        assert client.post("/api/reports", json=payload, headers=headers).status_code == 400


def test_reports_are_private_to_owner_and_approvers(client, login, project_id):
    _, owner_headers = login(Role.EMPLOYEE)
    _, other_headers = login(Role.EMPLOYEE)
    _, manager_headers = login(Role.MANAGER)
    report = client.post("/api/reports", json=_report_payload(project_id), headers=owner_headers).get_json()["data"]
    url = f"/api/reports/{report['id']}"

    assert client.get(url, headers=owner_headers).status_code == 200
    assert client.get(url, headers=manager_headers).status_code == 200
    assert client.get(url, headers=other_headers).status_code == 403
    assert client.put(url, json={"challenges": "x"}, headers=other_headers).status_code == 403
    assert client.post(f"{url}/submit", headers=other_headers).status_code == 403


def test_unknown_and_malformed_report_ids(client, login):
    _, headers = login(Role.EMPLOYEE)

    missing = client.get(f"/api/reports/{generate_daily_report_id()}", headers=headers)
    assert missing.status_code == 404
    assert missing.get_json()["error"]["code"] == "DAILY_REPORT_NOT_FOUND"
    assert client.get("/api/reports/42", headers=headers).status_code == 400


def test_unexpected_errors_become_a_generic_500(client, login, reports_repo, monkeypatch):
    _, headers = login(Role.EMPLOYEE)

    def boom(report_id):
        raise RuntimeError("database is down")

    monkeypatch.setattr(reports_repo, "find_by_id", boom)
    res = client.get(f"/api/reports/{generate_daily_report_id()}", headers=headers)

    assert res.status_code == 500
    assert res.get_json() == {"success": False, "error": {"type": "INTERNAL_ERROR", "message": "Internal server error"}}


def test_unknown_route_keeps_its_http_status(client):
    assert client.get("/api/nowhere").status_code == 404


@pytest.mark.parametrize("hours", ["nan", "NaN", "inf"])
def test_non_finite_hours_over_http_are_a_validation_error(client, login, project_id, hours):
    _, headers = login(Role.EMPLOYEE)
    payload = _report_payload(project_id)
    payload["tasks"][0]["hoursSpent"] = hours

    res = client.post("/api/reports", json=payload, headers=headers)

    assert res.status_code == 400
    assert res.get_json()["error"]["code"] == "INVALID_TASK_HOURS"


def test_patch_with_null_department_unassigns_it(client, login, users_repo):
    _, admin_headers = login(Role.ADMIN)
    payload = {"email": "dave@example.com", "name": "Dave", "password": PASSWORD, "departmentId": generate_department_id()}
    dave = client.post("/api/users", json=payload, headers=admin_headers).get_json()["data"]
    assert dave["departmentId"] == payload["departmentId"]

    renamed = client.patch(f"/api/users/{dave['id']}", json={"name": "David"}, headers=admin_headers)
    cleared = client.patch(f"/api/users/{dave['id']}", json={"departmentId": None}, headers=admin_headers)

    assert renamed.get_json()["data"]["departmentId"] == payload["departmentId"]
    assert cleared.get_json()["data"]["departmentId"] is None
    assert users_repo.find_by_id(dave["id"]).department_id is None
