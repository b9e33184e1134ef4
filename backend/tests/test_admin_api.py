from __future__ import annotations

from fastapi.testclient import TestClient

from ats.main import create_app


NEW_RECRUITER = {
    "name": "Priya Shah",
    "email": "priya@example.com",
    "password": "recruiter-pass",
    "phone": "555-0199",
    "role": "recruiter",
}


def test_admin_creates_recruiter_who_can_log_in(client, make_user, headers_for):
    admin = make_user("admin")
    r = client.post("/api/admin/users", json=NEW_RECRUITER, headers=headers_for(admin))
    assert r.status_code == 201
    assert r.json()["message"] == "recruiter account created successfully"
    assert r.json()["user"]["role"] == "recruiter"

    login = client.post(
        "/api/auth/login",
        json={"email": "priya@example.com", "password": "recruiter-pass", "role": "recruiter"},
    )
    assert login.status_code == 200


def test_admin_cannot_create_students(client, make_user, headers_for):
    admin = make_user("admin")
    r = client.post("/api/admin/users", json={**NEW_RECRUITER, "role": "student"}, headers=headers_for(admin))
    assert r.status_code == 400
    assert r.json() == {"message": "Cannot create student users via this endpoint"}


def test_admin_user_creation_rejects_duplicates_and_unknown_roles(client, make_user, headers_for):
    admin = make_user("admin", email="boss@example.com")
    r = client.post("/api/admin/users", json={**NEW_RECRUITER, "email": "boss@example.com"}, headers=headers_for(admin))
    assert r.status_code == 400
    assert r.json()["message"] == "Email already registered"

    r = client.post("/api/admin/users", json={**NEW_RECRUITER, "role": "owner"}, headers=headers_for(admin))
    assert r.status_code == 400


def test_admin_routes_are_admin_only(client, make_user, headers_for):
    recruiter = make_user("recruiter")
    assert client.post("/api/admin/users", json=NEW_RECRUITER, headers=headers_for(recruiter)).status_code == 403
    assert client.get("/api/admin/overview", headers=headers_for(recruiter)).status_code == 403
    assert client.get("/api/admin/users").status_code == 401


def test_list_users_filters_by_role(client, make_user, headers_for):
    admin = make_user("admin")
    make_user("student")
    recruiter = make_user("recruiter")

    r = client.get("/api/admin/users", params={"role": "recruiter"}, headers=headers_for(admin))
    assert r.status_code == 200
    assert [u["id"] for u in r.json()] == [recruiter.id]
    assert len(client.get("/api/admin/users", headers=headers_for(admin)).json()) == 3
    assert client.get("/api/admin/users", params={"role": "ghost"}, headers=headers_for(admin)).status_code == 400


def test_admin_changes_role(client, make_user, headers_for):
    admin = make_user("admin")
    student = make_user("student")

    r = client.put(f"/api/admin/users/{student.id}/role", json={"role": "Recruiter"}, headers=headers_for(admin))
    assert r.status_code == 200
    assert r.json()["role"] == "recruiter"

    me = client.get("/api/auth/me", headers=headers_for(student))
    assert me.json()["user"]["role"] == "recruiter"

    assert client.put("/api/admin/users/999/role", json={"role": "admin"}, headers=headers_for(admin)).status_code == 404
    assert client.put(f"/api/admin/users/{student.id}/role", json={"role": "root"}, headers=headers_for(admin)).status_code == 400


def test_overview_counts(client, make_user, make_job, headers_for):
    admin = make_user("admin")
    recruiter = make_user("recruiter")
    student = make_user("student")
    job = make_job(recruiter, title="Platform Engineer")
    client.post(f"/api/applications/apply/{job.id}", json={}, headers=headers_for(student))

    r = client.get("/api/admin/overview", headers=headers_for(admin))
    assert r.status_code == 200
    body = r.json()
    assert body["kpis"] == {"totalUsers": 3, "activeRecruiters": 1, "totalJobs": 1, "activeApplications": 1}
    assert len(body["usersGrowth"]) == 7
    assert len(body["applicationsByDay"]) == 7
    assert body["usersGrowth"][-1]["count"] == 3
    assert body["applicationsByDay"][-1]["count"] == 1
    types = {item["type"] for item in body["recentActivity"]}
    assert types == {"signup", "job_post", "application"}


def test_unexpected_errors_are_generic(make_user, headers_for, monkeypatch):
    admin = make_user("admin")

    def boom(self, db, today=None):
        raise RuntimeError("database exploded")

    monkeypatch.setattr("ats.services.overview.AdminOverviewService.build", boom)
    with TestClient(create_app(), raise_server_exceptions=False) as c:
        r = c.get("/api/admin/overview", headers=headers_for(admin))
    assert r.status_code == 500
    assert r.json() == {"message": "Internal server error"}


def test_unknown_routes_use_message_shape(client):
    r = client.get("/api/nothing-here")
    assert r.status_code == 404
    assert r.json() == {"message": "Not Found"}


def test_admin_user_creation_race_on_email_is_a_conflict(client, make_user, headers_for, monkeypatch):
    admin = make_user("admin", email="boss@example.com")
    monkeypatch.setattr("ats.api.admin.email_registered", lambda db, email: False)
    r = client.post("/api/admin/users", json={**NEW_RECRUITER, "email": "boss@example.com"}, headers=headers_for(admin))
    assert r.status_code == 400
    assert r.json() == {"message": "Email already registered"}
