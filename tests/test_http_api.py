from __future__ import annotations

from travel_desk.core.enums import EffectiveRole, Role


def test_unauthenticated_api_request_is_401(client):
    resp = client.get("/api/dashboard")

    assert resp.status_code == 401
    assert resp.get_json()["redirect_to"] == "/login"


def test_unauthenticated_page_request_redirects_to_login(client):
    resp = client.get("/pm")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")

    notices = client.get("/login").get_json()["notices"]
    assert notices[0]["category"] == "warning"


def test_current_user_endpoint(client, add_user, login):
    resp = client.get("/api/user")
    assert resp.status_code == 401

    admin = add_user(Role.ADMIN)
    login(admin)

    resp = client.get("/api/user")
    body = resp.get_json()
    assert resp.status_code == 200
    assert resp.headers["Cache-Control"] == "no-store"
    assert body["role"] == "admin"
    assert body["effective_role"] == "manager"
    assert body["home"] == "/manager"
    assert "password_hash" not in body


def test_landing_redirects_to_role_home(client, add_user, login):
    login(add_user(Role.OPERATIONS_KSA))

    resp = client.get("/")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/operations")


def test_manager_on_pm_page_is_sent_home_with_notice(client, add_user, login):
    login(add_user(Role.MANAGER))

    resp = client.get("/pm")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/manager")

    body = client.get("/manager").get_json()
    assert body["section"] == "/manager"
    assert body["notices"][0]["category"] == "danger"
    assert "Access denied" in body["notices"][0]["message"]


def test_admin_acting_as_operations(client, add_user, login):
    login(add_user(Role.ADMIN, active_role=EffectiveRole.OPERATIONS_KSA))

    assert client.get("/operations").status_code == 200
    assert client.get("/admin").status_code == 200
    assert client.get("/admin/users").status_code == 200
    assert client.get("/pm").status_code == 302


def test_non_admin_role_switch_is_forbidden(client, add_user, users_repo, login):
    pm = add_user(Role.PM)
    login(pm)

    resp = client.post("/api/admin/switch-role", json={"role": "operations_uae"})

    assert resp.status_code == 403
    assert users_repo.get_by_id(pm.id).active_role is None


def test_invalid_role_switch_is_400(client, add_user, login):
    login(add_user(Role.ADMIN))

    resp = client.post("/api/admin/switch-role", json={"role": "admin"})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "InvalidRoleError"


def test_switch_role_then_pm_section_is_allowed(client, add_user, login):
    login(add_user(Role.ADMIN, active_role=EffectiveRole.MANAGER))
    assert client.get("/pm").status_code == 302

    resp = client.post("/api/admin/switch-role", json={"role": "pm"})
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["user"]["effective_role"] == "pm"
    assert body["refetch"] == ["/api/user"]
    assert client.get("/pm").status_code == 200
    assert client.get("/api/user").get_json()["active_role"] == "pm"


def test_access_probe(client, add_user, login):
    assert client.get("/api/access?path=/pm").get_json()["reason"] == "unauthenticated"

    login(add_user(Role.PM))

    assert client.get("/api/access?path=/pm").get_json()["decision"] == "allow"
    denied = client.get("/api/access?path=/admin").get_json()
    assert denied["decision"] == "deny"
    assert denied["redirect_to"] == "/pm"
    assert client.get("/api/access?path=pm").status_code == 400


def test_user_management_is_admin_only(client, add_user, login):
    login(add_user(Role.MANAGER))

    assert client.get("/api/users").status_code == 403


def test_admin_user_management_roundtrip(client, add_user, login):
    admin = add_user(Role.ADMIN, active_role=EffectiveRole.OPERATIONS_UAE)
    login(admin)

    created = client.post(
        "/api/users",
        json={"email": "pm2@example.com", "first_name": "P", "last_name": "M", "role": "pm"},
    )
    assert created.status_code == 201
    user_id = created.get_json()["id"]

    updated = client.put(f"/api/users/{user_id}", json={"annual_travel_budget": "9000"})
    assert updated.get_json()["annual_travel_budget"] == "9000"

    assert client.delete(f"/api/users/{admin.id}").status_code == 400
    assert client.delete(f"/api/users/{user_id}").status_code == 200
    assert len(client.get("/api/users").get_json()) == 1


def test_register_login_logout(client):
    resp = client.post(
        "/api/register",
        json={
            "email": "fresh@example.com",
            "password": "secret123",
            "first_name": "Fresh",
            "last_name": "User",
            "role": "manager",
        },
    )
    assert resp.status_code == 201
    assert client.get("/api/dashboard").get_json()["home"] == "/manager"

    client.post("/api/logout")
    assert client.get("/api/dashboard").status_code == 401

    bad = client.post("/api/login", json={"email": "fresh@example.com", "password": "wrong"})
    assert bad.status_code == 401


def test_deleted_account_session_is_unauthenticated(client, add_user, users_repo, login):
    pm = add_user(Role.PM)
    login(pm)
    users_repo.delete_by_id(pm.id)

    assert client.get("/api/dashboard").status_code == 401


def test_unknown_path_is_404(client, add_user, login):
    login(add_user(Role.PM))

    assert client.get("/api/nothing-here").status_code == 404


def test_register_with_non_string_role_is_400(client):
    resp = client.post(
        "/api/register",
        json={
            "email": "fresh@example.com",
            "password": "secret123",
            "first_name": "Fresh",
            "last_name": "User",
            "role": 3,
        },
    )

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "InvalidRoleError"
    assert client.get("/api/user").status_code == 401


def test_user_management_rejects_non_string_fields(client, add_user, login):
    login(add_user(Role.ADMIN))
    pm = add_user(Role.PM)

    created = client.post(
        "/api/users",
        json={"email": "pm2@example.com", "first_name": 5, "last_name": "M", "role": "pm"},
    )
    assert created.status_code == 400
    assert created.get_json()["error"] == "ValidationError"

    updated = client.put(f"/api/users/{pm.id}", json={"role": 3})
    assert updated.status_code == 400
    assert updated.get_json()["error"] == "InvalidRoleError"


def test_switch_role_with_non_object_body_is_400(client, add_user, users_repo, login):
    admin = add_user(Role.ADMIN, active_role=EffectiveRole.MANAGER)
    login(admin)

    resp = client.post("/api/admin/switch-role", json=["pm"])

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "ValidationError"
    assert users_repo.get_by_id(admin.id).active_role == EffectiveRole.MANAGER


def test_non_object_bodies_are_400(client, add_user, login):
    assert client.post("/api/login", json="admin@example.com").status_code == 400

    login(add_user(Role.ADMIN))
    pm = add_user(Role.PM)

    assert client.post("/api/users", json=[1, 2]).status_code == 400
    assert client.put(f"/api/users/{pm.id}", json="pm").status_code == 400
    assert client.post("/api/change-password", json=7).status_code == 400
