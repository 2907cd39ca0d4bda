"""Account administration API"""

from conftest import login

from core.models import TeamMember, User


def new_user(**overrides):
    data = {
        "firstName": "Jo",
        "lastName": "Keeper",
        "email": "jo@home.test",
        "password": "password123",
        "role": "PLAYER",
    }
    data.update(overrides)
    return data


def test_list_users(admin_client, users):
    resp = admin_client.get("/api/v1/users")

    assert resp.status_code == 200
    emails = {u["email"] for u in resp.get_json()["users"]}
    assert {"coach@home.test", "player@home.test", "coach@away.test", "admin@home.test"} <= emails


def test_create_any_role(admin_client, app, users):
    resp = admin_client.post(
        "/api/v1/users", json=new_user(role="ADMIN", teamId=users["home_team"])
    )

    assert resp.status_code == 201
    created = resp.get_json()["user"]
    assert created["role"] == "ADMIN"
    assert login(app.test_client(), "jo@home.test").status_code == 200


def test_create_duplicate_email(admin_client, users):
    resp = admin_client.post("/api/v1/users", json=new_user(email="coach@home.test"))
    assert resp.status_code == 409


def test_update_role_and_name(admin_client, users):
    resp = admin_client.put(
        f"/api/v1/users/{users['player']}",
        json={"role": "COACH", "firstName": "Patricia"},
    )

    assert resp.status_code == 200
    user = resp.get_json()["user"]
    assert user["role"] == "COACH"
    assert user["name"] == "Patricia Player"
    assert user["email"] == "player@home.test"


def test_update_email_conflict(admin_client, users):
    resp = admin_client.put(f"/api/v1/users/{users['player']}", json={"email": "coach@home.test"})
    assert resp.status_code == 409


def test_update_invalid_role(admin_client, users):
    resp = admin_client.put(f"/api/v1/users/{users['player']}", json={"role": "MASCOT"})
    assert resp.status_code == 400


def test_password_reset(admin_client, app, users):
    admin_client.put(f"/api/v1/users/{users['player']}", json={"password": "brand-new-pass"})

    assert login(app.test_client(), "player@home.test").status_code == 401
    assert login(app.test_client(), "player@home.test", "brand-new-pass").status_code == 200


def test_delete_user_and_memberships(admin_client, app, users):
    resp = admin_client.delete(f"/api/v1/users/{users['player']}")

    assert resp.status_code == 200
    assert admin_client.get(f"/api/v1/users/{users['player']}").status_code == 404
    with app.app_context():
        assert TeamMember.query.filter_by(user_id=users["player"]).count() == 0


def test_delete_self_rejected(admin_client, users):
    assert admin_client.delete(f"/api/v1/users/{users['admin']}").status_code == 400


def test_delete_author_rejected(admin_client, app, make_play, users):
    make_play(frames=1)

    resp = admin_client.delete(f"/api/v1/users/{users['coach']}")

    assert resp.status_code == 409
    with app.app_context():
        assert User.query.filter_by(email="coach@home.test").count() == 1


def test_unknown_user(admin_client, users):
    assert admin_client.get("/api/v1/users/9999").status_code == 404
    assert admin_client.put("/api/v1/users/9999", json={"role": "COACH"}).status_code == 404
    assert admin_client.delete("/api/v1/users/9999").status_code == 404


def test_admin_only(client, coach_client, player_client, users):
    assert coach_client.get("/api/v1/users").status_code == 403
    assert coach_client.post("/api/v1/users", json=new_user()).status_code == 403
    assert player_client.delete(f"/api/v1/users/{users['coach']}").status_code == 403

    coach_client.post("/api/v1/auth/logout")
    assert client.get("/api/v1/users").status_code == 401
