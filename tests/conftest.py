"""Fixtures: an app on in-memory SQLite with two teams and their users."""

import pytest

from core.models import Team, TeamMember, User, db
from web import create_app

PASSWORD = "password123"


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def users(app):
    """
    Home team with a coach, a player and an admin, plus an away team coach.
    Returns ids so tests never hold instances across app contexts.
    """
    with app.app_context():
        home = Team(name="Home")
        away = Team(name="Away")
        people = {
            "coach": User(email="coach@home.test", first_name="Casey", last_name="Coach", role="COACH"),
            "player": User(email="player@home.test", first_name="Pat", last_name="Player", role="PLAYER"),
            "outsider": User(email="coach@away.test", first_name="Alex", last_name="Away", role="COACH"),
            "admin": User(email="admin@home.test", first_name="Ada", last_name="Admin", role="ADMIN"),
        }
        for user in people.values():
            user.set_password(PASSWORD)
        db.session.add_all([home, away, *people.values()])
        db.session.add_all([
            TeamMember(user=people["coach"], team=home),
            TeamMember(user=people["player"], team=home),
            TeamMember(user=people["outsider"], team=away),
            TeamMember(user=people["admin"], team=home),
        ])
        db.session.commit()
        ids = {key: user.id for key, user in people.items()}
        ids["home_team"] = home.id
        ids["away_team"] = away.id
        return ids


def login(client, email, password=PASSWORD):
    return client.post("/api/v1/auth/login", json={"email": email, "password": password})


@pytest.fixture
def coach_client(client, users):
    assert login(client, "coach@home.test").status_code == 200
    return client


@pytest.fixture
def player_client(app, users):
    client = app.test_client()
    assert login(client, "player@home.test").status_code == 200
    return client


@pytest.fixture
def admin_client(app, users):
    client = app.test_client()
    assert login(client, "admin@home.test").status_code == 200
    return client


@pytest.fixture
def outsider_client(app, users):
    client = app.test_client()
    assert login(client, "coach@away.test").status_code == 200
    return client


def frame_payload(label, **extra):
    """Frame content whose arrays identify it by ``label``"""
    payload = {
        "positions": [{"id": f"p-{label}", "x": 10, "y": 20, "jerseyNumber": 1}],
        "lines": [{"from": f"p-{label}", "to": "goal", "style": "dashed"}],
        "annotations": [{"text": f"frame {label}"}],
        "ballPosition": {"x": 5, "y": 6},
    }
    payload.update(extra)
    return payload


@pytest.fixture
def make_play(coach_client):
    """Create a play with ``frames`` frames through the API; returns its JSON"""

    def _make(name="Triangle Offense", frames=3, **fields):
        body = {"name": name, "initialFrame": frame_payload("0"), **fields}
        resp = coach_client.post("/api/v1/plays", json=body)
        assert resp.status_code == 201, resp.get_json()
        play = resp.get_json()["play"]
        for i in range(1, frames):
            resp = coach_client.post(f"/api/v1/plays/{play['id']}/frames", json=frame_payload(str(i)))
            assert resp.status_code == 201, resp.get_json()
        return coach_client.get(f"/api/v1/plays/{play['id']}").get_json()["play"]

    return _make
