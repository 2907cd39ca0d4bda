"""Play store through the JSON API"""

from conftest import frame_payload, login


def create(client, **body):
    return client.post("/api/v1/plays", json=body)


class TestCreateAndFetch:
    def test_round_trip_keeps_frame_content(self, coach_client, users):
        frame = frame_payload("0", duration=1.5)
        resp = create(
            coach_client,
            name="  Box Out  ",
            description="Rebound set",
            category="DEFENSIVE",
            tags=["Rebound", "rebound", " zone "],
            initialFrame=frame,
        )

        assert resp.status_code == 201
        created = resp.get_json()["play"]
        fetched = coach_client.get(f"/api/v1/plays/{created['id']}").get_json()["play"]

        assert fetched["name"] == "Box Out"
        assert fetched["category"] == "DEFENSIVE"
        assert fetched["tags"] == ["rebound", "zone"]
        assert fetched["isPublished"] is False
        assert fetched["authorId"] == users["coach"]
        assert fetched["authorName"] == "Casey Coach"
        assert fetched["teamId"] == users["home_team"]
        assert fetched["version"] == 1
        assert fetched["frameCount"] == 1
        stored = fetched["frames"][0]
        assert stored["frameNumber"] == 0
        assert stored["duration"] == 1.5
        assert stored["positions"] == frame["positions"]
        assert stored["lines"] == frame["lines"]
        assert stored["annotations"] == frame["annotations"]
        assert stored["ballPosition"] == frame["ballPosition"]

    def test_default_first_frame_is_empty(self, coach_client):
        play = create(coach_client, name="Blank").get_json()["play"]

        assert play["category"] == "OFFENSIVE"
        assert len(play["frames"]) == 1
        frame = play["frames"][0]
        assert frame["positions"] == [] and frame["lines"] == [] and frame["annotations"] == []
        assert frame["ballPosition"] is None

    def test_first_frame_from_template(self, coach_client):
        template = coach_client.get("/api/v1/templates?category=DEFENSIVE").get_json()["templates"][0]

        play = create(coach_client, name="From template", templateId=template["id"]).get_json()["play"]

        assert play["frames"][0]["positions"] == template["positions"]
        assert play["frames"][0]["ballPosition"] == template.get("ballPosition")

    def test_unknown_template(self, coach_client):
        resp = create(coach_client, name="X", templateId="no-such-formation")
        assert resp.status_code == 404

    def test_name_required(self, coach_client):
        resp = create(coach_client, name="   ")
        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Play name is required"

    def test_invalid_category(self, coach_client):
        assert create(coach_client, name="X", category="TRICK").status_code == 400

    def test_non_object_body(self, coach_client):
        resp = coach_client.post("/api/v1/plays", json=["not", "an", "object"])
        assert resp.status_code == 400

    def test_invalid_initial_frame(self, coach_client):
        resp = create(coach_client, name="X", initialFrame={"positions": "everywhere"})
        assert resp.status_code == 400

    def test_into_playbook(self, coach_client):
        playbook = coach_client.post("/api/v1/playbooks", json={"name": "Corners"}).get_json()["playbook"]

        play = create(coach_client, name="Near post", playbookId=playbook["id"]).get_json()["play"]

        assert play["playbookId"] == playbook["id"]
        assert play["playbookName"] == "Corners"

    def test_missing_play(self, coach_client, users):
        assert coach_client.get("/api/v1/plays/777").status_code == 404


class TestListFilters:
    def test_filters(self, coach_client, make_play):
        make_play(name="Overlap Left", frames=1, category="OFFENSIVE", tags=["wing"])
        make_play(name="Low Block", frames=1, category="DEFENSIVE", tags=["compact"])
        make_play(name="Overlap Right", frames=1, category="OFFENSIVE", tags=["wing", "fast"])

        def names(query=""):
            resp = coach_client.get(f"/api/v1/plays{query}")
            assert resp.status_code == 200
            return sorted(p["name"] for p in resp.get_json()["plays"])

        assert names() == ["Low Block", "Overlap Left", "Overlap Right"]
        assert names("?category=DEFENSIVE") == ["Low Block"]
        assert names("?tag=wing") == ["Overlap Left", "Overlap Right"]
        assert names("?tag=FAST") == ["Overlap Right"]
        assert names("?search=overlap") == ["Overlap Left", "Overlap Right"]
        assert names("?search=compact") == ["Low Block"]

    def test_playbook_filter(self, coach_client, make_play):
        playbook = coach_client.post("/api/v1/playbooks", json={"name": "Set pieces"}).get_json()["playbook"]
        make_play(name="Inside", frames=1, playbookId=playbook["id"])
        make_play(name="Outside", frames=1)

        plays = coach_client.get(f"/api/v1/plays?playbookId={playbook['id']}").get_json()["plays"]

        assert [p["name"] for p in plays] == ["Inside"]

    def test_bad_filter_values(self, coach_client, users):
        assert coach_client.get("/api/v1/plays?category=nope").status_code == 400
        assert coach_client.get("/api/v1/plays?playbookId=abc").status_code == 400

    def test_other_team_plays_not_listed(self, make_play, outsider_client):
        make_play(frames=1)
        assert outsider_client.get("/api/v1/plays").get_json()["plays"] == []


class TestUpdate:
    def test_metadata_partial_update(self, coach_client, make_play):
        play = make_play(frames=1, description="Keep me")

        resp = coach_client.put(
            f"/api/v1/plays/{play['id']}",
            json={"name": "Renamed", "isPublished": True, "tags": ["New"]},
        )

        assert resp.status_code == 200
        updated = resp.get_json()["play"]
        assert updated["name"] == "Renamed"
        assert updated["isPublished"] is True
        assert updated["tags"] == ["new"]
        assert updated["description"] == "Keep me"
        assert updated["frames"] == play["frames"]
        assert updated["version"] == play["version"] + 1

    def test_frames_upsert_keeps_ids_and_prunes(self, coach_client, make_play):
        play = make_play(frames=3)
        f0, f1, f2 = [f["id"] for f in play["frames"]]

        resp = coach_client.put(
            f"/api/v1/plays/{play['id']}",
            json={"frames": [
                {"id": f2, "duration": 4},
                frame_payload("new"),
                {"id": f0},
            ]},
        )

        assert resp.status_code == 200
        frames = resp.get_json()["play"]["frames"]
        assert [f["frameNumber"] for f in frames] == [0, 1, 2]
        assert frames[0]["id"] == f2 and frames[0]["duration"] == 4.0
        assert frames[0]["annotations"] == frame_payload("2")["annotations"]
        assert frames[1]["id"] not in (f0, f1, f2)
        assert frames[1]["annotations"] == frame_payload("new")["annotations"]
        assert frames[2]["id"] == f0
        assert f1 not in [f["id"] for f in frames]

    def test_frames_from_other_play_become_new_frames(self, coach_client, make_play):
        play = make_play(name="A", frames=1)
        other = make_play(name="B", frames=1)
        foreign_id = other["frames"][0]["id"]

        resp = coach_client.put(f"/api/v1/plays/{play['id']}", json={"frames": [{"id": foreign_id}]})

        frames = resp.get_json()["play"]["frames"]
        assert len(frames) == 1 and frames[0]["id"] != foreign_id
        untouched = coach_client.get(f"/api/v1/plays/{other['id']}").get_json()["play"]
        assert untouched["frames"] == other["frames"]

    def test_detach_from_playbook(self, coach_client, make_play):
        playbook = coach_client.post("/api/v1/playbooks", json={"name": "PB"}).get_json()["playbook"]
        play = make_play(frames=1, playbookId=playbook["id"])

        updated = coach_client.put(f"/api/v1/plays/{play['id']}", json={"playbookId": None}).get_json()["play"]

        assert updated["playbookId"] is None

    def test_invalid_update_writes_nothing(self, coach_client, make_play):
        play = make_play(frames=2)

        resp = coach_client.put(
            f"/api/v1/plays/{play['id']}",
            json={"name": "Changed", "frames": [{"duration": 0}]},
        )

        assert resp.status_code == 400
        fetched = coach_client.get(f"/api/v1/plays/{play['id']}").get_json()["play"]
        assert fetched["name"] == play["name"]
        assert fetched["frames"] == play["frames"]


class TestDelete:
    def test_delete_removes_frames(self, app, coach_client, make_play):
        play = make_play(frames=3)

        resp = coach_client.delete(f"/api/v1/plays/{play['id']}")

        assert resp.status_code == 200
        assert coach_client.get(f"/api/v1/plays/{play['id']}").status_code == 404
        from core.models import Frame

        with app.app_context():
            assert Frame.query.filter_by(play_id=play["id"]).count() == 0


class TestAccess:
    def test_requires_session(self, client, users):
        assert client.get("/api/v1/plays").status_code == 401
        assert create(client, name="X").status_code == 401

    def test_player_can_read_not_write(self, make_play, player_client):
        play = make_play(frames=1)

        assert player_client.get(f"/api/v1/plays/{play['id']}").status_code == 200
        assert create(player_client, name="Mine").status_code == 403
        assert player_client.delete(f"/api/v1/plays/{play['id']}").status_code == 403
        assert player_client.post(f"/api/v1/plays/{play['id']}/frames", json={}).status_code == 403

    def test_other_team_sees_not_found(self, make_play, outsider_client):
        play = make_play(frames=2)
        frame_id = play["frames"][0]["id"]

        assert outsider_client.get(f"/api/v1/plays/{play['id']}").status_code == 404
        assert outsider_client.put(f"/api/v1/plays/{play['id']}", json={"name": "Mine"}).status_code == 404
        assert outsider_client.delete(f"/api/v1/plays/{play['id']}/frames/{frame_id}").status_code == 404
        assert outsider_client.post(f"/api/v1/plays/{play['id']}/duplicate", json={}).status_code == 404

    def test_logged_out_client_loses_access(self, client, users):
        login(client, "coach@home.test")
        assert client.post("/api/v1/auth/logout").status_code == 200
        assert client.get("/api/v1/plays").status_code == 401

    def test_unexpected_error_is_500(self, coach_client, monkeypatch):
        from core import services

        def boom(*args, **kwargs):
            raise RuntimeError("database exploded")

        monkeypatch.setattr(services, "list_plays", boom)

        resp = coach_client.get("/api/v1/plays")

        assert resp.status_code == 500
        assert resp.get_json()["message"] == "Internal server error"

    def test_html_play_page_is_team_scoped(self, coach_client, make_play, outsider_client):
        play = make_play(frames=2)

        page = coach_client.get(f"/plays/{play['id']}")

        assert page.status_code == 200
        assert b"Triangle Offense" in page.data
        assert outsider_client.get(f"/plays/{play['id']}").status_code == 404
