"""Tests for the JSON API under /api."""

from conftest import EXECUTIVE, MIXED


def new_record(**overrides):
    body = {
        "quizId": 1,
        "submittedGroups": [
            {"words": EXECUTIVE, "isCorrect": True, "explanation": "Executive Branch"},
            {"words": MIXED, "isCorrect": False},
        ],
        "score": 50,
        "completed": False,
    }
    body.update(overrides)
    return body


class TestWordSets:
    def test_list(self, client):
        res = client.get("/api/word-sets")
        assert res.status_code == 200
        data = res.json()
        assert [q["id"] for q in data] == [1, 2, 3]
        first = data[0]
        assert first["name"] == "Branches of Government"
        assert first["difficulty"] == "easy"
        assert first["wordGroups"][0]["words"] == EXECUTIVE
        assert "President" in first["definitions"]

    def test_get(self, client):
        res = client.get("/api/word-sets/2")
        assert res.status_code == 200
        assert res.json()["name"] == "Bill of Rights"

    def test_get_missing(self, client):
        res = client.get("/api/word-sets/42")
        assert res.status_code == 404
        assert res.json() == {"message": "Word set not found"}

    def test_get_non_numeric_id(self, client):
        res = client.get("/api/word-sets/abc")
        assert res.status_code == 404
        assert res.json() == {"message": "Word set not found"}


class TestGameStates:
    def test_create(self, client):
        res = client.post("/api/game-states", json=new_record())
        assert res.status_code == 200
        data = res.json()
        assert data["id"] == 1
        assert data["quizId"] == 1
        assert data["submittedGroups"][1]["isCorrect"] is False
        assert data["submittedGroups"][1]["explanation"] is None

    def test_create_is_not_idempotent(self, client):
        first = client.post("/api/game-states", json=new_record()).json()
        second = client.post("/api/game-states", json=new_record()).json()
        assert second["id"] == first["id"] + 1

    def test_create_missing_field(self, client):
        body = new_record()
        del body["score"]
        res = client.post("/api/game-states", json=body)
        assert res.status_code == 400
        assert "message" in res.json()

    def test_create_mistyped_fields(self, client):
        assert client.post("/api/game-states", json=new_record(score="50")).status_code == 400
        assert client.post("/api/game-states", json=new_record(completed="yes")).status_code == 400

    def test_create_score_out_of_range(self, client):
        assert client.post("/api/game-states", json=new_record(score=101)).status_code == 400

    def test_create_group_of_three(self, client):
        body = new_record(submittedGroups=[{"words": EXECUTIVE[:3], "isCorrect": False}])
        assert client.post("/api/game-states", json=body).status_code == 400

    def test_get(self, client):
        created = client.post("/api/game-states", json=new_record()).json()
        res = client.get(f"/api/game-states/{created['id']}")
        assert res.status_code == 200
        assert res.json() == created

    def test_get_missing(self, client):
        res = client.get("/api/game-states/9")
        assert res.status_code == 404
        assert res.json() == {"message": "Game state not found"}

    def test_patch_merges(self, client):
        created = client.post("/api/game-states", json=new_record()).json()
        res = client.patch(f"/api/game-states/{created['id']}", json={"completed": True})
        assert res.status_code == 200
        data = res.json()
        assert data["completed"] is True
        assert data["score"] == 50
        assert data["submittedGroups"] == created["submittedGroups"]

    def test_patch_ignores_id(self, client):
        created = client.post("/api/game-states", json=new_record()).json()
        res = client.patch(f"/api/game-states/{created['id']}", json={"id": 77, "score": 10})
        assert res.json()["id"] == created["id"]
        assert res.json()["score"] == 10

    def test_patch_missing_never_creates(self, client, storage):
        res = client.patch("/api/game-states/3", json={"completed": True})
        assert res.status_code == 404
        assert res.json() == {"message": "Game state not found"}
        assert storage.list_game_records() == []

    def test_patch_missing_without_body(self, client):
        res = client.patch("/api/game-states/999")
        assert res.status_code == 404
        assert res.json() == {"message": "Game state not found"}

    def test_patch_missing_with_invalid_body(self, client, storage):
        res = client.patch("/api/game-states/999", json={"score": 150})
        assert res.status_code == 404
        assert storage.list_game_records() == []

    def test_patch_non_numeric_id(self, client):
        assert client.patch("/api/game-states/abc", json={"score": 1}).status_code == 404
        assert client.get("/api/game-states/abc").status_code == 404

    def test_patch_existing_with_empty_body(self, client):
        created = client.post("/api/game-states", json=new_record()).json()
        res = client.patch(f"/api/game-states/{created['id']}", json={})
        assert res.status_code == 200
        assert res.json() == created

    def test_patch_existing_with_invalid_body(self, client):
        created = client.post("/api/game-states", json=new_record()).json()
        res = client.patch(f"/api/game-states/{created['id']}", json={"score": 150})
        assert res.status_code == 400
        assert res.json()["message"] == "Invalid game state data"

    def test_patch_null_for_required_field(self, client):
        created = client.post("/api/game-states", json=new_record()).json()
        res = client.patch(f"/api/game-states/{created['id']}", json={"score": None})
        assert res.status_code == 400


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}
