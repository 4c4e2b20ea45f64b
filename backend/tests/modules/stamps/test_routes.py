"""Tests for the stamp card endpoints."""

MISSING_ID = "0b6a3f4e-1c2d-4e5f-8a9b-0c1d2e3f4a5b"


def create_guest(client, nickname: str = "Ada") -> str:
    response = client.post("/api/create-guest", json={"nickname": nickname})
    assert response.status_code == 200
    return response.json()["id"]


class TestGetStamp:
    def test_returns_card_and_nickname(self, client):
        user_id = create_guest(client)

        response = client.get("/api/get-stamp", params={"id": user_id})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert len(data["stamps"]) == 11
        assert data["stamps"][0] == {"boothId": "booth1", "filled": False, "filledAt": None}
        assert data["user"]["nickname"] == "Ada"
        assert "lastActive" in data["user"]
        assert data["completed"] == 0

    def test_missing_id(self, client):
        response = client.get("/api/get-stamp")

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "INVALID_ID"

    def test_malformed_id(self, client):
        response = client.get("/api/get-stamp", params={"id": "not-a-uuid"})

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_ID"

    def test_unknown_user(self, client, repository):
        response = client.get("/api/get-stamp", params={"id": MISSING_ID})

        assert response.status_code == 404
        assert response.json()["error"] == "USER_NOT_FOUND"
        assert repository.users == {}

    def test_missing_card(self, client, repository):
        user_id = create_guest(client)
        del repository.cards[user_id]

        response = client.get("/api/get-stamp", params={"id": user_id})

        assert response.status_code == 404
        assert response.json()["error"] == "STAMP_CARD_NOT_FOUND"


class TestMarkStamp:
    def test_marks_booth(self, client):
        user_id = create_guest(client)

        response = client.post("/api/mark-stamp", params={"id": user_id, "booth": "booth5"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Stamp collected for booth5"
        filled = [slot["boothId"] for slot in data["stamps"] if slot["filled"]]
        assert filled == ["booth5"]
        assert data["stamps"][4]["filledAt"] is not None
        assert data["completed"] == 1

    def test_repeat_scan_conflicts_with_unchanged_stamps(self, client):
        user_id = create_guest(client)
        first = client.post("/api/mark-stamp", params={"id": user_id, "booth": "booth5"})

        second = client.post("/api/mark-stamp", params={"id": user_id, "booth": "booth5"})

        assert second.status_code == 409
        data = second.json()
        assert data["success"] is False
        assert data["error"] == "ALREADY_MARKED"
        assert data["stamps"] == first.json()["stamps"]

    def test_read_after_mark(self, client):
        user_id = create_guest(client)
        marked = client.post("/api/mark-stamp", params={"id": user_id, "booth": "booth3"})

        card = client.get("/api/get-stamp", params={"id": user_id})

        assert card.json()["stamps"] == marked.json()["stamps"]

    def test_unknown_booth(self, client, repository):
        user_id = create_guest(client)
        writes = repository.writes

        response = client.post("/api/mark-stamp", params={"id": user_id, "booth": "booth12"})

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_BOOTH"
        assert repository.writes == writes

    def test_malformed_booth(self, client):
        user_id = create_guest(client)

        response = client.post("/api/mark-stamp", params={"id": user_id, "booth": "booth 1!"})

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_BOOTH"

    def test_missing_booth(self, client):
        user_id = create_guest(client)

        response = client.post("/api/mark-stamp", params={"id": user_id})

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_BOOTH"

    def test_unknown_user(self, client):
        response = client.post("/api/mark-stamp", params={"id": MISSING_ID, "booth": "booth1"})

        assert response.status_code == 404
        assert response.json()["error"] == "USER_NOT_FOUND"
