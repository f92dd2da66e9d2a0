"""
API tests for topic board endpoints.

Tests cover:
- Adding topics and background resolution
- Settle-all refresh with partial failure
- Favourite toggling and removal
"""

from fastapi.testclient import TestClient

from tests.conftest import drain


def _add(client: TestClient, ctx, keyword: str) -> dict:
    response = client.post("/topics", json={"keyword": keyword})
    assert response.status_code == 202, response.text
    drain(client, ctx)
    return response.json()


class TestTopicsAPI:
    def test_add_topic_resolves(self, client: TestClient, app_context):
        """
        GIVEN an empty topic board
        WHEN I add "AI" and research settles
        THEN the topic is resolved with its summary
        """
        created = _add(client, app_context, "AI")

        assert created["status"] == "pending"
        topics = client.get("/topics").json()
        assert topics[0]["status"] == "resolved"
        assert topics[0]["analysis"]["summary"] == "AI summary v1"
        assert topics[0]["is_favorite"] is False

    def test_failed_topic_is_rolled_back(self, client: TestClient, app_context, gateway):
        gateway.failing.add("Crypto")

        _add(client, app_context, "Crypto")

        assert client.get("/topics").json() == []
        assert "Crypto" in client.get("/notices").json()[0]["message"]

    def test_refresh_all_reports_failures(self, client: TestClient, app_context, gateway):
        """
        GIVEN topics AI and Robots
        WHEN Robots fails during refresh-all
        THEN AI gets a new summary and Robots keeps its old one, resolved
        """
        _add(client, app_context, "AI")
        _add(client, app_context, "Robots")
        gateway.failing.add("Robots")

        report = client.post("/topics/refresh").json()

        assert report["requested"] == 2
        assert report["failures"] == ["Robots"]
        topics = {t["keyword"]: t for t in client.get("/topics").json()}
        assert topics["AI"]["analysis"]["summary"] == "AI summary v2"
        assert topics["Robots"]["analysis"]["summary"] == "Robots summary v1"
        assert topics["Robots"]["status"] == "resolved"
        assert client.get("/notices").json()[0]["level"] == "warning"

    def test_delete_topic(self, client: TestClient, app_context):
        topic = _add(client, app_context, "AI")

        assert client.delete(f"/topics/{topic['topic_id']}").status_code == 204
        assert client.get("/topics").json() == []
        assert client.delete(f"/topics/{topic['topic_id']}").status_code == 404


class TestFavoritesAPI:
    def test_toggle_saves_then_unsaves(self, client: TestClient, app_context):
        topic = _add(client, app_context, "AI")

        saved = client.post(f"/topics/{topic['topic_id']}/favorite").json()["favorite"]

        assert saved["topic_keyword"] == "AI"
        assert saved["summary"] == "AI summary v1"
        assert client.get("/topics").json()[0]["is_favorite"] is True

        assert client.post(f"/topics/{topic['topic_id']}/favorite").json()["favorite"] is None
        assert client.get("/topics/favorites").json() == []

    def test_favorite_survives_refresh(self, client: TestClient, app_context):
        """
        GIVEN a saved reading of AI
        WHEN AI is refreshed with a new summary
        THEN the saved reading stays, but the topic no longer shows as favourite
        """
        topic = _add(client, app_context, "AI")
        client.post(f"/topics/{topic['topic_id']}/favorite")

        client.post("/topics/refresh")

        favorites = client.get("/topics/favorites").json()
        assert [f["summary"] for f in favorites] == ["AI summary v1"]
        assert client.get("/topics").json()[0]["is_favorite"] is False

    def test_remove_favorite(self, client: TestClient, app_context):
        topic = _add(client, app_context, "AI")
        favorite = client.post(f"/topics/{topic['topic_id']}/favorite").json()["favorite"]

        assert client.delete(f"/topics/favorites/{favorite['favorite_id']}").status_code == 204
        assert client.get("/topics/favorites").json() == []
        assert client.delete(f"/topics/favorites/{favorite['favorite_id']}").status_code == 404
