# tests/test_api.py
"""
HTTP surface tests. The LLM gateway and feedback database are swapped out
through FastAPI dependency overrides.
"""
import pytest
from fastapi.testclient import TestClient

from backend.app.core import settings
from backend.app.core.orchestrator import SessionRegistry
from backend.app.database.session import make_engine
from backend.app.main import app
from backend.app.routers.feedback_router import get_feedback_service
from backend.app.routers.session_router import get_registry
from backend.app.services.feedback_service import FeedbackService
from tests.fakes import FakeGateway


@pytest.fixture
def registry():
    return SessionRegistry(FakeGateway(), timeout=1.0)


@pytest.fixture
def client(registry, tmp_path):
    service = FeedbackService(make_engine(f"sqlite:///{tmp_path / 'api.db'}"))
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_feedback_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def thread_id(client):
    return client.post("/api/session/start", json={}).json()["thread_id"]


def titles(body):
    return [n["title"] for n in body["notices"]]


class TestSessionEndpoints:

    def test_start_returns_default_exercise(self, client):
        resp = client.post("/api/session/start", json={"mode": "challenge"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["thread_id"]
        assert body["state"]["mode"] == "challenge"
        assert body["state"]["exercise"]["code_snippet"] == ""
        assert body["state"]["loading"] == {
            "plan": False, "exercise": False, "improve": False, "submit": False, "explanation": False,
        }
        assert "pending" not in body["state"]
        assert body["notices"] == []

    def test_start_without_body(self, client):
        resp = client.post("/api/session/start")
        assert resp.status_code == 200
        assert resp.json()["state"]["mode"] == "hand-holding"

    def test_unknown_session_is_404(self, client):
        assert client.get("/api/session/nope").status_code == 404
        assert client.post("/api/session/nope/next").status_code == 404
        assert client.delete("/api/session/nope").status_code == 404

    def test_plan_and_navigation(self, client, thread_id):
        body = client.post(f"/api/session/{thread_id}/plan", json={"content": "notes", "documentation_url": ""}).json()
        assert body["state"]["plan"]["title"] == "Intro"
        assert [s["topic"] for s in body["state"]["plan"]["learning_steps"]] == ["Vars", "Loops"]
        assert body["state"]["step_index"] == 0

        body = client.post(f"/api/session/{thread_id}/next").json()
        assert body["state"]["step_index"] == 1

        body = client.post(f"/api/session/{thread_id}/next").json()
        assert body["state"]["step_index"] == 1
        assert titles(body) == ["End of Plan"]

        body = client.post(f"/api/session/{thread_id}/step/close").json()
        assert body["state"]["step_index"] is None
        assert body["state"]["exercise"] is None

    def test_empty_plan_request_is_a_notice(self, client, thread_id):
        body = client.post(f"/api/session/{thread_id}/plan", json={"content": "  "}).json()
        assert body["state"]["plan"] is None
        assert titles(body) == ["Empty Content"]

    def test_out_of_range_step_is_a_notice(self, client, thread_id):
        body = client.post(f"/api/session/{thread_id}/step", json={"index": 5}).json()
        assert titles(body) == ["Invalid Plan Step"]

    @pytest.mark.parametrize("path, payload", [
        ("plan", {"content": "x", "documentation_url": "not a url"}),
        ("mode", {"mode": "expert"}),
        ("expand", {"panel": "sidebar"}),
        ("step", {"index": "first"}),
        ("submit", {}),
    ])
    def test_malformed_bodies_are_422(self, client, thread_id, path, payload):
        assert client.post(f"/api/session/{thread_id}/{path}", json=payload).status_code == 422

    def test_code_actions(self, client, thread_id):
        body = client.post(f"/api/session/{thread_id}/code", json={"code": "x = 1"}).json()
        assert body["state"]["code"] == "x = 1"

        body = client.post(f"/api/session/{thread_id}/run", json={"code": "x = 2"}).json()
        assert body["state"]["code"] == "x = 2"
        assert titles(body) == ['Code "Run" Requested']

        body = client.post(f"/api/session/{thread_id}/improve", json={"code": "x = 2"}).json()
        assert body["state"]["feedback"]["suggestions"] == "Use descriptive names."

        body = client.post(f"/api/session/{thread_id}/submit", json={"code": "x = 2"}).json()
        assert body["state"]["feedback"]["is_correct"] is False

        body = client.post(f"/api/session/{thread_id}/explain").json()
        assert body["state"]["explanation"]["breakdown"] == "Line by line"

    def test_mode_and_expand(self, client, thread_id):
        body = client.post(f"/api/session/{thread_id}/mode", json={"mode": "challenge"}).json()
        assert body["state"]["mode"] == "challenge"
        assert body["state"]["code"].startswith("# Start coding for:")

        body = client.post(f"/api/session/{thread_id}/expand", json={"panel": "exercise"}).json()
        assert body["state"]["expanded_panel"] == "exercise"

    def test_notices_are_drained(self, client, thread_id):
        client.post(f"/api/session/{thread_id}/prev")
        body = client.get(f"/api/session/{thread_id}").json()
        assert body["notices"] == []

    def test_delete_and_health(self, client, thread_id):
        assert client.get("/api/health").json()["active_sessions"] == 1

        assert client.delete(f"/api/session/{thread_id}").status_code == 200
        assert client.get(f"/api/session/{thread_id}").status_code == 404
        assert client.get("/api/health").json() == {"status": "healthy", "active_sessions": 0}


class TestWithoutApiKey:

    @pytest.fixture
    def keyless_client(self, monkeypatch):
        monkeypatch.setattr(settings, "LLM_API_KEY", None)
        get_registry.cache_clear()
        with TestClient(app) as test_client:
            yield test_client
        get_registry.cache_clear()

    def test_health_does_not_need_a_key(self, keyless_client):
        resp = keyless_client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"

    def test_start_reports_missing_key_as_notice(self, keyless_client):
        resp = keyless_client.post("/api/session/start", json={})

        assert resp.status_code == 200
        assert resp.json()["state"]["exercise"] is None
        assert titles(resp.json()) == ["Error Generating Exercise"]


class TestFeedbackEndpoints:

    def test_store_and_list(self, client):
        resp = client.post("/api/feedback", json={"plan_id": "Intro", "step_id": 1, "rating": "thumbs_up"})
        assert resp.status_code == 201
        assert resp.json()["user_id"] == "anonymous"

        client.post("/api/feedback", json={"plan_id": "Intro", "rating": "thumbs_down", "comment": "hard"})

        rows = client.get("/api/feedback/Intro").json()
        assert [r["rating"] for r in rows] == ["thumbs_down", "thumbs_up"]
        assert rows[0]["comment"] == "hard"

    def test_unknown_rating_is_422(self, client):
        resp = client.post("/api/feedback", json={"plan_id": "Intro", "rating": "meh"})
        assert resp.status_code == 422

    def test_plan_title_with_slash(self, client):
        client.post("/api/feedback", json={"plan_id": "File I/O in Python", "rating": "thumbs_up"})
        client.post("/api/feedback", json={"plan_id": "File I", "rating": "thumbs_down"})

        resp = client.get("/api/feedback/File%20I%2FO%20in%20Python")
        assert resp.status_code == 200
        assert [(r["plan_id"], r["rating"]) for r in resp.json()] == [("File I/O in Python", "thumbs_up")]

        resp = client.get("/api/feedback/File I/O in Python")
        assert resp.status_code == 200
        assert len(resp.json()) == 1
