import pytest
from fastapi.testclient import TestClient

from lecturedeck.api.app import app
from lecturedeck.api.session_routes import get_content_provider
from lecturedeck.exceptions import ApiError
from lecturedeck.models.content import Module
from lecturedeck.sessions.registry import SessionRegistry, get_session_registry

BASE = "/api/v1/study"


class FakeProvider:
    def __init__(self, module: Module):
        self.module = module

    def fetch_module(self, module_id: str) -> Module:
        if module_id != self.module.id:
            raise ApiError("Module not found", status_code=404)
        return self.module


@pytest.fixture
def registry():
    return SessionRegistry(max_sessions=10)


@pytest.fixture
def client(module, registry):
    app.dependency_overrides[get_content_provider] = lambda: FakeProvider(module)
    app.dependency_overrides[get_session_registry] = lambda: registry
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def session_id(client):
    response = client.post(f"{BASE}/sessions", json={"module_id": "mod-1"})
    assert response.status_code == 200
    return response.json()["session_id"]


def test_create_session_lists_material_actions(client):
    response = client.post(f"{BASE}/sessions", json={"module_id": "mod-1"})
    body = response.json()

    assert body["module_title"] == "Cell Biology"
    actions = {m["material_id"]: m for m in body["materials"]}
    assert actions["mat-a"]["quiz"] is True
    assert actions["mat-c"]["quiz"] is False


def test_unknown_module_is_404(client):
    response = client.post(f"{BASE}/sessions", json={"module_id": "other"})
    assert response.status_code == 404


def test_unknown_session_is_404(client):
    assert client.get(f"{BASE}/sessions/nope/quiz").status_code == 404


def test_module_quiz_flow(client, session_id):
    quiz = client.post(f"{BASE}/sessions/{session_id}/quiz", json={}).json()["quiz"]
    assert quiz["scope"] == "module:mod-1"
    assert quiz["total_questions"] == 3
    assert quiz["state"] == "answering"
    assert quiz["question"]["question"] == "A0"
    assert "correct_answer" not in quiz["question"]

    for choice in (0, 0, 1):
        answered = client.post(f"{BASE}/sessions/{session_id}/quiz/answer", json={"option_index": choice}).json()
        assert answered["accepted"] is True
        assert answered["quiz"]["state"] == "revealed"
        client.post(f"{BASE}/sessions/{session_id}/quiz/next")

    final = client.get(f"{BASE}/sessions/{session_id}/quiz").json()["quiz"]
    assert final["state"] == "completed"
    assert final["result"]["score"] == 66.7

    notifications = client.get(f"{BASE}/sessions/{session_id}/notifications").json()["notifications"]
    assert notifications[0]["description"] == "Your score: 66.7%"


def test_rejected_quiz_actions_are_not_errors(client, session_id):
    client.post(f"{BASE}/sessions/{session_id}/quiz", json={"material_id": "mat-a"})

    previous = client.post(f"{BASE}/sessions/{session_id}/quiz/previous")
    assert previous.status_code == 200
    assert previous.json()["accepted"] is False

    client.post(f"{BASE}/sessions/{session_id}/quiz/answer", json={"option_index": 1})
    again = client.post(f"{BASE}/sessions/{session_id}/quiz/answer", json={"option_index": 0}).json()
    assert again["accepted"] is False
    assert again["quiz"]["selected_answer"] == 1
    assert again["quiz"]["feedback_message"] == "The correct answer was: x"


def test_quiz_actions_without_open_quiz_conflict(client, session_id):
    assert client.post(f"{BASE}/sessions/{session_id}/quiz/next").status_code == 409


def test_material_quiz_unknown_material_is_404(client, session_id):
    response = client.post(f"{BASE}/sessions/{session_id}/quiz", json={"material_id": "zzz"})
    assert response.status_code == 404


def test_empty_material_quiz_reports_no_questions(client, session_id):
    quiz = client.post(f"{BASE}/sessions/{session_id}/quiz", json={"material_id": "mat-c"}).json()["quiz"]
    assert quiz["state"] == "no_questions"
    assert quiz["message"] == "No questions available"


def test_flashcard_flow_with_review(client, session_id):
    deck = client.post(f"{BASE}/sessions/{session_id}/flashcards", json={"material_id": "mat-a"}).json()
    assert deck["flashcards"]["card"] == {"front": "cell", "back": None}

    early = client.post(f"{BASE}/sessions/{session_id}/flashcards/assess", json={"is_correct": True}).json()
    assert early["accepted"] is False

    for is_correct in (True, False, True):
        flipped = client.post(f"{BASE}/sessions/{session_id}/flashcards/flip").json()["flashcards"]
        assert flipped["revealed"] is True
        assert flipped["card"]["back"] is not None
        client.post(f"{BASE}/sessions/{session_id}/flashcards/assess", json={"is_correct": is_correct})

    done = client.get(f"{BASE}/sessions/{session_id}/flashcards").json()["flashcards"]
    assert done["state"] == "completed"
    assert done["summary"]["remaining_to_review"] == 1
    assert done["summary"]["review_available"] is True

    review = client.post(f"{BASE}/sessions/{session_id}/flashcards/review").json()["flashcards"]
    assert review["kind"] == "review"
    assert review["current_index"] == 1
    assert review["pass_length"] == 1

    client.post(f"{BASE}/sessions/{session_id}/flashcards/flip")
    client.post(f"{BASE}/sessions/{session_id}/flashcards/assess", json={"is_correct": True})
    finished = client.get(f"{BASE}/sessions/{session_id}/flashcards").json()["flashcards"]
    assert finished["state"] == "completed"
    assert finished["attempted"] == 1

    reset = client.post(f"{BASE}/sessions/{session_id}/flashcards/reset").json()["flashcards"]
    assert reset["kind"] == "primary"
    assert reset["current_index"] == 0


def test_summaries(client, session_id):
    module_summary = client.get(f"{BASE}/sessions/{session_id}/summary").json()
    assert module_summary["title"] == "Cell Biology - Module Summary"
    assert [s["material_id"] for s in module_summary["summaries"]] == ["mat-a"]

    assert client.get(f"{BASE}/sessions/{session_id}/materials/mat-a/summary").status_code == 200
    assert client.get(f"{BASE}/sessions/{session_id}/materials/mat-b/summary").status_code == 404


def test_close_session(client, session_id, registry):
    assert client.delete(f"{BASE}/sessions/{session_id}").json()["success"] is True
    assert len(registry) == 0
    assert client.delete(f"{BASE}/sessions/{session_id}").json()["success"] is False


def test_registry_evicts_oldest(module):
    registry = SessionRegistry(max_sessions=2)
    first = registry.create(module)
    registry.create(module)
    registry.create(module)

    assert len(registry) == 2
    with pytest.raises(KeyError):
        registry.get(first.session_id)


def test_registry_rejects_zero_capacity():
    with pytest.raises(ValueError):
        SessionRegistry(max_sessions=0)


def test_registry_keeps_newest_at_capacity_one(module):
    registry = SessionRegistry(max_sessions=1)
    registry.create(module)
    newest = registry.create(module)

    assert len(registry) == 1
    assert registry.get(newest.session_id) is newest


def test_completion_notifications_reach_the_session(client, session_id):
    client.post(f"{BASE}/sessions/{session_id}/quiz", json={"material_id": "mat-b"})
    client.post(f"{BASE}/sessions/{session_id}/quiz/answer", json={"option_index": 1})
    client.post(f"{BASE}/sessions/{session_id}/quiz/next")

    notifications = client.get(f"{BASE}/sessions/{session_id}/notifications").json()["notifications"]
    assert [n["title"] for n in notifications] == ["Quiz Completed!"]
    assert client.get(f"{BASE}/sessions/{session_id}/notifications").json()["notifications"] == []
