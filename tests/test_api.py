import datetime as dt

from fastapi.testclient import TestClient

from vocab_scheduler.api.deps import get_learning_engine
from vocab_scheduler.services import LearningEngine, MasteryStore
from tests.conftest import FailingStore, TODAY


def test_list_vocabulary(client: TestClient) -> None:
    response = client.get("/api/v1/vocabulary/")

    assert response.status_code == 200
    payload = response.json()
    assert payload["total"] == 8
    assert payload["items"][0]["id"] == "hola"


def test_filter_and_page_vocabulary(client: TestClient) -> None:
    response = client.get("/api/v1/vocabulary/", params={"category": "Food", "limit": 2, "offset": 1})

    payload = response.json()
    assert payload["total"] == 3
    assert [item["id"] for item in payload["items"]] == ["pan", "agua"]


def test_list_categories(client: TestClient) -> None:
    response = client.get("/api/v1/vocabulary/categories")

    assert response.status_code == 200
    assert response.json() == [
        {"category": "Greetings", "total": 3},
        {"category": "Food", "total": 3},
        {"category": "Verbs", "total": 2},
    ]


def test_unknown_item_returns_404(client: TestClient) -> None:
    assert client.get("/api/v1/vocabulary/nope").status_code == 404
    response = client.post("/api/v1/progress/results", json={"item_id": "nope", "outcome": "correct"})
    assert response.status_code == 404
    assert "nope" in response.json()["detail"]


def test_submit_results(client: TestClient) -> None:
    client.post("/api/v1/progress/results", json={"item_id": "hola", "outcome": "correct"})
    response = client.post("/api/v1/progress/results", json={"item_id": "hola", "outcome": "correct"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["mastery_level"] == 1
    assert payload["consecutive_correct_streak"] == 2
    assert payload["next_due_date"] == (TODAY + dt.timedelta(days=1)).isoformat()


def test_invalid_outcome_is_rejected(client: TestClient) -> None:
    response = client.post("/api/v1/progress/results", json={"item_id": "hola", "outcome": "maybe"})

    assert response.status_code == 422
    assert response.json()["message"] == "Validation failed"


def test_submit_typed_answer(client: TestClient) -> None:
    response = client.post("/api/v1/progress/answers", json={"item_id": "adios", "answer": "Adios!"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["match"] == "correct"
    assert payload["outcome"] == "correct"
    assert payload["statistics"]["times_correct"] == 1


def test_progress_detail(client: TestClient) -> None:
    fresh = client.get("/api/v1/progress/pan").json()
    assert fresh["is_new"] is True
    assert fresh["statistics"] is None
    assert fresh["difficulty_label"] == "Learning"
    assert fresh["answer_type"] == "multiple_choice"

    client.post("/api/v1/progress/results", json={"item_id": "pan", "outcome": "wrong"})
    detail = client.get("/api/v1/progress/pan").json()
    assert detail["is_new"] is False
    assert detail["is_due"] is True
    assert detail["statistics"]["last_wrong_date"] == TODAY.isoformat()


def test_progress_detail_answer_type_follows_preference(client: TestClient) -> None:
    defaults = client.get("/api/v1/settings/").json()
    client.put("/api/v1/settings/", json={**defaults, "prefer_typed": True})
    for _ in range(3):
        client.post("/api/v1/progress/results", json={"item_id": "hablar", "outcome": "correct"})

    detail = client.get("/api/v1/progress/hablar").json()

    assert detail["statistics"]["mastery_level"] == 2
    assert detail["difficulty_label"] == "Familiar"
    assert detail["answer_type"] == "typed"


def test_toggle_hard_flag(client: TestClient) -> None:
    first = client.post("/api/v1/progress/comer/hard-flag")
    second = client.post("/api/v1/progress/comer/hard-flag")

    assert first.json() == {"item_id": "comer", "hard_flag": True}
    assert second.json() == {"item_id": "comer", "hard_flag": False}


def test_daily_queue(client: TestClient) -> None:
    client.post("/api/v1/progress/results", json={"item_id": "agua", "outcome": "wrong"})

    response = client.get("/api/v1/queue/", params={"daily_goal": 4})

    assert response.status_code == 200
    payload = response.json()
    assert [item["id"] for item in payload["due"]] == ["agua"]
    assert len(payload["new"]) == 3
    assert payload["total"] == 4
    assert payload["estimated_minutes"] == 2


def test_daily_goal_must_be_positive(client: TestClient) -> None:
    assert client.get("/api/v1/queue/", params={"daily_goal": 0}).status_code == 422


def test_session_queue(client: TestClient) -> None:
    response = client.get("/api/v1/queue/session", params={"daily_goal": 5})

    assert response.status_code == 200
    assert len(response.json()) == 5


def test_summary_and_reset(client: TestClient) -> None:
    for _ in range(2):
        client.post("/api/v1/progress/results", json={"item_id": "hola", "outcome": "correct"})

    summary = client.get("/api/v1/progress/summary").json()
    assert summary["learned"] == 1
    assert summary["accuracy"] == 100
    assert summary["by_category"]["Greetings"] == {"total": 3, "learned": 1}

    assert client.delete("/api/v1/progress/").status_code == 204
    summary = client.get("/api/v1/progress/summary").json()
    assert summary["learned"] == 0
    assert summary["new"] == 8


def test_reset_single_item(client: TestClient) -> None:
    client.post("/api/v1/progress/results", json={"item_id": "pan", "outcome": "correct"})

    assert client.delete("/api/v1/progress/pan").status_code == 204
    assert client.get("/api/v1/progress/pan").json()["is_new"] is True
    assert client.delete("/api/v1/progress/nope").status_code == 404


def test_settings_round_trip(client: TestClient) -> None:
    defaults = client.get("/api/v1/settings/").json()
    assert defaults["daily_goal"] == 15

    updated = client.put("/api/v1/settings/", json={**defaults, "daily_goal": 4, "prefer_typed": True})
    assert updated.status_code == 200
    assert client.get("/api/v1/settings/").json()["daily_goal"] == 4
    assert client.get("/api/v1/queue/").json()["total"] == 4


def test_record_sessions(client: TestClient) -> None:
    response = client.post("/api/v1/sessions/", json={"words_studied": 10, "correct_answers": 8})

    assert response.status_code == 201
    assert response.json()["date"] == TODAY.isoformat()
    history = client.get("/api/v1/sessions/").json()
    assert len(history) == 1
    assert client.get("/api/v1/progress/summary").json()["streak"] == 1


def test_game_scores(client: TestClient) -> None:
    for score in (12, 30):
        response = client.post(
            "/api/v1/games/scores",
            json={"game": "sprint", "score": score, "date": TODAY.isoformat()},
        )
        assert response.status_code == 201

    assert client.get("/api/v1/games/sprint/best").json() == {"game": "sprint", "best_score": 30}
    scores = client.get("/api/v1/games/scores").json()
    assert [entry["score"] for entry in scores["sprint"]] == [30, 12]
    assert scores["listening"] == []


def test_storage_failure_returns_503(client: TestClient) -> None:
    broken = LearningEngine(MasteryStore(FailingStore()), clock=lambda: TODAY)
    client.app.dependency_overrides[get_learning_engine] = lambda: broken

    response = client.post("/api/v1/progress/results", json={"item_id": "hola", "outcome": "correct"})

    assert response.status_code == 503
