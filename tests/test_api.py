"""
Tests for the HTTP round flow
"""
import pytest
from fastapi.testclient import TestClient

from feedrank import state
from feedrank.core.rounds import reset_all_sessions
from feedrank.core.scoring import rank_items, wilson_order
from feedrank.main import app
from feedrank.models import GameConfig, VoteRecord


@pytest.fixture
def client():
    with TestClient(app) as c:
        state.apply_config(GameConfig(seed=1234))
        reset_all_sessions()
        yield c
    reset_all_sessions()


def _new_session(client) -> str:
    response = client.post("/sessions")
    assert response.status_code == 200
    return response.json()["session_id"]


def _correct_order(items) -> list:
    records = [VoteRecord(id=i["id"], upvotes=i["upvotes"], downvotes=i["downvotes"]) for i in items]
    return [item.id for item in wilson_order(rank_items(records))]


def test_health(client):
    """Health check"""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_round_hides_answers(client):
    """Started round shows votes only"""
    sid = _new_session(client)
    body = client.post(f"/sessions/{sid}/rounds").json()
    assert body["round"] == 1
    assert body["difficulty"] == "beginner"
    assert len(body["items"]) == 3
    for item in body["items"]:
        assert "actual_rank" not in item
        assert "wilson_score" not in item
    assert body["hint"]


def test_perfect_submission(client):
    """Wilson order → perfect score, streak 1"""
    sid = _new_session(client)
    items = client.post(f"/sessions/{sid}/rounds").json()["items"]

    response = client.post(f"/sessions/{sid}/submit", json={"order": _correct_order(items)})
    assert response.status_code == 200
    body = response.json()
    assert body["success"]
    assert body["score"]["exact_matches"] == 3
    assert body["score"]["total_score"] == body["score"]["max_score"] == 9
    assert body["session"]["streak"] == 1
    assert body["session"]["rounds_played"] == 1
    assert body["key_insight"]
    assert body["issues"] == []
    assert [i["id"] for i in body["correct_order"]] == _correct_order(items)
    assert "interval" in body["correct_order"][0]


def test_streak_builds_and_resets(client):
    """Three perfect rounds → on fire; a wrong round → streak 0"""
    sid = _new_session(client)
    for _ in range(3):
        items = client.post(f"/sessions/{sid}/rounds").json()["items"]
        client.post(f"/sessions/{sid}/submit", json={"order": _correct_order(items)})

    stats = client.get(f"/sessions/{sid}").json()["session"]
    assert stats["streak"] == 3
    assert stats["consecutive_correct"] == 3
    assert stats["on_fire"]

    items = client.post(f"/sessions/{sid}/rounds").json()["items"]
    wrong = list(reversed(_correct_order(items)))
    body = client.post(f"/sessions/{sid}/submit", json={"order": wrong}).json()
    assert not body["score"]["is_perfect"]
    assert body["session"]["streak"] == 0
    assert body["show_explanation"]


def test_incomplete_submission_rejected(client):
    """Missing id → 400, round stays open"""
    sid = _new_session(client)
    items = client.post(f"/sessions/{sid}/rounds").json()["items"]
    ids = [i["id"] for i in items]

    response = client.post(f"/sessions/{sid}/submit", json={"order": ids[:2]})
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["error"] == "incomplete_submission"
    assert detail["missing"] == [ids[2]]

    # Still scorable after the rejection
    response = client.post(f"/sessions/{sid}/submit", json={"order": ids})
    assert response.status_code == 200


def test_duplicate_submission_rejected(client):
    """Duplicate id → 400"""
    sid = _new_session(client)
    items = client.post(f"/sessions/{sid}/rounds").json()["items"]
    first = items[0]["id"]
    response = client.post(f"/sessions/{sid}/submit", json={"order": [first, first, items[1]["id"]]})
    assert response.status_code == 400
    assert response.json()["detail"]["duplicates"] == [first]


def test_malformed_body(client):
    """No order field → 400"""
    sid = _new_session(client)
    client.post(f"/sessions/{sid}/rounds")
    response = client.post(f"/sessions/{sid}/submit", json={"ranking": [1, 2, 3]})
    assert response.status_code == 400


def test_submit_without_round(client):
    """No active round → 409"""
    sid = _new_session(client)
    response = client.post(f"/sessions/{sid}/submit", json={"order": [1, 2, 3]})
    assert response.status_code == 409


def test_double_submit(client):
    """Scored round cannot be scored again"""
    sid = _new_session(client)
    items = client.post(f"/sessions/{sid}/rounds").json()["items"]
    order = [i["id"] for i in items]
    assert client.post(f"/sessions/{sid}/submit", json={"order": order}).status_code == 200
    assert client.post(f"/sessions/{sid}/submit", json={"order": order}).status_code == 409


def test_unknown_session(client):
    """Unknown session id → 404"""
    assert client.get("/sessions/nope").status_code == 404
    assert client.post("/sessions/nope/rounds").status_code == 404
    assert client.post("/sessions/nope/submit", json={"order": [1]}).status_code == 404


def test_reset(client):
    """Reset → fresh counters, no round in progress"""
    sid = _new_session(client)
    items = client.post(f"/sessions/{sid}/rounds").json()["items"]
    client.post(f"/sessions/{sid}/submit", json={"order": _correct_order(items)})

    body = client.post(f"/sessions/{sid}/reset").json()
    assert body["session"]["rounds_played"] == 0
    assert body["session"]["concepts_learned"] == []

    status = client.get(f"/sessions/{sid}").json()
    assert not status["round_in_progress"]


def test_no_bulk_reset_route(client):
    """Clients cannot drop other players' sessions"""
    sid = _new_session(client)
    response = client.post("/sessions/reset-all")
    assert response.status_code in (404, 405)
    assert client.get(f"/sessions/{sid}").status_code == 200


def test_config(client):
    """Active config exposed"""
    body = client.get("/config").json()
    assert body["confidence"] == 0.95
    assert body["scoring"]["full_credit"] == 3
    assert 0.9 in body["supported_confidence_levels"]


def test_examples_listing(client):
    """Catalog filtered by difficulty"""
    body = client.get("/examples", params={"difficulty": "advanced"}).json()
    assert body["total"] >= 2
    assert all(ex["difficulty"] == "advanced" for ex in body["examples"])


def test_example_detail(client):
    """Canonical example: Wilson puts post 2 first"""
    body = client.get("/examples/6").json()
    assert body["wilson_order"] == [2, 3, 1]
    assert body["naive_order"] == [1, 2, 3]
    assert client.get("/examples/999").status_code == 404
