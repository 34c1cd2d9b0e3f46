from fastapi.testclient import TestClient

from agents.types import ExecutionResult
from api_server import create_app


def _client(services) -> TestClient:
    return TestClient(create_app(services))


def _interview(client) -> str:
    resp = client.post(
        "/api/interviews",
        json={"interviewer_id": "lisa", "questions": ["Two Sum"], "duration_minutes": 30},
    )
    assert resp.status_code == 200
    return resp.json()["session_id"]


def test_full_session_produces_report(services, fakes):
    client = _client(services)
    interview_id = _interview(client)

    assert client.post(
        "/api/coding/voice-turn",
        json={"interview_id": interview_id, "user_id": "cand", "text": "I will use a dictionary."},
    ).status_code == 200

    run = client.post(
        "/api/coding/execute",
        json={"code": "print(1)", "language": "python", "interview_id": interview_id, "user_id": "cand"},
    )
    assert run.status_code == 200
    body = run.json()
    assert body["status"] == "Accepted"
    assert body["output"] == "1\n"
    assert body["follow_up"] == "Nice work. What is the time complexity?"
    assert "print(1)" in fakes.follow_up.calls[0]["user"]

    hint = client.post(
        "/api/coding/get-hint",
        json={"code": "print(1)", "problem": "Two Sum", "interview_id": interview_id, "user_id": "cand"},
    )
    assert hint.status_code == 200
    assert hint.json() == {"hint": "Think about what you need to look up quickly."}

    report = client.post("/api/coding/generate-full-report", json={"interview_id": interview_id})
    assert report.status_code == 200
    payload = report.json()
    assert set(payload) == {
        "technical_skills",
        "code_quality",
        "complexity_analysis",
        "communication_skills",
        "overall_summary",
    }
    assert payload["technical_skills"]["score"] == 82
    assert len(fakes.report.calls) == 1
    transcript_prompt = fakes.report.calls[0]["user"]
    assert transcript_prompt.index("[VOICE] I will use a dictionary.") < transcript_prompt.index("[CODE SUBMISSION]")
    assert "Think about what you need" not in transcript_prompt

    stored = client.get(f"/api/coding/reports/{interview_id}")
    assert stored.status_code == 200
    assert stored.json()["report"]["overall_summary"] == payload["overall_summary"]


def test_hint_levels_progress_over_http(services, tmp_db):
    client = _client(services)
    interview_id = _interview(client)
    body = {"code": "x", "problem": "p", "interview_id": interview_id, "user_id": "cand"}
    for _ in range(3):
        assert client.post("/api/coding/get-hint", json=body).status_code == 200
    levels = [e.payload["hintLevel"] for e in services.events.list_events(interview_id, kind="hint")]
    assert levels == ["nudge", "guide", "direction"]


def test_report_without_events_is_nothing_to_grade(services, fakes):
    client = _client(services)
    interview_id = _interview(client)
    resp = client.post("/api/coding/generate-full-report", json={"interview_id": interview_id})
    assert resp.status_code == 404
    assert "nothing to grade" in resp.json()["detail"]
    assert fakes.report.calls == []


def test_malformed_report_hides_raw_output(services, fakes):
    fakes.report.replies = ['{"technical_skills": {"score": 150, "justification": "SECRET RAW"}}']
    client = _client(services)
    interview_id = _interview(client)
    client.post(
        "/api/coding/voice-turn",
        json={"interview_id": interview_id, "user_id": "cand", "text": "hello"},
    )
    resp = client.post("/api/coding/generate-full-report", json={"interview_id": interview_id})
    assert resp.status_code == 502
    assert "SECRET RAW" not in resp.text
    assert client.get(f"/api/coding/reports/{interview_id}").status_code == 404


def test_unknown_interview_is_404(services):
    client = _client(services)
    resp = client.post(
        "/api/coding/get-hint",
        json={"code": "x", "problem": "p", "interview_id": "missing", "user_id": "cand"},
    )
    assert resp.status_code == 404
    assert client.get("/api/interviews/missing").status_code == 404


def test_missing_fields_rejected(services):
    client = _client(services)
    resp = client.post("/api/coding/get-hint", json={"code": "x", "interview_id": "i"})
    assert resp.status_code == 422


def test_unsupported_language_is_400(services, fakes):
    from errors import UnsupportedLanguage

    fakes.sandbox.result = UnsupportedLanguage("cobol")
    client = _client(services)
    interview_id = _interview(client)
    resp = client.post(
        "/api/coding/execute",
        json={"code": "x", "language": "cobol", "interview_id": interview_id, "user_id": "cand"},
    )
    assert resp.status_code == 400


def test_failed_follow_up_still_records_run(services, fakes):
    from errors import UpstreamError

    fakes.follow_up.replies = [UpstreamError("timeout")]
    fakes.sandbox.result = ExecutionResult(output=None, error="NameError", status="Runtime Error (NZEC)")
    client = _client(services)
    interview_id = _interview(client)
    resp = client.post(
        "/api/coding/execute",
        json={"code": "y", "language": "python", "interview_id": interview_id, "user_id": "cand"},
    )
    assert resp.status_code == 200
    assert resp.json()["follow_up"] is None
    events = services.events.list_events(interview_id, kind="code_submission")
    assert events[0].payload["error"] == "NameError"


def test_upstream_failure_is_503(services, fakes):
    from errors import UpstreamError

    fakes.problem.replies = [UpstreamError("rate limited")]
    resp = _client(services).post("/api/coding/generate-problem", json={"topic": "arrays", "difficulty": "easy"})
    assert resp.status_code == 503


def test_generate_problem(services, fakes):
    resp = _client(services).post("/api/coding/generate-problem", json={"topic": "arrays", "difficulty": "easy"})
    assert resp.status_code == 200
    assert resp.json()["problem"].startswith("Given an array")
    assert '"arrays"' in fakes.problem.calls[0]["user"]
    assert fakes.problem.calls[0]["options"].temperature == 0.7


def test_hint_persistence_failure_is_500(services, monkeypatch):
    from errors import StoreUnavailable

    client = _client(services)
    interview_id = _interview(client)

    def _fail(_event):
        raise StoreUnavailable("locked")

    monkeypatch.setattr(services.events, "append_event", _fail)
    resp = client.post(
        "/api/coding/get-hint",
        json={"code": "x", "problem": "p", "interview_id": interview_id, "user_id": "cand"},
    )
    assert resp.status_code == 500
    assert resp.json()["detail"].startswith("persistence failed")


def test_event_lookup_failure_is_retryable_503(services, fakes, tmp_db):
    import sqlite3

    client = _client(services)
    interview_id = _interview(client)
    with sqlite3.connect(tmp_db) as conn:
        conn.execute("DROP TABLE session_events")

    hint = client.post(
        "/api/coding/get-hint",
        json={"code": "x", "problem": "p", "interview_id": interview_id, "user_id": "cand"},
    )
    report = client.post("/api/coding/generate-full-report", json={"interview_id": interview_id})

    assert hint.status_code == 503
    assert report.status_code == 503
    assert "persistence failed" not in hint.text
    assert fakes.hints.calls == []
    assert fakes.report.calls == []
