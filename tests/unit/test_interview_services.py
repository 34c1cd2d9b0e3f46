import pytest

from errors import NoTranscriptData, SandboxError, SessionNotFound, StoreUnavailable


def test_report_store_failure_is_distinct(services, fakes, monkeypatch):
    session = services.create_session(questions=["Two Sum"])
    services.record_voice_turn(session.session_id, "cand", "hello")

    def _fail(*_args, **_kwargs):
        raise StoreUnavailable("locked")

    monkeypatch.setattr(services.reports, "save_report", _fail)
    with pytest.raises(StoreUnavailable) as info:
        services.generate_report(session.session_id)
    assert '"technical_skills"' in info.value.generated
    assert len(fakes.report.calls) == 1


def test_report_rebuilt_from_current_events(services, fakes):
    session = services.create_session()
    services.record_voice_turn(session.session_id, "cand", "first")
    services.generate_report(session.session_id)
    services.record_voice_turn(session.session_id, "cand", "second")
    services.generate_report(session.session_id)
    assert "second" not in fakes.report.calls[0]["user"]
    assert "[VOICE] second" in fakes.report.calls[1]["user"]


def test_report_requires_events(services):
    session = services.create_session()
    with pytest.raises(NoTranscriptData):
        services.generate_report(session.session_id)


def test_sandbox_failure_records_nothing(services, fakes):
    session = services.create_session()
    fakes.sandbox.result = SandboxError("down")
    with pytest.raises(SandboxError):
        services.run_code(session.session_id, "cand", code="x", language="python")
    assert services.events.count_events(session.session_id) == 0
    assert fakes.follow_up.calls == []


def test_run_code_records_submission(services, fakes):
    session = services.create_session()
    run = services.run_code(session.session_id, "cand", code="print(1)", language="python")
    [event] = services.events.list_events(session.session_id)
    assert event.event_id == run.event_id
    assert event.kind == "code_submission"
    assert event.payload["code"] == "print(1)"
    assert event.payload["status"] == "Accepted"
    assert fakes.sandbox.calls == [("print(1)", "python")]


def test_unknown_session_rejected(services):
    with pytest.raises(SessionNotFound):
        services.record_voice_turn("missing", "cand", "hi")
    with pytest.raises(SessionNotFound):
        services.issue_hint("missing", "cand", problem="p", code="c")


def test_hint_only_session_is_not_graded(services, fakes):
    session = services.create_session()
    services.issue_hint(session.session_id, "cand", problem="Two Sum", code="pass")
    with pytest.raises(NoTranscriptData):
        services.generate_report(session.session_id)
    assert fakes.report.calls == []
    assert services.latest_report(session.session_id) is None
