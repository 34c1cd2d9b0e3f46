import pytest

from errors import NoTranscriptData
from storage.models import Event
from transcript import TRANSCRIPT_HEADER, assemble


def _event(event_id, kind, payload):
    return Event(
        event_id=event_id,
        session_id="s1",
        candidate_id="c1",
        kind=kind,
        payload=payload,
        created_at=f"2024-01-01T00:00:0{event_id}.000000+00:00",
    )


def test_empty_input_raises():
    with pytest.raises(NoTranscriptData):
        assemble([])


def test_voice_turn_block():
    transcript = assemble([_event(1, "voice_turn", {"text": "Hello"})])
    assert "[VOICE] Hello" in transcript.text
    assert transcript.text.startswith(TRANSCRIPT_HEADER)
    assert transcript.event_count == 1


def test_code_submission_block_prefers_output():
    transcript = assemble(
        [_event(1, "code_submission", {"code": "x=1", "status": "Accepted", "output": "1"})]
    )
    block = transcript.text[len(TRANSCRIPT_HEADER):]
    assert block == "[CODE SUBMISSION]\nStatus: Accepted\n---\nx=1\n---\nResult: 1\n\n"


def test_code_submission_falls_back_to_error():
    transcript = assemble(
        [
            _event(
                1,
                "code_submission",
                {"code": "x=", "status": "Compilation Error", "output": None, "error": "SyntaxError"},
            )
        ]
    )
    assert "Result: SyntaxError" in transcript.text


def test_order_is_preserved():
    transcript = assemble(
        [
            _event(1, "voice_turn", {"text": "first"}),
            _event(2, "code_submission", {"code": "y=2", "status": "Accepted", "output": "2"}),
            _event(3, "voice_turn", {"text": "third"}),
        ]
    )
    text = transcript.text
    assert text.index("[VOICE] first") < text.index("[CODE SUBMISSION]") < text.index("[VOICE] third")


def test_input_order_is_trusted_not_resorted():
    transcript = assemble(
        [
            _event(5, "voice_turn", {"text": "later"}),
            _event(1, "voice_turn", {"text": "earlier"}),
        ]
    )
    assert transcript.text.index("later") < transcript.text.index("earlier")


def test_duplicates_are_kept():
    events = [_event(1, "voice_turn", {"text": "again"}), _event(2, "voice_turn", {"text": "again"})]
    assert assemble(events).text.count("[VOICE] again") == 2


def test_hints_and_unknown_kinds_skipped():
    transcript = assemble(
        [
            _event(1, "hint", {"hintText": "try a map", "hintLevel": "nudge"}),
            _event(2, "screen_share", {"url": "x"}),
            _event(3, "voice_turn", {"text": "ok"}),
        ]
    )
    assert "try a map" not in transcript.text
    assert "screen_share" not in transcript.text
    assert transcript.text == TRANSCRIPT_HEADER + "[VOICE] ok\n"
    assert transcript.event_count == 3


def test_only_skipped_kinds_is_nothing_to_grade():
    with pytest.raises(NoTranscriptData) as info:
        assemble(
            [
                _event(1, "hint", {"hintText": "h", "hintLevel": "nudge"}),
                _event(2, "screen_share", {"url": "x"}),
            ]
        )
    assert info.value.session_id == "s1"
