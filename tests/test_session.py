"""tests/test_session.py – per-user façade."""

from __future__ import annotations

import pytest

from conftest import make_hand
from signcore import SignSession
from signcore.config import SessionConfig


@pytest.fixture
def session():
    return SignSession()


def test_process_frame_stabilises(session):
    results = [session.process_frame(make_hand()) for _ in range(4)]
    assert results[-1].letter == "A"
    assert results[-1].confidence == pytest.approx(0.9)


def test_missing_hand_returns_invalid_and_loss_clears_history(session):
    for _ in range(3):
        session.process_frame(make_hand())
    assert session.process_frame(None).letter == ""
    session.hand_lost()
    assert session.classifier.history == ()
    assert session.process_frame(make_hand()).confidence == pytest.approx(0.8)


@pytest.mark.parametrize(
    "token, confidence, added",
    [("H", 0.9, True), ("H", 0.6, True), ("H", 0.59, False), ("?", 0.9, False), ("", 0.9, False)],
)
def test_token_gate(session, token, confidence, added):
    assert session.push_gesture(token, make_hand(), confidence, 0.0) is added
    assert session.status().length == (1 if added else 0)


def test_accepts_fingerspelled_word(session):
    session.push_gesture("H", make_hand(), 0.85, 0.0)
    session.push_gesture("I", make_hand(), 0.85, 400.0)
    attempt = session.attempt_recognition()
    assert attempt.accepted
    assert attempt.result.word == "HI"
    assert attempt.text == "Hi there!"
    assert session.transcript == ["Hi there!"]
    assert session.status().length == 0
    assert [r.word for r in session.recognition_history()] == ["HI"]


def test_weak_match_is_not_accepted(session):
    session.push_gesture("Q", make_hand(), 0.9, 0.0)
    session.push_gesture("Q", make_hand(), 0.9, 600.0)
    attempt = session.attempt_recognition()
    assert not attempt.accepted
    assert attempt.result.word == "ONE"
    assert attempt.text == ""
    assert session.status().length == 2


def test_nothing_buffered(session):
    attempt = session.attempt_recognition()
    assert attempt.result is None
    assert not attempt.accepted


def test_accept_threshold_is_configurable():
    strict = SignSession(config=SessionConfig(accept_confidence=0.96))
    strict.push_gesture("H", make_hand(), 0.9, 0.0)
    strict.push_gesture("I", make_hand(), 0.9, 400.0)
    assert not strict.attempt_recognition().accepted


def test_suggestions_come_from_buffer(session):
    assert session.suggestions() == []
    session.push_gesture("OPEN_HAND", make_hand(), 0.9, 0.0)
    assert session.suggestions()


# ── Spelled word ─────────────────────────────────────────────────────────────


def test_spelling_a_word(session):
    assert session.add_letter("H", 0.9)
    assert session.add_letter("E", 0.8)
    assert not session.add_letter("?", 0.9)
    assert not session.add_letter("L", 0.2)
    assert session.current_word == "HE"
    assert session.predictions()[:2] == ["HELLO", "HELP"]
    assert session.next_letters()[0] == "L"
    assert session.word_status().status == "partial"

    session.remove_letter()
    assert session.current_word == "H"
    session.clear_word()
    assert session.current_word == ""
    assert session.word_status().status == "empty"
    session.remove_letter()
    assert session.current_word == ""


def test_select_and_submit(session):
    session.add_letter("T", 0.9)
    session.select_prediction("thank")
    assert session.current_word == "THANK"
    assert session.word_status().status == "complete"
    assert session.submit_word() == "thank"
    assert session.current_word == ""
    assert session.submit_word() == ""


def test_reset(session):
    session.process_frame(make_hand())
    session.push_gesture("H", make_hand(), 0.9, 0.0)
    session.add_letter("H", 0.9)
    session.reset()
    assert session.classifier.history == ()
    assert session.status().length == 0
    assert session.current_word == ""


def test_sessions_are_independent():
    a, b = SignSession(), SignSession()
    a.push_gesture("H", make_hand(), 0.9, 0.0)
    assert b.status().length == 0
