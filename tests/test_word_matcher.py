"""tests/test_word_matcher.py – scoring, best-match selection, suggestions and history."""

from __future__ import annotations

import pytest

from conftest import make_hand, wrist_path
from signcore.movement import STATIC_SLOW, Direction, MovementPattern, MovementType, Speed
from signcore.results import Quality
from signcore.sequence_buffer import SequenceBuffer
from signcore.vocabulary import DEFAULT_VOCABULARY, Vocabulary, WordGesturePattern, tokens_match
from signcore.word_matcher import (
    WordMatcher,
    WordRecognizer,
    gesture_match,
    letter_sequence_score,
    movement_match,
    timing_match,
)


def _buffer(tokens, times=None, snaps=None):
    buf = SequenceBuffer()
    times = times or [i * 500.0 for i in range(len(tokens))]
    snaps = snaps or [make_hand()] * len(tokens)
    for token, t, snap in zip(tokens, times, snaps):
        buf.add_token(token, snap, t)
    return buf


# ── Letter tier scoring ──────────────────────────────────────────────────────


def test_letter_score_exact():
    assert letter_sequence_score("HI", ["H", "I"]) == 0.95


def test_letter_score_prefix():
    assert letter_sequence_score("HI", ["H"]) == pytest.approx(0.75)
    assert letter_sequence_score("HELP", ["H", "E"]) == pytest.approx(0.75)
    assert letter_sequence_score("HELP", ["H", "E", "L"]) == pytest.approx(0.825)


def test_letter_score_partial():
    assert letter_sequence_score("HELP", ["H", "E", "L", "X"]) == pytest.approx(0.6)
    assert letter_sequence_score("HI", ["H", "I", "X"]) == pytest.approx(0.8 * 2 / 3)
    # exactly half matching is not enough
    assert letter_sequence_score("HI", ["H", "X"]) == 0.0
    assert letter_sequence_score("HI", ["X", "Y"]) == 0.0


def test_letter_score_empty():
    assert letter_sequence_score("HI", []) == 0.0


# ── Complex tier scoring ─────────────────────────────────────────────────────


def test_gesture_match_uses_newest_window():
    assert gesture_match(("OPEN_HAND", "FORWARD"), ["A", "OPEN_HAND", "FORWARD"]) == 1.0
    assert gesture_match(("OPEN_HAND", "FORWARD"), ["OPEN_HAND", "FORWARD", "A"]) == 0.5
    assert gesture_match(("OPEN_HAND", "FORWARD"), ["FORWARD"]) == 0.5
    assert gesture_match((), ["A"]) == 0.0


def test_gesture_match_accepts_synonyms():
    assert gesture_match(("FIST", "CIRCULAR"), ["S", "CIRCULAR"]) == 1.0
    assert gesture_match(("FIST",), ["B"]) == 0.0


def test_tokens_match():
    assert tokens_match("FIST", "A")
    assert tokens_match("OPEN_HAND", "FIVE")
    assert tokens_match("Y_HAND", "I_LOVE_YOU")
    assert tokens_match("WAVE", "WAVE")
    assert not tokens_match("FIVE", "OPEN_HAND")
    assert not tokens_match("", "")


def test_movement_match():
    forward = MovementPattern(MovementType.LINEAR, Speed.MEDIUM, Direction.FORWARD)
    assert movement_match((), []) == 1.0
    assert movement_match((forward,), []) == 0.0
    assert movement_match((forward,), [STATIC_SLOW, forward]) == 1.0
    assert movement_match((forward, STATIC_SLOW), [STATIC_SLOW]) == 0.5


def test_timing_match():
    assert timing_match(1000, [0.0]) == 0.5
    assert timing_match(1000, [0.0, 0.0]) == 0.5
    assert timing_match(1000, [0.0, 500.0]) == pytest.approx(0.5)
    assert timing_match(1000, [0.0, 2000.0]) == pytest.approx(0.5)
    assert timing_match(1000, [0.0, 1000.0]) == 1.0


def test_complex_score_is_weighted_blend():
    matcher = WordMatcher()
    thank_you = next(p for p in DEFAULT_VOCABULARY.complex_patterns if p.word == "THANK_YOU")
    snaps = wrist_path((0.5, 0.8, 0.0), (0.5, 0.8, 0.04), (0.5, 0.8, 0.08))
    buf = _buffer(["A", "OPEN_HAND", "FORWARD"], [0.0, 900.0, 1800.0], snaps)
    assert matcher.score_complex_pattern(thank_you, buf) == pytest.approx(1.0)

    # without the forward motion the movement component drops out
    still = _buffer(["A", "OPEN_HAND", "FORWARD"], [0.0, 900.0, 1800.0])
    assert matcher.score_complex_pattern(thank_you, still) == pytest.approx(0.7)


# ── Best match ───────────────────────────────────────────────────────────────


def test_empty_buffer_gives_none():
    assert WordMatcher().recognize(SequenceBuffer()) is None


def test_fingerspelled_word():
    result = WordMatcher().recognize(_buffer(["H", "I"]))
    assert result.word == "HI"
    assert result.confidence == 0.95
    assert result.quality is Quality.EXCELLENT
    assert result.category == "greeting"
    assert result.description == "Fingerspelled word: HI"
    assert result.completeness == 1.0


def test_prefix_is_recognised_within_bounds():
    result = WordMatcher().recognize(_buffer(["H"]))
    assert result.word == "HI"
    assert 0.6 <= result.confidence <= 0.75
    assert result.completeness == pytest.approx(0.5)


def test_unknown_token_gives_none():
    assert WordMatcher().recognize(_buffer(["Q"])) is None


def test_whole_word_sign():
    snaps = wrist_path((0.5, 0.8, 0.0), (0.5, 0.8, 0.04), (0.5, 0.8, 0.08))
    result = WordMatcher().recognize(_buffer(["A", "OPEN_HAND", "FORWARD"], [0.0, 900.0, 1800.0], snaps))
    assert result.word == "THANK_YOU"
    assert result.quality is Quality.EXCELLENT
    assert result.description == "OPEN_HAND → FORWARD with linear forward movement"
    assert result.gestures == ("OPEN_HAND", "FORWARD")


def test_higher_score_wins_across_tiers():
    vocab = Vocabulary(
        letter_patterns=(WordGesturePattern("AB", ("A", "B"), 1000, (), 0.9, "test"),),
        complex_patterns=(WordGesturePattern("AB_SIGN", ("A", "B"), 1000, (), 0.9, "test"),),
    )
    result = WordMatcher(vocab).recognize(_buffer(["A", "B"], [0.0, 1000.0]))
    assert result.word == "AB_SIGN"
    assert result.confidence == pytest.approx(1.0)


def test_equal_scores_keep_first_pattern():
    vocab = Vocabulary(
        letter_patterns=(
            WordGesturePattern("FIRST", ("A", "B"), 1000, (), 0.9, "test"),
            WordGesturePattern("SECOND", ("A", "B"), 1000, (), 0.9, "test"),
        ),
        complex_patterns=(),
    )
    assert WordMatcher(vocab).recognize(_buffer(["A", "B"])).word == "FIRST"


def test_score_bounds_over_vocabulary():
    matcher = WordMatcher()
    buf = _buffer(["OPEN_HAND", "WAVE", "S"])
    for pattern in DEFAULT_VOCABULARY.complex_patterns:
        assert 0.0 <= matcher.score_complex_pattern(pattern, buf) <= 1.0
    for pattern in DEFAULT_VOCABULARY.letter_patterns:
        assert 0.0 <= matcher.score_letter_pattern(pattern, buf) <= 1.0


# ── Suggestions ──────────────────────────────────────────────────────────────


def test_suggestions_are_ranked_and_capped():
    matcher = WordMatcher()
    buf = _buffer(["OPEN_HAND"])
    words = matcher.suggestions(buf)
    assert 0 < len(words) <= 5
    by_word = {p.word: p for p in DEFAULT_VOCABULARY.complex_patterns}
    scores = [matcher.score_complex_pattern(by_word[w], buf) for w in words]
    assert all(s > 0.3 for s in scores)
    assert scores == sorted(scores, reverse=True)


def test_suggestions_empty_buffer():
    assert WordMatcher().suggestions(SequenceBuffer()) == []


def test_single_letter_favours_static_signs():
    # one token: static signs get full movement, neutral timing and full
    # completeness (0.5) while a FIST-synonym half match only reaches 0.375
    matcher = WordMatcher()
    buf = _buffer(["A"])
    by_word = {p.word: p for p in DEFAULT_VOCABULARY.complex_patterns}
    assert matcher.score_complex_pattern(by_word["ONE"], buf) == pytest.approx(0.5)
    assert matcher.score_complex_pattern(by_word["YES"], buf) == pytest.approx(0.375)
    assert matcher.suggestions(buf) == ["ONE", "TWO", "THREE", "FOUR", "FIVE"]
    assert matcher.best_match(buf) is None


# ── History ──────────────────────────────────────────────────────────────────


def test_history_records_confident_results():
    matcher = WordMatcher()
    matcher.recognize(_buffer(["H", "I"]))
    matcher.recognize(_buffer(["H"]))
    assert [r.word for r in matcher.history] == ["HI", "HI"]


def test_history_skips_weak_results():
    matcher = WordMatcher()
    result = matcher.recognize(_buffer(["Q", "Q"], [0.0, 600.0]))
    assert result.word == "ONE"
    assert result.confidence == pytest.approx(0.55)
    assert matcher.history == []


def test_history_is_capped_and_copied():
    matcher = WordMatcher()
    for _ in range(7):
        matcher.recognize(_buffer(["H", "I"]))
    history = matcher.history
    assert len(history) == 5
    history.clear()
    assert len(matcher.history) == 5
    matcher.clear_history()
    assert matcher.history == []


# ── Recognizer bundle ────────────────────────────────────────────────────────


def test_recognizer_end_to_end():
    rec = WordRecognizer()
    rec.add_token("H", make_hand(), 0.0)
    rec.add_token("I", make_hand(), 400.0)
    status = rec.get_status()
    assert status.length == 2
    assert status.last_token == "I"
    assert rec.recognize_word().word == "HI"
    assert len(rec.recognition_history()) == 1
    rec.clear()
    assert rec.get_status().length == 0
    assert rec.recognize_word() is None


def test_words_by_category():
    words = WordRecognizer().words_by_category("greeting")
    assert words[:2] == ["HI", "BYE"]
    assert "HELLO" in words
    assert WordRecognizer().words_by_category("nonexistent") == []
