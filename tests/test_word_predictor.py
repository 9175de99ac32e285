"""tests/test_word_predictor.py – fingerspelling completion."""

from __future__ import annotations

import pytest

from signcore.word_predictor import COMMON_WORDS, WordPredictor


@pytest.fixture
def predictor():
    return WordPredictor()


def test_word_list_has_no_duplicates():
    assert len(COMMON_WORDS) == len(set(COMMON_WORDS))


def test_empty_prefix_gives_first_words(predictor):
    assert predictor.get_predictions("") == ["HELLO", "HI", "BYE", "GOODBYE", "YES"]


def test_prefix_hits_before_substring_hits(predictor):
    assert predictor.get_predictions("HE") == ["HELLO", "HELP", "HEAR", "WHERE", "WHEN"]


def test_prediction_is_case_insensitive(predictor):
    assert predictor.get_predictions("he") == predictor.get_predictions("HE")


def test_exact_word_is_not_its_own_prediction(predictor):
    assert predictor.get_predictions("THANK") == ["THANKS"]
    assert "HI" not in predictor.get_predictions("HI")


def test_no_predictions(predictor):
    assert predictor.get_predictions("XQZ") == []


def test_predictions_capped():
    assert len(WordPredictor(max_suggestions=2).get_predictions("")) == 2


def test_is_likely_complete(predictor):
    assert predictor.is_likely_complete("hello")
    assert not predictor.is_likely_complete("HELL")
    assert not predictor.is_likely_complete("")


@pytest.mark.parametrize(
    "word, confidence",
    [("", 0.0), ("HELLO", 1.0), ("HEL", 0.7), ("XQ", 0.3)],
)
def test_completion_confidence(predictor, word, confidence):
    assert predictor.get_completion_confidence(word) == confidence


def test_next_letters(predictor):
    assert predictor.get_next_letter_suggestions("") == ["A", "H", "I", "T", "W"]
    assert predictor.get_next_letter_suggestions("HE") == ["L", "A", "E"]
    assert predictor.get_next_letter_suggestions("THANK") == ["S"]
    assert predictor.get_next_letter_suggestions("XQZ") == []


@pytest.mark.parametrize(
    "word, status",
    [("", "empty"), ("HELLO", "complete"), ("HEL", "partial"), ("XQ", "unknown")],
)
def test_word_status(predictor, word, status):
    assert predictor.word_status(word).status == status


def test_custom_word_list():
    predictor = WordPredictor(words=("cat", "car", "cart"))
    assert predictor.get_predictions("CA") == ["CAT", "CAR", "CART"]
    assert predictor.get_predictions("CAR") == ["CART"]
    assert predictor.word_status("car").status == "complete"


def test_th_prefix_hits_come_first(predictor):
    predictions = predictor.get_predictions("TH")
    assert len(predictions) <= 5
    assert predictions[:3] == ["THANK", "THANKS", "THINK"]
    assert all("TH" in w and not w.startswith("TH") for w in predictions[3:])
