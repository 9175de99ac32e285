"""
session.py – Per-user façade over the recognition components.

Wires one :class:`LetterClassifier`, one :class:`WordRecognizer` and a
:class:`WordPredictor` together the way a capture loop drives them:

    session = SignSession()
    for t_ms, hand in frames:
        if hand is None:
            session.hand_lost()
            continue
        result = session.process_frame(hand)
        session.push_gesture(result.letter, hand, result.confidence, t_ms)
    word = session.attempt_recognition()

Instances hold mutable state and are not thread-safe; create one per user.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from signcore.config import BufferConfig, ClassifierConfig, MatcherConfig, SessionConfig
from signcore.letter_classifier import LetterClassifier
from signcore.results import ClassificationResult, SequenceStatus, WordRecognitionResult
from signcore.translator import GlossTranslator
from signcore.vocabulary import DEFAULT_VOCABULARY, Vocabulary
from signcore.word_matcher import WordRecognizer
from signcore.word_predictor import WordPredictor, WordStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecognitionAttempt:
    result: WordRecognitionResult | None
    accepted: bool
    text: str = ""


class SignSession:
    def __init__(
        self,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
        config: SessionConfig | None = None,
        classifier_config: ClassifierConfig | None = None,
        matcher_config: MatcherConfig | None = None,
        buffer_config: BufferConfig | None = None,
        predictor: WordPredictor | None = None,
        translator: GlossTranslator | None = None,
    ) -> None:
        self.config = config or SessionConfig()
        self.classifier = LetterClassifier(classifier_config)
        self.recognizer = WordRecognizer(vocabulary, matcher_config, buffer_config)
        self.predictor = predictor or WordPredictor()
        self.translator = translator or GlossTranslator()
        self.current_word = ""
        self.transcript: list[str] = []

    # ── Per frame ────────────────────────────────────────────────────────

    def process_frame(self, landmarks: Any) -> ClassificationResult:
        return self.classifier.classify(landmarks)

    def hand_lost(self) -> None:
        """Call when the provider reports no hand for a frame."""
        self.classifier.clear_history()

    def push_gesture(self, token: str, landmarks: Any, confidence: float, timestamp: float) -> bool:
        """Buffer *token* if it is a confident, known gesture.

        Returns ``True`` when the token was added.
        """
        if not token or token == "?" or confidence < self.config.min_token_confidence:
            return False
        self.recognizer.add_token(token, landmarks, timestamp)
        return True

    # ── On demand ────────────────────────────────────────────────────────

    def attempt_recognition(self) -> RecognitionAttempt:
        """Match the buffer now; accepted words are translated and the buffer reset."""
        result = self.recognizer.recognize_word()
        if result is None or result.confidence < self.config.accept_confidence:
            return RecognitionAttempt(result, accepted=False)

        text = self.translator.translate([result.word])
        self.transcript.append(text)
        self.recognizer.clear()
        logger.info("Recognised %s (%.2f) -> %r", result.word, result.confidence, text)
        return RecognitionAttempt(result, accepted=True, text=text)

    def suggestions(self) -> list[str]:
        return self.recognizer.get_word_suggestions()

    def status(self) -> SequenceStatus:
        return self.recognizer.get_status()

    def recognition_history(self) -> list[WordRecognitionResult]:
        return self.recognizer.recognition_history()

    def reset(self) -> None:
        self.classifier.clear_history()
        self.recognizer.clear()
        self.clear_word()

    # ── Spelled word being formed ────────────────────────────────────────

    def add_letter(self, letter: str, confidence: float) -> bool:
        if not letter or letter == "?" or confidence < self.config.min_token_confidence:
            return False
        self.current_word += letter
        return True

    def remove_letter(self) -> None:
        self.current_word = self.current_word[:-1]

    def clear_word(self) -> None:
        self.current_word = ""

    def select_prediction(self, word: str) -> None:
        self.current_word = word.upper()

    def predictions(self) -> list[str]:
        return self.predictor.get_predictions(self.current_word)

    def next_letters(self) -> list[str]:
        return self.predictor.get_next_letter_suggestions(self.current_word)

    def word_status(self) -> WordStatus:
        return self.predictor.word_status(self.current_word)

    def submit_word(self) -> str:
        """Translate and clear the spelled word; empty input gives ``""``."""
        word = self.current_word.strip()
        if not word:
            return ""
        text = self.translator.translate([word])
        self.transcript.append(text)
        self.clear_word()
        return text
