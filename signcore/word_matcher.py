"""
word_matcher.py – Score a buffered token sequence against the vocabulary.

Scoring
-------
**Letter tier** (fingerspelling), tokens ``t`` against pattern ``p``:

    t == p                        → 0.95
    t is a strict prefix of p     → 0.6 + 0.3 · |t| / |p|
    otherwise r = (# equal positions) / max(|t|, |p|)
                                  → 0.8 · r   if r > 0.5, else 0

**Complex tier** (whole-word signs), a fixed-weight blend:

    score = 0.4 · gesture + 0.3 · movement + 0.2 · timing + 0.1 · completeness

* *gesture* – fraction of pattern hand shapes found (exactly or via a
  :class:`~signcore.vocabulary.SynonymGroup`) in the newest tokens,
  window sized to the pattern.
* *movement* – fraction of expected movements seen anywhere in the buffer.
* *timing* – ``min(actual, expected) / max(actual, expected)``; 0.5 when
  fewer than two tokens are buffered.
* *completeness* – mean of token and movement progress, each capped at 1.

Selection
---------
Both tiers are scanned, letter tier first, and a candidate replaces the
current best only with a strictly higher score above its tier threshold
(0.6 letter, 0.5 complex).  Equal scores therefore resolve to the letter
tier, then to vocabulary order.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Sequence

from signcore.config import BufferConfig, MatcherConfig
from signcore.movement import MovementDetector, MovementPattern
from signcore.results import SequenceStatus, WordRecognitionResult, quality_for
from signcore.sequence_buffer import SequenceBuffer
from signcore.vocabulary import DEFAULT_VOCABULARY, Vocabulary, WordGesturePattern, tokens_match

logger = logging.getLogger(__name__)

EXACT_SPELLING_SCORE = 0.95
PREFIX_BASE = 0.6
PREFIX_SPAN = 0.3
PARTIAL_MIN_RATIO = 0.5
PARTIAL_SCALE = 0.8
NEUTRAL_TIMING = 0.5

# ── Letter tier ──────────────────────────────────────────────────────────────


def letter_sequence_score(pattern: Sequence[str], tokens: Sequence[str]) -> float:
    if not tokens or not pattern:
        return 0.0

    if len(tokens) == len(pattern) and all(a == b for a, b in zip(tokens, pattern)):
        return EXACT_SPELLING_SCORE

    if len(pattern) > len(tokens) and all(a == b for a, b in zip(tokens, pattern)):
        return PREFIX_BASE + (len(tokens) / len(pattern)) * PREFIX_SPAN

    matching = sum(1 for a, b in zip(tokens, pattern) if a == b)
    ratio = matching / max(len(tokens), len(pattern))
    return ratio * PARTIAL_SCALE if ratio > PARTIAL_MIN_RATIO else 0.0


def letter_completeness(pattern: Sequence[str], n_tokens: int) -> float:
    if not pattern:
        return 1.0
    return min(n_tokens / len(pattern), 1.0)


# ── Complex tier ─────────────────────────────────────────────────────────────


def gesture_match(pattern: Sequence[str], tokens: Sequence[str]) -> float:
    """Fraction of *pattern* hand shapes present in the newest tokens."""
    if not pattern or not tokens:
        return 0.0
    window = tokens[len(tokens) - min(len(pattern), len(tokens)):]
    found = sum(1 for g in pattern if any(tokens_match(g, t) for t in window))
    return found / len(pattern)


def movement_match(expected: Sequence[MovementPattern], observed: Sequence[MovementPattern]) -> float:
    if not expected:
        return 1.0
    if not observed:
        return 0.0
    found = sum(1 for e in expected if any(e.matches(o) for o in observed))
    return found / len(expected)


def timing_match(expected_ms: float, timestamps: Sequence[float]) -> float:
    if len(timestamps) < 2:
        return NEUTRAL_TIMING
    actual = timestamps[-1] - timestamps[0]
    if actual <= 0 or expected_ms <= 0:
        return NEUTRAL_TIMING
    return min(actual, expected_ms) / max(actual, expected_ms)


def pattern_completeness(pattern: WordGesturePattern, n_tokens: int, n_movements: int) -> float:
    gestures = min(n_tokens / len(pattern.gestures), 1.0) if pattern.gestures else 1.0
    moves = min(n_movements / len(pattern.movements), 1.0) if pattern.movements else 1.0
    return (gestures + moves) / 2


# ── Matcher ──────────────────────────────────────────────────────────────────


class WordMatcher:
    """Stateless scoring plus a short history of accepted words.

    The history is per-session state, so give each session its own matcher.
    """

    def __init__(
        self,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
        config: MatcherConfig | None = None,
    ) -> None:
        self.vocabulary = vocabulary
        self.config = config or MatcherConfig()
        self._history: deque[WordRecognitionResult] = deque(maxlen=self.config.history_capacity)

    # ── Per-pattern scores ───────────────────────────────────────────────

    def score_letter_pattern(self, pattern: WordGesturePattern, buffer: SequenceBuffer) -> float:
        return letter_sequence_score(pattern.gestures, buffer.tokens)

    def score_complex_pattern(self, pattern: WordGesturePattern, buffer: SequenceBuffer) -> float:
        tokens = buffer.tokens
        movements = buffer.movements
        cfg = self.config
        score = (
            cfg.gesture_weight * gesture_match(pattern.gestures, tokens)
            + cfg.movement_weight * movement_match(pattern.movements, movements)
            + cfg.timing_weight * timing_match(pattern.duration, buffer.timestamps)
            + cfg.completeness_weight * pattern_completeness(pattern, len(tokens), len(movements))
        )
        return min(max(score, 0.0), 1.0)

    # ── Candidates ───────────────────────────────────────────────────────

    def _letter_result(self, pattern: WordGesturePattern, score: float, n_tokens: int) -> WordRecognitionResult:
        return WordRecognitionResult(
            word=pattern.word,
            confidence=score,
            category=pattern.category,
            description=f"Fingerspelled word: {pattern.word}",
            gestures=pattern.gestures,
            quality=quality_for(score),
            completeness=letter_completeness(pattern.gestures, n_tokens),
        )

    def _complex_result(self, pattern: WordGesturePattern, score: float, buffer: SequenceBuffer) -> WordRecognitionResult:
        return WordRecognitionResult(
            word=pattern.word,
            confidence=score,
            category=pattern.category,
            description=pattern.describe(),
            gestures=pattern.gestures,
            quality=quality_for(score),
            completeness=pattern_completeness(pattern, len(buffer), len(buffer.movements)),
        )

    def best_match(self, buffer: SequenceBuffer) -> WordRecognitionResult | None:
        """Highest-scoring word above its tier threshold, without recording it."""
        if len(buffer) == 0:
            return None

        best: WordRecognitionResult | None = None
        best_score = 0.0

        for pattern in self.vocabulary.letter_patterns:
            score = self.score_letter_pattern(pattern, buffer)
            if score > best_score and score > self.config.letter_threshold:
                best_score = score
                best = self._letter_result(pattern, score, len(buffer))

        for pattern in self.vocabulary.complex_patterns:
            score = self.score_complex_pattern(pattern, buffer)
            if score > best_score and score > self.config.complex_threshold:
                best_score = score
                best = self._complex_result(pattern, score, buffer)

        return best

    def recognize(self, buffer: SequenceBuffer) -> WordRecognitionResult | None:
        """Best match, remembered in the history when confident enough."""
        result = self.best_match(buffer)
        if result is None:
            logger.debug("No word above threshold for tokens %s", buffer.tokens)
            return None
        if result.confidence > self.config.history_entry_confidence:
            self._history.append(result)
        return result

    def suggestions(self, buffer: SequenceBuffer) -> list[str]:
        """Top complex-tier words above the suggestion threshold."""
        scored = [
            (self.score_complex_pattern(p, buffer), p.word)
            for p in self.vocabulary.complex_patterns
        ]
        ranked = sorted(
            (item for item in scored if item[0] > self.config.suggestion_threshold),
            key=lambda item: item[0],
            reverse=True,
        )
        return [word for _, word in ranked[: self.config.max_suggestions]]

    # ── History ──────────────────────────────────────────────────────────

    @property
    def history(self) -> list[WordRecognitionResult]:
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()


# ── Buffer + matcher bundle ──────────────────────────────────────────────────


class WordRecognizer:
    """One user's token buffer paired with a matcher over a shared vocabulary."""

    def __init__(
        self,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
        matcher_config: MatcherConfig | None = None,
        buffer_config: BufferConfig | None = None,
        detector: MovementDetector | None = None,
    ) -> None:
        self.buffer = SequenceBuffer(buffer_config, detector)
        self.matcher = WordMatcher(vocabulary, matcher_config)

    @property
    def vocabulary(self) -> Vocabulary:
        return self.matcher.vocabulary

    def add_token(self, token: str, landmarks: Any, timestamp: float) -> MovementPattern:
        return self.buffer.add_token(token, landmarks, timestamp)

    def recognize_word(self) -> WordRecognitionResult | None:
        return self.matcher.recognize(self.buffer)

    def get_word_suggestions(self) -> list[str]:
        return self.matcher.suggestions(self.buffer)

    def get_status(self) -> SequenceStatus:
        return self.buffer.get_status(self.get_word_suggestions())

    def recognition_history(self) -> list[WordRecognitionResult]:
        return self.matcher.history

    def words_by_category(self, category: str) -> list[str]:
        return self.vocabulary.words_by_category(category)

    def clear(self) -> None:
        self.buffer.clear()
