"""Prefix / substring word completion for letter-by-letter spelling."""

from __future__ import annotations

from dataclasses import dataclass

COMMON_WORDS: tuple[str, ...] = (
    "HELLO", "HI", "BYE", "GOODBYE", "YES", "NO", "PLEASE", "THANK", "THANKS", "SORRY",
    "HELP", "LOVE", "GOOD", "BAD", "DAY", "NIGHT", "WATER", "FOOD", "HOME", "WORK",
    "FAMILY", "FRIEND", "TIME", "MONEY", "HAPPY", "SAD", "HOW", "WHAT", "WHERE", "WHEN",
    "WHY", "WHO", "CAN", "WILL", "WOULD", "COULD", "SHOULD", "HAVE", "HAS", "HAD",
    "WANT", "NEED", "LIKE", "HATE", "KNOW", "THINK", "FEEL", "SEE", "HEAR",
    "SPEAK", "TALK", "LISTEN", "UNDERSTAND", "LEARN", "TEACH", "READ", "WRITE",
    "EAT", "DRINK", "SLEEP", "WAKE", "COME", "GO", "STAY", "LEAVE", "ARRIVE",
    "MORNING", "AFTERNOON", "EVENING", "TODAY", "TOMORROW", "YESTERDAY", "WEEK",
    "MONTH", "YEAR", "BIRTHDAY", "HOLIDAY", "SCHOOL", "HOSPITAL", "STORE", "RESTAURANT",
)

DEFAULT_NEXT_LETTERS: tuple[str, ...] = ("A", "H", "I", "T", "W")


@dataclass(frozen=True)
class WordStatus:
    status: str  # empty | complete | likely | partial | unknown
    confidence: float


class WordPredictor:
    def __init__(self, words: tuple[str, ...] = COMMON_WORDS, max_suggestions: int = 5) -> None:
        self.words = tuple(w.upper() for w in words)
        self.max_suggestions = max_suggestions
        self._known = frozenset(self.words)

    def get_predictions(self, prefix: str) -> list[str]:
        """Up to ``max_suggestions`` completions: prefix hits, then substring hits."""
        if not prefix:
            return list(self.words[: self.max_suggestions])

        upper = prefix.upper()
        starts = [w for w in self.words if w.startswith(upper) and w != upper]
        contains = [w for w in self.words if upper in w and not w.startswith(upper)]
        return (starts + contains)[: self.max_suggestions]

    def is_likely_complete(self, word: str) -> bool:
        return bool(word) and word.upper() in self._known

    def get_completion_confidence(self, word: str) -> float:
        if not word:
            return 0.0
        if self.is_likely_complete(word):
            return 1.0
        predictions = self.get_predictions(word)
        if predictions and predictions[0].startswith(word.upper()):
            return 0.7
        return 0.3

    def get_next_letter_suggestions(self, prefix: str) -> list[str]:
        if not prefix:
            return list(DEFAULT_NEXT_LETTERS)

        upper = prefix.upper()
        letters: dict[str, None] = {}
        for word in self.get_predictions(prefix):
            if len(word) > len(upper):
                letters.setdefault(word[len(upper)], None)
        return list(letters)[: self.max_suggestions]

    def word_status(self, word: str) -> WordStatus:
        """Coarse label for a word being spelled, for UI hints."""
        if not word:
            return WordStatus("empty", 0.0)
        confidence = self.get_completion_confidence(word)
        if self.is_likely_complete(word):
            status = "complete"
        elif confidence > 0.7:
            status = "likely"
        elif confidence > 0.3:
            status = "partial"
        else:
            status = "unknown"
        return WordStatus(status, confidence)
