"""
vocabulary.py – Static word table for the word-level matcher.

Two disjoint tiers:

* **Letter patterns** – words fingerspelled letter by letter.  Tokens are
  the single letters produced by :class:`~signcore.letter_classifier.LetterClassifier`.
* **Complex patterns** – whole-word signs described by named hand shapes
  plus the movement expected while signing them.

The table is built once at import and never mutated; sessions receive it
as a read-only :class:`Vocabulary` at construction.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum

from signcore.movement import Direction, MovementPattern, MovementType, Speed


@dataclass(frozen=True)
class WordGesturePattern:
    word: str
    gestures: tuple[str, ...]
    duration: float  # expected signing time, ms
    movements: tuple[MovementPattern, ...]
    base_confidence: float
    category: str

    def describe(self) -> str:
        gestures = " → ".join(self.gestures) or "unknown"
        moves = ", ".join(m.describe() for m in self.movements) or "static"
        return f"{gestures} with {moves} movement"


def _mv(kind: str, speed: str, direction: str | None = None, reps: int | None = None) -> MovementPattern:
    return MovementPattern(
        type=MovementType(kind),
        speed=Speed(speed),
        direction=Direction(direction) if direction else None,
        repetitions=reps,
    )


def _spell(word: str, duration: float, confidence: float, category: str) -> WordGesturePattern:
    return WordGesturePattern(word, tuple(word), duration, (), confidence, category)


def _sign(
    word: str,
    gestures: tuple[str, ...],
    duration: float,
    movements: tuple[MovementPattern, ...],
    confidence: float,
    category: str,
) -> WordGesturePattern:
    return WordGesturePattern(word, gestures, duration, movements, confidence, category)


# ── Fingerspelling tier ──────────────────────────────────────────────────────

LETTER_PATTERNS: tuple[WordGesturePattern, ...] = (
    _spell("HI", 2000, 0.9, "greeting"),
    _spell("BYE", 3000, 0.8, "greeting"),
    _spell("YES", 3000, 0.8, "common"),
    _spell("NO", 2000, 0.9, "common"),
    _spell("OK", 2000, 0.9, "common"),
    _spell("ME", 2000, 0.9, "pronoun"),
    _spell("YOU", 3000, 0.8, "pronoun"),
    _spell("WE", 2000, 0.9, "pronoun"),
    _spell("GO", 2000, 0.9, "action"),
    _spell("EAT", 3000, 0.8, "action"),
    _spell("HELP", 4000, 0.7, "action"),
    _spell("LOVE", 4000, 0.7, "emotion"),
)

# ── Whole-sign tier ──────────────────────────────────────────────────────────

COMPLEX_PATTERNS: tuple[WordGesturePattern, ...] = (
    # pronouns
    _sign("I", ("POINT_SELF",), 800, (_mv("tap", "medium", reps=1),), 0.9, "pronoun"),
    _sign("YOU", ("POINT_FORWARD",), 800, (_mv("tap", "medium", reps=1),), 0.9, "pronoun"),
    _sign("WE", ("POINT_CIRCLE_SELF",), 1000, (_mv("circular", "medium"),), 0.85, "pronoun"),
    _sign("HE", ("POINT_SIDE",), 900, (_mv("tap", "medium", reps=1),), 0.85, "pronoun"),
    _sign("SHE", ("POINT_SIDE",), 900, (_mv("tap", "medium", reps=1),), 0.85, "pronoun"),
    _sign("THEY", ("POINT_ARC",), 1200, (_mv("linear", "medium", "right"),), 0.8, "pronoun"),
    _sign("IT", ("POINT_OBJECT",), 900, (_mv("tap", "medium", reps=1),), 0.85, "pronoun"),
    # actions
    _sign("WANT", ("FLAT_HAND_PULL",), 1000, (_mv("linear", "medium", "toward"),), 0.85, "action"),
    _sign("NEED", ("X_SHAPE",), 1000, (_mv("tap", "medium", reps=1),), 0.85, "action"),
    _sign("LIKE", ("FLAT_HAND_CHEST",), 1000, (_mv("tap", "medium", reps=1),), 0.85, "emotion"),
    _sign("KNOW", ("FLAT_HAND_FOREHEAD",), 900, (_mv("tap", "medium", reps=1),), 0.85, "action"),
    _sign("UNDERSTAND", ("INDEX_UP",), 1000, (_mv("flick", "fast", reps=1),), 0.85, "action"),
    _sign("GO", ("POINT_FORWARD_MOVE",), 1000, (_mv("linear", "medium", "forward"),), 0.85, "action"),
    _sign("COME", ("POINT_PULL",), 1000, (_mv("linear", "medium", "toward"),), 0.85, "action"),
    _sign("LOOK", ("V_SHAPE_FORWARD",), 900, (_mv("linear", "medium", "forward"),), 0.85, "action"),
    _sign("MAKE", ("S_HANDS_TWIST",), 1200, (_mv("twist", "medium", reps=1),), 0.85, "action"),
    _sign("WORK", ("S_HANDS_TAP",), 900, (_mv("tap", "medium", reps=2),), 0.85, "action"),
    # everyday objects
    _sign("HOME", ("FLAT_HAND_CHEEK",), 1000, (_mv("tap", "medium", reps=2),), 0.85, "common"),
    _sign("HOUSE", ("FLAT_HAND_OUTLINE",), 1200, (_mv("linear", "medium", "down"),), 0.85, "common"),
    _sign("CAR", ("S_HANDS_DRIVE",), 1000, (_mv("circular", "medium"),), 0.85, "common"),
    _sign("BOOK", ("FLAT_HAND_OPEN",), 1000, (_mv("open_close", "medium", reps=1),), 0.85, "common"),
    _sign("PHONE", ("Y_HAND_EAR",), 1000, (_mv("tap", "medium", reps=1),), 0.85, "common"),
    _sign("WATER", ("W_TOUCH_CHIN",), 900, (_mv("tap", "medium", reps=1),), 0.85, "common"),
    _sign("FOOD", ("FLAT_O_TO_MOUTH",), 1000, (_mv("tap", "medium", reps=2),), 0.85, "common"),
    # numbers
    _sign("ONE", ("INDEX_UP",), 800, (_mv("static", "slow"),), 0.9, "number"),
    _sign("TWO", ("TWO_UP",), 800, (_mv("static", "slow"),), 0.9, "number"),
    _sign("THREE", ("THREE_UP",), 800, (_mv("static", "slow"),), 0.9, "number"),
    _sign("FOUR", ("FOUR_UP",), 800, (_mv("static", "slow"),), 0.9, "number"),
    _sign("FIVE", ("FIVE_UP",), 800, (_mv("static", "slow"),), 0.9, "number"),
    # colours
    _sign("RED", ("INDEX_CHIN",), 900, (_mv("brush", "medium", reps=2),), 0.85, "color"),
    _sign("BLUE", ("B_SHAKE",), 900, (_mv("shake", "medium", reps=2),), 0.85, "color"),
    _sign("GREEN", ("G_SHAKE",), 900, (_mv("shake", "medium", reps=2),), 0.85, "color"),
    _sign("YELLOW", ("Y_SHAKE",), 900, (_mv("shake", "medium", reps=2),), 0.85, "color"),
    _sign("BLACK", ("INDEX_FOREHEAD",), 900, (_mv("linear", "medium", "right"),), 0.85, "color"),
    # time
    _sign("MORNING", ("B_RISE",), 1200, (_mv("linear", "medium", "up"),), 0.85, "time"),
    _sign("NIGHT", ("B_DOWN",), 1200, (_mv("linear", "medium", "down"),), 0.85, "time"),
    _sign("WEEK", ("INDEX_SLIDE",), 1000, (_mv("linear", "medium", "right"),), 0.85, "time"),
    _sign("MONTH", ("INDEX_DOWN_SLIDE",), 1000, (_mv("linear", "medium", "down"),), 0.85, "time"),
    _sign("YEAR", ("S_CIRCLE",), 1200, (_mv("circular", "medium"),), 0.85, "time"),
    # states
    _sign("SICK", ("MIDDLE_TOUCH_FOREHEAD",), 1000, (_mv("tap", "medium", reps=1),), 0.85, "emotion"),
    _sign("TIRED", ("FLAT_HAND_CHEST_DOWN",), 1200, (_mv("linear", "medium", "down"),), 0.85, "emotion"),
    _sign("AFRAID", ("S_OPEN",), 1200, (_mv("open_close", "medium", reps=1),), 0.85, "emotion"),
    _sign("EXCITED", ("MIDDLE_CHEST",), 1000, (_mv("circular", "medium"),), 0.85, "emotion"),
    _sign("BORED", ("INDEX_NOSE",), 1000, (_mv("twist", "medium", reps=1),), 0.85, "emotion"),
    # questions
    _sign("WHO", ("L_CHIN",), 1000, (_mv("wiggle", "medium", reps=2),), 0.85, "question"),
    _sign("WHICH", ("A_SHAKE",), 1000, (_mv("shake", "medium", reps=2),), 0.85, "question"),
    # family
    _sign("BROTHER", ("L_FOREHEAD_DOWN",), 1200, (_mv("linear", "medium", "down"),), 0.85, "family"),
    _sign("SISTER", ("L_CHIN_DOWN",), 1200, (_mv("linear", "medium", "down"),), 0.85, "family"),
    _sign("BABY", ("CRADLE_ARMS",), 1500, (_mv("rock", "slow"),), 0.9, "family"),
    _sign("CHILD", ("FLAT_HAND_DOWN",), 1000, (_mv("tap", "medium", reps=1),), 0.85, "family"),
    _sign("FRIEND", ("HOOK_INDEX",), 1000, (_mv("tap", "medium", reps=2),), 0.85, "relationship"),
    # school
    _sign("SCHOOL", ("CLAP_FLAT",), 1000, (_mv("tap", "medium", reps=2),), 0.85, "education"),
    _sign("TEACHER", ("FLAT_HAND_FOREHEAD_OUT",), 1200, (_mv("linear", "medium", "forward"),), 0.85, "education"),
    _sign("STUDENT", ("GRAB_HEAD_DROP",), 1200, (_mv("linear", "medium", "down"),), 0.85, "education"),
    _sign("LEARN", ("FLAT_HAND_TO_FOREHEAD",), 1200, (_mv("linear", "medium", "up"),), 0.85, "education"),
    _sign("READ", ("V_EYES_DOWN",), 1000, (_mv("linear", "slow", "down"),), 0.85, "education"),
    # places
    _sign("STORE", ("FLICK_HANDS_OUT",), 1000, (_mv("flick", "fast", reps=2),), 0.85, "place"),
    _sign("BATHROOM", ("T_SHAKE",), 900, (_mv("shake", "medium", reps=2),), 0.85, "place"),
    _sign("HOSPITAL", ("H_TAP_SHOULDER",), 1000, (_mv("tap", "medium", reps=2),), 0.85, "place"),
    _sign("DOCTOR", ("D_TAP_WRIST",), 1000, (_mv("tap", "medium", reps=2),), 0.85, "place"),
    _sign("CHURCH", ("C_TAP_FIST",), 1000, (_mv("tap", "medium", reps=2),), 0.85, "place"),
    # modifiers
    _sign("MORE", ("FLAT_O_TOUCH",), 900, (_mv("tap", "medium", reps=2),), 0.85, "modifier"),
    _sign("AGAIN", ("FLAT_BENT",), 1000, (_mv("tap", "medium", reps=2),), 0.85, "modifier"),
    _sign("WITH", ("A_JOIN",), 900, (_mv("merge", "medium"),), 0.85, "modifier"),
    _sign("WITHOUT", ("A_SPLIT",), 900, (_mv("split", "medium"),), 0.85, "modifier"),
    _sign("NEAR", ("FLAT_HAND_APPROACH",), 1000, (_mv("linear", "slow", "toward"),), 0.85, "modifier"),
    # technology
    _sign("COMPUTER", ("C_CIRCULAR_HEAD",), 1200, (_mv("circular", "medium"),), 0.85, "technology"),
    _sign("INTERNET", ("MIDDLE_TOUCH",), 1200, (_mv("tap", "medium", reps=2),), 0.85, "technology"),
    _sign("EMAIL", ("C_FLICK_FORWARD",), 1000, (_mv("flick", "fast", reps=1),), 0.85, "technology"),
    _sign("TEXT", ("TYPE_THUMB",), 1000, (_mv("tap", "medium", reps=2),), 0.85, "technology"),
    _sign("CAMERA", ("C_FRAME_FACE",), 1000, (_mv("static", "slow"),), 0.85, "technology"),
    # adjectives
    _sign("BIG", ("SPREAD_ARMS",), 1000, (_mv("linear", "medium", "outward"),), 0.85, "adjective"),
    _sign("SMALL", ("FINGERS_CLOSE",), 1000, (_mv("linear", "medium", "inward"),), 0.85, "adjective"),
    _sign("FAST", ("F_HAND_QUICK",), 800, (_mv("flick", "fast", reps=2),), 0.85, "adjective"),
    _sign("SLOW", ("FLAT_HAND_DRAG",), 1200, (_mv("linear", "slow", "forward"),), 0.85, "adjective"),
    _sign("GOOD", ("FLAT_HAND_CHIN_OUT",), 1000, (_mv("linear", "medium", "forward"),), 0.85, "adjective"),
    # greetings and everyday phrases
    _sign("HELLO", ("OPEN_HAND", "WAVE"), 1500, (_mv("shake", "medium", reps=2),), 0.9, "greeting"),
    _sign("HI", ("WAVE",), 1000, (_mv("shake", "fast", reps=3),), 0.85, "greeting"),
    _sign("BYE", ("OPEN_HAND", "WAVE"), 2000, (_mv("shake", "slow", reps=4),), 0.9, "greeting"),
    _sign("GOODBYE", ("OPEN_HAND", "WAVE", "CLOSE"), 3000, (_mv("linear", "slow", "right"),), 0.8, "greeting"),
    _sign("YES", ("FIST", "NOD"), 1200, (_mv("linear", "medium", "down", reps=2),), 0.9, "common"),
    _sign("NO", ("INDEX_MIDDLE", "SHAKE"), 1000, (_mv("shake", "fast", reps=3),), 0.85, "common"),
    _sign("PLEASE", ("OPEN_HAND", "CIRCULAR"), 1500, (_mv("circular", "medium"),), 0.8, "common"),
    _sign("THANK_YOU", ("OPEN_HAND", "FORWARD"), 1800, (_mv("linear", "medium", "forward"),), 0.9, "common"),
    _sign("SORRY", ("FIST", "CIRCULAR"), 2000, (_mv("circular", "slow"),), 0.8, "emotion"),
    _sign("WHAT", ("INDEX", "SHAKE"), 800, (_mv("shake", "fast", reps=2),), 0.85, "question"),
    _sign(
        "WHERE", ("INDEX", "POINT"), 1000,
        (_mv("linear", "medium", "left"), _mv("linear", "medium", "right")),
        0.8, "question",
    ),
    _sign("WHEN", ("INDEX", "CIRCULAR"), 1200, (_mv("circular", "medium"),), 0.75, "question"),
    _sign("HOW", ("FIST", "ROLL"), 1500, (_mv("circular", "slow"),), 0.8, "question"),
    _sign("WHY", ("Y_HAND", "TOUCH_FOREHEAD"), 1200, (_mv("tap", "medium", reps=1),), 0.85, "question"),
    _sign("MOTHER", ("FIVE", "TOUCH_CHIN"), 1000, (_mv("tap", "medium", reps=1),), 0.9, "family"),
    _sign("FATHER", ("FIVE", "TOUCH_FOREHEAD"), 1000, (_mv("tap", "medium", reps=1),), 0.9, "family"),
    _sign("FAMILY", ("F", "CIRCULAR"), 2000, (_mv("circular", "slow"),), 0.8, "family"),
    _sign("EAT", ("PINCH", "TO_MOUTH"), 1000, (_mv("linear", "medium", "up", reps=2),), 0.85, "action"),
    _sign("DRINK", ("C_SHAPE", "TO_MOUTH"), 1200, (_mv("linear", "slow", "up"),), 0.8, "action"),
    _sign("SLEEP", ("FLAT_HAND", "TO_CHEEK"), 1500, (_mv("static", "slow"),), 0.85, "action"),
    _sign("HELP", ("FIST_ON_PALM", "UP"), 1200, (_mv("linear", "medium", "up"),), 0.9, "action"),
    _sign("HAPPY", ("FLAT_HAND", "UP_CHEST"), 1000, (_mv("linear", "fast", "up", reps=2),), 0.85, "emotion"),
    _sign("SAD", ("FIVE", "DOWN_FACE"), 1500, (_mv("linear", "slow", "down"),), 0.8, "emotion"),
    _sign("LOVE", ("CROSSED_ARMS",), 2000, (_mv("static", "slow"),), 0.9, "emotion"),
    _sign("TODAY", ("NOW", "DAY"), 1800, (_mv("linear", "medium", "down"),), 0.8, "common"),
    _sign("TOMORROW", ("A", "FORWARD"), 1500, (_mv("linear", "medium", "forward"),), 0.75, "common"),
    _sign("YESTERDAY", ("A", "BACKWARD"), 1500, (_mv("linear", "medium", "backward"),), 0.75, "common"),
)

# ── Token synonyms ───────────────────────────────────────────────────────────


class SynonymGroup(Enum):
    """Hand-shape names that also accept these observed tokens.

    The member name is the token written in :data:`COMPLEX_PATTERNS`; the
    value is the set of alternative tokens a classifier may produce.
    """

    OPEN_HAND = frozenset({"FIVE", "FLAT_HAND"})
    FIST = frozenset({"A", "S"})
    INDEX = frozenset({"D", "POINT"})
    PINCH = frozenset({"F", "O"})
    C_SHAPE = frozenset({"C", "O"})
    Y_HAND = frozenset({"Y", "I_LOVE_YOU"})


# Tokens a provider may emit that never appear as a pattern gesture.
EXTERNAL_TOKENS = frozenset({"I_LOVE_YOU"})


def tokens_match(expected: str, observed: str) -> bool:
    """Exact match, or *observed* is a listed synonym of *expected*."""
    if not expected or not observed:
        return False
    if expected == observed:
        return True
    group = SynonymGroup.__members__.get(expected)
    return group is not None and observed in group.value


def _validate_synonyms(patterns: tuple[WordGesturePattern, ...]) -> None:
    known = {g for p in patterns for g in p.gestures}
    letters = set(string.ascii_uppercase)
    for group in SynonymGroup:
        if group.name not in known:
            raise ValueError(f"Synonym group {group.name} is not used by any pattern")
        unknown = group.value - known - letters - EXTERNAL_TOKENS
        if unknown:
            raise ValueError(f"Synonym group {group.name} lists unknown tokens: {sorted(unknown)}")


_validate_synonyms(COMPLEX_PATTERNS)


# ── Vocabulary container ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Vocabulary:
    letter_patterns: tuple[WordGesturePattern, ...]
    complex_patterns: tuple[WordGesturePattern, ...]

    def words_by_category(self, category: str) -> list[str]:
        """Letter-tier words first, then complex-tier words, table order."""
        return [
            p.word
            for p in self.letter_patterns + self.complex_patterns
            if p.category == category
        ]

    @property
    def categories(self) -> list[str]:
        seen: dict[str, None] = {}
        for p in self.letter_patterns + self.complex_patterns:
            seen.setdefault(p.category, None)
        return list(seen)


DEFAULT_VOCABULARY = Vocabulary(LETTER_PATTERNS, COMPLEX_PATTERNS)
