"""
config.py – Named thresholds for every stage of the recognition pipeline.

The numbers are empirical: they were tuned by hand against webcam footage
and have no closed-form derivation.  They are kept here as overridable
defaults rather than buried in the algorithms.

    from signcore.config import ClassifierConfig
    strict = ClassifierConfig(extension_angle_deg=150.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# ── Letter classification ────────────────────────────────────────────────────

EXTENSION_ANGLE_DEG = 140.0      # MCP–PIP–TIP angle above which a finger is straight
THUMB_EXTENSION_DIST = 0.08      # thumb tip ↔ index MCP
THUMB_EXTENSION_ANGLE_DEG = 120.0
TOUCH_DIST = 0.05                # fingertip contact (D, F, O)
SPREAD_DIST = 0.08               # index ↔ middle tip gap separating V from U
HISTORY_SIZE = 5
HISTORY_MIN_CONFIDENCE = 0.5
STABILITY_BONUS = 0.1

# ── Movement ─────────────────────────────────────────────────────────────────

STATIC_CUTOFF = 0.02
FAST_DISTANCE = 0.1
MEDIUM_DISTANCE = 0.05
CIRCULAR_AREA = 0.01
MOVEMENT_SAMPLES = 3

# ── Sequence buffer ──────────────────────────────────────────────────────────

MAX_SEQUENCE_LENGTH = 10
GESTURE_TIMEOUT_MS = 3000.0

# ── Word matching ────────────────────────────────────────────────────────────

LETTER_THRESHOLD = 0.6
COMPLEX_THRESHOLD = 0.5
SUGGESTION_THRESHOLD = 0.3
MAX_SUGGESTIONS = 5
HISTORY_CAPACITY = 5
HISTORY_ENTRY_CONFIDENCE = 0.6

GESTURE_WEIGHT = 0.4
MOVEMENT_WEIGHT = 0.3
TIMING_WEIGHT = 0.2
COMPLETENESS_WEIGHT = 0.1

# ── Session ──────────────────────────────────────────────────────────────────

MIN_TOKEN_CONFIDENCE = 0.6
ACCEPT_CONFIDENCE = 0.7


@dataclass(frozen=True)
class ClassifierConfig:
    extension_angle_deg: float = EXTENSION_ANGLE_DEG
    thumb_extension_dist: float = THUMB_EXTENSION_DIST
    thumb_extension_angle_deg: float = THUMB_EXTENSION_ANGLE_DEG
    touch_dist: float = TOUCH_DIST
    spread_dist: float = SPREAD_DIST
    history_size: int = HISTORY_SIZE
    history_min_confidence: float = HISTORY_MIN_CONFIDENCE
    stability_bonus: float = STABILITY_BONUS

    def __post_init__(self) -> None:
        if self.history_size < 1:
            raise ValueError(f"history_size must be >= 1, got {self.history_size}")

    @property
    def majority(self) -> int:
        """Votes needed for the history mode to override a frame."""
        return math.ceil(self.history_size / 2)


@dataclass(frozen=True)
class MovementConfig:
    static_cutoff: float = STATIC_CUTOFF
    fast_distance: float = FAST_DISTANCE
    medium_distance: float = MEDIUM_DISTANCE
    circular_area: float = CIRCULAR_AREA
    samples: int = MOVEMENT_SAMPLES

    def __post_init__(self) -> None:
        if self.samples < 2:
            raise ValueError(f"samples must be >= 2, got {self.samples}")


@dataclass(frozen=True)
class BufferConfig:
    max_length: int = MAX_SEQUENCE_LENGTH
    timeout_ms: float = GESTURE_TIMEOUT_MS

    def __post_init__(self) -> None:
        if self.max_length < 1:
            raise ValueError(f"max_length must be >= 1, got {self.max_length}")
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be > 0, got {self.timeout_ms}")


@dataclass(frozen=True)
class MatcherConfig:
    letter_threshold: float = LETTER_THRESHOLD
    complex_threshold: float = COMPLEX_THRESHOLD
    suggestion_threshold: float = SUGGESTION_THRESHOLD
    max_suggestions: int = MAX_SUGGESTIONS
    history_capacity: int = HISTORY_CAPACITY
    history_entry_confidence: float = HISTORY_ENTRY_CONFIDENCE
    gesture_weight: float = GESTURE_WEIGHT
    movement_weight: float = MOVEMENT_WEIGHT
    timing_weight: float = TIMING_WEIGHT
    completeness_weight: float = COMPLETENESS_WEIGHT

    def __post_init__(self) -> None:
        total = (
            self.gesture_weight
            + self.movement_weight
            + self.timing_weight
            + self.completeness_weight
        )
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"scoring weights must sum to 1.0, got {total}")
        if self.history_capacity < 1:
            raise ValueError(f"history_capacity must be >= 1, got {self.history_capacity}")


@dataclass(frozen=True)
class SessionConfig:
    min_token_confidence: float = MIN_TOKEN_CONFIDENCE
    accept_confidence: float = ACCEPT_CONFIDENCE
