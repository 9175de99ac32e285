"""
letter_classifier.py – Map one 21-point hand snapshot to an ASL letter.

Two stages:

* **Feature extraction**
    Each non-thumb finger is *extended* when its MCP–PIP–TIP angle is
    nearly straight (> 140°) **and** the tip sits above the PIP joint in
    image space.  The thumb has no reliable PIP, so it is extended when
    its tip is well away from the index MCP (> 0.08) and the MCP–IP–TIP
    angle exceeds 120°.

* **Rule table**
    :data:`LETTER_RULES` is an ordered list of ``(bucket, predicate,
    letter, confidence)`` entries.  The bucket is the number of extended
    fingers (0–5); inside a bucket secondary geometry (fingertip contact,
    tip spread, crossing, orientation) picks the letter.  The first rule
    that matches wins, so the order *is* the tie-break between overlapping
    hand shapes.

A short rolling history smooths single-frame jitter: when the same letter
holds a majority of the last five confident frames it overrides the
current frame and earns a small confidence bonus.
"""

from __future__ import annotations

import logging
from collections import Counter, deque
from dataclasses import dataclass
from typing import Any, Callable

import numpy as np

from signcore.config import ClassifierConfig
from signcore.landmarks import (
    FINGER_JOINTS,
    INDEX_JOINTS,
    MIDDLE_JOINTS,
    THUMB_IP_IDX,
    THUMB_MCP_IDX,
    THUMB_TIP_IDX,
    distance_2d,
    joint_angle,
    palm_size,
    to_array,
)
from signcore.results import ClassificationResult

logger = logging.getLogger(__name__)

# ── Feature extraction ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class HandFeatures:
    """Per-finger state of one snapshot plus the raw ``(21, 3)`` points."""

    points: np.ndarray
    extended: dict[str, bool]
    angles: dict[str, float]

    @property
    def extended_count(self) -> int:
        return sum(1 for v in self.extended.values() if v)

    def is_extended(self, *fingers: str) -> bool:
        return all(self.extended[f] for f in fingers)

    def dist(self, a: int, b: int) -> float:
        return distance_2d(self.points[a], self.points[b])


def _finger_extended(pts: np.ndarray, joints: tuple[int, int, int, int], min_angle: float) -> tuple[bool, float]:
    mcp, pip, _, tip = joints
    angle = joint_angle(pts[mcp], pts[pip], pts[tip])
    return angle > min_angle and pts[tip][1] < pts[pip][1], angle


def _thumb_extended(pts: np.ndarray, cfg: ClassifierConfig) -> tuple[bool, float]:
    angle = joint_angle(pts[THUMB_MCP_IDX], pts[THUMB_IP_IDX], pts[THUMB_TIP_IDX])
    far = distance_2d(pts[THUMB_TIP_IDX], pts[INDEX_JOINTS[0]]) > cfg.thumb_extension_dist
    return far and angle > cfg.thumb_extension_angle_deg, angle


def extract_features(landmarks: Any, cfg: ClassifierConfig | None = None) -> HandFeatures | None:
    """Compute finger states, or ``None`` for anything but 21 valid points."""
    cfg = cfg or ClassifierConfig()
    pts = to_array(landmarks)
    if pts is None:
        return None

    extended: dict[str, bool] = {}
    angles: dict[str, float] = {}
    extended["thumb"], angles["thumb"] = _thumb_extended(pts, cfg)
    for name, joints in FINGER_JOINTS.items():
        extended[name], angles[name] = _finger_extended(pts, joints, cfg.extension_angle_deg)
    return HandFeatures(points=pts, extended=extended, angles=angles)


# ── Rule table ───────────────────────────────────────────────────────────────

Predicate = Callable[[HandFeatures, ClassifierConfig], bool]

_INDEX_MCP, _INDEX_TIP = INDEX_JOINTS[0], INDEX_JOINTS[3]
_MIDDLE_MCP, _MIDDLE_PIP, _MIDDLE_TIP = MIDDLE_JOINTS[0], MIDDLE_JOINTS[1], MIDDLE_JOINTS[3]


@dataclass(frozen=True)
class LetterRule:
    extended_count: int
    letter: str
    confidence: float
    description: str
    predicate: Predicate

    def matches(self, features: HandFeatures, cfg: ClassifierConfig) -> bool:
        return features.extended_count == self.extended_count and self.predicate(features, cfg)


def _fingers(*names: str) -> Predicate:
    return lambda f, cfg: f.is_extended(*names)


def _always(f: HandFeatures, cfg: ClassifierConfig) -> bool:
    return True


def _tips_ring_thumb(f: HandFeatures, cfg: ClassifierConfig) -> bool:
    return (
        f.dist(THUMB_TIP_IDX, _INDEX_TIP) < cfg.touch_dist
        and f.dist(THUMB_TIP_IDX, _MIDDLE_TIP) < cfg.touch_dist * 1.4
    )


def _thumb_across_fingers(f: HandFeatures, cfg: ClassifierConfig) -> bool:
    return f.dist(THUMB_TIP_IDX, _MIDDLE_PIP) < cfg.touch_dist


def _curved_hand(f: HandFeatures, cfg: ClassifierConfig) -> bool:
    bent = all(90.0 <= f.angles[name] < cfg.extension_angle_deg for name in FINGER_JOINTS)
    return bent and f.dist(THUMB_TIP_IDX, _INDEX_TIP) > cfg.touch_dist


def _thumb_on_middle(f: HandFeatures, cfg: ClassifierConfig) -> bool:
    return f.is_extended("index") and f.dist(THUMB_TIP_IDX, _MIDDLE_TIP) < cfg.touch_dist


def _index_middle_crossed(f: HandFeatures, cfg: ClassifierConfig) -> bool:
    if not f.is_extended("index", "middle"):
        return False
    base = f.points[_INDEX_MCP][0] - f.points[_MIDDLE_MCP][0]
    tips = f.points[_INDEX_TIP][0] - f.points[_MIDDLE_TIP][0]
    return base * tips < 0


def _index_middle_sideways(f: HandFeatures, cfg: ClassifierConfig) -> bool:
    if not f.is_extended("index", "middle"):
        return False
    dx, dy = (f.points[_INDEX_TIP] - f.points[_INDEX_MCP])[:2]
    return abs(dx) > abs(dy)


def _index_middle_spread(f: HandFeatures, cfg: ClassifierConfig) -> bool:
    return f.is_extended("index", "middle") and f.dist(_INDEX_TIP, _MIDDLE_TIP) > cfg.spread_dist


def _index_circle_three_up(f: HandFeatures, cfg: ClassifierConfig) -> bool:
    return (
        f.is_extended("middle", "ring", "pinky")
        and f.dist(THUMB_TIP_IDX, _INDEX_TIP) < cfg.touch_dist
    )


LETTER_RULES: tuple[LetterRule, ...] = (
    # no fingers extended
    LetterRule(0, "O", 0.75, "Fingertips touching thumb", _tips_ring_thumb),
    LetterRule(0, "S", 0.8, "Closed fist, thumb across fingers", _thumb_across_fingers),
    LetterRule(0, "C", 0.7, "Curved hand", _curved_hand),
    LetterRule(0, "A", 0.8, "Closed fist, thumb alongside", _always),
    # one
    LetterRule(1, "D", 0.9, "Index up, thumb touching middle finger", _thumb_on_middle),
    LetterRule(1, "D", 0.6, "Index finger up (approximation)", _fingers("index")),
    LetterRule(1, "I", 0.85, "Pinky up", _fingers("pinky")),
    LetterRule(1, "A", 0.7, "Thumb up (approximation)", _fingers("thumb")),
    # two
    LetterRule(2, "L", 0.85, "Thumb and index", _fingers("thumb", "index")),
    LetterRule(2, "Y", 0.85, "Thumb and pinky", _fingers("thumb", "pinky")),
    LetterRule(2, "R", 0.75, "Index and middle crossed", _index_middle_crossed),
    LetterRule(2, "H", 0.7, "Index and middle pointing sideways", _index_middle_sideways),
    LetterRule(2, "V", 0.85, "Peace sign", _index_middle_spread),
    LetterRule(2, "U", 0.8, "Index and middle together", _fingers("index", "middle")),
    # three
    LetterRule(3, "W", 0.85, "Three middle fingers", _fingers("index", "middle", "ring")),
    LetterRule(3, "F", 0.85, "Thumb and index circle, three fingers up", _index_circle_three_up),
    LetterRule(3, "K", 0.7, "Thumb, index and middle", _fingers("thumb", "index", "middle")),
    # four
    LetterRule(4, "B", 0.85, "Flat hand, thumb tucked", _fingers("index", "middle", "ring", "pinky")),
    # five
    LetterRule(5, "B", 0.7, "Open hand (approximation)", _always),
)

UNKNOWN_CONFIDENCE = 0.3
DEGENERATE_CONFIDENCE = 0.2


def apply_rules(
    features: HandFeatures,
    cfg: ClassifierConfig,
    rules: tuple[LetterRule, ...] = LETTER_RULES,
) -> ClassificationResult:
    """Return the result of the first matching rule, or ``'?'``."""
    if palm_size(features.points) < 1e-6:
        return ClassificationResult.make("?", DEGENERATE_CONFIDENCE, "Degenerate hand pose")

    for rule in rules:
        if rule.matches(features, cfg):
            return ClassificationResult.make(rule.letter, rule.confidence, rule.description)

    n = features.extended_count
    return ClassificationResult.make("?", UNKNOWN_CONFIDENCE, f"{n} fingers extended")


# ── Temporal stabilisation ───────────────────────────────────────────────────


class _LetterHistory:
    """Fixed-length vote buffer of recent confident letters."""

    def __init__(self, size: int) -> None:
        self._buf: deque[str] = deque(maxlen=size)

    def clear(self) -> None:
        self._buf.clear()

    def __len__(self) -> int:
        return len(self._buf)

    def push(self, letter: str) -> tuple[str, int]:
        """Add *letter* and return the current ``(mode, count)``."""
        self._buf.append(letter)
        return Counter(self._buf).most_common(1)[0]

    def snapshot(self) -> tuple[str, ...]:
        return tuple(self._buf)


# ── Public API ───────────────────────────────────────────────────────────────


class LetterClassifier:
    """Rule-based static-letter classifier with majority-vote smoothing.

    One instance per tracked hand.  Call :meth:`clear_history` whenever the
    provider reports no hand; the classifier never times out on its own.
    """

    def __init__(
        self,
        config: ClassifierConfig | None = None,
        rules: tuple[LetterRule, ...] = LETTER_RULES,
    ) -> None:
        self.config = config or ClassifierConfig()
        self.rules = rules
        self._history = _LetterHistory(self.config.history_size)

    @property
    def history(self) -> tuple[str, ...]:
        return self._history.snapshot()

    def clear_history(self) -> None:
        self._history.clear()

    def classify_raw(self, landmarks: Any) -> ClassificationResult:
        """Single-frame classification, no history involved."""
        features = extract_features(landmarks, self.config)
        if features is None:
            logger.debug("Rejected hand snapshot: expected %d valid points", 21)
            return ClassificationResult.invalid()
        return apply_rules(features, self.config, self.rules)

    def classify(self, landmarks: Any) -> ClassificationResult:
        """Classify a snapshot and fold it into the rolling history."""
        result = self.classify_raw(landmarks)
        if result.confidence <= self.config.history_min_confidence:
            return result

        mode, count = self._history.push(result.letter)
        if count < self.config.majority:
            return result

        confidence = min(result.confidence + self.config.stability_bonus, 1.0)
        if mode == result.letter:
            description = result.description
        else:
            description = f"Stabilized to {mode} (frame read {result.letter})"
        return ClassificationResult.make(mode, confidence, description)
