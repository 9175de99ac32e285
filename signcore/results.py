"""Result types shared by the letter and word stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Quality(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


def quality_for(confidence: float) -> Quality:
    """Bucket a confidence score: ≥0.9 excellent, ≥0.7 good, ≥0.5 fair."""
    if confidence != confidence:  # NaN
        return Quality.POOR
    if confidence >= 0.9:
        return Quality.EXCELLENT
    if confidence >= 0.7:
        return Quality.GOOD
    if confidence >= 0.5:
        return Quality.FAIR
    return Quality.POOR


@dataclass(frozen=True)
class ClassificationResult:
    """One frame's letter guess."""

    letter: str
    confidence: float
    quality: Quality
    description: str

    @classmethod
    def make(cls, letter: str, confidence: float, description: str) -> "ClassificationResult":
        return cls(letter, confidence, quality_for(confidence), description)

    @classmethod
    def invalid(cls) -> "ClassificationResult":
        return cls("", 0.0, Quality.POOR, "Invalid hand data")


@dataclass(frozen=True)
class WordRecognitionResult:
    word: str
    confidence: float
    category: str
    description: str
    gestures: tuple[str, ...]
    quality: Quality
    completeness: float


@dataclass(frozen=True)
class SequenceStatus:
    length: int
    duration: float
    last_token: str | None
    suggestions: list[str] = field(default_factory=list)
