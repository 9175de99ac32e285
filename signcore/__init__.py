"""
signcore – real-time sign-language recognition core.

Exposes the pipeline components:
    LetterClassifier  – 21-point hand snapshot → alphabet letter
    MovementDetector  – wrist trajectory → static / linear / circular
    SequenceBuffer    – bounded, timeout-resetting token queue
    WordMatcher       – buffered tokens → best word + suggestions
    WordRecognizer    – buffer and matcher bundled for one user
    WordPredictor     – prefix completion over a common-word list
    GlossTranslator   – recognised words → display text
    SignSession       – per-user façade wiring all of the above
"""

from .letter_classifier import LetterClassifier
from .movement import MovementDetector, MovementPattern
from .results import ClassificationResult, Quality, WordRecognitionResult
from .sequence_buffer import SequenceBuffer
from .session import SignSession
from .translator import GlossTranslator
from .vocabulary import DEFAULT_VOCABULARY, Vocabulary, WordGesturePattern
from .word_matcher import WordMatcher, WordRecognizer
from .word_predictor import WordPredictor

__all__ = [
    "LetterClassifier",
    "MovementDetector",
    "MovementPattern",
    "ClassificationResult",
    "Quality",
    "WordRecognitionResult",
    "SequenceBuffer",
    "SignSession",
    "GlossTranslator",
    "DEFAULT_VOCABULARY",
    "Vocabulary",
    "WordGesturePattern",
    "WordMatcher",
    "WordRecognizer",
    "WordPredictor",
]
