"""
sequence_buffer.py – Bounded, timeout-resetting queue of recognised tokens.

Each entry is ``(token, timestamp_ms, landmarks)``; a movement descriptor
is derived on every append and kept in a parallel list.  The buffer never
reads a clock: callers pass monotonically non-decreasing timestamps.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Sequence

from signcore.config import BufferConfig
from signcore.movement import MovementDetector, MovementPattern
from signcore.results import SequenceStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BufferedToken:
    token: str
    timestamp: float
    landmarks: Any


class SequenceBuffer:
    """Per-session token history.

    * A gap longer than ``timeout_ms`` since the previous append clears the
      buffer before the new token goes in.
    * Past ``max_length`` entries the oldest is evicted (FIFO), together
      with its movement.
    """

    def __init__(
        self,
        config: BufferConfig | None = None,
        detector: MovementDetector | None = None,
    ) -> None:
        self.config = config or BufferConfig()
        self.detector = detector or MovementDetector()
        self._entries: deque[BufferedToken] = deque()
        self._movements: deque[MovementPattern] = deque()
        self._last_timestamp: float | None = None

    def __len__(self) -> int:
        return len(self._entries)

    # ── Mutation ─────────────────────────────────────────────────────────

    def add_token(self, token: str, landmarks: Any, timestamp: float) -> MovementPattern:
        """Append *token* and return the movement derived for it."""
        if (
            self._last_timestamp is not None
            and timestamp - self._last_timestamp > self.config.timeout_ms
        ):
            logger.debug(
                "Gesture gap %.0f ms exceeds %.0f ms; clearing %d buffered token(s)",
                timestamp - self._last_timestamp, self.config.timeout_ms, len(self._entries),
            )
            self.clear()

        self._entries.append(BufferedToken(token, timestamp, landmarks))
        movement = self.detector.detect(e.landmarks for e in self._entries)
        self._movements.append(movement)

        if len(self._entries) > self.config.max_length:
            evicted = self._entries.popleft()
            self._movements.popleft()
            logger.debug("Evicted oldest token %r", evicted.token)

        self._last_timestamp = timestamp
        return movement

    def clear(self) -> None:
        self._entries.clear()
        self._movements.clear()
        self._last_timestamp = None

    # ── Views ────────────────────────────────────────────────────────────

    @property
    def tokens(self) -> list[str]:
        return [e.token for e in self._entries]

    @property
    def timestamps(self) -> list[float]:
        return [e.timestamp for e in self._entries]

    @property
    def movements(self) -> list[MovementPattern]:
        return list(self._movements)

    @property
    def entries(self) -> list[BufferedToken]:
        return list(self._entries)

    @property
    def last_token(self) -> str | None:
        return self._entries[-1].token if self._entries else None

    @property
    def duration(self) -> float:
        """Milliseconds between the first and last buffered token."""
        if len(self._entries) < 2:
            return 0.0
        return self._entries[-1].timestamp - self._entries[0].timestamp

    def get_status(self, suggestions: Sequence[str] = ()) -> SequenceStatus:
        return SequenceStatus(
            length=len(self._entries),
            duration=self.duration,
            last_token=self.last_token,
            suggestions=list(suggestions),
        )
