"""
replay.py – Replay a recorded hand-landmark session.

Pipeline:
  landmark recording  ──►  LetterClassifier  ──►  SequenceBuffer / WordMatcher  ──►  stdout

A recording is JSON lines, one frame per line::

    {"t": 1033.3, "landmarks": [[x, y, z], ... 21 points ...]}
    {"t": 1066.7, "landmarks": null}            # no hand this frame

Usage
-----
    signcore-replay session.jsonl                 # phrase-table translation
    signcore-replay - < session.jsonl             # read stdin
    signcore-replay session.jsonl --stable-frames 5 --quiet-ms 1200
    signcore-replay session.jsonl --translator llama_cpp --model models/llm.gguf
    signcore-replay session.jsonl --verbose       # library debug logging
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Iterator, TextIO

from signcore.session import SignSession
from signcore.translator import GlossTranslator

logger = logging.getLogger(__name__)

# ── Letter commit ────────────────────────────────────────────────────────────
# A letter is committed only after the classifier has returned it for a
# minimum number of consecutive frames; a word is attempted once no letter
# has been committed for QUIET_MS.

STABLE_FRAMES = 8
QUIET_MS = 1500.0


def read_frames(stream: TextIO) -> Iterator[tuple[float, Any]]:
    """Yield ``(t_ms, landmarks | None)`` per recording line; bad lines are skipped."""
    for lineno, line in enumerate(stream, 1):
        line = line.strip()
        if not line:
            continue
        try:
            record = json.loads(line)
            t = float(record["t"])
        except (ValueError, KeyError, TypeError, OverflowError) as exc:
            logger.warning("Skipping line %d: %s", lineno, exc)
            continue
        yield t, record.get("landmarks")


# ── Main loop ────────────────────────────────────────────────────────────────


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="SignCore – replay a hand-landmark recording")
    p.add_argument("recording", nargs="?", default="-", help="JSON-lines file, or - for stdin")
    p.add_argument(
        "--stable-frames",
        type=int,
        default=STABLE_FRAMES,
        help=f"Consecutive frames a letter must hold before it is committed (default {STABLE_FRAMES})",
    )
    p.add_argument(
        "--quiet-ms",
        type=float,
        default=QUIET_MS,
        help=f"Gap without a new letter that triggers word recognition (default {QUIET_MS:.0f})",
    )
    p.add_argument(
        "--translator",
        choices=("phrase", "llama_cpp", "transformers"),
        default="phrase",
        help="Text backend for recognised words",
    )
    p.add_argument("--model", type=str, default=None, help="Model path / id for the LLM backends")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


class _Replay:
    """Frame-by-frame commit logic around one :class:`SignSession`."""

    def __init__(self, session: SignSession, stable_frames: int, quiet_ms: float) -> None:
        self.session = session
        self.stable_frames = stable_frames
        self.quiet_ms = quiet_ms
        self.candidate: str | None = None
        self.run = 0
        self.last_commit_t: float | None = None
        self.words: list[str] = []

    def feed(self, t: float, landmarks: Any) -> None:
        if self.last_commit_t is not None and t - self.last_commit_t > self.quiet_ms:
            self.flush()

        if landmarks is None:
            self.session.hand_lost()
            self.candidate, self.run = None, 0
            return

        result = self.session.process_frame(landmarks)
        if not result.letter or result.letter == "?":
            self.candidate, self.run = None, 0
            return

        if result.letter == self.candidate:
            self.run += 1
        else:
            self.candidate, self.run = result.letter, 1

        if self.run == self.stable_frames:
            if self.session.push_gesture(result.letter, landmarks, result.confidence, t):
                self.session.add_letter(result.letter, result.confidence)
                self.last_commit_t = t
                print(f"  >> LETTER: {result.letter}  ({result.confidence:.2f}, {result.quality.value})")

    def flush(self) -> None:
        """Try to turn what has been buffered into a word."""
        self.last_commit_t = None
        if self.session.status().length == 0:
            return

        attempt = self.session.attempt_recognition()
        if attempt.accepted:
            self.words.append(attempt.result.word)
            print(f"  >> WORD: {attempt.result.word}  ({attempt.result.confidence:.2f})  \"{attempt.text}\"")
        else:
            suggestions = self.session.suggestions()
            spelled = self.session.current_word
            print(f"  >> no word for {spelled or '-'}; suggestions: {', '.join(suggestions) or 'none'}")
            predictions = self.session.predictions()
            if predictions:
                print(f"     completions: {', '.join(predictions)}")
            self.session.recognizer.clear()
        self.session.clear_word()


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # ── Initialise pipeline components ───────────────────────────────────
    try:
        translator = GlossTranslator(backend=args.translator, model_path=args.model)
    except ValueError as exc:
        print(f"[SignCore] {exc}", file=sys.stderr)
        sys.exit(2)
    session = SignSession(translator=translator)
    replay = _Replay(session, args.stable_frames, args.quiet_ms)

    print(f"[SignCore] Translator     : {translator.backend}")
    print(f"[SignCore] Stable frames  : {args.stable_frames}")
    print(f"[SignCore] Quiet gap (ms) : {args.quiet_ms:.0f}\n")

    # ── Replay loop ──────────────────────────────────────────────────────
    try:
        if args.recording == "-":
            for t, landmarks in read_frames(sys.stdin):
                replay.feed(t, landmarks)
        else:
            try:
                fh = open(args.recording, encoding="utf-8")
            except OSError as exc:
                print(f"[SignCore] Cannot open recording {args.recording}: {exc}", file=sys.stderr)
                sys.exit(1)
            with fh:
                for t, landmarks in read_frames(fh):
                    replay.feed(t, landmarks)
        replay.flush()
    except KeyboardInterrupt:
        print("\n[SignCore] Interrupted.")
    finally:
        if replay.words:
            print(f"\n[SignCore] Words      : {' '.join(replay.words)}")
            print(f"[SignCore] Translation: {translator.translate(replay.words)}")
        print("[SignCore] Done.")


if __name__ == "__main__":
    main()
