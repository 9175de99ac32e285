"""
landmarks.py – Hand-landmark parsing and geometry helpers.

The external hand-pose provider hands us 21 points per detected hand in
normalised image coordinates (MediaPipe convention, y grows downward).
Points may arrive as ``{"x", "y", "z"}`` dicts, objects with ``.x/.y/.z``
attributes (MediaPipe ``NormalizedLandmark``), plain ``[x, y, z]``
sequences, or an already-built ``(21, 2)`` / ``(21, 3)`` array.

Everything here is total: malformed input yields ``None`` rather than an
exception so the per-frame path never needs a try/except.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any, Sequence

import numpy as np

# ── Constants ────────────────────────────────────────────────────────────────

NUM_HAND_JOINTS = 21

WRIST_IDX = 0

# Thumb chain
THUMB_CMC_IDX = 1
THUMB_MCP_IDX = 2
THUMB_IP_IDX = 3
THUMB_TIP_IDX = 4

# (MCP, PIP, DIP, TIP) per non-thumb finger
INDEX_JOINTS = (5, 6, 7, 8)
MIDDLE_JOINTS = (9, 10, 11, 12)
RING_JOINTS = (13, 14, 15, 16)
PINKY_JOINTS = (17, 18, 19, 20)

FINGER_JOINTS: dict[str, tuple[int, int, int, int]] = {
    "index": INDEX_JOINTS,
    "middle": MIDDLE_JOINTS,
    "ring": RING_JOINTS,
    "pinky": PINKY_JOINTS,
}


# ── Point extraction ─────────────────────────────────────────────────────────


def _is_number(value: Any) -> bool:
    if not isinstance(value, Real) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int beyond float range
        return False


def _is_real_dtype(dtype: np.dtype) -> bool:
    return np.issubdtype(dtype, np.floating) or np.issubdtype(dtype, np.integer)


def extract_point(entry: Any) -> tuple[float, float, float] | None:
    """Return ``(x, y, z)`` for one landmark entry, or ``None`` if malformed.

    ``x`` and ``y`` are required; a missing or non-numeric ``z`` reads as 0.
    """
    if entry is None:
        return None

    if isinstance(entry, dict):
        x, y, z = entry.get("x"), entry.get("y"), entry.get("z", 0.0)
    elif hasattr(entry, "x") and hasattr(entry, "y"):
        x, y, z = entry.x, entry.y, getattr(entry, "z", 0.0)
    elif isinstance(entry, np.ndarray) and entry.ndim != 1:
        return None
    elif isinstance(entry, (list, tuple, np.ndarray)) and len(entry) >= 2:
        x, y = entry[0], entry[1]
        z = entry[2] if len(entry) >= 3 else 0.0
    else:
        return None

    if isinstance(x, np.generic):
        x = x.item()
    if isinstance(y, np.generic):
        y = y.item()
    if isinstance(z, np.generic):
        z = z.item()

    if not (_is_number(x) and _is_number(y)):
        return None
    return float(x), float(y), float(z) if _is_number(z) else 0.0


def to_array(landmarks: Any) -> np.ndarray | None:
    """Convert a 21-point hand snapshot to a ``(21, 3)`` float array.

    Returns ``None`` when *landmarks* is missing, is not exactly 21 points
    long, or contains a point without numeric ``x``/``y``.
    """
    if landmarks is None:
        return None

    if isinstance(landmarks, np.ndarray):
        if landmarks.ndim != 2 or landmarks.shape[0] != NUM_HAND_JOINTS:
            return None
        if landmarks.shape[1] not in (2, 3):
            return None
        if not _is_real_dtype(landmarks.dtype):
            # object / string / complex arrays go through per-point parsing
            landmarks = list(landmarks)
        elif not np.all(np.isfinite(landmarks)):
            return None
        else:
            arr = np.zeros((NUM_HAND_JOINTS, 3), dtype=np.float64)
            arr[:, : landmarks.shape[1]] = landmarks
            return arr

    if isinstance(landmarks, (str, bytes)) or not isinstance(landmarks, Sequence):
        return None
    if len(landmarks) != NUM_HAND_JOINTS:
        return None

    points = [extract_point(p) for p in landmarks]
    if any(p is None for p in points):
        return None
    return np.array(points, dtype=np.float64)


def wrist_position(landmarks: Any) -> np.ndarray | None:
    """Return the wrist point of a snapshot as a ``(3,)`` array, or ``None``.

    Only the first entry has to be well formed, so partial snapshots still
    contribute to the movement trajectory.
    """
    if landmarks is None:
        return None
    if isinstance(landmarks, np.ndarray):
        if landmarks.ndim != 2 or landmarks.shape[0] == 0:
            return None
        first = landmarks[WRIST_IDX]
    elif isinstance(landmarks, (list, tuple)) and len(landmarks) > 0:
        first = landmarks[WRIST_IDX]
    else:
        return None

    point = extract_point(first)
    if point is None:
        return None
    return np.array(point, dtype=np.float64)


# ── Geometry ─────────────────────────────────────────────────────────────────


def distance_2d(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance in the image plane (x, y)."""
    return float(np.linalg.norm(a[:2] - b[:2]))


def joint_angle(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> float:
    """Angle ABC in degrees, measured at *b* in 3-D.

    A degenerate (zero-length) segment yields 0°, i.e. "fully bent".
    """
    v1 = a - b
    v2 = c - b
    len1 = float(np.linalg.norm(v1))
    len2 = float(np.linalg.norm(v2))
    if len1 <= 1e-9 or len2 <= 1e-9:
        return 0.0
    cosine = float(np.dot(v1, v2)) / (len1 * len2)
    cosine = max(min(cosine, 1.0), -1.0)
    return math.degrees(math.acos(cosine))


def triangle_area_2d(p1: np.ndarray, p2: np.ndarray, p3: np.ndarray) -> float:
    """Unsigned area of the triangle spanned by three points in (x, y)."""
    return abs(
        p1[0] * (p2[1] - p3[1])
        + p2[0] * (p3[1] - p1[1])
        + p3[0] * (p1[1] - p2[1])
    ) / 2.0


def palm_size(arr: np.ndarray) -> float:
    """Wrist → middle-MCP length, used to detect degenerate snapshots."""
    return distance_2d(arr[WRIST_IDX], arr[MIDDLE_JOINTS[0]])
