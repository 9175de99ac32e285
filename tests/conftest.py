"""
Shared synthetic hands for the test-suite.

Hands are built in normalised image coordinates (y grows downward) with the
wrist at (0.5, 0.8) and the four finger MCPs in a shallow arc above it.
Each finger is either extended (straight up, or splayed for V), curled
back onto its MCP, or half-bent at 120° (C shape).  The thumb is posed
explicitly since its placement decides A / S / D.
"""

from __future__ import annotations

import math
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

WRIST = (0.5, 0.8)

MCP = {
    "index": (0.44, 0.60),
    "middle": (0.48, 0.59),
    "ring": (0.52, 0.60),
    "pinky": (0.56, 0.62),
}

THUMB_CMC = (0.42, 0.74)
THUMB_MCP = (0.38, 0.68)

# (IP, TIP) per thumb pose
THUMB_POSES = {
    "extended": ((0.34, 0.63), (0.30, 0.58)),
    "tucked": ((0.42, 0.64), (0.48, 0.58)),      # across the fingers (S, B)
    "alongside": ((0.38, 0.62), (0.38, 0.57)),   # beside the fist (A)
    "touch_middle": ((0.43, 0.64), (0.47, 0.61)),  # pad on middle fingertip (D)
}

_SPLAY = {"index": -0.3, "middle": 0.3}


def _add(p, v, k=1.0):
    return (p[0] + v[0] * k, p[1] + v[1] * k)


def _finger(name: str, pose: str, spread: bool):
    mcp = MCP[name]
    if pose == "extended":
        dx = _SPLAY.get(name, 0.0) if spread else 0.0
        norm = math.hypot(dx, 1.0)
        d = (dx / norm, -1.0 / norm)
        return [mcp, _add(mcp, d, 0.06), _add(mcp, d, 0.10), _add(mcp, d, 0.14)]
    if pose == "half":
        pip = _add(mcp, (0.0, -0.05))
        bend = (math.cos(math.radians(30)), -0.5)
        return [mcp, pip, _add(pip, bend, 0.025), _add(pip, bend, 0.05)]
    # curled: tip folds back below the MCP
    return [mcp, _add(mcp, (0.0, -0.04)), _add(mcp, (0.0, -0.02)), _add(mcp, (0.0, 0.02))]


def make_hand(extended=(), thumb="alongside", spread=False, half_bent=False, offset=(0.0, 0.0, 0.0)):
    """Return 21 ``[x, y, z]`` points for the requested pose.

    *extended* names the non-thumb fingers held straight; the rest are
    curled, or half-bent when *half_bent* is set.
    """
    ip, tip = THUMB_POSES[thumb]
    points = [WRIST, THUMB_CMC, THUMB_MCP, ip, tip]
    for name in ("index", "middle", "ring", "pinky"):
        if name in extended:
            pose = "extended"
        else:
            pose = "half" if half_bent else "curled"
        points.extend(_finger(name, pose, spread))
    ox, oy, oz = offset
    return [[x + ox, y + oy, oz] for x, y in points]


def as_dicts(hand):
    return [{"x": x, "y": y, "z": z} for x, y, z in hand]


def wrist_path(*positions):
    """Snapshots whose wrist follows *positions* ((x, y) or (x, y, z))."""
    snaps = []
    for pos in positions:
        x, y = pos[0], pos[1]
        z = pos[2] if len(pos) > 2 else 0.0
        snaps.append(make_hand(offset=(x - WRIST[0], y - WRIST[1], z)))
    return snaps


@pytest.fixture
def open_palm():
    return np.array(make_hand(("index", "middle", "ring", "pinky"), thumb="extended"))
