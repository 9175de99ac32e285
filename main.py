#!/usr/bin/env python3
"""
main.py – SignCore replay launcher.

Runs :func:`signcore.replay.main`; see ``signcore/replay.py`` for the
recording format and options.

    python main.py session.jsonl --stable-frames 5
"""

from signcore.replay import main

if __name__ == "__main__":
    main()
