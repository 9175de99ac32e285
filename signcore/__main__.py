"""``python -m signcore`` runs the recording replay."""

from signcore.replay import main

main()
