#!/usr/bin/env python3
"""
Entry point for running the MPD state watcher, e.g. under systemd
or piped into a status bar. Same as the `mpdstate` console script.
"""

import sys

from mpdstate.cli import main

if __name__ == "__main__":
    sys.exit(main())
