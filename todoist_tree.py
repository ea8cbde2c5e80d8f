#!/usr/bin/env python3
"""Launcher for running todoist-tree straight from a source checkout."""

import sys

from core.desktop.devtools.interface.tasks_app import main

if __name__ == "__main__":
    sys.exit(main())
