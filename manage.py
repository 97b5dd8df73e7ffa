#!/usr/bin/env python3
"""
Management script for running CLI commands.
Keep this file at the project root.
"""

import sys

from dbplayground.interfaces.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
