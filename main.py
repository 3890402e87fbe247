#!/usr/bin/env python3
"""
QuizDesk - quick launcher for the interactive shell.

Usage:
    python main.py           # Start the quiz shell with settings from .env
    python main.py --help    # Show this help

For the full CLI with all commands, use: python -m quizdesk.cli.main --help
"""

import sys

from config import get_settings
from quizdesk.cli.main import run_shell


def main():
    """Launch the QuizDesk shell."""
    if len(sys.argv) > 1 and sys.argv[1] in ("--help", "-h"):
        print(__doc__)
        return

    sys.exit(run_shell(get_settings()))


if __name__ == "__main__":
    main()
