"""CLI entry point for chord_layout package.

Usage:
    python -m chord_layout check layout.cfg
    python -m chord_layout export layout.cfg -f yaml -o layout.yaml
    python -m chord_layout preview layout.cfg LP LR
"""

from .cli import main

if __name__ == "__main__":
    main()
