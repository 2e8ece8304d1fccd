"""
Entry point for running toorker as a module.

This file enables:
- `python -m toorker`
- `uv run python -m toorker`
"""

from __future__ import annotations

from toorker import main

if __name__ == "__main__":
    main()
