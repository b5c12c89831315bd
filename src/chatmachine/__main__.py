"""Allow ``python -m chatmachine``."""

from __future__ import annotations

from chatmachine.cli import app

if __name__ == "__main__":
    app()
