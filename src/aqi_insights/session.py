# Project: aqi-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
session.py — Store the air-data service bearer token in a plain-text file.

A missing or blank token file means the user is logged out.
"""

from pathlib import Path


def save_token(token: str, path: Path) -> None:
    """Write the session token, replacing any previous one."""
    token = token.strip()
    if not token:
        raise ValueError("Token must not be empty")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(token + "\n")


def load_token(path: Path) -> str | None:
    """Return the stored token, or None when logged out."""
    if not path.exists():
        return None
    token = path.read_text().strip()
    return token or None


def clear_token(path: Path) -> None:
    """Remove the stored token. No-op if there is none."""
    path.unlink(missing_ok=True)
