"""Deterministic sanitizers for text handed back by external collaborators."""

from __future__ import annotations


def sanitize_text(value: str | None) -> str:
    """Drop NUL characters; whitespace and length are left as generated."""
    if value is None:
        return ""
    return str(value).replace("\x00", "")
