"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import datetime


def today_iso() -> str:
    """Today's local date as YYYY-MM-DD."""
    return datetime.now().astimezone().strftime("%Y-%m-%d")
