"""Centralised configuration loaded from environment variables and dotenv."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

load_dotenv()

# ── API ────────────────────────────────────────────────────────────────────
API_BASE: str = os.getenv("POSTFEED_API_BASE", "https://jsonplaceholder.typicode.com")
TIMEOUT: float = float(os.getenv("POSTFEED_TIMEOUT", "10"))

# ── Display ────────────────────────────────────────────────────────────────
UNKNOWN_AUTHOR: str = os.getenv("POSTFEED_UNKNOWN_AUTHOR", "Unknown author")

# ── Logging ────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("POSTFEED_LOG_LEVEL", "INFO")


def log_level() -> int:
    """Resolve ``LOG_LEVEL`` to a ``logging`` constant, defaulting to INFO."""
    return getattr(logging, LOG_LEVEL.upper(), logging.INFO)
