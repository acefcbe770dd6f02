"""
Centralized configuration for the table tennis club manager.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _parse_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float(env_var: str, default: float) -> float:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _parse_choice(env_var: str, default: str, choices: set[str]) -> str:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    value = raw.strip().lower()
    return value if value in choices else default


# Storage backend: "sqlite" (document tables) or "json" (single local file)
STORE_BACKEND = _parse_choice("STORE_BACKEND", "sqlite", {"sqlite", "json"})
DB_PATH = os.getenv("DB_PATH", "ttclub.db")
JSON_STORE_PATH = os.getenv("JSON_STORE_PATH", "ttclub_data.json")

CLUB_NAME = os.getenv("CLUB_NAME", "Phantom Loop TT Club")
CLUB_LOGIN_URL = os.getenv("CLUB_LOGIN_URL", "http://localhost/index.html")

# Seeded administrator account
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@phantomloop.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

# Welcome email delivery; empty provider disables sending
EMAIL_PROVIDER = _parse_choice("EMAIL_PROVIDER", "", {"", "emailjs", "formspree"})
EMAILJS_SERVICE_ID = os.getenv("EMAILJS_SERVICE_ID")
EMAILJS_TEMPLATE_ID = os.getenv("EMAILJS_TEMPLATE_ID")
EMAILJS_PUBLIC_KEY = os.getenv("EMAILJS_PUBLIC_KEY")
FORMSPREE_ENDPOINT = os.getenv("FORMSPREE_ENDPOINT")
EMAIL_TIMEOUT_SECONDS = _parse_float("EMAIL_TIMEOUT_SECONDS", 10.0)

ATTENDANCE_HISTORY_DAYS = _parse_int("ATTENDANCE_HISTORY_DAYS", 30)
