"""
Application-wide configuration constants and helper utilities.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import streamlit as st

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://label-maker-olive.vercel.app"
DEFAULT_TIMEZONE = "Asia/Seoul"
DEFAULT_REQUEST_TIMEOUT = 10.0
SUBMISSIONS_PATH = "/api/submissions"

# Rows per table page
PAGE_SIZE = 20

WAITLIST = "waitlist"
FEEDBACK = "feedback"
SUBMISSION_TYPES = (WAITLIST, FEEDBACK)

TYPE_FILTER_ALL = "all"
TYPE_FILTER_OPTIONS = (TYPE_FILTER_ALL, WAITLIST, FEEDBACK)

TYPE_LABELS: Dict[str, str] = {
    TYPE_FILTER_ALL: "전체",
    WAITLIST: "알림신청",
    FEEDBACK: "피드백",
}

SORT_DESC = "desc"
SORT_ASC = "asc"
SORT_LABELS: Dict[str, str] = {
    SORT_DESC: "최신순 ↓",
    SORT_ASC: "오래된순 ↑",
}


@dataclass(frozen=True)
class Settings:
    api_url: str
    timezone: str
    request_timeout: float
    page_size: int = PAGE_SIZE


def get_secret(name: str, default: str | None = None) -> str | None:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception:
        # st.secrets raises when no secrets.toml exists
        pass
    return default


def validate_api_url(value: Optional[str]) -> bool:
    if not isinstance(value, str):
        return False
    stripped = value.strip()
    return bool(stripped) and stripped.lower().startswith(("http://", "https://"))


def _resolve_api_url() -> str:
    raw = get_secret("API_URL")
    if raw is None:
        return DEFAULT_API_URL
    if not validate_api_url(raw):
        logger.warning(f"Ignoring invalid API_URL {raw!r}, using {DEFAULT_API_URL}")
        return DEFAULT_API_URL
    return raw.strip().rstrip("/")


def _resolve_timezone() -> str:
    name = get_secret("DASHBOARD_TIMEZONE", DEFAULT_TIMEZONE) or DEFAULT_TIMEZONE
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown DASHBOARD_TIMEZONE {name!r}, using {DEFAULT_TIMEZONE}")
        return DEFAULT_TIMEZONE
    return name


def _resolve_timeout() -> float:
    raw = get_secret("REQUEST_TIMEOUT")
    if raw is None:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning(f"REQUEST_TIMEOUT {raw!r} is not a number, using {DEFAULT_REQUEST_TIMEOUT}")
        return DEFAULT_REQUEST_TIMEOUT
    if timeout <= 0:
        return DEFAULT_REQUEST_TIMEOUT
    return timeout


def load_settings() -> Settings:
    """Resolve runtime settings from the environment and Streamlit secrets."""
    return Settings(
        api_url=_resolve_api_url(),
        timezone=_resolve_timezone(),
        request_timeout=_resolve_timeout(),
    )
