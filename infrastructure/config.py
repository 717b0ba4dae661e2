"""Runtime settings resolved from Streamlit secrets with an env fallback."""

import os
from dataclasses import dataclass
from typing import Optional

import streamlit as st

DEFAULT_API_BASE_URL = "http://localhost:8080"
DEFAULT_API_TIMEOUT = 15.0
DEFAULT_SESSION_STORE_PATH = ".hostel_session.json"


def get_secret(key: str) -> Optional[str]:
    try:
        value = st.secrets.get(key)
    except FileNotFoundError:
        value = None
    if value is None:
        value = os.getenv(key)
    return value


@dataclass(frozen=True)
class Settings:
    api_base_url: str = DEFAULT_API_BASE_URL
    api_timeout: float = DEFAULT_API_TIMEOUT
    session_store_path: str = DEFAULT_SESSION_STORE_PATH


def load_settings() -> Settings:
    base_url = get_secret("API_BASE_URL") or DEFAULT_API_BASE_URL
    timeout_raw = get_secret("API_TIMEOUT")
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_API_TIMEOUT
    except ValueError:
        timeout = DEFAULT_API_TIMEOUT
    return Settings(
        api_base_url=base_url.rstrip("/"),
        api_timeout=timeout,
        session_store_path=get_secret("SESSION_STORE_PATH") or DEFAULT_SESSION_STORE_PATH,
    )
