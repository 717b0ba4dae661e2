from dataclasses import asdict, is_dataclass
from typing import Iterable, Mapping, Optional, Sequence

import pandas as pd
import streamlit as st

from use_cases.messages import describe_error
from use_cases.query_cache import CacheEntry

STATUS_COLORS = {
    "APPROVED": "#2e9d5b",
    "PRESENT": "#2e9d5b",
    "PENDING": "#c98a12",
    "REJECTED": "#c4413b",
    "ABSENT": "#c4413b",
}


def setup_style():
    st.markdown("""
    <style>
        .block-container {
            padding-top: 1.6rem;
            padding-bottom: 2rem;
        }

        h1, h2, h3 {
            font-weight: 700;
            letter-spacing: -0.02em;
        }

        .hd-badge {
            display: inline-block;
            padding: 0.1rem 0.55rem;
            border-radius: 999px;
            font-size: 0.78rem;
            font-weight: 600;
            color: #ffffff;
        }

        .skeleton-line {
            height: 14px;
            margin: 10px 0;
            border-radius: 8px;
            background: linear-gradient(90deg, rgba(180,190,200,0.18) 25%, rgba(180,190,200,0.35) 50%, rgba(180,190,200,0.18) 75%);
            background-size: 200% 100%;
            animation: hdShimmer 1.4s infinite;
        }

        @keyframes hdShimmer {
            from { background-position: 200% 0; }
            to { background-position: -200% 0; }
        }

        [data-testid="stAlert"] {
            border-radius: 12px !important;
        }
    </style>
    """, unsafe_allow_html=True)


def render_skeleton_rows(rows=4):
    """Animated placeholder while a list is loading."""
    widths = [92, 78, 85, 64, 88, 72]
    lines = "".join(
        f'<div class="skeleton-line" style="width: {widths[i % len(widths)]}%;"></div>'
        for i in range(rows)
    )
    st.markdown(f'<div>{lines}</div>', unsafe_allow_html=True)


def status_badge(status: str) -> str:
    color = STATUS_COLORS.get((status or "").upper(), "#6b7785")
    return f'<span class="hd-badge" style="background: {color};">{status}</span>'


def render_query_state(entry: CacheEntry, error_message: str, empty_message: Optional[str] = None) -> bool:
    """
    Renders loading, error and empty states for a cached read.
    Returns True when the caller should go on and render ``entry.data``.
    """
    if entry.is_loading:
        render_skeleton_rows()
        return False
    if entry.is_error:
        st.error(describe_error(entry.error, error_message))
        if entry.data is None:
            return False
    if empty_message is not None and not entry.data:
        st.info(empty_message)
        return False
    return entry.data is not None


def show_flash():
    flash = st.session_state.get("flash")
    if not flash:
        return
    level, message = flash
    st.session_state.flash = None
    getattr(st, level, st.info)(message)


def to_frame(records: Iterable, columns: Optional[Mapping[str, str]] = None) -> pd.DataFrame:
    """Dataclass records to a DataFrame; ``columns`` maps attribute names to headers."""
    rows = [asdict(r) if is_dataclass(r) else dict(r) for r in records]
    df = pd.DataFrame(rows)
    if columns:
        df = df.reindex(columns=list(columns)).rename(columns=dict(columns))
    return df


def render_table(records: Sequence, columns: Optional[Mapping[str, str]] = None, empty_message="Nothing to show"):
    df = to_frame(records, columns)
    if df.empty:
        st.info(empty_message)
        return
    st.dataframe(df, use_container_width=True, hide_index=True)


def render_field_error(errors: Mapping[str, str], name: str):
    if name in errors:
        st.caption(f":red[{errors[name]}]")
