"""Shared view helpers."""
import streamlit as st
from models.settings import get_settings
from models.store import get_store


def render_header(title: str, subtitle: str, gradient: str) -> None:
    """Gradient page header used at the top of every tab."""
    start, end = gradient.split(",")
    st.markdown(f"""
    <div style="
        background: linear-gradient(135deg, {start} 0%, {end} 100%);
        padding: 20px;
        border-radius: 16px;
        margin-bottom: 20px;
        box-shadow: 0 8px 24px rgba(0,0,0,0.12);
    ">
        <h1 style="
            color: white;
            margin: 0;
            font-size: 28px;
            font-weight: 600;
            text-shadow: 0 2px 4px rgba(0,0,0,0.1);
        ">{title}</h1>
        <p style="
            color: rgba(255,255,255,0.9);
            margin: 4px 0 0 0;
            font-size: 14px;
        ">{subtitle}</p>
    </div>
    """, unsafe_allow_html=True)


def current_settings() -> dict:
    return get_settings(get_store())


def chart_layout(fig, height: int = 320, **kwargs) -> None:
    fig.update_layout(
        margin=dict(l=20, r=20, t=20, b=20),
        height=height,
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        **kwargs,
    )
