"""Pennywise - personal expense, task and gold price dashboard.

Main entry point: routes the ?tab= query parameter to a view.
"""
import streamlit as st
from models.database import init_db
from models.settings import get_settings
from models.store import get_store
from views import (
    render_dashboard,
    render_add,
    render_transactions,
    render_tasks,
    render_gold,
    render_compare,
    render_settings,
    render_bottom_nav,
)

st.set_page_config(
    page_title="Pennywise",
    page_icon="💰",
    layout="centered"
)

init_db()

ROUTES = {
    "dashboard": render_dashboard,
    "transactions": render_transactions,
    "add": render_add,
    "tasks": render_tasks,
    "gold": render_gold,
    "compare": render_compare,
    "settings": render_settings,
}


def get_active_tab() -> str:
    """Get active tab from query parameters."""
    tab = st.query_params.get("tab", "dashboard")
    if tab not in ROUTES:
        tab = "dashboard"
    return tab


def main():
    """Main application entry point."""
    active_tab = get_active_tab()
    ROUTES[active_tab]()
    render_bottom_nav(active_tab, get_settings(get_store())["language"])


if __name__ == "__main__":
    main()
