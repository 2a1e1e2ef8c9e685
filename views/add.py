"""Add expense view."""
import datetime as dt
import streamlit as st
from models.expense import ExpenseValidationError, add_expense, new_expense
from models.store import get_store
from utils.constants import CATEGORIES, DESCRIPTION_SUGGESTIONS, EXPENSE_CATEGORIES
from utils.helpers import format_currency, read_number
from utils.i18n import t
from .common import current_settings, render_header


def render_add():
    """Render add expense tab."""
    settings = current_settings()
    lang = settings["language"]
    render_header(t("add_expense", lang), "Ghi lại chi tiêu trong vài giây", "#f093fb,#f5576c")

    # Outside the form so the subcategory list follows the chosen category.
    category = st.selectbox("Danh mục", CATEGORIES, key="add_category")
    subcategory = st.selectbox("Loại chi tiêu", EXPENSE_CATEGORIES[category], key="add_subcategory")

    amount = st.number_input("Số tiền", min_value=0, step=1000, value=0, key="add_amount")
    if amount:
        st.caption(f"{format_currency(amount, settings['currency'])} · {read_number(int(amount))}")

    suggestions = DESCRIPTION_SUGGESTIONS.get(category, {}).get(subcategory, [])

    with st.form("add_expense", clear_on_submit=True):
        c1, c2 = st.columns([1, 1])
        with c1:
            occurred_on = st.date_input("Ngày", value=dt.date.today(), format="DD/MM/YYYY")
        with c2:
            occurred_time = st.time_input("Giờ", value=dt.datetime.now().time().replace(second=0, microsecond=0))

        suggestion = st.selectbox("Gợi ý mô tả", [""] + suggestions) if suggestions else ""
        description = st.text_area("Mô tả", placeholder="Mô tả chi tiết (không bắt buộc)")

        saved = st.form_submit_button("Lưu", use_container_width=True)

    if saved:
        try:
            expense = new_expense(
                amount=float(amount),
                category=category,
                subcategory=subcategory,
                description=description.strip() or suggestion,
                occurred_on=occurred_on,
                occurred_at_time=occurred_time,
            )
        except ExpenseValidationError as e:
            st.error(str(e))
        else:
            add_expense(get_store(), expense)
            st.session_state.pop("add_amount", None)
            st.success("✅ Đã lưu chi tiêu.")
