"""Transactions view."""
import streamlit as st
from models.analytics import filter_expenses_by_time_frame
from models.expense import (
    ExpenseNotFoundError,
    ExpenseValidationError,
    delete_expense,
    expense_date,
    expenses_to_csv,
    get_expense,
    list_expenses,
    load_user_data,
    update_expense,
)
from models.store import get_store
from utils.constants import CATEGORIES, TIME_FRAMES
from utils.helpers import format_currency, format_date, from_timestamp_ms, subcategory_choices
from utils.i18n import t
from .common import current_settings, render_header


def _render_edit_form(expense: dict) -> None:
    expense_id = expense["id"]
    st.caption("Sửa chi tiêu")
    # Outside the form so the subcategory list follows the chosen category.
    current_cat = expense.get("category")
    edit_category = st.selectbox(
        "Danh mục",
        options=CATEGORIES,
        index=CATEGORIES.index(current_cat) if current_cat in CATEGORIES else 0,
        key=f"edit_category_{expense_id}",
    )
    subcategories, sub_index = subcategory_choices(edit_category, expense.get("subcategory"))

    with st.form(f"edit_form_{expense_id}"):
        edit_date = st.date_input("Ngày", value=expense_date(expense), key=f"edit_date_{expense_id}")
        edit_amount = st.number_input(
            "Số tiền",
            min_value=0,
            step=1000,
            value=int(expense.get("amount") or 0),
            key=f"edit_amount_{expense_id}",
        )
        edit_subcategory = st.selectbox(
            "Loại chi tiêu",
            options=subcategories,
            index=sub_index,
            key=f"edit_subcategory_{expense_id}_{edit_category}",
        )
        edit_description = st.text_input(
            "Mô tả", value=expense.get("description") or "", key=f"edit_description_{expense_id}"
        )

        ec1, ec2 = st.columns([1, 1])
        with ec1:
            submitted = st.form_submit_button("Lưu")
        with ec2:
            cancel = st.form_submit_button("Hủy")

    if cancel:
        st.session_state.pop("_editing_expense_id", None)
        st.rerun()

    if submitted:
        occurred = from_timestamp_ms(expense.get("timestamp") or 0)
        try:
            update_expense(
                get_store(),
                expense_id,
                amount=float(edit_amount),
                category=edit_category,
                subcategory=edit_subcategory,
                description=edit_description,
                occurred_on=edit_date,
                occurred_at_time=occurred.time(),
            )
        except (ExpenseValidationError, ExpenseNotFoundError) as e:
            st.error(str(e))
        else:
            st.session_state.pop("_editing_expense_id", None)
            st.rerun()


def render_transactions():
    """Render transactions tab."""
    settings = current_settings()
    lang, currency = settings["language"], settings["currency"]
    render_header(t("expenses", lang), "Xem và quản lý chi tiêu", "#4facfe,#00f2fe")

    data = load_user_data(get_store())
    if not data:
        st.caption(t("no_expenses", lang))
        return

    f1, f2 = st.columns([1, 1])
    with f1:
        time_frame = st.selectbox(
            t("time_frame", lang), TIME_FRAMES, index=3, format_func=lambda v: t(v, lang), key="tx_time_frame"
        )
    with f2:
        category = st.selectbox("Danh mục", [""] + CATEGORIES, format_func=lambda v: v or "Tất cả", key="tx_category")
    search = st.text_input("Tìm kiếm", placeholder="Mô tả, danh mục hoặc loại chi tiêu")

    scoped = filter_expenses_by_time_frame(data.get("expenses", []), time_frame)
    rows = list_expenses(scoped, search=search, category=category or None)

    if not rows:
        st.caption(t("no_expenses", lang))
        return

    st.download_button(
        "CSV",
        data=expenses_to_csv(rows).encode("utf-8"),
        file_name=f"{data.get('name') or 'expense'}-expenses.csv",
        mime="text/csv",
    )

    groups: dict[str, list[dict]] = {}
    for r in rows:
        key = from_timestamp_ms(r.get("timestamp") or 0).strftime("%m/%Y")
        groups.setdefault(key, []).append(r)

    for month_label, items in groups.items():
        subtotal = sum(float(i.get("amount") or 0) for i in items)
        st.markdown(f"### {month_label}")
        st.caption(f"Tổng: {format_currency(subtotal, currency)}")

        for i in items:
            expense_id = i["id"]
            c1, c2, c3, c4 = st.columns([1.2, 2.3, 1.1, 0.9])
            with c1:
                st.caption(format_date(i.get("date", "")))
            with c2:
                st.write(f"**{i.get('description') or i.get('subcategory')}**")
                st.caption(f"{i.get('category')} · {i.get('subcategory')}")
            with c3:
                st.write(format_currency(i.get("amount"), currency))
            with c4:
                a1, a2 = st.columns([1, 1], gap="small")
                with a1:
                    if st.button("✏️", key=f"edit_{expense_id}", help="Sửa", use_container_width=True):
                        st.session_state["_editing_expense_id"] = expense_id
                with a2:
                    if st.button("🗑️", key=f"delete_{expense_id}", help="Xóa", use_container_width=True):
                        st.session_state["_deleting_expense_id"] = expense_id

            if st.session_state.get("_deleting_expense_id") == expense_id:
                dc1, dc2, _ = st.columns([1, 1, 3])
                with dc1:
                    if st.button("Xác nhận xóa", key=f"confirm_delete_{expense_id}"):
                        delete_expense(get_store(), expense_id)
                        st.session_state.pop("_deleting_expense_id", None)
                        st.session_state.pop("_editing_expense_id", None)
                        st.rerun()
                with dc2:
                    if st.button("Hủy", key=f"cancel_delete_{expense_id}"):
                        st.session_state.pop("_deleting_expense_id", None)

            if st.session_state.get("_editing_expense_id") == expense_id:
                existing = get_expense(data, expense_id)
                if existing:
                    _render_edit_form(existing)
