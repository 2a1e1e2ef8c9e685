"""Compare two exported user data files."""
import json
import streamlit as st
import plotly.graph_objects as go
from models.analytics import calculate_total_expenses, compare_by_category, filter_expenses_by_time_frame
from models.expense import is_valid_user_data
from utils.constants import TIME_FRAMES
from utils.helpers import format_currency
from utils.i18n import t
from .common import chart_layout, current_settings, render_header


def _read_upload(uploaded) -> dict | None:
    if uploaded is None:
        return None
    try:
        data = json.loads(uploaded.getvalue().decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        st.error("Có lỗi xảy ra khi đọc file. Vui lòng thử lại")
        return None
    if not is_valid_user_data(data):
        st.error("File không hợp lệ. Vui lòng chọn file JSON đúng định dạng")
        return None
    return data


def render_compare():
    """Render the two-file comparison tab."""
    settings = current_settings()
    lang, currency = settings["language"], settings["currency"]
    render_header(t("compare", lang), "So sánh chi tiêu giữa hai file dữ liệu", "#a18cd1,#fbc2eb")

    c1, c2 = st.columns([1, 1])
    with c1:
        file1 = _read_upload(st.file_uploader("File dữ liệu 1", type=["json"], key="compare_file1"))
        if file1:
            st.caption(f"Đã chọn: {file1['name'] or 'File 1'}")
    with c2:
        file2 = _read_upload(st.file_uploader("File dữ liệu 2", type=["json"], key="compare_file2"))
        if file2:
            st.caption(f"Đã chọn: {file2['name'] or 'File 2'}")

    if not (file1 and file2):
        return

    time_frame = st.selectbox(
        t("time_frame", lang), TIME_FRAMES, index=3, format_func=lambda v: t(v, lang), key="compare_time_frame"
    )
    scoped1 = {**file1, "expenses": filter_expenses_by_time_frame(file1["expenses"], time_frame)}
    scoped2 = {**file2, "expenses": filter_expenses_by_time_frame(file2["expenses"], time_frame)}
    label1 = file1["name"] or "File 1"
    label2 = file2["name"] or "File 2"
    if label2 == label1:
        label2 = f"{label2} (2)"

    m1, m2 = st.columns([1, 1])
    with m1:
        st.metric(label1, format_currency(calculate_total_expenses(scoped1["expenses"]), currency))
    with m2:
        st.metric(label2, format_currency(calculate_total_expenses(scoped2["expenses"]), currency))

    rows = compare_by_category(scoped1, scoped2)
    if not rows:
        st.info(t("no_expenses", lang))
        return

    fig = go.Figure(
        data=[
            go.Bar(name=label1, x=[r["name"] for r in rows], y=[r["file1"] for r in rows], marker_color="#3b82f6"),
            go.Bar(name=label2, x=[r["name"] for r in rows], y=[r["file2"] for r in rows], marker_color="#f59e0b"),
        ]
    )
    chart_layout(fig, height=360, barmode="group", xaxis=dict(type="category"))
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})

    st.dataframe(
        [
            {
                "Danh mục": r["name"],
                label1: format_currency(r["file1"], currency),
                label2: format_currency(r["file2"], currency),
                "Chênh lệch": format_currency(r["file2"] - r["file1"], currency),
            }
            for r in rows
        ],
        use_container_width=True,
        hide_index=True,
    )
