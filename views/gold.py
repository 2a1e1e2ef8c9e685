"""Gold price tracker view."""
import datetime as dt
import streamlit as st
import plotly.graph_objects as go
from models.gold import (
    GoldPriceError,
    GoldPriceTracker,
    chart_series,
    export_json,
    export_txt,
    gold_poll_seconds,
    poll_due,
    price_stats,
)
from models.store import StorageError, get_store
from utils.helpers import format_currency
from utils.i18n import t
from .common import chart_layout, current_settings, render_header


def _poll(tracker: GoldPriceTracker) -> None:
    now = dt.datetime.now()
    if not poll_due(st.session_state.get("_gold_last_poll"), now, gold_poll_seconds()):
        return
    # Stamped before fetching: failed attempts also wait a full interval.
    st.session_state["_gold_last_poll"] = now
    try:
        changes = tracker.poll()
    except GoldPriceError as e:
        st.session_state["_gold_error"] = str(e)
    else:
        st.session_state.pop("_gold_error", None)
        st.session_state["_gold_last_update"] = now
        st.session_state["_gold_last_changes"] = len(changes)


@st.fragment(run_every=gold_poll_seconds())
def _render_live(tracker: GoldPriceTracker) -> None:
    try:
        _poll(tracker)
        current = tracker.current_prices()
        history = tracker.history
    except StorageError as e:
        st.error(str(e))
        if st.button("Xóa lịch sử giá vàng"):
            tracker.clear()
            st.rerun()
        return

    last_update = st.session_state.get("_gold_last_update")
    s1, s2, s3 = st.columns(3)
    with s1:
        st.metric("Bản ghi", f"{len(history):,}")
    with s2:
        st.metric("Loại vàng", len(current))
    with s3:
        st.metric("Thay đổi mới", st.session_state.get("_gold_last_changes", 0))
    st.caption(f"Cập nhật lần cuối: {last_update.strftime('%H:%M:%S %d/%m/%Y') if last_update else 'Chưa có'}")

    if st.session_state.get("_gold_error"):
        st.error(f"Lỗi khi lấy dữ liệu giá vàng: {st.session_state['_gold_error']}")

    if not current:
        st.info("Chưa có dữ liệu giá vàng.")
        return

    stats = price_stats(current)
    if stats:
        p1, p2, p3 = st.columns(3)
        with p1:
            st.metric("Giá bán trung bình", format_currency(stats["avgSellPrice"]))
        with p2:
            st.metric("Cao nhất", format_currency(stats["maxPrice"]))
        with p3:
            st.metric("Thấp nhất", format_currency(stats["minPrice"]))

    st.dataframe(
        [
            {
                "Tên vàng": r["name"],
                "Karat": r["karat"],
                "Độ tinh khiết": r["purity"],
                "Giá mua": format_currency(r["buyPrice"]) if r["buyPrice"] else "Không có giá",
                "Giá bán": format_currency(r["sellPrice"]) if r["sellPrice"] else "Không có giá",
                "Ngày": r["date"],
            }
            for r in current
        ],
        use_container_width=True,
        hide_index=True,
    )

    names = [r["name"] for r in current]
    selected = st.selectbox("Loại vàng", names, key="gold_selected_type")
    series = chart_series(history, selected)
    if series:
        fig = go.Figure(
            data=[
                go.Scatter(x=[p["time"] for p in series], y=[p["buyPrice"] for p in series], name="Giá mua", mode="lines+markers"),
                go.Scatter(x=[p["time"] for p in series], y=[p["sellPrice"] for p in series], name="Giá bán", mode="lines+markers"),
            ]
        )
        chart_layout(fig, height=300, xaxis=dict(type="category"))
        st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})

    json_name, json_payload = export_json(current, history)
    txt_name, txt_payload = export_txt(history)
    d1, d2 = st.columns(2)
    with d1:
        st.download_button("JSON", data=json_payload.encode("utf-8"), file_name=json_name, mime="application/json")
    with d2:
        st.download_button("TXT", data=txt_payload.encode("utf-8"), file_name=txt_name, mime="text/plain")


def render_gold():
    """Render gold price tab."""
    settings = current_settings()
    render_header(t("gold", settings["language"]), "Theo dõi giá vàng BTMC, tự động cập nhật", "#f6d365,#fda085")

    _render_live(GoldPriceTracker(get_store()))
