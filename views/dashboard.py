"""Dashboard view."""
import datetime as dt
import streamlit as st
import plotly.graph_objects as go
from models.analytics import (
    category_breakdown_by_date,
    expense_summary,
    filter_expenses_by_time_frame,
    group_expenses_by_category,
    group_expenses_by_date,
    group_expenses_by_subcategory,
)
from models.expense import (
    InvalidUserDataError,
    ExpenseValidationError,
    export_user_data,
    import_user_data,
    load_user_data,
    set_user_name,
)
from models.store import get_store
from utils.constants import CATEGORY_COLORS, CHART_TYPES, TIME_FRAMES
from utils.helpers import format_currency
from utils.i18n import t
from .common import chart_layout, current_settings, render_header


def _render_first_run(lang: str) -> None:
    st.subheader(t("welcome_title", lang))
    with st.form("first_run"):
        name = st.text_input(t("welcome_prompt", lang))
        saved = st.form_submit_button("OK", use_container_width=True)
    if saved:
        try:
            set_user_name(get_store(), name)
        except ExpenseValidationError as e:
            st.error(str(e))
        else:
            st.rerun()


def render_expense_chart(expenses: list[dict], chart_type: str, time_frame: str, currency: str = "VND") -> None:
    """Pie by category, grouped bars of top categories per date, or a line of daily totals."""
    if not expenses:
        return

    if chart_type == "pie":
        grouped = group_expenses_by_category(expenses)
        fig = go.Figure(
            data=[
                go.Pie(
                    labels=list(grouped),
                    values=list(grouped.values()),
                    hole=0.55,
                    marker={"colors": [CATEGORY_COLORS.get(c, "#94a3b8") for c in grouped]},
                    hovertemplate="<b>%{label}</b><br>%{value:,.0f}<extra></extra>",
                )
            ]
        )
        chart_layout(fig, showlegend=True)
    elif chart_type == "bar":
        rows = category_breakdown_by_date(expenses, time_frame)
        categories = [k for k in rows[0] if k not in ("name", "total")] if rows else []
        fig = go.Figure()
        for cat in categories:
            fig.add_trace(
                go.Bar(
                    name=cat,
                    x=[r["name"] for r in rows],
                    y=[r[cat] for r in rows],
                    customdata=[r["total"] for r in rows],
                    hovertemplate="<b>%{fullData.name}</b> · %{x}<br>%{y:,.0f} / %{customdata:,.0f}<extra></extra>",
                    marker_color=CATEGORY_COLORS.get(cat, "#94a3b8"),
                )
            )
        chart_layout(fig, barmode="group", xaxis=dict(type="category"))
    else:
        by_date = group_expenses_by_date(expenses, time_frame)
        fig = go.Figure(
            data=[
                go.Scatter(
                    x=list(by_date),
                    y=list(by_date.values()),
                    mode="lines+markers",
                    line=dict(color="#3b82f6", width=3),
                    fill="tozeroy",
                    fillcolor="rgba(59,130,246,0.15)",
                )
            ]
        )
        chart_layout(fig, xaxis=dict(type="category"))

    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})

    if chart_type == "pie":
        by_subcategory = group_expenses_by_subcategory(expenses)
        st.dataframe(
            [
                {"Loại chi tiêu": name, "Số tiền": format_currency(amount, currency)}
                for name, amount in sorted(by_subcategory.items(), key=lambda kv: kv[1], reverse=True)
            ],
            use_container_width=True,
            hide_index=True,
        )


def _render_data_menu(data: dict, lang: str) -> None:
    with st.expander(f"{t('import_file', lang)} / {t('export_file', lang)}"):
        filename, payload = export_user_data(data)
        st.download_button(
            t("export_file", lang),
            data=payload,
            file_name=filename,
            mime="application/json",
            use_container_width=True,
        )
        st.caption(t("import_warning", lang))
        uploaded = st.file_uploader(t("import_file", lang), type=["json"], key="user_data_upload")
        if uploaded is not None and st.button(t("import_file", lang), key="user_data_import"):
            try:
                import_user_data(get_store(), uploaded.getvalue())
            except InvalidUserDataError as e:
                st.error(str(e))
            else:
                st.success("✅")
                st.rerun()


def render_dashboard():
    """Render dashboard tab."""
    settings = current_settings()
    lang, currency = settings["language"], settings["currency"]
    data = load_user_data(get_store())

    if not data or not data.get("name"):
        render_header(t("dashboard", lang), dt.date.today().strftime("%d/%m/%Y"), "#667eea,#764ba2")
        _render_first_run(lang)
        return

    render_header(t("greeting", lang, name=data["name"]), dt.date.today().strftime("%d/%m/%Y"), "#667eea,#764ba2")

    c1, c2 = st.columns([1, 1])
    with c1:
        time_frame = st.selectbox(
            t("time_frame", lang), TIME_FRAMES, index=1, format_func=lambda v: t(v, lang), key="dash_time_frame"
        )
    with c2:
        chart_type = st.selectbox(
            t("chart_type", lang), CHART_TYPES, index=1, format_func=lambda v: t(v, lang), key="dash_chart_type"
        )

    expenses = data.get("expenses", [])
    summary = expense_summary(expenses, time_frame)
    delta = None if time_frame == "all" else f"{summary['percentage_change']:.1f}%"
    st.metric(
        f"{t('total_spent', lang)} · {t(time_frame, lang)}",
        format_currency(summary["total"], currency),
        delta=delta,
        delta_color="inverse",
    )

    if summary["top_categories"]:
        st.caption(t("top_categories", lang))
        cols = st.columns(len(summary["top_categories"]))
        for col, (cat, amount) in zip(cols, summary["top_categories"]):
            with col:
                pct = (amount / summary["total"] * 100.0) if summary["total"] else 0.0
                st.metric(cat, format_currency(amount, currency), f"{pct:.0f}%", delta_color="off")
    else:
        st.info(t("no_expenses", lang))

    st.markdown("---")
    render_expense_chart(filter_expenses_by_time_frame(expenses, time_frame), chart_type, time_frame, currency)
    _render_data_menu(data, lang)
