"""Settings view."""
import streamlit as st
from models.database import reset_all_data
from models.expense import load_user_data, set_user_name
from models.settings import save_settings
from models.store import get_store
from utils.constants import CURRENCIES, LANGUAGES
from utils.i18n import t
from .common import current_settings, render_header

LANGUAGE_NAMES = {"vi": "Tiếng Việt", "en": "English"}


def render_settings():
    """Render settings tab."""
    store = get_store()
    current = current_settings()
    lang = current["language"]
    render_header(t("settings", lang), "Tiền tệ, ngôn ngữ và dữ liệu", "#fa709a,#fee140")

    data = load_user_data(store) or {}
    with st.form("settings_form"):
        name = st.text_input("Tên", value=data.get("name", ""))
        c1, c2 = st.columns([1, 1])
        with c1:
            currency = st.selectbox(t("currency", lang), CURRENCIES, index=CURRENCIES.index(current["currency"]))
        with c2:
            language = st.selectbox(
                t("language", lang),
                LANGUAGES,
                index=LANGUAGES.index(current["language"]),
                format_func=lambda v: LANGUAGE_NAMES.get(v, v),
            )
        saved = st.form_submit_button("Lưu", use_container_width=True)

    if saved:
        try:
            if name.strip() != data.get("name", ""):
                set_user_name(store, name)
            save_settings(store, currency=currency, language=language)
        except ValueError as e:
            st.error(str(e))
        else:
            st.success("Đã lưu")
            st.rerun()

    st.markdown("### Reset")
    st.caption("Thao tác này xóa vĩnh viễn toàn bộ chi tiêu, công việc, lịch sử giá vàng và cài đặt.")
    confirm = st.text_input("Gõ RESET để xác nhận", value="")
    if st.button("Xóa toàn bộ dữ liệu"):
        if confirm.strip() != "RESET":
            st.error("Gõ RESET để xác nhận.")
        else:
            reset_all_data()
            st.success("Đã xóa toàn bộ dữ liệu.")
            st.rerun()
