"""Bottom navigation component."""
import streamlit as st
from utils.constants import TABS
from utils.i18n import t

NAV_CSS = """
<style>
main .block-container {
  padding-bottom: 96px;
  padding-top: 16px;
  max-width: 720px;
}
#MainMenu, footer, header { visibility: hidden; }

.pw-bottom-nav {
  position: fixed;
  left: 0;
  right: 0;
  bottom: 0;
  padding: 8px 12px calc(8px + env(safe-area-inset-bottom, 0px));
  background: rgba(255,255,255,0.97);
  backdrop-filter: blur(16px);
  border-top: 2px solid #8FD032;
  box-shadow: 0 -4px 16px rgba(0,0,0,0.06);
  z-index: 9999;
}
.pw-bottom-nav .inner {
  max-width: 720px;
  margin: 0 auto;
  display: grid;
  grid-template-columns: repeat(7, 1fr);
  align-items: end;
  gap: 6px;
}
.pw-tab {
  display: flex;
  flex-direction: column;
  align-items: center;
  padding: 6px 2px;
  border-radius: 10px;
  color: rgba(0,0,0,0.5);
  font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial;
  transition: background 0.2s ease, color 0.2s ease;
}
.pw-tab:hover { background: rgba(97,165,63,0.08); color: rgba(0,0,0,0.75); }
.pw-tab .icon { font-size: 18px; line-height: 18px; }
.pw-tab .label { margin-top: 4px; font-size: 10px; line-height: 12px; white-space: nowrap; }
.pw-tab.active { color: #477238; font-weight: 600; background: rgba(97,165,63,0.12); }
.pw-tab-add .pill {
  width: 48px;
  height: 48px;
  border-radius: 50%;
  display: flex;
  align-items: center;
  justify-content: center;
  font-size: 28px;
  color: white;
  background: linear-gradient(135deg, #61A53F, #8FD032);
  box-shadow: 0 8px 20px rgba(97,165,63,0.35);
  transform: translateY(-10px);
}
a.pw-tab, a.pw-tab:visited, a.pw-tab:hover, a.pw-tab:active { text-decoration: none !important; }
</style>
"""


def render_bottom_nav(active: str, lang: str = "vi") -> None:
    """Render fixed bottom navigation bar."""
    st.markdown(NAV_CSS, unsafe_allow_html=True)

    items_html = []
    for tab_id, label_key, icon in TABS:
        is_active = "active" if tab_id == active else ""
        href = f"?tab={tab_id}"
        if tab_id == "add":
            items_html.append(
                f'<a class="pw-tab pw-tab-add {is_active}" href="{href}" target="_self"><div class="pill">+</div></a>'
            )
        else:
            items_html.append(
                f'<a class="pw-tab {is_active}" href="{href}" target="_self">'
                f'<div class="icon">{icon}</div><div class="label">{t(label_key, lang)}</div></a>'
            )

    st.markdown(
        '<div class="pw-bottom-nav"><div class="inner">{items}</div></div>'.format(items="".join(items_html)),
        unsafe_allow_html=True,
    )
