import streamlit as st

from core import config
from core.version import __version__
from ui.components import get_navigator, session_translator


def render_language_selector(label: str, key: str) -> str:
    """Language dropdown; switching keeps the current route."""
    nav = get_navigator()
    tr = session_translator()
    locales = list(config.SUPPORTED_LOCALES)
    lang = st.selectbox(
        label,
        locales,
        index=locales.index(nav.locale),
        format_func=lambda code: tr(f"languages.{code}"),
        key=key,
    )
    if lang != nav.locale:
        nav.replace(nav.path, locale=lang)
        st.rerun()
    return lang


def render_topbar(show_language: bool = True):
    """Render the sticky top bar with the app title and language selector."""
    st.markdown(
        """
        <style>
        .visa-topbar {position:sticky; top:0; background-color:white; z-index:100; padding:4px 8px; border-bottom:1px solid #ddd;}
        .visa-topbar div[data-testid="stHorizontalBlock"] {align-items:center;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    tr = session_translator()
    with st.container():
        st.markdown('<div class="visa-topbar">', unsafe_allow_html=True)
        left, right = st.columns([3, 1])
        with left:
            st.markdown(f"**{tr('common.appTitle')}** v{__version__}")
        if show_language:
            with right:
                render_language_selector(tr("common.language"), key="ui_lang")
        st.markdown("</div>", unsafe_allow_html=True)
