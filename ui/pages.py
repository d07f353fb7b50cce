"""Entry and exit pages: home, select-type and complete."""
import streamlit as st

from core.flows import FlowSelector
from core.steps import HOME_ROUTE, LOGIN_ROUTE, SELECT_TYPE
from core.summary import field_label, option_label
from ui.components import get_navigator, get_store, session_translator
from ui.topbar import render_language_selector


def render_home():
    tr = session_translator()
    st.title(tr("home.title"))
    st.write(tr("home.description"))
    render_language_selector(tr("home.selectLanguage"), key="home_lang")
    if st.button(tr("home.start"), key="home_start", type="primary"):
        get_navigator().push(LOGIN_ROUTE)
        st.rerun()


def render_select_type():
    tr = session_translator()
    step = SELECT_TYPE
    st.header(tr("selectType.title"))
    st.caption(tr("selectType.description"))
    spec = step.field("applicationType")
    with st.form(key="form_select_type"):
        choice = st.radio(
            field_label(tr, step, spec.name),
            list(spec.options),
            index=None,
            format_func=lambda v: option_label(tr, step, spec.name, v),
            key="select_type_choice",
        )
        error = st.session_state.get("select_type_error")
        if error:
            st.error(error)
        submitted = st.form_submit_button(tr("common.next"), type="primary")
    if submitted:
        outcome = FlowSelector(get_store(), get_navigator()).submit({"applicationType": choice or ""})
        st.session_state["select_type_error"] = (
            tr(outcome.errors["applicationType"]) if outcome.errors else None
        )
        st.rerun()


def render_complete():
    tr = session_translator()
    st.success(tr("complete.title"))
    st.write(tr("complete.message"))
    st.info(tr("complete.nextSteps"))
    if st.button(tr("complete.backToHome"), key="complete_home"):
        get_navigator().reset(HOME_ROUTE)
        st.rerun()
