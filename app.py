import logging

import streamlit as st

from core import config
from core.flows import flow_for_route
from core.steps import (
    CHOOSER,
    COMPLETE_ROUTE,
    CONFIRM,
    DOCUMENTS,
    HOME_ROUTE,
    STEPS,
)
from ui.components import get_navigator, get_store
from ui.confirm import render_confirm_page
from ui.documents import render_documents_page
from ui.forms import render_step_page
from ui.pages import render_complete, render_home, render_select_type
from ui.sidebar import render_change_log_sidebar
from ui.topbar import render_topbar

logger = logging.getLogger(__name__)


def init_state():
    """Create the navigator and draft store for this session."""
    get_navigator()
    get_store()


def render_route(path: str):
    """Dispatch the current route to its page renderer."""
    if path == HOME_ROUTE:
        render_home()
        return
    if path == COMPLETE_ROUTE:
        render_complete()
        return
    step = STEPS.get(path)
    if step is None:
        logger.warning("Unknown route %s; returning home", path)
        get_navigator().reset()
        st.rerun()
    if step.kind == CHOOSER:
        render_select_type()
    elif step.kind == DOCUMENTS:
        render_documents_page(step)
    elif step.kind == CONFIRM:
        render_confirm_page(step, flow_for_route(step.route))
    else:
        render_step_page(step)


def main():
    st.set_page_config(page_title="Visa Application", page_icon="🛂", layout="centered")
    config.configure_logging()
    init_state()
    nav = get_navigator()
    render_topbar(show_language=nav.path != HOME_ROUTE)
    render_change_log_sidebar()
    render_route(nav.path)


if __name__ == "__main__":
    main()
