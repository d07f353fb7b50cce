"""UI helpers for the document upload page."""
from __future__ import annotations

import streamlit as st

from core.controller import DocumentsController
from core.steps import StepDefinition
from ui.components import (
    get_navigator,
    get_store,
    render_file_input,
    render_step_indicator,
    session_translator,
    to_file_ref,
)


def _on_pick(ctl: DocumentsController, slot_name: str, key: str) -> None:
    ctl.set_file(slot_name, to_file_ref(st.session_state.get(key)))


def render_documents_page(step: StepDefinition):
    """Each pick or clear is saved straight away; next unlocks once required files are in."""
    tr = session_translator()
    ctl = DocumentsController(step, get_store(), get_navigator())
    st.header(tr(f"{step.namespace}.title"))
    render_step_indicator(step, tr)
    st.caption(tr(f"{step.namespace}.description"))

    for item in ctl.checklist():
        if not item.shown:
            continue
        key = f"doc_{item.slot.name}"
        render_file_input(
            item.slot,
            tr,
            key=key,
            required=item.required,
            saved_name=item.file_name,
            on_change=_on_pick,
            args=(ctl, item.slot.name, key),
        )
        status = tr("common.uploaded") if item.uploaded else tr("common.notUploaded")
        st.caption(f"{'✅' if item.uploaded else '⬜'} {status}")

    ready = ctl.can_continue()
    if not ready:
        st.info(tr(f"{step.namespace}.missing"))
    back_col, next_col = st.columns(2)
    if back_col.button(tr("common.back"), key="documents_back"):
        ctl.back()
        st.rerun()
    if next_col.button(tr("common.next"), key="documents_next", type="primary", disabled=not ready):
        ctl.next()
        st.rerun()
